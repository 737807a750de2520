"""
Move parsing/validation helpers for LLM replies.

Parsing policy: strip the reply, then take the first single character in
0-8 found anywhere in it. '9' never matches and multi-digit numbers are not
read as a unit ("position 12" yields 1), which keeps recorded transcripts
reproducible.
"""
from __future__ import annotations

import re
from typing import Literal, TypedDict

from .board import Board

POSITION_RE = re.compile(r"[0-8]")

PARSE_FAILURE = "parse_failure"
OUT_OF_RANGE = "out_of_range"
CELL_TAKEN = "cell_taken"
TRANSPORT_FAILURE = "transport_failure"

Reason = Literal["parse_failure", "out_of_range", "cell_taken", "transport_failure"]


class MoveParseError(ValueError):
    """Raised when a reply contains no digit 0-8."""


class ResolvedMove(TypedDict, total=False):
    ok: bool
    position: int
    reason: Reason
    detail: str
    raw: str


def parse_move(raw_text: str) -> int:
    """Return the first position digit in the reply or raise MoveParseError."""
    text = (raw_text or "").strip()
    match = POSITION_RE.search(text)
    if not match:
        raise MoveParseError(f"no digit 0-8 found in response: {text!r}")
    return int(match.group(0))


def resolve_move(board: Board, player: str, raw_text: str) -> ResolvedMove:
    """
    Parse a reply and apply it to the board for `player`.
    Returns ResolvedMove with ok/position, or a reason on failure (board untouched).
    """
    try:
        position = parse_move(raw_text)
    except MoveParseError as e:
        return {"ok": False, "reason": PARSE_FAILURE, "detail": str(e), "raw": raw_text}

    row, col = divmod(position, 3)
    if not (0 <= row <= 2 and 0 <= col <= 2):
        return {"ok": False, "position": position, "reason": OUT_OF_RANGE, "raw": raw_text}

    if not board.apply(position, player):
        return {
            "ok": False,
            "position": position,
            "reason": CELL_TAKEN,
            "detail": f"position {position} is already taken by {board.cell(position)}",
            "raw": raw_text,
        }
    return {"ok": True, "position": position, "raw": raw_text}


__all__ = [
    "parse_move",
    "resolve_move",
    "MoveParseError",
    "ResolvedMove",
    "PARSE_FAILURE",
    "OUT_OF_RANGE",
    "CELL_TAKEN",
    "TRANSPORT_FAILURE",
]
