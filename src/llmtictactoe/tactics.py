"""Immediate win/block detection over the fixed winning lines."""
from __future__ import annotations

from .board import Board, EMPTY, WIN_LINES, opponent


def _critical_cell(board: Board, line: tuple[int, int, int], mark: str) -> int | None:
    """Return the empty cell of a line holding exactly two `mark` and one empty, else None."""
    cells = [board.cell(pos) for pos in line]
    if cells.count(mark) == 2 and cells.count(EMPTY) == 1:
        return line[cells.index(EMPTY)]
    return None


def detect_threats(board: Board, player: str) -> tuple[list[int], list[int]]:
    """Scan WIN_LINES in order and return (winning_positions, blocking_positions).

    A position shared by two qualifying lines is listed once per line; callers
    read only the first entry.
    """
    opp = opponent(player)
    winning: list[int] = []
    blocking: list[int] = []
    for line in WIN_LINES:
        win_at = _critical_cell(board, line, player)
        if win_at is not None:
            winning.append(win_at)
        block_at = _critical_cell(board, line, opp)
        if block_at is not None:
            blocking.append(block_at)
    return winning, blocking
