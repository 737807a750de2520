"""
Prompt builder for LLM move requests.

The prompt is the whole contract with the generator: it carries the move
history, the board, taken/available positions, a threat analysis, and strict
output rules. build_prompt() is a pure function of (board, player, history),
so identical positions always produce identical prompts.
"""
from __future__ import annotations

from typing import Dict, Sequence

from .board import Board, opponent
from .tactics import detect_threats

CENTER = (4,)
CORNERS = (0, 2, 6, 8)
EDGES = (1, 3, 5, 7)

HEADER_TEMPLATE = "You are playing Tic-Tac-Toe as player {PLAYER}."

WIN_TEMPLATE = """🎯 YOU CAN WIN NOW! Play position {POS} to win immediately!
WINNING MOVE DETECTED: Position {POS} will give you three in a row!"""

BLOCK_TEMPLATE = """⚠️  DANGER! {OPPONENT} can win with position {POS}! You MUST BLOCK IT!
BLOCKING REQUIRED: If you don't play position {POS}, {OPPONENT} will win next turn!"""

HINT_TEMPLATE = """No immediate wins or threats detected. Play strategically.
Best strategy: Take center ({CENTER}) if available, then corners ({CORNERS}), then edges ({EDGES})"""

STRATEGY_TEMPLATE = """STRATEGY PRIORITY:
1. WIN: Play winning moves immediately
2. BLOCK: Block {OPPONENT}'s winning moves immediately
3. STRATEGIC: Otherwise, prefer center ({CENTER}), then corners ({CORNERS}), then edges ({EDGES})"""


def render_custom_prompt(template: str, values: Dict[str, str]) -> str:
    """Replace known placeholders in the template. Unknown tokens are left intact."""
    rendered = template or ""
    for key, val in values.items():
        rendered = rendered.replace(f"{{{key}}}", val)
    return rendered


def _join(positions: Sequence[int]) -> str:
    return ", ".join(str(p) for p in positions)


def _compact(positions: Sequence[int]) -> str:
    return ",".join(str(p) for p in positions)


def _bracketed(positions: Sequence[int]) -> str:
    return "[" + " ".join(str(p) for p in positions) + "]"


def history_lines(history) -> list[str]:
    """One numbered line per move: '1. Player X played position 4'."""
    return [f"{i}. Player {mv.player} played position {mv.position}" for i, mv in enumerate(history, start=1)]


def board_grid(board: Board) -> str:
    """ASCII grid where occupied cells show the mark and empty cells their position."""
    rule = "-------------"
    lines = [rule]
    for r in range(3):
        cells = []
        for c in range(3):
            pos = r * 3 + c
            mark = board.cell(pos)
            cells.append(str(pos) if board.is_valid_move(pos) else mark)
        lines.append("| " + " | ".join(cells) + " |")
        lines.append(rule)
    return "\n".join(lines)


def analysis_block(board: Board, player: str) -> str:
    winning, blocking = detect_threats(board, player)
    if winning:
        body = render_custom_prompt(WIN_TEMPLATE, {"POS": str(winning[0])})
    elif blocking:
        body = render_custom_prompt(BLOCK_TEMPLATE, {"POS": str(blocking[0]), "OPPONENT": opponent(player)})
    else:
        body = render_custom_prompt(HINT_TEMPLATE, {
            "CENTER": _compact(CENTER),
            "CORNERS": _compact(CORNERS),
            "EDGES": _compact(EDGES),
        })
    return "*** CRITICAL ANALYSIS ***\n" + body + "\n*** END ANALYSIS ***"


def instructions_block(taken: Sequence[int], available: Sequence[int]) -> str:
    # Rule numbers are fixed; rule 2 is dropped on an empty board.
    lines = ["⚠️  CRITICAL INSTRUCTIONS:", "1. You MUST choose ONLY from the AVAILABLE POSITIONS list above"]
    if taken:
        lines.append(f"2. NEVER choose positions that are taken: {_bracketed(taken)}")
    lines.append(f"3. ONLY respond with ONE number from: {_bracketed(available)}")
    lines.append("4. Do NOT include any other text, explanation, or formatting")
    lines.append("5. Your response should be a SINGLE digit only")
    return "\n".join(lines)


def build_prompt(board: Board, player: str, history) -> str:
    """Assemble the full move request for `player` from the board and move history."""
    sections = [render_custom_prompt(HEADER_TEMPLATE, {"PLAYER": player})]
    if history:
        sections.append("Move history:\n" + "\n".join(history_lines(history)))
    sections.append("Current board (empty spaces show their position number):\n" + board_grid(board))

    taken = board.taken_positions()
    available = board.available_positions()
    if taken:
        sections.append(f"⛔ POSITIONS ALREADY TAKEN (DO NOT USE): {_join(taken)}")
    sections.append(f"✅ AVAILABLE POSITIONS (CHOOSE ONE OF THESE): {_join(available)}")

    sections.append(analysis_block(board, player))
    sections.append(render_custom_prompt(STRATEGY_TEMPLATE, {
        "OPPONENT": opponent(player),
        "CENTER": _compact(CENTER),
        "CORNERS": _compact(CORNERS),
        "EDGES": _compact(EDGES),
    }))
    sections.append(instructions_block(taken, available))
    return "\n\n".join(sections) + "\n"
