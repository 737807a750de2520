"""
Board: 3x3 Tic-Tac-Toe grid and the fixed set of winning lines.

- Positions are addressed 0-8 in row-major order (row = pos // 3, col = pos % 3).
- apply() is the only mutation point; it refuses occupied or out-of-range cells.
- winner() scans WIN_LINES in a fixed order (rows, columns, diagonals).

Used by GameRunner to track state and by prompting/tactics to describe it.
"""
from __future__ import annotations

from typing import Optional

X = "X"
O = "O"
EMPTY = " "
MARKS = (X, O)

WIN_LINES: tuple[tuple[int, int, int], ...] = (
    # Rows
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    # Columns
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    # Diagonals
    (0, 4, 8), (2, 4, 6),
)


def opponent(mark: str) -> str:
    return O if mark == X else X


class Board:
    """Plain 3x3 board of cell marks."""
    def __init__(self):
        self._cells: list[list[str]] = [[EMPTY] * 3 for _ in range(3)]

    # ---------------- Queries -----------------
    def cell(self, pos: int) -> str:
        return self._cells[pos // 3][pos % 3]

    def is_valid_move(self, pos) -> bool:
        if isinstance(pos, bool) or not isinstance(pos, int):
            return False
        if pos < 0 or pos > 8:
            return False
        return self.cell(pos) == EMPTY

    def winner(self) -> Optional[str]:
        for a, b, c in WIN_LINES:
            mark = self.cell(a)
            if mark != EMPTY and mark == self.cell(b) == self.cell(c):
                return mark
        return None

    def is_full(self) -> bool:
        return all(cell != EMPTY for row in self._cells for cell in row)

    def available_positions(self) -> list[int]:
        return [pos for pos in range(9) if self.cell(pos) == EMPTY]

    def taken_positions(self) -> list[int]:
        return [pos for pos in range(9) if self.cell(pos) != EMPTY]

    # ---------------- Move Application -----------------
    def apply(self, pos: int, player: str) -> bool:
        if player not in MARKS or not self.is_valid_move(pos):
            return False
        self._cells[pos // 3][pos % 3] = player
        return True

    # ---------------- Export -----------------
    def copy(self) -> "Board":
        other = Board()
        other._cells = [row[:] for row in self._cells]
        return other

    def snapshot(self) -> tuple[str, ...]:
        """Flat row-major tuple of the 9 cells, safe to store in records."""
        return tuple(self.cell(pos) for pos in range(9))

    def render(self) -> str:
        """Console grid with row/column indices, as shown after each move."""
        sep = " -----------"
        lines = ["  0 | 1 | 2", sep]
        for r, row in enumerate(self._cells):
            lines.append(f"{r} {row[0]} | {row[1]} | {row[2]}")
            if r < 2:
                lines.append(sep)
        return "\n".join(lines)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"Board({''.join(self.snapshot())!r})"
