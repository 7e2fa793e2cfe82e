"""
board.py — Placement Board
==========================
N×N occupancy grid mutated in place by the backtracking solver, plus the
immutable Solution snapshot it hands out.

The solver follows a strict "undo exactly what you did" discipline:
every place() is paired with a remove() of the same cell, so the board
after a fully explored subtree equals the board before it.
"""

from typing import List, Tuple

from errors import PreconditionError
from model.states import CellState


class Solution:
    """Immutable snapshot of a board's cells at the moment a solution was found."""

    __slots__ = ("size", "cells")

    def __init__(self, cells: Tuple[Tuple[CellState, ...], ...]):
        object.__setattr__(self, "size", len(cells))
        object.__setattr__(self, "cells", cells)

    def __setattr__(self, name, value):
        raise AttributeError("Solution is immutable")

    def positions(self) -> List[Tuple[int, int]]:
        """Occupied cells as (row, col), row-major order."""
        return [
            (r, c)
            for r, row in enumerate(self.cells)
            for c, cell in enumerate(row)
            if cell is CellState.OCCUPIED
        ]

    def occupied_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell is CellState.OCCUPIED)

    def rows(self) -> List[str]:
        """Text rendering, one string per row ('#' = piece, '-' = empty)."""
        return ["".join(cell.value for cell in row) for row in self.cells]

    def to_dict(self) -> dict:
        return {"size": self.size, "positions": [list(p) for p in self.positions()]}

    def __eq__(self, other) -> bool:
        return isinstance(other, Solution) and self.cells == other.cells

    def __hash__(self) -> int:
        return hash(self.cells)

    def __repr__(self) -> str:
        return f"Solution(size={self.size}, positions={self.positions()})"


class Board:
    """
    Attributes:
        size  : N.
        cells : List of N rows, each a list of N CellState.
        placed: Number of OCCUPIED cells (kept in step with cells).
    """

    def __init__(self, size: int):
        if size < 0:
            raise PreconditionError(f"Board size must be >= 0, got {size}")
        self.size:   int                    = size
        self.cells:  List[List[CellState]]  = [[CellState.EMPTY] * size for _ in range(size)]
        self.placed: int                    = 0

    # ------------------------------------------------------------------
    # Mutation (solver only)
    # ------------------------------------------------------------------
    def place(self, row: int, col: int) -> None:
        assert self.cells[row][col] is CellState.EMPTY, f"({row}, {col}) already occupied"
        self.cells[row][col] = CellState.OCCUPIED
        self.placed += 1

    def remove(self, row: int, col: int) -> None:
        assert self.cells[row][col] is CellState.OCCUPIED, f"({row}, {col}) is empty"
        self.cells[row][col] = CellState.EMPTY
        self.placed -= 1

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_occupied(self, row: int, col: int) -> bool:
        return self.cells[row][col] is CellState.OCCUPIED

    def snapshot(self) -> Solution:
        return Solution(tuple(tuple(row) for row in self.cells))

    def __repr__(self) -> str:
        return f"Board(size={self.size}, placed={self.placed})"
