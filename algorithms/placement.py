"""
placement.py — N-Queens / N-Knights / N-Rooks
==============================================
Backtracking search that enumerates ALL placements of N mutually
non-attacking pieces on an N×N board.

Two search shapes share one board and one predicate table:

  • Queen / Rook — one piece per row.  For each row try every column;
    place if the predicate holds, recurse into the next row, then unplace.
    Terminal: row == N.

  • Knight — knights are not row-constrained, so the search walks cells
    in raster order with an explicit include / exclude branch per cell.
    Terminal: placed == N, emitted immediately no matter how many cells
    are left unvisited.

Search is exhaustive and happens BEFORE playback: `placement_steps`
first materialises every solution, then yields one BoardStep per
solution so the controller can replay them at the chosen speed.

n == 0 yields exactly one solution, the empty board.  Growth is
factorial / exponential in n and no internal cap is imposed; callers
warn via config.board_size_warning().
"""

from enum import Enum
from typing import Callable, Dict, Generator, List, Tuple

from errors import PreconditionError
from model.board import Board, Solution
from algorithms.step import BoardStep


# ---------------------------------------------------------------------------
# Piece kinds
# ---------------------------------------------------------------------------
class PieceKind(Enum):
    QUEEN  = "queen"
    KNIGHT = "knight"
    ROOK   = "rook"

    @classmethod
    def parse(cls, value) -> "PieceKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise PreconditionError(
                f"Unknown piece {value!r} (expected one of: {', '.join(k.value for k in cls)})"
            ) from None


# Canonical N-Queens counts, index = N
EXPECTED_QUEEN_COUNTS: Tuple[int, ...] = (1, 1, 0, 0, 2, 10, 4, 40, 92)

KNIGHT_MOVES: Tuple[Tuple[int, int], ...] = (
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2),  (1, 2),  (2, -1),  (2, 1),
)


# ---------------------------------------------------------------------------
# Placement predicates: (board, row, col) → "no conflict if placed here"
# ---------------------------------------------------------------------------
def queen_safe(board: Board, row: int, col: int) -> bool:
    # column, prior rows only
    for r in range(row):
        if board.is_occupied(r, col):
            return False
    # upper-left diagonal
    r, c = row - 1, col - 1
    while r >= 0 and c >= 0:
        if board.is_occupied(r, c):
            return False
        r, c = r - 1, c - 1
    # upper-right diagonal
    r, c = row - 1, col + 1
    while r >= 0 and c < board.size:
        if board.is_occupied(r, c):
            return False
        r, c = r - 1, c + 1
    return True


def rook_safe(board: Board, row: int, col: int) -> bool:
    # the row is free by construction (one piece per row); the column
    # must be scanned across every prior row
    for r in range(row):
        if board.is_occupied(r, col):
            return False
    return True


def knight_safe(board: Board, row: int, col: int) -> bool:
    # partial raster-order boards: look in both directions
    for dr, dc in KNIGHT_MOVES:
        r, c = row + dr, col + dc
        if board.in_bounds(r, c) and board.is_occupied(r, c):
            return False
    return True


PREDICATES: Dict[PieceKind, Callable[[Board, int, int], bool]] = {
    PieceKind.QUEEN:  queen_safe,
    PieceKind.KNIGHT: knight_safe,
    PieceKind.ROOK:   rook_safe,
}


# ---------------------------------------------------------------------------
# Solver
# ---------------------------------------------------------------------------
def solve(n: int, kind=PieceKind.QUEEN) -> List[Solution]:
    """
    Enumerate every solution for `n` pieces of `kind` on an n×n board.

    Args:
        n    : Board size and number of pieces.  Must be >= 0.
        kind : PieceKind or its string value.

    Returns:
        Solutions in search order (row-major, lowest column first).
    """
    kind = PieceKind.parse(kind)
    if not isinstance(n, int) or isinstance(n, bool) or n < 0:
        raise PreconditionError(f"Board size must be a non-negative integer, got {n!r}")

    board = Board(n)
    solutions: List[Solution] = []
    if kind is PieceKind.KNIGHT:
        _cells(board, 0, 0, solutions)
    else:
        _rows(board, 0, PREDICATES[kind], solutions)
    return solutions


def _rows(board: Board, row: int, safe, out: List[Solution]) -> None:
    n = board.size
    if row == n:
        out.append(board.snapshot())
        return
    for col in range(n):
        if safe(board, row, col):
            board.place(row, col)
            _rows(board, row + 1, safe, out)
            board.remove(row, col)


def _cells(board: Board, row: int, col: int, out: List[Solution]) -> None:
    n = board.size
    if board.placed == n:
        out.append(board.snapshot())
        return
    if row >= n:
        return

    next_row, next_col = (row, col + 1) if col + 1 < n else (row + 1, 0)

    # include
    if knight_safe(board, row, col):
        board.place(row, col)
        _cells(board, next_row, next_col, out)
        board.remove(row, col)

    # exclude
    _cells(board, next_row, next_col, out)


# ---------------------------------------------------------------------------
# Generator: replay found solutions one per step
# ---------------------------------------------------------------------------
def placement_steps(n: int, piece="queen") -> Generator[BoardStep, None, List[Solution]]:
    """
    Solve exhaustively, then yield one BoardStep per solution.

    Returns (via StopIteration.value) the full solution list.
    """
    kind = PieceKind.parse(piece)
    solutions = solve(n, kind)
    total = len(solutions)
    for idx, sol in enumerate(solutions):
        yield BoardStep(
            step_number=idx,
            solution_index=idx,
            solution=sol,
            total_solutions=total,
            explanation=f"{kind.value.title()} solution {idx + 1} of {total}: {sol.positions()}",
            is_final=idx == total - 1,
        )
    return solutions
