"""
One-ply greedy evaluator.
Scoring:
- A line's rank for a side is 0 when the opponent occupies any of its cells,
  otherwise the number of the side's marks on it.
- rate() sums ranks over all 2 + 2N lines; a completed line (rank == N)
  contributes the completion bonus instead of N.
Move choice:
- find_best_move() tries every empty cell in row-major order and keeps the
  first cell reaching the maximum rate.
- choose_turn() plays the opponent's best cell instead of its own when the
  opponent's best rate is strictly higher (a block). No deeper search.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .errors import NoLegalMove
from .game_basics import SIDES, Board, Cell, Line, opponent


class CompletionBonus(Enum):
    # N*N, the reference scoring. Does not dominate the partial-line sum.
    SQUARE = 'square'
    # Smallest bonus larger than any achievable sum of partial contributions.
    DOMINANT = 'dominant'

    def value_for(self, size: int) -> int:
        if self is CompletionBonus.SQUARE:
            return size * size
        return max_partial_sum(size) + 1


def max_partial_sum(size: int) -> int:
    """Upper bound of the non-completed contributions: 2 + 2N lines at N - 1."""
    return (2 + 2 * size) * (size - 1)


def completion_bonus_dominates(size: int, bonus: CompletionBonus = CompletionBonus.SQUARE) -> bool:
    return bonus.value_for(size) > max_partial_sum(size)


@dataclass(frozen=True)
class Move:
    row: int
    col: int
    rate: int


@dataclass(frozen=True)
class TurnDecision:
    side: Cell
    own: Move
    foe: Move

    @property
    def blocked(self) -> bool:
        return self.foe.rate > self.own.rate

    @property
    def move(self) -> Move:
        return self.foe if self.blocked else self.own


def line_ranks(board: Board, side: Cell) -> List[Tuple[Line, int]]:
    return [(line, board.rank_of(side, line)) for line in board.lines()]


def rate(board: Board, side: Cell, bonus: CompletionBonus = CompletionBonus.SQUARE) -> int:
    n = board.size
    completed = bonus.value_for(n)
    total = 0
    for line in board.lines():
        rank = board.rank_of(side, line)
        total += completed if rank == n else rank
    return total


def has_won(board: Board, side: Cell) -> bool:
    n = board.size
    return any(board.rank_of(side, line) == n for line in board.lines())


def winner(board: Board) -> Optional[Cell]:
    for side in SIDES:
        if has_won(board, side):
            return side
    return None


def find_best_move(board: Board, side: Cell, bonus: CompletionBonus = CompletionBonus.SQUARE) -> Move:
    best: Optional[Move] = None
    for i, j in board.empty_cells():
        local_rate = rate(board.with_mark(i, j, side), side, bonus)
        if best is None or local_rate > best.rate:
            best = Move(i, j, local_rate)
    if best is None:
        raise NoLegalMove(f"No empty cell left for {side.symbol} on a {board.size}x{board.size} board")
    return best


def choose_turn(board: Board, side: Cell, bonus: CompletionBonus = CompletionBonus.SQUARE) -> TurnDecision:
    own = find_best_move(board, side, bonus)
    foe = find_best_move(board, opponent(side), bonus)
    decision = TurnDecision(side=side, own=own, foe=foe)
    logging.debug(
        "turn=%s self=(%d,%d):%d foe=(%d,%d):%d blocked=%s",
        side.symbol, own.row, own.col, own.rate, foe.row, foe.col, foe.rate, decision.blocked,
    )
    return decision
