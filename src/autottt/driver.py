"""
Self-play driver.

Alternates the two sides on a single current board: each turn asks the
evaluator for a decision, applies it, and renders the new board followed by a
separator line. The loop ends on a completed line, on a full board, or once the
iteration counter, checked after each move, has run out (limit 0 still plays
one move).
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from .config import PlayConfig
from .evaluator import TurnDecision, choose_turn, winner
from .game_basics import Board, Cell, opponent
from .render import SEPARATOR, render

OUTCOME_WIN = 'win'
OUTCOME_DRAW = 'draw'
OUTCOME_LIMIT = 'limit'


@dataclass
class GameResult:
    board: Board
    outcome: str
    winner: Optional[Cell] = None
    moves: List[TurnDecision] = field(default_factory=list)

    @property
    def plies(self) -> int:
        return len(self.moves)


def play(config: Optional[PlayConfig] = None, out: Optional[TextIO] = None) -> GameResult:
    cfg = (config or PlayConfig()).validate()
    out = out if out is not None else sys.stdout
    board = Board(cfg.board_size)
    turn = cfg.first
    iteration_limit = cfg.iteration_limit
    moves: List[TurnDecision] = []

    while True:
        w = winner(board)
        if w is not None:
            result = GameResult(board, OUTCOME_WIN, w, moves)
            break
        if board.is_full():
            result = GameResult(board, OUTCOME_DRAW, None, moves)
            break

        decision = choose_turn(board, turn, cfg.bonus)
        mv = decision.move
        board = board.with_mark(mv.row, mv.col, turn)
        moves.append(decision)
        logging.info(
            "side=%s move=(%d,%d) rate=%d foe=(%d,%d):%d blocked=%s",
            turn.symbol, mv.row, mv.col, decision.own.rate,
            decision.foe.row, decision.foe.col, decision.foe.rate, decision.blocked,
        )
        print(render(board), file=out)
        print(SEPARATOR, file=out)

        if iteration_limit == 0:
            w = winner(board)
            result = GameResult(board, OUTCOME_WIN if w else OUTCOME_LIMIT, w, moves)
            break
        iteration_limit -= 1
        turn = opponent(turn)

    logging.info(
        "outcome=%s winner=%s plies=%d",
        result.outcome,
        result.winner.symbol if result.winner else None,
        result.plies,
    )
    return result
