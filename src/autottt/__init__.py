"""autottt package.

Greedy one-ply autoplayer for N x N tic-tac-toe: board model, line-rank
evaluator, self-play driver and a small CLI.

Convenience imports are exposed for common workflows.
"""

from .config import PlayConfig, load_config
from .driver import GameResult, play
from .errors import AutoplayError, CellOccupied, ConfigError, NoLegalMove, OutOfRange
from .evaluator import CompletionBonus, Move, TurnDecision, choose_turn, find_best_move, has_won, rate
from .game_basics import Board, Cell, Line, LineKind, opponent

__all__ = [
    "Board",
    "Cell",
    "Line",
    "LineKind",
    "opponent",
    "rate",
    "has_won",
    "find_best_move",
    "choose_turn",
    "CompletionBonus",
    "Move",
    "TurnDecision",
    "PlayConfig",
    "load_config",
    "play",
    "GameResult",
    "AutoplayError",
    "OutOfRange",
    "CellOccupied",
    "NoLegalMove",
    "ConfigError",
]
