import io

import pytest

from autottt.config import PlayConfig
from autottt.driver import play
from autottt.evaluator import choose_turn, find_best_move
from autottt.game_basics import Board, Cell

try:
    import pytest_benchmark  # noqa: F401
    HAS_BENCH = True
except ImportError:
    HAS_BENCH = False


@pytest.mark.skipif(not HAS_BENCH, reason="pytest-benchmark not installed")
def test_benchmark_find_best_move_9x9(benchmark):
    board = Board(9)
    mv = benchmark(find_best_move, board, Cell.O)
    # center lies on both diagonals, its row and its column
    assert (mv.row, mv.col) == (4, 4)
    assert mv.rate == 4


@pytest.mark.skipif(not HAS_BENCH, reason="pytest-benchmark not installed")
def test_benchmark_choose_turn_midgame(benchmark):
    board = Board.parse("O________/_X_______/__O______/" + "/".join(["_" * 9] * 6))
    d = benchmark(choose_turn, board, Cell.X)
    assert board.get(d.move.row, d.move.col) == Cell.EMPTY


@pytest.mark.skipif(not HAS_BENCH, reason="pytest-benchmark not installed")
def test_benchmark_small_self_play(benchmark):
    def _play():
        return play(PlayConfig(board_size=5, iteration_limit=10), out=io.StringIO())

    res = benchmark(_play)
    assert res.plies > 0
