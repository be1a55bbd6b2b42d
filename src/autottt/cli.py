from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .config import load_config
from .driver import play
from .errors import ConfigError
from .evaluator import CompletionBonus, choose_turn, has_won, line_ranks, rate
from .game_basics import Board, Cell, parse_side
from .tracking import log_metrics, log_params, maybe_mlflow_run

DIST_NAME = "ttt-autoplay"
BONUS_CHOICES = [b.value for b in CompletionBonus]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt-autoplay", description="N x N tic-tac-toe autoplayer")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )

    p_play = sub.add_parser("play", help="Run a self-play game and print every board (default command)")
    p_play.add_argument("--size", type=int, default=None, help="Board side length N (>= 3, default 9)")
    p_play.add_argument("--limit", type=int, default=None, help="Iteration limit (default 50)")
    p_play.add_argument("--first", default=None, help="Side that moves first: O (default) or X")
    p_play.add_argument(
        "--bonus",
        choices=BONUS_CHOICES,
        default=None,
        help="Completed-line bonus: square (N*N, default) or dominant",
    )
    p_play.add_argument("--config", type=Path, default=None, help="TOML file with a [play] table")
    p_play.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_play.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs (for mlflow local backend)",
    )

    p_an = sub.add_parser(
        "analyze",
        help="Rate a board and show the chosen turn (rows of _/O/X separated by '/', row 0 first)",
    )
    p_an.add_argument("--board", help="Board text, e.g. O__/_X_/___ (omit with --stdin)")
    p_an.add_argument("--side", default="O", help="Side to move: O (default) or X")
    p_an.add_argument("--bonus", choices=BONUS_CHOICES, default=CompletionBonus.SQUARE.value)
    p_an.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    return p


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _cmd_play(ns: argparse.Namespace) -> int:
    cfg = load_config(
        getattr(ns, "config", None),
        overrides={
            "board_size": getattr(ns, "size", None),
            "iteration_limit": getattr(ns, "limit", None),
            "first": getattr(ns, "first", None),
            "bonus": getattr(ns, "bonus", None),
        },
    )
    logging.debug("config=%s", cfg.as_params())
    tracking = getattr(ns, "tracking", "none")
    with maybe_mlflow_run(tracking == "mlflow", run_name="self_play", log_dir=getattr(ns, "log_dir", None)):
        log_params(cfg.as_params())
        result = play(cfg)
        log_metrics({"plies": float(result.plies), "won": 1.0 if result.winner else 0.0})
    return 0


def _analyze_row(board: Board, side: Cell, bonus: CompletionBonus) -> list:
    won = has_won(board, side)
    if board.is_full():
        return [board.serialize(), side.symbol, rate(board, side, bonus), "", "", "", "", "", "", won]
    decision = choose_turn(board, side, bonus)
    best = decision.own
    return [
        board.serialize(), side.symbol, rate(board, side, bonus),
        best.row, best.col, best.rate,
        decision.move.row, decision.move.col, decision.blocked, won,
    ]


def _cmd_analyze(ns: argparse.Namespace) -> int:
    side = parse_side(ns.side)
    bonus = CompletionBonus(ns.bonus)
    if ns.stdin:
        import csv as _csv
        import sys as _sys
        w = _csv.writer(_sys.stdout)
        w.writerow(["board", "side", "rate", "best_row", "best_col", "best_rate",
                    "choice_row", "choice_col", "blocked", "won"])
        for line in _sys.stdin:
            raw = line.strip()
            if not raw:
                continue
            try:
                board = Board.parse(raw)
            except ConfigError as e:
                logging.warning("Skipping invalid board %r: %s", raw, e)
                continue
            w.writerow(_analyze_row(board, side, bonus))
        return 0

    if not ns.board:
        raise ConfigError("--board is required unless --stdin is given")
    board = Board.parse(ns.board)
    for line, rank in line_ranks(board, side):
        logging.debug("line=%s rank=%d", line, rank)
    row = _analyze_row(board, side, bonus)
    logging.info(
        "side=%s rate=%s best=(%s,%s):%s choice=(%s,%s) blocked=%s won=%s",
        *row[1:],
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        from importlib.metadata import PackageNotFoundError, version as _ver

        try:
            print(_ver(DIST_NAME))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    try:
        if ns.cmd == "analyze":
            return _cmd_analyze(ns)
        return _cmd_play(ns)
    except ConfigError as e:
        logging.error("%s", e)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
