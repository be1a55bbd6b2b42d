#!/usr/bin/env python3
from __future__ import annotations

import io
import math
import statistics as stats
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from autottt.config import PlayConfig
from autottt.driver import play
from autottt.evaluator import find_best_move
from autottt.game_basics import Board, Cell
from autottt.tracking import log_metrics, log_params, maybe_mlflow_run


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 5
    sizes: List[int] = field(default_factory=lambda: [3, 5, 7, 9])
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = Path("runs")


def main() -> int:
    cfg = Config()
    with maybe_mlflow_run(cfg.tracking == "mlflow", run_name="benchmarks", log_dir=cfg.log_dir):
        log_params({"repeats": cfg.repeats, "sizes": ",".join(map(str, cfg.sizes))})
        metrics = {}
        for n in cfg.sizes:
            search_times: List[float] = []
            game_times: List[float] = []
            for _ in range(cfg.repeats):
                t0 = time.perf_counter()
                find_best_move(Board(n), Cell.O)
                t1 = time.perf_counter()
                search_times.append(t1 - t0)
                t2 = time.perf_counter()
                play(PlayConfig(board_size=n), out=io.StringIO())
                t3 = time.perf_counter()
                game_times.append(t3 - t2)
            m_search, h_search = ci95(search_times)
            m_game, h_game = ci95(game_times)
            metrics.update({
                f"search_n{n}_mean_s": m_search,
                f"search_n{n}_ci95_half_s": h_search,
                f"game_n{n}_mean_s": m_game,
                f"game_n{n}_ci95_half_s": h_game,
            })
            print(
                f"N={n}: find_best_move mean={m_search:.4f}s ± {h_search:.4f}s, "
                f"self-play mean={m_game:.4f}s ± {h_game:.4f}s (95% CI)"
            )
        log_metrics(metrics)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
