"""
Experiment tracking for self-play runs (optional MLflow backend).

MLflow is imported only when tracking is requested, so it stays an optional
dependency; without it every helper is a no-op.
"""
from __future__ import annotations

import importlib.util
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional


def mlflow_available() -> bool:
    return importlib.util.find_spec("mlflow") is not None


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Yield True inside an active MLflow run, False when tracking is off."""
    if not enabled:
        yield False
        return
    if not mlflow_available():
        logging.warning("mlflow is not installed; continuing without tracking")
        yield False
        return
    import mlflow  # type: ignore

    if log_dir is not None:
        mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
    with mlflow.start_run(run_name=run_name):
        yield True


def log_params(params: Dict[str, object]) -> None:
    if not mlflow_available():
        return
    import mlflow  # type: ignore

    if mlflow.active_run() is not None:
        mlflow.log_params(params)


def log_metrics(metrics: Dict[str, float]) -> None:
    if not mlflow_available():
        return
    import mlflow  # type: ignore

    if mlflow.active_run() is not None:
        mlflow.log_metrics(metrics)
