from pathlib import Path

import pytest

import autottt.tracking as T


def test_disabled_tracking_is_noop(tmp_path: Path):
    with T.maybe_mlflow_run(False, run_name="x", log_dir=tmp_path) as active:
        assert active is False
        T.log_params({"board_size": 3})
        T.log_metrics({"plies": 1.0})
    assert not (tmp_path / "mlruns").exists()


def test_missing_mlflow_falls_back(monkeypatch, tmp_path: Path, caplog):
    monkeypatch.setattr(T, "mlflow_available", lambda: False)
    with T.maybe_mlflow_run(True, run_name="x", log_dir=tmp_path) as active:
        assert active is False
    assert any("mlflow is not installed" in r.getMessage() for r in caplog.records)


def test_mlflow_run_records_params(tmp_path: Path):
    mlflow = pytest.importorskip("mlflow")
    with T.maybe_mlflow_run(True, run_name="self_play", log_dir=tmp_path) as active:
        assert active is True
        T.log_params({"board_size": 3})
        run_id = mlflow.active_run().info.run_id
    run = mlflow.get_run(run_id)
    assert run.data.params["board_size"] == "3"
