import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from autottt.cli import main

SRC = str(Path(__file__).resolve().parents[1] / "src")


def _run_cli(args: list[str], cwd: Path, stdin: str | None = None) -> subprocess.CompletedProcess:
    exe = [sys.executable, "-m", "autottt.cli"]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (SRC, env.get("PYTHONPATH")) if p)
    return subprocess.run(exe + args, cwd=cwd, capture_output=True, text=True, input=stdin, env=env)


def test_cli_play_limit_zero(tmp_path: Path):
    r = _run_cli(["play", "--size", "3", "--limit", "0"], cwd=tmp_path)
    assert r.returncode == 0
    assert r.stdout.splitlines() == ["___", "_O_", "___", "********"]
    assert "outcome=limit" in r.stderr


def test_cli_play_is_reproducible(tmp_path: Path):
    r1 = _run_cli(["play", "--size", "4", "--limit", "6", "--first", "X"], cwd=tmp_path)
    r2 = _run_cli(["play", "--size", "4", "--limit", "6", "--first", "X"], cwd=tmp_path)
    assert r1.returncode == 0
    assert r1.stdout == r2.stdout
    assert r1.stdout.count("********") == 7


def test_cli_play_reads_config_file(tmp_path: Path):
    cfg = tmp_path / "play.toml"
    cfg.write_text("[play]\nboard_size = 3\niteration_limit = 0\n")
    r = _run_cli(["play", "--config", str(cfg)], cwd=tmp_path)
    assert r.returncode == 0
    assert len(r.stdout.splitlines()) == 4


@pytest.mark.parametrize("args", [
    ["play", "--size", "2"],
    ["play", "--limit", "-3"],
    ["play", "--first", "Z"],
    ["play", "--config", "missing.toml"],
])
def test_cli_play_invalid_config(tmp_path: Path, args):
    r = _run_cli(args, cwd=tmp_path)
    assert r.returncode == 2
    assert "[ERROR]" in r.stderr


def test_cli_analyze_reports_block(tmp_path: Path):
    r = _run_cli(["analyze", "--board", "X__/X__/__O", "--side", "O"], cwd=tmp_path)
    assert r.returncode == 0
    s = r.stdout + r.stderr
    assert "best=(0,2):4" in s
    assert "choice=(2,0)" in s
    assert "blocked=True" in s


def test_cli_analyze_full_board(tmp_path: Path):
    r = _run_cli(["analyze", "--board", "OXO/OXX/XOO"], cwd=tmp_path)
    assert r.returncode == 0
    assert "won=False" in r.stdout + r.stderr


@pytest.mark.parametrize("bad", ["abc", "O__/_Q_/___", "OO/XX"])
def test_cli_analyze_invalid_boards(tmp_path: Path, bad: str):
    r = _run_cli(["analyze", "--board", bad], cwd=tmp_path)
    assert r.returncode == 2


def test_cli_analyze_stdin_csv(tmp_path: Path):
    r = _run_cli(["analyze", "--stdin", "--side", "X"], cwd=tmp_path,
                 stdin="___/_O_/___\n\nnot-a-board\nXXX/OO_/___\n")
    assert r.returncode == 0
    rows = r.stdout.strip().splitlines()
    assert rows[0].startswith("board,side,rate")
    assert len(rows) == 3
    assert rows[1].startswith("___/_O_/___,X,0,")
    assert rows[2].endswith(",True")


def test_cli_help_smoke(tmp_path: Path):
    for args in (["--help"], ["play", "--help"], ["analyze", "--help"]):
        r = _run_cli(args, cwd=tmp_path)
        assert r.returncode == 0
        assert r.stdout or r.stderr


def test_main_in_process(capsys):
    assert main(["play", "--size", "3", "--limit", "1"]) == 0
    out = capsys.readouterr().out
    assert out.count("********") == 2
    assert main(["analyze", "--board", "nope"]) == 2


def test_main_bad_config_value_exits_2(tmp_path: Path):
    cfg = tmp_path / "play.toml"
    cfg.write_text("[play]\nboard_size = [3]\n")
    assert main(["play", "--config", str(cfg)]) == 2


def test_analyze_logs_line_ranks(caplog):
    caplog.set_level(logging.DEBUG)
    assert main(["analyze", "--board", "O__/_X_/___", "--side", "O"]) == 0
    msgs = [r.getMessage() for r in caplog.records]
    assert "line=row[0] rank=1" in msgs
    assert "line=diagonal rank=0" in msgs
    assert any(m.startswith("side=O rate=2 best=(0,2):") for m in msgs)
