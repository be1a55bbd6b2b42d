"""Startup configuration for self-play.

Precedence: dataclass defaults < TOML file ([play] table) < environment
variables (TTT_*) < explicit overrides from the CLI.
"""
from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError
from .evaluator import CompletionBonus
from .game_basics import DEFAULT_SIZE, MIN_SIZE, Cell, parse_side

DEFAULT_ITERATION_LIMIT = 50

ENV_VARS = {
    'board_size': 'TTT_BOARD_SIZE',
    'iteration_limit': 'TTT_ITERATION_LIMIT',
    'first': 'TTT_FIRST',
    'bonus': 'TTT_BONUS',
}


@dataclass(frozen=True)
class PlayConfig:
    board_size: int = DEFAULT_SIZE
    iteration_limit: int = DEFAULT_ITERATION_LIMIT
    first: Cell = Cell.O
    bonus: CompletionBonus = CompletionBonus.SQUARE

    def validate(self) -> "PlayConfig":
        if self.board_size < MIN_SIZE:
            raise ConfigError(f"board_size must be >= {MIN_SIZE}, got {self.board_size}")
        if self.iteration_limit < 0:
            raise ConfigError(f"iteration_limit must be >= 0, got {self.iteration_limit}")
        if self.first not in (Cell.O, Cell.X):
            raise ConfigError(f"first must be O or X, got {self.first!r}")
        return self

    def as_params(self) -> Dict[str, object]:
        return {
            'board_size': self.board_size,
            'iteration_limit': self.iteration_limit,
            'first': self.first.symbol,
            'bonus': self.bonus.value,
        }


def _coerce(name: str, value: Any) -> Any:
    try:
        if name in ('board_size', 'iteration_limit'):
            if isinstance(value, bool):
                raise ValueError(value)
            if isinstance(value, str) and value.strip().lstrip('-').isdigit():
                return int(value)
            if not isinstance(value, int):
                raise ValueError(value)
            return value
        if name == 'first':
            return value if isinstance(value, Cell) else parse_side(str(value))
        if name == 'bonus':
            return value if isinstance(value, CompletionBonus) else CompletionBonus(str(value).lower())
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}: {value!r}") from e
    raise ConfigError(f"Unknown config key: {name}")


def apply_overrides(cfg: PlayConfig, raw: Mapping[str, Any]) -> PlayConfig:
    known = {f.name for f in fields(PlayConfig)}
    changes = {}
    for k, v in raw.items():
        if v is None:
            continue
        if k not in known:
            logging.warning("Ignoring unknown config key: %s", k)
            continue
        changes[k] = _coerce(k, v)
    return replace(cfg, **changes)


def load_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'rb') as f:
            raw = tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Malformed TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    table = raw.get('play', {})
    if not isinstance(table, dict):
        raise ConfigError(f"[play] in {path} must be a table, got {type(table).__name__}")
    return dict(table)


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    env = os.environ if environ is None else environ
    return {k: env[var] for k, var in ENV_VARS.items() if env.get(var)}


def load_config(
    path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PlayConfig:
    cfg = PlayConfig()
    if path is not None:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        cfg = apply_overrides(cfg, load_toml(path))
        logging.debug("loaded_config=%s", path)
    cfg = apply_overrides(cfg, env_overrides(environ))
    if overrides:
        cfg = apply_overrides(cfg, overrides)
    return cfg.validate()
