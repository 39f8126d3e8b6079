"""
Runtime configuration.

Settings come from three layers, later ones winning:
  1) the defaults below
  2) a TOML file (default ~/.config/crackle/config.toml, or $CRACKLE_CONFIG)
  3) CLI flags, applied by the apps via Config.override(...)

Example config.toml:

    word_list_path = "/usr/share/crackle/words_5.txt"
    starting_word_limit = 10
    max_guesses = 6
    results_path = "reports/results.csv"
"""

from __future__ import annotations

import dataclasses
import logging
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from crackle.datasets.io import DEFAULT_WORDLIST
from crackle.engine.errors import ConfigError

log = logging.getLogger(__name__)

CONFIG_ENV = "CRACKLE_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "crackle" / "config.toml"

# Wordle's guess budget.
DEFAULT_MAX_GUESSES = 6


@dataclass(frozen=True)
class Config:
    word_list_path: str = str(DEFAULT_WORDLIST)
    starting_word_limit: int = 10
    max_guesses: int = DEFAULT_MAX_GUESSES
    results_path: str = "reports/results.csv"
    log_file: Optional[str] = None

    def __post_init__(self):
        if self.starting_word_limit < 1:
            raise ConfigError(f"starting_word_limit must be >= 1, got {self.starting_word_limit}")
        if self.max_guesses < 1:
            raise ConfigError(f"max_guesses must be >= 1, got {self.max_guesses}")

    def override(self, **values: Any) -> "Config":
        """Copy with every non-None value replaced (unset CLI flags are None)."""
        return dataclasses.replace(self, **{k: v for k, v in values.items() if v is not None})


def default_config_path() -> Path:
    env = os.environ.get(CONFIG_ENV)
    return Path(env).expanduser() if env else DEFAULT_CONFIG_PATH


def _check_types(data: Dict[str, Any]) -> None:
    known = {f.name: f for f in fields(Config)}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ConfigError(f"unknown config key(s): {', '.join(unknown)}")

    for key, value in data.items():
        want = int if key in ("starting_word_limit", "max_guesses") else str
        # bool is an int subclass; reject it explicitly
        if not isinstance(value, want) or isinstance(value, bool):
            raise ConfigError(f"config key {key!r} must be {want.__name__}, got {value!r}")


def load_config(path: Optional[Path | str] = None) -> Config:
    """
    Load a Config from TOML.

    With no explicit `path`, a missing file at the default location means
    "use defaults". An explicit path must exist.

    Raises ConfigError on unreadable files, TOML syntax errors, unknown keys
    and wrongly typed values.
    """
    explicit = path is not None
    p = Path(path).expanduser() if explicit else default_config_path()

    if not p.exists():
        if explicit:
            raise ConfigError(f"config file not found: {p}")
        log.debug("no config at %s, using defaults", p)
        return Config()

    try:
        with p.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"cannot read config {p}: {e}") from e

    _check_types(data)
    log.debug("loaded config from %s", p)
    return Config(**data)
