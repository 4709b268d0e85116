"""
File- and environment-based configuration.

Values are resolved once at startup, lowest precedence first:
  1. built-in defaults
  2. YAML file (config/lolburst.yaml, or the path in LOLBURST_CONFIG)
  3. environment variables (a .env file is loaded by main.py)

Usage:
    from config.settings import load_settings
    settings = load_settings()
    print(settings.window_capacity)
"""

from __future__ import annotations
import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import yaml

log = logging.getLogger(__name__)

# Relative data paths resolve against the project root, not the working directory
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = Path(__file__).resolve().with_name("lolburst.yaml")
_PROJECT_PATHS = ("fixtures_dir", "champion_data_path")

_DEFAULTS: dict[str, Any] = {
    "use_sample_data": False,
    "sample_rate_s": 1.0,
    "dataset_lifetime_s": 300.0,
    "rotation": "QWE",
    "live_client_url": "https://127.0.0.1:2999/liveclientdata/allgamedata",
    "data_dragon_url": "http://ddragon.leagueoflegends.com/cdn/12.13.1/data/en_US/champion.json",
    "champion_data_path": "",
    "fixtures_dir": "resources/all_data",
    "retry_delay_s": 5.0,
    "request_timeout_s": 4.0,
    "log_level": "INFO",
    "log_dir": "logs",
}


class ConfigError(ValueError):
    """Raised for configuration the program cannot start with."""


def _to_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


def _to_float(raw: Any) -> float:
    return float(raw)


def _to_str(raw: Any) -> str:
    return "" if raw is None else str(raw)


_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "use_sample_data": _to_bool,
    "sample_rate_s": _to_float,
    "dataset_lifetime_s": _to_float,
    "rotation": _to_str,
    "live_client_url": _to_str,
    "data_dragon_url": _to_str,
    "champion_data_path": _to_str,
    "fixtures_dir": _to_str,
    "retry_delay_s": _to_float,
    "request_timeout_s": _to_float,
    "log_level": _to_str,
    "log_dir": _to_str,
}


@dataclass(frozen=True)
class Settings:
    # --- Data source ---
    use_sample_data: bool                 # True = replay recorded JSON fixtures instead of the live client
    live_client_url: str                  # Local game client all-game-data endpoint (self-signed TLS)
    fixtures_dir: str                     # Directory holding all_data_<cycle>.json files
    request_timeout_s: float

    # --- Champion database ---
    data_dragon_url: str                  # Data Dragon champion.json
    champion_data_path: str               # Optional local champion.json; empty = fetch data_dragon_url

    # --- Sampling ---
    sample_rate_s: float                  # Seconds between ticks
    dataset_lifetime_s: float             # Seconds of history kept in each chart window

    # --- Burst ---
    rotation: str                         # Ability tags, e.g. "QWE" or "QWERA"

    # --- Retry / logging ---
    retry_delay_s: float                  # Fixed wait between failed fetches while waiting for a game
    log_level: str
    log_dir: str

    @property
    def window_capacity(self) -> int:
        """Number of samples each chart window holds."""
        # 0.3 / 0.1 is 2.9999999999999996
        return math.floor(self.dataset_lifetime_s / self.sample_rate_s + 1e-9)

    def validate(self) -> "Settings":
        if self.sample_rate_s <= 0:
            raise ConfigError(f"sample_rate_s must be positive, got {self.sample_rate_s}")
        if self.dataset_lifetime_s <= 0:
            raise ConfigError(f"dataset_lifetime_s must be positive, got {self.dataset_lifetime_s}")
        if self.window_capacity < 1:
            raise ConfigError(
                f"dataset_lifetime_s={self.dataset_lifetime_s} is shorter than "
                f"sample_rate_s={self.sample_rate_s}; the chart window would be empty"
            )
        if not self.rotation.strip():
            raise ConfigError("rotation must name at least one ability")
        if self.retry_delay_s < 0:
            raise ConfigError(f"retry_delay_s must not be negative, got {self.retry_delay_s}")
        if not self.use_sample_data and not self.live_client_url:
            raise ConfigError("live_client_url is required unless use_sample_data is set")
        if not self.champion_data_path and not self.data_dragon_url:
            raise ConfigError("one of champion_data_path or data_dragon_url is required")
        return self


def _project_path(raw: str) -> str:
    if not raw:
        return raw
    path = Path(raw).expanduser()
    return str(path if path.is_absolute() else PROJECT_ROOT / path)


def _env_key(field_name: str) -> str:
    return "LOLBURST_" + field_name.upper()


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        log.warning("Config file %s not found, using defaults", path)
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file {path} is not valid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    unknown = set(data) - set(_DEFAULTS)
    if unknown:
        log.warning("Ignoring unknown config keys in %s: %s", path, sorted(unknown))
    log.info("Config file found, using %s", path)
    return {k: v for k, v in data.items() if k in _DEFAULTS}


def load_settings(path: str | os.PathLike[str] | None = None) -> Settings:
    config_path = Path(path or os.environ.get("LOLBURST_CONFIG", DEFAULT_CONFIG_PATH))
    merged: dict[str, Any] = dict(_DEFAULTS)
    merged.update(_read_config_file(config_path))
    for name in _DEFAULTS:
        env_val = os.environ.get(_env_key(name))
        if env_val is not None and env_val != "":
            merged[name] = env_val

    values: dict[str, Any] = {}
    for name, raw in merged.items():
        try:
            values[name] = _CONVERTERS[name](raw)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid value for {name!r}: {raw!r}") from exc
    for name in _PROJECT_PATHS:
        values[name] = _project_path(values[name])

    return Settings(**values).validate()
