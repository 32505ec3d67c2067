# Config/config_manager.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from Config.constants_core import (
    DEFAULT_DISPLAY_PLACES,
    DEFAULT_GENERATOR_SYMBOLS,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_LEVEL,
    MAX_DISPLAY_PLACES,
)
from Config.environment import env
from Config.exceptions import ConfigMissingError, ConfigRangeError, ConfigTypeError, ConfigValidationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppConfig:
    log_level: str
    log_dir: Path
    log_to_file: bool
    display_places: int
    input_csv: Optional[Path]
    generator_symbols: Tuple[str, ...]

    def require_input_csv(self) -> Path:
        if self.input_csv is None:
            raise ConfigMissingError("GAINS_INPUT_CSV", "environment, .env, or --input")
        return self.input_csv


def _get(environ: Mapping[str, str], key: str, default: str) -> str:
    raw = environ.get(key)
    return default if raw is None or not raw.strip() else raw.strip()


def _env_bool(environ: Mapping[str, str], key: str, default: bool) -> bool:
    raw = _get(environ, key, "true" if default else "false").lower()
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    raise ConfigTypeError(key, raw, bool)


def _env_int(environ: Mapping[str, str], key: str, default: int, min_val: int, max_val: int) -> int:
    raw = _get(environ, key, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ConfigTypeError(key, raw, int) from None
    if not min_val <= value <= max_val:
        raise ConfigRangeError(key, value, min_val, max_val)
    return value


def _env_list_csv(environ: Mapping[str, str], key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = environ.get(key, "")
    if raw.strip():
        return tuple(s.strip().upper() for s in raw.split(",") if s.strip())
    return default


def load_app_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build the application config from the environment.

    The project .env (if any) is loaded on import of Config.environment and
    never overrides variables already set in the process.
    """
    env.load()
    environ = os.environ if environ is None else environ

    log_level = _get(environ, "GAINS_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ConfigValidationError(
            "GAINS_LOG_LEVEL", log_level,
            "Unknown log level", f"Use one of {', '.join(VALID_LOG_LEVELS)}"
        )

    input_raw = environ.get("GAINS_INPUT_CSV", "").strip()
    symbols = _env_list_csv(environ, "GAINS_GENERATOR_SYMBOLS", DEFAULT_GENERATOR_SYMBOLS)
    if not symbols:
        raise ConfigValidationError("GAINS_GENERATOR_SYMBOLS", environ.get("GAINS_GENERATOR_SYMBOLS"),
                                    "No symbols listed", "e.g. GAINS_GENERATOR_SYMBOLS=AAPL,MSFT")

    return AppConfig(
        log_level=log_level,
        log_dir=Path(_get(environ, "GAINS_LOG_DIR", DEFAULT_LOG_DIR)),
        log_to_file=_env_bool(environ, "GAINS_LOG_TO_FILE", True),
        display_places=_env_int(environ, "GAINS_DISPLAY_PLACES", DEFAULT_DISPLAY_PLACES, 0, MAX_DISPLAY_PLACES),
        input_csv=Path(input_raw) if input_raw else None,
        generator_symbols=symbols,
    )
