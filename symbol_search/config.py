"""Environment configuration for symbol search (reads .env when present)."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MAX_RESULTS = 500  # cap used by the Javadoc search page

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _log_level_env(name: str, default: str) -> str:
    value = (os.getenv(name) or default).strip().upper()
    if not isinstance(logging.getLevelName(value), int):
        raise ValueError(f"{name} is not a logging level: {value!r}")
    return value


@dataclass(frozen=True)
class SearchConfig:
    index_dir: Optional[str] = None
    debounce_ms: int = 0
    max_results: int = DEFAULT_MAX_RESULTS
    show_progress: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "SearchConfig":
        return cls(
            index_dir=os.getenv("SYMBOL_SEARCH_INDEX_DIR") or None,
            debounce_ms=_int_env("SYMBOL_SEARCH_DEBOUNCE_MS", 0),
            max_results=_int_env("SYMBOL_SEARCH_MAX_RESULTS", DEFAULT_MAX_RESULTS),
            show_progress=_bool_env("SYMBOL_SEARCH_SHOW_PROGRESS", False),
            log_level=_log_level_env("SYMBOL_SEARCH_LOG_LEVEL", "WARNING"),
        )
