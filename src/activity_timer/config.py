from __future__ import annotations

"""Application configuration read from the environment."""

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

API_URL_ENV = "ACTIVITY_TIMER_API_URL"
DATA_DIR_ENV = "ACTIVITY_TIMER_DATA_DIR"
LOG_LEVEL_ENV = "ACTIVITY_TIMER_LOG_LEVEL"

DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_DATA_DIR = Path.home() / ".activity_timer"


@dataclass(slots=True)
class AppConfig:
    api_url: str = DEFAULT_API_URL
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: int = logging.INFO


def _parse_level(name: str | None) -> int:
    if not name:
        return logging.INFO
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    env = os.environ if env is None else env
    data_dir = env.get(DATA_DIR_ENV)
    return AppConfig(
        api_url=(env.get(API_URL_ENV) or DEFAULT_API_URL).rstrip("/"),
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        log_level=_parse_level(env.get(LOG_LEVEL_ENV)),
    )


__all__ = ["AppConfig", "load_config"]
