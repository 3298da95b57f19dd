from __future__ import annotations

import os
from pathlib import Path

DEFAULT_SPLIT_TOLERANCE = 0.01

ROOT_DIR = Path(__file__).resolve().parent.parent


def _flag(name: str, default: str = "off") -> bool:
    value = os.getenv(name, default).strip().lower()
    return value in {"1", "true", "yes", "on"}


def _parse_float(raw: str | None, default: float) -> float:
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if value < 0:
        return default
    return value


def base_currency() -> str:
    return (os.getenv("TRIPSPLIT_BASE_CURRENCY") or "BRL").strip().upper()


def split_tolerance() -> float:
    return _parse_float(os.getenv("TRIPSPLIT_SPLIT_TOLERANCE"), DEFAULT_SPLIT_TOLERANCE)


def log_level() -> str:
    return (os.getenv("TRIPSPLIT_LOG_LEVEL") or "INFO").strip().upper()


def log_json() -> bool:
    return _flag("TRIPSPLIT_LOG_JSON", "on")


def request_log_enabled() -> bool:
    return _flag("TRIPSPLIT_REQUEST_LOG", "on")


def modules_path() -> Path:
    env_path = os.getenv("TRIPSPLIT_MODULES_PATH")
    if env_path:
        return Path(env_path)
    return ROOT_DIR / "modules"
