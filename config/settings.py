"""
BirthWindow - Runtime Settings

Environment-driven knobs for the network clients and caches. Values are
read once at import; ``app.py`` loads a ``.env`` file before importing.
"""

import os
from typing import Optional


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


USER_AGENT = os.environ.get("BIRTHWINDOW_USER_AGENT", "Birth-Timing-Calculator/1.0")
HTTP_TIMEOUT = _env_float("BIRTHWINDOW_HTTP_TIMEOUT", 10.0)

SOLAR_CACHE_SIZE = _env_int("BIRTHWINDOW_SOLAR_CACHE_SIZE", 512)
GEOCODE_CACHE_SIZE = _env_int("BIRTHWINDOW_GEOCODE_CACHE_SIZE", 256)
GEOCODE_CACHE_TTL = _env_float("BIRTHWINDOW_GEOCODE_CACHE_TTL", 24 * 3600.0)

# Seeds the sunspot noise; unset means a fresh random stream per process
RANDOM_SEED = _env_optional_int("BIRTHWINDOW_RANDOM_SEED")

LOG_LEVEL = os.environ.get("BIRTHWINDOW_LOG_LEVEL", "INFO").upper()
