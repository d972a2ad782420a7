"""Core engine configuration.

Core config is side-effect free: it does not load dotenv files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class CoreConfig:
    detection_timeout_seconds: float = 5.0
    fast_path_max_headers: int = 10
    fast_path_confidence: int = 60
    fallback_confidence: int = 30
    cache_ttl_seconds: int = 24 * 60 * 60
    # Cache keys only look at a leading window of the sample. Two uploads that
    # share headers and this window are treated as the same detection.
    cache_sample_rows: int = 3
    cache_sample_cells: int = 5
    max_workers: int = 4


def _env_float(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


def config_from_env() -> CoreConfig:
    defaults = CoreConfig()
    return CoreConfig(
        detection_timeout_seconds=_env_float("DETECTION_TIMEOUT_SECONDS", defaults.detection_timeout_seconds),
        fast_path_max_headers=_env_int("DETECTION_FAST_PATH_MAX_HEADERS", defaults.fast_path_max_headers),
        fast_path_confidence=defaults.fast_path_confidence,
        fallback_confidence=defaults.fallback_confidence,
        cache_ttl_seconds=_env_int("DETECTION_CACHE_TTL_SECONDS", defaults.cache_ttl_seconds),
        cache_sample_rows=_env_int("DETECTION_CACHE_SAMPLE_ROWS", defaults.cache_sample_rows),
        cache_sample_cells=_env_int("DETECTION_CACHE_SAMPLE_CELLS", defaults.cache_sample_cells),
        max_workers=_env_int("DETECTION_MAX_WORKERS", defaults.max_workers),
    )


__all__ = ["CoreConfig", "config_from_env"]
