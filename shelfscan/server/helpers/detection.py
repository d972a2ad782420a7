"""Process-wide detection service wiring for the HTTP routes."""

from __future__ import annotations

from functools import lru_cache

from ...config import get_settings
from ...core.config import config_from_env
from ...core.orchestrator import DetectionService
from ...core.ratelimit import (
    DETECTION_ENDPOINT,
    SUPPORT_CHAT_ENDPOINT,
    RateLimiter,
    RateLimitPolicy,
)
from ...core.store import InMemoryStore


@lru_cache(maxsize=1)
def get_detection_service() -> DetectionService:
    settings = get_settings()
    store = InMemoryStore()
    policies = (
        RateLimitPolicy(
            DETECTION_ENDPOINT,
            limit=settings.detection_rate_limit,
            window_seconds=settings.rate_limit_window_seconds,
        ),
        RateLimitPolicy(
            SUPPORT_CHAT_ENDPOINT,
            limit=settings.support_chat_rate_limit,
            window_seconds=settings.rate_limit_window_seconds,
        ),
    )
    return DetectionService(
        config=config_from_env(),
        store=store,
        rate_limiter=RateLimiter(store, policies),
    )


def reset_detection_service() -> None:
    if get_detection_service.cache_info().currsize:
        get_detection_service().shutdown()
    get_detection_service.cache_clear()


__all__ = ["get_detection_service", "reset_detection_service"]
