"""Fixed-window rate limiting per endpoint and caller identity."""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from .errors import RateLimitExceededError
from .store import KeyValueStore

DETECTION_ENDPOINT = "platform_detection"
SUPPORT_CHAT_ENDPOINT = "support_chat"


@dataclass(frozen=True)
class RateLimitPolicy:
    endpoint: str
    limit: int
    window_seconds: int = 60


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    count: int
    limit: int
    retry_after: int


DEFAULT_POLICIES: tuple[RateLimitPolicy, ...] = (
    RateLimitPolicy(DETECTION_ENDPOINT, limit=60),
    RateLimitPolicy(SUPPORT_CHAT_ENDPOINT, limit=20),
)


class RateLimiter:
    def __init__(self, store: KeyValueStore, policies: Iterable[RateLimitPolicy] = DEFAULT_POLICIES) -> None:
        self._store = store
        self._policies = {policy.endpoint: policy for policy in policies}

    def policy(self, endpoint: str) -> RateLimitPolicy:
        policy = self._policies.get(endpoint)
        if policy is None:
            raise KeyError(f"No rate limit policy for endpoint: {endpoint}")
        return policy

    def check(self, endpoint: str, identity: str) -> RateLimitDecision:
        policy = self.policy(endpoint)
        key = f"ratelimit:{endpoint}:{identity or 'unknown'}"
        # One atomic increment per request; no separate read-then-write.
        count = self._store.incr(key, ttl_seconds=policy.window_seconds)
        if count <= policy.limit:
            return RateLimitDecision(allowed=True, count=count, limit=policy.limit, retry_after=0)
        remaining = self._store.ttl(key)
        retry_after = policy.window_seconds if remaining is None else max(1, math.ceil(remaining))
        return RateLimitDecision(allowed=False, count=count, limit=policy.limit, retry_after=retry_after)

    def enforce(self, endpoint: str, identity: str) -> None:
        decision = self.check(endpoint, identity)
        if not decision.allowed:
            raise RateLimitExceededError(
                "Rate limit exceeded. Please wait before making another request.",
                retry_after=decision.retry_after,
            )


__all__ = [
    "DEFAULT_POLICIES",
    "DETECTION_ENDPOINT",
    "SUPPORT_CHAT_ENDPOINT",
    "RateLimitDecision",
    "RateLimitPolicy",
    "RateLimiter",
]
