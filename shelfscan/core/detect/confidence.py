"""Pure reductions from an evidence set to a platform and a confidence."""

from collections.abc import Iterable, Sequence

from ..canonical.entities import UNIVERSAL, Evidence

MIN_DETECTION_SCORE = 30
UNIVERSAL_BASE_CONFIDENCE = 20


def calculate_confidence(platform: str, evidence: Iterable[Evidence]) -> int:
    """Sum the strengths of evidence supporting ``platform``, clamped to [0, 100]."""
    score = sum(item.strength for item in evidence if item.target == platform)
    return max(0, min(100, score))


def rank_platforms(evidence: Sequence[Evidence], platforms: Sequence[str]) -> list[tuple[str, int]]:
    scored = [(platform, calculate_confidence(platform, evidence)) for platform in platforms]
    # sorted() is stable, so equal scores keep the registry order.
    return sorted(scored, key=lambda pair: pair[1], reverse=True)


def resolve_platform(evidence: Sequence[Evidence], platforms: Sequence[str]) -> tuple[str, int]:
    ranking = rank_platforms(evidence, platforms)
    if not ranking:
        return UNIVERSAL, UNIVERSAL_BASE_CONFIDENCE
    leader, score = ranking[0]
    if score >= MIN_DETECTION_SCORE:
        return leader, score
    return UNIVERSAL, max(UNIVERSAL_BASE_CONFIDENCE, score)


__all__ = [
    "MIN_DETECTION_SCORE",
    "UNIVERSAL_BASE_CONFIDENCE",
    "calculate_confidence",
    "rank_platforms",
    "resolve_platform",
]
