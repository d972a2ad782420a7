"""Stable public API facade for the Shelfscan core engine."""


from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .canonical.entities import ColumnMapping, DetectionResponse, ExportStructure
from .detect import map_columns as _map_columns
from .export import plan_export_structure
from .orchestrator import SUPPORTED_LANGUAGES, DetectionRequest, DetectionService
from .platforms import get_platform, list_platforms

CAPABILITIES: tuple[str, ...] = (
    "confidence_scoring",
    "column_mapping",
    "export_planning",
    "multi_language",
    "caching",
)


@dataclass(frozen=True)
class PlatformInfo:
    key: str
    label: str
    export_columns: list[str] = field(default_factory=list)
    optimizations: list[str] = field(default_factory=list)


_default_service: DetectionService | None = None


def _service() -> DetectionService:
    global _default_service
    if _default_service is None:
        _default_service = DetectionService()
    return _default_service


def detect_platform(
    headers: Sequence[str],
    sample_data: Sequence[Sequence[Any]] | None = None,
    *,
    language: str = "en",
    user_id: str | None = None,
    service: DetectionService | None = None,
) -> DetectionResponse:
    """Run the full detection pipeline; raises ``DetectionError`` on rejection."""
    request = DetectionRequest(
        headers=list(headers),
        sample_data=[list(row) for row in (sample_data or [])],
        language=language,
        user_id=user_id,
        origin="local",
    )
    return (service or _service()).detect(request)


def map_columns(headers: Sequence[str]) -> ColumnMapping:
    return _map_columns(list(headers))


def plan_export(headers: Sequence[str], platform: str, *, row_count: int = 1000) -> ExportStructure:
    get_platform(platform)
    return plan_export_structure(list(headers), platform.strip().lower(), row_count=row_count)


def supported_platforms() -> list[PlatformInfo]:
    platforms: list[PlatformInfo] = []
    for key in list_platforms():
        profile = get_platform(key)
        platforms.append(
            PlatformInfo(
                key=profile.key,
                label=profile.label,
                export_columns=list(profile.export_columns),
                optimizations=list(profile.optimizations),
            )
        )
    return platforms


def capabilities() -> dict[str, Any]:
    return {
        "capabilities": list(CAPABILITIES),
        "languages": list(SUPPORTED_LANGUAGES),
        "platforms": list_platforms(),
    }


__all__ = [
    "CAPABILITIES",
    "PlatformInfo",
    "capabilities",
    "detect_platform",
    "map_columns",
    "plan_export",
    "supported_platforms",
]
