"""Core engine API.

The core layer is framework-agnostic and safe to import from scripts, tests,
CLI commands, and web frontends.
"""

from typing import Any

_LAZY_EXPORTS: dict[str, tuple[str, str]] = {
    "CoreConfig": ("shelfscan.core.config", "CoreConfig"),
    "DetectionRequest": ("shelfscan.core.orchestrator", "DetectionRequest"),
    "DetectionResponse": ("shelfscan.core.canonical.entities", "DetectionResponse"),
    "DetectionService": ("shelfscan.core.orchestrator", "DetectionService"),
    "Evidence": ("shelfscan.core.canonical.entities", "Evidence"),
    "ExportStructure": ("shelfscan.core.canonical.entities", "ExportStructure"),
    "InMemoryStore": ("shelfscan.core.store", "InMemoryStore"),
    "PlatformDetectionResult": ("shelfscan.core.canonical.entities", "PlatformDetectionResult"),
    "analyze_platform": ("shelfscan.core.detect", "analyze_platform"),
    "capabilities": ("shelfscan.core.api", "capabilities"),
    "classify_header": ("shelfscan.core.detect", "classify_header"),
    "config_from_env": ("shelfscan.core.config", "config_from_env"),
    "detect_platform": ("shelfscan.core.api", "detect_platform"),
    "get_platform": ("shelfscan.core.platforms", "get_platform"),
    "list_platforms": ("shelfscan.core.platforms", "list_platforms"),
    "map_columns": ("shelfscan.core.api", "map_columns"),
    "plan_export": ("shelfscan.core.api", "plan_export"),
    "plan_export_structure": ("shelfscan.core.export", "plan_export_structure"),
    "register_platform": ("shelfscan.core.platforms", "register_platform"),
    "supported_platforms": ("shelfscan.core.api", "supported_platforms"),
}

__all__ = [
    "CoreConfig",
    "DetectionRequest",
    "DetectionResponse",
    "DetectionService",
    "Evidence",
    "ExportStructure",
    "InMemoryStore",
    "PlatformDetectionResult",
    "analyze_platform",
    "capabilities",
    "classify_header",
    "config_from_env",
    "detect_platform",
    "get_platform",
    "list_platforms",
    "map_columns",
    "plan_export",
    "plan_export_structure",
    "register_platform",
    "supported_platforms",
]


def __getattr__(name: str) -> Any:
    target = _LAZY_EXPORTS.get(name)
    if target is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module_name, attribute_name = target
    module = __import__(module_name, fromlist=[attribute_name])
    value = getattr(module, attribute_name)
    globals()[name] = value
    return value
