"""Public package entrypoint for the Shelfscan engine.

This package detects the source platform of product spreadsheets and plans
their enhanced export layout, plus optional frontend adapters (CLI and
FastAPI server).
"""

from importlib.metadata import PackageNotFoundError, version
from typing import Any

_LAZY_EXPORTS: dict[str, tuple[str, str]] = {
    "DetectionService": ("shelfscan.core", "DetectionService"),
    "analyze_platform": ("shelfscan.core", "analyze_platform"),
    "app": ("shelfscan.server.main", "app"),
    "create_app": ("shelfscan.server.main", "create_app"),
    "detect_platform": ("shelfscan.core", "detect_platform"),
    "map_columns": ("shelfscan.core", "map_columns"),
    "plan_export": ("shelfscan.core", "plan_export"),
}

try:
    __version__ = version("shelfscan")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "DetectionService",
    "__version__",
    "analyze_platform",
    "app",
    "create_app",
    "detect_platform",
    "map_columns",
    "plan_export",
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
