from typing import Any

from babel.numbers import format_percent

from ...config import get_settings

_PREVIEW_COLUMN_LIMITS = {
    "medium": 10,
    "high": 30,
}
_SUPPORTED_VERBOSITIES = {"low", "medium", "high", "extrahigh"}


def _normalize_verbosity(verbosity: str) -> str:
    normalized = str(verbosity or "").strip().lower()
    if normalized in _SUPPORTED_VERBOSITIES:
        return normalized
    return "medium"


def _format_confidence(value: Any) -> str:
    if not isinstance(value, (int, float)):
        return ""
    return format_percent(float(value) / 100, locale="en_US")


def _preview_columns(columns: Any, *, limit: int) -> list[str]:
    names = [str(column) for column in columns] if isinstance(columns, list) else []
    if len(names) <= limit:
        return names
    return [*names[:limit], f"... [+{len(names) - limit} more]"]


def _export_summary(export_structure: dict[str, Any], *, limit: int) -> dict[str, Any]:
    return {
        "preserveOriginalColumns": _preview_columns(
            export_structure.get("preserveOriginalColumns"),
            limit=limit,
        ),
        "copyFlowColumns": len(export_structure.get("addCopyFlowColumns") or []),
        "platformSpecificColumns": list(export_structure.get("platformSpecificColumns") or []),
        "totalColumns": export_structure.get("totalColumns"),
        "estimatedFileSize": export_structure.get("estimatedFileSize"),
    }


def detection_result_to_loggable(
    payload: dict[str, Any],
    *,
    verbosity: str | None = None,
    debug_enabled: bool | None = None,
) -> dict[str, Any] | None:
    settings = get_settings()
    if debug_enabled is None:
        debug_enabled = settings.debug

    if not debug_enabled:
        return None

    resolved_verbosity = verbosity if verbosity is not None else settings.log_verbosity
    level = _normalize_verbosity(resolved_verbosity)
    if level == "extrahigh":
        return dict(payload)

    info = payload.get("processingInfo") if isinstance(payload.get("processingInfo"), dict) else {}
    export_structure = payload.get("exportStructure") if isinstance(payload.get("exportStructure"), dict) else {}

    summary: dict[str, Any] = {
        "success": payload.get("success"),
        "platform": payload.get("detectedPlatform"),
        "confidence": _format_confidence(payload.get("confidence")),
        "cached": info.get("cached"),
        "processing_time_ms": info.get("processingTime"),
        "evidence_count": info.get("evidenceCount"),
    }
    if payload.get("errorCode"):
        summary["error_code"] = payload.get("errorCode")
        summary["error"] = payload.get("error")

    if level == "low":
        return summary

    summary["column_mapping"] = dict(payload.get("columnMapping") or {})
    summary["warnings"] = list(payload.get("warnings") or [])
    summary["export"] = _export_summary(export_structure, limit=_PREVIEW_COLUMN_LIMITS[level])

    if level == "high":
        summary["recommendations"] = list(payload.get("recommendations") or [])
        summary["supported_optimizations"] = list(payload.get("supportedOptimizations") or [])

    return summary
