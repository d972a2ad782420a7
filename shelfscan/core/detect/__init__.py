from .classifier import analyze_platform, collect_evidence
from .confidence import calculate_confidence, resolve_platform
from .headers import HEADER_RULES, classify_header
from .mapping import map_columns, refine_column_mapping

__all__ = [
    "HEADER_RULES",
    "analyze_platform",
    "calculate_confidence",
    "classify_header",
    "collect_evidence",
    "map_columns",
    "refine_column_mapping",
    "resolve_platform",
]
