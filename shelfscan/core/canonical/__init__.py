from .entities import (
    SEMANTIC_FIELDS,
    UNIVERSAL,
    UNKNOWN,
    ColumnMapping,
    DetectionResponse,
    Evidence,
    EvidenceKind,
    ExportStructure,
    PlatformDetectionResult,
    PlatformType,
    ProcessingInfo,
    SemanticField,
)

__all__ = [
    "SEMANTIC_FIELDS",
    "UNIVERSAL",
    "UNKNOWN",
    "ColumnMapping",
    "DetectionResponse",
    "Evidence",
    "EvidenceKind",
    "ExportStructure",
    "PlatformDetectionResult",
    "PlatformType",
    "ProcessingInfo",
    "SemanticField",
]
