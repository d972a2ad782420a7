from dataclasses import dataclass, field
from typing import Any, Literal

SemanticField = Literal["productName", "description", "price", "sku", "category"]
PlatformType = Literal["amazon", "shopify", "ebay", "etsy", "woocommerce", "universal", "unknown"]
EvidenceKind = Literal[
    "required_column",
    "optional_column",
    "pattern_match",
    "data_format",
    "platform_bonus",
    "field_match",
]

SEMANTIC_FIELDS: tuple[str, ...] = ("productName", "description", "price", "sku", "category")
UNIVERSAL = "universal"
UNKNOWN = "unknown"

ColumnMapping = dict[str, str]


@dataclass(frozen=True)
class Evidence:
    kind: EvidenceKind
    signal: str
    target: str
    strength: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "signal": self.signal,
            "target": self.target,
            "strength": self.strength,
        }


@dataclass
class ExportStructure:
    preserve_original_columns: list[str] = field(default_factory=list)
    add_copyflow_columns: list[str] = field(default_factory=list)
    platform_specific_columns: list[str] = field(default_factory=list)
    total_columns: int = 0
    estimated_file_size: str = "Unknown"

    def to_dict(self) -> dict[str, Any]:
        return {
            "preserveOriginalColumns": list(self.preserve_original_columns),
            "addCopyFlowColumns": list(self.add_copyflow_columns),
            "platformSpecificColumns": list(self.platform_specific_columns),
            "totalColumns": self.total_columns,
            "estimatedFileSize": self.estimated_file_size,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ExportStructure":
        return cls(
            preserve_original_columns=list(payload.get("preserveOriginalColumns") or []),
            add_copyflow_columns=list(payload.get("addCopyFlowColumns") or []),
            platform_specific_columns=list(payload.get("platformSpecificColumns") or []),
            total_columns=int(payload.get("totalColumns") or 0),
            estimated_file_size=str(payload.get("estimatedFileSize") or "Unknown"),
        )


@dataclass
class PlatformDetectionResult:
    detected_platform: str
    confidence: int
    evidence: tuple[Evidence, ...] = ()
    column_mapping: ColumnMapping = field(default_factory=dict)
    export_structure: ExportStructure = field(default_factory=ExportStructure)
    warnings: list[str] = field(default_factory=list)
    processing_time: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "detectedPlatform": self.detected_platform,
            "confidence": self.confidence,
            "evidence": [item.to_dict() for item in self.evidence],
            "columnMapping": dict(self.column_mapping),
            "exportStructure": self.export_structure.to_dict(),
            "warnings": list(self.warnings),
            "processingTime": self.processing_time,
        }


@dataclass
class ProcessingInfo:
    processing_time: int = 0
    evidence_count: int = 0
    cached: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "processingTime": self.processing_time,
            "evidenceCount": self.evidence_count,
            "cached": self.cached,
        }


@dataclass
class DetectionResponse:
    """API-facing detection outcome, shared by success and failure paths."""

    success: bool
    detected_platform: str
    confidence: int
    column_mapping: ColumnMapping = field(default_factory=dict)
    export_structure: ExportStructure = field(default_factory=ExportStructure)
    recommendations: list[str] = field(default_factory=list)
    supported_optimizations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    processing_info: ProcessingInfo = field(default_factory=ProcessingInfo)
    fast_path: bool = False
    error: str | None = None
    error_code: str | None = None
    retry_after: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "success": self.success,
            "detectedPlatform": self.detected_platform,
            "confidence": self.confidence,
            "columnMapping": dict(self.column_mapping),
            "exportStructure": self.export_structure.to_dict(),
            "recommendations": list(self.recommendations),
            "supportedOptimizations": list(self.supported_optimizations),
            "warnings": list(self.warnings),
            "processingInfo": self.processing_info.to_dict(),
        }
        if self.error is not None:
            data["error"] = self.error
        if self.error_code is not None:
            data["errorCode"] = self.error_code
        return data

    @classmethod
    def from_dict(cls, payload: dict[str, Any], *, fast_path: bool = False) -> "DetectionResponse":
        info = payload.get("processingInfo") if isinstance(payload.get("processingInfo"), dict) else {}
        return cls(
            success=bool(payload.get("success")),
            detected_platform=str(payload.get("detectedPlatform") or UNKNOWN),
            confidence=int(payload.get("confidence") or 0),
            column_mapping=dict(payload.get("columnMapping") or {}),
            export_structure=ExportStructure.from_dict(payload.get("exportStructure") or {}),
            recommendations=list(payload.get("recommendations") or []),
            supported_optimizations=list(payload.get("supportedOptimizations") or []),
            warnings=list(payload.get("warnings") or []),
            processing_info=ProcessingInfo(
                processing_time=int(info.get("processingTime") or 0),
                evidence_count=int(info.get("evidenceCount") or 0),
                cached=bool(info.get("cached")),
            ),
            fast_path=fast_path,
            error=payload.get("error"),
            error_code=payload.get("errorCode"),
        )

    @classmethod
    def failure(
        cls,
        *,
        error: str,
        error_code: str,
        processing_time: int = 0,
        retry_after: int | None = None,
    ) -> "DetectionResponse":
        return cls(
            success=False,
            detected_platform=UNKNOWN,
            confidence=0,
            processing_info=ProcessingInfo(processing_time=processing_time),
            error=error,
            error_code=error_code,
            retry_after=retry_after,
        )
