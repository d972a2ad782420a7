"""Invariant checks run on every assembled detection result before it is served."""

from __future__ import annotations

from collections.abc import Sequence

from ..canonical.entities import SEMANTIC_FIELDS, UNKNOWN, PlatformDetectionResult
from ..platforms import list_platforms
from .report import ValidationIssue, ValidationReport


def validate_detection_result(result: PlatformDetectionResult, headers: Sequence[str]) -> ValidationReport:
    issues: list[ValidationIssue] = []

    platform = result.detected_platform
    if not platform or platform == UNKNOWN or platform not in list_platforms():
        issues.append(
            ValidationIssue(
                code="invalid_platform",
                message=f"Detected platform is not supported: {platform!r}",
                field="detectedPlatform",
            )
        )

    if not isinstance(result.confidence, int) or not 0 <= result.confidence <= 100:
        issues.append(
            ValidationIssue(
                code="confidence_out_of_range",
                message=f"Confidence must be an integer in [0, 100], got {result.confidence!r}",
                field="confidence",
            )
        )

    structure = result.export_structure
    if structure.preserve_original_columns != list(headers):
        issues.append(
            ValidationIssue(
                code="original_columns_changed",
                message="Export structure must preserve every original column in order.",
                field="exportStructure.preserveOriginalColumns",
            )
        )

    expected_total = (
        len(structure.preserve_original_columns)
        + len(structure.add_copyflow_columns)
        + len(structure.platform_specific_columns)
    )
    if structure.total_columns != expected_total:
        issues.append(
            ValidationIssue(
                code="total_columns_mismatch",
                message=f"totalColumns is {structure.total_columns}, expected {expected_total}",
                field="exportStructure.totalColumns",
            )
        )

    header_set = set(headers)
    mapped_headers = list(result.column_mapping.values())
    if len(mapped_headers) != len(set(mapped_headers)):
        issues.append(
            ValidationIssue(
                code="duplicate_mapping",
                message="A header is mapped to more than one semantic field.",
                field="columnMapping",
            )
        )
    for field_name, header in result.column_mapping.items():
        if field_name not in SEMANTIC_FIELDS:
            issues.append(
                ValidationIssue(
                    code="unknown_field",
                    message=f"Unknown semantic field: {field_name}",
                    field="columnMapping",
                )
            )
        if header not in header_set:
            issues.append(
                ValidationIssue(
                    code="unknown_header",
                    message=f"Mapped header is not in the input: {header!r}",
                    field=f"columnMapping.{field_name}",
                )
            )

    return ValidationReport(valid=not issues, issues=issues)


__all__ = ["validate_detection_result"]
