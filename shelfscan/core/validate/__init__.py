from .report import ValidationIssue, ValidationReport
from .rules import validate_detection_result

__all__ = ["ValidationIssue", "ValidationReport", "validate_detection_result"]
