"""Validation report types for detection result checks."""


from dataclasses import dataclass, field


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str
    severity: str = "error"
    field: str | None = None


@dataclass
class ValidationReport:
    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)

    def messages(self) -> list[str]:
        return [issue.message for issue in self.issues]


__all__ = ["ValidationIssue", "ValidationReport"]
