"""Typed failures raised by the detection engine.

Each error carries the wire ``error_code`` and HTTP-equivalent status so the
adapters can render the failure envelope without inspecting messages.
"""


class DetectionError(Exception):
    error_code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DetectionValidationError(DetectionError):
    error_code = "VALIDATION_ERROR"
    status_code = 400


class InvalidSampleDataError(DetectionError):
    error_code = "INVALID_DATA"
    status_code = 400


class RateLimitExceededError(DetectionError):
    error_code = "RATE_LIMIT"
    status_code = 429

    def __init__(self, message: str, *, retry_after: int) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class DetectionTimeout(DetectionError):
    """Raised internally when the full analysis misses its deadline.

    Never reaches callers: the orchestrator swaps in the fallback result.
    """

    error_code = "DETECTION_TIMEOUT"
    status_code = 200


class DetectionInvariantError(DetectionError):
    error_code = "DETECTION_ERROR"
    status_code = 500

    def __init__(self, message: str, *, issues: list[str] | None = None) -> None:
        super().__init__(message)
        self.issues = list(issues or [])


INTERNAL_ERROR_CODE = "INTERNAL_ERROR"
INTERNAL_ERROR_MESSAGE = "Internal server error"

STATUS_BY_ERROR_CODE: dict[str, int] = {
    DetectionValidationError.error_code: DetectionValidationError.status_code,
    InvalidSampleDataError.error_code: InvalidSampleDataError.status_code,
    RateLimitExceededError.error_code: RateLimitExceededError.status_code,
    DetectionInvariantError.error_code: DetectionInvariantError.status_code,
    INTERNAL_ERROR_CODE: 500,
}


__all__ = [
    "INTERNAL_ERROR_CODE",
    "INTERNAL_ERROR_MESSAGE",
    "STATUS_BY_ERROR_CODE",
    "DetectionError",
    "DetectionInvariantError",
    "DetectionTimeout",
    "DetectionValidationError",
    "InvalidSampleDataError",
    "RateLimitExceededError",
]
