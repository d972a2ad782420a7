"""Request-level detection pipeline: validation, rate limiting, cache, path selection.

``DetectionService.detect`` raises typed ``DetectionError``s; ``handle`` is the
boundary that turns every failure into a well-formed ``DetectionResponse``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Executor, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from typing import Any

from .cache import DetectionCache
from .canonical.entities import (
    UNIVERSAL,
    DetectionResponse,
    PlatformDetectionResult,
    ProcessingInfo,
)
from .config import CoreConfig, config_from_env
from .detect.classifier import analyze_platform, coerce_row, sample_warnings
from .detect.mapping import map_columns
from .errors import (
    INTERNAL_ERROR_CODE,
    INTERNAL_ERROR_MESSAGE,
    DetectionError,
    DetectionInvariantError,
    DetectionTimeout,
    DetectionValidationError,
    InvalidSampleDataError,
    RateLimitExceededError,
)
from .export.planner import plan_export_structure
from .ratelimit import DETECTION_ENDPOINT, RateLimiter
from .recommendations import (
    FAST_PATH_RECOMMENDATIONS,
    generate_recommendations,
    generate_supported_optimizations,
)
from .store import InMemoryStore, KeyValueStore
from .validate import validate_detection_result

logger = logging.getLogger("uvicorn.error")

SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "uk", "de", "es", "fr", "it", "pl", "pt", "zh", "ja", "ar")
MAX_HEADERS = 100
MAX_SAMPLE_ROWS = 50
TIMEOUT_WARNING = "Detection timed out, using fallback detection"

Analyzer = Callable[[Sequence[str], Sequence[Any]], PlatformDetectionResult]


@dataclass
class DetectionRequest:
    headers: list[str]
    sample_data: list[list[Any]] = field(default_factory=list)
    language: str = "en"
    user_id: str | None = None
    origin: str | None = None

    @property
    def identity(self) -> str:
        user_id = str(self.user_id or "").strip()
        if user_id:
            return user_id
        return str(self.origin or "").strip() or "unknown"


def validate_request(request: DetectionRequest) -> None:
    headers = request.headers
    if not isinstance(headers, (list, tuple)) or not headers:
        raise DetectionValidationError("At least one header is required")
    if len(headers) > MAX_HEADERS:
        raise DetectionValidationError(f"Too many headers (maximum {MAX_HEADERS})")
    for index, header in enumerate(headers):
        if not isinstance(header, str) or not header.strip():
            raise DetectionValidationError(f"Header at position {index} must be a non-empty string")

    sample_data = request.sample_data
    if sample_data is None:
        sample_data = []
    if not isinstance(sample_data, (list, tuple)):
        raise DetectionValidationError("sampleData must be a list of rows")
    if len(sample_data) > MAX_SAMPLE_ROWS:
        raise DetectionValidationError(f"Too many sample rows (maximum {MAX_SAMPLE_ROWS})")
    for index, row in enumerate(sample_data):
        if not isinstance(row, (list, tuple)):
            raise DetectionValidationError(f"Sample row {index} must be a list of cells")

    if request.language not in SUPPORTED_LANGUAGES:
        raise DetectionValidationError(
            f"Unsupported language: {request.language!r}. Supported: {', '.join(SUPPORTED_LANGUAGES)}"
        )


def check_sample_arity(headers: Sequence[str], sample_data: Sequence[Sequence[Any]]) -> None:
    if not sample_data:
        return
    expected = len(headers)
    if all(len(row) != expected for row in sample_data):
        raise InvalidSampleDataError(
            f"Sample data does not match headers: every row should have {expected} cells"
        )


def fast_path_result(headers: Sequence[str], *, confidence: int) -> PlatformDetectionResult:
    header_list = list(headers)
    return PlatformDetectionResult(
        detected_platform=UNIVERSAL,
        confidence=confidence,
        evidence=(),
        column_mapping=map_columns(header_list),
        export_structure=plan_export_structure(header_list, UNIVERSAL),
        warnings=sample_warnings(len(header_list), []),
    )


def fallback_result(headers: Sequence[str], *, confidence: int) -> PlatformDetectionResult:
    header_list = list(headers)
    return PlatformDetectionResult(
        detected_platform=UNIVERSAL,
        confidence=confidence,
        evidence=(),
        column_mapping=map_columns(header_list),
        export_structure=plan_export_structure(header_list, UNIVERSAL),
        warnings=[TIMEOUT_WARNING],
    )


class DetectionService:
    """Shared detection entry point used by the HTTP API and the CLI."""

    def __init__(
        self,
        *,
        config: CoreConfig | None = None,
        store: KeyValueStore | None = None,
        rate_limiter: RateLimiter | None = None,
        analyzer: Analyzer = analyze_platform,
        executor: Executor | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.config = config or config_from_env()
        self.store = store or InMemoryStore()
        self.rate_limiter = rate_limiter or RateLimiter(self.store)
        self.cache = DetectionCache(
            self.store,
            ttl_seconds=self.config.cache_ttl_seconds,
            sample_rows=self.config.cache_sample_rows,
            sample_cells=self.config.cache_sample_cells,
        )
        self._analyzer = analyzer
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max(1, self.config.max_workers),
            thread_name_prefix="detection",
        )
        self._clock = clock

    def is_fast_path(self, headers: Sequence[str], sample_data: Sequence[Any]) -> bool:
        return len(headers) <= self.config.fast_path_max_headers and not sample_data

    def analyze_with_timeout(
        self,
        headers: Sequence[str],
        sample_data: Sequence[Sequence[Any]],
    ) -> PlatformDetectionResult:
        future = self._executor.submit(self._analyzer, list(headers), list(sample_data))
        try:
            return future.result(timeout=self.config.detection_timeout_seconds)
        except FutureTimeoutError as exc:
            future.cancel()
            raise DetectionTimeout(
                f"Detection exceeded {self.config.detection_timeout_seconds:g}s"
            ) from exc

    def _full_analysis(self, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> PlatformDetectionResult:
        try:
            return self.analyze_with_timeout(headers, rows)
        except DetectionTimeout as exc:
            logger.warning("Platform detection timed out for %d headers: %s", len(headers), exc)
            return fallback_result(headers, confidence=self.config.fallback_confidence)

    def _check_invariants(self, result: PlatformDetectionResult, headers: Sequence[str]) -> None:
        report = validate_detection_result(result, headers)
        if report.valid:
            return
        messages = report.messages()
        logger.error("Detection result failed validation: %s", "; ".join(messages))
        raise DetectionInvariantError("Detection result failed validation", issues=messages)

    def detect(self, request: DetectionRequest) -> DetectionResponse:
        started = self._clock()
        validate_request(request)
        self.rate_limiter.enforce(DETECTION_ENDPOINT, request.identity)

        rows = [coerce_row(row) for row in (request.sample_data or [])]
        check_sample_arity(request.headers, rows)

        cache_key = self.cache.key_for(request.headers, rows)
        cached = self.cache.get(cache_key)
        # The key sorts headers; a reordered header row must not reuse another order's layout.
        if cached is not None and cached.export_structure.preserve_original_columns == list(request.headers):
            cached.processing_info.processing_time = self._elapsed(started)
            return cached

        fast_path = self.is_fast_path(request.headers, rows)
        if fast_path:
            result = fast_path_result(request.headers, confidence=self.config.fast_path_confidence)
            recommendations = list(FAST_PATH_RECOMMENDATIONS)
        else:
            result = self._full_analysis(request.headers, rows)
            recommendations = generate_recommendations(result)

        self._check_invariants(result, request.headers)

        processing_time = self._elapsed(started)
        result.processing_time = processing_time
        response = DetectionResponse(
            success=True,
            detected_platform=result.detected_platform,
            confidence=result.confidence,
            column_mapping=dict(result.column_mapping),
            export_structure=result.export_structure,
            recommendations=recommendations,
            supported_optimizations=generate_supported_optimizations(result.detected_platform),
            warnings=list(result.warnings),
            processing_info=ProcessingInfo(
                processing_time=processing_time,
                evidence_count=len(result.evidence),
                cached=False,
            ),
            fast_path=fast_path,
        )
        self.cache.put(cache_key, response)
        return response

    def handle(self, request: DetectionRequest) -> DetectionResponse:
        started = self._clock()
        try:
            return self.detect(request)
        except RateLimitExceededError as exc:
            return DetectionResponse.failure(
                error=exc.message,
                error_code=exc.error_code,
                processing_time=self._elapsed(started),
                retry_after=exc.retry_after,
            )
        except DetectionError as exc:
            return DetectionResponse.failure(
                error=exc.message,
                error_code=exc.error_code,
                processing_time=self._elapsed(started),
            )
        except Exception:
            logger.exception("Unexpected platform detection failure")
            return DetectionResponse.failure(
                error=INTERNAL_ERROR_MESSAGE,
                error_code=INTERNAL_ERROR_CODE,
                processing_time=self._elapsed(started),
            )

    def _elapsed(self, started: float) -> int:
        return max(0, int((self._clock() - started) * 1000))

    def shutdown(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)


__all__ = [
    "MAX_HEADERS",
    "MAX_SAMPLE_ROWS",
    "SUPPORTED_LANGUAGES",
    "TIMEOUT_WARNING",
    "DetectionRequest",
    "DetectionService",
    "check_sample_arity",
    "fallback_result",
    "fast_path_result",
    "validate_request",
]
