import threading
from collections.abc import Iterator, Sequence
from typing import Any

import pytest

from shelfscan.core.canonical.entities import PlatformDetectionResult
from shelfscan.core.config import CoreConfig
from shelfscan.core.detect import analyze_platform
from shelfscan.core.errors import (
    DetectionInvariantError,
    DetectionValidationError,
    InvalidSampleDataError,
    RateLimitExceededError,
)
from shelfscan.core.orchestrator import (
    TIMEOUT_WARNING,
    DetectionRequest,
    DetectionService,
    validate_request,
)
from shelfscan.core.recommendations import FAST_PATH_RECOMMENDATIONS
from tests.helpers._detection_builders import SHOPIFY_HEADERS, SHOPIFY_ROWS, build_result


@pytest.fixture
def service() -> Iterator[DetectionService]:
    detection_service = DetectionService(config=CoreConfig())
    yield detection_service
    detection_service.shutdown()


def _request(headers: list[str], sample_data: list[list[Any]] | None = None, **kwargs: Any) -> DetectionRequest:
    return DetectionRequest(headers=headers, sample_data=sample_data or [], origin="10.0.0.1", **kwargs)


def test_fast_path_for_small_header_only_requests(service: DetectionService) -> None:
    response = service.detect(_request(["Product Title", "Desc", "Price", "ASIN"]))

    assert response.success is True
    assert response.fast_path is True
    assert response.detected_platform == "universal"
    assert response.confidence == 60
    assert response.column_mapping == {
        "productName": "Product Title",
        "description": "Desc",
        "price": "Price",
        "sku": "ASIN",
    }
    assert response.recommendations == list(FAST_PATH_RECOMMENDATIONS)
    assert response.processing_info.evidence_count == 0
    assert response.processing_info.cached is False


def test_fast_path_ignores_platform_tokens(service: DetectionService) -> None:
    response = service.detect(_request(["Handle", "Title", "Vendor", "Body (HTML)"]))

    assert response.fast_path is True
    assert response.detected_platform == "universal"


def test_full_analysis_when_sample_data_is_present(service: DetectionService) -> None:
    response = service.detect(_request(SHOPIFY_HEADERS, SHOPIFY_ROWS))

    assert response.fast_path is False
    assert response.detected_platform == "shopify"
    assert response.processing_info.evidence_count > 0
    assert "Shopify SEO handles" in response.supported_optimizations
    structure = response.export_structure
    assert structure.preserve_original_columns == SHOPIFY_HEADERS
    assert structure.total_columns == (
        len(structure.preserve_original_columns)
        + len(structure.add_copyflow_columns)
        + len(structure.platform_specific_columns)
    )


def test_full_analysis_when_more_than_ten_headers(service: DetectionService) -> None:
    headers = [f"Column {index}" for index in range(11)]

    response = service.detect(_request(headers))

    assert response.fast_path is False
    assert response.detected_platform == "universal"
    assert response.confidence == 20


def test_second_identical_request_is_served_from_cache(service: DetectionService) -> None:
    first = service.detect(_request(SHOPIFY_HEADERS, SHOPIFY_ROWS))
    second = service.detect(_request(SHOPIFY_HEADERS, SHOPIFY_ROWS))

    assert first.processing_info.cached is False
    assert second.processing_info.cached is True
    for field_name in ("detected_platform", "confidence", "column_mapping", "export_structure"):
        assert getattr(second, field_name) == getattr(first, field_name)


def test_reordered_headers_keep_their_own_order(service: DetectionService) -> None:
    service.detect(_request(["Price", "Title"]))
    reordered = service.detect(_request(["Title", "Price"]))
    repeated = service.detect(_request(["Title", "Price"]))

    assert reordered.processing_info.cached is False
    assert reordered.export_structure.preserve_original_columns == ["Title", "Price"]
    assert repeated.processing_info.cached is True
    assert repeated.export_structure.preserve_original_columns == ["Title", "Price"]


def test_timeout_falls_back_to_universal() -> None:
    release = threading.Event()

    def slow_analyzer(headers: Sequence[str], sample_data: Sequence[Any]) -> PlatformDetectionResult:
        release.wait(5)
        return analyze_platform(headers, sample_data)

    service = DetectionService(config=CoreConfig(detection_timeout_seconds=0.05), analyzer=slow_analyzer)
    try:
        response = service.detect(_request(SHOPIFY_HEADERS, SHOPIFY_ROWS))
    finally:
        release.set()
        service.shutdown()

    assert response.success is True
    assert response.detected_platform == "universal"
    assert response.confidence == 30
    assert TIMEOUT_WARNING in response.warnings
    assert response.column_mapping["productName"] == "Title"
    assert response.export_structure.platform_specific_columns == []


def test_invariant_violation_becomes_detection_error() -> None:
    def broken_analyzer(headers: Sequence[str], sample_data: Sequence[Any]) -> PlatformDetectionResult:
        result = build_result(list(headers))
        result.export_structure.total_columns += 5
        return result

    service = DetectionService(config=CoreConfig(), analyzer=broken_analyzer)
    try:
        with pytest.raises(DetectionInvariantError) as exc_info:
            service.detect(_request(SHOPIFY_HEADERS, SHOPIFY_ROWS))
        response = service.handle(_request(SHOPIFY_HEADERS, SHOPIFY_ROWS))
    finally:
        service.shutdown()

    assert exc_info.value.issues
    assert response.success is False
    assert response.error_code == "DETECTION_ERROR"
    assert response.detected_platform == "unknown"


def test_unexpected_errors_are_not_leaked(caplog: pytest.LogCaptureFixture) -> None:
    def exploding_analyzer(headers: Sequence[str], sample_data: Sequence[Any]) -> PlatformDetectionResult:
        raise RuntimeError("database password is hunter2")

    service = DetectionService(config=CoreConfig(), analyzer=exploding_analyzer)
    try:
        with caplog.at_level("ERROR", logger="uvicorn.error"):
            response = service.handle(_request(SHOPIFY_HEADERS, SHOPIFY_ROWS))
    finally:
        service.shutdown()

    assert response.success is False
    assert response.error_code == "INTERNAL_ERROR"
    assert response.error == "Internal server error"
    assert "hunter2" not in str(response.to_dict())
    assert "Unexpected platform detection failure" in caplog.text


@pytest.mark.parametrize(
    "request_kwargs",
    [
        {"headers": []},
        {"headers": [f"h{index}" for index in range(101)]},
        {"headers": ["Title", "  "]},
        {"headers": ["Title"], "sample_data": [["x"]] * 51},
        {"headers": ["Title"], "language": "xx"},
    ],
)
def test_invalid_requests_are_rejected(request_kwargs: dict[str, Any]) -> None:
    with pytest.raises(DetectionValidationError):
        validate_request(DetectionRequest(**request_kwargs))


def test_all_rows_with_wrong_arity_is_invalid_data(service: DetectionService) -> None:
    with pytest.raises(InvalidSampleDataError):
        service.detect(_request(["Title", "Price", "SKU"], [["a"], ["b", "c"]]))

    response = service.detect(_request(["Title", "Price", "SKU"], [["a"], ["b", "c", "d"]]))
    assert "1 sample rows have inconsistent column count" in response.warnings


def test_sixty_first_request_is_rate_limited(service: DetectionService) -> None:
    for _ in range(60):
        assert service.handle(_request(["Title", "Price"], user_id="user-42")).success is True

    response = service.handle(_request(["Title", "Price"], user_id="user-42"))

    assert response.success is False
    assert response.error_code == "RATE_LIMIT"
    assert response.retry_after is not None and response.retry_after > 0
    assert service.handle(_request(["Title", "Price"], user_id="user-43")).success is True

    with pytest.raises(RateLimitExceededError):
        service.detect(_request(["Title", "Price"], user_id="user-42"))


def test_identity_prefers_user_id() -> None:
    assert DetectionRequest(headers=["a"], user_id="u1", origin="1.2.3.4").identity == "u1"
    assert DetectionRequest(headers=["a"], origin="1.2.3.4").identity == "1.2.3.4"
    assert DetectionRequest(headers=["a"]).identity == "unknown"


def test_rejected_requests_do_not_touch_the_cache(service: DetectionService) -> None:
    service.handle(_request(["Title"], language="xx"))

    assert len(service.store) == 0
