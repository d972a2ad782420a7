from shelfscan.core.recommendations import (
    GENERAL_OPTIMIZATIONS,
    generate_recommendations,
    generate_supported_optimizations,
)
from tests.helpers._detection_builders import build_result


def test_high_confidence_amazon_without_sku() -> None:
    headers = ["Product Title", "Price", "Bullet Point 1"]
    result = build_result(
        headers,
        detected_platform="amazon",
        confidence=85,
        column_mapping={"productName": "Product Title", "price": "Price"},
    )

    recommendations = generate_recommendations(result)

    assert recommendations == [
        "High confidence amazon detection - proceed with platform-specific optimizations",
        "Product name column detected - ready for title optimization",
        "Price column detected - ready for value proposition optimization",
        "No category column detected - consider adding product categorization",
        "Amazon platform detected but no ASIN/SKU column found",
        "3 platform-specific optimizations available",
    ]


def test_low_confidence_suggests_manual_selection() -> None:
    headers = ["Title", "Details", "Type"]
    result = build_result(
        headers,
        confidence=20,
        column_mapping={"productName": "Title", "description": "Details", "category": "Type"},
    )

    recommendations = generate_recommendations(result)

    assert recommendations[0] == "Low confidence detection - consider manual platform selection"
    assert "Description column detected - ready for content enhancement" in recommendations
    assert not any("category" in item for item in recommendations)
    assert not any("platform-specific optimizations available" in item for item in recommendations)


def test_mid_confidence_has_no_confidence_note() -> None:
    result = build_result(["Title"], detected_platform="etsy", confidence=60)

    recommendations = generate_recommendations(result)

    assert not any("confidence" in item for item in recommendations)


def test_supported_optimizations_extend_the_general_list() -> None:
    etsy = generate_supported_optimizations("etsy")

    assert etsy[: len(GENERAL_OPTIMIZATIONS)] == list(GENERAL_OPTIMIZATIONS)
    assert etsy[len(GENERAL_OPTIMIZATIONS) :] == [
        "Etsy artisan storytelling",
        "Handmade appeal content",
        "Etsy tags optimization",
        "Creative product descriptions",
    ]
    assert generate_supported_optimizations("universal") == list(GENERAL_OPTIMIZATIONS)
    assert generate_supported_optimizations("unknown") == list(GENERAL_OPTIMIZATIONS)
