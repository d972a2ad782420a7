"""User-facing recommendations and optimization lists derived from a detection result."""

from .canonical.entities import PlatformDetectionResult
from .platforms import get_platform

GENERAL_OPTIMIZATIONS: tuple[str, ...] = (
    "SEO title optimization",
    "Meta description enhancement",
    "Product description improvement",
    "Bullet points generation",
    "Keywords optimization",
    "Call-to-action creation",
)

FAST_PATH_RECOMMENDATIONS: tuple[str, ...] = (
    "Fast detection completed - basic column mapping available",
    "Consider providing sample data for more accurate platform detection",
)

LOW_CONFIDENCE_THRESHOLD = 50
HIGH_CONFIDENCE_THRESHOLD = 80


def generate_recommendations(result: PlatformDetectionResult) -> list[str]:
    recommendations: list[str] = []
    mapping = result.column_mapping

    if result.confidence < LOW_CONFIDENCE_THRESHOLD:
        recommendations.append("Low confidence detection - consider manual platform selection")
    if result.confidence >= HIGH_CONFIDENCE_THRESHOLD:
        recommendations.append(
            f"High confidence {result.detected_platform} detection - proceed with platform-specific optimizations"
        )

    if mapping.get("productName"):
        recommendations.append("Product name column detected - ready for title optimization")
    if mapping.get("description"):
        recommendations.append("Description column detected - ready for content enhancement")
    if mapping.get("price"):
        recommendations.append("Price column detected - ready for value proposition optimization")
    if not mapping.get("category"):
        recommendations.append("No category column detected - consider adding product categorization")
    if result.detected_platform == "amazon" and not mapping.get("sku"):
        recommendations.append("Amazon platform detected but no ASIN/SKU column found")

    platform_columns = len(result.export_structure.platform_specific_columns)
    if platform_columns > 0:
        recommendations.append(f"{platform_columns} platform-specific optimizations available")

    return recommendations


def generate_supported_optimizations(platform: str) -> list[str]:
    optimizations = list(GENERAL_OPTIMIZATIONS)
    try:
        profile = get_platform(platform)
    except KeyError:
        return optimizations
    optimizations.extend(profile.optimizations)
    return optimizations


__all__ = [
    "FAST_PATH_RECOMMENDATIONS",
    "GENERAL_OPTIMIZATIONS",
    "generate_recommendations",
    "generate_supported_optimizations",
]
