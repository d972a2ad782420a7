"""Plan the output column layout for an enhanced export."""

from collections.abc import Sequence

from ..canonical.entities import ExportStructure
from ..platforms import get_platform

COPYFLOW_COLUMNS: tuple[str, ...] = (
    "CopyFlow_Product_Title",
    "CopyFlow_Description",
    "CopyFlow_SEO_Title",
    "CopyFlow_Meta_Description",
    "CopyFlow_Call_To_Action",
    "CopyFlow_Bullet_Point_1",
    "CopyFlow_Bullet_Point_2",
    "CopyFlow_Bullet_Point_3",
    "CopyFlow_Key_Features",
    "CopyFlow_Tags",
    "CopyFlow_TikTok_Hook_1",
    "CopyFlow_TikTok_Hook_2",
    "CopyFlow_Instagram_Caption_1",
    "CopyFlow_Instagram_Caption_2",
    "CopyFlow_Emotional_Hook_1",
    "CopyFlow_Trust_Signal_1",
    "CopyFlow_Competitor_Advantage_1",
    "CopyFlow_Price_Anchor",
)

AVERAGE_CELL_BYTES = 64
DEFAULT_ROW_COUNT = 1000

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def platform_export_columns(platform: str) -> list[str]:
    try:
        return list(get_platform(platform).export_columns)
    except KeyError:
        return []


def _human_size(size: float) -> str:
    for unit in _SIZE_UNITS[:-1]:
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} {_SIZE_UNITS[-1]}"


def estimate_file_size(original_columns: int, total_columns: int, *, row_count: int = DEFAULT_ROW_COUNT) -> str:
    rows = max(1, int(row_count))
    size = _human_size(total_columns * AVERAGE_CELL_BYTES * rows)
    added = total_columns - original_columns
    growth = round(added / original_columns * 100) if original_columns else 0
    return f"~{size} per {rows:,} rows (+{growth}% columns)"


def plan_export_structure(
    headers: Sequence[str],
    platform: str,
    *,
    row_count: int = DEFAULT_ROW_COUNT,
) -> ExportStructure:
    """Keep every original column as-is and append the generated ones."""
    preserve_original_columns = list(headers)
    add_copyflow_columns = list(COPYFLOW_COLUMNS)
    platform_specific_columns = platform_export_columns(platform)
    total_columns = (
        len(preserve_original_columns) + len(add_copyflow_columns) + len(platform_specific_columns)
    )
    return ExportStructure(
        preserve_original_columns=preserve_original_columns,
        add_copyflow_columns=add_copyflow_columns,
        platform_specific_columns=platform_specific_columns,
        total_columns=total_columns,
        estimated_file_size=estimate_file_size(
            len(preserve_original_columns),
            total_columns,
            row_count=row_count,
        ),
    )


__all__ = [
    "AVERAGE_CELL_BYTES",
    "COPYFLOW_COLUMNS",
    "DEFAULT_ROW_COUNT",
    "estimate_file_size",
    "plan_export_structure",
    "platform_export_columns",
]
