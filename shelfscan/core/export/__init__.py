from .planner import (
    COPYFLOW_COLUMNS,
    estimate_file_size,
    plan_export_structure,
    platform_export_columns,
)

__all__ = [
    "COPYFLOW_COLUMNS",
    "estimate_file_size",
    "plan_export_structure",
    "platform_export_columns",
]
