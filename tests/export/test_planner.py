from shelfscan.core.export import (
    COPYFLOW_COLUMNS,
    estimate_file_size,
    plan_export_structure,
    platform_export_columns,
)


def test_plan_preserves_headers_and_counts_columns() -> None:
    headers = ["Listing ID", "Title", "Tags", "Price"]

    structure = plan_export_structure(headers, "etsy")

    assert structure.preserve_original_columns == headers
    assert structure.add_copyflow_columns == list(COPYFLOW_COLUMNS)
    assert structure.platform_specific_columns == [
        "CopyFlow_Etsy_Artisan_Story",
        "CopyFlow_Etsy_Handmade_Feel",
        "CopyFlow_Etsy_Tags",
    ]
    assert structure.total_columns == 4 + 18 + 3
    assert structure.estimated_file_size == "~1.5 MB per 1,000 rows (+525% columns)"


def test_plan_does_not_alias_the_input_headers() -> None:
    headers = ["Title", "Price"]

    structure = plan_export_structure(headers, "universal")
    headers.append("Extra")

    assert structure.preserve_original_columns == ["Title", "Price"]
    assert structure.platform_specific_columns == []
    assert structure.total_columns == 2 + len(COPYFLOW_COLUMNS)


def test_unknown_platform_has_no_specific_columns() -> None:
    assert platform_export_columns("bigcartel") == []


def test_estimate_file_size_scales_with_rows() -> None:
    assert estimate_file_size(2, 4, row_count=10) == "~2.5 KB per 10 rows (+100% columns)"
    assert estimate_file_size(0, 16, row_count=1) == "~1.0 KB per 1 rows (+0% columns)"


def test_to_dict_uses_wire_names() -> None:
    payload = plan_export_structure(["Title"], "amazon").to_dict()

    assert set(payload) == {
        "preserveOriginalColumns",
        "addCopyFlowColumns",
        "platformSpecificColumns",
        "totalColumns",
        "estimatedFileSize",
    }
    assert payload["totalColumns"] == 1 + 18 + 3
