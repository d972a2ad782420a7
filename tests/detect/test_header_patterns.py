import pytest

from shelfscan.core.detect import classify_header, map_columns
from shelfscan.core.detect.headers import normalize_header


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Product Title", "productName"),
        ("item_name", "productName"),
        ("Long Description", "description"),
        ("Body Content", "description"),
        ("Unit Cost", "price"),
        ("Total Amount", "price"),
        ("Seller SKU", "sku"),
        ("ASIN", "sku"),
        ("amazon_asin", "sku"),
        ("Increasing Qty", None),
        ("Barcode", "sku"),
        ("Product ID", "productName"),
        ("Department", "category"),
        ("Item Type", "productName"),
        ("Notes", None),
        ("", None),
        ("   ", None),
    ],
)
def test_classify_header_first_matching_rule_wins(header: str, expected: str | None) -> None:
    assert classify_header(header) == expected


def test_classify_header_skips_taken_fields() -> None:
    assert classify_header("Item Description", taken={"productName"}) == "description"
    assert classify_header("Product ID", taken={"productName"}) == "sku"
    assert classify_header("Item Type", taken={"productName"}) == "category"


def test_standalone_id_matches_but_embedded_id_does_not() -> None:
    assert classify_header("ID") == "sku"
    assert classify_header("listing id") == "sku"
    assert classify_header("Valid From") is None


def test_normalize_header_collapses_case_and_whitespace() -> None:
    assert normalize_header("  Variant   Price ") == "variant price"


def test_map_columns_desc_scenario() -> None:
    mapping = map_columns(["Product Title", "Desc", "Price", "ASIN"])

    assert mapping == {
        "productName": "Product Title",
        "description": "Desc",
        "price": "Price",
        "sku": "ASIN",
    }


def test_map_columns_assigns_each_field_once_in_header_order() -> None:
    mapping = map_columns(["Title", "Name", "Sale Price", "Regular Price", "Category"])

    assert mapping["productName"] == "Title"
    assert mapping["price"] == "Sale Price"
    assert mapping["category"] == "Category"
    assert "Name" not in mapping.values()


def test_map_columns_tolerates_duplicate_headers() -> None:
    mapping = map_columns(["Title", "Title", "Price"])

    assert mapping == {"productName": "Title", "price": "Price"}
    assert len(set(mapping.values())) == len(mapping)


def test_map_columns_prefers_given_headers() -> None:
    mapping = map_columns(
        ["Title", "SEO Title", "Body (HTML)"],
        preferred={"productName": "SEO Title", "description": "Missing"},
    )

    assert mapping["productName"] == "SEO Title"
    assert mapping["description"] == "Body (HTML)"
