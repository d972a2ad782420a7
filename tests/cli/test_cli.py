import json
from pathlib import Path

import pytest

from shelfscan.cli.main import main, read_csv_sample


def _write_csv(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "products.csv"
    path.write_text(text, encoding="utf-8")
    return path


SHOPIFY_CSV = (
    "Handle,Title,Vendor,Variant Price\n"
    "red-shirt,Red Shirt,Acme,19.99\n"
    "blue-mug,Blue Mug,Acme,9.50\n"
)


def test_read_csv_sample_keeps_strings(tmp_path: Path) -> None:
    path = _write_csv(tmp_path, "SKU,Price,Notes\n00123,9.50,\n")

    headers, rows = read_csv_sample(path, rows=5)

    assert headers == ["SKU", "Price", "Notes"]
    assert rows == [["00123", "9.50", ""]]


def test_detect_command_prints_detection(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write_csv(tmp_path, SHOPIFY_CSV)

    assert main(["detect", str(path)]) == 0

    body = json.loads(capsys.readouterr().out)
    assert body["success"] is True
    assert body["detectedPlatform"] == "shopify"
    assert body["columnMapping"]["productName"] == "Title"
    assert body["columnMapping"]["price"] == "Variant Price"


def test_detect_without_rows_uses_fast_path(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write_csv(tmp_path, SHOPIFY_CSV)

    assert main(["detect", str(path), "--rows", "0"]) == 0

    body = json.loads(capsys.readouterr().out)
    assert body["detectedPlatform"] == "universal"
    assert body["confidence"] == 60


def test_plan_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write_csv(tmp_path, SHOPIFY_CSV)

    assert main(["plan", str(path), "--platform", "etsy"]) == 0

    body = json.loads(capsys.readouterr().out)
    assert body["preserveOriginalColumns"] == ["Handle", "Title", "Vendor", "Variant Price"]
    assert body["totalColumns"] == 4 + 18 + 3


def test_platforms_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["platforms"]) == 0

    body = json.loads(capsys.readouterr().out)
    assert [item["key"] for item in body] == ["amazon", "shopify", "ebay", "etsy", "woocommerce", "universal"]


def test_errors_exit_with_status_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write_csv(tmp_path, SHOPIFY_CSV)

    with pytest.raises(SystemExit) as exc_info:
        main(["plan", str(path), "--platform", "bigcartel"])

    assert exc_info.value.code == 2
    assert "error:" in capsys.readouterr().err


def test_read_csv_sample_keeps_duplicate_and_blank_headers(tmp_path: Path) -> None:
    path = _write_csv(tmp_path, "Title,Price,Price,\nMug,5,6,x\n")

    headers, rows = read_csv_sample(path, rows=5)

    assert headers == ["Title", "Price", "Price", ""]
    assert rows == [["Mug", "5", "6", "x"]]


def test_detect_preserves_duplicated_headers(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write_csv(tmp_path, "Title,Price,Price\nMug,5,6\nCup,3,4\n")

    assert main(["detect", str(path)]) == 0

    body = json.loads(capsys.readouterr().out)
    assert body["success"] is True
    assert body["exportStructure"]["preserveOriginalColumns"] == ["Title", "Price", "Price"]
    assert body["columnMapping"] == {"productName": "Title", "price": "Price"}


def test_detect_rejects_blank_header(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write_csv(tmp_path, "Title,Price,\nMug,5,x\n")

    with pytest.raises(SystemExit) as exc_info:
        main(["detect", str(path)])

    assert exc_info.value.code == 2
    assert "Header at position 2 must be a non-empty string" in capsys.readouterr().err
