"""Classify a single spreadsheet header into a semantic product field."""

import re
from collections.abc import Collection

_WHITESPACE_RE = re.compile(r"\s+")

# Evaluated top to bottom; the first rule whose field is still free wins.
HEADER_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("productName", re.compile(r"product|item|title|name", re.I)),
    ("description", re.compile(r"desc|content|details|body", re.I)),
    ("price", re.compile(r"price|cost|amount", re.I)),
    ("sku", re.compile(r"sku|(?<![a-z])asin(?![a-z])|code|(?<![a-z])id(?![a-z])", re.I)),
    ("category", re.compile(r"categor|type|department", re.I)),
)


def normalize_header(header: str) -> str:
    return _WHITESPACE_RE.sub(" ", str(header or "").strip().lower())


def classify_header(header: str, taken: Collection[str] = ()) -> str | None:
    """Return the semantic field a header most likely holds.

    Fields listed in ``taken`` are skipped so callers can enforce
    first-match-wins across a whole header row.
    """
    text = str(header or "").strip()
    if not text:
        return None
    for field_name, pattern in HEADER_RULES:
        if field_name in taken:
            continue
        if pattern.search(text):
            return field_name
    return None


__all__ = ["HEADER_RULES", "classify_header", "normalize_header"]
