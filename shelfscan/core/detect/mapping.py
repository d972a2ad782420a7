"""Turn header matches into a ColumnMapping with one header per field."""

from collections.abc import Iterable, Mapping, Sequence

from ..canonical.entities import SEMANTIC_FIELDS, UNIVERSAL, ColumnMapping, Evidence
from ..platforms import get_platform
from .headers import classify_header, normalize_header


def map_columns(headers: Sequence[str], preferred: Mapping[str, str] | None = None) -> ColumnMapping:
    """Map semantic fields to headers.

    ``preferred`` pairs are assigned first when their header exists in the
    input; the remaining fields are filled by walking ``headers`` in order.
    A header is never assigned to more than one field.
    """
    available = [str(header) for header in headers]
    mapping: dict[str, str] = {}
    claimed: set[str] = set()

    for field_name in SEMANTIC_FIELDS:
        header = (preferred or {}).get(field_name)
        if header is None or header in claimed or header not in available:
            continue
        mapping[field_name] = header
        claimed.add(header)

    for header in available:
        if header in claimed:
            continue
        field_name = classify_header(header, taken=mapping.keys())
        if field_name is None:
            continue
        mapping[field_name] = header
        claimed.add(header)

    return {field_name: mapping[field_name] for field_name in SEMANTIC_FIELDS if field_name in mapping}


def _preferred_headers(headers: Sequence[str], platform: str) -> dict[str, str]:
    by_normalized: dict[str, str] = {}
    for header in headers:
        by_normalized.setdefault(normalize_header(header), str(header))

    preferred: dict[str, str] = {}
    for field_name, hints in get_platform(platform).field_hints.items():
        for hint in hints:
            header = by_normalized.get(hint)
            if header is not None and header not in preferred.values():
                preferred[field_name] = header
                break
    return preferred


def refine_column_mapping(
    headers: Sequence[str],
    platform: str,
    evidence: Iterable[Evidence],
) -> ColumnMapping:
    """Prefer the platform's own column names once evidence backs the platform."""
    if platform == UNIVERSAL or not any(item.target == platform for item in evidence):
        return map_columns(headers)
    return map_columns(headers, preferred=_preferred_headers(headers, platform))


__all__ = ["map_columns", "refine_column_mapping"]
