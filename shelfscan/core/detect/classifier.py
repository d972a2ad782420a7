"""Evidence-based platform classification for spreadsheet headers and sample rows.

Every observation becomes an immutable ``Evidence`` item. The classifier only
collects evidence; the platform and the confidence are reductions over the
collected tuple (see ``confidence.py``).
"""

import time
from collections.abc import Iterator, Sequence
from itertools import chain
from typing import Any

from ..canonical.entities import Evidence, PlatformDetectionResult
from ..export.planner import plan_export_structure
from ..platforms import PlatformProfile, detectable_platforms
from .confidence import resolve_platform
from .headers import normalize_header
from .mapping import map_columns, refine_column_mapping

PATTERN_SAMPLE_ROWS = 5
PATTERN_MATCH_THRESHOLD = 0.5
FIELD_MATCH_STRENGTH = 5


def coerce_row(row: Any) -> list[str]:
    if not isinstance(row, (list, tuple)):
        return []
    return ["" if cell is None else str(cell) for cell in row]


def _is_empty_row(row: Sequence[str]) -> bool:
    return all(not cell.strip() for cell in row)


def sample_warnings(header_count: int, rows: Sequence[Sequence[str]]) -> list[str]:
    if not rows:
        return ["No sample data provided - detection based on headers only"]

    warnings: list[str] = []
    inconsistent = sum(1 for row in rows if len(row) != header_count)
    if inconsistent:
        warnings.append(f"{inconsistent} sample rows have inconsistent column count")

    empty = sum(1 for row in rows if _is_empty_row(row))
    if empty == len(rows):
        warnings.append("All sample rows are empty")
    elif empty:
        warnings.append(f"{empty} sample rows are empty")
    return warnings


def _cell(row: Sequence[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def _first_header_index(normalized: Sequence[str], token: str) -> int | None:
    for index, header in enumerate(normalized):
        if token in header:
            return index
    return None


def _header_evidence(
    profile: PlatformProfile,
    headers: Sequence[str],
    normalized: Sequence[str],
) -> Iterator[Evidence]:
    for marker in profile.markers:
        index = next((i for i, header in enumerate(normalized) if marker.matches(header)), None)
        if index is None:
            continue
        yield Evidence(kind=marker.kind, signal=headers[index], target=profile.key, strength=marker.strength)


def _value_evidence(
    profile: PlatformProfile,
    headers: Sequence[str],
    normalized: Sequence[str],
    rows: Sequence[Sequence[str]],
) -> Iterator[Evidence]:
    window = rows[:PATTERN_SAMPLE_ROWS]
    if not window:
        return
    for pattern in profile.value_patterns:
        index = _first_header_index(normalized, pattern.header_token)
        if index is None:
            continue
        matches = 0
        for row in window:
            value = _cell(row, index).strip()
            if value and pattern.matches(value):
                matches += 1
        rate = matches / len(window)
        if rate > PATTERN_MATCH_THRESHOLD:
            yield Evidence(
                kind="pattern_match",
                signal=f"{headers[index]} ({round(rate * 100)}% match)",
                target=profile.key,
                strength=pattern.strength,
            )


def _cell_format_evidence(profile: PlatformProfile, rows: Sequence[Sequence[str]]) -> Iterator[Evidence]:
    for cell_format in profile.cell_formats:
        hits = sum(1 for row in rows for cell in row if cell.strip() and cell_format.matches(cell))
        if hits:
            yield Evidence(
                kind="data_format",
                signal=f"{cell_format.name} ({hits} cells)",
                target=profile.key,
                strength=cell_format.strength,
            )


def _bonus_evidence(profile: PlatformProfile, normalized: list[str]) -> Iterator[Evidence]:
    for bonus in profile.bonuses:
        if bonus.applies(normalized):
            yield Evidence(kind="platform_bonus", signal=bonus.name, target=profile.key, strength=bonus.strength)


def _profile_evidence(
    profile: PlatformProfile,
    headers: Sequence[str],
    normalized: list[str],
    rows: Sequence[Sequence[str]],
) -> Iterator[Evidence]:
    yield from _header_evidence(profile, headers, normalized)
    yield from _value_evidence(profile, headers, normalized, rows)
    yield from _cell_format_evidence(profile, rows)
    yield from _bonus_evidence(profile, normalized)


def _field_evidence(headers: Sequence[str]) -> Iterator[Evidence]:
    for field_name, header in map_columns(headers).items():
        yield Evidence(kind="field_match", signal=header, target=field_name, strength=FIELD_MATCH_STRENGTH)


def collect_evidence(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    profiles: Sequence[PlatformProfile],
) -> tuple[Evidence, ...]:
    normalized = [normalize_header(header) for header in headers]
    platform_evidence = chain.from_iterable(
        _profile_evidence(profile, headers, normalized, rows) for profile in profiles
    )
    return tuple(chain(platform_evidence, _field_evidence(headers)))


def analyze_platform(headers: Sequence[str], sample_data: Sequence[Any] | None = None) -> PlatformDetectionResult:
    """Classify the source platform of a header row plus optional sample rows.

    Never raises for structurally valid input: short, long and empty rows only
    produce warnings.
    """
    started = time.perf_counter()
    header_list = [str(header) for header in headers]
    rows = [coerce_row(row) for row in (sample_data or [])]
    warnings = sample_warnings(len(header_list), rows)

    profiles = detectable_platforms()
    evidence = collect_evidence(header_list, rows, profiles)
    platform, confidence = resolve_platform(evidence, [profile.key for profile in profiles])

    if confidence < 50:
        warnings.append("Low confidence detection - manual verification recommended")
    if confidence < 30:
        warnings.append("Platform could not be reliably detected")

    return PlatformDetectionResult(
        detected_platform=platform,
        confidence=confidence,
        evidence=evidence,
        column_mapping=refine_column_mapping(header_list, platform, evidence),
        export_structure=plan_export_structure(header_list, platform),
        warnings=warnings,
        processing_time=int((time.perf_counter() - started) * 1000),
    )


__all__ = ["analyze_platform", "coerce_row", "collect_evidence", "sample_warnings"]
