"""Detection result cache keyed by a digest of the request's leading content."""

import hashlib
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from .canonical.entities import DetectionResponse
from .store import KeyValueStore

CACHE_KEY_PREFIX = "detection:"


def _cell_text(cell: Any) -> str:
    return "" if cell is None else str(cell)


def detection_cache_key(
    headers: Sequence[str],
    sample_data: Sequence[Sequence[Any]],
    *,
    sample_rows: int = 3,
    sample_cells: int = 5,
) -> str:
    """Digest of the sorted headers and the leading ``sample_rows`` x ``sample_cells`` window.

    Rows and cells outside the window do not affect the key, so two uploads
    that only differ there share a cache entry.
    """
    headers_key = "|".join(sorted(str(header) for header in headers))
    data_key = "|".join(
        ",".join(_cell_text(cell) for cell in list(row)[:sample_cells])
        for row in list(sample_data)[:sample_rows]
    )
    digest = hashlib.sha256(f"{headers_key}{data_key}".encode("utf-8")).hexdigest()
    return f"{CACHE_KEY_PREFIX}{digest[:32]}"


class DetectionCache:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        ttl_seconds: float,
        sample_rows: int = 3,
        sample_cells: int = 5,
    ) -> None:
        self._store = store
        self._ttl_seconds = ttl_seconds
        self._sample_rows = sample_rows
        self._sample_cells = sample_cells

    def key_for(self, headers: Sequence[str], sample_data: Sequence[Sequence[Any]]) -> str:
        return detection_cache_key(
            headers,
            sample_data,
            sample_rows=self._sample_rows,
            sample_cells=self._sample_cells,
        )

    def get(self, key: str) -> DetectionResponse | None:
        payload = self._store.get(key)
        if not isinstance(payload, dict):
            return None
        response = DetectionResponse.from_dict(payload)
        response.processing_info = replace(response.processing_info, cached=True)
        return response

    def put(self, key: str, response: DetectionResponse) -> None:
        snapshot = response.to_dict()
        snapshot["processingInfo"]["cached"] = False
        self._store.set(key, snapshot, ttl_seconds=self._ttl_seconds)


__all__ = ["CACHE_KEY_PREFIX", "DetectionCache", "detection_cache_key"]
