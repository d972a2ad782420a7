import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Ensure `import shelfscan` works when running `pytest` without needing PYTHONPATH hacks.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

import shelfscan.core.api as core_api
from shelfscan.server.helpers.detection import reset_detection_service


@pytest.fixture(autouse=True)
def _fresh_detection_services() -> Iterator[None]:
    # Rate-limit counters and cache entries live in the shared services.
    reset_detection_service()
    core_api._default_service = None
    yield
    reset_detection_service()
    if core_api._default_service is not None:
        core_api._default_service.shutdown()
        core_api._default_service = None
