import json
from pathlib import Path

import pytest

FRUIT = [
    {"id": 1, "name": "apple", "tags": ["fruit"]},
    {"id": 2, "name": "grape", "tags": ["fruit"]},
]


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fruit():
    return [dict(r) for r in FRUIT]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def records_file(tmp_path: Path) -> str:
    path = tmp_path / "records.json"
    path.write_text(json.dumps(FRUIT), encoding="utf-8")
    return str(path)
