from __future__ import annotations

import json
from pathlib import Path

import pytest

from jjvote.state import CounterStore


@pytest.fixture
def votes_path(tmp_path: Path) -> Path:
    return tmp_path / "votes.json"


@pytest.fixture
def store(votes_path: Path) -> CounterStore:
    return CounterStore(votes_path)


@pytest.fixture
def write_votes():
    def _write(path: Path, data) -> None:
        path.write_text(json.dumps(data), encoding="utf-8")

    return _write
