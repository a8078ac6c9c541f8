from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from jjvote.main import create_app
from jjvote.state import CounterStore


@pytest.fixture
def client(store: CounterStore):
    with TestClient(create_app(store)) as c:
        yield c


def test_startup_creates_votes_file(client: TestClient, votes_path: Path) -> None:
    assert json.loads(votes_path.read_text(encoding="utf-8")) == {"jajang": 0, "jjamppong": 0}


def test_root_redirects_to_results(client: TestClient) -> None:
    r = client.get("/", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/api/result"


def test_form_vote_redirects_to_result_page(client: TestClient) -> None:
    r = client.post("/vote", data={"vote": "jajang"}, follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/result"
    assert client.get("/api/result").json() == {"jajang": 1, "jjamppong": 0}


def test_form_vote_lands_on_counts(client: TestClient) -> None:
    r = client.post("/vote", data={"vote": "jjamppong"})
    assert r.status_code == 200
    assert r.url.path == "/api/result"
    assert r.json() == {"jajang": 0, "jjamppong": 1}


@pytest.mark.parametrize("data", [{"vote": "udon"}, {"vote": ""}, {}])
def test_form_vote_rejects_bad_values(client: TestClient, data) -> None:
    r = client.post("/vote", data=data, follow_redirects=False)
    assert r.status_code == 400
    assert r.text == "Invalid vote"
    assert client.get("/api/result").json() == {"jajang": 0, "jjamppong": 0}


def test_json_vote_returns_new_counts(client: TestClient) -> None:
    client.post("/api/vote", json={"vote": "jjamppong"})
    r = client.post("/api/vote", json={"vote": "jjamppong"})
    assert r.status_code == 200
    assert r.json() == {"jajang": 0, "jjamppong": 2}


@pytest.mark.parametrize("body", [{"vote": "JAJANG"}, {"vote": None}, {}, {"vote": 1}, {"vote": ["jajang"]}])
def test_json_vote_invalid(client: TestClient, body) -> None:
    r = client.post("/api/vote", json=body)
    assert r.status_code == 400
    assert r.json() == {"detail": "Invalid vote"}
    assert client.get("/api/result").json() == {"jajang": 0, "jjamppong": 0}


def test_result_reflects_file(store: CounterStore, votes_path: Path, write_votes) -> None:
    write_votes(votes_path, {"jajang": 7, "jjamppong": 3.9})
    with TestClient(create_app(store)) as c:
        assert c.get("/api/result").json() == {"jajang": 7, "jjamppong": 3}


def test_write_failure_is_server_error(tmp_path: Path) -> None:
    store = CounterStore(tmp_path / "votes.json", tmp_path=tmp_path / "missing" / "votes.tmp")
    c = TestClient(create_app(store))

    r = c.post("/vote", data={"vote": "jajang"}, follow_redirects=False)
    assert r.status_code == 500
    assert r.text == "Server error"

    r = c.post("/api/vote", json={"vote": "jajang"})
    assert r.status_code == 500
    assert r.json() == {"error": "Server error"}
