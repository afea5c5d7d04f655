from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError, OperationalError

from hunterboard.app import create_app
from hunterboard.services import ScoreStore


def _run(name="Ada", mode="idol", time_ms=1000, time_str="00:01.0", moves=10):
    return {
        "name": name,
        "mode": mode,
        "time_ms": time_ms,
        "time_str": time_str,
        "moves": moves,
    }


class SpyStore(ScoreStore):
    def __init__(self):
        super().__init__(None)
        self.calls = []

    def top_scores(self, mode, limit=5):
        self.calls.append(("top_scores", mode))
        return []

    def insert_score(self, data):
        self.calls.append(("insert_score", data))
        return 1


class BrokenStore(ScoreStore):
    def __init__(self, exc):
        super().__init__(None)
        self.exc = exc

    def top_scores(self, mode, limit=5):
        raise self.exc

    def insert_score(self, data):
        raise self.exc


def test_empty_mode_returns_empty_list(client):
    r = client.get("/api/scores/legend")
    assert r.status_code == 200
    assert r.json() == []


def test_unknown_mode_is_rejected(client):
    r = client.get("/api/scores/unknown")
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid mode"}


@pytest.mark.parametrize("mode", ["unknown", "Idol", "LEGEND", "trainee ", "x"])
def test_invalid_mode_never_touches_store(static_dir, mode):
    spy = SpyStore()
    with TestClient(create_app(store=spy, static_dir=static_dir)) as client:
        r = client.get(f"/api/scores/{mode}")
    assert r.status_code == 400
    assert spy.calls == []


def test_submit_returns_new_id(client, stored_scores):
    r = client.post("/api/scores", json=_run())
    assert r.status_code == 200
    body = r.json()
    assert set(body) == {"id"}
    assert isinstance(body["id"], int)
    assert [s.id for s in stored_scores()] == [body["id"]]


def test_submit_normalises_name_and_time(client, stored_scores):
    r = client.post(
        "/api/scores",
        json={
            "name": "  Ada Lovelace123456  ",
            "mode": "idol",
            "time_ms": 12345.6,
            "time_str": "00:12.3",
            "moves": 7,
        },
    )
    assert r.status_code == 200

    (score,) = stored_scores("idol")
    assert score.id == r.json()["id"]
    assert score.name == "Ada Lovelace1234"
    assert len(score.name) == 16
    assert score.time_ms == 12346
    assert score.time_str == "00:12.3"
    assert score.moves == 7
    assert score.created_at is not None


@pytest.mark.parametrize("name", ["   ", "\t\n"])
def test_blank_name_falls_back_to_hunter(client, stored_scores, name):
    r = client.post("/api/scores", json=_run(name=name))
    assert r.status_code == 200
    assert stored_scores()[0].name == "Hunter"


@pytest.mark.parametrize("field", ["name", "mode", "time_ms", "time_str", "moves"])
def test_missing_field_is_rejected(client, stored_scores, field):
    payload = _run()
    del payload[field]
    r = client.post("/api/scores", json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing fields"}
    assert stored_scores() == []


@pytest.mark.parametrize("field", ["name", "mode", "time_ms", "time_str", "moves"])
def test_null_field_is_rejected(client, stored_scores, field):
    r = client.post("/api/scores", json=_run(**{field: None}))
    assert r.status_code == 400
    assert r.json() == {"error": "Missing fields"}
    assert stored_scores() == []


@pytest.mark.parametrize("field", ["name", "mode", "time_str"])
def test_empty_text_field_is_rejected(client, field):
    r = client.post("/api/scores", json=_run(**{field: ""}))
    assert r.status_code == 400
    assert r.json() == {"error": "Missing fields"}


def test_zero_time_and_moves_are_accepted(client, stored_scores):
    r = client.post("/api/scores", json=_run(time_ms=0, moves=0))
    assert r.status_code == 200
    (score,) = stored_scores()
    assert (score.time_ms, score.moves) == (0, 0)


def test_invalid_mode_submission_is_rejected(client, stored_scores):
    r = client.post("/api/scores", json=_run(mode="nightmare"))
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid mode"}
    assert stored_scores() == []


@pytest.mark.parametrize("time_ms", ["fast", -5, [1], 1e300, 2**63])
def test_bad_time_is_rejected(client, stored_scores, time_ms):
    r = client.post("/api/scores", json=_run(time_ms=time_ms))
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid time_ms"}
    assert stored_scores() == []


def test_bad_moves_is_rejected(client):
    r = client.post("/api/scores", json=_run(moves="lots"))
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid moves"}


def test_fewer_than_five_sorted_by_time_then_moves(client):
    client.post("/api/scores", json=_run(name="slow", time_ms=3000, moves=5))
    client.post("/api/scores", json=_run(name="tie-more", time_ms=1000, moves=9))
    client.post("/api/scores", json=_run(name="tie-less", time_ms=1000, moves=3))

    r = client.get("/api/scores/idol")
    assert r.status_code == 200
    rows = r.json()
    assert [row["name"] for row in rows] == ["tie-less", "tie-more", "slow"]
    for row in rows:
        assert set(row) == {"id", "name", "time_str", "moves", "created_at"}


def test_only_best_five_are_returned(client):
    times = [900, 100, 700, 300, 500, 200, 800]
    for t in times:
        client.post("/api/scores", json=_run(name=f"r{t}", time_ms=t))

    rows = client.get("/api/scores/idol").json()
    assert [row["name"] for row in rows] == ["r100", "r200", "r300", "r500", "r700"]


def test_modes_are_kept_apart(client):
    client.post("/api/scores", json=_run(name="a", mode="trainee"))
    client.post("/api/scores", json=_run(name="b", mode="legend"))

    assert [r["name"] for r in client.get("/api/scores/trainee").json()] == ["a"]
    assert [r["name"] for r in client.get("/api/scores/legend").json()] == ["b"]
    assert client.get("/api/scores/idol").json() == []


def test_new_top_run_shows_up_in_leaderboard(client):
    for t in (500, 600, 700, 800, 900):
        client.post("/api/scores", json=_run(time_ms=t))

    new_id = client.post("/api/scores", json=_run(name="champ", time_ms=50)).json()["id"]
    rows = client.get("/api/scores/idol").json()
    assert rows[0]["id"] == new_id
    assert rows[0]["name"] == "champ"
    assert len(rows) == 5


@pytest.mark.parametrize(
    "exc",
    [
        OperationalError("SELECT 1", {}, Exception("connection refused")),
        IntegrityError("INSERT", {}, Exception("check constraint")),
    ],
)
def test_store_failures_are_hidden(static_dir, exc):
    app = create_app(store=BrokenStore(exc), static_dir=static_dir)
    with TestClient(app) as client:
        get = client.get("/api/scores/idol")
        post = client.post("/api/scores", json=_run())
    assert get.status_code == 500
    assert get.json() == {"error": "DB error"}
    assert post.status_code == 500
    assert post.json() == {"error": "DB error"}


def test_missing_database_is_a_store_failure(static_dir):
    app = create_app(store=ScoreStore(None), static_dir=static_dir)
    with TestClient(app) as client:
        r = client.get("/api/scores/trainee")
    assert r.status_code == 500
    assert r.json() == {"error": "DB error"}


def test_unknown_api_method_uses_error_shape(client):
    r = client.delete("/api/scores/idol")
    assert r.status_code == 405
    assert "error" in r.json()
