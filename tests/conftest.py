from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine, select

from hunterboard.app import create_app
from hunterboard.models import Score
from hunterboard.services import ScoreStore

INDEX_HTML = "<!doctype html><title>Hunter</title>"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return ScoreStore(engine, sleep=lambda _: None)


@pytest.fixture
def static_dir(tmp_path):
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text(INDEX_HTML)
    (root / "game.js").write_text("console.log('hunt');")
    (root / "assets").mkdir()
    (root / "assets" / "style.css").write_text("body{}")
    (tmp_path / "secret.txt").write_text("do not serve")
    return root


@pytest.fixture
def client(store, static_dir):
    app = create_app(store=store, static_dir=static_dir)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def stored_scores(engine):
    def fetch(mode=None):
        with Session(engine) as session:
            query = select(Score).order_by(Score.id)
            if mode is not None:
                query = query.where(Score.mode == mode)
            return session.exec(query).all()

    return fetch
