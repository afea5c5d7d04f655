"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_routes
from .core import (
    DATABASE_URL,
    DB_CONNECT_TIMEOUT,
    DB_POOL_SIZE,
    DB_RETRY_ATTEMPTS,
    DB_RETRY_BACKOFF_MS,
    DB_SSL_MODE,
    HOST,
    INDEX_FILE,
    LOG_LEVEL,
    PORT,
    STATIC_DIR,
    build_engine,
    setup_logging,
)
from .services import ScoreStore

logger = logging.getLogger(__name__)


def build_store() -> ScoreStore:
    """Create the store from environment configuration."""

    logger.info("DATABASE_URL present: %s", bool(DATABASE_URL))
    engine = None
    if DATABASE_URL:
        try:
            engine = build_engine(
                DATABASE_URL,
                ssl_mode=DB_SSL_MODE,
                pool_size=DB_POOL_SIZE,
                connect_timeout=DB_CONNECT_TIMEOUT,
            )
        except (ArgumentError, ValueError) as exc:
            logger.error("DB init error: %s", exc)
    return ScoreStore(
        engine,
        retry_attempts=DB_RETRY_ATTEMPTS,
        retry_backoff=DB_RETRY_BACKOFF_MS / 1000,
    )


def ensure_schema(store: ScoreStore) -> bool:
    """Create the scores table; failures are logged and never fatal."""

    if store.engine is None:
        logger.error("DB init skipped: DATABASE_URL is not set")
        return False
    try:
        store.ensure_schema()
    except SQLAlchemyError as exc:
        logger.error("DB init error: %s", exc)
        return False
    logger.info("DB ready")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: Optional[ScoreStore] = app.state.store
    owned = store is None
    if owned:
        store = build_store()
        app.state.store = store
    ensure_schema(store)
    yield
    if owned:
        store.close()
        app.state.store = None


def create_app(
    store: Optional[ScoreStore] = None,
    static_dir: Optional[Union[str, Path]] = None,
    index_file: Optional[str] = None,
) -> FastAPI:
    setup_logging(LOG_LEVEL)

    app = FastAPI(title="Hunter Leaderboard API", version="1.0.0", lifespan=lifespan)
    app.state.store = store
    app.state.static_dir = Path(static_dir) if static_dir is not None else STATIC_DIR
    app.state.index_file = index_file or INDEX_FILE

    register_routes(app)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    logger.info("Hunter leaderboard running on port %s", PORT)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
