"""Score persistence on top of a pooled SQLModel engine."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, select

from ..core.retry import with_retry
from ..models import TOP_N, Score, ScoreCreate

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreUnavailableError(RuntimeError):
    """Raised when no database is configured."""


class ScoreStore:
    """Owns the engine for the lifetime of the process.

    Every public call runs a single statement in its own session and is
    retried on transient connection failures.
    """

    def __init__(
        self,
        engine: Optional[Engine],
        *,
        retry_attempts: int = 3,
        retry_backoff: float = 0.3,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.engine = engine
        self.retry_attempts = retry_attempts
        self.retry_backoff = retry_backoff
        self._sleep = sleep

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise StoreUnavailableError("DATABASE_URL is not configured")
        return self.engine

    def _run(self, fn: Callable[[], T]) -> T:
        kwargs: Dict[str, Any] = {
            "attempts": self.retry_attempts,
            "backoff": self.retry_backoff,
        }
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        return with_retry(fn, **kwargs)

    def ensure_schema(self) -> None:
        """Create the ``scores`` table if it does not exist yet."""

        engine = self._require_engine()
        SQLModel.metadata.create_all(engine, tables=[Score.__table__])

    def top_scores(self, mode: str, limit: int = TOP_N) -> List[Dict[str, Any]]:
        engine = self._require_engine()

        def query() -> List[Dict[str, Any]]:
            with Session(engine) as session:
                rows = session.exec(
                    select(
                        Score.id,
                        Score.name,
                        Score.time_str,
                        Score.moves,
                        Score.created_at,
                    )
                    .where(Score.mode == mode)
                    .order_by(Score.time_ms.asc(), Score.moves.asc())
                    .limit(limit)
                ).all()
            return [dict(row._mapping) for row in rows]

        return self._run(query)

    def insert_score(self, data: ScoreCreate) -> int:
        engine = self._require_engine()

        def insert() -> int:
            with Session(engine) as session:
                score = Score(**data.model_dump())
                session.add(score)
                # The id comes back from the INSERT itself; nothing runs after commit.
                session.flush()
                score_id = score.id
                session.commit()
                return score_id

        return self._run(insert)

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


def get_store(request: Request) -> ScoreStore:
    """FastAPI dependency returning the store held on the app state."""

    return request.app.state.store


__all__ = ["ScoreStore", "StoreUnavailableError", "get_store"]
