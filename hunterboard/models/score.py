"""Database model for leaderboard scores."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, func
from sqlmodel import Field as ORMField, SQLModel

MODES = ("trainee", "idol", "legend")
FALLBACK_NAME = "Hunter"
NAME_MAX_LENGTH = 16
TOP_N = 5


class ScoreCreate(SQLModel):
    """Normalised submission, ready to insert."""

    name: str
    mode: str
    time_ms: int
    time_str: str
    moves: int


class Score(SQLModel, table=True):
    """One completed run. Rows are never updated or deleted."""

    __tablename__ = "scores"
    __table_args__ = (
        CheckConstraint(
            "mode IN ('trainee','idol','legend')", name="scores_mode_check"
        ),
    )

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str
    mode: str
    time_ms: int = ORMField(sa_column=Column(BigInteger, nullable=False))
    time_str: str
    moves: int
    created_at: Optional[datetime] = ORMField(
        default=None,
        sa_column=Column(DateTime(timezone=True), server_default=func.now()),
    )


__all__ = [
    "FALLBACK_NAME",
    "MODES",
    "NAME_MAX_LENGTH",
    "Score",
    "ScoreCreate",
    "TOP_N",
]
