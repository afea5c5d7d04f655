"""Database model exports."""

from .score import (
    FALLBACK_NAME,
    MODES,
    NAME_MAX_LENGTH,
    TOP_N,
    Score,
    ScoreCreate,
)

__all__ = [
    "FALLBACK_NAME",
    "MODES",
    "NAME_MAX_LENGTH",
    "Score",
    "ScoreCreate",
    "TOP_N",
]
