"""Service layer helpers."""

from .scores import (
    ScoreValidationError,
    is_valid_mode,
    normalize_name,
    parse_submission,
    round_time_ms,
)
from .store import ScoreStore, StoreUnavailableError, get_store

__all__ = [
    "ScoreStore",
    "ScoreValidationError",
    "StoreUnavailableError",
    "get_store",
    "is_valid_mode",
    "normalize_name",
    "parse_submission",
    "round_time_ms",
]
