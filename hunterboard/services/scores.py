"""Validation and normalisation of score submissions."""

from __future__ import annotations

import math
from typing import Any, Dict

from ..models import FALLBACK_NAME, MODES, NAME_MAX_LENGTH, ScoreCreate

# time_ms is stored as BIGINT.
TIME_MS_MAX = 2**63 - 1


class ScoreValidationError(ValueError):
    """Submission rejected before it reaches the store."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def is_valid_mode(mode: Any) -> bool:
    return isinstance(mode, str) and mode in MODES


def normalize_name(raw: Any) -> str:
    """Trim, cap at 16 characters, and fall back to the default name."""

    name = str(raw).strip()[:NAME_MAX_LENGTH]
    return name or FALLBACK_NAME


def round_time_ms(raw: Any) -> int:
    """Coerce ``raw`` to a number and round half up to an integer."""

    if isinstance(raw, bool):
        raise ValueError("time_ms must be a number")
    value = float(raw)
    if not math.isfinite(value) or value < 0:
        raise ValueError("time_ms must be a finite, non-negative number")
    rounded = int(math.floor(value + 0.5))
    if rounded > TIME_MS_MAX:
        raise ValueError("time_ms does not fit in a 64-bit integer")
    return rounded


def _coerce_moves(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError("moves must be an integer")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ValueError("moves must be an integer")
        return int(raw)
    return int(raw)


def parse_submission(body: Dict[str, Any]) -> ScoreCreate:
    """Validate a POST body and return the record to insert.

    Text fields count as missing when absent, null or empty; numeric fields
    only when absent or null, so ``0`` is accepted.
    """

    name = body.get("name")
    mode = body.get("mode")
    time_ms = body.get("time_ms")
    time_str = body.get("time_str")
    moves = body.get("moves")

    if not name or not mode or time_ms is None or not time_str or moves is None:
        raise ScoreValidationError("Missing fields")
    if not is_valid_mode(mode):
        raise ScoreValidationError("Invalid mode")

    try:
        rounded = round_time_ms(time_ms)
    except (TypeError, ValueError) as exc:
        raise ScoreValidationError("Invalid time_ms") from exc
    try:
        move_count = _coerce_moves(moves)
    except (TypeError, ValueError) as exc:
        raise ScoreValidationError("Invalid moves") from exc

    return ScoreCreate(
        name=normalize_name(name),
        mode=mode,
        time_ms=rounded,
        time_str=str(time_str),
        moves=move_count,
    )


__all__ = [
    "ScoreValidationError",
    "is_valid_mode",
    "normalize_name",
    "parse_submission",
    "round_time_ms",
]
