"""Bounded linear-backoff retry for store calls."""

from __future__ import annotations

import logging
import time
from typing import Callable, Tuple, Type, TypeVar

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Transient connection failures only; constraint violations surface at once.
TRANSIENT_ERRORS: Tuple[Type[BaseException], ...] = (
    OperationalError,
    InterfaceError,
    PoolTimeoutError,
)


def with_retry(
    fn: Callable[[], T],
    *,
    attempts: int = 3,
    backoff: float = 0.3,
    retry_on: Tuple[Type[BaseException], ...] = TRANSIENT_ERRORS,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``fn`` up to ``attempts`` times.

    After failed attempt ``n`` the helper waits ``backoff * n`` seconds before
    trying again. The last failure is re-raised unchanged.
    """

    attempts = max(1, attempts)
    for attempt in range(1, attempts):
        try:
            return fn()
        except retry_on as exc:
            delay = backoff * attempt
            logger.warning(
                "Store call failed (attempt %d/%d), retrying in %.2fs: %s",
                attempt,
                attempts,
                delay,
                exc,
            )
            sleep(delay)
    return fn()


__all__ = ["TRANSIENT_ERRORS", "with_retry"]
