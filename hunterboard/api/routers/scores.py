"""Leaderboard endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from ...services import (
    ScoreStore,
    ScoreValidationError,
    StoreUnavailableError,
    get_store,
    is_valid_mode,
    parse_submission,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["scores"])

_STORE_ERRORS = (SQLAlchemyError, StoreUnavailableError)


@router.get("/scores/{mode}")
def get_top_scores(
    mode: str, store: ScoreStore = Depends(get_store)
) -> List[Dict[str, Any]]:
    """Top five runs for a difficulty, fastest first."""

    if not is_valid_mode(mode):
        raise HTTPException(400, "Invalid mode")
    try:
        return store.top_scores(mode)
    except _STORE_ERRORS:
        logger.exception("Failed to load scores for mode %s", mode)
        raise HTTPException(500, "DB error")


@router.post("/scores")
def submit_score(
    body: Dict[str, Any], store: ScoreStore = Depends(get_store)
) -> Dict[str, int]:
    """Save a finished run and return its id."""

    try:
        data = parse_submission(body)
    except ScoreValidationError as exc:
        raise HTTPException(400, exc.message)
    try:
        score_id = store.insert_score(data)
    except _STORE_ERRORS:
        logger.exception("Failed to save score for mode %s", data.mode)
        raise HTTPException(500, "DB error")
    return {"id": score_id}


__all__ = ["router"]
