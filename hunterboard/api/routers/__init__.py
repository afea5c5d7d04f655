"""Aggregate API routers."""

from fastapi import APIRouter

from .scores import router as scores_router
from .static import router as static_router

# The static catch-all must stay last so API routes match first.
ALL_ROUTERS: tuple[APIRouter, ...] = (
    scores_router,
    static_router,
)

__all__ = ["ALL_ROUTERS"]
