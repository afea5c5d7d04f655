"""API assembly helpers."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .routers import ALL_ROUTERS


async def error_response(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"error": <message>}``."""

    return JSONResponse(
        {"error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def register_routes(app: FastAPI) -> None:
    """Attach the routers and the error shape to the given app."""

    app.add_exception_handler(StarletteHTTPException, error_response)
    for router in ALL_ROUTERS:
        app.include_router(router)


__all__ = ["error_response", "register_routes"]
