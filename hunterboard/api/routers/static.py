"""Static client assets with a single-page-app fallback."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

router = APIRouter(tags=["static"])


def _resolve_asset(base: Path, path: str) -> Optional[Path]:
    """Return the file ``path`` names under ``base``, or None."""

    if not path:
        return None
    try:
        base = base.resolve()
        candidate = (base / path).resolve()
        if base not in candidate.parents or not candidate.is_file():
            return None
    except (OSError, ValueError):
        return None
    return candidate


@router.get("/{full_path:path}", include_in_schema=False)
def serve_client(full_path: str, request: Request) -> FileResponse:
    """Serve an asset if it exists, otherwise the entry-point page."""

    base = Path(request.app.state.static_dir)
    asset = _resolve_asset(base, full_path)
    if asset is not None:
        return FileResponse(asset)

    index = base / request.app.state.index_file
    if not index.is_file():
        raise HTTPException(404, "Not Found")
    return FileResponse(index)


__all__ = ["router"]
