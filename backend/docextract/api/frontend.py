"""Serves the pre-built frontend bundle with a client-side routing fallback."""

from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse

from docextract.config import Settings
from docextract.dependencies import get_settings

router = APIRouter(include_in_schema=False)

API_NOT_FOUND = {"error": "API endpoint not found"}


def resolve_asset(static_dir: Path, path: str) -> Path | None:
    """Return the file under ``static_dir`` for ``path``, refusing traversal."""
    root = static_dir.resolve()
    candidate = (root / path).resolve()
    if candidate.is_file() and candidate.is_relative_to(root):
        return candidate
    return None


@router.get("/{full_path:path}")
async def serve_frontend(full_path: str, app_settings: Settings = Depends(get_settings)):
    if full_path == "api" or full_path.startswith("api/"):
        return JSONResponse(status_code=404, content=API_NOT_FOUND)

    asset = resolve_asset(app_settings.static_dir, full_path) if full_path else None
    if asset is not None:
        return FileResponse(asset)

    index = app_settings.static_dir / "index.html"
    if index.is_file():
        return FileResponse(index)
    return PlainTextResponse(
        "Frontend build not found. Please check deployment logs.", status_code=404
    )
