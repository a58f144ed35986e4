"""
Frontend routes: static file serving for the built single-page app.
"""
from pathlib import Path
from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.responses import FileResponse


def build_router(static_dir: str) -> APIRouter:
    root = Path(static_dir).resolve()
    index_file = root / "index.html"
    router = APIRouter()

    @router.get("/{full_path:path}", include_in_schema=False)
    async def catch_all(full_path: str):
        """Serve a build file if it exists, otherwise index.html for client-side routing"""
        if full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")

        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        if not index_file.is_file():
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(index_file)

    return router


def register(app: FastAPI, static_dir: str):
    """Register the frontend catch-all. Must come after every API router."""
    app.include_router(build_router(static_dir))
