"""
Index Router

`/` answers a plain greeting, `/{server}` serves the world monitor page.
The page itself is static; it reads the server from its own URL and polls
the monitor API.
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse, PlainTextResponse

from tracker.core.config import settings

router = APIRouter(tags=["index"])

WORLD_PAGE = "world.html"


@router.get("/", response_class=PlainTextResponse)
def index():
    return "Hello! :)"


@router.get("/{server}")
def home(server: str):
    page = Path(settings.STATIC_ROOT) / WORLD_PAGE
    if not page.is_file():
        raise HTTPException(404, "World page not found")
    return FileResponse(path=str(page), media_type="text/html")
