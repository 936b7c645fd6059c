"""Preflight and liveness answers for every ``/api`` path."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

router = APIRouter(tags=["Preflight"])


@router.api_route("/{path:path}", methods=["OPTIONS", "HEAD"], include_in_schema=False)
async def preflight(path: str) -> JSONResponse:
    return JSONResponse(status_code=200, content={"ok": True})
