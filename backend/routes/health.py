"""Health and readiness check routes."""

import time

from fastapi import APIRouter, Request

from config import settings

router = APIRouter()


@router.get("/ready")
async def ready() -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "recipe-proxy", "commit": settings.git_sha}


@router.get("/health")
async def health(request: Request) -> dict:
    """Liveness plus the current cache size. Does not call Spoonacular."""
    return {
        "status": "ok",
        "timestamp": int(time.time() * 1000),
        "cache_entries": len(request.app.state.cache),
    }
