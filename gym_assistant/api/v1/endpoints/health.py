"""Health check endpoint for monitoring."""

import os

from fastapi import APIRouter, Depends

from gym_assistant.api.deps import get_store
from gym_assistant.services.domain_store import DomainStore

router = APIRouter()


@router.get("")
async def health():
    """Simple liveness check. Optionally includes built_at if BACKEND_BUILT_AT env is set."""
    payload: dict = {"status": "ok"}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(store: DomainStore = Depends(get_store)):
    """Readiness: store loaded, with collection sizes."""
    return {
        "status": "ok",
        "exercises": len(store.exercises),
        "templates": len(store.templates),
        "sessions": len(store.history),
    }
