"""Health-check endpoint."""
from __future__ import annotations

import time
from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["health"])

_STARTED_AT = time.monotonic()


@router.get("/health")
def health():
    """Liveness check with process uptime in seconds."""
    return {
        "status": "healthy",
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
