"""Health & Root Endpoints — liveness probe plus the plain-text root banner.

Invariants:
    - GET /api/health always returns 200 if the process is up; `database`
      reports whether a SELECT 1 succeeded
    - uptime is seconds since this module was imported (process start)
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Response, status
from fastapi.responses import PlainTextResponse

from customer_api.infrastructure import database

router = APIRouter(tags=["health"])

_STARTED_AT = time.monotonic()


@router.get("/api/health")
async def health_check():
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "database": "Connected" if db_ok else "Disconnected",
    }


@router.get("/", response_class=PlainTextResponse)
async def root():
    return "Customer Management API is running"


@router.get("/favicon.ico", include_in_schema=False)
async def favicon():
    return Response(status_code=status.HTTP_204_NO_CONTENT)
