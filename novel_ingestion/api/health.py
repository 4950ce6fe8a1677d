"""Health check endpoints."""

import datetime
from typing import Any, Dict

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
@router.get("/api/health")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "novel-ingestion",
        "timestamp": datetime.datetime.now().isoformat(),
    }
