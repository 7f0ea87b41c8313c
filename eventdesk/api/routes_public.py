"""
Public API routes - no authentication required
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from eventdesk.api.deps import get_database
from eventdesk.core.db import Database

router = APIRouter()

@router.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness text for quick manual checks"""
    return "Backend server is running!"

@router.get("/health")
async def health_check(database: Database = Depends(get_database)):
    """Health check endpoint; always 200, reports store connectivity"""
    return {"status": "ok", "db": {"connected": database.is_connected()}}
