"""
Current event API routes
"""

from fastapi import APIRouter, Depends

from eventdesk.api.deps import get_catalog
from eventdesk.schemas.event import EventPayload
from eventdesk.services.event_catalog import EventCatalog
from eventdesk.utils.responses import success_response

router = APIRouter()

@router.get("/event")
async def get_event(catalog: EventCatalog = Depends(get_catalog)):
    """Get the current event"""
    event = catalog.get_current_event()
    return success_response(event.model_dump(by_alias=True))

@router.put("/event")
async def replace_event(
    payload: EventPayload,
    catalog: EventCatalog = Depends(get_catalog)
):
    """Replace every field of the current event"""
    catalog.replace_current_event(payload)
    return success_response()
