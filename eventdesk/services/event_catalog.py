"""
Current event read/replace service
"""

from typing import Iterable, List, Optional, Union

from eventdesk.core.db import Database
from eventdesk.core.errors import ValidationError
from eventdesk.models import Event
from eventdesk.schemas.event import (
    DEFAULT_BRAND_LOGO,
    DEFAULT_BRAND_NAME,
    EventPayload,
    EventResponse,
)
from eventdesk.services.repositories import EventRepo


def decode_list(value: Optional[str]) -> List[str]:
    """Comma-joined column value to an ordered list; empty string is an empty list"""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def encode_list(value: Union[Iterable[str], str, None]) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        return ",".join(decode_list(value))
    return ",".join(str(item).strip() for item in value if str(item).strip())


class EventCatalog:
    """Service for the single current event record"""

    def __init__(self, database: Database):
        self.database = database

    def get_current_event(self) -> EventResponse:
        with self.database.session() as db:
            event = EventRepo.get_current(db)
            if event is None:
                return EventResponse()
            return self.to_response(event)

    def replace_current_event(self, payload: EventPayload) -> EventResponse:
        """Overwrite every column; fields the caller left out are cleared"""
        if payload.price is not None and payload.price < 0:
            raise ValidationError("Price cannot be negative")
        columns = {
            "title": payload.title or "",
            "scheduled_date": payload.scheduled_date or "",
            "scheduled_time": payload.scheduled_time or "",
            "about": payload.about or "",
            "features": encode_list(payload.features),
            "price": payload.price or 0,
            "event_link": payload.event_link or "",
            "target_audience": encode_list(payload.target_audience),
            "brand_logo": payload.brand_logo,
            "brand_name": payload.brand_name,
        }
        with self.database.session() as db:
            event = EventRepo.replace_current(db, columns)
            return self.to_response(event)

    @staticmethod
    def to_response(event: Event) -> EventResponse:
        return EventResponse(
            title=event.title or "",
            scheduled_date=event.scheduled_date or "",
            scheduled_time=event.scheduled_time or "",
            about=event.about or "",
            features=decode_list(event.features),
            price=event.price or 0,
            event_link=event.event_link or "",
            target_audience=decode_list(event.target_audience),
            brand_logo=event.brand_logo or DEFAULT_BRAND_LOGO,
            brand_name=event.brand_name or DEFAULT_BRAND_NAME,
        )
