"""
Event-related Pydantic schemas
"""

from typing import List, Optional, Union
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

DEFAULT_BRAND_LOGO = "HT"
DEFAULT_BRAND_NAME = "Event"

class EventPayload(BaseModel):
    """Full replacement of the current event; absent fields are cleared"""
    title: Optional[str] = None
    scheduled_date: Optional[str] = None
    scheduled_time: Optional[str] = None
    about: Optional[str] = None
    features: Optional[Union[List[str], str]] = None
    price: Optional[float] = None
    event_link: Optional[str] = None
    target_audience: Optional[Union[List[str], str]] = None
    brand_logo: Optional[str] = None
    brand_name: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class EventResponse(BaseModel):
    """Current event as served to clients"""
    title: str = ""
    scheduled_date: str = ""
    scheduled_time: str = ""
    about: str = ""
    features: List[str] = []
    price: float = 0
    event_link: str = ""
    target_audience: List[str] = []
    brand_logo: str = DEFAULT_BRAND_LOGO
    brand_name: str = DEFAULT_BRAND_NAME

    class Config:
        alias_generator = to_camel
        populate_by_name = True
