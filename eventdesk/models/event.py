"""
Event model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Float, DateTime

from eventdesk.core.db import Base

# The current event is a single row with a fixed primary key
CURRENT_EVENT_ID = 1

class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, default=CURRENT_EVENT_ID)
    title = Column(String(255), nullable=False, default="")
    scheduled_date = Column(String(100), nullable=False, default="")
    scheduled_time = Column(String(100), nullable=False, default="")
    about = Column(Text, nullable=False, default="")
    features = Column(Text, nullable=False, default="")  # comma-joined
    price = Column(Float, nullable=False, default=0)
    event_link = Column(String(500), nullable=False, default="")
    target_audience = Column(Text, nullable=False, default="")  # comma-joined
    brand_logo = Column(String(255), nullable=True)
    brand_name = Column(String(255), nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
