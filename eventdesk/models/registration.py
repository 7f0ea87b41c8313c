"""
Registration model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime

from eventdesk.core.db import Base

STATUS_UNPAID = "Unpaid"
STATUS_PAID = "Paid"

class Registration(Base):
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(50), nullable=False)
    org = Column(String(255), nullable=True)
    role = Column(String(255), nullable=True)
    amount = Column(Float, nullable=False, default=0)
    status = Column(String(20), nullable=False, default=STATUS_UNPAID)  # Unpaid, Paid
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
