"""
Database models package
"""

from .event import Event, CURRENT_EVENT_ID
from .registration import Registration, STATUS_PAID, STATUS_UNPAID
from .admin import Admin

__all__ = ["Event", "CURRENT_EVENT_ID", "Registration", "STATUS_PAID", "STATUS_UNPAID", "Admin"]
