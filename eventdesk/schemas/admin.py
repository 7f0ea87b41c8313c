"""
Admin and messaging request schemas
"""

from typing import Optional
from pydantic import BaseModel

class AdminLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class WhatsAppRequest(BaseModel):
    to: Optional[str] = None
    message: Optional[str] = None
