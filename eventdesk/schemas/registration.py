"""
Registration-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class RegistrationCreate(BaseModel):
    """Registration form; presence of required fields is checked by the ledger"""
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    org: Optional[str] = None
    role: Optional[str] = None
    amount: Optional[float] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class RegistrationResponse(BaseModel):
    id: int
    full_name: str
    email: str
    phone: str
    org: Optional[str] = None
    role: Optional[str] = None
    amount: float
    status: str
    created_at: Optional[datetime] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class RegisterResult(BaseModel):
    success: bool = True
    id: int
    updated: bool
