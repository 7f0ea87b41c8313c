"""
Common Pydantic schemas
"""

from typing import Any, Optional
from pydantic import BaseModel

class SuccessResponse(BaseModel):
    """Bare acknowledgement"""
    success: bool = True

class ErrorResponse(BaseModel):
    """Error response schema"""
    success: bool = False
    message: str
    details: Optional[Any] = None
