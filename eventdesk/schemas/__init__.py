"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .registration import *
from .payment import *
from .admin import *

__all__ = [
    "SuccessResponse",
    "ErrorResponse",
    "EventPayload",
    "EventResponse",
    "RegistrationCreate",
    "RegistrationResponse",
    "RegisterResult",
    "CreateOrderRequest",
    "OrderResponse",
    "VerifyPaymentRequest",
    "AdminLogin",
    "WhatsAppRequest",
]
