"""
Payment-related Pydantic schemas
"""

from typing import Any, Dict, Optional
from pydantic import AliasChoices, BaseModel, Field

class CreateOrderRequest(BaseModel):
    amount: Optional[float] = None
    currency: str = "INR"
    receipt: Optional[str] = None
    notes: Optional[Dict[str, Any]] = None

class OrderResponse(BaseModel):
    """Gateway order handed to the checkout widget"""
    id: str
    amount: int  # minor units
    currency: str
    key: str

class VerifyPaymentRequest(BaseModel):
    """Checkout callback; accepts both our names and the gateway's own"""
    order_id: Optional[str] = Field(None, validation_alias=AliasChoices("orderId", "razorpay_order_id", "order_id"))
    payment_id: Optional[str] = Field(None, validation_alias=AliasChoices("paymentId", "razorpay_payment_id", "payment_id"))
    signature: Optional[str] = Field(None, validation_alias=AliasChoices("signature", "razorpay_signature"))
    registration_id: Optional[int] = Field(None, validation_alias=AliasChoices("registrationId", "registration_id"))
    status: Optional[str] = None
