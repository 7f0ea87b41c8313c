"""
Razorpay order API client and callback signature checks
"""

import hashlib
import hmac
import logging
from typing import Any, Dict, Optional

import httpx

from eventdesk.core.config import Settings
from eventdesk.core.errors import GatewayError

logger = logging.getLogger(__name__)


def compute_signature(secret: str, order_id: str, payment_id: str) -> str:
    """Hex HMAC-SHA256 of ``order_id|payment_id`` keyed with the gateway secret"""
    payload = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def signature_matches(secret: str, order_id: str, payment_id: str, signature: str) -> bool:
    expected = compute_signature(secret, order_id, payment_id)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))


class RazorpayClient:
    """Thin async client for the gateway's order endpoint"""

    def __init__(
        self,
        key_id: Optional[str],
        key_secret: Optional[str],
        api_base: str = "https://api.razorpay.com/v1",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.key_id = key_id
        self.key_secret = key_secret
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "RazorpayClient":
        return cls(
            key_id=settings.RAZORPAY_KEY_ID,
            key_secret=settings.RAZORPAY_KEY_SECRET,
            api_base=settings.RAZORPAY_API_BASE,
            timeout=settings.GATEWAY_TIMEOUT_SECONDS,
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self.key_id and self.key_secret)

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        if not self.key_secret:
            raise GatewayError("Payment gateway is not configured")
        return signature_matches(self.key_secret, order_id, payment_id, signature)

    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Create a gateway order; ``amount`` is in minor units"""
        if not self.configured:
            logger.error("Order creation attempted without gateway credentials")
            raise GatewayError("Payment gateway is not configured")

        body: Dict[str, Any] = {"amount": amount, "currency": currency, "receipt": receipt}
        if notes:
            body["notes"] = notes

        try:
            async with httpx.AsyncClient(
                base_url=self.api_base,
                auth=(self.key_id, self.key_secret),
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.post("/orders", json=body)
                response.raise_for_status()
                order = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Gateway rejected order ({e.response.status_code}): {e.response.text}")
            raise GatewayError("Failed to create order") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Gateway order request failed: {e}")
            raise GatewayError("Failed to create order") from e

        if not order.get("id"):
            logger.error(f"Gateway returned an order without id: {order}")
            raise GatewayError("Failed to create order")

        logger.info(f"Gateway order {order['id']} created for {amount} {currency}")
        return order
