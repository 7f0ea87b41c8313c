"""
WhatsApp messages through the Twilio Messages API
"""

import logging
from typing import Any, Dict, Optional

import httpx

from eventdesk.core.config import Settings
from eventdesk.core.errors import NotificationError

logger = logging.getLogger(__name__)


def as_whatsapp_address(number: str) -> str:
    number = number.strip()
    return number if number.startswith("whatsapp:") else f"whatsapp:{number}"


class WhatsAppClient:
    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        sender: str,
        api_base: str = "https://api.twilio.com/2010-04-01",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.sender = as_whatsapp_address(sender)
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "WhatsAppClient":
        if not (settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN and settings.TWILIO_WHATSAPP_FROM):
            raise NotificationError("WhatsApp messaging is not configured")
        return cls(
            account_sid=settings.TWILIO_ACCOUNT_SID,
            auth_token=settings.TWILIO_AUTH_TOKEN,
            sender=settings.TWILIO_WHATSAPP_FROM,
            api_base=settings.TWILIO_API_BASE,
            timeout=settings.GATEWAY_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def send(self, to: str, body: str) -> Dict[str, Any]:
        url = f"{self.api_base}/Accounts/{self.account_sid}/Messages.json"
        form = {"From": self.sender, "To": as_whatsapp_address(to), "Body": body}
        try:
            async with httpx.AsyncClient(
                auth=(self.account_sid, self.auth_token),
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.post(url, data=form)
                response.raise_for_status()
                result = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"WhatsApp send rejected ({e.response.status_code}): {e.response.text}")
            raise NotificationError("Failed to send WhatsApp message") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"WhatsApp send failed: {e}")
            raise NotificationError("Failed to send WhatsApp message") from e

        logger.info(f"WhatsApp message {result.get('sid')} queued for {to}")
        return result
