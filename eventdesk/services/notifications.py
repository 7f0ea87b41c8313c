"""
Transactional email and WhatsApp notifications
"""

import html
import logging
import os
import re
from typing import Any, Dict, Optional, Protocol

import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape

from eventdesk.core.config import Settings
from eventdesk.schemas.event import EventResponse
from eventdesk.schemas.registration import RegistrationResponse
from eventdesk.services.registration_ledger import RegistrationLedger
from eventdesk.services.whatsapp_client import WhatsAppClient

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")

HTML_TAG = re.compile(r"<[a-zA-Z][^>]*>")


class EmailTransport(Protocol):
    async def send(self, to: str, subject: str, html: str) -> None: ...


def to_html(body: str) -> str:
    """Wrap plain text into paragraphs; bodies that already carry markup pass through"""
    if HTML_TAG.search(body or ""):
        return body
    paragraphs = [p for p in re.split(r"\n\s*\n", (body or "").strip()) if p.strip()]
    return "".join(
        "<p>" + "<br>".join(html.escape(line) for line in p.strip().splitlines()) + "</p>"
        for p in paragraphs
    )


class NotificationDispatcher:
    """Sends notifications; email failures are logged and reported as False"""

    def __init__(
        self,
        settings: Settings,
        ledger: RegistrationLedger,
        transport: Optional[EmailTransport] = None,
        whatsapp_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.ledger = ledger
        self.transport = transport
        self.whatsapp_transport = whatsapp_transport
        self.templates = Environment(
            loader=FileSystemLoader(TEMPLATES_DIR),
            autoescape=select_autoescape(["html"]),
        )

    @property
    def email_enabled(self) -> bool:
        return self.transport is not None

    def render(self, template: str, **context: Any) -> str:
        return self.templates.get_template(template).render(**context)

    async def send_email(self, to: str, subject: str, body: str) -> bool:
        if self.transport is None:
            logger.warning(f"Email disabled, dropping '{subject}' for {to}")
            return False
        try:
            await self.transport.send(to, subject, to_html(body))
        except Exception as e:
            logger.error(f"Failed to send '{subject}' to {to}: {e}")
            return False
        logger.info(f"Email '{subject}' sent to {to}")
        return True

    async def send_failure_notification(self, registration_id: Optional[int], subject: str, body: str) -> None:
        """Tell the registrant their payment failed and reset them to Unpaid"""
        if registration_id is None:
            logger.warning(f"Failure notification '{subject}' without a registration id")
            return
        registration = self.ledger.get(registration_id)
        if registration is None:
            logger.warning(f"Failure notification '{subject}': registration {registration_id} not found")
            return

        greeting = f"Hi {registration.full_name},\n\n"
        await self.send_email(registration.email, subject, greeting + body)
        self.ledger.mark_unpaid(registration_id)

    async def send_payment_success(self, registration: RegistrationResponse, event: EventResponse) -> bool:
        content = self.render(
            "email/payment_success.html",
            full_name=registration.full_name,
            amount=registration.amount,
            registration_id=registration.id,
            brand_name=event.brand_name,
        )
        return await self.send_email(registration.email, "Payment successful", content)

    async def send_registration_confirmed(self, registration: RegistrationResponse, event: EventResponse) -> bool:
        content = self.render(
            "email/registration_confirmed.html",
            full_name=registration.full_name,
            title=event.title,
            scheduled_date=event.scheduled_date,
            scheduled_time=event.scheduled_time,
            event_link=event.event_link or self.settings.FRONTEND_ORIGIN,
            brand_name=event.brand_name,
        )
        subject = f"Registration confirmed: {event.title}" if event.title else "Registration confirmed"
        return await self.send_email(registration.email, subject, content)

    async def send_whatsapp(self, to: str, body: str) -> Dict[str, Any]:
        """Synchronous for the caller: raises NotificationError on failure"""
        client = WhatsAppClient.from_settings(self.settings, transport=self.whatsapp_transport)
        return await client.send(to, body)
