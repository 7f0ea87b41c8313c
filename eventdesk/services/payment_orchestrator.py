"""
Gateway order creation, payment verification and the post-payment sequence
"""

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from eventdesk.core.errors import ValidationError
from eventdesk.schemas.payment import OrderResponse
from eventdesk.services.background import BackgroundQueue
from eventdesk.services.event_catalog import EventCatalog
from eventdesk.services.notifications import NotificationDispatcher
from eventdesk.services.payment_gateway import RazorpayClient
from eventdesk.services.registration_ledger import RegistrationLedger

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "INR"


@dataclass
class VerificationResult:
    success: bool
    message: str
    status_code: int = 200


class PaymentOrchestrator:
    """Drives a registration from Unpaid to Paid (or back to Unpaid).

    Verification precedence:

    1. a client-reported ``status`` with a registration id is a failure or
       cancellation, no signature check is made;
    2. missing order id, payment id or signature fails with "Missing fields";
    3. the HMAC signature decides between success and "Invalid signature";
    4. anything unexpected is logged and reported as "Verification failed".

    On success the response does not wait for the ledger update or the
    emails: those run as one job on the background queue.
    """

    def __init__(
        self,
        gateway: RazorpayClient,
        ledger: RegistrationLedger,
        catalog: EventCatalog,
        notifications: NotificationDispatcher,
        queue: BackgroundQueue,
        confirmation_delay: float = 10.0,
        frontend_origin: str = "",
    ):
        self.gateway = gateway
        self.ledger = ledger
        self.catalog = catalog
        self.notifications = notifications
        self.queue = queue
        self.confirmation_delay = confirmation_delay
        self.frontend_origin = frontend_origin

    async def create_order(
        self,
        amount: Any,
        currency: Optional[str] = DEFAULT_CURRENCY,
        receipt: Optional[str] = None,
        notes: Optional[Dict[str, Any]] = None,
    ) -> OrderResponse:
        if amount is None or amount == "":
            raise ValidationError("Amount is required")
        try:
            value = float(amount)
        except (TypeError, ValueError):
            raise ValidationError("Amount must be a number")
        minor_units = int(round(value * 100)) if math.isfinite(value) else 0
        if minor_units < 1:
            raise ValidationError("Amount must be greater than zero")

        currency = (currency or DEFAULT_CURRENCY).upper()
        receipt = receipt or f"rcpt_{int(time.time() * 1000)}"

        order = await self.gateway.create_order(minor_units, currency, receipt, notes)
        return OrderResponse(
            id=order["id"],
            amount=order.get("amount", minor_units),
            currency=order.get("currency", currency),
            key=self.gateway.key_id,
        )

    async def verify_payment(
        self,
        order_id: Optional[str],
        payment_id: Optional[str],
        signature: Optional[str],
        registration_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> VerificationResult:
        try:
            if status and registration_id is not None:
                logger.info(f"Client reported payment status '{status}' for registration {registration_id}")
                subject, body = self.status_failure_message(status)
                await self.notifications.send_failure_notification(registration_id, subject, body)
                return VerificationResult(False, status, 400)

            if not (order_id and payment_id and signature):
                if registration_id is not None:
                    await self.notifications.send_failure_notification(
                        registration_id,
                        "Payment failed",
                        "We could not verify your payment because some payment details were missing.\n\n"
                        + self.retry_hint(),
                    )
                return VerificationResult(False, "Missing fields", 400)

            if self.gateway.verify_signature(order_id, payment_id, signature):
                logger.info(f"Payment {payment_id} verified for order {order_id}")
                if registration_id is not None:
                    self.queue.submit(
                        lambda: self.complete_registration(registration_id),
                        description=f"post-payment sequence for registration {registration_id}",
                    )
                return VerificationResult(True, "Payment verified", 200)

            logger.warning(f"Invalid signature for order {order_id}, payment {payment_id}")
            if registration_id is not None:
                await self.notifications.send_failure_notification(
                    registration_id,
                    "Payment verification failed",
                    "We could not confirm your payment. Reason: Invalid signature.\n\n" + self.retry_hint(),
                )
            return VerificationResult(False, "Invalid signature", 400)

        except Exception as e:
            logger.exception(f"Payment verification failed for order {order_id}: {e}")
            if registration_id is not None:
                try:
                    await self.notifications.send_failure_notification(
                        registration_id,
                        "Payment failed",
                        "Something went wrong while verifying your payment.\n\n" + self.retry_hint(),
                    )
                except Exception as notify_error:
                    logger.error(f"Failure notification for registration {registration_id} failed: {notify_error}")
            return VerificationResult(False, "Verification failed", 500)

    async def complete_registration(self, registration_id: int) -> None:
        """Mark Paid, then payment receipt now and event confirmation after the delay"""
        self.ledger.mark_paid(registration_id)

        registration = self.ledger.get(registration_id)
        if registration is None:
            logger.warning(f"Paid registration {registration_id} vanished before notification")
            return
        event = self.catalog.get_current_event()

        await self.notifications.send_payment_success(registration, event)
        if self.confirmation_delay > 0:
            await asyncio.sleep(self.confirmation_delay)
        await self.notifications.send_registration_confirmed(registration, event)

    def status_failure_message(self, status: str) -> Tuple[str, str]:
        if status.strip().lower() == "cancelled":
            return (
                "Payment cancelled",
                "Your payment was cancelled. Your registration is saved but remains unpaid.\n\n"
                + self.retry_hint(),
            )
        return (
            "Payment failed",
            f"Your payment could not be completed (status: {status}).\n\n" + self.retry_hint(),
        )

    def retry_hint(self) -> str:
        if self.frontend_origin:
            return f"You can complete your payment at any time at {self.frontend_origin}."
        return "You can complete your payment at any time."
