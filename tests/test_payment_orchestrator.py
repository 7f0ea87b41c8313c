"""
Tests for order creation and the payment verification decision procedure
"""

import asyncio

import httpx
import pytest

from conftest import RecordingTransport, TEST_KEY_ID, gateway_handler, sign
from eventdesk.core.errors import GatewayError, ValidationError
from eventdesk.schemas.event import EventPayload
from eventdesk.services.background import BackgroundQueue
from eventdesk.services.event_catalog import EventCatalog
from eventdesk.services.notifications import NotificationDispatcher
from eventdesk.services.payment_gateway import RazorpayClient
from eventdesk.services.payment_orchestrator import PaymentOrchestrator
from eventdesk.services.registration_ledger import RegistrationLedger

@pytest.fixture
def ledger(database):
    return RegistrationLedger(database)

@pytest.fixture
def catalog(database):
    return EventCatalog(database)

@pytest.fixture
def transport():
    return RecordingTransport()

@pytest.fixture
def orchestrator(settings, ledger, catalog, transport):
    notifications = NotificationDispatcher(settings, ledger, transport=transport)
    gateway = RazorpayClient.from_settings(settings, transport=httpx.MockTransport(gateway_handler))
    return PaymentOrchestrator(
        gateway=gateway,
        ledger=ledger,
        catalog=catalog,
        notifications=notifications,
        queue=BackgroundQueue("test"),
        confirmation_delay=0,
        frontend_origin=settings.FRONTEND_ORIGIN,
    )

@pytest.fixture
def registration_id(ledger):
    return ledger.register("Asha Rao", "a@x.com", "9999999999", "Acme", "Engineer", 500).id

def verify(orchestrator, *args, **kwargs):
    """Run one verification with the queue running, then drain the queue"""
    async def run():
        orchestrator.queue.start()
        try:
            result = await orchestrator.verify_payment(*args, **kwargs)
            await orchestrator.queue.join()
            return result
        finally:
            await orchestrator.queue.stop()
    return asyncio.run(run())

# -------- create_order --------

def test_create_order_converts_to_minor_units(orchestrator):
    order = asyncio.run(orchestrator.create_order(499.99, receipt="rcpt_1"))

    assert order.id == "order_TEST123"
    assert order.amount == 49999
    assert order.currency == "INR"
    assert order.key == TEST_KEY_ID

@pytest.mark.parametrize("amount", [None, "", 0, -5, "abc", 0.001])
def test_create_order_rejects_missing_or_non_positive_amount(orchestrator, amount):
    with pytest.raises(ValidationError):
        asyncio.run(orchestrator.create_order(amount))

def test_create_order_without_credentials(orchestrator):
    orchestrator.gateway.key_secret = None

    with pytest.raises(GatewayError):
        asyncio.run(orchestrator.create_order(100))

def test_create_order_gateway_failure(orchestrator):
    orchestrator.gateway.transport = httpx.MockTransport(
        lambda request: httpx.Response(401, json={"error": {"description": "Authentication failed"}})
    )

    with pytest.raises(GatewayError):
        asyncio.run(orchestrator.create_order(100))

# -------- verify_payment --------

def test_valid_signature_marks_paid_and_sends_both_emails(orchestrator, ledger, catalog, transport, registration_id):
    catalog.replace_current_event(EventPayload(
        title="PyConf",
        scheduled_date="12 Oct",
        scheduled_time="10:00",
        event_link="https://meet.example.com/pyconf",
    ))

    result = verify(orchestrator, "order_1", "pay_1", sign("order_1", "pay_1"), registration_id)

    assert result.success is True
    assert ledger.get(registration_id).status == "Paid"
    assert transport.subjects() == ["Payment successful", "Registration confirmed: PyConf"]
    assert "https://meet.example.com/pyconf" in transport.sent[1]["html"]
    assert "12 Oct" in transport.sent[1]["html"]

def test_confirmation_falls_back_to_frontend_link(orchestrator, transport, registration_id):
    verify(orchestrator, "order_1", "pay_1", sign("order_1", "pay_1"), registration_id)

    assert "https://events.example.com" in transport.sent[1]["html"]

def test_double_verification_stays_paid(orchestrator, ledger, transport, registration_id):
    signature = sign("order_1", "pay_1")

    first = verify(orchestrator, "order_1", "pay_1", signature, registration_id)
    second = verify(orchestrator, "order_1", "pay_1", signature, registration_id)

    assert first.success and second.success
    assert ledger.get(registration_id).status == "Paid"
    assert len(transport.sent) == 4

def test_valid_signature_without_registration(orchestrator, transport):
    result = verify(orchestrator, "order_1", "pay_1", sign("order_1", "pay_1"))

    assert result.success is True
    assert transport.sent == []

def test_invalid_signature_resets_to_unpaid(orchestrator, ledger, transport, registration_id):
    ledger.mark_paid(registration_id)

    result = verify(orchestrator, "order_1", "pay_1", "not-the-signature", registration_id)

    assert result.success is False
    assert result.status_code == 400
    assert result.message == "Invalid signature"
    assert ledger.get(registration_id).status == "Unpaid"
    assert transport.subjects() == ["Payment verification failed"]
    assert "Invalid signature" in transport.sent[0]["html"]

def test_signature_for_other_payment_is_rejected(orchestrator, ledger, registration_id):
    result = verify(orchestrator, "order_1", "pay_1", sign("order_1", "pay_2"), registration_id)

    assert result.message == "Invalid signature"
    assert ledger.get(registration_id).status == "Unpaid"

def test_invalid_signature_without_registration(orchestrator, transport):
    result = verify(orchestrator, "order_1", "pay_1", "bad")

    assert result.message == "Invalid signature"
    assert transport.sent == []

def test_cancelled_status_skips_signature_check(orchestrator, ledger, transport, registration_id, monkeypatch):
    ledger.mark_paid(registration_id)

    def fail_if_called(*args):
        raise AssertionError("signature must not be checked")
    monkeypatch.setattr(orchestrator.gateway, "verify_signature", fail_if_called)

    result = verify(orchestrator, "order_1", "pay_1", sign("order_1", "pay_1"), registration_id, "cancelled")

    assert result.success is False
    assert result.status_code == 400
    assert result.message == "cancelled"
    assert transport.subjects() == ["Payment cancelled"]
    assert ledger.get(registration_id).status == "Unpaid"

def test_failed_status_uses_generic_failure_text(orchestrator, transport, registration_id):
    result = verify(orchestrator, None, None, None, registration_id, "failed")

    assert result.message == "failed"
    assert transport.subjects() == ["Payment failed"]
    assert "status: failed" in transport.sent[0]["html"]

def test_status_without_registration_falls_through(orchestrator, transport):
    result = verify(orchestrator, "order_1", "pay_1", sign("order_1", "pay_1"), None, "cancelled")

    assert result.success is True
    assert transport.sent == []

def test_missing_fields_with_registration(orchestrator, ledger, transport, registration_id):
    result = verify(orchestrator, "order_1", None, "sig", registration_id)

    assert result.message == "Missing fields"
    assert result.status_code == 400
    assert transport.subjects() == ["Payment failed"]
    assert ledger.get(registration_id).status == "Unpaid"

def test_missing_fields_without_registration(orchestrator, transport):
    result = verify(orchestrator, "", "pay_1", "sig")

    assert result.message == "Missing fields"
    assert transport.sent == []

def test_unexpected_fault_is_generic(orchestrator, transport, registration_id):
    orchestrator.gateway.key_secret = None

    result = verify(orchestrator, "order_1", "pay_1", "sig", registration_id)

    assert result.success is False
    assert result.status_code == 500
    assert result.message == "Verification failed"
    assert transport.subjects() == ["Payment failed"]

def test_email_failures_do_not_affect_payment(orchestrator, ledger, registration_id):
    orchestrator.notifications.transport = RecordingTransport(fail=True)

    result = verify(orchestrator, "order_1", "pay_1", sign("order_1", "pay_1"), registration_id)

    assert result.success is True
    assert ledger.get(registration_id).status == "Paid"

def test_unknown_registration_is_not_notified(orchestrator, transport):
    result = verify(orchestrator, "order_1", "pay_1", "bad", 9999)

    assert result.message == "Invalid signature"
    assert transport.sent == []

def test_confirmation_delay_does_not_hold_back_other_payments(orchestrator, ledger, transport, registration_id):
    other_id = ledger.register("Ravi Kumar", "b@x.com", "8888888888", None, None, 500).id
    orchestrator.confirmation_delay = 0.5

    async def run():
        orchestrator.queue.start()
        try:
            for rid, payment_id in ((registration_id, "pay_a"), (other_id, "pay_b")):
                result = await orchestrator.verify_payment(
                    "order_1", payment_id, sign("order_1", payment_id), rid
                )
                assert result.success is True
            await asyncio.sleep(0.1)
            return (ledger.get(registration_id).status, ledger.get(other_id).status)
        finally:
            await orchestrator.queue.stop()

    statuses = asyncio.run(run())

    assert statuses == ("Paid", "Paid")
    assert transport.subjects().count("Payment successful") == 2
    assert transport.subjects().count("Registration confirmed") == 2
