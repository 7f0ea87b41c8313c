"""
Shared fixtures: a throwaway SQLite database, recording email transport and
mocked gateway/Twilio HTTP transports
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from eventdesk.core.config import Settings
from eventdesk.core.db import Database
from eventdesk.services.payment_gateway import compute_signature

TEST_KEY_ID = "rzp_test_key"
TEST_KEY_SECRET = "rzp_test_secret"


class RecordingTransport:
    """Email transport that keeps messages in memory"""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    async def send(self, to, subject, html):
        if self.fail:
            raise ConnectionError("SMTP server unavailable")
        self.sent.append({"to": to, "subject": subject, "html": html})

    def subjects(self):
        return [m["subject"] for m in self.sent]


def sign(order_id, payment_id, secret=TEST_KEY_SECRET):
    return compute_signature(secret, order_id, payment_id)


def gateway_handler(request: httpx.Request) -> httpx.Response:
    """Fake Razorpay order endpoint echoing the request"""
    body = json.loads(request.content)
    return httpx.Response(
        200,
        json={
            "id": "order_TEST123",
            "entity": "order",
            "amount": body["amount"],
            "currency": body["currency"],
            "receipt": body["receipt"],
            "status": "created",
        },
    )


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        RAZORPAY_KEY_ID=TEST_KEY_ID,
        RAZORPAY_KEY_SECRET=TEST_KEY_SECRET,
        SMTP_URL=None,
        SMTP_HOST=None,
        EMAIL_SERVICE=None,
        TWILIO_ACCOUNT_SID="AC_test",
        TWILIO_AUTH_TOKEN="twilio_token",
        TWILIO_WHATSAPP_FROM="+14155238886",
        ADMIN_EMAIL="admin@example.com",
        ADMIN_PASSWORD="s3cret",
        FRONTEND_ORIGIN="https://events.example.com",
        POST_PAYMENT_EMAIL_DELAY_SECONDS=0,
    )


@pytest.fixture
def database(settings):
    """Create test database"""
    db = Database(settings.DATABASE_URL)
    db.create_all()
    try:
        yield db
    finally:
        db.drop_all()
        db.close()


@pytest.fixture
def email_transport():
    return RecordingTransport()


@pytest.fixture
def whatsapp_requests():
    return []


@pytest.fixture
def whatsapp_transport(whatsapp_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        whatsapp_requests.append(request)
        return httpx.Response(201, json={"sid": "SM_test", "status": "queued"})

    return httpx.MockTransport(handler)


@pytest.fixture
def client(settings, email_transport, whatsapp_transport):
    """Application with lifespan running; background jobs run on its loop"""
    from main import create_app

    app = create_app(
        settings,
        email_transport=email_transport,
        gateway_transport=httpx.MockTransport(gateway_handler),
        whatsapp_transport=whatsapp_transport,
    )
    with TestClient(app) as test_client:
        yield test_client
    app.state.database.connect()
    app.state.database.drop_all()
    app.state.database.close()


def wait_for_background(client):
    """Block until the post-payment queue has drained"""
    client.portal.call(client.app.state.queue.join)
