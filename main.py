"""
Event Registration & Payments - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from eventdesk.core.config import Settings, settings as default_settings
from eventdesk.core.db import Database
from eventdesk.core.errors import AppError
from eventdesk.api import (
    routes_admin,
    routes_event,
    routes_messaging,
    routes_payment,
    routes_public,
    routes_registration,
)
from eventdesk.services.admin_auth import AdminAuth
from eventdesk.services.background import BackgroundQueue
from eventdesk.services.email_transport import resolve_email_transport
from eventdesk.services.event_catalog import EventCatalog
from eventdesk.services.notifications import EmailTransport, NotificationDispatcher
from eventdesk.services.payment_gateway import RazorpayClient
from eventdesk.services.payment_orchestrator import PaymentOrchestrator
from eventdesk.services.registration_ledger import RegistrationLedger
from eventdesk.utils.responses import (
    app_error_handler,
    request_validation_handler,
    unhandled_error_handler,
)

# Configure logging
logging.basicConfig(
    level=default_settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

def create_app(
    settings: Optional[Settings] = None,
    email_transport: Optional[EmailTransport] = None,
    gateway_transport: Optional[httpx.AsyncBaseTransport] = None,
    whatsapp_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the application and wire its services around one database handle"""
    settings = settings or default_settings

    database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    if email_transport is None:
        email_transport = resolve_email_transport(settings)
    queue = BackgroundQueue("post-payment")

    ledger = RegistrationLedger(database)
    catalog = EventCatalog(database)
    notifications = NotificationDispatcher(
        settings,
        ledger,
        transport=email_transport,
        whatsapp_transport=whatsapp_transport,
    )
    gateway = RazorpayClient.from_settings(settings, transport=gateway_transport)
    orchestrator = PaymentOrchestrator(
        gateway=gateway,
        ledger=ledger,
        catalog=catalog,
        notifications=notifications,
        queue=queue,
        confirmation_delay=settings.POST_PAYMENT_EMAIL_DELAY_SECONDS,
        frontend_origin=settings.FRONTEND_ORIGIN,
    )
    admin_auth = AdminAuth(database)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan management"""
        database.connect()
        database.create_all()
        logger.info("Database tables created")
        admin_auth.seed(settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)

        if notifications.email_enabled:
            logger.info(f"Email transport: {email_transport!r}")
        else:
            logger.warning("No email transport configured; email notifications are disabled")
        if not gateway.configured:
            logger.warning("RAZORPAY_KEY_ID/RAZORPAY_KEY_SECRET not set; payments will fail")

        queue.start()
        yield
        await queue.stop()
        database.close()
        logger.info("Application shutdown")

    app = FastAPI(
        title="Event Registration & Payments",
        description="Registration, payment collection and notifications for a single event",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.database = database
    app.state.queue = queue
    app.state.ledger = ledger
    app.state.catalog = catalog
    app.state.notifications = notifications
    app.state.orchestrator = orchestrator
    app.state.admin_auth = admin_auth

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include routers
    app.include_router(routes_public.router, tags=["public"])
    app.include_router(routes_event.router, tags=["event"])
    app.include_router(routes_registration.router, tags=["registration"])
    app.include_router(routes_payment.router, tags=["payment"])
    app.include_router(routes_messaging.router, tags=["messaging"])
    app.include_router(routes_admin.router, prefix="/admin", tags=["admin"])

    return app

app = create_app()

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=True
    )
