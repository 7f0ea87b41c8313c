"""
FastAPI dependencies resolving the services owned by the application
"""

from fastapi import Request

from eventdesk.core.db import Database
from eventdesk.services.admin_auth import AdminAuth
from eventdesk.services.event_catalog import EventCatalog
from eventdesk.services.notifications import NotificationDispatcher
from eventdesk.services.payment_orchestrator import PaymentOrchestrator
from eventdesk.services.registration_ledger import RegistrationLedger

def get_database(request: Request) -> Database:
    return request.app.state.database

def get_catalog(request: Request) -> EventCatalog:
    return request.app.state.catalog

def get_ledger(request: Request) -> RegistrationLedger:
    return request.app.state.ledger

def get_orchestrator(request: Request) -> PaymentOrchestrator:
    return request.app.state.orchestrator

def get_notifications(request: Request) -> NotificationDispatcher:
    return request.app.state.notifications

def get_admin_auth(request: Request) -> AdminAuth:
    return request.app.state.admin_auth
