"""
Repository layer: the parameterized statements every service runs.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from eventdesk.models import Admin, Event, Registration, CURRENT_EVENT_ID


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def get_current(db: Session) -> Optional[Event]:
        return db.get(Event, CURRENT_EVENT_ID)

    @staticmethod
    def replace_current(db: Session, columns: Dict[str, Any]) -> Event:
        event = db.get(Event, CURRENT_EVENT_ID)
        if event is None:
            event = Event(id=CURRENT_EVENT_ID)
            db.add(event)
        for name, value in columns.items():
            setattr(event, name, value)
        event.updated_at = datetime.utcnow()
        db.flush()
        return event


# -------- Registration repository --------

class RegistrationRepo:
    @staticmethod
    def get_by_id(db: Session, registration_id: int) -> Optional[Registration]:
        return db.get(Registration, registration_id)

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[Registration]:
        return db.query(Registration).filter(Registration.email == email).first()

    @staticmethod
    def list_recent_first(db: Session) -> List[Registration]:
        return db.query(Registration).order_by(Registration.id.desc()).all()

    @staticmethod
    def insert(db: Session, **fields: Any) -> Registration:
        registration = Registration(**fields)
        db.add(registration)
        db.flush()
        return registration

    @staticmethod
    def overwrite(db: Session, registration: Registration, **fields: Any) -> Registration:
        for name, value in fields.items():
            setattr(registration, name, value)
        registration.updated_at = datetime.utcnow()
        db.flush()
        return registration

    @staticmethod
    def set_status(db: Session, registration_id: int, status: str) -> bool:
        count = db.query(Registration).filter(Registration.id == registration_id).update(
            {"status": status, "updated_at": datetime.utcnow()},
            synchronize_session=False,
        )
        return count > 0


# -------- Admin repository --------

class AdminRepo:
    @staticmethod
    def find(db: Session, email: str, password: str) -> Optional[Admin]:
        return db.query(Admin).filter(Admin.email == email, Admin.password == password).first()

    @staticmethod
    def upsert(db: Session, email: str, password: str) -> Admin:
        admin = db.query(Admin).filter(Admin.email == email).first()
        if admin is None:
            admin = Admin(email=email, password=password)
            db.add(admin)
        else:
            admin.password = password
        db.flush()
        return admin
