"""
Participant registrations and their payment status
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventdesk.core.db import Database
from eventdesk.core.errors import AlreadyPaidError, ValidationError
from eventdesk.models import STATUS_PAID, STATUS_UNPAID
from eventdesk.schemas.registration import RegisterResult, RegistrationResponse
from eventdesk.services.repositories import RegistrationRepo

logger = logging.getLogger(__name__)


class RegistrationLedger:
    """Registrations keyed by email.

    A repeat submission for an unpaid email overwrites the existing row, a
    repeat submission for a paid email is rejected. ``email`` is unique in the
    store; an insert that loses a race against a concurrent submission is
    retried once through the lookup branch.
    """

    def __init__(self, database: Database):
        self.database = database

    def register(
        self,
        full_name: Optional[str],
        email: Optional[str],
        phone: Optional[str],
        org: Optional[str] = None,
        role: Optional[str] = None,
        amount: Optional[float] = None,
    ) -> RegisterResult:
        if not full_name or not email or not phone:
            raise ValidationError("Please fill all required fields")

        email = email.strip()
        fields = {
            "full_name": full_name,
            "phone": phone,
            "org": org,
            "role": role,
            "amount": amount or 0,
        }

        with self.database.session() as db:
            try:
                return self._register(db, email, fields)
            except IntegrityError:
                db.rollback()
                logger.warning(f"Concurrent registration for {email}, retrying as update")
                return self._register(db, email, fields)

    @staticmethod
    def _register(db: Session, email: str, fields: dict) -> RegisterResult:
        existing = RegistrationRepo.get_by_email(db, email)
        if existing is not None:
            if existing.status == STATUS_PAID:
                raise AlreadyPaidError()
            RegistrationRepo.overwrite(db, existing, **fields)
            logger.info(f"Registration {existing.id} updated for {email}")
            return RegisterResult(id=existing.id, updated=True)

        registration = RegistrationRepo.insert(db, email=email, status=STATUS_UNPAID, **fields)
        logger.info(f"Registration {registration.id} created for {email}")
        return RegisterResult(id=registration.id, updated=False)

    def list_all(self) -> List[RegistrationResponse]:
        with self.database.session() as db:
            return [
                RegistrationResponse.model_validate(r)
                for r in RegistrationRepo.list_recent_first(db)
            ]

    def get(self, registration_id: int) -> Optional[RegistrationResponse]:
        with self.database.session() as db:
            registration = RegistrationRepo.get_by_id(db, registration_id)
            if registration is None:
                return None
            return RegistrationResponse.model_validate(registration)

    def mark_paid(self, registration_id: int) -> bool:
        return self._set_status(registration_id, STATUS_PAID)

    def mark_unpaid(self, registration_id: int) -> bool:
        return self._set_status(registration_id, STATUS_UNPAID)

    def _set_status(self, registration_id: int, status: str) -> bool:
        with self.database.session() as db:
            changed = RegistrationRepo.set_status(db, registration_id, status)
        if not changed:
            logger.warning(f"Cannot set status {status}: registration {registration_id} not found")
        else:
            logger.info(f"Registration {registration_id} marked {status}")
        return changed
