"""
Administrator credential check
"""

import logging
from typing import Optional

from eventdesk.core.db import Database
from eventdesk.core.errors import AuthError, ValidationError
from eventdesk.services.repositories import AdminRepo

logger = logging.getLogger(__name__)


class AdminAuth:
    """Stateless login: the credentials either match an admin row or they don't"""

    def __init__(self, database: Database):
        self.database = database

    def login(self, email: Optional[str], password: Optional[str]) -> None:
        if not email or not password:
            raise ValidationError("Email and password are required")
        with self.database.session() as db:
            admin = AdminRepo.find(db, email.strip(), password)
        if admin is None:
            logger.warning(f"Failed admin login for {email}")
            raise AuthError()
        logger.info(f"Admin {email} logged in")

    def seed(self, email: Optional[str], password: Optional[str]) -> bool:
        """Create or refresh the configured admin account"""
        if not email or not password:
            logger.warning("ADMIN_EMAIL/ADMIN_PASSWORD not set; no admin account seeded")
            return False
        with self.database.session() as db:
            AdminRepo.upsert(db, email.strip(), password)
        logger.info(f"Admin account {email} seeded")
        return True
