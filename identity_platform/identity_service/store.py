"""
Account store backed by SQLAlchemy.

The unique index on users.email is the only guard against duplicate
accounts; the store inserts and interprets the database's answer rather
than checking for an existing row first.
"""
from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .auth import hash_password, verify_password
from .errors import ConflictError
from .models import User

logger = logging.getLogger(__name__)


class AccountStore:
    def __init__(self, db: Session):
        self._db = db

    def create(self, name: Optional[str], email: str, password: str) -> User:
        """
        Insert a new account and flush it so the id is assigned.

        The row is not committed; call commit() once the rest of the
        signup has succeeded, or rollback() to discard it.

        Raises:
            ConflictError: If an account with this email already exists
        """
        user = User(name=name, email=email, password=hash_password(password))
        self._db.add(user)
        try:
            self._db.flush()
        except IntegrityError as e:
            self._db.rollback()
            logger.info("Duplicate account rejected by unique index: email=%s", email)
            raise ConflictError(f"Email already registered: {email}") from e
        return user

    def find_by_credentials(self, email: str, password: str) -> Optional[User]:
        """Return the account whose email and password both match, else None."""
        user = self._db.query(User).filter(User.email == email).one_or_none()
        if user is None or not verify_password(password, user.password):
            return None
        return user

    def commit(self) -> None:
        try:
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            raise ConflictError("Email already registered") from e

    def rollback(self) -> None:
        self._db.rollback()
