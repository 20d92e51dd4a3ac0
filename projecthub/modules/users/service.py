"""Application services for the users domain."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from projecthub.core.exceptions import (
    InvalidCredentialsException,
    ResourceConflictException,
    ResourceNotFoundException,
)
from projecthub.modules.utils.security import hash as hash_password, verify

from .models import User
from .schemas import UserCreate

logger = logging.getLogger(__name__)


class UserService:
    """Identity lookups and credential checks shared by the auth and collaborator routers."""

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, payload: UserCreate) -> User:
        """Create a new user after validating email uniqueness."""
        if self.find_by_email(payload.email) is not None:
            raise ResourceConflictException("User already exists", {"field": "email"})

        new_user = User(
            username=payload.username,
            email=payload.email,
            hashed_password=hash_password(payload.password),
        )
        self.db.add(new_user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email.
            self.db.rollback()
            raise ResourceConflictException("User already exists", {"field": "email"})
        self.db.refresh(new_user)
        logger.info("User registered", extra={"user_id": new_user.id})
        return new_user

    def find_by_email(self, email: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.strip().lower())
            .first()
        )

    def get_by_email_or_404(self, email: str) -> User:
        user = self.find_by_email(email)
        if user is None:
            raise ResourceNotFoundException("User")
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Return the user owning these credentials or raise a 401."""
        user = self.find_by_email(email)
        if user is None or not verify(password, user.hashed_password):
            logger.info("Failed login attempt")
            raise InvalidCredentialsException()
        return user
