"""
User account logic: registration, login and profile lookup.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from errors import ConflictError, NotFoundError, UnauthorizedError
from models import User, utc_now
from schemas import LoginResponse, UserLogin, UserRegister, UserResponse
from utils.jwt import create_access_token
from utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class UserService:
    """Service for user registration and authentication."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_username_or_email(self, username_or_email: str) -> Optional[User]:
        """Find a user whose username or email matches, ignoring case."""
        if not username_or_email or not username_or_email.strip():
            return None
        value = username_or_email.strip().lower()
        query = select(User).where(
            or_(func.lower(User.username) == value, func.lower(User.email) == value)
        )
        return self.session.exec(query).first()

    def register(self, data: UserRegister) -> LoginResponse:
        logger.info("Attempting to register user with username: %s", data.username)

        if (
            self.get_by_username_or_email(data.username) is not None
            or self.get_by_username_or_email(data.email) is not None
        ):
            raise ConflictError("Username or email already exists")

        now = utc_now()
        user = User(
            username=data.username,
            email=data.email,
            password_hash=hash_password(data.password),
            created_at=now,
            updated_at=now,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            self.session.rollback()
            raise ConflictError("Username or email already exists")
        self.session.refresh(user)

        logger.info("User registered successfully with ID: %s", user.id)
        return self._login_response(user)

    def login(self, data: UserLogin) -> LoginResponse:
        logger.info("Attempting to login user: %s", data.username_or_email)

        user = self.get_by_username_or_email(data.username_or_email)
        if user is None or not verify_password(data.password, user.password_hash):
            logger.warning("Invalid login attempt for: %s", data.username_or_email)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("User logged in successfully: %s", user.id)
        return self._login_response(user)

    def get_profile(self, user_id: uuid.UUID) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            logger.warning("User with ID %s not found", user_id)
            raise NotFoundError("User not found")
        return user

    def _login_response(self, user: User) -> LoginResponse:
        token = create_access_token(user.id, user.username, user.email)
        return LoginResponse(token=token, user=UserResponse.model_validate(user))
