"""
User store backed by the users table: signup, login and lookup by username.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from flask_app.models import db, User
from tzdiff.errors import (
    DuplicateUserError,
    InvalidCredentialsError,
    StoreUnavailableError,
    UserNotFoundError,
)
from tzdiff.models import UserRecord

logger = logging.getLogger(__name__)


class UserService:
    """Service for reading and registering users."""

    def find_by_username(self, username: Optional[str]) -> Optional[UserRecord]:
        """Return the user's public record, or None if not stored."""
        if not username:
            return None
        try:
            user = User.query.filter_by(username=username).first()
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", username, e)
            db.session.rollback()
            raise StoreUnavailableError() from e
        return user.to_record() if user else None

    def get_profile(self, username: str) -> UserRecord:
        """
        Raises:
            UserNotFoundError: If no such user
        """
        user = self.find_by_username(username)
        if user is None:
            raise UserNotFoundError(username)
        return user

    def create_user(self, username: str, email: str, timezone: str, password: str) -> UserRecord:
        """
        Register a new user.

        Args:
            username: Unique username
            email: Unique email address
            timezone: IANA timezone identifier, validated by the caller
            password: Plain password; only its hash is stored

        Raises:
            DuplicateUserError: Username or email already taken
            StoreUnavailableError: Any other database failure
        """
        user = User(
            username=username,
            email=email,
            timezone=timezone,
            password_hash=generate_password_hash(password),
        )
        try:
            db.session.add(user)
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            logger.info("Signup rejected for %s: username or email taken", username)
            raise DuplicateUserError() from e
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Database error creating user %s: %s", username, e)
            raise StoreUnavailableError() from e

        logger.info("Created user %s (%s)", username, timezone)
        return user.to_record()

    def authenticate(self, username: str, password: str) -> UserRecord:
        """
        Check a username/password pair.

        Raises:
            InvalidCredentialsError: Unknown user or wrong password
            StoreUnavailableError: Database failure
        """
        try:
            user = User.query.filter_by(username=username).first()
        except SQLAlchemyError as e:
            logger.error("Database error during login for %s: %s", username, e)
            db.session.rollback()
            raise StoreUnavailableError() from e

        if user is None or not check_password_hash(user.password_hash, password):
            raise InvalidCredentialsError()
        return user.to_record()
