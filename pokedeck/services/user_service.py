"""
User directory use cases (listing, lookup, creation).
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from pokedeck.core.errors import ConflictError, NotFoundError, ValidationError
from pokedeck.core.security import hash_password
from pokedeck.db.models import User
from pokedeck.repositories.sql_repository import SQLRepository

logger = logging.getLogger(__name__)


class EmailTakenError(ConflictError):
    def __init__(self, message: str = "Email déjà utilisé"):
        super().__init__(message)


class UserNotFoundError(NotFoundError):
    def __init__(self, message: str = "Utilisateur non trouvé"):
        super().__init__(message)


def user_to_dict(entity: User) -> dict:
    """Public projection of a user; the password hash never leaves this layer."""
    return {"id": entity.id, "username": entity.username, "email": entity.email}


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


class UserService:
    """Wraps the user table for the auth flow and the /users routes."""

    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def list_users(self) -> list[dict]:
        return [user_to_dict(user) for user in self.repository.list_users()]

    def get_user(self, user_id: int) -> dict:
        user = self.repository.get_user(user_id)
        if not user:
            raise UserNotFoundError()
        return user_to_dict(user)

    def find_by_email(self, email: str) -> User | None:
        return self.repository.get_user_by_email(email)

    def create_user(self, email, username, password) -> User:
        """Validate, hash and insert a new user.

        The email is checked up front, and the unique constraint is the
        final word when two registrations race.
        """
        email = _text(email)
        username = _text(username)
        if not email or not username or not isinstance(password, str) or not password:
            raise ValidationError("Email, username et password sont requis")
        if self.repository.get_user_by_email(email):
            raise EmailTakenError()
        try:
            user = self.repository.create_user(email, username, hash_password(password))
        except IntegrityError as exc:
            logger.info("Email uniqueness constraint rejected a new account")
            raise EmailTakenError() from exc
        logger.info("Created user %s", user.id)
        return user
