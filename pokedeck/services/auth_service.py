"""
Authentication use cases: sign-up and sign-in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pokedeck.core.errors import UnauthenticatedError, ValidationError
from pokedeck.core.security import verify_password
from pokedeck.core.tokens import TokenAuthenticator
from pokedeck.services.user_service import UserService, user_to_dict

logger = logging.getLogger(__name__)


class InvalidCredentialsError(UnauthenticatedError):
    # Same message for unknown email and wrong password.
    def __init__(self, message: str = "Email ou mot de passe incorrect"):
        super().__init__(message)


@dataclass
class AuthResult:
    token: str
    user: dict


class AuthService:
    """Registers users and exchanges credentials for bearer tokens."""

    def __init__(self, authenticator: TokenAuthenticator, users: UserService | None = None) -> None:
        self.authenticator = authenticator
        self.users = users or UserService()

    def sign_up(self, email, username, password) -> AuthResult:
        user = self.users.create_user(email, username, password)
        token = self.authenticator.issue(user.id, user.email)
        return AuthResult(token=token, user=user_to_dict(user))

    def sign_in(self, email, password) -> AuthResult:
        raw_email = email.strip() if isinstance(email, str) else ""
        if not raw_email or not isinstance(password, str) or not password:
            raise ValidationError("Email et password sont requis")
        user = self.users.find_by_email(raw_email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Rejected sign-in attempt")
            raise InvalidCredentialsError()
        token = self.authenticator.issue(user.id, user.email)
        return AuthResult(token=token, user=user_to_dict(user))
