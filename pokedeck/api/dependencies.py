"""Request-scoped helpers: services from ``app.state`` and the bearer principal."""
from __future__ import annotations

from fastapi import Request

from pokedeck.core.tokens import Principal, TokenAuthenticator
from pokedeck.services.auth_service import AuthService
from pokedeck.services.card_service import CardService
from pokedeck.services.deck_service import DeckService
from pokedeck.services.user_service import UserService


def _state_attr(request: Request, name: str):
    value = getattr(getattr(request.app, "state", None), name, None)
    if value is None:
        raise RuntimeError(f"app.state.{name} is not configured")
    return value


def get_authenticator(request: Request) -> TokenAuthenticator:
    return _state_attr(request, "token_authenticator")


def get_auth_service(request: Request) -> AuthService:
    return _state_attr(request, "auth_service")


def get_deck_service(request: Request) -> DeckService:
    return _state_attr(request, "deck_service")


def get_card_service(request: Request) -> CardService:
    return _state_attr(request, "card_service")


def get_user_service(request: Request) -> UserService:
    return _state_attr(request, "user_service")


def bearer_token(request: Request) -> str | None:
    """Extract the token from ``Authorization: Bearer <token>``."""
    header = request.headers.get("authorization") or ""
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def current_principal(request: Request) -> Principal:
    """FastAPI dependency: verify the bearer token or raise a TokenError (401)."""
    return get_authenticator(request).verify(bearer_token(request))
