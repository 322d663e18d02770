from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokedeck import __version__
from pokedeck.api.error_handlers import register_error_handlers
from pokedeck.core.config import get_settings
from pokedeck.core.logging_config import setup_logging
from pokedeck.core.tokens import TokenAuthenticator
from pokedeck.db.create_tables import create_all
from pokedeck.repositories.sql_repository import SQLRepository
from pokedeck.routers import auth as auth_router
from pokedeck.routers import cards as cards_router
from pokedeck.routers import decks as decks_router
from pokedeck.routers import users as users_router
from pokedeck.services.auth_service import AuthService
from pokedeck.services.card_service import CardService
from pokedeck.services.deck_service import DeckService
from pokedeck.services.user_service import UserService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    create_all()
    logger.info("Database schema ready")
    yield


def create_app() -> FastAPI:
    """Build the API with its services wired on ``app.state``.

    The signing secret is read once here and handed to the single
    TokenAuthenticator shared by every request.
    """
    settings = get_settings()
    setup_logging(settings.log_level)
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET must be configured to sign tokens.")

    app = FastAPI(title="Pokedeck API", version=__version__, lifespan=_lifespan)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    repository = SQLRepository()
    authenticator = TokenAuthenticator(settings.jwt_secret)
    user_service = UserService(repository)
    app.state.token_authenticator = authenticator
    app.state.user_service = user_service
    app.state.auth_service = AuthService(authenticator, user_service)
    app.state.deck_service = DeckService(repository)
    app.state.card_service = CardService(repository)

    register_error_handlers(app)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok"}

    app.include_router(auth_router.router)
    app.include_router(cards_router.router)
    app.include_router(decks_router.router)
    app.include_router(users_router.router)
    return app
