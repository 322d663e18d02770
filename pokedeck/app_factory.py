"""ASGI entry point, e.g. ``uvicorn pokedeck.app_factory:app``."""
from pokedeck.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
