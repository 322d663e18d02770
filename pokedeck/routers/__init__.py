"""
FastAPI routers grouped by domain (auth, cards, decks, users).

Each module exposes an APIRouter included by ``pokedeck.app.create_app``.
"""
