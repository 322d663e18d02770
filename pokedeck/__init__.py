"""Pokedeck: user accounts and ten-card decks over a shared card catalog."""

__version__ = "1.0.0"
