"""
Card catalog lookups shared across routers/services.
"""

from __future__ import annotations

from pokedeck.db.models import Card
from pokedeck.repositories.sql_repository import SQLRepository


def card_to_dict(entity: Card) -> dict:
    return {
        "id": entity.id,
        "name": entity.name,
        "pokedexNumber": entity.pokedex_number,
        "type": entity.type,
        "hp": entity.hp,
        "attack": entity.attack,
        "imgUrl": entity.img_url,
    }


class CardService:
    """Read-only access to the card catalog."""

    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def list_cards(self) -> list[dict]:
        """All catalog cards, ordered by pokedex number."""
        return [card_to_dict(card) for card in self.repository.list_cards()]
