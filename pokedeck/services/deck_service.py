"""
Deck use cases: create, list, read, update and delete decks of exactly
ten catalog cards, scoped to the authenticated owner.

Card set writes (creation, replacement, deletion) run in one database
transaction together with the deck row, so a deck is never readable with
a partial card set.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pokedeck.core.errors import ForbiddenError, NotFoundError, UnauthenticatedError, ValidationError
from pokedeck.core.tokens import Principal
from pokedeck.db.models import Deck
from pokedeck.domain.decks import DECK_SIZE, has_deck_size, is_valid_card_id, normalize_deck_name
from pokedeck.repositories.sql_repository import SQLRepository
from pokedeck.services.card_service import card_to_dict

logger = logging.getLogger(__name__)

# Marks an update field the caller did not send.
MISSING: Any = object()


class DeckValidationError(ValidationError):
    pass


class InvalidCardReferencesError(DeckValidationError):
    def __init__(self, message: str = "Certaines cartes sont invalides ou manquantes"):
        super().__init__(message)


class DeckNotFoundError(NotFoundError):
    def __init__(self, message: str = "Deck non trouvé"):
        super().__init__(message)


class DeckForbiddenError(ForbiddenError):
    def __init__(self, message: str = "Vous n'avez pas accès à ce deck"):
        super().__init__(message)


class NotAuthenticatedError(UnauthenticatedError):
    def __init__(self, message: str = "Utilisateur non authentifié"):
        super().__init__(message)


def deck_to_dict(deck: Deck) -> dict:
    return {
        "id": deck.id,
        "name": deck.name,
        "userId": deck.user_id,
        "createdAt": deck.created_at.isoformat() if deck.created_at else None,
        "updatedAt": deck.updated_at.isoformat() if deck.updated_at else None,
        "cards": [card_to_dict(link.card) for link in deck.cards],
    }


class DeckService:
    """Owner-scoped deck management."""

    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    # -------------------------------------- helpers --------------------------------------
    def _require_principal(self, principal: Optional[Principal]) -> Principal:
        if principal is None:
            raise NotAuthenticatedError()
        return principal

    def _validate_name(self, value: Any, message: str = "Un nom de deck valide est requis") -> str:
        name = normalize_deck_name(value)
        if name is None:
            raise DeckValidationError(message)
        return name

    def _validate_card_ids(self, value: Any, id_message: str = "Les IDs des cartes doivent être positifs") -> list[int]:
        if not has_deck_size(value):
            raise DeckValidationError(f"Le deck doit contenir exactement {DECK_SIZE} cartes")
        if not all(is_valid_card_id(card_id) for card_id in value):
            raise DeckValidationError(id_message)
        card_ids = list(value)
        # Existence is counted over distinct catalog rows, so repeated ids fall short of DECK_SIZE.
        found = self.repository.get_cards_by_ids(card_ids)
        if len(found) != DECK_SIZE:
            raise InvalidCardReferencesError()
        return card_ids

    def _owned_deck(self, principal: Principal, deck_id: int) -> Deck:
        deck = self.repository.get_deck(deck_id)
        if deck is None:
            raise DeckNotFoundError()
        if deck.user_id != principal.user_id:
            raise DeckForbiddenError()
        return deck

    # -------------------------------------- use cases --------------------------------------
    def create(self, principal: Optional[Principal], name: Any, card_ids: Any) -> dict:
        principal = self._require_principal(principal)
        deck_name = self._validate_name(name)
        cards = self._validate_card_ids(card_ids)
        deck = self.repository.create_deck(principal.user_id, deck_name, cards)
        logger.info("User %s created deck %s", principal.user_id, deck.id)
        return deck_to_dict(deck)

    def list_mine(self, principal: Optional[Principal]) -> list[dict]:
        principal = self._require_principal(principal)
        return [deck_to_dict(deck) for deck in self.repository.list_decks_by_owner(principal.user_id)]

    def get_by_id(self, principal: Optional[Principal], deck_id: int) -> dict:
        principal = self._require_principal(principal)
        return deck_to_dict(self._owned_deck(principal, deck_id))

    def update(
        self,
        principal: Optional[Principal],
        deck_id: int,
        name: Any = MISSING,
        card_ids: Any = MISSING,
    ) -> dict:
        """Apply a partial update; omitted fields are left unchanged."""
        principal = self._require_principal(principal)
        deck = self._owned_deck(principal, deck_id)
        new_name = None
        if name is not MISSING:
            new_name = self._validate_name(name, "Le nom du deck doit être une chaîne non vide")
        new_cards = None
        if card_ids is not MISSING:
            new_cards = self._validate_card_ids(card_ids, "Les IDs des cartes doivent être des nombres positifs")
        if new_name is None and new_cards is None:
            return deck_to_dict(deck)
        updated = self.repository.update_deck(deck_id, name=new_name, card_ids=new_cards)
        if updated is None:
            # Deleted between the ownership check and the write.
            raise DeckNotFoundError()
        logger.info("User %s updated deck %s", principal.user_id, deck_id)
        return deck_to_dict(updated)

    def delete(self, principal: Optional[Principal], deck_id: int) -> int:
        principal = self._require_principal(principal)
        self._owned_deck(principal, deck_id)
        if not self.repository.delete_deck(deck_id):
            raise DeckNotFoundError()
        logger.info("User %s deleted deck %s", principal.user_id, deck_id)
        return deck_id
