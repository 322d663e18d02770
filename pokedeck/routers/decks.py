from __future__ import annotations

from fastapi import APIRouter, Body, Depends, status

from pokedeck.api.dependencies import current_principal, get_deck_service
from pokedeck.core.errors import ValidationError
from pokedeck.core.tokens import Principal
from pokedeck.domain.decks import parse_id
from pokedeck.services.deck_service import MISSING, DeckService

router = APIRouter(prefix="/decks", tags=["decks"])


def _parse_deck_id(raw: str) -> int:
    deck_id = parse_id(raw)
    if deck_id is None:
        raise ValidationError("ID de deck invalide")
    return deck_id


@router.post("", status_code=status.HTTP_201_CREATED)
def create_deck(
    payload: dict = Body(...),
    principal: Principal = Depends(current_principal),
    decks: DeckService = Depends(get_deck_service),
):
    deck = decks.create(principal, payload.get("name"), payload.get("cards"))
    return {"message": "Deck créé avec succès", "deck": deck}


# Declared before /{deck_id} so "mine" is not parsed as an id.
@router.get("/mine")
def list_my_decks(
    principal: Principal = Depends(current_principal),
    decks: DeckService = Depends(get_deck_service),
):
    items = decks.list_mine(principal)
    return {"message": "Decks récupérés avec succès", "count": len(items), "decks": items}


@router.get("/{deck_id}")
def get_deck(
    deck_id: str,
    principal: Principal = Depends(current_principal),
    decks: DeckService = Depends(get_deck_service),
):
    deck = decks.get_by_id(principal, _parse_deck_id(deck_id))
    return {"message": "Deck récupéré avec succès", "deck": deck}


@router.patch("/{deck_id}")
def update_deck(
    deck_id: str,
    payload: dict = Body(...),
    principal: Principal = Depends(current_principal),
    decks: DeckService = Depends(get_deck_service),
):
    deck = decks.update(
        principal,
        _parse_deck_id(deck_id),
        name=payload.get("name", MISSING),
        card_ids=payload.get("cards", MISSING),
    )
    return {"message": "Deck modifié avec succès", "deck": deck}


@router.delete("/{deck_id}")
def delete_deck(
    deck_id: str,
    principal: Principal = Depends(current_principal),
    decks: DeckService = Depends(get_deck_service),
):
    deleted_id = decks.delete(principal, _parse_deck_id(deck_id))
    return {"message": "Deck supprimé avec succès", "deckId": deleted_id}
