from fastapi import APIRouter, Depends

from pokedeck.api.dependencies import get_card_service
from pokedeck.services.card_service import CardService

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("")
def list_cards(cards: CardService = Depends(get_card_service)):
    return cards.list_cards()
