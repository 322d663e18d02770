from __future__ import annotations

from fastapi import APIRouter, Body, Depends, status

from pokedeck.api.dependencies import current_principal, get_user_service
from pokedeck.core.errors import ValidationError
from pokedeck.core.tokens import Principal
from pokedeck.domain.decks import parse_id
from pokedeck.services.user_service import UserService, user_to_dict

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
def list_users(users: UserService = Depends(get_user_service)):
    return users.list_users()


@router.get("/{user_id}")
def get_user(user_id: str, users: UserService = Depends(get_user_service)):
    uid = parse_id(user_id)
    if uid is None:
        raise ValidationError("ID d'utilisateur invalide")
    return users.get_user(uid)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(
    payload: dict = Body(...),
    _principal: Principal = Depends(current_principal),
    users: UserService = Depends(get_user_service),
):
    user = users.create_user(payload.get("email"), payload.get("username"), payload.get("password"))
    return {"message": "Utilisateur créé", "user": user_to_dict(user)}
