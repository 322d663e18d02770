from __future__ import annotations

from fastapi import APIRouter, Body, Depends, status

from pokedeck.api.dependencies import get_auth_service
from pokedeck.services.auth_service import AuthService

router = APIRouter(tags=["auth"])


@router.post("/sign-up", status_code=status.HTTP_201_CREATED)
def sign_up(payload: dict = Body(...), auth_service: AuthService = Depends(get_auth_service)):
    result = auth_service.sign_up(payload.get("email"), payload.get("username"), payload.get("password"))
    return {"message": "Inscription réussie", "token": result.token, "user": result.user}


@router.post("/sign-in")
def sign_in(payload: dict = Body(...), auth_service: AuthService = Depends(get_auth_service)):
    result = auth_service.sign_in(payload.get("email"), payload.get("password"))
    return {"message": "Connexion réussie", "token": result.token, "user": result.user}
