"""
HTTP contract tests through FastAPI's TestClient.
"""
from __future__ import annotations

import os
import time

import pytest
from fastapi.testclient import TestClient

from pokedeck.app import create_app
from pokedeck.core.tokens import TokenAuthenticator


TEN = list(range(1, 11))


@pytest.fixture()
def app(temp_db, catalog):
    return create_app()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def _sign_up(client, email: str, password: str = "secret-pw") -> tuple[str, dict]:
    resp = client.post("/sign-up", json={"email": email, "username": email.split("@")[0], "password": password})
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return body["token"], body["user"]


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# -------------------------------------- auth --------------------------------------
def test_sign_up_and_sign_in(client):
    token, user = _sign_up(client, "ash@example.com")
    assert token
    assert set(user) == {"id", "username", "email"}

    resp = client.post("/sign-in", json={"email": "ash@example.com", "password": "secret-pw"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Connexion réussie"
    assert body["user"] == user


def test_sign_up_conflict_and_validation(client):
    _sign_up(client, "ash@example.com")

    dup = client.post("/sign-up", json={"email": "ash@example.com", "username": "other", "password": "other"})
    assert dup.status_code == 409
    assert dup.json() == {"error": "Email déjà utilisé"}

    missing = client.post("/sign-up", json={"email": "brock@example.com"})
    assert missing.status_code == 400
    assert "error" in missing.json()


def test_sign_in_failures_share_one_response(client):
    _sign_up(client, "ash@example.com")
    wrong = client.post("/sign-in", json={"email": "ash@example.com", "password": "nope"})
    unknown = client.post("/sign-in", json={"email": "gary@example.com", "password": "secret-pw"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"error": "Email ou mot de passe incorrect"}

    assert client.post("/sign-in", json={"email": "ash@example.com"}).status_code == 400


def test_non_json_body_is_a_bad_request(client):
    resp = client.post("/sign-up", content="not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert "error" in resp.json()


# -------------------------------------- token gate --------------------------------------
def test_missing_token(client):
    resp = client.get("/decks/mine")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Token manquant"}


def test_non_bearer_header_counts_as_missing(client):
    resp = client.get("/decks/mine", headers={"Authorization": "Basic abc"})
    assert resp.json() == {"error": "Token manquant"}


def test_invalid_token(client):
    resp = client.get("/decks/mine", headers=_auth("not.a.token"))
    assert resp.status_code == 401
    assert resp.json() == {"error": "Token invalide"}


def test_expired_token(client):
    eight_days_ago = time.time() - 8 * 24 * 60 * 60
    token = TokenAuthenticator(os.environ["JWT_SECRET"], clock=lambda: eight_days_ago).issue(1, "ash@example.com")
    resp = client.get("/decks/mine", headers=_auth(token))
    assert resp.status_code == 401
    assert resp.json() == {"error": "Token expiré"}


# -------------------------------------- decks --------------------------------------
def test_deck_lifecycle_scenario(client):
    owner_token, _ = _sign_up(client, "ash@example.com")
    other_token, _ = _sign_up(client, "gary@example.com")

    created = client.post("/decks", json={"name": "Starter", "cards": TEN}, headers=_auth(owner_token))
    assert created.status_code == 201
    deck = created.json()["deck"]
    assert [card["id"] for card in deck["cards"]] == TEN
    deck_id = deck["id"]

    assert client.get(f"/decks/{deck_id}", headers=_auth(other_token)).status_code == 403
    assert client.patch(f"/decks/{deck_id}", json={"name": "Mine now"}, headers=_auth(other_token)).status_code == 403
    assert client.delete(f"/decks/{deck_id}", headers=_auth(other_token)).status_code == 403

    patched = client.patch(f"/decks/{deck_id}", json={"name": "New Name"}, headers=_auth(owner_token))
    assert patched.status_code == 200
    assert patched.json()["deck"]["name"] == "New Name"
    assert [card["id"] for card in patched.json()["deck"]["cards"]] == TEN

    deleted = client.delete(f"/decks/{deck_id}", headers=_auth(owner_token))
    assert deleted.status_code == 200
    assert deleted.json()["deckId"] == deck_id

    gone = client.get(f"/decks/{deck_id}", headers=_auth(owner_token))
    assert gone.status_code == 404
    assert gone.json() == {"error": "Deck non trouvé"}


def test_invalid_card_reference_persists_nothing(client):
    token, _ = _sign_up(client, "ash@example.com")
    resp = client.post("/decks", json={"name": "Broken", "cards": TEN[:9] + [999]}, headers=_auth(token))
    assert resp.status_code == 400
    assert resp.json() == {"error": "Certaines cartes sont invalides ou manquantes"}

    mine = client.get("/decks/mine", headers=_auth(token)).json()
    assert mine["count"] == 0
    assert mine["decks"] == []


def test_create_validation_errors(client):
    token, _ = _sign_up(client, "ash@example.com")
    assert client.post("/decks", json={"name": " ", "cards": TEN}, headers=_auth(token)).status_code == 400
    assert client.post("/decks", json={"name": "Short", "cards": TEN[:3]}, headers=_auth(token)).status_code == 400
    assert client.post("/decks", json={"name": "Neg", "cards": [-1] + TEN[1:]}, headers=_auth(token)).status_code == 400


def test_list_mine_newest_first(client):
    token, user = _sign_up(client, "ash@example.com")
    first = client.post("/decks", json={"name": "First", "cards": TEN}, headers=_auth(token)).json()["deck"]
    second = client.post("/decks", json={"name": "Second", "cards": TEN}, headers=_auth(token)).json()["deck"]

    body = client.get("/decks/mine", headers=_auth(token)).json()
    assert body["count"] == 2
    assert [deck["id"] for deck in body["decks"]] == [second["id"], first["id"]]
    assert all(deck["userId"] == user["id"] for deck in body["decks"])


def test_patch_replaces_cards_and_validates(client):
    token, _ = _sign_up(client, "ash@example.com")
    deck_id = client.post("/decks", json={"name": "Deck", "cards": TEN}, headers=_auth(token)).json()["deck"]["id"]

    replaced = client.patch(f"/decks/{deck_id}", json={"cards": list(range(3, 13))}, headers=_auth(token))
    assert replaced.status_code == 200
    assert [card["id"] for card in replaced.json()["deck"]["cards"]] == list(range(3, 13))
    assert replaced.json()["deck"]["name"] == "Deck"

    bad = client.patch(f"/decks/{deck_id}", json={"name": None}, headers=_auth(token))
    assert bad.status_code == 400

    unchanged = client.patch(f"/decks/{deck_id}", json={}, headers=_auth(token))
    assert unchanged.status_code == 200
    assert unchanged.json()["deck"] == replaced.json()["deck"]


@pytest.mark.parametrize("raw_id", ["abc", "0", "99999999999999999999999"])
@pytest.mark.parametrize("method", ["get", "delete"])
def test_invalid_deck_id(client, method, raw_id):
    token, _ = _sign_up(client, "ash@example.com")
    resp = getattr(client, method)(f"/decks/{raw_id}", headers=_auth(token))
    assert resp.status_code == 400
    assert resp.json() == {"error": "ID de deck invalide"}


# -------------------------------------- catalog & users --------------------------------------
def test_cards_are_public_and_ordered(client):
    resp = client.get("/cards")
    assert resp.status_code == 200
    numbers = [card["pokedexNumber"] for card in resp.json()]
    assert numbers == sorted(numbers)
    assert len(numbers) == 12


def test_users_routes_never_expose_password_hash(client):
    token, user = _sign_up(client, "ash@example.com")

    listing = client.get("/users").json()
    assert listing == [user]
    assert client.get(f"/users/{user['id']}").json() == user
    assert client.get("/users/999").status_code == 404
    assert client.get("/users/abc").status_code == 400
    oversized = client.get("/users/99999999999999999999999")
    assert oversized.status_code == 400
    assert oversized.json() == {"error": "ID d'utilisateur invalide"}


def test_create_user_requires_token(client):
    payload = {"email": "brock@example.com", "username": "brock", "password": "onix"}
    assert client.post("/users", json=payload).status_code == 401

    token, _ = _sign_up(client, "ash@example.com")
    created = client.post("/users", json=payload, headers=_auth(token))
    assert created.status_code == 201
    assert created.json()["user"]["email"] == "brock@example.com"
    assert "password_hash" not in created.json()["user"]
    assert client.post("/users", json=payload, headers=_auth(token)).status_code == 409


def test_unexpected_errors_are_masked(app, monkeypatch):
    def boom():
        raise RuntimeError("database is on fire")

    monkeypatch.setattr(app.state.card_service, "list_cards", boom)
    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.get("/cards")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Erreur serveur"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_oversized_card_id_is_a_bad_request(client):
    token, _ = _sign_up(client, "ash@example.com")
    resp = client.post("/decks", json={"name": "Huge", "cards": [10**20] + TEN[1:]}, headers=_auth(token))
    assert resp.status_code == 400
    assert resp.json() == {"error": "Les IDs des cartes doivent être positifs"}


def test_patch_with_oversized_deck_id(client):
    token, _ = _sign_up(client, "ash@example.com")
    resp = client.patch("/decks/99999999999999999999999", json={"name": "Ghost"}, headers=_auth(token))
    assert resp.status_code == 400
    assert resp.json() == {"error": "ID de deck invalide"}
