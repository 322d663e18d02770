from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Keep the package importable when running tests from a source checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pokedeck.core import config as core_config  # noqa: E402
from pokedeck.db import models  # noqa: E402
from pokedeck.db import session as db_session  # noqa: E402
from pokedeck.repositories.sql_repository import SQLRepository  # noqa: E402

TEST_SECRET = "test-secret"

CATALOG = [
    # (id, name, pokedex_number, type)
    (1, "Bulbasaur", 1, "grass"),
    (2, "Ivysaur", 2, "grass"),
    (3, "Charmander", 4, "fire"),
    (4, "Charmeleon", 5, "fire"),
    (5, "Squirtle", 7, "water"),
    (6, "Wartortle", 8, "water"),
    (7, "Caterpie", 10, "bug"),
    (8, "Pidgey", 16, "normal"),
    (9, "Rattata", 19, "normal"),
    (10, "Pikachu", 25, "electric"),
    (11, "Mew", 151, "psychic"),
    (12, "Mewtwo", 150, "psychic"),
]


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Temporary SQLite database with fresh settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    _clear_caches()

    engine = db_session.get_engine()
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    engine.dispose()
    _clear_caches()


@pytest.fixture()
def repo(temp_db) -> SQLRepository:
    return SQLRepository()


@pytest.fixture()
def catalog(repo):
    return [
        repo.create_card(name, pokedex, card_type=card_type, hp=40 + card_id, attack=10 * card_id, card_id=card_id)
        for card_id, name, pokedex, card_type in CATALOG
    ]


@pytest.fixture()
def make_user(repo):
    def _make(email: str, username: str | None = None):
        return repo.create_user(email, username or email.split("@")[0], password_hash="hash")

    return _make


@pytest.fixture()
def alice(make_user):
    return make_user("alice@example.com")


@pytest.fixture()
def bob(make_user):
    return make_user("bob@example.com")
