"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from sqlalchemy import select, delete
from sqlalchemy.orm import Session, selectinload

from pokedeck.db.models import User, Card, Deck, DeckCard
from pokedeck.db.session import get_session, transaction


def _deck_query():
    return select(Deck).options(selectinload(Deck.cards).selectinload(DeckCard.card))


def _load_deck(session: Session, deck_id: int) -> Optional[Deck]:
    return session.execute(_deck_query().where(Deck.id == deck_id)).scalar_one_or_none()


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session.

    Decks are always returned with their DeckCard rows and cards loaded, so
    callers can read them after the session is closed.
    """

    # -------------------------- users --------------------------
    def get_user(self, user_id: int) -> Optional[User]:
        with get_session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def list_users(self) -> list[User]:
        with get_session() as session:
            return session.execute(select(User).order_by(User.id)).scalars().all()

    def create_user(self, email: str, username: str, password_hash: str) -> User:
        """Insert a user; raises IntegrityError when the email is already taken."""
        now = datetime.now(timezone.utc)
        with transaction() as session:
            user = User(
                email=email,
                username=username,
                password_hash=password_hash,
                created_at=now,
                updated_at=now,
            )
            session.add(user)
            session.flush()
            session.refresh(user)
            return user

    # -------------------------- cards --------------------------
    def list_cards(self) -> list[Card]:
        with get_session() as session:
            stmt = select(Card).order_by(Card.pokedex_number.asc(), Card.id.asc())
            return session.execute(stmt).scalars().all()

    def get_cards_by_ids(self, card_ids: Iterable[int]) -> list[Card]:
        """Return the distinct catalog cards whose id is in ``card_ids``."""
        ids = set(card_ids)
        if not ids:
            return []
        with get_session() as session:
            stmt = select(Card).where(Card.id.in_(ids))
            return session.execute(stmt).scalars().all()

    def create_card(
        self,
        name: str,
        pokedex_number: int,
        *,
        card_type: str | None = None,
        hp: int | None = None,
        attack: int | None = None,
        img_url: str | None = None,
        card_id: int | None = None,
    ) -> Card:
        entity = Card(
            id=card_id,
            name=name,
            pokedex_number=pokedex_number,
            type=card_type,
            hp=hp,
            attack=attack,
            img_url=img_url,
        )
        with transaction() as session:
            session.add(entity)
            session.flush()
            session.refresh(entity)
            return entity

    # -------------------------- decks --------------------------
    def get_deck(self, deck_id: int) -> Optional[Deck]:
        with get_session() as session:
            return _load_deck(session, deck_id)

    def list_decks_by_owner(self, user_id: int) -> list[Deck]:
        with get_session() as session:
            stmt = (
                _deck_query()
                .where(Deck.user_id == user_id)
                .order_by(Deck.created_at.desc(), Deck.id.desc())
            )
            return session.execute(stmt).scalars().all()

    def create_deck(self, user_id: int, name: str, card_ids: Sequence[int]) -> Deck:
        """Insert the deck and its card links in one transaction."""
        now = datetime.now(timezone.utc)
        with transaction() as session:
            deck = Deck(name=name, user_id=user_id, created_at=now, updated_at=now)
            session.add(deck)
            session.flush()
            session.add_all(DeckCard(deck_id=deck.id, card_id=card_id) for card_id in card_ids)
            session.flush()
            deck_id = deck.id
        with get_session() as session:
            return _load_deck(session, deck_id)

    def update_deck(
        self,
        deck_id: int,
        *,
        name: str | None = None,
        card_ids: Sequence[int] | None = None,
    ) -> Optional[Deck]:
        """Rename and/or replace the full card set of a deck in one transaction.

        ``None`` leaves the corresponding field untouched.
        """
        if name is not None or card_ids is not None:
            with transaction() as session:
                deck = session.get(Deck, deck_id)
                if deck is None:
                    return None
                if card_ids is not None:
                    session.execute(delete(DeckCard).where(DeckCard.deck_id == deck_id))
                    session.add_all(DeckCard(deck_id=deck_id, card_id=card_id) for card_id in card_ids)
                if name is not None:
                    deck.name = name
                deck.updated_at = datetime.now(timezone.utc)
                session.flush()
        return self.get_deck(deck_id)

    def delete_deck(self, deck_id: int) -> bool:
        """Remove the card links, then the deck, in one transaction."""
        with transaction() as session:
            session.execute(delete(DeckCard).where(DeckCard.deck_id == deck_id))
            result = session.execute(delete(Deck).where(Deck.id == deck_id))
            return bool(result.rowcount)
