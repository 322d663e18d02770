#!/usr/bin/env python3
"""
Add a card to the catalog.

Usage:
  python scripts/add_card.py --name Pikachu --pokedex 25 [--type electric] [--hp 60] [--attack 55] [--img-url URL]
"""
from __future__ import annotations

import argparse
import sys

from pokedeck.db.create_tables import create_all
from pokedeck.repositories.sql_repository import SQLRepository


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Add a card to the catalog")
    ap.add_argument("--name", required=True, help="Card name (e.g. Pikachu)")
    ap.add_argument("--pokedex", type=int, required=True, help="Pokedex number used for ordering")
    ap.add_argument("--type", dest="card_type", help="Element type (e.g. electric)")
    ap.add_argument("--hp", type=int)
    ap.add_argument("--attack", type=int)
    ap.add_argument("--img-url")
    ap.add_argument("--id", dest="card_id", type=int, help="Explicit card id (default: autoincrement)")
    args = ap.parse_args(argv)

    name = (args.name or "").strip()
    if not name:
        raise SystemExit("Card name is required")
    if args.pokedex <= 0:
        raise SystemExit("Pokedex number must be positive")

    create_all()
    card = SQLRepository().create_card(
        name,
        args.pokedex,
        card_type=args.card_type,
        hp=args.hp,
        attack=args.attack,
        img_url=args.img_url,
        card_id=args.card_id,
    )
    print("OK: card added")
    print(f"  ID: {card.id}")
    print(f"  Name: {card.name}")
    print(f"  Pokedex: {card.pokedex_number}")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
