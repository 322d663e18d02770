"""
Use cases for the Pokedeck API.

Each service orchestrates the repository and core primitives to implement
business rules (sign-up, deck validation, ownership checks). Routers call
these services and never touch the database directly.
"""
