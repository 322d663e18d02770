"""
Core utilities shared across the Pokedeck API.

Configuration, logging, the error hierarchy, password hashing and the
token authenticator live here; services depend on these primitives
instead of importing FastAPI or the storage layer.
"""
