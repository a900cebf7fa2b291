"""Services Layer — account and offer directories.

Invariants:
    - Services depend on repository Protocols, never on SQLAlchemy sessions
    - Domain errors raised here are translated to HTTP only in api/error_handlers.py
"""
