"""Marketplace Application Package — accounts, bearer auth, and offer search.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
