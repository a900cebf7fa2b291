"""ORM Models — SQLAlchemy declarative models for accounts and offers.

Invariants:
    - All models inherit from Base (db/base.py)
    - An Offer always references the Account that published it

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from marketplace.models.account import Account  # noqa: F401
from marketplace.models.offer import Offer  # noqa: F401
