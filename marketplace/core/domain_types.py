"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId and OfferId wrap UUIDs — never use bare UUID in domain logic
    - DetailLabel order is the display order of an offer's details
    - Sort keys are encoded as an Enum — no raw string matching outside the parser
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", UUID)
OfferId = NewType("OfferId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class SortDirection(str, Enum):
    """Price sort direction accepted by offer search."""
    ASC = "asc"
    DESC = "desc"


class DetailLabel(str, Enum):
    """Display labels of an offer's details, in display order."""
    BRAND = "MARQUE"
    SIZE = "TAILLE"
    CONDITION = "ÉTAT"
    COLOR = "COULEUR"
    LOCATION = "EMPLACEMENT"


def build_offer_details(
    *,
    brand: str | None,
    size: str | None,
    condition: str | None,
    color: str | None,
    city: str | None,
) -> list[dict[str, str | None]]:
    """Single-key mappings in fixed display order."""
    return [
        {DetailLabel.BRAND.value: brand},
        {DetailLabel.SIZE.value: size},
        {DetailLabel.CONDITION.value: condition},
        {DetailLabel.COLOR.value: color},
        {DetailLabel.LOCATION.value: city},
    ]
