"""Offer Query Builder — raw search parameters to a filter/sort/pagination spec.

Invariants:
    - build_offer_query never raises: malformed optional parameters are treated as absent
    - page >= 1 and page_size >= 1 always; offset = (page - 1) * page_size
    - page_size and offset fit a signed 64-bit store integer; larger values are malformed
    - price_min and price_max combine on the same field, neither overwrites the other
    - Only the price field is sortable; any other sort value means storage order
    - matches()/sort_key() mirror the store translation in infrastructure/offer_store.py

Design Decisions:
    - One parse-with-default function per field type, using pattern checks
      instead of try/except around float()/int()
    - `limit` is the wire name for page size; `pageSize` is accepted as an alias
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass

from marketplace.core.domain_types import SortDirection

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_ROW_INDEX = 2**63 - 1

_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

_SORT_VALUES = {
    "price-asc": SortDirection.ASC,
    "price-desc": SortDirection.DESC,
}


@dataclass(frozen=True)
class OfferQuery:
    """Validated search intent derived from one request."""
    title_pattern: str | None = None
    price_min: float | None = None
    price_max: float | None = None
    sort_direction: SortDirection | None = None
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def matches(self, title: str, price: float) -> bool:
        """In-memory equivalent of the store filter."""
        if self.title_pattern is not None:
            if self.title_pattern.lower() not in (title or "").lower():
                return False
        if self.price_min is not None and price < self.price_min:
            return False
        if self.price_max is not None and price > self.price_max:
            return False
        return True

    def sort_key(self, price: float) -> float | None:
        """Key for sorted(); None when storage order applies."""
        if self.sort_direction is None:
            return None
        return price if self.sort_direction is SortDirection.ASC else -price


def parse_number(raw: str | None) -> float | None:
    """Finite decimal number, or None."""
    if raw is None:
        return None
    text = raw.strip()
    if not _NUMBER_RE.match(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def parse_positive_int(raw: str | None, default: int, maximum: int = MAX_ROW_INDEX) -> int:
    """Positive base-10 integer no larger than `maximum`, or `default`."""
    if raw is None:
        return default
    text = raw.strip()
    if not text.isascii() or not text.isdigit():
        return default
    value = int(text)
    return value if 1 <= value <= maximum else default


def parse_title(raw: str | None) -> str | None:
    if not raw:
        return None
    return raw


def parse_sort(raw: str | None) -> SortDirection | None:
    if raw is None:
        return None
    return _SORT_VALUES.get(raw.strip())


def build_offer_query(params: Mapping[str, str]) -> OfferQuery:
    """Translate raw query parameters into an OfferQuery."""
    page_size_raw = params.get("limit")
    if page_size_raw is None:
        page_size_raw = params.get("pageSize")
    page_size = parse_positive_int(page_size_raw, DEFAULT_PAGE_SIZE)
    page = parse_positive_int(params.get("page"), DEFAULT_PAGE)
    if (page - 1) * page_size > MAX_ROW_INDEX:
        page = DEFAULT_PAGE
    return OfferQuery(
        title_pattern=parse_title(params.get("title")),
        price_min=parse_number(params.get("priceMin")),
        price_max=parse_number(params.get("priceMax")),
        sort_direction=parse_sort(params.get("sort")),
        page=page,
        page_size=page_size,
    )
