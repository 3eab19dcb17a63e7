from __future__ import annotations

import warnings
from typing import Iterable, Sequence

from ..errors import EmptyInputWarning
from .models import RatedItem


def is_rankable(item: RatedItem) -> bool:
    """Only visited places with a rating take part in the ranking."""
    return not item.is_wishlist and item.rating is not None


def _sort_key(item: RatedItem) -> tuple:
    # Manually ranked items come first, by rank; the rest by rating, highest
    # first. sorted() is stable so equal keys keep their input order.
    if item.manual_rank is not None:
        return (0, item.manual_rank)
    return (1, -(item.rating or 0.0))


def order(items: Iterable[RatedItem]) -> list[RatedItem]:
    """
    Return the canonical display order of *items*.

    Never mutates the input. Unrated and wishlist entries are dropped.
    """
    items = list(items)
    if not items:
        warnings.warn("order() called with no items", EmptyInputWarning, stacklevel=2)
        return []

    return sorted((i for i in items if is_rankable(i)), key=_sort_key)


def is_in_sync(local_ids: Sequence[str], items: Iterable[RatedItem]) -> bool:
    """
    Check a locally held display order against the canonical one.

    The caller only needs to replace its local order (and lose any pending
    drag state) when this returns False.
    """
    items = list(items)
    if not items:
        return not local_ids
    return list(local_ids) == [i.id for i in order(items)]


def locate(ordered: Sequence[RatedItem], query: str) -> int | None:
    """Return the index of the first item whose name, cuisine or city contains *query*."""
    needle = query.strip().lower()
    if not needle:
        raise ValueError("query must not be blank")

    for idx, item in enumerate(ordered):
        for field in (item.name, item.cuisine, item.city):
            if field and needle in field.lower():
                return idx
    return None
