from __future__ import annotations

import logging
import math

from .models import MAX_RATING, MIN_RATING, RatedItem, RatingBound

logger = logging.getLogger(__name__)

STEP = 0.1


def _round_tenth(value: float) -> float:
    """Round half-up to one decimal, the precision ratings are entered at."""
    return math.floor(value * 10 + 0.5) / 10


def _rating_of(item: RatedItem) -> float:
    return item.rating if item.rating is not None else 0.0


def solve(prev_neighbor: RatedItem | None, next_neighbor: RatedItem | None) -> RatingBound:
    """
    Compute the rating interval for an item placed between two neighbours.

    *prev_neighbor* is displayed directly above the position (better ranked),
    *next_neighbor* directly below it. Either may be None at the ends of the
    list. The result is advisory; nothing is mutated.

    When the neighbours are within 0.1 of each other there is no rating that
    sits strictly between them. The interval is then widened upwards to
    ``[min, min + 0.1]`` so the user is always offered a value, even though
    that value may tie with (or exceed) the item above.
    """
    lower = MIN_RATING
    upper = MAX_RATING

    if next_neighbor is not None:
        lower = _round_tenth(_rating_of(next_neighbor) + STEP)
    if prev_neighbor is not None:
        upper = _round_tenth(_rating_of(prev_neighbor) - STEP)

    if upper <= lower:
        logger.debug("Widening degenerate rating bound [%.1f, %.1f]", lower, upper)
        upper = _round_tenth(lower + STEP)

    lower = min(max(lower, MIN_RATING), MAX_RATING)
    upper = min(max(upper, MIN_RATING), MAX_RATING)

    return RatingBound(min=lower, max=upper)
