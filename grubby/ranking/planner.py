"""
Turn drag-and-drop moves into rank writes and rating guidance.

A move is planned once per completed drop. The plan lists only the rank
writes needed to make the stored ranks reproduce the new order, plus a rating
bound for each dropped item whose rating no longer fits between its new
neighbours. Applying the plan (atomically) is the caller's job.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from ..errors import InvalidIndexError, RatingOutOfBoundsError
from .bounds import solve
from .models import (
    MAX_RATING,
    MIN_RATING,
    RankUpdate,
    RatedItem,
    RatingAdjustment,
    ReorderPlan,
)
from .orderer import order

logger = logging.getLogger(__name__)


def _check_index(index: int, size: int) -> None:
    if not 0 <= index < size:
        raise InvalidIndexError(index, size)


def move_item(items: Sequence[RatedItem], from_index: int, to_index: int) -> list[RatedItem]:
    """Standard array move: remove at *from_index*, reinsert at *to_index*."""
    _check_index(from_index, len(items))
    _check_index(to_index, len(items))
    moved = list(items)
    moved.insert(to_index, moved.pop(from_index))
    return moved


def _reproduces(after: list[RatedItem], updates: list[RankUpdate]) -> bool:
    """Would the stored ranks, once *updates* are written, sort back into *after*?"""
    ranks = {u.item_id: u.new_manual_rank for u in updates}
    applied = [
        item.model_copy(update={"manual_rank": ranks[item.id]}) if item.id in ranks else item
        for item in after
    ]
    return [i.id for i in order(applied)] == [i.id for i in after]


def _rank_updates(before: Sequence[RatedItem], after: list[RatedItem]) -> list[RankUpdate]:
    updates = [
        RankUpdate(item_id=item.id, new_manual_rank=idx + 1)
        for idx, item in enumerate(after)
        if item.id != before[idx].id
    ]
    if not updates or _reproduces(after, updates):
        return updates

    # Items outside the moved window carry stale or missing ranks that would
    # pull them out of place; rewrite every rank that disagrees with its slot.
    logger.debug("Minimal rank diff does not reproduce the new order, rewriting stale ranks")
    return [
        RankUpdate(item_id=item.id, new_manual_rank=idx + 1)
        for idx, item in enumerate(after)
        if item.manual_rank != idx + 1
    ]


def _adjustment(after: list[RatedItem], new_index: int, old_index: int) -> RatingAdjustment | None:
    item = after[new_index]
    prev_neighbor = after[new_index - 1] if new_index > 0 else None
    next_neighbor = after[new_index + 1] if new_index + 1 < len(after) else None

    bound = solve(prev_neighbor, next_neighbor)
    if bound.contains(item.rating):
        return None

    return RatingAdjustment(
        item_id=item.id,
        current_rating=item.rating,
        required_min_rating=bound.min,
        required_max_rating=bound.max,
        old_position=old_index + 1,
        new_position=new_index + 1,
    )


def plan_move(current_order: Sequence[RatedItem], from_index: int, to_index: int) -> ReorderPlan:
    """
    Plan a single drop of the item at *from_index* onto *to_index*.

    Raises InvalidIndexError if either index is outside *current_order*.
    Only the moved item gets a rating-bound check; items it displaced keep
    their ratings until they are moved themselves.
    """
    after = move_item(current_order, from_index, to_index)
    ordered_ids = [item.id for item in after]
    if from_index == to_index:
        return ReorderPlan(ordered_ids=ordered_ids)

    adjustment = _adjustment(after, to_index, from_index)
    plan = ReorderPlan(
        ordered_ids=ordered_ids,
        rank_updates=_rank_updates(current_order, after),
        rating_bounds=[adjustment] if adjustment else [],
    )
    logger.debug(
        "Planned move %d -> %d: %d rank updates, %d rating bounds",
        from_index, to_index, len(plan.rank_updates), len(plan.rating_bounds),
    )
    return plan


def check_adjusted_rating(adjustment: RatingAdjustment, rating: float) -> float:
    """Return *rating* if it satisfies *adjustment*, else raise RatingOutOfBoundsError."""
    if not adjustment.required_min_rating <= rating <= adjustment.required_max_rating:
        raise RatingOutOfBoundsError(
            f"Rating must be between {adjustment.required_min_rating:.1f} "
            f"and {adjustment.required_max_rating:.1f}"
        )
    if not MIN_RATING <= rating <= MAX_RATING:
        raise RatingOutOfBoundsError(
            f"Rating must be between {MIN_RATING:.1f} and {MAX_RATING:.1f}"
        )
    return rating


@dataclass(frozen=True)
class ReorderSession:
    """
    Pending reorder: a sequence of drops that have not been saved yet.

    Every method returns a new session, so a caller can hold the value while
    remote refreshes arrive and apply ``plan()`` in one go on save.
    """

    start: tuple[RatedItem, ...]
    current: tuple[RatedItem, ...] = ()
    dropped_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.current:
            object.__setattr__(self, "current", self.start)

    @classmethod
    def begin(cls, ordered: Sequence[RatedItem]) -> ReorderSession:
        return cls(start=tuple(ordered))

    @property
    def has_changes(self) -> bool:
        return [i.id for i in self.current] != [i.id for i in self.start]

    def move(self, from_index: int, to_index: int) -> ReorderSession:
        moved = move_item(self.current, from_index, to_index)
        if from_index == to_index:
            return self
        item_id = moved[to_index].id
        dropped = tuple(i for i in self.dropped_ids if i != item_id) + (item_id,)
        return replace(self, current=tuple(moved), dropped_ids=dropped)

    def reset(self) -> ReorderSession:
        return ReorderSession.begin(self.start)

    def plan(self) -> ReorderPlan:
        """One plan covering every drop since the session began."""
        after = list(self.current)
        ordered_ids = [item.id for item in after]
        if not self.has_changes:
            return ReorderPlan(ordered_ids=ordered_ids)

        start_index = {item.id: idx for idx, item in enumerate(self.start)}
        adjustments = []
        for item_id in self.dropped_ids:
            new_index = ordered_ids.index(item_id)
            if new_index == start_index[item_id]:
                continue
            adjustment = _adjustment(after, new_index, start_index[item_id])
            if adjustment:
                adjustments.append(adjustment)

        return ReorderPlan(
            ordered_ids=ordered_ids,
            rank_updates=_rank_updates(self.start, after),
            rating_bounds=adjustments,
        )
