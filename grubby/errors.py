from __future__ import annotations


class GrubbyError(Exception):
    """Base class for errors raised by the ranking core."""


class InvalidIndexError(GrubbyError, IndexError):
    """A move referenced a position outside the ordered list."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"index {index} is out of range for a list of {size} items")
        self.index = index
        self.size = size


class RatingOutOfBoundsError(GrubbyError, ValueError):
    """An adjusted rating does not fit the bound required by its new position."""


class EmptyInputWarning(UserWarning):
    """Ordering or scoring was asked to work on an empty collection."""
