from __future__ import annotations

from pydantic import BaseModel, Field

MIN_RATING = 1.0
MAX_RATING = 10.0


class RatedItem(BaseModel):
    id: str = Field(..., min_length=1)
    name: str | None = None
    rating: float | None = Field(default=None, ge=MIN_RATING, le=MAX_RATING)
    manual_rank: int | None = Field(
        default=None, ge=1, description="User-chosen position; overrides rating order"
    )
    cuisine: str | None = None
    price_tier: int | None = Field(default=None, ge=1, le=4)
    city: str | None = None
    is_wishlist: bool = Field(
        default=False, description="Saved but not visited; never ranked"
    )


class RankUpdate(BaseModel):
    item_id: str
    new_manual_rank: int = Field(..., ge=1)


class RatingBound(BaseModel):
    min: float
    max: float

    def contains(self, rating: float | None) -> bool:
        return rating is not None and self.min <= rating <= self.max


class RatingAdjustment(BaseModel):
    item_id: str
    current_rating: float | None
    required_min_rating: float
    required_max_rating: float
    old_position: int = Field(..., ge=1)
    new_position: int = Field(..., ge=1)

    def accepts(self, rating: float) -> bool:
        """True if *rating* is a valid rating and fits the required bound."""
        if rating < MIN_RATING or rating > MAX_RATING:
            return False
        return self.required_min_rating <= rating <= self.required_max_rating


class ReorderPlan(BaseModel):
    ordered_ids: list[str] = Field(default_factory=list)
    rank_updates: list[RankUpdate] = Field(default_factory=list)
    rating_bounds: list[RatingAdjustment] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rank_updates and not self.rating_bounds
