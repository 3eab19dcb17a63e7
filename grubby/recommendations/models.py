from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class DiningVibe(str, Enum):
    casual = "casual"
    trendy = "trendy"
    fine_dining = "fine_dining"
    cozy = "cozy"
    lively = "lively"


class AdventureLevel(str, Enum):
    comfort = "comfort"
    sometimes = "sometimes"
    always = "always"


class SpiceTolerance(str, Enum):
    mild = "mild"
    medium = "medium"
    spicy = "spicy"
    extra_spicy = "extra_spicy"


class Priority(str, Enum):
    food_quality = "food_quality"
    atmosphere = "atmosphere"
    service = "service"
    value = "value"
    location = "location"


class DietaryImportance(str, Enum):
    very = "very"
    somewhat = "somewhat"
    not_important = "not_important"


class DiningOccasion(str, Enum):
    weekday_lunch = "weekday_lunch"
    weeknight_dinner = "weeknight_dinner"
    weekend_brunch = "weekend_brunch"
    special_occasions = "special_occasions"


class TasteProfile(BaseModel):
    dining_vibe: DiningVibe | None = None
    adventure_level: AdventureLevel | None = None
    spice_tolerance: SpiceTolerance | None = None
    price_preference: int | None = Field(default=None, ge=1, le=4)
    favorite_cuisines: list[str] = Field(default_factory=list, max_length=3)
    priorities: list[Priority] = Field(default_factory=list)
    dietary_importance: DietaryImportance | None = None
    dining_occasion: DiningOccasion | None = None


def default_taste_profile() -> TasteProfile:
    """Profile used before the user has taken the taste quiz."""
    return TasteProfile(
        dining_vibe=DiningVibe.casual,
        adventure_level=AdventureLevel.sometimes,
        spice_tolerance=SpiceTolerance.medium,
        price_preference=2,
        favorite_cuisines=[],
        priorities=[Priority.food_quality],
        dietary_importance=DietaryImportance.somewhat,
        dining_occasion=DiningOccasion.weeknight_dinner,
    )


class Candidate(BaseModel):
    id: str = Field(..., min_length=1)
    name: str | None = None
    cuisine: str | None = None
    price_tier: int | None = Field(default=None, ge=1, le=4)
    external_rating: float | None = Field(
        default=None, ge=0.0, le=5.0, description="Public aggregate rating"
    )
    is_open_now: bool = False
    friend_rating_count: int = Field(default=0, ge=0)
    friend_average_rating: float | None = Field(default=None, ge=0.0, le=10.0)
    expert_endorsed: bool = False
    city: str | None = None


class PreferenceModel(BaseModel):
    cuisine_affinity: dict[str, float] = Field(default_factory=dict)
    average_price_tier: float = 2.0
    city_familiarity: dict[str, int] = Field(default_factory=dict)


class ScoredCandidate(BaseModel):
    candidate: Candidate
    confidence_score: int = Field(..., ge=1, le=99)
    match_factors: list[str] = Field(default_factory=list)
