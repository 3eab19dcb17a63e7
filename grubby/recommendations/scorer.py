"""
Heuristic recommendation scorer.

Every candidate starts at 50 and collects independent, capped adjustments:

* cuisine affinity (direct up to +25, or related up to +15), taste-profile
  favourite +10, and a small bonus for unknown cuisines scaled by how
  adventurous the user is
* price tier against the user's preferred or usual tier (+15 / +8 / -5) and
  +5 when it suits the preferred dining vibe
* public rating (+10 / +7 / +3 / -5), friends (up to +15), experts (+10)
* familiar city (up to +8), open now (+3), stated priorities (up to +7)

The total is rounded and clamped to 1-99. Positive signals add a short
explanation; only the first few are kept.
"""
from __future__ import annotations

import math
import warnings
from typing import Iterable

from ..config import DEFAULT_ENGINE_CONFIG, EngineConfig
from ..errors import EmptyInputWarning
from .models import (
    AdventureLevel,
    Candidate,
    DiningVibe,
    PreferenceModel,
    Priority,
    ScoredCandidate,
    TasteProfile,
)

BASE_SCORE = 50.0
MIN_SCORE = 1
MAX_SCORE = 99

CUISINE_SIMILARITY: dict[str, list[str]] = {
    "Italian": ["Mediterranean", "French", "Spanish", "Greek"],
    "Japanese": ["Korean", "Chinese", "Vietnamese", "Thai", "Asian Fusion"],
    "French": ["Italian", "Mediterranean", "European", "Belgian"],
    "Chinese": ["Japanese", "Korean", "Vietnamese", "Thai", "Asian Fusion"],
    "Mexican": ["Latin American", "Spanish", "Tex-Mex", "South American"],
    "Indian": ["Pakistani", "Nepalese", "Sri Lankan", "Bangladeshi"],
    "Thai": ["Vietnamese", "Chinese", "Japanese", "Malaysian", "Asian Fusion"],
    "Mediterranean": ["Italian", "Greek", "Turkish", "Lebanese", "Middle Eastern"],
    "American": ["BBQ", "Southern", "Burger", "Steakhouse", "Diner"],
    "Korean": ["Japanese", "Chinese", "Asian Fusion"],
    "Vietnamese": ["Thai", "Chinese", "Japanese", "Asian Fusion"],
    "Spanish": ["Mexican", "Latin American", "Mediterranean", "Portuguese"],
    "Greek": ["Mediterranean", "Turkish", "Middle Eastern", "Lebanese"],
    "Middle Eastern": ["Mediterranean", "Turkish", "Lebanese", "Greek", "Persian"],
    "BBQ": ["American", "Southern", "Steakhouse"],
    "Seafood": ["Mediterranean", "Japanese", "Coastal"],
    "Steakhouse": ["American", "BBQ", "Argentinian"],
}

VIBE_PRICE_TIERS: dict[DiningVibe, tuple[int, ...]] = {
    DiningVibe.casual: (1, 2),
    DiningVibe.trendy: (2, 3),
    DiningVibe.fine_dining: (3, 4),
    DiningVibe.cozy: (1, 2, 3),
    DiningVibe.lively: (2, 3),
}

# How strongly each level sticks to known cuisines
ADVENTURE_CUISINE_WEIGHT: dict[AdventureLevel, float] = {
    AdventureLevel.comfort: 0.9,
    AdventureLevel.sometimes: 0.6,
    AdventureLevel.always: 0.3,
}
_DEFAULT_ADVENTURE_WEIGHT = 0.5


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _related_affinity(cuisine: str, affinity: dict[str, float]) -> tuple[str, float] | None:
    """First similar cuisine (in table order) the user has any affinity for."""
    for related in CUISINE_SIMILARITY.get(cuisine, []):
        if affinity.get(related):
            return related, affinity[related]
    return None


def _score_candidate(
    candidate: Candidate,
    model: PreferenceModel,
    taste: TasteProfile | None,
) -> tuple[float, list[str]]:
    score = BASE_SCORE
    factors: list[str] = []

    # --- Cuisine ---
    if candidate.cuisine:
        direct = model.cuisine_affinity.get(candidate.cuisine, 0.0)
        related = None
        if direct:
            score += min(25.0, direct * 8)
            factors.append(f"Matches your love of {candidate.cuisine}")
        else:
            related = _related_affinity(candidate.cuisine, model.cuisine_affinity)
            if related:
                related_cuisine, related_weight = related
                score += min(15.0, related_weight * 5)
                factors.append(f"Similar to {related_cuisine} you enjoy")

        if taste and candidate.cuisine in taste.favorite_cuisines:
            score += 10
            factors.append("Matches your cuisine preferences")

        # Any related affinity, however weak, rules out the exploration bonus
        if taste and not direct and not related:
            weight = ADVENTURE_CUISINE_WEIGHT.get(
                taste.adventure_level, _DEFAULT_ADVENTURE_WEIGHT
            )
            score += (1 - weight) * 8
            if taste.adventure_level == AdventureLevel.always:
                factors.append("New cuisine to explore")

    # --- Price ---
    if candidate.price_tier:
        target = (taste.price_preference if taste else None) or model.average_price_tier
        diff = abs(candidate.price_tier - target)
        if diff == 0:
            score += 15
            factors.append("Perfect price range")
        elif diff <= 1:
            score += 8
        else:
            score -= 5

        if taste and taste.dining_vibe:
            if candidate.price_tier in VIBE_PRICE_TIERS.get(taste.dining_vibe, (1, 2, 3)):
                score += 5
                factors.append(f"Fits your {taste.dining_vibe.value.replace('_', ' ')} style")

    # --- Public rating ---
    rating = candidate.external_rating
    if rating:
        if rating >= 4.5:
            score += 10
            factors.append("Highly rated")
        elif rating >= 4.0:
            score += 7
        elif rating >= 3.5:
            score += 3
        else:
            score -= 5

    # --- Social ---
    friends = candidate.friend_rating_count
    if friends > 0:
        score += min(15, friends * 5)
        if candidate.friend_average_rating and candidate.friend_average_rating >= 7:
            factors.append(f"Loved by {friends} friend{'s' if friends > 1 else ''}")

    if candidate.expert_endorsed:
        score += 10
        factors.append("Expert recommended")

    # --- Familiarity and availability ---
    visits = model.city_familiarity.get(candidate.city, 0) if candidate.city else 0
    if visits:
        score += min(8, visits * 2)
        factors.append(f"In {candidate.city}, a city you know")

    if candidate.is_open_now:
        score += 3
        factors.append("Open now")

    # --- Priorities ---
    if taste and taste.priorities:
        if Priority.food_quality in taste.priorities and rating and rating >= 4.3:
            score += 4
        if Priority.value in taste.priorities and candidate.price_tier and candidate.price_tier <= 2:
            score += 3

    return score, factors


def score_one(
    candidate: Candidate,
    model: PreferenceModel,
    taste_profile: TasteProfile | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> ScoredCandidate:
    raw, factors = _score_candidate(candidate, model, taste_profile)
    confidence = max(MIN_SCORE, min(MAX_SCORE, _round_half_up(raw)))
    return ScoredCandidate(
        candidate=candidate,
        confidence_score=confidence,
        match_factors=factors[: config.max_match_factors],
    )


def score(
    candidates: Iterable[Candidate],
    model: PreferenceModel,
    taste_profile: TasteProfile | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[ScoredCandidate]:
    """
    Score and sort *candidates*, best first.

    Candidates with equal scores keep their input order.
    """
    candidates = list(candidates)
    if not candidates:
        warnings.warn("score() called with no candidates", EmptyInputWarning, stacklevel=2)
        return []

    scored = [score_one(c, model, taste_profile, config) for c in candidates]
    return sorted(scored, key=lambda s: s.confidence_score, reverse=True)
