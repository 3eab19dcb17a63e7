from __future__ import annotations

import logging
from typing import Iterable

from ..config import DEFAULT_ENGINE_CONFIG, EngineConfig
from ..ranking.models import RatedItem
from .cache import cache_get, cache_set, make_key
from .models import Candidate, ScoredCandidate, TasteProfile
from .preferences import build
from .scorer import score

logger = logging.getLogger(__name__)


def _limited(rows: list[dict], limit: int | None) -> list[ScoredCandidate]:
    rows = rows[:limit] if limit is not None else rows
    return [ScoredCandidate.model_validate(row) for row in rows]


def recommend(
    rated_items: Iterable[RatedItem],
    candidates: Iterable[Candidate],
    taste_profile: TasteProfile | None = None,
    limit: int | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[ScoredCandidate]:
    """
    Build the preference model from *rated_items* and score *candidates*.

    Results are cached by input; scoring is a pure function of its inputs so
    an identical request can reuse an earlier answer. Every call returns
    freshly built models.
    """
    rated_items = list(rated_items)
    candidates = list(candidates)

    key = None
    if config.cache_enabled:
        key = make_key({
            "rated": [r.model_dump(mode="json") for r in rated_items],
            "candidates": [c.model_dump(mode="json") for c in candidates],
            "taste": taste_profile.model_dump(mode="json") if taste_profile else None,
            "factors": config.max_match_factors,
        })
        cached = cache_get(key, ttl=config.cache_ttl)
        if cached is not None:
            logger.debug("Recommendation cache hit for %s", key)
            return _limited(cached, limit)

    model = build(rated_items)
    rows = [r.model_dump(mode="json") for r in score(candidates, model, taste_profile, config=config)]

    if key is not None:
        cache_set(key, rows, ttl=config.cache_ttl, max_entries=config.cache_max_entries)

    return _limited(rows, limit)
