from __future__ import annotations

from typing import Iterable

import pandas as pd

from ..ranking.models import RatedItem
from .models import PreferenceModel

DEFAULT_PRICE_TIER = 2.0
_UNRATED_CUISINE_MEAN = 5.0


def _to_frame(rated_items: Iterable[RatedItem]) -> pd.DataFrame:
    rows = [
        (item.cuisine or None, item.rating, item.price_tier, item.city or None)
        for item in rated_items
        if not item.is_wishlist
    ]
    return pd.DataFrame({
        "cuisine": pd.Series([r[0] for r in rows], dtype="object"),
        "rating": pd.Series([r[1] for r in rows], dtype="float64"),
        "price_tier": pd.Series([r[2] for r in rows], dtype="float64"),
        "city": pd.Series([r[3] for r in rows], dtype="object"),
    })


def build(rated_items: Iterable[RatedItem]) -> PreferenceModel:
    """
    Derive the user's preference model from their rated restaurants.

    Cuisine affinity is ``visits * (mean rating / 10)``; a cuisine visited
    but never rated counts with a mean of 5.0 rather than zero. Missing price
    tiers are left out of the mean, which defaults to 2 when none are known.
    """
    df = _to_frame(rated_items)

    counts = df.groupby("cuisine").size()
    means = (
        df.dropna(subset=["cuisine", "rating"])
        .groupby("cuisine")["rating"]
        .mean()
        .reindex(counts.index)
        .fillna(_UNRATED_CUISINE_MEAN)
    )
    affinity = counts * (means / 10)

    avg_price = df["price_tier"].mean()
    if pd.isna(avg_price):
        avg_price = DEFAULT_PRICE_TIER

    cities = df["city"].value_counts()

    return PreferenceModel(
        cuisine_affinity={str(c): float(w) for c, w in affinity.items()},
        average_price_tier=float(avg_price),
        city_familiarity={str(c): int(n) for c, n in cities.items()},
    )
