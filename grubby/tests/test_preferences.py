from __future__ import annotations

import pytest

from grubby.ranking.models import RatedItem
from grubby.recommendations.preferences import build

HISTORY = [
    RatedItem(id="1", rating=8.0, cuisine="Italian", price_tier=3, city="Boston"),
    RatedItem(id="2", rating=6.0, cuisine="Italian", price_tier=1, city="Boston"),
    RatedItem(id="3", cuisine="Japanese", city="Seattle"),
    RatedItem(id="4", rating=9.0, cuisine="French", price_tier=4, city="Paris", is_wishlist=True),
]


def test_cuisine_affinity_is_count_scaled_by_mean_rating():
    model = build(HISTORY)
    assert model.cuisine_affinity["Italian"] == pytest.approx(1.4)


def test_unrated_cuisine_defaults_to_mid_rating():
    model = build(HISTORY)
    assert model.cuisine_affinity["Japanese"] == pytest.approx(0.5)


def test_wishlist_entries_are_ignored():
    model = build(HISTORY)
    assert "French" not in model.cuisine_affinity
    assert "Paris" not in model.city_familiarity


def test_average_price_excludes_missing_tiers():
    model = build(HISTORY)
    assert model.average_price_tier == pytest.approx(2.0)

    model = build([RatedItem(id="a", price_tier=1), RatedItem(id="b", price_tier=2), RatedItem(id="c")])
    assert model.average_price_tier == pytest.approx(1.5)


def test_city_familiarity_counts_visits():
    model = build(HISTORY)
    assert model.city_familiarity == {"Boston": 2, "Seattle": 1}


def test_empty_history_gives_defaults():
    model = build([])
    assert model.cuisine_affinity == {}
    assert model.average_price_tier == 2.0
    assert model.city_familiarity == {}


def test_items_without_cuisine_do_not_add_affinity():
    model = build([RatedItem(id="x", rating=9.0, price_tier=4)])
    assert model.cuisine_affinity == {}
    assert model.average_price_tier == pytest.approx(4.0)


def test_blank_cuisine_and_city_are_ignored():
    model = build([RatedItem(id="a", rating=8.0, cuisine="", city="")])
    assert model.cuisine_affinity == {}
    assert model.city_familiarity == {}
