from __future__ import annotations

import itertools

import pytest

from grubby.config import EngineConfig
from grubby.errors import EmptyInputWarning
from grubby.recommendations.models import (
    AdventureLevel,
    Candidate,
    DiningVibe,
    PreferenceModel,
    Priority,
    TasteProfile,
    default_taste_profile,
)
from grubby.recommendations.scorer import score, score_one

EMPTY_MODEL = PreferenceModel()


def test_no_signals_scores_base():
    result = score_one(Candidate(id="c", cuisine="Unknown"), EMPTY_MODEL)
    assert result.confidence_score == 50
    assert result.match_factors == []


def test_direct_cuisine_affinity():
    model = PreferenceModel(cuisine_affinity={"Italian": 3.0})
    result = score_one(Candidate(id="c", cuisine="Italian"), model)
    assert result.confidence_score == 74
    assert "Matches your love of Italian" in result.match_factors


def test_direct_cuisine_affinity_is_capped():
    model = PreferenceModel(cuisine_affinity={"Italian": 10.0})
    assert score_one(Candidate(id="c", cuisine="Italian"), model).confidence_score == 75


def test_related_cuisine_affinity():
    model = PreferenceModel(cuisine_affinity={"Mediterranean": 2.0})
    result = score_one(Candidate(id="c", cuisine="Italian"), model)
    assert result.confidence_score == 60
    assert result.match_factors == ["Similar to Mediterranean you enjoy"]


def test_related_affinity_suppresses_exploration_bonus():
    model = PreferenceModel(cuisine_affinity={"Mediterranean": 0.1})
    taste = TasteProfile(adventure_level=AdventureLevel.always)
    result = score_one(Candidate(id="c", cuisine="Italian"), model, taste)
    assert result.confidence_score == 51
    assert "New cuisine to explore" not in result.match_factors


def test_exploration_bonus_for_adventurous_user():
    taste = TasteProfile(adventure_level=AdventureLevel.always)
    result = score_one(Candidate(id="c", cuisine="Ethiopian"), EMPTY_MODEL, taste)
    assert result.confidence_score == 56
    assert result.match_factors == ["New cuisine to explore"]


def test_exploration_bonus_for_comfort_user_has_no_factor():
    taste = TasteProfile(adventure_level=AdventureLevel.comfort)
    result = score_one(Candidate(id="c", cuisine="Ethiopian"), EMPTY_MODEL, taste)
    assert result.confidence_score == 51
    assert result.match_factors == []


def test_favorite_cuisine_from_taste_profile():
    model = PreferenceModel(cuisine_affinity={"Thai": 1.0})
    taste = TasteProfile(favorite_cuisines=["Thai"])
    result = score_one(Candidate(id="c", cuisine="Thai"), model, taste)
    assert result.confidence_score == 68
    assert result.match_factors == ["Matches your love of Thai", "Matches your cuisine preferences"]


@pytest.mark.parametrize("tier,expected", [(2, 65), (1, 58), (3, 58), (4, 45)])
def test_price_against_usual_tier(tier, expected):
    assert score_one(Candidate(id="c", price_tier=tier), EMPTY_MODEL).confidence_score == expected


def test_price_preference_and_vibe():
    taste = TasteProfile(price_preference=4, dining_vibe=DiningVibe.fine_dining)
    result = score_one(Candidate(id="c", price_tier=4), EMPTY_MODEL, taste)
    assert result.confidence_score == 70
    assert result.match_factors == ["Perfect price range", "Fits your fine dining style"]


@pytest.mark.parametrize("rating,expected", [(4.6, 60), (4.2, 57), (3.7, 53), (3.0, 45)])
def test_external_rating(rating, expected):
    candidate = Candidate(id="c", external_rating=rating)
    assert score_one(candidate, EMPTY_MODEL).confidence_score == expected


def test_low_rating_has_no_factor():
    result = score_one(Candidate(id="c", external_rating=3.0), EMPTY_MODEL)
    assert result.match_factors == []


def test_friend_endorsements():
    two = score_one(Candidate(id="c", friend_rating_count=2, friend_average_rating=8.0), EMPTY_MODEL)
    assert two.confidence_score == 60
    assert two.match_factors == ["Loved by 2 friends"]

    one = score_one(Candidate(id="c", friend_rating_count=1, friend_average_rating=7.0), EMPTY_MODEL)
    assert one.match_factors == ["Loved by 1 friend"]

    lukewarm = score_one(Candidate(id="c", friend_rating_count=5, friend_average_rating=5.0), EMPTY_MODEL)
    assert lukewarm.confidence_score == 65
    assert lukewarm.match_factors == []


def test_expert_city_and_open_now():
    model = PreferenceModel(city_familiarity={"Boston": 3})
    candidate = Candidate(id="c", expert_endorsed=True, city="Boston", is_open_now=True)
    result = score_one(candidate, model)
    assert result.confidence_score == 69
    assert result.match_factors == ["Expert recommended", "In Boston, a city you know", "Open now"]


def test_city_familiarity_is_capped():
    model = PreferenceModel(city_familiarity={"Boston": 10})
    assert score_one(Candidate(id="c", city="Boston"), model).confidence_score == 58


def test_priority_alignment():
    taste = TasteProfile(priorities=[Priority.food_quality, Priority.value])
    candidate = Candidate(id="c", external_rating=4.4, price_tier=2)
    result = score_one(candidate, EMPTY_MODEL, taste)
    assert result.confidence_score == 79
    assert result.match_factors == ["Perfect price range"]


def test_factors_are_truncated_in_firing_order():
    model = PreferenceModel(cuisine_affinity={"Italian": 2.0}, city_familiarity={"Rome": 1})
    candidate = Candidate(
        id="c", cuisine="Italian", price_tier=2, external_rating=4.7,
        expert_endorsed=True, city="Rome", is_open_now=True,
    )
    result = score_one(candidate, model)
    assert result.match_factors == [
        "Matches your love of Italian",
        "Perfect price range",
        "Highly rated",
    ]

    narrow = score_one(candidate, model, config=EngineConfig(max_match_factors=1))
    assert narrow.match_factors == ["Matches your love of Italian"]


def test_score_is_clamped_to_99():
    model = PreferenceModel(cuisine_affinity={"Italian": 10.0}, city_familiarity={"Rome": 9})
    taste = TasteProfile(
        favorite_cuisines=["Italian"],
        price_preference=2,
        dining_vibe=DiningVibe.casual,
        priorities=[Priority.food_quality, Priority.value],
    )
    candidate = Candidate(
        id="c", cuisine="Italian", price_tier=2, external_rating=4.9,
        friend_rating_count=4, friend_average_rating=9.0,
        expert_endorsed=True, city="Rome", is_open_now=True,
    )
    assert score_one(candidate, model, taste).confidence_score == 99


def test_score_always_within_bounds():
    models = [EMPTY_MODEL, PreferenceModel(cuisine_affinity={"Thai": 5.0}, city_familiarity={"Oslo": 4})]
    tastes = [None, default_taste_profile(), TasteProfile(adventure_level=AdventureLevel.always)]
    for tier, rating, cuisine in itertools.product(
        [None, 1, 4], [None, 1.0, 3.2, 5.0], [None, "Thai", "Korean", "Ethiopian"]
    ):
        candidate = Candidate(id="c", cuisine=cuisine, price_tier=tier, external_rating=rating, city="Oslo")
        for model in models:
            for taste in tastes:
                assert 1 <= score_one(candidate, model, taste).confidence_score <= 99


def test_results_sorted_desc_and_stable():
    candidates = [
        Candidate(id="a"),
        Candidate(id="b", expert_endorsed=True),
        Candidate(id="c"),
        Candidate(id="d", is_open_now=True),
    ]
    results = score(candidates, EMPTY_MODEL)
    assert [r.candidate.id for r in results] == ["b", "d", "a", "c"]


def test_score_empty_candidates_warns():
    with pytest.warns(EmptyInputWarning):
        assert score([], EMPTY_MODEL) == []


def test_default_taste_profile():
    taste = default_taste_profile()
    assert taste.dining_vibe == DiningVibe.casual
    assert taste.adventure_level == AdventureLevel.sometimes
    assert taste.price_preference == 2
    assert taste.priorities == [Priority.food_quality]
