"""Tests for the relationship tier catalog and lookup."""
import pytest

from models.tiers import (
    COMPLEX_TIERS, FALLBACK_TIER, TIERS_BY_ID, RELATION_TYPES,
    TYPE_HOSTILE, TYPE_NEUTRAL, TYPE_PLATONIC, TYPE_ROMANTIC,
    find_tier, tier_progress,
)


def test_catalog_shape():
    assert len(COMPLEX_TIERS) == 45
    assert len(TIERS_BY_ID) == 45
    counts = {t: sum(1 for tier in COMPLEX_TIERS if tier.type == t) for t in RELATION_TYPES}
    assert counts == {TYPE_HOSTILE: 10, TYPE_NEUTRAL: 5, TYPE_PLATONIC: 15, TYPE_ROMANTIC: 15}


@pytest.mark.parametrize("tier_type, low, high", [
    (TYPE_HOSTILE, -100, -1),
    (TYPE_NEUTRAL, 0, 29),
    (TYPE_PLATONIC, 30, 100),
    (TYPE_ROMANTIC, 30, 100),
])
def test_bands_are_contiguous_per_type(tier_type, low, high):
    bands = [t for t in COMPLEX_TIERS if t.type == tier_type]
    assert bands[0].min_score == low
    assert bands[-1].max_score == high
    for previous, current in zip(bands, bands[1:]):
        assert current.min_score == previous.max_score + 1


def test_every_tier_has_display_metadata():
    for tier in COMPLEX_TIERS:
        assert tier.icon
        assert tier.glow_color.startswith("#")
        assert tier.description


@pytest.mark.parametrize("is_romantic", [True, False])
def test_lookup_covers_full_range(is_romantic):
    for tenth in range(-1000, 1001):
        score = tenth / 10
        tier = find_tier(score, is_romantic)
        assert tier is not FALLBACK_TIER
        assert 0 <= tier_progress(score, tier) <= 100


def test_lookup_respects_relationship_type():
    assert find_tier(75, True).id == 'r10'
    assert find_tier(75, True).label == "Deeply In Love"
    assert find_tier(75, False).id == 'p10'
    assert find_tier(-95, True).id == 'h1'
    assert find_tier(0, True).id == 'n1'


def test_gap_scores_use_nearest_midpoint():
    # 5.5 sits between n1 (mid 2.5) and n2 (mid 8.5); the first wins the tie
    assert find_tier(5.5).id == 'n1'
    assert find_tier(5.8).id == 'n2'
    # between h10 (mid -5.5) and n1 (mid 2.5)
    assert find_tier(-0.5).id == 'n1'


def test_fallback_when_nothing_is_eligible():
    assert find_tier(10, False, tiers=()) is FALLBACK_TIER
    assert FALLBACK_TIER.label == 'Unknown'


def test_progress():
    assert tier_progress(77, TIERS_BY_ID['r10']) == pytest.approx(50.0)
    assert tier_progress(75, TIERS_BY_ID['r10']) == 0
    assert tier_progress(50, FALLBACK_TIER) == 100
    assert tier_progress(120, TIERS_BY_ID['p15']) == 100
