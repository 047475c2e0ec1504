"""
Tests for score normalization and aggregation.

Tests cover:
- Clamping and NaN handling
- Tier classification under both threshold schemes
- Plain and weighted aggregation
- Round-half-up policy
- Risk distribution
"""

import math

import pytest

from vendor_risk import (
    ALTERNATE_TIER_THRESHOLDS,
    DimensionScore,
    InvalidWeightError,
    RiskTier,
    TierThresholds,
    WeightedCategory,
    aggregate,
    aggregate_weighted,
    average_score,
    categories_from_weights,
    clamp,
    classify_tier,
    risk_distribution,
    round_half_up,
)


# =============================================================
# TEST: Score Normalizer
# =============================================================

class TestClamp:
    """Test clamp()."""

    @pytest.mark.parametrize("raw, expected", [
        (-10, 0.0),
        (0, 0.0),
        (55.5, 55.5),
        (100, 100.0),
        (250, 100.0),
        (float("inf"), 100.0),
        (float("-inf"), 0.0),
    ])
    def test_clamps_to_range(self, raw, expected):
        assert clamp(raw) == expected

    def test_nan_becomes_zero(self):
        assert clamp(float("nan")) == 0.0

    def test_non_numeric_becomes_zero(self):
        assert clamp("not a score") == 0.0
        assert clamp(None) == 0.0

    def test_ints_beyond_float_range(self):
        """Huge ints saturate instead of overflowing."""
        assert clamp(10**400) == 100.0
        assert clamp(-(10**400)) == 0.0
        assert classify_tier(10**400) == RiskTier.CRITICAL
        assert aggregate([DimensionScore("a", 10**400), DimensionScore("b", 0)]) == 50

    @pytest.mark.parametrize("raw", [-5, 0, 12.5, 99.9, 100, 1e9, float("nan")])
    def test_idempotent(self, raw):
        assert clamp(clamp(raw)) == clamp(raw)


class TestClassifyTier:
    """Test classify_tier() boundaries."""

    @pytest.mark.parametrize("score, tier", [
        (0, RiskTier.LOW),
        (39, RiskTier.LOW),
        (40, RiskTier.MEDIUM),
        (59, RiskTier.MEDIUM),
        (60, RiskTier.HIGH),
        (79, RiskTier.HIGH),
        (80, RiskTier.CRITICAL),
        (100, RiskTier.CRITICAL),
    ])
    def test_default_boundaries(self, score, tier):
        assert classify_tier(score) == tier

    @pytest.mark.parametrize("score, tier", [
        (25, RiskTier.LOW),
        (26, RiskTier.MEDIUM),
        (50, RiskTier.MEDIUM),
        (51, RiskTier.HIGH),
        (75, RiskTier.HIGH),
        (76, RiskTier.CRITICAL),
    ])
    def test_alternate_boundaries(self, score, tier):
        assert classify_tier(score, ALTERNATE_TIER_THRESHOLDS) == tier

    def test_out_of_range_scores_are_clamped(self):
        assert classify_tier(-20) == RiskTier.LOW
        assert classify_tier(400) == RiskTier.CRITICAL
        assert classify_tier(float("nan")) == RiskTier.LOW

    def test_tiers_are_ordered(self):
        assert RiskTier.LOW < RiskTier.MEDIUM < RiskTier.HIGH < RiskTier.CRITICAL
        assert max([RiskTier.HIGH, RiskTier.LOW, RiskTier.CRITICAL]) == RiskTier.CRITICAL

    def test_non_increasing_thresholds_rejected(self):
        with pytest.raises(ValueError):
            TierThresholds(low_max=50, medium_max=40, high_max=80)


# =============================================================
# TEST: Weighted Aggregator
# =============================================================

class TestRoundHalfUp:

    @pytest.mark.parametrize("value, expected", [
        (2.5, 3),
        (3.5, 4),
        (2.4999, 2),
        (69.5, 70),
        (0.0, 0),
    ])
    def test_rounds_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestAggregate:
    """Test aggregate() null handling."""

    def test_empty_is_none(self):
        assert aggregate([]) is None

    def test_all_unassessed_is_none(self):
        assert aggregate([DimensionScore("financial", None)]) is None

    def test_unassessed_dimensions_are_excluded(self):
        dimensions = [
            DimensionScore("financial", 80),
            DimensionScore("security", None),
            DimensionScore("compliance", 60),
        ]
        assert aggregate(dimensions) == 70

    def test_zero_is_a_real_score(self):
        assert aggregate([DimensionScore("financial", 0), DimensionScore("security", 50)]) == 25

    def test_six_dimension_mean_rounds_half_up(self):
        values = [10, 20, 30, 40, 50, 65]  # mean 35.833
        dimensions = [DimensionScore(f"d{i}", v) for i, v in enumerate(values)]
        assert aggregate(dimensions) == 36

    def test_noisy_values_are_clamped(self):
        assert aggregate([DimensionScore("a", 150), DimensionScore("b", -50)]) == 50


class TestAggregateWeighted:
    """Test aggregate_weighted()."""

    def test_equal_weights(self):
        categories = [
            WeightedCategory("financial", weight=1, score=100),
            WeightedCategory("security", weight=1, score=0),
        ]
        assert aggregate_weighted(categories) == 50

    def test_unequal_weights(self):
        categories = [
            WeightedCategory("financial", weight=3, score=80),
            WeightedCategory("security", weight=1, score=40),
        ]
        assert aggregate_weighted(categories) == 70

    def test_zero_total_weight_is_zero(self):
        categories = [
            WeightedCategory("financial", weight=0, score=80),
            WeightedCategory("security", weight=0, score=40),
        ]
        assert aggregate_weighted(categories) == 0

    def test_empty_is_zero(self):
        assert aggregate_weighted([]) == 0

    def test_negative_weight_raises(self):
        categories = [
            WeightedCategory("financial", weight=1, score=80),
            WeightedCategory("security", weight=-1, score=40),
        ]
        with pytest.raises(InvalidWeightError) as exc_info:
            aggregate_weighted(categories)
        assert exc_info.value.field == "security"

    @pytest.mark.parametrize("weight", [float("nan"), float("inf"), float("-inf"), 10**400])
    def test_non_finite_weight_raises(self, weight):
        categories = [
            WeightedCategory("financial", weight=weight, score=50),
            WeightedCategory("security", weight=1, score=50),
        ]
        with pytest.raises(InvalidWeightError) as exc_info:
            aggregate_weighted(categories)
        assert exc_info.value.field == "financial"

    def test_very_large_weights(self):
        categories = [
            WeightedCategory("financial", weight=1e308, score=100),
            WeightedCategory("security", weight=1e308, score=0),
        ]
        assert aggregate_weighted(categories) == 50

    @pytest.mark.parametrize("categories", [
        [WeightedCategory("a", 2, 33), WeightedCategory("b", 5, 91)],
        [WeightedCategory("a", 1, 12.5), WeightedCategory("b", 1, 13)],
        [WeightedCategory("a", 0.4, 100), WeightedCategory("b", 0.6, 55)],
    ])
    def test_output_feeds_back_through_aggregate(self, categories):
        weighted = aggregate_weighted(categories)
        assert abs(aggregate([DimensionScore("overall", weighted)]) - weighted) <= 1

    def test_categories_from_weights_skips_unassessed(self):
        dimensions = [
            DimensionScore("financial", 80),
            DimensionScore("security", None),
            DimensionScore("strategic", 20),
        ]
        categories = categories_from_weights(dimensions, {"financial": 3})
        assert [c.name for c in categories] == ["financial", "strategic"]
        assert [c.weight for c in categories] == [3, 1.0]
        assert aggregate_weighted(categories) == 65


# =============================================================
# TEST: Portfolio helpers
# =============================================================

class TestPortfolio:

    def test_average_score_counts_unscored_as_zero(self):
        assert average_score([80, None, 40]) == 40

    def test_average_score_empty(self):
        assert average_score([]) == 0

    def test_distribution_has_every_tier(self):
        distribution = risk_distribution([10, 20, 45, 85])
        assert list(distribution) == [RiskTier.LOW, RiskTier.MEDIUM, RiskTier.HIGH, RiskTier.CRITICAL]
        assert distribution[RiskTier.LOW].count == 2
        assert distribution[RiskTier.LOW].percentage == 50
        assert distribution[RiskTier.MEDIUM].percentage == 25
        assert distribution[RiskTier.HIGH].count == 0
        assert distribution[RiskTier.CRITICAL].percentage == 25

    def test_distribution_empty(self):
        distribution = risk_distribution([])
        assert all(share.count == 0 and share.percentage == 0 for share in distribution.values())

    def test_distribution_respects_thresholds(self):
        distribution = risk_distribution([30], ALTERNATE_TIER_THRESHOLDS)
        assert distribution[RiskTier.MEDIUM].count == 1
        assert not math.isnan(distribution[RiskTier.MEDIUM].percentage)
