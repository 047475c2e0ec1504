"""
Vendor Risk Evaluation Engine - Weighted Aggregator.

============================================================
PURPOSE
============================================================
Combines dimension scores into a single overall score.

- aggregate: plain mean of the assessed dimensions
- aggregate_weighted: weighted mean over risk categories

============================================================
ROUNDING POLICY
============================================================
Whole-number scores, round-half-up (2.5 -> 3), matching how
scores are displayed. Python's built-in round() is banker's
rounding and is not used.

============================================================
"""

import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from .config import TierThresholds
from .normalizer import clamp, classify_tier
from .types import (
    DimensionScore,
    InvalidWeightError,
    RiskTier,
    TierShare,
    WeightedCategory,
)


logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def aggregate(dimensions: Iterable[DimensionScore]) -> Optional[int]:
    """
    Average the assessed dimensions.

    Dimensions with a None value are excluded, not counted as 0.

    Args:
        dimensions: Dimension scores of one assessment

    Returns:
        Rounded mean of the present values, or None when no
        dimension has been assessed
    """
    present = [clamp(d.value) for d in dimensions if d.value is not None]
    if not present:
        return None
    return round_half_up(sum(present) / len(present))


def aggregate_weighted(categories: Iterable[WeightedCategory]) -> int:
    """
    Weighted mean of category scores.

    Args:
        categories: Categories with non-negative weights

    Returns:
        round(sum(score * weight) / sum(weight)), or 0 when the
        total weight is zero

    Raises:
        InvalidWeightError: If any weight is negative, NaN or infinite
    """
    categories = list(categories)
    for category in categories:
        if not _is_valid_weight(category.weight):
            raise InvalidWeightError(
                f"Category '{category.name}' has invalid weight {category.weight}",
                field=category.name,
            )

    max_weight = max((c.weight for c in categories), default=0)
    if max_weight == 0:
        return 0

    # scaled to [0, 1] so large weights cannot overflow the sums
    scaled = [(clamp(c.score), c.weight / max_weight) for c in categories]
    total_weight = sum(w for _, w in scaled)
    weighted = sum(score * w for score, w in scaled)
    return round_half_up(weighted / total_weight)


def _is_valid_weight(weight: float) -> bool:
    try:
        return math.isfinite(weight) and weight >= 0
    except OverflowError:
        return False


def average_score(scores: Iterable[Optional[float]]) -> int:
    """
    Portfolio average where unscored entries count as 0.

    Unlike aggregate(), this follows the dashboard policy of
    averaging every vendor, scored or not.
    """
    values = [clamp(s) if s is not None else 0.0 for s in scores]
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def risk_distribution(
    scores: Iterable[float],
    thresholds: Optional[TierThresholds] = None,
) -> Dict[RiskTier, TierShare]:
    """
    Count scores per tier with rounded percentages.

    Every tier is present in the result, in tier order.
    """
    counts: Dict[RiskTier, int] = {tier: 0 for tier in RiskTier}
    for score in scores:
        counts[classify_tier(score, thresholds)] += 1

    total = sum(counts.values())
    distribution = {
        tier: TierShare(
            tier=tier,
            count=count,
            percentage=round_half_up(100 * count / total) if total > 0 else 0,
        )
        for tier, count in counts.items()
    }
    logger.debug(f"Risk distribution over {total} scores: {[s.count for s in distribution.values()]}")
    return distribution


def categories_from_weights(
    dimensions: Iterable[DimensionScore],
    weights: Dict[str, float],
    default_weight: float = 1.0,
) -> List[WeightedCategory]:
    """
    Pair assessed dimensions with their category weights.

    Unassessed dimensions are dropped; dimensions without a
    configured weight get default_weight.
    """
    return [
        WeightedCategory(
            name=d.name,
            weight=weights.get(d.name, default_weight),
            score=d.value,
        )
        for d in dimensions
        if d.value is not None
    ]
