"""
Vendor Risk Evaluation Engine - Score Normalizer.

Clamps raw 0-100 scores and classifies them into risk tiers.
Source data is user-entered and noisy, so nothing here raises:
out-of-range values are clamped and NaN becomes 0.
"""

import logging
import math
from typing import Any, Optional

from .config import DEFAULT_TIER_THRESHOLDS, TierThresholds
from .types import RiskTier


logger = logging.getLogger(__name__)


SCORE_MIN = 0.0
SCORE_MAX = 100.0


def clamp(score: Any) -> float:
    """
    Constrain a score to [0, 100].

    NaN and non-numeric input are treated as 0.
    """
    try:
        value = float(score)
    except OverflowError:
        # ints beyond float range
        return SCORE_MAX if score > 0 else SCORE_MIN
    except (TypeError, ValueError):
        logger.warning(f"Non-numeric score {score!r} treated as 0")
        return SCORE_MIN

    if math.isnan(value):
        return SCORE_MIN
    if value < SCORE_MIN:
        return SCORE_MIN
    if value > SCORE_MAX:
        return SCORE_MAX
    return value


def classify_tier(score: Any, thresholds: Optional[TierThresholds] = None) -> RiskTier:
    """
    Classify a score into a risk tier.

    Bounds are inclusive upper bounds:
        score <= low_max     -> LOW
        score <= medium_max  -> MEDIUM
        score <= high_max    -> HIGH
        otherwise            -> CRITICAL

    Args:
        score: Raw score, clamped before classification
        thresholds: Tier scheme (defaults to 39/59/79)

    Returns:
        The single RiskTier the score falls in
    """
    thresholds = thresholds or DEFAULT_TIER_THRESHOLDS
    value = clamp(score)

    if value <= thresholds.low_max:
        return RiskTier.LOW
    elif value <= thresholds.medium_max:
        return RiskTier.MEDIUM
    elif value <= thresholds.high_max:
        return RiskTier.HIGH
    return RiskTier.CRITICAL
