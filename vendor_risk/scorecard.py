"""
Vendor Risk Evaluation Engine - Vendor Scorecard.

============================================================
PURPOSE
============================================================
Builds the vendor performance scorecard:

    Risk Management  = 100 - vendor risk score     (weight 40)
    Performance      = weighted SLA / quality /
                       delivery / communication    (weight 40)
    Compliance       = certification credit        (weight 20)

Overall score is the weighted aggregate of the three
categories; a letter grade is derived from it.

Scorecard scores are "higher is better", the inverse of
risk scores.

============================================================
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .aggregator import aggregate_weighted, round_half_up
from .config import ScorecardWeights
from .normalizer import clamp
from .types import WeightedCategory


logger = logging.getLogger(__name__)


GRADE_BANDS = (
    (90, "A+"),
    (80, "A"),
    (70, "B+"),
    (60, "B"),
    (50, "C+"),
    (40, "C"),
    (30, "D"),
)


@dataclass(frozen=True)
class PerformanceMetrics:
    """Performance metrics of one review period (0-100 each)."""

    sla_compliance_percentage: Optional[float] = None
    quality_score: Optional[float] = None
    delivery_timeliness: Optional[float] = None
    communication_effectiveness: Optional[float] = None


@dataclass(frozen=True)
class Scorecard:
    """Computed scorecard for a vendor or a vendor portfolio."""

    overall_score: int
    grade: str
    risk_score: int
    performance_score: int
    compliance_score: int
    categories: List[WeightedCategory] = field(default_factory=list)

    def contribution(self, category: WeightedCategory) -> int:
        """Points a category adds to the overall score."""
        total = sum(c.weight for c in self.categories)
        if total == 0:
            return 0
        return round_half_up(category.score * category.weight / total)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_score": self.overall_score,
            "grade": self.grade,
            "risk_score": self.risk_score,
            "performance_score": self.performance_score,
            "compliance_score": self.compliance_score,
            "categories": [
                {"name": c.name, "score": c.score, "weight": c.weight}
                for c in self.categories
            ],
        }


def grade_for(score: float) -> str:
    """Letter grade for a 0-100 scorecard score."""
    for floor, grade in GRADE_BANDS:
        if score >= floor:
            return grade
    return "F"


def performance_score(
    metrics: Optional[PerformanceMetrics],
    weights: Optional[ScorecardWeights] = None,
) -> float:
    """Weighted performance of one period. Missing metrics count as 0."""
    if metrics is None:
        return 0.0
    weights = weights or ScorecardWeights()
    return (
        clamp(metrics.sla_compliance_percentage or 0) * weights.sla_weight
        + clamp(metrics.quality_score or 0) * weights.quality_weight
        + clamp(metrics.delivery_timeliness or 0) * weights.delivery_weight
        + clamp(metrics.communication_effectiveness or 0) * weights.communication_weight
    )


def compliance_score(
    certification_count: int = 0,
    framework_count: int = 0,
    has_financial_rating: bool = False,
    has_insurance: bool = False,
) -> float:
    """
    Compliance credit, capped at 100.

    10 per certification, 15 per compliance framework,
    20 for a financial stability rating, 15 for insurance.
    """
    credit = (
        certification_count * 10
        + framework_count * 15
        + (20 if has_financial_rating else 0)
        + (15 if has_insurance else 0)
    )
    return float(min(100, credit))


def build_scorecard(
    risk_score: Optional[float],
    performance: float,
    compliance: float,
    weights: Optional[ScorecardWeights] = None,
) -> Scorecard:
    """
    Combine the three category scores into a scorecard.

    Args:
        risk_score: Vendor risk score (0-100, higher = riskier);
                    None counts as 0
        performance: Performance score (0-100)
        compliance: Compliance score (0-100)
        weights: Category weights (defaults 40/40/20)
    """
    weights = weights or ScorecardWeights()
    risk_management = 100.0 - clamp(risk_score or 0)

    categories = [
        WeightedCategory("Risk Management", weights.risk_management, risk_management),
        WeightedCategory("Performance", weights.performance, clamp(performance)),
        WeightedCategory("Compliance", weights.compliance, clamp(compliance)),
    ]
    overall = aggregate_weighted(categories)

    return Scorecard(
        overall_score=overall,
        grade=grade_for(overall),
        risk_score=round_half_up(risk_management),
        performance_score=round_half_up(clamp(performance)),
        compliance_score=round_half_up(clamp(compliance)),
        categories=categories,
    )


def build_portfolio_scorecard(
    risk_scores: Iterable[Optional[float]],
    performance_periods: Iterable[PerformanceMetrics],
    compliance_scores: Iterable[float],
    weights: Optional[ScorecardWeights] = None,
) -> Scorecard:
    """
    Scorecard averaged across every vendor.

    Returns an all-zero scorecard when there are no vendors.
    """
    risk_scores = list(risk_scores)
    compliance_scores = list(compliance_scores)
    periods = list(performance_periods)

    if not risk_scores:
        return Scorecard(
            overall_score=0,
            grade=grade_for(0),
            risk_score=0,
            performance_score=0,
            compliance_score=0,
        )

    avg_risk = sum(clamp(s or 0) for s in risk_scores) / len(risk_scores)
    avg_performance = (
        sum(performance_score(p, weights) for p in periods) / len(periods) if periods else 0.0
    )
    avg_compliance = (
        sum(clamp(c) for c in compliance_scores) / len(compliance_scores) if compliance_scores else 0.0
    )

    scorecard = build_scorecard(avg_risk, avg_performance, avg_compliance, weights)
    logger.debug(f"Portfolio scorecard over {len(risk_scores)} vendors: {scorecard.overall_score} ({scorecard.grade})")
    return scorecard
