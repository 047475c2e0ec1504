"""
Vendor Risk Evaluation Engine - Main Entry Point.

============================================================
PURPOSE
============================================================
RiskEvaluationEngine binds a configuration to the pure rule
functions and evaluates a whole vendor snapshot in one call.

It orchestrates:
1. Dimension aggregation and tier classification
2. Obligation evaluation (contracts, assessments, follow-ups)
3. Due-diligence completion
4. Monitoring threshold checks
5. Scorecard
6. Alert building

============================================================
DESIGN PRINCIPLES
============================================================
- No I/O: callers fetch snapshots and persist the profile
- Stateless: safe to share between threads and requests
- Deterministic: `now` is always supplied by the caller

============================================================
USAGE
============================================================
    from vendor_risk import RiskEvaluationEngine, VendorSnapshot

    engine = RiskEvaluationEngine()
    profile = engine.evaluate_vendor(snapshot, now=datetime(2024, 1, 1))

    print(profile.overall_risk_score, profile.tier)
    print(format_risk_summary(profile))

============================================================
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .aggregator import aggregate, aggregate_weighted, categories_from_weights
from .alerting import RiskAlert, build_metric_alerts, build_obligation_alerts
from .completion import overall_status, percent_complete
from .config import RiskEngineConfig, TierThresholds
from .monitoring import MetricBreach, check_readings
from .normalizer import classify_tier
from .obligations import evaluate
from .records import (
    AssessmentRecord,
    ContractRecord,
    DueDiligenceRecord,
    IncidentRecord,
    MonitoringReading,
    PerformanceRecord,
    VendorRecord,
)
from .scorecard import Scorecard, build_scorecard, compliance_score, performance_score
from .trends import fold_by_month
from .types import (
    DimensionScore,
    Obligation,
    ObligationEvaluation,
    PeriodRecord,
    RiskTier,
    TrendReducer,
    WeightedCategory,
    WorkflowStatus,
    WorkflowStep,
)


logger = logging.getLogger(__name__)


# ============================================================
# SNAPSHOT / PROFILE
# ============================================================


@dataclass(frozen=True)
class VendorSnapshot:
    """Everything the caller fetched about one vendor."""

    vendor: VendorRecord
    latest_assessment: Optional[AssessmentRecord] = None
    due_diligence: Optional[DueDiligenceRecord] = None
    contracts: List[ContractRecord] = field(default_factory=list)
    performance: List[PerformanceRecord] = field(default_factory=list)
    monitoring: List[MonitoringReading] = field(default_factory=list)
    incidents: List[IncidentRecord] = field(default_factory=list)
    category_weights: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class VendorRiskProfile:
    """Computed risk profile of one vendor."""

    vendor_id: str
    vendor_name: str
    overall_risk_score: Optional[int]
    tier: Optional[RiskTier]
    weighted_risk_score: Optional[int] = None
    obligations: List[Tuple[Obligation, ObligationEvaluation]] = field(default_factory=list)
    due_diligence_percent: Optional[int] = None
    due_diligence_status: Optional[WorkflowStatus] = None
    breaches: List[MetricBreach] = field(default_factory=list)
    scorecard: Optional[Scorecard] = None
    active_incidents: int = 0
    alerts: List[RiskAlert] = field(default_factory=list)
    evaluated_at: Optional[datetime] = None

    @property
    def is_assessed(self) -> bool:
        return self.overall_risk_score is not None

    @property
    def overdue_obligations(self) -> List[Obligation]:
        return [o for o, e in self.obligations if e.is_overdue]


# ============================================================
# ENGINE
# ============================================================


class RiskEvaluationEngine:
    """
    Configured facade over the vendor risk rules.

    ============================================================
    RESPONSIBILITIES
    ============================================================
    1. Apply the configured tier scheme and windows
    2. Evaluate vendor snapshots into profiles
    3. Build alerts for the presentation layer

    ============================================================
    """

    def __init__(self, config: Optional[RiskEngineConfig] = None):
        self.config = config or RiskEngineConfig()

    # --------------------------------------------------
    # Single-rule helpers
    # --------------------------------------------------

    def classify_tier(self, score: float, thresholds: Optional[TierThresholds] = None) -> RiskTier:
        return classify_tier(score, thresholds or self.config.tiers)

    def aggregate(self, dimensions: Iterable[DimensionScore]) -> Optional[int]:
        return aggregate(dimensions)

    def aggregate_weighted(self, categories: Iterable[WeightedCategory]) -> int:
        return aggregate_weighted(categories)

    def evaluate_obligation(self, obligation: Obligation, now: datetime) -> ObligationEvaluation:
        return evaluate(obligation, now)

    def percent_complete(self, steps: Sequence[WorkflowStep]) -> int:
        return percent_complete(steps)

    def overall_status(self, steps: Sequence[WorkflowStep]) -> WorkflowStatus:
        return overall_status(steps)

    def fold_by_month(
        self,
        records: Iterable[PeriodRecord],
        reducer: Union[TrendReducer, str],
    ) -> Dict[str, float]:
        return fold_by_month(records, reducer)

    # --------------------------------------------------
    # Vendor evaluation
    # --------------------------------------------------

    def evaluate_vendor(self, snapshot: VendorSnapshot, now: datetime) -> VendorRiskProfile:
        """
        Evaluate one vendor.

        Args:
            snapshot: Vendor entities fetched by the caller
            now: Evaluation instant

        Returns:
            VendorRiskProfile; the caller persists whichever fields
            it needs (e.g. overall_risk_score on the vendor record)

        Raises:
            InvalidDateError: If an obligation date cannot be compared to now
            InvalidWeightError: If a category weight is negative
        """
        vendor = snapshot.vendor
        windows = self.config.windows

        # --------------------------------------------------
        # Step 1: Risk score from the latest assessment
        # --------------------------------------------------
        overall: Optional[int] = None
        weighted: Optional[int] = None
        assessment = snapshot.latest_assessment
        if assessment is not None:
            dimensions = assessment.dimensions()
            overall = aggregate(dimensions)
            if snapshot.category_weights and overall is not None:
                weighted = aggregate_weighted(
                    categories_from_weights(dimensions, snapshot.category_weights)
                )
        tier = classify_tier(overall, self.config.tiers) if overall is not None else None

        # --------------------------------------------------
        # Step 2: Obligations
        # --------------------------------------------------
        obligations = vendor.obligations(windows.contract, windows.assessment)
        for contract in snapshot.contracts:
            obligation = contract.obligation(windows.contract)
            if obligation is not None:
                obligations.append(obligation)
        if assessment is not None:
            follow_up = assessment.follow_up(windows.follow_up)
            if follow_up is not None:
                obligations.append(follow_up)
        evaluated = [(o, evaluate(o, now)) for o in obligations]

        # --------------------------------------------------
        # Step 3: Due diligence
        # --------------------------------------------------
        dd_percent = None
        dd_status = None
        if snapshot.due_diligence is not None:
            steps = snapshot.due_diligence.steps()
            dd_percent = percent_complete(steps)
            dd_status = overall_status(steps)

        # --------------------------------------------------
        # Step 4: Monitoring (latest reading only)
        # --------------------------------------------------
        breaches: List[MetricBreach] = []
        if snapshot.monitoring:
            latest = max(snapshot.monitoring, key=lambda r: r.monitoring_date)
            breaches = check_readings(latest.readings(), self.config.monitoring)

        # --------------------------------------------------
        # Step 5: Scorecard
        # --------------------------------------------------
        latest_performance = (
            max(snapshot.performance, key=lambda p: p.period_end_date).metrics()
            if snapshot.performance else None
        )
        scorecard = build_scorecard(
            risk_score=vendor.risk_score,
            performance=performance_score(latest_performance, self.config.scorecard),
            compliance=compliance_score(
                certification_count=len(vendor.certifications),
                framework_count=len(vendor.compliance_frameworks),
                has_financial_rating=bool(vendor.financial_stability_rating),
                has_insurance=bool(vendor.insurance_coverage),
            ),
            weights=self.config.scorecard,
        )

        # --------------------------------------------------
        # Step 6: Alerts
        # --------------------------------------------------
        alerts = build_obligation_alerts(evaluated, now)
        alerts.extend(build_metric_alerts(vendor.id, breaches, now))

        profile = VendorRiskProfile(
            vendor_id=vendor.id,
            vendor_name=vendor.name,
            overall_risk_score=overall,
            tier=tier,
            weighted_risk_score=weighted,
            obligations=evaluated,
            due_diligence_percent=dd_percent,
            due_diligence_status=dd_status,
            breaches=breaches,
            scorecard=scorecard,
            active_incidents=sum(1 for i in snapshot.incidents if i.is_active),
            alerts=alerts,
            evaluated_at=now,
        )

        logger.debug(
            f"Evaluated vendor {vendor.id}: score={overall} tier={tier.value if tier else None} "
            f"obligations={len(evaluated)} alerts={len(alerts)}"
        )
        return profile


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================


def evaluate_vendor(
    snapshot: VendorSnapshot,
    now: datetime,
    config: Optional[RiskEngineConfig] = None,
) -> VendorRiskProfile:
    """Evaluate a vendor with a temporary engine."""
    return RiskEvaluationEngine(config=config).evaluate_vendor(snapshot, now)


def format_risk_summary(profile: VendorRiskProfile) -> str:
    """
    Format a human-readable risk summary.

    Useful for logging, alerts, and dashboards.
    """
    score = "N/A" if profile.overall_risk_score is None else str(profile.overall_risk_score)
    tier = profile.tier.value.upper() if profile.tier else "UNASSESSED"
    lines = [
        "=" * 50,
        f"VENDOR RISK SUMMARY: {profile.vendor_name}",
        "=" * 50,
        f"Risk Score: {score}",
        f"Risk Tier: {tier}",
    ]
    if profile.weighted_risk_score is not None:
        lines.append(f"Weighted Score: {profile.weighted_risk_score}")
    if profile.scorecard is not None:
        lines.append(f"Scorecard: {profile.scorecard.overall_score} ({profile.scorecard.grade})")
    if profile.due_diligence_percent is not None:
        lines.append(f"Due Diligence: {profile.due_diligence_percent}% complete")
    lines.append(f"Active Incidents: {profile.active_incidents}")

    if profile.obligations:
        lines.append("")
        lines.append("Obligations:")
        for obligation, evaluation in profile.obligations:
            lines.append(
                f"  {obligation.name}: {evaluation.status.value} ({evaluation.days_remaining} days)"
            )

    if profile.alerts:
        lines.append("")
        lines.append("Alerts:")
        for alert in profile.alerts:
            lines.append(f"  [{alert.severity.value.upper()}] {alert.title}")

    lines.append("=" * 50)
    return "\n".join(lines)
