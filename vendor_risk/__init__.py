"""
Vendor Risk Evaluation Engine - Package.

============================================================
PURPOSE
============================================================
The Vendor Risk Evaluation Engine holds the business rules of
third-party risk management in one place:

- Score normalization and tier classification
- Plain and weighted score aggregation
- Contract / assessment / follow-up expiry alerting
- Workflow completion tracking
- Month-bucketed trends for dashboards

============================================================
WHAT IT IS
============================================================
- Pure, synchronous, stateless rule functions
- Configurable thresholds
- Safe to call concurrently

============================================================
WHAT IT IS NOT
============================================================
- NOT a data access layer (callers fetch and persist)
- NOT a UI (callers own formatting and colors)
- NOT a source of randomness (sample data is injected)

============================================================
TIERS (default scheme)
============================================================
- LOW:      score <= 39
- MEDIUM:   40-59
- HIGH:     60-79
- CRITICAL: >= 80

============================================================
USAGE
============================================================
    from datetime import date
    from vendor_risk import (
        DimensionScore,
        Obligation,
        aggregate,
        classify_tier,
        evaluate,
    )

    score = aggregate([
        DimensionScore("financial", 80),
        DimensionScore("security", None),
        DimensionScore("compliance", 60),
    ])                                   # 70
    tier = classify_tier(score)          # RiskTier.HIGH

    result = evaluate(
        Obligation("Contract C-1", due_date=date(2024, 1, 8)),
        now=date(2024, 1, 1),
    )                                    # EXPIRING_SOON, 7 days

============================================================
"""

# Types
from .types import (
    # Enums
    RiskTier,
    ObligationStatus,
    ObligationKind,
    StepStatus,
    WorkflowStatus,
    TrendReducer,
    AlertSeverity,
    AlertStatus,

    # Input records
    DimensionScore,
    WeightedCategory,
    Obligation,
    WorkflowStep,
    PeriodRecord,

    # Output records
    ObligationEvaluation,
    TierShare,
    IncidentTrend,
    AssessmentTrend,

    # Exceptions
    RiskEvaluationError,
    InvalidWeightError,
    InvalidDateError,
    InvalidTransitionError,
)

# Configuration
from .config import (
    TierThresholds,
    DEFAULT_TIER_THRESHOLDS,
    ALTERNATE_TIER_THRESHOLDS,
    WindowConfig,
    ObligationWindows,
    ScorecardWeights,
    MetricThreshold,
    MonitoringConfig,
    AlertingConfig,
    RiskEngineConfig,
    get_default_config,
    get_alternate_tier_config,
    load_config_from_env,
    load_config_from_yaml,
)

# Rules
from .normalizer import clamp, classify_tier
from .aggregator import (
    round_half_up,
    aggregate,
    aggregate_weighted,
    average_score,
    risk_distribution,
    categories_from_weights,
)
from .obligations import evaluate, evaluate_all, days_remaining, severity_for
from .completion import (
    VALID_STEP_TRANSITIONS,
    can_transition,
    transition_step,
    percent_complete,
    overall_status,
    current_step_index,
    steps_from_checklist,
    overdue_steps,
)
from .trends import (
    month_key,
    fold_by_month,
    sorted_months,
    fold_incident_trends,
    fold_assessment_trends,
)
from .scorecard import (
    PerformanceMetrics,
    Scorecard,
    grade_for,
    performance_score,
    compliance_score,
    build_scorecard,
    build_portfolio_scorecard,
)
from .monitoring import MetricBreach, check_metric, check_readings

# Alerting
from .alerting import (
    RiskAlert,
    AlertSender,
    LoggingAlertSender,
    AlertRateLimiter,
    RiskAlertingService,
    build_obligation_alerts,
    build_metric_alerts,
    create_logging_alerting_service,
)

# Records and data sources
from .records import (
    VendorRecord,
    AssessmentRecord,
    DueDiligenceRecord,
    ContractRecord,
    PerformanceRecord,
    MonitoringReading,
    IncidentRecord,
)
from .sample_data import VendorDataSource, SampleDataProvider

# Engine
from .engine import (
    VendorSnapshot,
    VendorRiskProfile,
    RiskEvaluationEngine,
    evaluate_vendor,
    format_risk_summary,
)


__all__ = [
    # Enums
    "RiskTier",
    "ObligationStatus",
    "ObligationKind",
    "StepStatus",
    "WorkflowStatus",
    "TrendReducer",
    "AlertSeverity",
    "AlertStatus",

    # Records
    "DimensionScore",
    "WeightedCategory",
    "Obligation",
    "WorkflowStep",
    "PeriodRecord",
    "ObligationEvaluation",
    "TierShare",
    "IncidentTrend",
    "AssessmentTrend",

    # Exceptions
    "RiskEvaluationError",
    "InvalidWeightError",
    "InvalidDateError",
    "InvalidTransitionError",

    # Configuration
    "TierThresholds",
    "DEFAULT_TIER_THRESHOLDS",
    "ALTERNATE_TIER_THRESHOLDS",
    "WindowConfig",
    "ObligationWindows",
    "ScorecardWeights",
    "MetricThreshold",
    "MonitoringConfig",
    "AlertingConfig",
    "RiskEngineConfig",
    "get_default_config",
    "get_alternate_tier_config",
    "load_config_from_env",
    "load_config_from_yaml",

    # Rules
    "clamp",
    "classify_tier",
    "round_half_up",
    "aggregate",
    "aggregate_weighted",
    "average_score",
    "risk_distribution",
    "categories_from_weights",
    "evaluate",
    "evaluate_all",
    "days_remaining",
    "severity_for",
    "VALID_STEP_TRANSITIONS",
    "can_transition",
    "transition_step",
    "percent_complete",
    "overall_status",
    "current_step_index",
    "steps_from_checklist",
    "overdue_steps",
    "month_key",
    "fold_by_month",
    "sorted_months",
    "fold_incident_trends",
    "fold_assessment_trends",
    "PerformanceMetrics",
    "Scorecard",
    "grade_for",
    "performance_score",
    "compliance_score",
    "build_scorecard",
    "build_portfolio_scorecard",
    "MetricBreach",
    "check_metric",
    "check_readings",

    # Alerting
    "RiskAlert",
    "AlertSender",
    "LoggingAlertSender",
    "AlertRateLimiter",
    "RiskAlertingService",
    "build_obligation_alerts",
    "build_metric_alerts",
    "create_logging_alerting_service",

    # Records and data sources
    "VendorRecord",
    "AssessmentRecord",
    "DueDiligenceRecord",
    "ContractRecord",
    "PerformanceRecord",
    "MonitoringReading",
    "IncidentRecord",
    "VendorDataSource",
    "SampleDataProvider",

    # Engine
    "VendorSnapshot",
    "VendorRiskProfile",
    "RiskEvaluationEngine",
    "evaluate_vendor",
    "format_risk_summary",
]


__version__ = "1.0.0"
