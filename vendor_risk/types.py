"""
Vendor Risk Evaluation Engine - Type Definitions.

============================================================
PURPOSE
============================================================
Data contracts for the Vendor Risk Evaluation Engine.

This module defines the enums, value records and exceptions
shared by every component of the engine. Callers build these
records from entities they fetched; the engine never owns
persistent storage.

============================================================
DESIGN PRINCIPLES
============================================================
- All records are immutable (frozen dataclasses)
- Enums for discrete states
- Absent scores are None, never zero
- Dates are already-parsed date/datetime values

============================================================
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union


DateLike = Union[date, datetime]


# ============================================================
# ENUMS
# ============================================================


class RiskTier(str, Enum):
    """
    Coarse risk classification derived from a 0-100 score.

    Totally ordered: LOW < MEDIUM < HIGH < CRITICAL.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def severity_order(self) -> int:
        """Numeric ordering for severity comparison."""
        return {"low": 0, "medium": 1, "high": 2, "critical": 3}[self.value]

    def __lt__(self, other):
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.severity_order < other.severity_order

    def __le__(self, other):
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.severity_order <= other.severity_order

    def __gt__(self, other):
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.severity_order > other.severity_order

    def __ge__(self, other):
        if not isinstance(other, RiskTier):
            return NotImplemented
        return self.severity_order >= other.severity_order


class ObligationStatus(str, Enum):
    """Classification of a dated obligation against the current time."""

    OK = "ok"
    EXPIRING_SOON = "expiring_soon"
    OVERDUE = "overdue"


class ObligationKind(str, Enum):
    """What kind of commitment an obligation tracks. Used for alert labels."""

    CONTRACT_END = "contract_end"
    CONTRACT_RENEWAL = "contract_renewal"
    NEXT_ASSESSMENT = "next_assessment"
    FOLLOW_UP = "follow_up"
    REVIEW = "review"


class StepStatus(str, Enum):
    """Status of a single workflow step."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class WorkflowStatus(str, Enum):
    """Overall status of a workflow, derived from its steps."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class TrendReducer(str, Enum):
    """How period records of the same month are combined."""

    COUNT = "count"
    SUM = "sum"
    RUNNING_AVERAGE = "running_average"

    @classmethod
    def _missing_(cls, value):
        # dashboard callers spell it camelCase
        if value == "runningAverage":
            return cls.RUNNING_AVERAGE
        return None


class AlertSeverity(str, Enum):
    """Severity attached to generated alerts."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AlertStatus(str, Enum):
    """Alert lifecycle: active -> acknowledged -> resolved."""

    ACTIVE = "active"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"


# ============================================================
# INPUT RECORDS
# ============================================================


@dataclass(frozen=True)
class DimensionScore:
    """
    One axis of a multi-factor risk assessment.

    A value of None means "not yet assessed" and is excluded
    from averages.
    """

    name: str
    value: Optional[float] = None

    @property
    def is_assessed(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class WeightedCategory:
    """A named category with a weight and its current score."""

    name: str
    weight: float
    score: float


@dataclass(frozen=True)
class Obligation:
    """
    A dated commitment tracked for expiry / overdue alerting.

    The critical window only labels severity; it never produces
    a fourth status.
    """

    name: str
    due_date: DateLike
    warning_window_days: int = 30
    critical_window_days: int = 7
    kind: ObligationKind = ObligationKind.CONTRACT_END
    subject_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.warning_window_days < 0 or self.critical_window_days < 0:
            raise ValueError(
                f"Obligation windows must be non-negative "
                f"(warning={self.warning_window_days}, critical={self.critical_window_days})"
            )


@dataclass(frozen=True)
class WorkflowStep:
    """A named unit of work inside a review or approval workflow."""

    name: str
    status: StepStatus = StepStatus.PENDING
    due_date: Optional[DateLike] = None
    completed_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.status == StepStatus.COMPLETED


@dataclass(frozen=True)
class PeriodRecord:
    """
    A dated metric value used for trend folding.

    period is a date/datetime, or an exact YYYY-MM month-key.
    """

    period: Union[DateLike, str]
    value: float = 0.0


# ============================================================
# OUTPUT RECORDS
# ============================================================


@dataclass(frozen=True)
class ObligationEvaluation:
    """Result of evaluating an obligation at a point in time."""

    status: ObligationStatus
    days_remaining: int

    @property
    def is_overdue(self) -> bool:
        return self.status == ObligationStatus.OVERDUE

    def is_critical_soon(self, critical_window_days: int) -> bool:
        """True when expiring soon and inside the critical window."""
        return (
            self.status == ObligationStatus.EXPIRING_SOON
            and self.days_remaining <= critical_window_days
        )


@dataclass(frozen=True)
class TierShare:
    """Count and rounded percentage of scores falling in one tier."""

    tier: RiskTier
    count: int = 0
    percentage: int = 0


@dataclass(frozen=True)
class IncidentTrend:
    month: str
    incidents_count: int = 0
    critical_incidents: int = 0


@dataclass(frozen=True)
class AssessmentTrend:
    month: str
    assessments_completed: int = 0
    average_risk_score: int = 0


# ============================================================
# ERROR TYPES
# ============================================================


class RiskEvaluationError(Exception):
    """Base exception for risk evaluation errors."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidWeightError(RiskEvaluationError):
    """Raised when a weighted category carries a negative weight."""
    pass


class InvalidDateError(RiskEvaluationError):
    """
    Raised when a date input is not an already-parsed date.

    The engine never parses ambiguous date strings.
    """
    pass


class InvalidTransitionError(RiskEvaluationError):
    """Raised when a workflow step transition is not allowed."""

    def __init__(
        self,
        message: str,
        from_status: Optional[StepStatus] = None,
        to_status: Optional[StepStatus] = None,
    ) -> None:
        super().__init__(message, field="status")
        self.from_status = from_status
        self.to_status = to_status
