"""
Vendor Risk Evaluation Engine - Temporal Alert Evaluator.

============================================================
PURPOSE
============================================================
Classifies dated obligations (contract end dates, next
assessment dates, follow-up dates) against the current time.

============================================================
RULES
============================================================
    days_remaining = ceil((due_date - now) / 1 day)

    due_date <  now                        -> OVERDUE
    due_date <= now + warning_window_days  -> EXPIRING_SOON
    otherwise                              -> OK

The critical window never creates a fourth state; callers
derive "critical soon" via ObligationEvaluation.is_critical_soon.

============================================================
INPUT
============================================================
Only already-parsed date / datetime values are accepted.
A date is promoted to midnight, in the timezone of the other
operand when that one is timezone-aware. Strings are rejected.

============================================================
"""

import logging
import math
from datetime import date, datetime, timedelta, tzinfo as tzinfo_
from typing import Any, Iterable, List, Optional, Tuple

from .types import (
    AlertSeverity,
    InvalidDateError,
    Obligation,
    ObligationEvaluation,
    ObligationStatus,
)


logger = logging.getLogger(__name__)


SECONDS_PER_DAY = 86400


def to_datetime(value: Any, field: str = "date", tzinfo: Optional[tzinfo_] = None) -> datetime:
    """
    Normalize an already-parsed date value to a datetime.

    A plain date becomes midnight in `tzinfo` (naive when None).

    Raises:
        InvalidDateError: If value is not a date or datetime
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=tzinfo)
    raise InvalidDateError(
        f"{field} must be a date or datetime, got {type(value).__name__}: {value!r}",
        field=field,
    )


def _tzinfo_of(value: Any) -> Optional[tzinfo_]:
    return value.tzinfo if isinstance(value, datetime) else None


def _difference(due_date: Any, now: Any) -> timedelta:
    """
    due_date - now.

    A plain date takes the timezone of the other side, so only a
    genuine aware / naive datetime pair is rejected.
    """
    due = to_datetime(due_date, "due_date", tzinfo=_tzinfo_of(now))
    current = to_datetime(now, "now", tzinfo=_tzinfo_of(due_date))
    if (due.tzinfo is None) != (current.tzinfo is None):
        raise InvalidDateError(
            "Cannot compare timezone-aware and naive datetimes",
            field="due_date",
        )
    return due - current


def _whole_days(delta: timedelta) -> int:
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def days_remaining(due_date: Any, now: Any) -> int:
    """Whole days until due_date, rounded up. Negative once past."""
    return _whole_days(_difference(due_date, now))


def evaluate(obligation: Obligation, now: Any) -> ObligationEvaluation:
    """
    Classify an obligation at time `now`.

    Pure and idempotent: the same (obligation, now) always
    yields the same evaluation.

    Args:
        obligation: The dated commitment
        now: Current date/datetime supplied by the caller

    Returns:
        ObligationEvaluation with status and days remaining

    Raises:
        InvalidDateError: On non-date input or aware/naive mix
    """
    delta = _difference(obligation.due_date, now)

    if delta < timedelta(0):
        status = ObligationStatus.OVERDUE
    elif delta <= timedelta(days=obligation.warning_window_days):
        status = ObligationStatus.EXPIRING_SOON
    else:
        status = ObligationStatus.OK

    return ObligationEvaluation(status=status, days_remaining=_whole_days(delta))


def evaluate_all(
    obligations: Iterable[Obligation],
    now: Any,
) -> List[Tuple[Obligation, ObligationEvaluation]]:
    """Evaluate many obligations against the same instant."""
    results = [(o, evaluate(o, now)) for o in obligations]
    overdue = sum(1 for _, e in results if e.is_overdue)
    if overdue:
        logger.debug(f"{overdue} of {len(results)} obligations overdue")
    return results


def severity_for(
    obligation: Obligation,
    evaluation: ObligationEvaluation,
) -> Optional[AlertSeverity]:
    """
    Severity label for an evaluated obligation.

    OVERDUE                                -> CRITICAL
    EXPIRING_SOON inside critical window   -> CRITICAL
    EXPIRING_SOON otherwise                -> HIGH
    OK                                     -> None
    """
    if evaluation.status == ObligationStatus.OVERDUE:
        return AlertSeverity.CRITICAL
    if evaluation.status == ObligationStatus.EXPIRING_SOON:
        if evaluation.is_critical_soon(obligation.critical_window_days):
            return AlertSeverity.CRITICAL
        return AlertSeverity.HIGH
    return None
