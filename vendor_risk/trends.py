"""
Vendor Risk Evaluation Engine - Trend Reducer.

Folds dated records into YYYY-MM month buckets for dashboards.

Averages are per month only. Earlier months never leak into
later ones: averaging the running average with each new value
biases the result toward recent points and is not done here.

The returned dict keeps first-seen order; sort with
sorted_months() when chronological order matters.
"""

import logging
import re
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Tuple, TypeVar, Union

from .aggregator import round_half_up
from .types import (
    AssessmentTrend,
    IncidentTrend,
    InvalidDateError,
    PeriodRecord,
    TrendReducer,
)


logger = logging.getLogger(__name__)

_MONTH_KEY = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")

T = TypeVar("T")


def month_key(period: Any) -> str:
    """
    Month-key (YYYY-MM) of a date, datetime or exact month-key string.

    Raises:
        InvalidDateError: For anything else, including full date strings
    """
    if isinstance(period, (date, datetime)):
        return f"{period.year:04d}-{period.month:02d}"
    if isinstance(period, str) and _MONTH_KEY.match(period):
        return period
    raise InvalidDateError(
        f"Cannot derive a month-key from {type(period).__name__}: {period!r}",
        field="period",
    )


def fold_by_month(
    records: Iterable[PeriodRecord],
    reducer: Union[TrendReducer, str],
) -> Dict[str, float]:
    """
    Group records by month and reduce each month.

    Args:
        records: Dated metric values
        reducer: COUNT, SUM or RUNNING_AVERAGE (per-month mean)

    Returns:
        Mapping of month-key to reduced value, in first-seen order

    Raises:
        InvalidDateError: If a record's period is not a date
        ValueError: If reducer is unknown
    """
    reducer = TrendReducer(reducer)

    buckets: Dict[str, List[float]] = {}
    for record in records:
        buckets.setdefault(month_key(record.period), []).append(record.value)

    if reducer == TrendReducer.COUNT:
        result = {month: len(values) for month, values in buckets.items()}
    elif reducer == TrendReducer.SUM:
        result = {month: sum(values) for month, values in buckets.items()}
    else:
        result = {month: sum(values) / len(values) for month, values in buckets.items()}

    logger.debug(f"Folded {sum(len(v) for v in buckets.values())} records into {len(result)} months ({reducer.value})")
    return result


def sorted_months(folded: Dict[str, T]) -> List[Tuple[str, T]]:
    """Chronological (month, value) pairs; zero-padded keys sort as strings."""
    return sorted(folded.items(), key=lambda item: item[0])


def fold_incident_trends(incidents: Iterable[Tuple[Any, str]]) -> List[IncidentTrend]:
    """
    Monthly incident counts.

    Args:
        incidents: (incident_date, severity) pairs

    Returns:
        IncidentTrend per month, chronologically sorted
    """
    incidents = list(incidents)
    counts = fold_by_month(
        (PeriodRecord(period=when) for when, _ in incidents), TrendReducer.COUNT
    )
    critical = fold_by_month(
        (
            PeriodRecord(period=when, value=1.0 if severity == "critical" else 0.0)
            for when, severity in incidents
        ),
        TrendReducer.SUM,
    )
    return [
        IncidentTrend(
            month=month,
            incidents_count=int(count),
            critical_incidents=int(critical.get(month, 0)),
        )
        for month, count in sorted_months(counts)
    ]


def fold_assessment_trends(assessments: Iterable[Tuple[Any, float]]) -> List[AssessmentTrend]:
    """
    Monthly assessment counts and average overall risk score.

    Args:
        assessments: (assessment_date, overall_risk_score) pairs

    Returns:
        AssessmentTrend per month, chronologically sorted
    """
    records = [PeriodRecord(period=when, value=score or 0.0) for when, score in assessments]
    counts = fold_by_month(records, TrendReducer.COUNT)
    averages = fold_by_month(records, TrendReducer.RUNNING_AVERAGE)
    return [
        AssessmentTrend(
            month=month,
            assessments_completed=int(count),
            average_risk_score=round_half_up(averages[month]),
        )
        for month, count in sorted_months(counts)
    ]
