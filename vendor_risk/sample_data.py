"""
Vendor Risk Evaluation Engine - Sample Data Provider.

============================================================
PURPOSE
============================================================
Demo data behind the same interface as the real fetch layer.

The random source is injected, so a seeded provider yields
the same data every run. The engine never calls this module;
callers choose between a real data source and this one.

============================================================
"""

import random
from datetime import date, datetime, timedelta
from typing import List, Optional, Protocol

from .records import (
    AssessmentRecord,
    AssessmentStatusEnum,
    MonitoringReading,
    PerformanceRecord,
)


class VendorDataSource(Protocol):
    """Collaborator interface supplying vendor entity records."""

    def assessments(self, vendor_id: str, count: int) -> List[AssessmentRecord]:
        ...

    def performance(self, vendor_id: str, periods: int) -> List[PerformanceRecord]:
        ...

    def monitoring(self, vendor_id: str, count: int) -> List[MonitoringReading]:
        ...


class SampleDataProvider:
    """
    Generates plausible vendor records for demos.

    Value ranges:
        risk dimensions          0-100 (individual dimensions may be unassessed)
        SLA compliance           80-100
        quality / delivery       75-95
        communication            80-100
        security score           50-100
        uptime                   80-100
        response time (ms)       500-1500
        compliance score         70-100
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        today: Optional[date] = None,
        unassessed_probability: float = 0.15,
    ):
        self._rng = rng or random.Random(seed)
        self._today = today or date(2024, 1, 1)
        self._unassessed_probability = unassessed_probability

    def _maybe_score(self, low: int, high: int) -> Optional[float]:
        if self._rng.random() < self._unassessed_probability:
            return None
        return float(self._rng.randint(low, high))

    def assessments(self, vendor_id: str, count: int) -> List[AssessmentRecord]:
        records = []
        for i in range(count):
            records.append(AssessmentRecord(
                id=f"{vendor_id}-assessment-{i + 1}",
                third_party_id=vendor_id,
                assessment_date=self._today - timedelta(days=30 * (count - i - 1)),
                status=AssessmentStatusEnum.COMPLETED,
                financial_risk_score=self._maybe_score(0, 100),
                operational_risk_score=self._maybe_score(0, 100),
                compliance_risk_score=self._maybe_score(0, 100),
                security_risk_score=self._maybe_score(0, 100),
                reputational_risk_score=self._maybe_score(0, 100),
                strategic_risk_score=self._maybe_score(0, 100),
            ))
        return records

    def performance(self, vendor_id: str, periods: int) -> List[PerformanceRecord]:
        return [
            PerformanceRecord(
                third_party_id=vendor_id,
                period_end_date=self._today - timedelta(days=30 * (periods - i - 1)),
                sla_compliance_percentage=float(self._rng.randint(80, 100)),
                quality_score=float(self._rng.randint(75, 95)),
                delivery_timeliness=float(self._rng.randint(75, 95)),
                communication_effectiveness=float(self._rng.randint(80, 100)),
            )
            for i in range(periods)
        ]

    def monitoring(self, vendor_id: str, count: int) -> List[MonitoringReading]:
        start = datetime(self._today.year, self._today.month, self._today.day)
        return [
            MonitoringReading(
                third_party_id=vendor_id,
                monitoring_date=start - timedelta(days=count - i - 1),
                security_score=float(self._rng.randint(50, 100)),
                uptime_percentage=float(self._rng.randint(80, 100)),
                response_time_ms=float(self._rng.randint(500, 1500)),
                compliance_score=float(self._rng.randint(70, 100)),
            )
            for i in range(count)
        ]
