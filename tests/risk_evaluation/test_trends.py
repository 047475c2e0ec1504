"""
Tests for monthly trend folding.
"""

from datetime import date, datetime

import pytest

from vendor_risk import (
    AssessmentTrend,
    IncidentTrend,
    InvalidDateError,
    PeriodRecord,
    TrendReducer,
    fold_assessment_trends,
    fold_by_month,
    fold_incident_trends,
    month_key,
    sorted_months,
)


@pytest.fixture
def records():
    return [
        PeriodRecord(date(2024, 1, 5), 10),
        PeriodRecord(date(2024, 1, 20), 20),
        PeriodRecord(date(2024, 2, 1), 100),
    ]


# =============================================================
# TEST: fold_by_month
# =============================================================

class TestFoldByMonth:

    def test_per_month_average(self, records):
        assert fold_by_month(records, TrendReducer.RUNNING_AVERAGE) == {"2024-01": 15, "2024-02": 100}

    def test_count(self, records):
        assert fold_by_month(records, TrendReducer.COUNT) == {"2024-01": 2, "2024-02": 1}

    def test_sum(self, records):
        assert fold_by_month(records, "sum") == {"2024-01": 30, "2024-02": 100}

    def test_camel_case_reducer_name(self, records):
        assert fold_by_month(records, "runningAverage") == {"2024-01": 15, "2024-02": 100}

    def test_unknown_reducer(self, records):
        with pytest.raises(ValueError):
            fold_by_month(records, "median")

    def test_empty(self):
        assert fold_by_month([], TrendReducer.COUNT) == {}

    def test_earlier_months_do_not_leak(self):
        records = [
            PeriodRecord(date(2024, 1, 1), 90),
            PeriodRecord(date(2024, 2, 1), 10),
            PeriodRecord(date(2024, 2, 2), 20),
            PeriodRecord(date(2024, 2, 3), 30),
        ]
        assert fold_by_month(records, TrendReducer.RUNNING_AVERAGE)["2024-02"] == 20

    def test_first_seen_order_and_sorting(self):
        records = [
            PeriodRecord(date(2024, 3, 1), 1),
            PeriodRecord(date(2023, 11, 1), 1),
            PeriodRecord(date(2024, 1, 1), 1),
        ]
        folded = fold_by_month(records, TrendReducer.COUNT)
        assert list(folded) == ["2024-03", "2023-11", "2024-01"]
        assert [m for m, _ in sorted_months(folded)] == ["2023-11", "2024-01", "2024-03"]

    def test_month_key_strings_accepted(self):
        records = [PeriodRecord("2024-01", 5), PeriodRecord(datetime(2024, 1, 31, 23), 7)]
        assert fold_by_month(records, TrendReducer.SUM) == {"2024-01": 12}


class TestMonthKey:

    def test_dates(self):
        assert month_key(date(2024, 9, 30)) == "2024-09"
        assert month_key(datetime(2023, 12, 1, 8)) == "2023-12"

    @pytest.mark.parametrize("bad", ["2024-01-15", "2024-13", "01/2024", "", None, 202401])
    def test_rejects_anything_else(self, bad):
        with pytest.raises(InvalidDateError):
            month_key(bad)


# =============================================================
# TEST: Dashboard trends
# =============================================================

class TestDashboardTrends:

    def test_incident_trends(self):
        incidents = [
            (date(2024, 2, 3), "critical"),
            (date(2024, 1, 10), "low"),
            (date(2024, 1, 12), "critical"),
            (date(2024, 1, 30), "high"),
        ]
        assert fold_incident_trends(incidents) == [
            IncidentTrend(month="2024-01", incidents_count=3, critical_incidents=1),
            IncidentTrend(month="2024-02", incidents_count=1, critical_incidents=1),
        ]

    def test_assessment_trends(self):
        assessments = [
            (date(2024, 1, 3), 41),
            (date(2024, 1, 25), 50),
            (date(2024, 2, 14), None),
        ]
        assert fold_assessment_trends(assessments) == [
            AssessmentTrend(month="2024-01", assessments_completed=2, average_risk_score=46),
            AssessmentTrend(month="2024-02", assessments_completed=1, average_risk_score=0),
        ]
