"""
Tests for workflow completion tracking.

Tests cover:
- Percent complete
- Overall status derivation
- Step state machine
- Current step and overdue steps
"""

from datetime import date, datetime

import pytest

from vendor_risk import (
    InvalidTransitionError,
    StepStatus,
    VALID_STEP_TRANSITIONS,
    WorkflowStatus,
    WorkflowStep,
    can_transition,
    current_step_index,
    overall_status,
    overdue_steps,
    percent_complete,
    steps_from_checklist,
    transition_step,
)


def make_steps(*statuses):
    return [WorkflowStep(name=f"step-{i}", status=s) for i, s in enumerate(statuses)]


# =============================================================
# TEST: Progress
# =============================================================

class TestPercentComplete:

    def test_two_of_five(self):
        steps = make_steps(
            StepStatus.COMPLETED,
            StepStatus.COMPLETED,
            StepStatus.PENDING,
            StepStatus.PENDING,
            StepStatus.PENDING,
        )
        assert percent_complete(steps) == 40

    def test_empty_workflow(self):
        assert percent_complete([]) == 0

    def test_rounds_half_up(self):
        steps = make_steps(StepStatus.COMPLETED, *[StepStatus.PENDING] * 7)
        assert percent_complete(steps) == 13  # 12.5

    def test_all_completed(self):
        assert percent_complete(make_steps(StepStatus.COMPLETED, StepStatus.COMPLETED)) == 100


class TestOverallStatus:
    """Test overall_status()."""

    def test_all_completed(self):
        assert overall_status(make_steps(*[StepStatus.COMPLETED] * 3)) == WorkflowStatus.COMPLETED

    def test_failed_wins(self):
        steps = make_steps(StepStatus.COMPLETED, StepStatus.FAILED, StepStatus.COMPLETED)
        assert overall_status(steps) == WorkflowStatus.FAILED

    def test_all_pending(self):
        assert overall_status(make_steps(StepStatus.PENDING, StepStatus.PENDING)) == WorkflowStatus.PENDING

    def test_mixed_is_in_progress(self):
        steps = make_steps(StepStatus.COMPLETED, StepStatus.PENDING)
        assert overall_status(steps) == WorkflowStatus.IN_PROGRESS

    def test_empty_is_pending(self):
        assert overall_status([]) == WorkflowStatus.PENDING

    def test_completed_iff_percent_is_100(self):
        for steps in (
            make_steps(StepStatus.COMPLETED),
            make_steps(StepStatus.COMPLETED, StepStatus.IN_PROGRESS),
            make_steps(StepStatus.PENDING),
        ):
            assert (overall_status(steps) == WorkflowStatus.COMPLETED) == (percent_complete(steps) == 100)


# =============================================================
# TEST: Step state machine
# =============================================================

class TestTransitions:
    """Test transition_step()."""

    def test_failed_is_terminal(self):
        assert VALID_STEP_TRANSITIONS[StepStatus.FAILED] == set()
        step = WorkflowStep("security", status=StepStatus.FAILED)
        with pytest.raises(InvalidTransitionError) as exc_info:
            transition_step(step, StepStatus.IN_PROGRESS)
        assert "terminal" in str(exc_info.value)
        assert exc_info.value.from_status == StepStatus.FAILED

    def test_pending_cannot_complete_directly(self):
        assert not can_transition(StepStatus.PENDING, StepStatus.COMPLETED)
        with pytest.raises(InvalidTransitionError):
            transition_step(WorkflowStep("legal"), StepStatus.COMPLETED, at=datetime(2024, 1, 1))

    def test_complete_records_time(self):
        at = datetime(2024, 1, 5, 10, 30)
        step = transition_step(WorkflowStep("legal"), StepStatus.IN_PROGRESS)
        done = transition_step(step, StepStatus.COMPLETED, at=at)
        assert done.is_completed
        assert done.completed_at == at
        assert step.status == StepStatus.IN_PROGRESS

    def test_complete_requires_time(self):
        step = WorkflowStep("legal", status=StepStatus.IN_PROGRESS)
        with pytest.raises(InvalidTransitionError):
            transition_step(step, StepStatus.COMPLETED)

    def test_reopen_clears_completion_time(self):
        step = WorkflowStep("legal", status=StepStatus.COMPLETED, completed_at=datetime(2024, 1, 5))
        reopened = transition_step(step, StepStatus.IN_PROGRESS)
        assert reopened.status == StepStatus.IN_PROGRESS
        assert reopened.completed_at is None

    def test_pause(self):
        step = WorkflowStep("legal", status=StepStatus.IN_PROGRESS)
        assert transition_step(step, StepStatus.PENDING).status == StepStatus.PENDING

    def test_same_state_is_noop(self):
        step = WorkflowStep("legal", status=StepStatus.FAILED)
        assert transition_step(step, StepStatus.FAILED) is step


# =============================================================
# TEST: Helpers
# =============================================================

class TestHelpers:

    def test_current_step_index(self):
        assert current_step_index(make_steps(StepStatus.COMPLETED, StepStatus.PENDING)) == 1
        assert current_step_index(make_steps(StepStatus.COMPLETED, StepStatus.IN_PROGRESS)) == 2
        assert current_step_index(make_steps(StepStatus.COMPLETED)) == 1
        assert current_step_index([]) == 0

    def test_steps_from_checklist(self):
        steps = steps_from_checklist({"financial": True, "legal": False})
        assert [(s.name, s.status) for s in steps] == [
            ("financial", StepStatus.COMPLETED),
            ("legal", StepStatus.PENDING),
        ]

    def test_overdue_steps(self):
        steps = [
            WorkflowStep("late", status=StepStatus.IN_PROGRESS, due_date=date(2023, 12, 20)),
            WorkflowStep("done", status=StepStatus.COMPLETED, due_date=date(2023, 12, 20)),
            WorkflowStep("future", due_date=date(2024, 2, 1)),
            WorkflowStep("undated"),
        ]
        assert [s.name for s in overdue_steps(steps, datetime(2024, 1, 1))] == ["late"]
