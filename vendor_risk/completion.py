"""
Vendor Risk Evaluation Engine - Completion Tracker.

============================================================
PURPOSE
============================================================
Progress and status of multi-step review workflows
(assessment workflows, due-diligence reviews).

STEP STATE MACHINE:

    PENDING ──► IN_PROGRESS ──► COMPLETED
                  │   ▲  ▲          │
          (pause) ▼   │  └──────────┘ (reopen)
               PENDING│
                      └──► FAILED (terminal)

OVERALL STATUS (pure function of the current snapshot):
- any step FAILED          -> FAILED
- every step COMPLETED     -> COMPLETED
- every step PENDING       -> PENDING
- otherwise                -> IN_PROGRESS

============================================================
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set

from .aggregator import round_half_up
from .obligations import evaluate
from .types import (
    InvalidTransitionError,
    Obligation,
    ObligationKind,
    StepStatus,
    WorkflowStatus,
    WorkflowStep,
)


logger = logging.getLogger(__name__)


# ============================================================
# STEP TRANSITION RULES
# ============================================================

VALID_STEP_TRANSITIONS: Dict[StepStatus, Set[StepStatus]] = {
    StepStatus.PENDING: {
        StepStatus.IN_PROGRESS,
    },
    StepStatus.IN_PROGRESS: {
        StepStatus.COMPLETED,
        StepStatus.FAILED,
        StepStatus.PENDING,      # pause
    },
    StepStatus.COMPLETED: {
        StepStatus.IN_PROGRESS,  # reopen
    },
    StepStatus.FAILED: set(),
}


def can_transition(from_status: StepStatus, to_status: StepStatus) -> bool:
    """Same-state is always allowed (idempotent)."""
    if from_status == to_status:
        return True
    return to_status in VALID_STEP_TRANSITIONS.get(from_status, set())


def transition_step(
    step: WorkflowStep,
    to_status: StepStatus,
    at: Optional[datetime] = None,
) -> WorkflowStep:
    """
    Move a step to a new status.

    Args:
        step: Current step snapshot
        to_status: Target status
        at: Completion time, required when completing

    Returns:
        New WorkflowStep; the input is unchanged

    Raises:
        InvalidTransitionError: If the transition is not allowed
    """
    if step.status == to_status:
        return step

    if not can_transition(step.status, to_status):
        if step.status == StepStatus.FAILED:
            reason = f"Cannot transition from terminal state {step.status.value}"
        else:
            reason = f"Invalid transition: {step.status.value} -> {to_status.value}"
        raise InvalidTransitionError(
            f"Step '{step.name}': {reason}",
            from_status=step.status,
            to_status=to_status,
        )

    if to_status == StepStatus.COMPLETED:
        if at is None:
            raise InvalidTransitionError(
                f"Step '{step.name}': completion time is required",
                from_status=step.status,
                to_status=to_status,
            )
        updated = replace(step, status=to_status, completed_at=at)
    else:
        updated = replace(step, status=to_status, completed_at=None)

    logger.debug(f"Step '{step.name}' {step.status.value} -> {to_status.value}")
    return updated


# ============================================================
# PROGRESS
# ============================================================


def percent_complete(steps: Sequence[WorkflowStep]) -> int:
    """Rounded percentage of completed steps. 0 for an empty workflow."""
    if not steps:
        return 0
    completed = sum(1 for s in steps if s.status == StepStatus.COMPLETED)
    return round_half_up(100 * completed / len(steps))


def overall_status(steps: Sequence[WorkflowStep]) -> WorkflowStatus:
    """Derive the workflow status from the current step snapshot."""
    if not steps:
        return WorkflowStatus.PENDING

    statuses = [s.status for s in steps]
    if StepStatus.FAILED in statuses:
        return WorkflowStatus.FAILED
    if all(s == StepStatus.COMPLETED for s in statuses):
        return WorkflowStatus.COMPLETED
    if all(s == StepStatus.PENDING for s in statuses):
        return WorkflowStatus.PENDING
    return WorkflowStatus.IN_PROGRESS


def current_step_index(steps: Sequence[WorkflowStep]) -> int:
    """
    Number of completed steps, plus one if the next step is in
    progress, capped at the workflow length.
    """
    completed = sum(1 for s in steps if s.status == StepStatus.COMPLETED)
    if completed < len(steps) and steps[completed].status == StepStatus.IN_PROGRESS:
        completed += 1
    return min(completed, len(steps))


def steps_from_checklist(checklist: Mapping[str, bool]) -> List[WorkflowStep]:
    """Build completed / pending steps from named review flags."""
    return [
        WorkflowStep(
            name=name,
            status=StepStatus.COMPLETED if done else StepStatus.PENDING,
        )
        for name, done in checklist.items()
    ]


def overdue_steps(steps: Iterable[WorkflowStep], now: datetime) -> List[WorkflowStep]:
    """Unfinished steps whose due date has passed."""
    overdue = []
    for step in steps:
        if step.due_date is None or step.status in (StepStatus.COMPLETED, StepStatus.FAILED):
            continue
        obligation = Obligation(name=step.name, due_date=step.due_date, kind=ObligationKind.REVIEW)
        if evaluate(obligation, now).is_overdue:
            overdue.append(step)
    return overdue
