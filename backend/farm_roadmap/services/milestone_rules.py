"""
Milestone construction and status transitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from farm_roadmap.core.exceptions import StateError, ValidationError
from farm_roadmap.models.enums import MilestoneStatus
from farm_roadmap.models.milestone import Milestone, MilestoneCreate
from farm_roadmap.utils.datetime_utils import now_utc


ALLOWED_TRANSITIONS: dict[MilestoneStatus, frozenset[MilestoneStatus]] = {
    MilestoneStatus.PENDING: frozenset({MilestoneStatus.IN_PROGRESS, MilestoneStatus.SKIPPED}),
    MilestoneStatus.IN_PROGRESS: frozenset(
        {MilestoneStatus.COMPLETED, MilestoneStatus.SKIPPED, MilestoneStatus.PENDING}
    ),
    MilestoneStatus.COMPLETED: frozenset(),
    MilestoneStatus.SKIPPED: frozenset({MilestoneStatus.PENDING}),
}


def create_milestone(
    data: MilestoneCreate | Mapping[str, Any],
    now: Optional[datetime] = None,
) -> Milestone:
    """
    Build a new pending milestone.

    Raw mappings are validated first; every violated field is reported in a
    single ValidationError.
    """
    if not isinstance(data, MilestoneCreate):
        try:
            data = MilestoneCreate.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc, "milestone") from exc

    timestamp = now or now_utc()
    return Milestone(
        id=uuid4(),
        status=MilestoneStatus.PENDING,
        created_at=timestamp,
        updated_at=timestamp,
        **data.model_dump(),
    )


def can_transition(current: MilestoneStatus, target: MilestoneStatus) -> bool:
    """Re-applying the current status is always allowed."""
    return current == target or target in ALLOWED_TRANSITIONS[current]


def transition_milestone(
    milestone: Milestone,
    target: MilestoneStatus,
    *,
    completed_date: Optional[datetime] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
    enforce: bool = True,
) -> Milestone:
    """
    Return a copy of the milestone moved to ``target``.

    Moving to completed keeps an existing completed_date, otherwise uses the
    supplied one or now. Leaving completed clears it.

    Raises:
        StateError: enforce is on and the move is not in ALLOWED_TRANSITIONS
    """
    current = milestone.status
    if enforce and not can_transition(current, target):
        raise StateError(
            f"Cannot move milestone {milestone.id} from {current.value} to {target.value}",
            current=current.value,
            target=target.value,
        )

    timestamp = now or now_utc()
    updates: dict[str, Any] = {"status": target, "updated_at": timestamp}
    if target == MilestoneStatus.COMPLETED:
        updates["completed_date"] = milestone.completed_date or completed_date or timestamp
    else:
        updates["completed_date"] = None
    if notes is not None:
        updates["notes"] = notes

    return milestone.model_copy(update=updates)
