"""
Unit tests for milestone construction and status transitions.
"""

from datetime import datetime, timezone

import pytest

from farm_roadmap.core.exceptions import StateError, ValidationError
from farm_roadmap.models.enums import MilestoneCategory, MilestonePriority, MilestoneStatus
from farm_roadmap.services.milestone_rules import (
    ALLOWED_TRANSITIONS,
    can_transition,
    create_milestone,
    transition_milestone,
)

NOW = datetime(2026, 7, 1, 9, 0, tzinfo=timezone.utc)


def _payload(**overrides):
    data = {
        "title": "Transplant seedlings",
        "description": "Move nursery seedlings to the main field",
        "category": "sowing",
        "scheduled_date": "2026-07-10T06:00:00Z",
        "estimated_duration": 3,
    }
    data.update(overrides)
    return data


def test_create_milestone_defaults():
    milestone = create_milestone(_payload(), now=NOW)

    assert milestone.status == MilestoneStatus.PENDING
    assert milestone.priority == MilestonePriority.MEDIUM
    assert milestone.category == MilestoneCategory.SOWING
    assert milestone.weather_dependent is False
    assert milestone.resources == []
    assert milestone.completed_date is None
    assert milestone.created_at == NOW
    assert milestone.updated_at == NOW


def test_create_milestone_trims_strings():
    milestone = create_milestone(_payload(title="  Weeding  ", resources=["  Hoe "]), now=NOW)

    assert milestone.title == "Weeding"
    assert milestone.resources == ["Hoe"]


def test_create_assigns_distinct_ids():
    assert create_milestone(_payload()).id != create_milestone(_payload()).id


def test_title_too_long_names_title():
    with pytest.raises(ValidationError) as exc_info:
        create_milestone(_payload(title="x" * 101))

    assert exc_info.value.fields == ["title"]


def test_unknown_category_names_category():
    with pytest.raises(ValidationError) as exc_info:
        create_milestone(_payload(category="watering"))

    assert exc_info.value.fields == ["category"]


def test_all_violations_reported_together():
    with pytest.raises(ValidationError) as exc_info:
        create_milestone(
            _payload(title="", category="watering", estimated_duration=0, notes="n" * 1001)
        )

    assert set(exc_info.value.fields) == {"title", "category", "estimated_duration", "notes"}
    assert "title" in exc_info.value.message


def test_resource_too_long_names_indexed_field():
    with pytest.raises(ValidationError) as exc_info:
        create_milestone(_payload(resources=["ok", "r" * 101]))

    assert exc_info.value.fields == ["resources.1"]


@pytest.mark.parametrize(
    "current,target",
    [
        (MilestoneStatus.PENDING, MilestoneStatus.IN_PROGRESS),
        (MilestoneStatus.PENDING, MilestoneStatus.SKIPPED),
        (MilestoneStatus.IN_PROGRESS, MilestoneStatus.COMPLETED),
        (MilestoneStatus.IN_PROGRESS, MilestoneStatus.SKIPPED),
        (MilestoneStatus.IN_PROGRESS, MilestoneStatus.PENDING),
        (MilestoneStatus.SKIPPED, MilestoneStatus.PENDING),
        (MilestoneStatus.COMPLETED, MilestoneStatus.COMPLETED),
    ],
)
def test_allowed_transitions(current, target):
    assert can_transition(current, target)


@pytest.mark.parametrize(
    "current,target",
    [
        (MilestoneStatus.PENDING, MilestoneStatus.COMPLETED),
        (MilestoneStatus.COMPLETED, MilestoneStatus.PENDING),
        (MilestoneStatus.COMPLETED, MilestoneStatus.SKIPPED),
        (MilestoneStatus.SKIPPED, MilestoneStatus.COMPLETED),
    ],
)
def test_disallowed_transitions(current, target):
    assert not can_transition(current, target)


def test_completed_is_terminal():
    assert ALLOWED_TRANSITIONS[MilestoneStatus.COMPLETED] == frozenset()


def test_transition_raises_state_error():
    milestone = create_milestone(_payload(), now=NOW)

    with pytest.raises(StateError) as exc_info:
        transition_milestone(milestone, MilestoneStatus.COMPLETED)

    assert exc_info.value.current == "pending"
    assert exc_info.value.target == "completed"


def test_transition_without_enforcement_accepts_any_target():
    milestone = create_milestone(_payload(), now=NOW)

    done = transition_milestone(milestone, MilestoneStatus.COMPLETED, now=NOW, enforce=False)

    assert done.status == MilestoneStatus.COMPLETED
    assert done.completed_date == NOW


def test_complete_sets_completed_date_to_now():
    started = transition_milestone(create_milestone(_payload(), now=NOW), MilestoneStatus.IN_PROGRESS)

    done = transition_milestone(started, MilestoneStatus.COMPLETED, now=NOW)

    assert done.completed_date == NOW
    assert done.updated_at == NOW
    assert started.status == MilestoneStatus.IN_PROGRESS


def test_complete_uses_supplied_date():
    supplied = datetime(2026, 6, 30, tzinfo=timezone.utc)
    started = transition_milestone(create_milestone(_payload()), MilestoneStatus.IN_PROGRESS)

    done = transition_milestone(started, MilestoneStatus.COMPLETED, completed_date=supplied, now=NOW)

    assert done.completed_date == supplied


def test_reapplying_completed_keeps_existing_date_and_adds_notes():
    started = transition_milestone(create_milestone(_payload()), MilestoneStatus.IN_PROGRESS)
    done = transition_milestone(started, MilestoneStatus.COMPLETED, now=NOW)

    again = transition_milestone(
        done,
        MilestoneStatus.COMPLETED,
        completed_date=datetime(2026, 8, 1, tzinfo=timezone.utc),
        notes="Yield looked good",
    )

    assert again.completed_date == NOW
    assert again.notes == "Yield looked good"


def test_leaving_completed_clears_date_when_not_enforced():
    started = transition_milestone(create_milestone(_payload()), MilestoneStatus.IN_PROGRESS)
    done = transition_milestone(started, MilestoneStatus.COMPLETED, now=NOW)

    reopened = transition_milestone(done, MilestoneStatus.PENDING, enforce=False)

    assert reopened.completed_date is None


def test_notes_left_alone_when_not_supplied():
    milestone = create_milestone(_payload(notes="Check soil moisture"))

    started = transition_milestone(milestone, MilestoneStatus.IN_PROGRESS)

    assert started.notes == "Check soil moisture"
