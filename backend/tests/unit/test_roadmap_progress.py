"""
Unit tests for roadmap progress rules.
"""

from datetime import datetime, timedelta, timezone

import pytest

from farm_roadmap.models.enums import CropStage, MilestoneCategory, MilestoneStatus
from farm_roadmap.models.milestone import Milestone, MilestoneCreate
from farm_roadmap.models.roadmap import Location, RoadmapCreate
from farm_roadmap.services.milestone_rules import create_milestone
from farm_roadmap.services.roadmap_progress import (
    calculate_progress,
    completion_percentage,
    get_overdue_milestones,
    get_upcoming_milestones,
    refresh_progress,
    stage_for_percentage,
)

NOW = datetime(2026, 7, 1, 9, 0, tzinfo=timezone.utc)


def _milestone(
    status: MilestoneStatus = MilestoneStatus.PENDING,
    scheduled: datetime = NOW,
    title: str = "Field work",
) -> Milestone:
    milestone = create_milestone(
        MilestoneCreate(
            title=title,
            description="Scheduled field work",
            category=MilestoneCategory.GENERAL,
            scheduled_date=scheduled,
            estimated_duration=1,
        ),
        now=NOW,
    )
    return milestone.model_copy(update={"status": status})


def _statuses(*statuses: MilestoneStatus) -> list[Milestone]:
    return [_milestone(status) for status in statuses]


def _roadmap(milestones: list[Milestone], stage: CropStage = CropStage.PLANNING) -> RoadmapCreate:
    return RoadmapCreate(
        crop_type="rice",
        location=Location(
            latitude=30.9, longitude=75.85, address="Village Road 4", state="Punjab", district="Ludhiana"
        ),
        sowing_date=NOW,
        estimated_harvest_date=NOW + timedelta(days=120),
        current_stage=stage,
        milestones=milestones,
    )


C = MilestoneStatus.COMPLETED
P = MilestoneStatus.PENDING
IP = MilestoneStatus.IN_PROGRESS


def test_five_milestone_scenario():
    progress = calculate_progress(_statuses(C, C, C, P, IP))

    assert progress.completed_milestones == 3
    assert progress.total_milestones == 5
    assert progress.completion_percentage == 60
    assert progress.current_stage == CropStage.FLOWERING


@pytest.mark.parametrize(
    "completed,total,expected",
    [
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),  # 12.5 rounds half up
        (1, 200, 1),  # 0.5 rounds half up
        (23, 40, 58),  # 57.5 exactly; float rounding would give 57
        (0, 4, 0),
        (4, 4, 100),
        (0, 0, 0),
    ],
)
def test_completion_percentage_rounds_half_up(completed, total, expected):
    assert completion_percentage(completed, total) == expected


@pytest.mark.parametrize(
    "percentage,expected",
    [
        (100, CropStage.COMPLETED),
        (99, CropStage.HARVESTING),
        (80, CropStage.HARVESTING),
        (79, CropStage.FLOWERING),
        (60, CropStage.FLOWERING),
        (59, CropStage.GROWING),
        (20, CropStage.GROWING),
        (19, CropStage.SOWING),
        (1, CropStage.SOWING),
    ],
)
def test_stage_thresholds(percentage, expected):
    assert stage_for_percentage(percentage, CropStage.PLANNING) == expected


def test_zero_percent_keeps_current_stage():
    assert stage_for_percentage(0, CropStage.GROWING) == CropStage.GROWING

    progress = calculate_progress(_statuses(P, IP), current_stage=CropStage.SOWING)
    assert progress.completion_percentage == 0
    assert progress.current_stage == CropStage.SOWING


def test_empty_roadmap():
    refreshed = refresh_progress(_roadmap([], stage=CropStage.GROWING))

    assert refreshed.completion_percentage == 0
    assert refreshed.total_milestones == 0
    assert refreshed.completed_milestones == 0
    assert refreshed.current_stage == CropStage.GROWING


def test_full_completion_overrides_prior_stage():
    refreshed = refresh_progress(_roadmap(_statuses(C, C), stage=CropStage.SOWING))

    assert refreshed.completion_percentage == 100
    assert refreshed.current_stage == CropStage.COMPLETED


def test_refresh_is_idempotent():
    roadmap = _roadmap(_statuses(C, P, P))

    once = refresh_progress(roadmap)
    twice = refresh_progress(once)

    assert once.completion_percentage == twice.completion_percentage == 33
    assert once.total_milestones == twice.total_milestones == 3
    assert once.completed_milestones == twice.completed_milestones == 1
    assert once.current_stage == twice.current_stage == CropStage.GROWING


def test_refresh_does_not_mutate_input():
    roadmap = _roadmap(_statuses(C))

    refresh_progress(roadmap)

    assert roadmap.completion_percentage == 0
    assert roadmap.current_stage == CropStage.PLANNING


def test_upcoming_within_window_sorted_ascending():
    day5 = _milestone(scheduled=NOW + timedelta(days=5), title="Day 5")
    day1 = _milestone(scheduled=NOW + timedelta(days=1), title="Day 1")
    day10 = _milestone(scheduled=NOW + timedelta(days=10), title="Day 10")

    upcoming = get_upcoming_milestones([day5, day10, day1], days=7, reference=NOW)

    assert [m.title for m in upcoming] == ["Day 1", "Day 5"]


def test_upcoming_window_is_inclusive_and_pending_only():
    at_start = _milestone(scheduled=NOW, title="Start")
    at_end = _milestone(scheduled=NOW + timedelta(days=7), title="End")
    started = _milestone(IP, scheduled=NOW + timedelta(days=2), title="Started")
    past = _milestone(scheduled=NOW - timedelta(seconds=1), title="Past")

    upcoming = get_upcoming_milestones([at_end, started, past, at_start], days=7, reference=NOW)

    assert [m.title for m in upcoming] == ["Start", "End"]


def test_overdue_excludes_in_progress():
    yesterday = NOW - timedelta(days=1)
    pending = _milestone(P, scheduled=yesterday, title="Late")
    started = _milestone(IP, scheduled=yesterday, title="Started")
    done = _milestone(C, scheduled=yesterday, title="Done")
    future = _milestone(P, scheduled=NOW + timedelta(days=1), title="Future")

    overdue = get_overdue_milestones([started, pending, done, future], reference=NOW)

    assert [m.title for m in overdue] == ["Late"]


def test_overdue_sorted_ascending():
    older = _milestone(scheduled=NOW - timedelta(days=3), title="Older")
    newer = _milestone(scheduled=NOW - timedelta(days=1), title="Newer")

    assert [m.title for m in get_overdue_milestones([newer, older], reference=NOW)] == [
        "Older",
        "Newer",
    ]
