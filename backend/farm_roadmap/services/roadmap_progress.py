"""
Roadmap progress rules.

Pure functions over a milestone list: derived progress fields, stage
inference, and the upcoming/overdue views. Nothing here touches storage;
service mutation paths call refresh_progress right before they persist.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence, TypeVar

from farm_roadmap.models.enums import CropStage, MilestoneStatus
from farm_roadmap.models.milestone import Milestone
from farm_roadmap.models.roadmap import RoadmapCreate
from farm_roadmap.utils.datetime_utils import ensure_utc, now_utc

TRoadmap = TypeVar("TRoadmap", bound=RoadmapCreate)

# Checked top-down, first match wins. 0% has no rung and keeps the prior stage.
STAGE_THRESHOLDS: tuple[tuple[int, CropStage], ...] = (
    (80, CropStage.HARVESTING),
    (60, CropStage.FLOWERING),
    (20, CropStage.GROWING),
    (1, CropStage.SOWING),
)


@dataclass(frozen=True)
class RoadmapProgress:
    """Derived progress fields of a roadmap."""

    completed_milestones: int
    total_milestones: int
    completion_percentage: int
    current_stage: CropStage


def completion_percentage(completed: int, total: int) -> int:
    """Percentage of completed milestones, rounded half up; 0 for an empty roadmap."""
    if total <= 0:
        return 0
    # Exact rational half-up. Float rounding of completed / total * 100 can land
    # just below .5 (23 of 40 gives 57.49999...), so it is avoided.
    return (completed * 200 + total) // (2 * total)


def stage_for_percentage(percentage: int, current: CropStage) -> CropStage:
    """Map a completion percentage to a crop stage."""
    if percentage == 100:
        return CropStage.COMPLETED
    for threshold, stage in STAGE_THRESHOLDS:
        if percentage >= threshold:
            return stage
    return current


def calculate_progress(
    milestones: Sequence[Milestone],
    current_stage: CropStage = CropStage.PLANNING,
) -> RoadmapProgress:
    completed = sum(1 for m in milestones if m.status == MilestoneStatus.COMPLETED)
    total = len(milestones)
    percentage = completion_percentage(completed, total)
    return RoadmapProgress(
        completed_milestones=completed,
        total_milestones=total,
        completion_percentage=percentage,
        current_stage=stage_for_percentage(percentage, current_stage),
    )


def refresh_progress(roadmap: TRoadmap) -> TRoadmap:
    """Return a copy of the roadmap with its derived fields recomputed."""
    progress = calculate_progress(roadmap.milestones, roadmap.current_stage)
    return roadmap.model_copy(update=asdict(progress))


def _by_schedule(milestones: Iterable[Milestone]) -> list[Milestone]:
    return sorted(milestones, key=lambda m: ensure_utc(m.scheduled_date))


def get_upcoming_milestones(
    milestones: Iterable[Milestone],
    days: int = 7,
    reference: Optional[datetime] = None,
) -> list[Milestone]:
    """Pending milestones scheduled within [reference, reference + days], earliest first."""
    start = ensure_utc(reference) or now_utc()
    end = start + timedelta(days=days)
    return _by_schedule(
        m
        for m in milestones
        if m.status == MilestoneStatus.PENDING
        and start <= ensure_utc(m.scheduled_date) <= end
    )


def get_overdue_milestones(
    milestones: Iterable[Milestone],
    reference: Optional[datetime] = None,
) -> list[Milestone]:
    """
    Pending milestones scheduled before reference, earliest first.

    In-progress milestones are never reported as overdue, even past their date.
    """
    cutoff = ensure_utc(reference) or now_utc()
    return _by_schedule(
        m
        for m in milestones
        if m.status == MilestoneStatus.PENDING and ensure_utc(m.scheduled_date) < cutoff
    )
