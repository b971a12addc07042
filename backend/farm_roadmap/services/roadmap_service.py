"""
Roadmap service.

Every mutation path builds the new aggregate, recomputes its derived
progress fields with refresh_progress, and only then hands it to the
repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from farm_roadmap.core.config import Settings, get_settings
from farm_roadmap.core.exceptions import NotFoundError
from farm_roadmap.core.logger import setup_logger
from farm_roadmap.interfaces.roadmap_repository import IRoadmapRepository
from farm_roadmap.models.enums import CropStage, MilestoneStatus
from farm_roadmap.models.milestone import Milestone, MilestoneCreate, MilestoneProgressUpdate
from farm_roadmap.models.roadmap import (
    MilestoneDigest,
    MRLRecommendation,
    Roadmap,
    RoadmapCreate,
    RoadmapGenerationRequest,
    RoadmapMilestones,
    RoadmapResponse,
    RoadmapSettingsUpdate,
    RoadmapStatistics,
)
from farm_roadmap.services import roadmap_progress
from farm_roadmap.services.crop_catalog import get_crop_template
from farm_roadmap.services.milestone_rules import create_milestone, transition_milestone
from farm_roadmap.utils.datetime_utils import add_days, ensure_utc, now_utc

logger = setup_logger(__name__)

STATISTICS_WINDOW_DAYS = 7


class RoadmapService:
    """Service for generating roadmaps and tracking milestone progress."""

    def __init__(self, repo: IRoadmapRepository, settings: Optional[Settings] = None):
        self.repo = repo
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def build_roadmap(
        self,
        request: RoadmapGenerationRequest,
        now: Optional[datetime] = None,
    ) -> RoadmapCreate:
        """Build an unsaved roadmap from the crop catalog."""
        template = get_crop_template(request.crop_type, fallback=self.settings.DEFAULT_CROP_TYPE)
        sowing_date = ensure_utc(request.sowing_date)
        timestamp = now or now_utc()

        milestones = [
            create_milestone(
                MilestoneCreate(
                    title=stage.name,
                    description=stage.description,
                    category=stage.category,
                    scheduled_date=add_days(sowing_date, stage.day_offset),
                    priority=stage.priority,
                    weather_dependent=stage.weather_dependent,
                    estimated_duration=stage.duration,
                    resources=list(stage.resources),
                ),
                now=timestamp,
            )
            for stage in template.stages
        ]

        roadmap = RoadmapCreate(
            crop_type=request.crop_type,
            variety=request.variety,
            location=request.location,
            farm_size=request.farm_size,
            sowing_date=sowing_date,
            estimated_harvest_date=add_days(sowing_date, template.growth_period),
            current_stage=CropStage.PLANNING,
            milestones=milestones,
            mrl_recommendations=list(template.mrl_recommendations),
            weather_alerts=True,
            is_active=True,
        )
        return roadmap_progress.refresh_progress(roadmap)

    async def generate_roadmap(self, user_id: str, request: RoadmapGenerationRequest) -> Roadmap:
        """Generate and persist a roadmap for the user."""
        roadmap = await self.repo.create(user_id, self.build_roadmap(request))
        logger.info(
            "Generated %s roadmap %s for user %s with %d milestones",
            roadmap.crop_type,
            roadmap.id,
            user_id,
            roadmap.total_milestones,
        )
        return roadmap

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_user_roadmaps(self, user_id: str) -> list[Roadmap]:
        return await self.repo.find_active_by_user(user_id)

    async def get_roadmap(self, user_id: str, roadmap_id: UUID) -> Roadmap:
        """
        Get an active roadmap owned by the user.

        Raises:
            NotFoundError: missing, inactive or owned by someone else
        """
        roadmap = await self.repo.get(user_id, roadmap_id)
        if not roadmap:
            raise NotFoundError(f"Roadmap {roadmap_id} not found")
        return roadmap

    # ------------------------------------------------------------------
    # Milestone mutations
    # ------------------------------------------------------------------

    async def update_milestone_progress(
        self,
        user_id: str,
        roadmap_id: UUID,
        milestone_id: UUID,
        update: MilestoneProgressUpdate,
    ) -> Roadmap:
        """
        Move one milestone to a new status and persist the recomputed roadmap.

        Raises:
            NotFoundError: roadmap or milestone not found
            StateError: transition not allowed while enforcement is on
        """
        roadmap = await self.get_roadmap(user_id, roadmap_id)
        index = self._milestone_index(roadmap, milestone_id)
        current = roadmap.milestones[index]

        updated = transition_milestone(
            current,
            update.status,
            completed_date=update.completed_date,
            notes=update.notes,
            enforce=self.settings.ENFORCE_MILESTONE_TRANSITIONS,
        )
        milestones = list(roadmap.milestones)
        milestones[index] = updated

        saved = await self._persist(roadmap, milestones)
        logger.info(
            "Milestone %s on roadmap %s: %s -> %s (%d%%, stage %s)",
            milestone_id,
            roadmap_id,
            current.status.value,
            updated.status.value,
            saved.completion_percentage,
            saved.current_stage.value,
        )
        return saved

    async def add_milestone(
        self,
        user_id: str,
        roadmap_id: UUID,
        data: MilestoneCreate,
    ) -> Roadmap:
        """Append a new pending milestone to the roadmap."""
        roadmap = await self.get_roadmap(user_id, roadmap_id)
        milestone = create_milestone(data)
        saved = await self._persist(roadmap, [*roadmap.milestones, milestone])
        logger.info("Added milestone %s to roadmap %s", milestone.id, roadmap_id)
        return saved

    async def remove_milestone(
        self,
        user_id: str,
        roadmap_id: UUID,
        milestone_id: UUID,
    ) -> Roadmap:
        """Remove a milestone from the roadmap."""
        roadmap = await self.get_roadmap(user_id, roadmap_id)
        index = self._milestone_index(roadmap, milestone_id)
        milestones = [m for i, m in enumerate(roadmap.milestones) if i != index]
        saved = await self._persist(roadmap, milestones)
        logger.info("Removed milestone %s from roadmap %s", milestone_id, roadmap_id)
        return saved

    def _milestone_index(self, roadmap: Roadmap, milestone_id: UUID) -> int:
        for index, milestone in enumerate(roadmap.milestones):
            if milestone.id == milestone_id:
                return index
        raise NotFoundError(f"Milestone {milestone_id} not found in roadmap {roadmap.id}")

    async def _persist(self, roadmap: Roadmap, milestones: list[Milestone]) -> Roadmap:
        refreshed = roadmap_progress.refresh_progress(
            roadmap.model_copy(update={"milestones": milestones})
        )
        return await self.repo.save(refreshed)

    # ------------------------------------------------------------------
    # Cross-roadmap views
    # ------------------------------------------------------------------

    async def _in_progress_roadmaps(self, user_id: str) -> list[Roadmap]:
        roadmaps = await self.repo.find_active_by_user(user_id)
        return [r for r in roadmaps if r.current_stage != CropStage.COMPLETED]

    async def _digest(
        self,
        user_id: str,
        select: Callable[[Roadmap], list[Milestone]],
        now: datetime,
    ) -> list[RoadmapMilestones]:
        items = []
        for roadmap in await self._in_progress_roadmaps(user_id):
            matches = select(roadmap)
            if matches:
                items.append(
                    RoadmapMilestones(
                        roadmap=RoadmapResponse.from_roadmap(roadmap, now),
                        milestones=matches,
                    )
                )
        return items

    async def get_upcoming_milestones(
        self,
        user_id: str,
        days: Optional[int] = None,
    ) -> MilestoneDigest:
        """Pending milestones due within ``days`` across the user's running roadmaps."""
        days = days or self.settings.UPCOMING_DEFAULT_DAYS
        now = now_utc()
        items = await self._digest(
            user_id,
            lambda r: roadmap_progress.get_upcoming_milestones(r.milestones, days, now),
            now,
        )
        return MilestoneDigest(
            items=items,
            count=sum(len(item.milestones) for item in items),
            days=days,
        )

    async def get_overdue_milestones(self, user_id: str) -> MilestoneDigest:
        """Pending milestones past their date across the user's running roadmaps."""
        now = now_utc()
        items = await self._digest(
            user_id,
            lambda r: roadmap_progress.get_overdue_milestones(r.milestones, now),
            now,
        )
        return MilestoneDigest(items=items, count=sum(len(item.milestones) for item in items))

    async def get_mrl_recommendations(
        self,
        state: str,
        district: Optional[str] = None,
        crop_type: Optional[str] = None,
    ) -> list[MRLRecommendation]:
        """MRL guidance from the newest roadmaps in a location, one entry per pesticide."""
        roadmaps = await self.repo.list_by_location(
            state,
            district=district,
            crop_type=crop_type,
            limit=self.settings.MRL_LOOKUP_LIMIT,
        )
        seen: set[Optional[str]] = set()
        unique: list[MRLRecommendation] = []
        for roadmap in roadmaps:
            for rec in roadmap.mrl_recommendations:
                if rec.pesticide in seen:
                    continue
                seen.add(rec.pesticide)
                unique.append(rec)
        return unique

    async def get_statistics(self, user_id: str) -> RoadmapStatistics:
        """Roadmap and milestone counts over running and completed roadmaps."""
        running = await self._in_progress_roadmaps(user_id)
        completed = await self.repo.list_completed_by_user(user_id)
        running_ids = {r.id for r in running}
        roadmaps = running + [r for r in completed if r.id not in running_ids]

        now = now_utc()
        stats = RoadmapStatistics(
            total_roadmaps=len(roadmaps),
            active_roadmaps=len(running),
            completed_roadmaps=len(completed),
        )
        for roadmap in roadmaps:
            stats.total_milestones += len(roadmap.milestones)
            stats.completed_milestones += sum(
                1 for m in roadmap.milestones if m.status == MilestoneStatus.COMPLETED
            )
            stats.overdue_milestones += len(
                roadmap_progress.get_overdue_milestones(roadmap.milestones, now)
            )
            stats.upcoming_milestones += len(
                roadmap_progress.get_upcoming_milestones(
                    roadmap.milestones, STATISTICS_WINDOW_DAYS, now
                )
            )
        return stats

    # ------------------------------------------------------------------
    # Settings and deletion
    # ------------------------------------------------------------------

    async def update_settings(
        self,
        user_id: str,
        roadmap_id: UUID,
        update: RoadmapSettingsUpdate,
    ) -> Roadmap:
        roadmap = await self.repo.update_settings(user_id, roadmap_id, update)
        if not roadmap:
            raise NotFoundError(f"Roadmap {roadmap_id} not found")
        return roadmap

    async def delete_roadmap(self, user_id: str, roadmap_id: UUID) -> bool:
        """Soft-delete a roadmap. Returns False if nothing was deleted."""
        deleted = await self.repo.soft_delete(user_id, roadmap_id)
        if deleted:
            logger.info("Deactivated roadmap %s for user %s", roadmap_id, user_id)
        return deleted
