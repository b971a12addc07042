"""
SQLite implementation of Roadmap repository.

A roadmap is stored as one row in ``roadmaps`` plus one row per milestone in
``roadmap_milestones``; ``save`` rewrites the milestone rows in one
transaction.
"""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, delete, select, update

from farm_roadmap.core.exceptions import InfrastructureError, NotFoundError
from farm_roadmap.infrastructure.local.database import MilestoneORM, RoadmapORM, get_session_factory
from farm_roadmap.interfaces.roadmap_repository import IRoadmapRepository
from farm_roadmap.models.enums import (
    CropStage,
    MilestoneCategory,
    MilestonePriority,
    MilestoneStatus,
)
from farm_roadmap.models.milestone import Milestone
from farm_roadmap.models.roadmap import (
    Location,
    MRLRecommendation,
    Roadmap,
    RoadmapCreate,
    RoadmapSettingsUpdate,
)
from farm_roadmap.utils.datetime_utils import ensure_utc, now_utc, to_naive_utc


class SqliteRoadmapRepository(IRoadmapRepository):
    """SQLite implementation of roadmap repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def _milestone_to_model(self, orm: MilestoneORM) -> Milestone:
        return Milestone(
            id=UUID(orm.id),
            title=orm.title,
            description=orm.description,
            category=MilestoneCategory(orm.category),
            scheduled_date=ensure_utc(orm.scheduled_date),
            completed_date=ensure_utc(orm.completed_date),
            status=MilestoneStatus(orm.status),
            priority=MilestonePriority(orm.priority),
            weather_dependent=bool(orm.weather_dependent),
            estimated_duration=orm.estimated_duration,
            resources=orm.resources or [],
            notes=orm.notes,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    def _orm_to_model(self, orm: RoadmapORM, milestones: Iterable[MilestoneORM]) -> Roadmap:
        """Convert ORM rows to the Pydantic aggregate."""
        return Roadmap(
            id=UUID(orm.id),
            user_id=orm.user_id,
            crop_type=orm.crop_type,
            variety=orm.variety,
            location=Location(
                latitude=orm.latitude,
                longitude=orm.longitude,
                address=orm.address,
                state=orm.state,
                district=orm.district,
            ),
            farm_size=orm.farm_size,
            sowing_date=ensure_utc(orm.sowing_date),
            estimated_harvest_date=ensure_utc(orm.estimated_harvest_date),
            current_stage=CropStage(orm.current_stage),
            milestones=[self._milestone_to_model(m) for m in milestones],
            mrl_recommendations=[
                MRLRecommendation.model_validate(rec) for rec in (orm.mrl_recommendations or [])
            ],
            weather_alerts=bool(orm.weather_alerts),
            is_active=bool(orm.is_active),
            completion_percentage=orm.completion_percentage or 0,
            total_milestones=orm.total_milestones or 0,
            completed_milestones=orm.completed_milestones or 0,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    def _milestone_rows(self, roadmap_id: str, milestones: list[Milestone]) -> list[MilestoneORM]:
        return [
            MilestoneORM(
                id=str(m.id),
                roadmap_id=roadmap_id,
                position=index,
                title=m.title,
                description=m.description,
                category=m.category.value,
                scheduled_date=to_naive_utc(m.scheduled_date),
                completed_date=to_naive_utc(m.completed_date),
                status=m.status.value,
                priority=m.priority.value,
                weather_dependent=m.weather_dependent,
                estimated_duration=m.estimated_duration,
                resources=list(m.resources),
                notes=m.notes,
                created_at=to_naive_utc(m.created_at),
                updated_at=to_naive_utc(m.updated_at),
            )
            for index, m in enumerate(milestones)
        ]

    def _scalar_columns(self, roadmap: RoadmapCreate) -> dict:
        loc = roadmap.location
        return {
            "crop_type": roadmap.crop_type,
            "variety": roadmap.variety,
            "latitude": loc.latitude,
            "longitude": loc.longitude,
            "address": loc.address,
            "state": loc.state,
            "district": loc.district,
            "farm_size": roadmap.farm_size,
            "sowing_date": to_naive_utc(roadmap.sowing_date),
            "estimated_harvest_date": to_naive_utc(roadmap.estimated_harvest_date),
            "current_stage": roadmap.current_stage.value,
            "mrl_recommendations": [
                rec.model_dump(mode="json") for rec in roadmap.mrl_recommendations
            ],
            "weather_alerts": roadmap.weather_alerts,
            "is_active": roadmap.is_active,
            "completion_percentage": roadmap.completion_percentage,
            "total_milestones": roadmap.total_milestones,
            "completed_milestones": roadmap.completed_milestones,
        }

    async def _load(self, session, query) -> list[Roadmap]:
        """Run a roadmap query and attach each roadmap's milestones in order."""
        result = await session.execute(query)
        roadmaps = list(result.scalars().all())
        if not roadmaps:
            return []

        ids = [orm.id for orm in roadmaps]
        milestone_result = await session.execute(
            select(MilestoneORM)
            .where(MilestoneORM.roadmap_id.in_(ids))
            .order_by(MilestoneORM.roadmap_id, MilestoneORM.position)
        )
        by_roadmap: dict[str, list[MilestoneORM]] = {}
        for milestone in milestone_result.scalars().all():
            by_roadmap.setdefault(milestone.roadmap_id, []).append(milestone)

        return [self._orm_to_model(orm, by_roadmap.get(orm.id, [])) for orm in roadmaps]

    async def _get_by_id(self, roadmap_id: str) -> Optional[Roadmap]:
        async with self._session_factory() as session:
            loaded = await self._load(session, select(RoadmapORM).where(RoadmapORM.id == roadmap_id))
            return loaded[0] if loaded else None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create(self, user_id: str, roadmap: RoadmapCreate) -> Roadmap:
        """Persist a new roadmap with its milestones."""
        roadmap_id = str(uuid4())
        timestamp = to_naive_utc(now_utc())
        async with self._session_factory() as session:
            session.add(
                RoadmapORM(
                    id=roadmap_id,
                    user_id=user_id,
                    created_at=timestamp,
                    updated_at=timestamp,
                    **self._scalar_columns(roadmap),
                )
            )
            session.add_all(self._milestone_rows(roadmap_id, roadmap.milestones))
            await session.commit()

        created = await self._get_by_id(roadmap_id)
        if created is None:
            raise InfrastructureError(f"Roadmap {roadmap_id} was not readable after insert")
        return created

    async def save(self, roadmap: Roadmap) -> Roadmap:
        """Overwrite a stored roadmap, milestones included. Last write wins."""
        roadmap_id = str(roadmap.id)
        async with self._session_factory() as session:
            result = await session.execute(select(RoadmapORM).where(RoadmapORM.id == roadmap_id))
            orm = result.scalar_one_or_none()
            if not orm:
                raise NotFoundError(f"Roadmap {roadmap.id} not found")

            for column, value in self._scalar_columns(roadmap).items():
                setattr(orm, column, value)
            orm.updated_at = to_naive_utc(now_utc())

            await session.execute(delete(MilestoneORM).where(MilestoneORM.roadmap_id == roadmap_id))
            session.add_all(self._milestone_rows(roadmap_id, roadmap.milestones))
            await session.commit()

        saved = await self._get_by_id(roadmap_id)
        if saved is None:
            raise InfrastructureError(f"Roadmap {roadmap_id} was not readable after save")
        return saved

    async def update_settings(
        self,
        user_id: str,
        roadmap_id: UUID,
        update: RoadmapSettingsUpdate,
    ) -> Optional[Roadmap]:
        """Apply settings to an active roadmap. Returns None if not found."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(RoadmapORM).where(
                    and_(
                        RoadmapORM.id == str(roadmap_id),
                        RoadmapORM.user_id == user_id,
                        RoadmapORM.is_active.is_(True),
                    )
                )
            )
            orm = result.scalar_one_or_none()
            if not orm:
                return None

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is not None:
                    setattr(orm, field, value)

            orm.updated_at = to_naive_utc(now_utc())
            await session.commit()

        return await self._get_by_id(str(roadmap_id))

    async def soft_delete(self, user_id: str, roadmap_id: UUID) -> bool:
        """Mark an active roadmap inactive. Returns True if one was changed."""
        async with self._session_factory() as session:
            result = await session.execute(
                update(RoadmapORM)
                .where(
                    and_(
                        RoadmapORM.id == str(roadmap_id),
                        RoadmapORM.user_id == user_id,
                        RoadmapORM.is_active.is_(True),
                    )
                )
                .values(is_active=False, updated_at=to_naive_utc(now_utc()))
            )
            await session.commit()
            return result.rowcount > 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get(self, user_id: str, roadmap_id: UUID) -> Optional[Roadmap]:
        """Get an active roadmap owned by the user."""
        async with self._session_factory() as session:
            loaded = await self._load(
                session,
                select(RoadmapORM).where(
                    and_(
                        RoadmapORM.id == str(roadmap_id),
                        RoadmapORM.user_id == user_id,
                        RoadmapORM.is_active.is_(True),
                    )
                ),
            )
            return loaded[0] if loaded else None

    async def find_active_by_user(self, user_id: str) -> list[Roadmap]:
        """Active roadmaps of the user, newest first."""
        async with self._session_factory() as session:
            return await self._load(
                session,
                select(RoadmapORM)
                .where(and_(RoadmapORM.user_id == user_id, RoadmapORM.is_active.is_(True)))
                .order_by(RoadmapORM.created_at.desc()),
            )

    async def find_by_crop_and_location(
        self,
        crop_type: str,
        state: str,
        district: Optional[str] = None,
    ) -> list[Roadmap]:
        """Active roadmaps for a crop in a state (optionally a district), newest first."""
        query = select(RoadmapORM).where(
            and_(
                RoadmapORM.crop_type == crop_type,
                RoadmapORM.state == state,
                RoadmapORM.is_active.is_(True),
            )
        )
        if district:
            query = query.where(RoadmapORM.district == district)

        async with self._session_factory() as session:
            return await self._load(session, query.order_by(RoadmapORM.created_at.desc()))

    async def list_by_location(
        self,
        state: str,
        district: Optional[str] = None,
        crop_type: Optional[str] = None,
        limit: int = 10,
    ) -> list[Roadmap]:
        """Newest active roadmaps in a location, optionally for one crop."""
        query = select(RoadmapORM).where(
            and_(RoadmapORM.state == state, RoadmapORM.is_active.is_(True))
        )
        if district:
            query = query.where(RoadmapORM.district == district)
        if crop_type:
            query = query.where(RoadmapORM.crop_type == crop_type)

        async with self._session_factory() as session:
            return await self._load(
                session, query.order_by(RoadmapORM.created_at.desc()).limit(limit)
            )

    async def list_completed_by_user(self, user_id: str) -> list[Roadmap]:
        """Roadmaps of the user in the completed stage, active or not."""
        async with self._session_factory() as session:
            return await self._load(
                session,
                select(RoadmapORM)
                .where(
                    and_(
                        RoadmapORM.user_id == user_id,
                        RoadmapORM.current_stage == CropStage.COMPLETED.value,
                    )
                )
                .order_by(RoadmapORM.created_at.desc()),
            )
