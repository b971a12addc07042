"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    JSON,
)
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from farm_roadmap.core.config import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class RoadmapORM(Base):
    """Farming roadmap ORM model."""

    __tablename__ = "roadmaps"
    __table_args__ = (
        Index("ix_roadmaps_user_active", "user_id", "is_active"),
        Index("ix_roadmaps_crop_state", "crop_type", "state"),
        Index("ix_roadmaps_state_district_active", "state", "district", "is_active"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    crop_type = Column(String(50), nullable=False, index=True)
    variety = Column(String(50), nullable=True)

    # Location
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    address = Column(String(200), nullable=False)
    state = Column(String(50), nullable=False)
    district = Column(String(50), nullable=False)

    farm_size = Column(Float, nullable=True)  # acres
    sowing_date = Column(DateTime, nullable=False, index=True)
    estimated_harvest_date = Column(DateTime, nullable=False, index=True)
    current_stage = Column(String(20), default="planning", index=True)
    mrl_recommendations = Column(JSON, nullable=True, default=list)
    weather_alerts = Column(Boolean, default=True)
    is_active = Column(Boolean, default=True, index=True)

    # Derived progress, written by the service layer
    completion_percentage = Column(Integer, default=0)
    total_milestones = Column(Integer, default=0)
    completed_milestones = Column(Integer, default=0)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class MilestoneORM(Base):
    """Roadmap milestone ORM model."""

    __tablename__ = "roadmap_milestones"
    __table_args__ = (
        Index("ix_milestones_schedule_status", "scheduled_date", "status"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    roadmap_id = Column(
        String(36),
        ForeignKey("roadmaps.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)  # order within the roadmap
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(20), nullable=False, index=True)
    scheduled_date = Column(DateTime, nullable=False)
    completed_date = Column(DateTime, nullable=True)
    status = Column(String(20), default="pending", index=True)
    priority = Column(String(10), default="medium")
    weather_dependent = Column(Boolean, default=False)
    estimated_duration = Column(Integer, nullable=False)
    resources = Column(JSON, nullable=True, default=list)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


def get_engine():
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def get_session_factory():
    """Get async session factory."""
    engine = get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db():
    """Initialize database tables."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()

