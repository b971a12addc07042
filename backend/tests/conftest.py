"""
Shared pytest fixtures.
"""

from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from farm_roadmap.infrastructure.local.database import Base
from farm_roadmap.models.roadmap import Location, RoadmapGenerationRequest
from farm_roadmap.utils.datetime_utils import now_utc


@pytest.fixture
async def session_factory():
    """In-memory SQLite database with all tables."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    yield factory

    await engine.dispose()


@pytest.fixture
def test_user_id():
    return "test_user_123"


@pytest.fixture
def ludhiana():
    return Location(
        latitude=30.9,
        longitude=75.85,
        address="Village Road 4",
        state="Punjab",
        district="Ludhiana",
    )


@pytest.fixture
def rice_request(ludhiana):
    return RoadmapGenerationRequest(
        crop_type="rice",
        variety="Basmati",
        location=ludhiana,
        farm_size=2.5,
        sowing_date=now_utc().replace(microsecond=0) + timedelta(days=30),
    )
