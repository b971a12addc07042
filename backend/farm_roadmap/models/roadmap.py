"""
Farming roadmap model definitions.

A roadmap is the aggregate for one crop growing cycle: an ordered list of
milestones plus progress fields derived from them.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from farm_roadmap.models.enums import CropStage
from farm_roadmap.models.milestone import Milestone
from farm_roadmap.utils.datetime_utils import days_until


class Location(BaseModel):
    """Farm location."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    address: str = Field(..., min_length=1, max_length=200)
    state: str = Field(..., min_length=1, max_length=50)
    district: str = Field(..., min_length=1, max_length=50)

    class Config:
        str_strip_whitespace = True


class MRLRecommendation(BaseModel):
    """
    Pesticide safety guidance bound by a Maximum Residue Limit.

    Descriptive only; nothing in the service computes with these values.
    """

    pesticide: Optional[str] = Field(None, max_length=100)
    dosage: Optional[str] = Field(None, max_length=50)
    application_method: Optional[str] = Field(None, max_length=100)
    safety_period: Optional[int] = Field(None, ge=0, description="Days before harvest")
    target_pest: Optional[str] = Field(None, max_length=100)
    mrl_limit: Optional[float] = Field(None, ge=0, description="mg/kg")
    last_application_date: Optional[datetime] = None

    class Config:
        str_strip_whitespace = True


class RoadmapGenerationRequest(BaseModel):
    """Schema for generating a roadmap from the crop catalog."""

    crop_type: str = Field(..., min_length=2, max_length=50, description="Crop name, e.g. rice")
    variety: Optional[str] = Field(None, max_length=50)
    location: Location
    farm_size: Optional[float] = Field(None, ge=0.1, le=10000, description="Acres")
    sowing_date: datetime

    class Config:
        str_strip_whitespace = True


class RoadmapCreate(BaseModel):
    """Fully built roadmap aggregate, ready to be persisted."""

    crop_type: str = Field(..., min_length=1, max_length=50)
    variety: Optional[str] = Field(None, max_length=50)
    location: Location
    farm_size: Optional[float] = Field(None, ge=0.1, le=10000)
    sowing_date: datetime
    estimated_harvest_date: datetime
    current_stage: CropStage = CropStage.PLANNING
    milestones: list[Milestone] = Field(default_factory=list)
    mrl_recommendations: list[MRLRecommendation] = Field(default_factory=list)
    weather_alerts: bool = True
    is_active: bool = True
    completion_percentage: int = Field(0, ge=0, le=100)
    total_milestones: int = Field(0, ge=0)
    completed_milestones: int = Field(0, ge=0)


class RoadmapSettingsUpdate(BaseModel):
    """Schema for toggling roadmap settings."""

    weather_alerts: Optional[bool] = None
    is_active: Optional[bool] = None


class Roadmap(RoadmapCreate):
    """Complete roadmap model."""

    id: UUID
    user_id: str = Field(..., description="Owner user ID")
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RoadmapResponse(Roadmap):
    """Roadmap with read-time convenience fields."""

    full_location: str
    days_until_harvest: int

    @classmethod
    def from_roadmap(cls, roadmap: Roadmap, reference: Optional[datetime] = None) -> "RoadmapResponse":
        """Attach full_location and days_until_harvest as of reference (default now)."""
        loc = roadmap.location
        return cls(
            **roadmap.model_dump(),
            full_location=f"{loc.address}, {loc.district}, {loc.state}",
            days_until_harvest=days_until(roadmap.estimated_harvest_date, reference),
        )


class RoadmapMilestones(BaseModel):
    """A roadmap together with a filtered subset of its milestones."""

    roadmap: RoadmapResponse
    milestones: list[Milestone]


class MilestoneDigest(BaseModel):
    """Upcoming or overdue milestones across a user's roadmaps."""

    items: list[RoadmapMilestones]
    count: int = Field(..., ge=0, description="Total milestones across all items")
    days: Optional[int] = Field(None, description="Look-ahead window, upcoming only")


class RoadmapStatistics(BaseModel):
    """Roadmap and milestone counts for one user."""

    total_roadmaps: int = 0
    active_roadmaps: int = 0
    completed_roadmaps: int = 0
    total_milestones: int = 0
    completed_milestones: int = 0
    overdue_milestones: int = 0
    upcoming_milestones: int = 0
