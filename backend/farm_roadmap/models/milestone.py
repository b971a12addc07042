"""
Milestone model definitions.

A milestone is one scheduled farming task inside a roadmap. Milestones have
no lifecycle of their own: they are created, changed and removed only through
the roadmap that owns them.
"""

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from farm_roadmap.models.enums import MilestoneCategory, MilestonePriority, MilestoneStatus

ResourceName = Annotated[str, Field(max_length=100)]


class MilestoneBase(BaseModel):
    """Base milestone fields."""

    title: str = Field(..., min_length=1, max_length=100, description="Milestone title")
    description: str = Field(..., min_length=1, max_length=500, description="What needs to be done")
    category: MilestoneCategory = Field(..., description="Kind of farming work")
    scheduled_date: datetime = Field(..., description="Planned start date")
    priority: MilestonePriority = Field(MilestonePriority.MEDIUM)
    weather_dependent: bool = Field(False, description="Whether weather can shift this task")
    estimated_duration: int = Field(..., ge=1, le=365, description="Estimated duration in days")
    resources: list[ResourceName] = Field(default_factory=list, description="Inputs and equipment")
    notes: Optional[str] = Field(None, max_length=1000)

    class Config:
        str_strip_whitespace = True


class MilestoneCreate(MilestoneBase):
    """Schema for adding a milestone to a roadmap."""

    pass


class MilestoneProgressUpdate(BaseModel):
    """Schema for reporting progress on a milestone."""

    status: MilestoneStatus
    completed_date: Optional[datetime] = Field(
        None, description="Defaults to now when moving to completed"
    )
    notes: Optional[str] = Field(None, max_length=1000)

    class Config:
        str_strip_whitespace = True


class Milestone(MilestoneBase):
    """Complete milestone model."""

    id: UUID
    status: MilestoneStatus = Field(MilestoneStatus.PENDING)
    completed_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        str_strip_whitespace = True
