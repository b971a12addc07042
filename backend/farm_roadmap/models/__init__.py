"""Pydantic models (schemas) for the application."""

from farm_roadmap.models.enums import (
    CropStage,
    MilestoneCategory,
    MilestonePriority,
    MilestoneStatus,
    UserRole,
)
from farm_roadmap.models.milestone import (
    Milestone,
    MilestoneCreate,
    MilestoneProgressUpdate,
)
from farm_roadmap.models.roadmap import (
    Location,
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
from farm_roadmap.models.user import DealerProfile, FarmerProfile, User

__all__ = [
    # Enums
    "CropStage",
    "MilestoneCategory",
    "MilestonePriority",
    "MilestoneStatus",
    "UserRole",
    # Milestone
    "Milestone",
    "MilestoneCreate",
    "MilestoneProgressUpdate",
    # Roadmap
    "Location",
    "MRLRecommendation",
    "Roadmap",
    "RoadmapCreate",
    "RoadmapGenerationRequest",
    "RoadmapResponse",
    "RoadmapSettingsUpdate",
    "RoadmapMilestones",
    "MilestoneDigest",
    "RoadmapStatistics",
    # User
    "User",
    "FarmerProfile",
    "DealerProfile",
]
