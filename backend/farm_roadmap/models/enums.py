"""
Enum definitions for the application.

Values are the literal lowercase strings exposed over the API.
"""

from enum import Enum


class MilestoneCategory(str, Enum):
    """Kind of farming work a milestone represents."""

    SOWING = "sowing"
    IRRIGATION = "irrigation"
    FERTILIZER = "fertilizer"
    PEST_CONTROL = "pest_control"
    HARVESTING = "harvesting"
    GENERAL = "general"


class MilestoneStatus(str, Enum):
    """Milestone status."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class MilestonePriority(str, Enum):
    """Milestone priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class CropStage(str, Enum):
    """
    Coarse lifecycle phase of the crop.

    Derived from the roadmap completion percentage, never set by clients.
    """

    PLANNING = "planning"
    SOWING = "sowing"
    GROWING = "growing"
    FLOWERING = "flowering"
    HARVESTING = "harvesting"
    COMPLETED = "completed"


class UserRole(str, Enum):
    """Account role; selects the profile shape."""

    FARMER = "farmer"
    DEALER = "dealer"
