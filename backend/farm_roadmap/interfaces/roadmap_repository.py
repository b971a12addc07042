"""
Roadmap repository interface.

Defines the contract for roadmap aggregate persistence. Implementations store
what they are given: derived progress fields are computed by the caller.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from farm_roadmap.models.roadmap import Roadmap, RoadmapCreate, RoadmapSettingsUpdate


class IRoadmapRepository(ABC):
    """Interface for roadmap repository operations."""

    @abstractmethod
    async def create(self, user_id: str, roadmap: RoadmapCreate) -> Roadmap:
        """Persist a new roadmap with its milestones."""
        pass

    @abstractmethod
    async def get(self, user_id: str, roadmap_id: UUID) -> Optional[Roadmap]:
        """Get an active roadmap owned by the user."""
        pass

    @abstractmethod
    async def save(self, roadmap: Roadmap) -> Roadmap:
        """Overwrite a stored roadmap, milestones included. Last write wins."""
        pass

    @abstractmethod
    async def find_active_by_user(self, user_id: str) -> list[Roadmap]:
        """Active roadmaps of the user, newest first."""
        pass

    @abstractmethod
    async def find_by_crop_and_location(
        self,
        crop_type: str,
        state: str,
        district: Optional[str] = None,
    ) -> list[Roadmap]:
        """Active roadmaps for a crop in a state (optionally a district), newest first."""
        pass

    @abstractmethod
    async def list_by_location(
        self,
        state: str,
        district: Optional[str] = None,
        crop_type: Optional[str] = None,
        limit: int = 10,
    ) -> list[Roadmap]:
        """Newest active roadmaps in a location, optionally for one crop."""
        pass

    @abstractmethod
    async def list_completed_by_user(self, user_id: str) -> list[Roadmap]:
        """Roadmaps of the user in the completed stage, active or not."""
        pass

    @abstractmethod
    async def update_settings(
        self,
        user_id: str,
        roadmap_id: UUID,
        update: RoadmapSettingsUpdate,
    ) -> Optional[Roadmap]:
        """Apply settings to an active roadmap. Returns None if not found."""
        pass

    @abstractmethod
    async def soft_delete(self, user_id: str, roadmap_id: UUID) -> bool:
        """Mark an active roadmap inactive. Returns True if one was changed."""
        pass
