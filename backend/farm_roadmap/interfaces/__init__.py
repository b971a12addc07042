"""Abstract interfaces for infrastructure abstraction."""

from farm_roadmap.interfaces.auth_provider import IAuthProvider
from farm_roadmap.interfaces.roadmap_repository import IRoadmapRepository

__all__ = [
    "IAuthProvider",
    "IRoadmapRepository",
]
