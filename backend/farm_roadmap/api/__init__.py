"""API routers."""

from farm_roadmap.api import roadmaps

__all__ = [
    "roadmaps",
]
