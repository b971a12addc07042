"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations configured from settings.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from farm_roadmap.core.config import get_settings
from farm_roadmap.core.exceptions import AuthenticationError
from farm_roadmap.interfaces.auth_provider import IAuthProvider
from farm_roadmap.interfaces.roadmap_repository import IRoadmapRepository
from farm_roadmap.models.user import User
from farm_roadmap.services.roadmap_service import RoadmapService


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_roadmap_repository() -> IRoadmapRepository:
    """Get roadmap repository instance."""
    from farm_roadmap.infrastructure.local.roadmap_repository import SqliteRoadmapRepository
    return SqliteRoadmapRepository()


def get_roadmap_service(
    repo: IRoadmapRepository = Depends(get_roadmap_repository),
) -> RoadmapService:
    """Get roadmap service bound to the current repository."""
    return RoadmapService(repo, get_settings())


# ===========================================
# Auth Dependencies
# ===========================================


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    settings = get_settings()
    from farm_roadmap.infrastructure.local.mock_auth import MockAuthProvider
    return MockAuthProvider(enabled=settings.AUTH_ENABLED)


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    With auth disabled every request runs as the dev farmer.
    """
    if not auth_provider.is_enabled():
        user = await auth_provider.get_user("dev_user")
        return user or User(id="dev_user", email="dev@example.com", display_name="Developer")

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    try:
        return await auth_provider.verify_token(token)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        )


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

RoadmapSvc = Annotated[RoadmapService, Depends(get_roadmap_service)]
CurrentUser = Annotated[User, Depends(get_current_user)]
