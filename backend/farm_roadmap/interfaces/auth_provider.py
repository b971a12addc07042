"""
Authentication provider interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from farm_roadmap.models.user import User


class IAuthProvider(ABC):
    """Interface for resolving bearer tokens to users."""

    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """
        Verify a bearer token.

        Raises:
            AuthenticationError: token is invalid or the user is inactive
        """
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """Check if authentication is enabled."""
        pass
