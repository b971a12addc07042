"""
Mock authentication provider for local development.
"""

from typing import Optional

from farm_roadmap.core.exceptions import AuthenticationError
from farm_roadmap.interfaces.auth_provider import IAuthProvider
from farm_roadmap.models.user import DealerProfile, FarmerProfile, User


class MockAuthProvider(IAuthProvider):
    """Mock auth provider that treats the bearer token as a user id."""

    def __init__(self, enabled: bool = False):
        """
        Initialize mock auth provider.

        Args:
            enabled: Whether authentication is required
        """
        self._enabled = enabled
        self._mock_users = {
            "dev_user": User(
                id="dev_user",
                email="dev@example.com",
                display_name="Developer",
                profile=FarmerProfile(
                    farm_size=5.0,
                    crops=["rice", "wheat"],
                    state="Punjab",
                    district="Ludhiana",
                ),
            ),
            "dealer_user": User(
                id="dealer_user",
                email="dealer@example.com",
                display_name="Agro Dealer",
                profile=DealerProfile(
                    business_name="Green Fields Agro Inputs",
                    license_number="PB-LDH-0042",
                    service_areas=["Ludhiana", "Jalandhar"],
                ),
            ),
            "inactive_user": User(
                id="inactive_user",
                email="inactive@example.com",
                display_name="Inactive Farmer",
                is_active=False,
            ),
        }

    async def verify_token(self, token: str) -> User:
        """
        Verify token - in mock mode, token is treated as user_id.

        Unknown tokens resolve to a fresh farmer account.

        Raises:
            AuthenticationError: empty token or inactive user
        """
        token = token.strip()
        if not token:
            raise AuthenticationError("Empty bearer token")

        user = self._mock_users.get(token)
        if user is None:
            if "@" in token:
                user = User(id=token, email=token, display_name=token)
            else:
                user = User(id=token, email=f"{token}@example.com", display_name=token)

        if not user.is_active:
            raise AuthenticationError(f"User {user.id} is inactive")
        return user

    async def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        return self._mock_users.get(user_id)

    def is_enabled(self) -> bool:
        """Check if authentication is enabled."""
        return self._enabled
