"""
User model definitions.

The profile shape depends on the account role, so it is modelled as a
discriminated union keyed on ``role`` instead of a free-form dict.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from farm_roadmap.models.enums import UserRole


class FarmerProfile(BaseModel):
    """Profile of a farmer account."""

    role: Literal[UserRole.FARMER] = UserRole.FARMER
    farm_size: Optional[float] = Field(None, ge=0.1, le=10000, description="Acres")
    crops: list[str] = Field(default_factory=list)
    state: Optional[str] = Field(None, max_length=50)
    district: Optional[str] = Field(None, max_length=50)


class DealerProfile(BaseModel):
    """Profile of an input dealer account."""

    role: Literal[UserRole.DEALER] = UserRole.DEALER
    business_name: str = Field(..., min_length=1, max_length=100)
    license_number: Optional[str] = Field(None, max_length=50)
    service_areas: list[str] = Field(default_factory=list)


UserProfile = Annotated[Union[FarmerProfile, DealerProfile], Field(discriminator="role")]


class User(BaseModel):
    """Authenticated user."""

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    is_active: bool = True
    profile: UserProfile = Field(default_factory=FarmerProfile)

    @property
    def role(self) -> UserRole:
        return self.profile.role
