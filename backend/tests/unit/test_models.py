"""
Unit tests for model definitions and serialization.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from farm_roadmap.models.enums import CropStage, UserRole
from farm_roadmap.models.roadmap import Location, Roadmap, RoadmapGenerationRequest, RoadmapResponse
from farm_roadmap.models.user import DealerProfile, FarmerProfile, User
from farm_roadmap.utils.datetime_utils import days_until, ensure_utc, to_naive_utc

NOW = datetime(2026, 7, 1, 12, 0, tzinfo=timezone.utc)


def _location() -> Location:
    return Location(
        latitude=30.9,
        longitude=75.85,
        address="Village Road 4",
        state="Punjab",
        district="Ludhiana",
    )


def _roadmap(harvest: datetime) -> Roadmap:
    return Roadmap(
        id=uuid4(),
        user_id="farmer-1",
        crop_type="rice",
        location=_location(),
        sowing_date=NOW,
        estimated_harvest_date=harvest,
        created_at=NOW,
        updated_at=NOW,
    )


class TestUserProfile:
    def test_default_profile_is_farmer(self):
        user = User(id="u1")

        assert isinstance(user.profile, FarmerProfile)
        assert user.role == UserRole.FARMER

    def test_profile_discriminated_by_role(self):
        user = User.model_validate(
            {
                "id": "d1",
                "profile": {
                    "role": "dealer",
                    "business_name": "Green Fields Agro Inputs",
                    "service_areas": ["Ludhiana"],
                },
            }
        )

        assert isinstance(user.profile, DealerProfile)
        assert user.role == UserRole.DEALER
        assert user.profile.service_areas == ["Ludhiana"]

    def test_dealer_profile_requires_business_name(self):
        with pytest.raises(PydanticValidationError):
            User.model_validate({"id": "d1", "profile": {"role": "dealer"}})

    def test_unknown_role_rejected(self):
        with pytest.raises(PydanticValidationError):
            User.model_validate({"id": "x", "profile": {"role": "admin"}})


class TestRoadmapResponse:
    def test_full_location(self):
        response = RoadmapResponse.from_roadmap(_roadmap(NOW + timedelta(days=10)), NOW)

        assert response.full_location == "Village Road 4, Ludhiana, Punjab"

    def test_days_until_harvest_rounds_up(self):
        response = RoadmapResponse.from_roadmap(_roadmap(NOW + timedelta(days=9, hours=1)), NOW)

        assert response.days_until_harvest == 10

    def test_days_until_harvest_negative_after_harvest(self):
        response = RoadmapResponse.from_roadmap(_roadmap(NOW - timedelta(days=2)), NOW)

        assert response.days_until_harvest == -2

    def test_serializes_enums_as_strings(self):
        data = RoadmapResponse.from_roadmap(_roadmap(NOW), NOW).model_dump(mode="json")

        assert data["current_stage"] == CropStage.PLANNING.value == "planning"
        assert data["sowing_date"].startswith("2026-07-01T12:00:00")
        assert "id" in data
        assert "_id" not in data


class TestGenerationRequest:
    def test_strips_crop_type(self):
        request = RoadmapGenerationRequest(
            crop_type="  tomato ",
            location=_location(),
            sowing_date=NOW,
        )

        assert request.crop_type == "tomato"

    @pytest.mark.parametrize("field,value", [("crop_type", "x"), ("farm_size", 0.05)])
    def test_rejects_out_of_range(self, field, value):
        data = {"crop_type": "rice", "location": _location(), "sowing_date": NOW, field: value}

        with pytest.raises(PydanticValidationError):
            RoadmapGenerationRequest(**data)

    def test_rejects_bad_latitude(self):
        with pytest.raises(PydanticValidationError):
            Location(latitude=91, longitude=0, address="a", state="s", district="d")


class TestDatetimeUtils:
    def test_naive_round_trip(self):
        naive = to_naive_utc(NOW)

        assert naive.tzinfo is None
        assert ensure_utc(naive) == NOW

    def test_ensure_utc_converts_offset(self):
        ist = timezone(timedelta(hours=5, minutes=30))

        assert ensure_utc(datetime(2026, 7, 1, 17, 30, tzinfo=ist)) == NOW

    def test_days_until_today(self):
        assert days_until(NOW, NOW) == 0
