"""
Unit tests for crop templates.
"""

import pytest

from farm_roadmap.services.crop_catalog import CROP_CATALOG, get_crop_template, supported_crops


def test_supported_crops():
    assert supported_crops() == ["rice", "tomato", "wheat"]


@pytest.mark.parametrize("crop,growth_period", [("rice", 120), ("wheat", 150), ("tomato", 90)])
def test_growth_periods(crop, growth_period):
    assert get_crop_template(crop).growth_period == growth_period


def test_lookup_ignores_case_and_whitespace():
    assert get_crop_template("  Wheat ") is CROP_CATALOG["wheat"]


def test_unknown_crop_falls_back_to_rice():
    assert get_crop_template("millet") is CROP_CATALOG["rice"]


def test_unknown_crop_without_fallback_raises():
    with pytest.raises(KeyError):
        get_crop_template("millet", fallback=None)


def test_every_stage_fits_milestone_constraints():
    for template in CROP_CATALOG.values():
        assert template.stages
        for stage in template.stages:
            assert 1 <= len(stage.name) <= 100
            assert 1 <= len(stage.description) <= 500
            assert 1 <= stage.duration <= 365
            assert all(len(resource) <= 100 for resource in stage.resources)


def test_rice_stages_are_ordered_by_offset():
    offsets = [stage.day_offset for stage in CROP_CATALOG["rice"].stages]

    assert offsets == sorted(offsets)
    assert offsets[0] == -7
    assert offsets[-1] == 120
