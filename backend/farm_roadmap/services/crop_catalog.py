"""
Crop templates used to generate roadmaps.

Each template lists the stages of one growing cycle as offsets in days from
the sowing date, plus the default pesticide MRL guidance for the crop.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from farm_roadmap.models.enums import MilestoneCategory, MilestonePriority
from farm_roadmap.models.roadmap import MRLRecommendation


@dataclass(frozen=True)
class StageTemplate:
    name: str
    category: MilestoneCategory
    day_offset: int
    duration: int
    priority: MilestonePriority
    weather_dependent: bool
    description: str
    resources: tuple[str, ...] = ()


@dataclass(frozen=True)
class CropTemplate:
    growth_period: int  # days from sowing to harvest
    stages: tuple[StageTemplate, ...]
    mrl_recommendations: tuple[MRLRecommendation, ...] = field(default_factory=tuple)


_C = MilestoneCategory
_P = MilestonePriority

CROP_CATALOG: dict[str, CropTemplate] = {
    "rice": CropTemplate(
        growth_period=120,
        stages=(
            StageTemplate("Land Preparation", _C.SOWING, -7, 3, _P.HIGH, True,
                          "Prepare the field by plowing and leveling",
                          ("Tractor", "Plow", "Leveler")),
            StageTemplate("Seed Sowing", _C.SOWING, 0, 2, _P.CRITICAL, True,
                          "Sow rice seeds in prepared nursery beds",
                          ("Quality seeds", "Nursery beds")),
            StageTemplate("First Irrigation", _C.IRRIGATION, 3, 1, _P.HIGH, False,
                          "Provide initial irrigation to seedlings"),
            StageTemplate("Transplanting", _C.SOWING, 25, 3, _P.CRITICAL, True,
                          "Transplant seedlings to main field",
                          ("Healthy seedlings", "Labor")),
            StageTemplate("First Fertilizer Application", _C.FERTILIZER, 30, 1, _P.HIGH, False,
                          "Apply basal fertilizer (NPK)", ("NPK fertilizer",)),
            StageTemplate("Weed Control", _C.PEST_CONTROL, 40, 2, _P.MEDIUM, False,
                          "Remove weeds manually or apply herbicide", ("Herbicide", "Labor")),
            StageTemplate("Second Fertilizer Application", _C.FERTILIZER, 60, 1, _P.HIGH, False,
                          "Apply top dressing fertilizer", ("Urea fertilizer",)),
            StageTemplate("Pest Monitoring", _C.PEST_CONTROL, 70, 1, _P.MEDIUM, False,
                          "Monitor for pests and diseases"),
            StageTemplate("Flowering Stage Care", _C.GENERAL, 80, 5, _P.HIGH, True,
                          "Monitor flowering and ensure adequate water"),
            StageTemplate("Pre-harvest Preparation", _C.HARVESTING, 110, 3, _P.MEDIUM, False,
                          "Prepare for harvesting, check grain maturity"),
            StageTemplate("Harvesting", _C.HARVESTING, 120, 5, _P.CRITICAL, True,
                          "Harvest mature rice crop",
                          ("Harvesting equipment", "Labor", "Storage bags")),
        ),
        mrl_recommendations=(
            MRLRecommendation(pesticide="Chlorpyrifos", dosage="2ml/L",
                              application_method="Foliar spray", safety_period=21,
                              target_pest="Brown planthopper", mrl_limit=0.05),
            MRLRecommendation(pesticide="Carbendazim", dosage="1g/L",
                              application_method="Foliar spray", safety_period=14,
                              target_pest="Blast disease", mrl_limit=0.1),
        ),
    ),
    "wheat": CropTemplate(
        growth_period=150,
        stages=(
            StageTemplate("Land Preparation", _C.SOWING, -5, 2, _P.HIGH, True,
                          "Prepare field with deep plowing and harrowing"),
            StageTemplate("Seed Sowing", _C.SOWING, 0, 3, _P.CRITICAL, True,
                          "Sow wheat seeds at optimal depth and spacing"),
            StageTemplate("First Irrigation", _C.IRRIGATION, 21, 1, _P.HIGH, False,
                          "Crown root irrigation (CRI)"),
            StageTemplate("First Fertilizer Application", _C.FERTILIZER, 25, 1, _P.HIGH, False,
                          "Apply nitrogen fertilizer"),
            StageTemplate("Second Irrigation", _C.IRRIGATION, 40, 1, _P.HIGH, False,
                          "Late tillering irrigation"),
            StageTemplate("Weed Control", _C.PEST_CONTROL, 45, 1, _P.MEDIUM, False,
                          "Apply post-emergence herbicide"),
            StageTemplate("Third Irrigation", _C.IRRIGATION, 60, 1, _P.HIGH, False,
                          "Jointing stage irrigation"),
            StageTemplate("Fourth Irrigation", _C.IRRIGATION, 80, 1, _P.HIGH, False,
                          "Flowering stage irrigation"),
            StageTemplate("Fifth Irrigation", _C.IRRIGATION, 100, 1, _P.HIGH, False,
                          "Milk stage irrigation"),
            StageTemplate("Sixth Irrigation", _C.IRRIGATION, 120, 1, _P.MEDIUM, False,
                          "Dough stage irrigation"),
            StageTemplate("Harvesting", _C.HARVESTING, 150, 5, _P.CRITICAL, True,
                          "Harvest mature wheat crop"),
        ),
        mrl_recommendations=(
            MRLRecommendation(pesticide="Mancozeb", dosage="2g/L",
                              application_method="Foliar spray", safety_period=14,
                              target_pest="Rust diseases", mrl_limit=0.5),
        ),
    ),
    "tomato": CropTemplate(
        growth_period=90,
        stages=(
            StageTemplate("Nursery Preparation", _C.SOWING, -30, 2, _P.HIGH, False,
                          "Prepare nursery beds and sow seeds"),
            StageTemplate("Seedling Care", _C.GENERAL, -25, 25, _P.MEDIUM, False,
                          "Water and care for seedlings in nursery"),
            StageTemplate("Land Preparation", _C.SOWING, -3, 3, _P.HIGH, True,
                          "Prepare main field with organic matter"),
            StageTemplate("Transplanting", _C.SOWING, 0, 2, _P.CRITICAL, True,
                          "Transplant seedlings to main field"),
            StageTemplate("First Irrigation", _C.IRRIGATION, 1, 1, _P.HIGH, False,
                          "Water immediately after transplanting"),
            StageTemplate("Staking", _C.GENERAL, 15, 2, _P.MEDIUM, False,
                          "Provide support stakes for plants"),
            StageTemplate("First Fertilizer Application", _C.FERTILIZER, 20, 1, _P.HIGH, False,
                          "Apply NPK fertilizer"),
            StageTemplate("Pest Monitoring", _C.PEST_CONTROL, 30, 1, _P.HIGH, False,
                          "Monitor for early blight and pests"),
            StageTemplate("Flowering Stage Care", _C.GENERAL, 45, 10, _P.HIGH, False,
                          "Monitor flowering and fruit set"),
            StageTemplate("Fruit Development Care", _C.GENERAL, 60, 15, _P.MEDIUM, False,
                          "Monitor fruit development and diseases"),
            StageTemplate("First Harvest", _C.HARVESTING, 75, 15, _P.CRITICAL, False,
                          "Begin harvesting ripe tomatoes"),
        ),
        mrl_recommendations=(
            MRLRecommendation(pesticide="Imidacloprid", dosage="0.5ml/L",
                              application_method="Foliar spray", safety_period=7,
                              target_pest="Whitefly", mrl_limit=0.05),
            MRLRecommendation(pesticide="Copper oxychloride", dosage="2g/L",
                              application_method="Foliar spray", safety_period=14,
                              target_pest="Early blight", mrl_limit=5.0),
        ),
    ),
}


def supported_crops() -> list[str]:
    return sorted(CROP_CATALOG)


def get_crop_template(crop_type: str, fallback: Optional[str] = "rice") -> CropTemplate:
    """
    Look up a crop template, ignoring case and surrounding whitespace.

    Unknown crops get the fallback template.

    Raises:
        KeyError: the crop is unknown and fallback is None or unknown
    """
    key = crop_type.strip().lower()
    if key in CROP_CATALOG:
        return CROP_CATALOG[key]
    if fallback is None:
        raise KeyError(crop_type)
    return CROP_CATALOG[fallback.strip().lower()]
