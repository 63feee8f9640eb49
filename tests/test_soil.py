from __future__ import annotations

import pytest

from agrisync.models.enums import RegionSourceEnum
from agrisync.schemas.region import Region
from agrisync.services.soil_service import SoilService


def _region(state: str, district: str) -> Region:
    return Region(state=state, district=district, source=RegionSourceEnum.manual)


@pytest.mark.parametrize(
    ("state", "district", "crop", "expected"),
    [
        ("Maharashtra", "Nashik", None, "Black Cotton Soil"),
        ("Maharashtra", "Pune", None, "Black Cotton Soil"),
        ("Maharashtra", "Pune", "Sugarcane", "Alluvial Soil"),
        ("Maharashtra", "Pune", "sugarcane", "Alluvial Soil"),
        ("Maharashtra", "Kolhapur", "Rice", "Laterite Soil"),
        ("Maharashtra", "Kolhapur", "Wheat", "Black Cotton Soil"),
        ("Rajasthan", "Udaipur", None, "Red Soil"),
        ("Punjab", "Patiala", None, "Alluvial Soil"),
        ("Kerala", "Kochi", None, "Laterite Soil"),
        ("Atlantis", "Nowhere", None, "Loamy Soil"),
    ],
)
def test_soil_lookup_chain(
    soil_service: SoilService, state: str, district: str, crop: str | None, expected: str
) -> None:
    profile = soil_service.get_soil_profile(_region(state, district), crop)

    assert profile.soil_type_name == expected


def test_missing_region_uses_default_soil(soil_service: SoilService) -> None:
    assert soil_service.get_soil_profile(None).soil_type_name == "Loamy Soil"


def test_unknown_soil_type_degrades_to_default(soil_service: SoilService) -> None:
    assert soil_service.get_soil_details("Moon Dust").soil_type_name == "Loamy Soil"
    assert soil_service.get_soil_details("red soil").soil_type_name == "Red Soil"


def test_moisture_floor_parses_lower_bound(soil_service: SoilService) -> None:
    assert soil_service.get_soil_details("Sandy Soil").moisture_floor_percent == 20.0
    assert soil_service.get_soil_details("Black Cotton Soil").moisture_floor_percent == 55.0
    assert soil_service.get_soil_details("Red Soil").model_dump()["moisture_floor_percent"] == 35.0


def test_suitability(soil_service: SoilService) -> None:
    suited = soil_service.get_suitability("Black Cotton Soil", "cotton")
    unsuited = soil_service.get_suitability("Black Cotton Soil", "Rice")

    assert suited.suitable is True
    assert unsuited.suitable is False
    assert unsuited.amendments
    assert unsuited.fertilizer_plan.npk_ratio


def test_list_soil_types(soil_service: SoilService) -> None:
    assert "Sandy Soil" in soil_service.list_soil_types()
    assert len(soil_service.list_soil_types()) == 6
