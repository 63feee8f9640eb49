from __future__ import annotations

import copy
from typing import Any

import pytest

from agrisync.errors import KnowledgeBaseError, UnknownCropError
from agrisync.knowledge_base import GENERAL_BUCKET, KnowledgeBase, _read_json, build_knowledge_base
from agrisync.models.enums import HarvestTypeEnum


def _payloads() -> dict[str, dict[str, Any]]:
    return {
        "crops_payload": copy.deepcopy(_read_json("crops.json")),
        "diseases_payload": copy.deepcopy(_read_json("diseases.json")),
        "soils_payload": copy.deepcopy(_read_json("soils.json")),
        "regions_payload": copy.deepcopy(_read_json("regions.json")),
        "weather_payload": copy.deepcopy(_read_json("weather.json")),
        "assistant_payload": copy.deepcopy(_read_json("assistant.json")),
    }


def test_packaged_tables_load(knowledge_base: KnowledgeBase) -> None:
    assert {"Wheat", "Rice", "Tomato", "Cotton", "Sugarcane"} <= set(knowledge_base.crop_names())
    assert knowledge_base.default_soil_type in knowledge_base.soil_types
    assert knowledge_base.state_bounds[0].state == "Maharashtra"
    assert knowledge_base.state_bounds[-1].state == "Delhi"


def test_crop_lookup_is_case_insensitive(knowledge_base: KnowledgeBase) -> None:
    assert knowledge_base.get_crop("wheat").name == "Wheat"
    assert knowledge_base.get_crop("  TOMATO ").harvest_type == HarvestTypeEnum.continuous
    assert knowledge_base.has_crop("Rice")


def test_unknown_crop_raises_lookup_error(knowledge_base: KnowledgeBase) -> None:
    with pytest.raises(UnknownCropError) as excinfo:
        knowledge_base.get_crop("Dragonfruit")

    assert isinstance(excinfo.value, LookupError)
    assert excinfo.value.crop_name == "Dragonfruit"


def test_diseases_for_appends_general_bucket(knowledge_base: KnowledgeBase) -> None:
    records = knowledge_base.diseases_for("Wheat")
    general = knowledge_base.diseases[GENERAL_BUCKET]

    assert records[0].id == "wheat-rust"
    assert tuple(records[-len(general):]) == general


def test_unsorted_schedule_is_rejected() -> None:
    payloads = _payloads()
    schedule = payloads["crops_payload"]["crops"][0]["treatment_schedule"]
    schedule[0], schedule[1] = schedule[1], schedule[0]

    with pytest.raises(KnowledgeBaseError, match="sorted"):
        build_knowledge_base(**payloads)


def test_continuous_crop_requires_harvest_window() -> None:
    payloads = _payloads()
    tomato = next(crop for crop in payloads["crops_payload"]["crops"] if crop["name"] == "Tomato")
    del tomato["last_harvest_day"]

    with pytest.raises(KnowledgeBaseError):
        build_knowledge_base(**payloads)


def test_unknown_soil_reference_is_rejected() -> None:
    payloads = _payloads()
    payloads["soils_payload"]["regional_soil_map"]["Punjab"]["default"] = "Moon Dust"

    with pytest.raises(KnowledgeBaseError, match="Moon Dust"):
        build_knowledge_base(**payloads)


def test_missing_weather_pattern_is_rejected() -> None:
    payloads = _payloads()
    del payloads["weather_payload"]["patterns"]["central"]["monsoon"]

    with pytest.raises(KnowledgeBaseError):
        build_knowledge_base(**payloads)


def test_assistant_answers_need_known_crops_and_topics() -> None:
    payloads = _payloads()
    payloads["assistant_payload"]["crops"]["Barley"] = payloads["assistant_payload"]["crops"]["Wheat"]

    with pytest.raises(KnowledgeBaseError, match="Barley"):
        build_knowledge_base(**payloads)

    payloads = _payloads()
    payloads["assistant_payload"]["crops"]["Rice"]["answers"]["en"]["harvest"] = "Harvest at 80% golden grains."

    with pytest.raises(KnowledgeBaseError, match="harvest"):
        build_knowledge_base(**payloads)
