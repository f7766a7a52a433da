"""
Tests for care instructions and provider response parsing
"""

import pytest

from growsmart.modules.plant_identification.domain.services.care_guide import (
    GENERIC_CARE,
    generate_care_instructions,
)
from growsmart.modules.plant_identification.domain.services.identification_service import (
    UNKNOWN_PLANT,
    parse_identification,
    to_percent,
)


class TestGenerateCareInstructions:
    """Keyword lookup on the plant name"""

    @pytest.mark.parametrize("name, fragment", [
        ("Rosa chinensis (Rose)", "Roses need full sun"),
        ("Cherry Tomato", "Tomatoes require full sun"),
        ("Sweet Basil", "Basil loves warm weather"),
        ("Common Sunflower", "Sunflowers need full sun"),
        ("Golden Barrel Cactus", "Water only when soil is completely dry"),
        ("Jade succulent", "Water only when soil is completely dry"),
        ("Boston Fern", "Prefers indirect light"),
        ("Moth Orchid", "orchid-specific potting mix"),
        ("Peppermint", "Grows well in partial shade"),
        ("English Lavender", "alkaline soil"),
        ("Bell Pepper", "Needs warm weather, full sun"),
    ])
    def test_known_plants(self, name, fragment):
        assert fragment in generate_care_instructions(name)

    def test_unknown_plant_gets_generic_care(self):
        assert generate_care_instructions("Monstera deliciosa") == GENERIC_CARE

    def test_empty_name(self):
        assert generate_care_instructions("") == GENERIC_CARE


class TestToPercent:
    """Probability to whole percentage"""

    @pytest.mark.parametrize("probability, expected", [
        (0.873, 87),
        (0.875, 88),
        (0.005, 1),
        (1, 100),
        (None, 0),
        ("0.5", 50),
        ("not a number", 0),
    ])
    def test_rounding(self, probability, expected):
        assert to_percent(probability) == expected


class TestParseIdentification:
    """Best match across response formats"""

    def test_v2_suggestions(self):
        data = {"suggestions": [
            {"plant_name": "Solanum lycopersicum", "probability": 0.91,
             "plant_details": {"scientific_name": "Solanum lycopersicum L."}},
            {"plant_name": "Solanum melongena", "probability": 0.05},
        ]}

        parsed = parse_identification(data)

        assert parsed["plant_name"] == "Solanum lycopersicum"
        assert parsed["confidence"] == 91
        assert parsed["scientific_name"] == "Solanum lycopersicum L."
        assert len(parsed["all_predictions"]) == 2

    def test_v3_classification(self):
        data = {"result": {"classification": {"suggestions": [
            {"name": "Ocimum basilicum", "probability": 0.764, "details": {}},
        ]}}}

        parsed = parse_identification(data)

        assert parsed["plant_name"] == "Ocimum basilicum"
        assert parsed["confidence"] == 76
        assert parsed["scientific_name"] == "Ocimum basilicum"

    def test_plantnet_results(self):
        data = {"results": [{
            "score": 0.42,
            "species": {"scientificNameWithoutAuthor": "Rosa gallica", "scientificName": "Rosa gallica L."},
        }]}

        parsed = parse_identification(data)

        assert parsed["plant_name"] == "Rosa gallica"
        assert parsed["confidence"] == 42
        assert parsed["scientific_name"] == "Rosa gallica L."
        assert parsed["all_predictions"] == []

    def test_predictions_capped_at_three(self):
        data = {"suggestions": [{"plant_name": f"Plant {i}", "probability": 0.1} for i in range(6)]}

        assert len(parse_identification(data)["all_predictions"]) == 3

    def test_missing_name_is_unknown(self):
        parsed = parse_identification({"suggestions": [{"probability": 0.3}]})

        assert parsed["plant_name"] == UNKNOWN_PLANT

    @pytest.mark.parametrize("data", [
        {},
        {"suggestions": []},
        {"result": {"classification": {"suggestions": []}}},
        {"results": []},
    ])
    def test_no_match(self, data):
        assert parse_identification(data) is None
