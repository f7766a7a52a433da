"""
Tests for the structured care view built from an identification
"""

import pytest

from growsmart.modules.plant_identification.domain.models.plant import PlantHealth
from growsmart.modules.plant_identification.domain.services.care_advice import (
    DEFAULT_CARE_INSTRUCTIONS,
    DEFAULT_FERTILIZER,
    DEFAULT_PRUNING,
    DEFAULT_SUNLIGHT,
    DEFAULT_WATERING,
    build_plant_result,
    determine_health_status,
    extract_fertilizer_advice,
    extract_pruning_advice,
    extract_sunlight_advice,
    extract_watering_advice,
    generate_smart_recommendations,
)
from growsmart.modules.plant_identification.domain.services.care_guide import generate_care_instructions

ROSE_CARE = generate_care_instructions("rose")


class TestDetermineHealthStatus:
    """Confidence and status text to a health label"""

    @pytest.mark.parametrize("confidence, status, expected", [
        (95, None, PlantHealth.HEALTHY),
        (81, "low", PlantHealth.HEALTHY),
        (80, None, PlantHealth.NUTRIENT_DEFICIENCY),
        (61, None, PlantHealth.NUTRIENT_DEFICIENCY),
        (60, "Low confidence", PlantHealth.NUTRIENT_DEFICIENCY),
        (40, "45% identification confidence", PlantHealth.HEALTHY),
        (10, None, PlantHealth.HEALTHY),
    ])
    def test_thresholds(self, confidence, status, expected):
        assert determine_health_status(confidence, status) == expected


class TestExtractAdvice:
    """First sentence mentioning a topic"""

    def test_rose_advice(self):
        assert extract_watering_advice(ROSE_CARE).startswith("Roses need full sun")
        assert extract_sunlight_advice(ROSE_CARE).startswith("Roses need full sun")
        assert extract_fertilizer_advice(ROSE_CARE) == "Feed with rose fertilizer during growing season"
        assert extract_pruning_advice(ROSE_CARE) == DEFAULT_PRUNING

    def test_tomato_harvest_counts_as_pruning(self):
        instructions = generate_care_instructions("tomato")

        assert extract_pruning_advice(instructions) == "Harvest when fruits are firm and fully colored"

    def test_defaults_when_topic_missing(self):
        instructions = "Very hardy plant. Grows fast"

        assert extract_watering_advice(instructions) == DEFAULT_WATERING
        assert extract_sunlight_advice(instructions) == DEFAULT_SUNLIGHT
        assert extract_fertilizer_advice(instructions) == DEFAULT_FERTILIZER
        assert extract_pruning_advice(instructions) == DEFAULT_PRUNING


class TestSmartRecommendations:
    """Recommendation list"""

    def test_low_confidence_hint_comes_first(self):
        recommendations = generate_smart_recommendations("Rose", 55, ROSE_CARE)

        assert recommendations[0] == "Consider taking a clearer photo for better identification"
        assert len(recommendations) == 4

    def test_high_confidence_has_no_photo_hint(self):
        recommendations = generate_smart_recommendations("Rose", 92, ROSE_CARE)

        assert "Consider taking a clearer photo for better identification" not in recommendations
        assert len(recommendations) == 3

    def test_family_tips(self):
        assert generate_smart_recommendations("Echeveria succulent", 90, "")[-1] == (
            "Allow soil to dry completely between waterings"
        )
        assert generate_smart_recommendations("Herb garden thyme", 90, "")[-1] == (
            "Harvest regularly to encourage new growth"
        )
        assert generate_smart_recommendations("Leafy vegetable", 90, "")[-1] == (
            "Monitor for pests during growing season"
        )

    def test_capped_at_five(self):
        instructions = ". ".join(f"Sentence number {i} with enough words" for i in range(10))

        recommendations = generate_smart_recommendations("Small cactus", 30, instructions)

        assert len(recommendations) == 5

    def test_short_sentences_are_skipped(self):
        assert generate_smart_recommendations("Fig", 90, "Water. Sun. Feed.") == []


class TestBuildPlantResult:
    """Identify response body to PlantResult"""

    def test_full_response(self):
        result = build_plant_result({
            "plantName": "Rose",
            "confidence": 88,
            "scientificName": "Rosa",
            "careInstructions": ROSE_CARE,
            "healthStatus": "88% identification confidence",
        })

        assert result.name == "Rose"
        assert result.confidence == 88
        assert result.scientific_name == "Rosa"
        assert result.health == PlantHealth.HEALTHY
        assert result.care.fertilizer == "Feed with rose fertilizer during growing season"
        assert result.issues == []
        assert len(result.recommendations) == 3

    def test_missing_care_instructions_use_default(self):
        result = build_plant_result({"plantName": "Mystery plant", "confidence": 65})

        assert result.health == PlantHealth.NUTRIENT_DEFICIENCY
        assert result.care.watering == DEFAULT_WATERING
        assert result.recommendations == [
            "Consider taking a clearer photo for better identification",
            DEFAULT_CARE_INSTRUCTIONS,
        ]

    def test_missing_plant_name_raises(self):
        with pytest.raises(KeyError):
            build_plant_result({"confidence": 90})
