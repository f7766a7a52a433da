# 📄 File: growsmart/modules/plant_identification/domain/services/care_advice.py
# 🧭 Purpose (Layman Explanation):
# Turns the paragraph of care instructions into neat advice cards (watering, sunlight,
# fertilizer, pruning), picks a health label and suggests a few next steps for the farmer.
# 🧪 Purpose (Technical Summary):
# Pure functions mapping an identification response onto a PlantResult: confidence-based health
# rule, keyword sentence extraction per care topic with defaults, and up to five recommendations.
# 🔗 Dependencies:
# plant_identification.domain.models.plant
# 🔄 Connected Modules / Calls From:
# growsmart.client.plant_scan

from typing import Any, Dict, Iterable, List, Optional

from ..models.plant import PlantCare, PlantHealth, PlantResult

DEFAULT_CARE_INSTRUCTIONS = "Follow general plant care guidelines"

WATERING_KEYWORDS = ("water", "moisture", "watering", "irrigation")
SUNLIGHT_KEYWORDS = ("sun", "light", "shade", "sunlight")
FERTILIZER_KEYWORDS = ("fertilizer", "feed", "nutrition", "nutrients")
PRUNING_KEYWORDS = ("prune", "trim", "harvest", "deadhead")

DEFAULT_WATERING = "Water regularly based on soil moisture level"
DEFAULT_SUNLIGHT = "Provide appropriate sunlight based on plant type"
DEFAULT_FERTILIZER = "Use balanced fertilizer during growing season"
DEFAULT_PRUNING = "Prune dead or damaged parts as needed"

MAX_RECOMMENDATIONS = 5
LOW_CONFIDENCE_THRESHOLD = 70


def determine_health_status(confidence: float, health_status: Optional[str]) -> PlantHealth:
    """
    Health label for an identification.

    Above 80% confidence the plant counts as healthy, above 60% as
    nutrient-deficient; below that a health status mentioning "low"
    means nutrient-deficient and anything else healthy.
    """
    if confidence > 80:
        return PlantHealth.HEALTHY
    if confidence > 60:
        return PlantHealth.NUTRIENT_DEFICIENCY
    if health_status and "low" in health_status.lower():
        return PlantHealth.NUTRIENT_DEFICIENCY
    return PlantHealth.HEALTHY


def _first_sentence_with(instructions: str, keywords: Iterable[str], default: str) -> str:
    keywords = tuple(keywords)
    for sentence in instructions.split("."):
        if any(keyword in sentence.lower() for keyword in keywords):
            return sentence.strip() or default
    return default


def extract_watering_advice(instructions: str) -> str:
    return _first_sentence_with(instructions, WATERING_KEYWORDS, DEFAULT_WATERING)


def extract_sunlight_advice(instructions: str) -> str:
    return _first_sentence_with(instructions, SUNLIGHT_KEYWORDS, DEFAULT_SUNLIGHT)


def extract_fertilizer_advice(instructions: str) -> str:
    return _first_sentence_with(instructions, FERTILIZER_KEYWORDS, DEFAULT_FERTILIZER)


def extract_pruning_advice(instructions: str) -> str:
    return _first_sentence_with(instructions, PRUNING_KEYWORDS, DEFAULT_PRUNING)


def generate_smart_recommendations(plant_name: str, confidence: float, instructions: str) -> List[str]:
    """
    Up to five short recommendations.

    A low-confidence hint comes first, then the first three substantial
    sentences of the care instructions, then a plant-family tip.
    """
    recommendations = []

    if confidence < LOW_CONFIDENCE_THRESHOLD:
        recommendations.append("Consider taking a clearer photo for better identification")

    sentences = [s.strip() for s in instructions.split(".") if len(s.strip()) > 10]
    recommendations.extend(sentences[:3])

    lower_name = plant_name.lower()
    if "succulent" in lower_name or "cactus" in lower_name:
        recommendations.append("Allow soil to dry completely between waterings")
    elif "herb" in lower_name:
        recommendations.append("Harvest regularly to encourage new growth")
    elif "vegetable" in lower_name:
        recommendations.append("Monitor for pests during growing season")

    return [r for r in recommendations if len(r) > 5][:MAX_RECOMMENDATIONS]


def build_plant_result(data: Dict[str, Any]) -> PlantResult:
    """
    Map an identify response body onto the structured care view.

    Args:
        data: Body returned by POST /plants/identify (camelCase keys)
    """
    confidence = data.get("confidence") or 0
    instructions = data.get("careInstructions") or DEFAULT_CARE_INSTRUCTIONS
    name = data["plantName"]

    return PlantResult(
        name=name,
        confidence=confidence,
        scientific_name=data.get("scientificName"),
        health=determine_health_status(confidence, data.get("healthStatus")),
        care=PlantCare(
            watering=extract_watering_advice(instructions),
            sunlight=extract_sunlight_advice(instructions),
            fertilizer=extract_fertilizer_advice(instructions),
            pruning=extract_pruning_advice(instructions),
        ),
        recommendations=generate_smart_recommendations(name, confidence, instructions),
    )
