"""
Keyword care guide.
Maps an identified plant name onto short care instructions.
"""

from typing import List, Tuple

GENERIC_CARE = (
    "Provide appropriate sunlight based on plant type, water when soil feels dry, ensure good "
    "drainage, and monitor for pests. Research specific care requirements for this plant variety."
)

# First matching keyword group wins
CARE_GUIDE: List[Tuple[Tuple[str, ...], str]] = [
    (("rose",),
     "Roses need full sun (6+ hours daily), well-draining soil, regular watering at the base, and "
     "annual pruning. Feed with rose fertilizer during growing season. Watch for aphids and black "
     "spot disease."),
    (("tomato",),
     "Tomatoes require full sun, consistent watering, support stakes or cages, and warm "
     "temperatures. Water at soil level to prevent leaf diseases. Harvest when fruits are firm and "
     "fully colored."),
    (("basil",),
     "Basil loves warm weather and full sun. Water regularly but avoid wetting leaves. Pinch "
     "flowers to encourage leaf growth. Harvest leaves frequently for best flavor."),
    (("sunflower",),
     "Sunflowers need full sun and well-draining soil. Water regularly, especially during flower "
     "development. Support tall varieties with stakes. Rich soil produces larger blooms."),
    (("cactus", "succulent"),
     "Requires bright light and well-draining soil. Water only when soil is completely dry. Avoid "
     "overwatering as this can cause root rot. Good drainage is essential."),
    (("fern",),
     "Prefers indirect light and high humidity. Keep soil consistently moist but not waterlogged. "
     "Mist regularly to maintain humidity. Good for shaded areas."),
    (("orchid",),
     "Needs bright, indirect light and good air circulation. Water weekly by soaking roots, then "
     "drain completely. Use orchid-specific potting mix and fertilizer."),
    (("mint",),
     "Grows well in partial shade with moist soil. Can be invasive, so consider container growing. "
     "Harvest regularly to prevent flowering. Very hardy and fast-growing."),
    (("lavender",),
     "Requires full sun and well-draining, alkaline soil. Drought-tolerant once established. Prune "
     "after flowering to maintain shape. Harvest flowers just before fully open."),
    (("pepper",),
     "Needs warm weather, full sun, and well-draining soil. Water regularly but ensure good "
     "drainage. Support heavy fruit-bearing plants. Harvest when fruits reach desired color."),
]


def generate_care_instructions(plant_name: str) -> str:
    """Care instructions for the first keyword found in the plant name."""
    lower_name = (plant_name or "").lower()
    for keywords, instructions in CARE_GUIDE:
        if any(keyword in lower_name for keyword in keywords):
            return instructions
    return GENERIC_CARE
