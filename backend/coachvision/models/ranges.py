"""
Documented numeric ranges for every report field

``VALID_RANGES`` is what the report assembler clamps to, ``SYNTHESIS_BANDS``
is where the deterministic synthesizer draws its base values.
"""

from typing import Dict, Tuple

Range = Tuple[float, float]

MOVEMENT_RANGES: Dict[str, Range] = {
    "totalDistance": (0, 15000),
    "maxSpeed": (0.0, 40.0),
    "avgSpeed": (0.0, 20.0),
    "sprintCount": (0, 60),
    "highIntensityRuns": (0, 100),
    "accelerations": (0, 150),
    "decelerations": (0, 150),
}

MOVEMENT_FLOAT_FIELDS = ("maxSpeed", "avgSpeed")

TECHNICAL_FIELDS = (
    "ballControl", "passing", "passingAccuracy", "shooting",
    "shootingAccuracy", "dribbling", "firstTouch", "heading",
)

TACTICAL_FIELDS = (
    "positioning", "spaceCreation", "defensiveAwareness",
    "pressingIntensity", "offTheBallMovement",
)

# Tie-break order for dominant/weak zone
HEATMAP_ZONES = (
    "leftDefense", "centerDefense", "rightDefense",
    "leftMidfield", "centerMidfield", "rightMidfield",
    "leftAttack", "centerAttack", "rightAttack",
)

SCORE_RANGE: Range = (0, 100)
ZONE_RANGE: Range = (0, 100)
POSSESSION_RANGE: Range = (0, 100)

# Overall score averages these technical sub-scores
CORE_TECHNICAL_FIELDS = ("ballControl", "passing", "shooting", "dribbling", "firstTouch")

# Simulation bands
SYNTHESIS_SCORE_CLAMP: Range = (30, 95)

SYNTHESIS_BANDS: Dict[str, Dict[str, Range]] = {
    "technicalAnalysis": {
        "ballControl": (55, 85),
        "passing": (50, 82),
        "passingAccuracy": (60, 88),
        "shooting": (45, 78),
        "shootingAccuracy": (40, 75),
        "dribbling": (50, 82),
        "firstTouch": (55, 85),
        "heading": (40, 72),
    },
    "tacticalAnalysis": {
        "positioning": (55, 88),
        "spaceCreation": (50, 85),
        "defensiveAwareness": (48, 82),
        "pressingIntensity": (52, 88),
        "offTheBallMovement": (50, 85),
    },
    "movementAnalysis": {
        "totalDistance": (4000, 9000),
        "maxSpeed": (22, 32),
        "avgSpeed": (6, 12),
        "sprintCount": (8, 25),
        "highIntensityRuns": (15, 45),
        "accelerations": (25, 65),
        "decelerations": (25, 65),
    },
    "heatmapZones": {
        "leftDefense": (5, 15),
        "centerDefense": (8, 18),
        "rightDefense": (5, 15),
        "leftMidfield": (10, 25),
        "centerMidfield": (15, 35),
        "rightMidfield": (10, 25),
        "leftAttack": (5, 20),
        "centerAttack": (8, 22),
        "rightAttack": (5, 20),
    },
}

POSSESSION_BANDS: Dict[str, Range] = {
    "high": (55, 68),
    "medium": (45, 55),
    "low": (35, 48),
}


def clamp(value: float, bounds: Range) -> float:
    """Clamp a value into an inclusive range"""
    low, high = bounds
    return max(low, min(high, value))


def zone_extremes(zones: Dict[str, float]) -> Tuple[str, str]:
    """
    Dominant and weak zone of a heatmap

    Zones are scanned in ``HEATMAP_ZONES`` order and only a strictly larger
    (smaller) weight replaces the current pick, so ties go to the first zone.
    """
    dominant = weak = HEATMAP_ZONES[0]
    for name in HEATMAP_ZONES[1:]:
        if zones[name] > zones[dominant]:
            dominant = name
        if zones[name] < zones[weak]:
            weak = name
    return dominant, weak
