"""
Team-specific tactical profiles keyed by jersey colour
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from coachvision.config import settings
from coachvision.models.analysis import HeatmapSkew, PlayStyle, PossessionTendency, TeamProfile


def _profile(tag: str, style: PlayStyle, strengths, weaknesses, skew: HeatmapSkew,
             possession: PossessionTendency) -> TeamProfile:
    return TeamProfile(
        team_tag=tag,
        play_style=style,
        strength_tags=tuple(strengths),
        weakness_tags=tuple(weaknesses),
        heatmap_skew=skew,
        possession_tendency=possession,
    )


TEAM_PROFILES: Mapping[str, TeamProfile] = MappingProxyType({
    "red": _profile(
        "red", PlayStyle.ATTACKING,
        ["shooting", "speed", "pressing"],
        ["defensive_awareness", "positioning"],
        HeatmapSkew.RIGHT, PossessionTendency.MEDIUM,
    ),
    "yellow": _profile(
        "yellow", PlayStyle.POSSESSION,
        ["passing", "ball_control", "positioning"],
        ["shooting", "heading"],
        HeatmapSkew.CENTER, PossessionTendency.HIGH,
    ),
    "blue": _profile(
        "blue", PlayStyle.BALANCED,
        ["tactical_awareness", "work_rate", "stamina"],
        ["dribbling", "creativity"],
        HeatmapSkew.COMPACT, PossessionTendency.MEDIUM,
    ),
    "green": _profile(
        "green", PlayStyle.COUNTER,
        ["speed", "acceleration", "transitions"],
        ["possession", "patience"],
        HeatmapSkew.WIDE, PossessionTendency.LOW,
    ),
    "white": _profile(
        "white", PlayStyle.DEFENSIVE,
        ["defensive_awareness", "heading", "tackling"],
        ["creativity", "attacking_movement"],
        HeatmapSkew.LEFT, PossessionTendency.LOW,
    ),
    "black": _profile(
        "black", PlayStyle.ATTACKING,
        ["dribbling", "creativity", "flair"],
        ["defensive_work", "stamina"],
        HeatmapSkew.CENTER, PossessionTendency.MEDIUM,
    ),
    "orange": _profile(
        "orange", PlayStyle.BALANCED,
        ["work_rate", "pressing", "energy"],
        ["composure", "decision_making"],
        HeatmapSkew.WIDE, PossessionTendency.MEDIUM,
    ),
    "purple": _profile(
        "purple", PlayStyle.POSSESSION,
        ["technique", "vision", "passing"],
        ["physicality", "aerial_duels"],
        HeatmapSkew.CENTER, PossessionTendency.HIGH,
    ),
    "navy": _profile(
        "navy", PlayStyle.DEFENSIVE,
        ["organization", "discipline", "concentration"],
        ["attacking_threat", "creativity"],
        HeatmapSkew.COMPACT, PossessionTendency.LOW,
    ),
    "gold": _profile(
        "gold", PlayStyle.ATTACKING,
        ["finishing", "movement", "instinct"],
        ["tracking_back", "defensive_duties"],
        HeatmapSkew.RIGHT, PossessionTendency.MEDIUM,
    ),
})

DEFAULT_TEAM_TAG = settings.DEFAULT_TEAM_TAG if settings.DEFAULT_TEAM_TAG in TEAM_PROFILES else "blue"


def _freeze(table: Dict) -> Mapping:
    return MappingProxyType({key: MappingProxyType(value) for key, value in table.items()})


# Additive sub-score adjustments, applied before clamping
STRENGTH_ADJUSTMENTS: Mapping[str, Mapping[str, int]] = _freeze({
    "passing": {"passing": 10, "passingAccuracy": 8},
    "ball_control": {"ballControl": 12, "firstTouch": 10},
    "shooting": {"shooting": 12, "shootingAccuracy": 10},
    "finishing": {"shooting": 8, "shootingAccuracy": 10},
    "dribbling": {"dribbling": 12},
    "technique": {"ballControl": 8, "firstTouch": 8, "dribbling": 8},
    "heading": {"heading": 10},
    "positioning": {"positioning": 10},
    "pressing": {"pressingIntensity": 10},
    "defensive_awareness": {"defensiveAwareness": 10},
    "tactical_awareness": {"positioning": 6, "defensiveAwareness": 6},
    "movement": {"offTheBallMovement": 8},
    "vision": {"spaceCreation": 8},
    "creativity": {"spaceCreation": 6},
})

WEAKNESS_ADJUSTMENTS: Mapping[str, Mapping[str, int]] = _freeze({
    "shooting": {"shooting": -8, "shootingAccuracy": -6},
    "heading": {"heading": -10},
    "aerial_duels": {"heading": -6},
    "dribbling": {"dribbling": -8},
    "defensive_awareness": {"defensiveAwareness": -8},
    "positioning": {"positioning": -6},
    "tracking_back": {"defensiveAwareness": -6},
    "defensive_duties": {"defensiveAwareness": -6},
    "defensive_work": {"defensiveAwareness": -6},
    "creativity": {"spaceCreation": -6},
    "attacking_movement": {"offTheBallMovement": -6},
})

# Bonus weight per pitch zone for each heatmap skew
HEATMAP_SKEW_BONUSES: Mapping[HeatmapSkew, Mapping[str, int]] = _freeze({
    HeatmapSkew.LEFT: {"leftMidfield": 15, "leftAttack": 10, "leftDefense": 8},
    HeatmapSkew.RIGHT: {"rightMidfield": 15, "rightAttack": 10, "rightDefense": 8},
    HeatmapSkew.CENTER: {"centerMidfield": 20, "centerAttack": 12, "centerDefense": 10},
    HeatmapSkew.WIDE: {"leftMidfield": 12, "rightMidfield": 12, "leftAttack": 8, "rightAttack": 8},
    HeatmapSkew.COMPACT: {"centerMidfield": 18, "centerDefense": 15},
})


def get_team_profile(team_tag: Optional[str]) -> TeamProfile:
    """
    Look up the tactical profile for a team tag

    Args:
        team_tag: Jersey colour tag, case-insensitive; None or unknown tags
            resolve to the default profile

    Returns:
        Immutable TeamProfile
    """
    if team_tag:
        profile = TEAM_PROFILES.get(team_tag.strip().lower())
        if profile is not None:
            return profile
    return TEAM_PROFILES[DEFAULT_TEAM_TAG]


def is_known_team(team_tag: Optional[str]) -> bool:
    return bool(team_tag) and team_tag.strip().lower() in TEAM_PROFILES


def list_team_tags() -> List[str]:
    return list(TEAM_PROFILES.keys())


def score_adjustments(profile: TeamProfile) -> Dict[str, int]:
    """Net additive adjustment per sub-score implied by a profile's tags"""
    totals: Dict[str, int] = {}
    for tag in profile.strength_tags:
        for field, delta in STRENGTH_ADJUSTMENTS.get(tag, {}).items():
            totals[field] = totals.get(field, 0) + delta
    for tag in profile.weakness_tags:
        for field, delta in WEAKNESS_ADJUSTMENTS.get(tag, {}).items():
            totals[field] = totals.get(field, 0) + delta
    return totals
