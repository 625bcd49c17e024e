"""
Deterministic report synthesis - the simulation path

Builds a complete report body from a seeded stream and the team profile. No
external calls are made, and re-running with the same (identifier, team tag,
size) reproduces the same body.
"""

import math
from typing import Any, Dict, Optional, Union

from coachvision.config import settings
from coachvision.models.analysis import TeamProfile
from coachvision.models.ranges import (
    CORE_TECHNICAL_FIELDS,
    MOVEMENT_FLOAT_FIELDS,
    POSSESSION_BANDS,
    SYNTHESIS_BANDS,
    SYNTHESIS_SCORE_CLAMP,
    ZONE_RANGE,
    clamp,
    zone_extremes,
)
from coachvision.services.frame_planner import format_timestamp, plan_frame_timestamps
from coachvision.utils.coaching_content import (
    COACH_NOTES_TEMPLATE,
    COACH_NOTES_TEMPLATE_AR,
    DRILL_POOL,
    KEY_MOMENT_POOL,
    PLAY_STYLE_NAMES_AR,
    STRENGTH_PHRASES,
    TACTICAL_RECOMMENDATIONS,
    TEAM_NAMES_AR,
    WEAKNESS_PHRASES,
)
from coachvision.utils.logger import get_logger
from coachvision.utils.seeding import DeterministicStream, derive_seed
from coachvision.utils.team_profiles import HEATMAP_SKEW_BONUSES, get_team_profile, score_adjustments

logger = get_logger(__name__)


def build_team_insights(profile: TeamProfile) -> Dict[str, Any]:
    """Team insights block derived from the static profile"""
    recommendations = TACTICAL_RECOMMENDATIONS[profile.play_style]
    return {
        "playStyle": profile.play_style.value,
        "possessionTendency": profile.possession_tendency.value,
        "heatmapSkew": profile.heatmap_skew.value,
        "strengthTags": list(profile.strength_tags),
        "weaknessTags": list(profile.weakness_tags),
        "tacticalRecommendations": [en for en, _ in recommendations],
        "tacticalRecommendationsAr": [ar for _, ar in recommendations],
    }


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class DeterministicSynthesizer:
    """Seeded generator for the canonical report body"""

    def __init__(self, drill_count: Optional[int] = None, key_moment_count: Optional[int] = None):
        self.drill_count = drill_count or settings.DRILL_RECOMMENDATION_COUNT
        self.key_moment_count = key_moment_count or settings.KEY_MOMENT_COUNT

    def synthesize(
        self,
        identifier: str,
        team_tag: Optional[str],
        size: Union[int, float] = 0,
        subject_name: Optional[str] = None,
        clip_kind: Optional[str] = None,
        duration: Optional[float] = None,
        profile: Optional[TeamProfile] = None,
    ) -> Dict[str, Any]:
        """
        Synthesize a report body

        Draw order is fixed: technical, tactical, movement, possession,
        heatmap, drill shuffle, key moment shuffle. Changing it changes every
        report, so it is part of the output contract.

        Args:
            identifier: Video reference string
            team_tag: Team tag as given by the caller, part of the seed
            size: Clip size in bytes, part of the seed
            subject_name: Player name for the coach notes
            clip_kind: Clip kind for the coach notes
            duration: Clip length used to place key moments
            profile: Team profile, looked up from ``team_tag`` when omitted

        Returns:
            Report body keyed by the camelCase contract names
        """
        profile = profile or get_team_profile(team_tag)
        seed = derive_seed(identifier, team_tag or "", size)
        stream = DeterministicStream(seed)
        logger.info(f"🎲 Synthesizing report for {identifier} (team={profile.team_tag}, seed={seed})")

        adjustments = score_adjustments(profile)

        def _scores(section: str) -> Dict[str, int]:
            scores = {}
            for name, (low, high) in SYNTHESIS_BANDS[section].items():
                biased = stream.next_int(low, high) + adjustments.get(name, 0)
                scores[name] = int(clamp(biased, SYNTHESIS_SCORE_CLAMP))
            return scores

        technical = _scores("technicalAnalysis")
        tactical = _scores("tacticalAnalysis")

        movement: Dict[str, Union[int, float]] = {}
        for name, (low, high) in SYNTHESIS_BANDS["movementAnalysis"].items():
            if name in MOVEMENT_FLOAT_FIELDS:
                movement[name] = stream.next_float(low, high)
            else:
                movement[name] = stream.next_int(low, high)
        movement["avgSpeed"] = min(movement["avgSpeed"], movement["maxSpeed"])

        possession = stream.next_int(*POSSESSION_BANDS[profile.possession_tendency.value])

        bonuses = HEATMAP_SKEW_BONUSES[profile.heatmap_skew]
        heatmap = {
            name: int(clamp(stream.next_int(low, high) + bonuses.get(name, 0), ZONE_RANGE))
            for name, (low, high) in SYNTHESIS_BANDS["heatmapZones"].items()
        }
        dominant_zone, weak_zone = zone_extremes(heatmap)

        drills = [
            {
                "name": name,
                "nameAr": name_ar,
                "duration": length,
                "priority": priority.value,
                "description": description,
                "descriptionAr": description_ar,
            }
            for name, name_ar, length, priority, description, description_ar
            in stream.shuffled(DRILL_POOL)[:self.drill_count]
        ]

        moments = stream.shuffled(KEY_MOMENT_POOL)[:self.key_moment_count]
        timestamps = plan_frame_timestamps(duration or settings.DEFAULT_VIDEO_DURATION, len(moments))
        key_moments = [
            {
                "timestamp": format_timestamp(timestamp),
                "description": description,
                "descriptionAr": description_ar,
                "category": category.value,
                "sourceFrameIndex": None,
            }
            for timestamp, (description, description_ar, category) in zip(timestamps, moments)
        ]

        strengths = STRENGTH_PHRASES[profile.play_style]
        weaknesses = WEAKNESS_PHRASES[profile.play_style]

        coach_notes = COACH_NOTES_TEMPLATE.format(
            team=profile.team_tag.capitalize(),
            play_style=profile.play_style.value,
            subject=subject_name or "The player",
            clip_kind=clip_kind or "clip",
            possession=possession,
            weakness=weaknesses[0][0].lower(),
        )
        coach_notes_ar = COACH_NOTES_TEMPLATE_AR.format(
            team=TEAM_NAMES_AR.get(profile.team_tag, profile.team_tag),
            play_style=PLAY_STYLE_NAMES_AR[profile.play_style],
            subject=subject_name or "اللاعب",
            possession=possession,
            weakness=weaknesses[0][1],
        )

        overall = _round_half_up(sum(technical[name] for name in CORE_TECHNICAL_FIELDS) / len(CORE_TECHNICAL_FIELDS))

        return {
            "overallScore": overall,
            "possessionPercentage": possession,
            "movementAnalysis": movement,
            "technicalAnalysis": technical,
            "tacticalAnalysis": tactical,
            "heatmapZones": heatmap,
            "dominantZone": dominant_zone,
            "weakZone": weak_zone,
            "strengths": [en for en, _ in strengths],
            "strengthsAr": [ar for _, ar in strengths],
            "improvements": [en for en, _ in weaknesses],
            "improvementsAr": [ar for _, ar in weaknesses],
            "drillRecommendations": drills,
            "coachNotes": coach_notes,
            "coachNotesAr": coach_notes_ar,
            "keyMoments": key_moments,
            "teamInsights": build_team_insights(profile),
        }
