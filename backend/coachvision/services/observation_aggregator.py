"""
Reduces per-frame observations into one structured report with a single model call
"""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from coachvision.config import settings
from coachvision.errors import AggregationError, AnalysisError, SchemaViolationError
from coachvision.models.analysis import (
    AggregatedInsights,
    CamelModel,
    DrillRecommendation,
    FrameObservation,
    HeatmapZones,
    KeyMoment,
    MovementAnalysis,
    TacticalAnalysis,
    TechnicalAnalysis,
)
from coachvision.models.ranges import (
    HEATMAP_ZONES,
    MOVEMENT_FLOAT_FIELDS,
    MOVEMENT_RANGES,
    POSSESSION_RANGE,
    SCORE_RANGE,
    TACTICAL_FIELDS,
    TECHNICAL_FIELDS,
    ZONE_RANGE,
)
from coachvision.services.frame_analyzer import FrameContext
from coachvision.services.vision_client import VisionModelClient, call_with_retries
from coachvision.utils.logger import get_logger

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are an expert football coach providing detailed video analysis. "
    "Generate realistic metrics based on the actual observations from the video frames."
)

_UNITS = {"totalDistance": "meters", "maxSpeed": "km/h", "avgSpeed": "km/h"}


def _string_list(description: str) -> Dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def _bounded(kind: str, bounds, description: str) -> Dict[str, Any]:
    low, high = bounds
    return {"type": kind, "description": f"{description} ({low}-{high})"}


def _object(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties.keys()),
        "additionalProperties": False,
    }


def build_report_schema() -> Dict[str, Any]:
    """Strict JSON schema for the aggregated report, ranges stated per field"""
    movement = {
        name: _bounded(
            "number" if name in MOVEMENT_FLOAT_FIELDS else "integer",
            MOVEMENT_RANGES[name],
            f"{name} in {_UNITS[name]}" if name in _UNITS else f"{name} count",
        )
        for name in MOVEMENT_RANGES
    }
    technical = {name: _bounded("integer", SCORE_RANGE, f"{name} score") for name in TECHNICAL_FIELDS}
    tactical = {name: _bounded("integer", SCORE_RANGE, f"{name} score") for name in TACTICAL_FIELDS}
    zones = {name: _bounded("integer", ZONE_RANGE, f"Activity weight in {name}") for name in HEATMAP_ZONES}

    drill = _object({
        "name": {"type": "string", "description": "Drill name in English"},
        "nameAr": {"type": "string", "description": "Drill name in Arabic"},
        "duration": {"type": "string", "description": "Duration like '15 mins'"},
        "priority": {"type": "string", "enum": ["high", "medium", "low"]},
        "description": {"type": "string", "description": "Brief description in English"},
        "descriptionAr": {"type": "string", "description": "Brief description in Arabic"},
    })
    moment = _object({
        "timestamp": {"type": "string", "description": "Timestamp like '0:34'"},
        "description": {"type": "string", "description": "Description of the moment in English"},
        "descriptionAr": {"type": "string", "description": "Description of the moment in Arabic"},
        "category": {"type": "string", "enum": ["positive", "improvement", "highlight"]},
        "sourceFrameIndex": {"type": "integer", "description": "0-based index of the frame showing the moment"},
    })

    return _object({
        "overallScore": _bounded("integer", SCORE_RANGE, "Overall performance score based on observations"),
        "possessionPercentage": _bounded("integer", POSSESSION_RANGE, "Estimated team possession percentage"),
        "aggregatedInsights": _object({
            "movementPatterns": _string_list("Movement patterns observed"),
            "technicalStrengths": _string_list("Technical strengths observed"),
            "technicalWeaknesses": _string_list("Technical weaknesses observed"),
            "tacticalObservations": _string_list("Tactical observations"),
            "bodyPositioning": _string_list("Body positioning notes"),
            "ballHandling": _string_list("Ball handling notes"),
        }),
        "movementAnalysis": _object(movement),
        "technicalAnalysis": _object(technical),
        "tacticalAnalysis": _object(tactical),
        "heatmapZones": _object(zones),
        "strengths": _string_list("3-5 strengths in English"),
        "strengthsAr": _string_list("The same 3-5 strengths in Arabic, same order"),
        "improvements": _string_list("3-5 improvements in English"),
        "improvementsAr": _string_list("The same 3-5 improvements in Arabic, same order"),
        "drillRecommendations": {"type": "array", "items": drill, "description": "3-5 drills, highest priority first"},
        "coachNotes": {"type": "string", "description": "Detailed coach notes in English"},
        "coachNotesAr": {"type": "string", "description": "Detailed coach notes in Arabic"},
        "keyMoments": {"type": "array", "items": moment, "description": "3-5 key moments in clip order"},
    })


REPORT_SCHEMA = build_report_schema()


class AggregatedPayload(CamelModel):
    """Validated aggregation response"""

    overall_score: int
    possession_percentage: int
    aggregated_insights: AggregatedInsights
    movement_analysis: MovementAnalysis
    technical_analysis: TechnicalAnalysis
    tactical_analysis: TacticalAnalysis
    heatmap_zones: HeatmapZones
    strengths: List[str]
    strengths_ar: List[str]
    improvements: List[str]
    improvements_ar: List[str]
    drill_recommendations: List[DrillRecommendation]
    coach_notes: str
    coach_notes_ar: str
    key_moments: List[KeyMoment]


def _join(lines: Sequence[str]) -> str:
    return "\n".join(lines) if lines else "(none)"


def build_aggregation_prompt(
    observations: Sequence[FrameObservation],
    context: FrameContext,
    duration: float,
) -> str:
    """Concatenate the four observation lists of every frame into one prompt"""
    all_observations = [line for frame in observations for line in frame.observations]
    all_actions = [line for frame in observations for line in frame.player_actions]
    all_technical = [line for frame in observations for line in frame.technical_notes]
    all_tactical = [line for frame in observations for line in frame.tactical_notes]

    return f"""You are an expert football coach. Based on the following observations from analyzing multiple frames of a football video, provide a comprehensive analysis.

Player: {context.subject_name or 'Unknown'}
Team Color: {context.team_tag or 'Not specified'}
Video Type: {context.clip_kind or 'training'}
Video Duration: {duration:g} seconds
Frames Analyzed: {len(observations)}

Frame Observations:
{_join(all_observations)}

Player Actions Observed:
{_join(all_actions)}

Technical Notes:
{_join(all_technical)}

Tactical Notes:
{_join(all_tactical)}

Based on these real observations from the video, generate a comprehensive coaching analysis with specific, actionable insights."""


class ObservationAggregator:
    """Turns the ordered frame observations into the report body"""

    def __init__(
        self,
        client: VisionModelClient,
        retries: Optional[int] = None,
        backoff_seconds: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        self.client = client
        self.retries = settings.AGGREGATION_RETRIES if retries is None else retries
        self.backoff_seconds = settings.RETRY_BACKOFF_SECONDS if backoff_seconds is None else backoff_seconds
        self.max_tokens = max_tokens or settings.AGGREGATION_MAX_TOKENS

    async def aggregate(
        self,
        observations: Sequence[FrameObservation],
        context: FrameContext,
        duration: float,
    ) -> Dict[str, Any]:
        """
        Reduce all frame observations into one structured report body

        Args:
            observations: Frame observations ordered by frame index
            context: Subject/team/clip context
            duration: Clip length in seconds

        Returns:
            Report body keyed by the camelCase contract names

        Raises:
            AggregationError: on any failure of the model call or of the
                response; there is no partial aggregate
        """
        if not observations:
            raise AggregationError("No frame observations to aggregate")
        if all(frame.is_empty for frame in observations):
            raise AggregationError(
                "Every frame analysis came back empty",
                details={"frames": len(observations)}
            )

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_aggregation_prompt(observations, context, duration)},
        ]

        async def _call():
            raw = await self.client.complete_json(messages, "aggregated_analysis", REPORT_SCHEMA, self.max_tokens)
            try:
                return AggregatedPayload.model_validate(raw)
            except ValidationError as e:
                raise SchemaViolationError(
                    "Aggregation response violates schema",
                    details={"errors": e.error_count()}
                ) from e

        try:
            payload = await call_with_retries(_call, self.retries, self.backoff_seconds, "Aggregation")
        except AnalysisError as e:
            logger.error(f"❌ Aggregation failed ({e.error_code}): {e.message}")
            raise AggregationError(
                f"Aggregation failed: {e.message}",
                details={"cause": e.error_code, **e.details}
            ) from e
        except Exception as e:
            logger.error(f"❌ Aggregation failed ({type(e).__name__}): {e}")
            raise AggregationError(
                f"Aggregation failed: {e}",
                details={"cause": type(e).__name__}
            ) from e

        body = payload.model_dump(mode="json", by_alias=True)
        for moment in body["keyMoments"]:
            index = moment.get("sourceFrameIndex")
            if index is not None and not 0 <= index < len(observations):
                moment["sourceFrameIndex"] = None

        logger.info(f"Aggregated {len(observations)} frames: overall score {body['overallScore']}")
        return body
