"""
Analysis data models

Inbound request, per-frame observations and the canonical report. Every model
serializes with camelCase aliases (``model_dump(by_alias=True)``) so the JSON
contract matches the academy web client.
"""

import math
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from coachvision.errors import InvalidRequestError


class CamelModel(BaseModel):
    """Base model with camelCase aliases, accepting both spellings on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlayStyle(str, Enum):
    ATTACKING = "attacking"
    DEFENSIVE = "defensive"
    BALANCED = "balanced"
    POSSESSION = "possession"
    COUNTER = "counter"


class HeatmapSkew(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    WIDE = "wide"
    COMPACT = "compact"


class PossessionTendency(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DrillPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MomentCategory(str, Enum):
    POSITIVE = "positive"
    IMPROVEMENT = "improvement"
    HIGHLIGHT = "highlight"


class AnalysisSource(str, Enum):
    VISION = "vision"
    SIMULATION = "simulation"


class AnalysisRequest(CamelModel):
    """Inbound analysis request. A non-empty ``frames`` list selects the vision path."""

    identifier: str
    subject_name: Optional[str] = None
    team_tag: Optional[str] = None
    clip_kind: Optional[str] = None
    file_size: float = Field(default=0, ge=0)
    duration_seconds: Optional[float] = None
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    frame_rate: Optional[float] = Field(default=None, gt=0)
    frames: Optional[List[str]] = None

    @field_validator("identifier")
    @classmethod
    def identifier_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("identifier must not be blank")
        return value.strip()

    @field_validator("team_tag")
    @classmethod
    def normalize_team_tag(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().lower()
        return value or None

    @field_validator("duration_seconds")
    @classmethod
    def duration_positive(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and (not math.isfinite(value) or value <= 0):
            raise ValueError("durationSeconds must be a positive finite number")
        return value

    @field_validator("frames")
    @classmethod
    def frames_are_images(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return None
        for index, frame in enumerate(value):
            if not frame or not frame.strip():
                raise ValueError(f"frame {index} is empty")
        return value

    @property
    def has_frames(self) -> bool:
        return bool(self.frames)

    @classmethod
    def from_payload(cls, payload: Any) -> "AnalysisRequest":
        """
        Parse a raw inbound payload

        Args:
            payload: Decoded JSON object from the caller

        Returns:
            Validated AnalysisRequest

        Raises:
            InvalidRequestError: with the offending fields in ``details``
        """
        if not isinstance(payload, dict):
            raise InvalidRequestError(
                "Analysis request must be a JSON object",
                details={"received": type(payload).__name__}
            )
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            problems = [
                {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ]
            raise InvalidRequestError("Invalid analysis request", details={"errors": problems}) from e


class FrameObservation(CamelModel):
    """Free-text observations for one sampled frame. Immutable once built."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    frame_index: int = Field(ge=0)
    timestamp: float = Field(ge=0)
    observations: Tuple[str, ...] = ()
    player_actions: Tuple[str, ...] = ()
    technical_notes: Tuple[str, ...] = ()
    tactical_notes: Tuple[str, ...] = ()
    failed: bool = False

    @property
    def is_empty(self) -> bool:
        return not (self.observations or self.player_actions or self.technical_notes or self.tactical_notes)


class TeamProfile(CamelModel):
    """Static tactical bias for a team tag"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    team_tag: str
    play_style: PlayStyle
    strength_tags: Tuple[str, ...]
    weakness_tags: Tuple[str, ...]
    heatmap_skew: HeatmapSkew
    possession_tendency: PossessionTendency


class MovementAnalysis(CamelModel):
    total_distance: int
    max_speed: float
    avg_speed: float
    sprint_count: int
    high_intensity_runs: int
    accelerations: int
    decelerations: int


class TechnicalAnalysis(CamelModel):
    ball_control: int
    passing: int
    passing_accuracy: int
    shooting: int
    shooting_accuracy: int
    dribbling: int
    first_touch: int
    heading: int


class TacticalAnalysis(CamelModel):
    positioning: int
    space_creation: int
    defensive_awareness: int
    pressing_intensity: int
    off_the_ball_movement: int


class HeatmapZones(CamelModel):
    """3x3 pitch grid. Field order is the tie-break order for dominant/weak zone."""

    left_defense: int
    center_defense: int
    right_defense: int
    left_midfield: int
    center_midfield: int
    right_midfield: int
    left_attack: int
    center_attack: int
    right_attack: int


class DrillRecommendation(CamelModel):
    name: str
    name_ar: str
    duration: str
    priority: DrillPriority
    description: str
    description_ar: str


class KeyMoment(CamelModel):
    timestamp: str
    description: str
    description_ar: str
    category: MomentCategory
    source_frame_index: Optional[int] = None


class TeamInsights(CamelModel):
    play_style: PlayStyle
    possession_tendency: PossessionTendency
    heatmap_skew: HeatmapSkew
    strength_tags: List[str]
    weakness_tags: List[str]
    tactical_recommendations: List[str]
    tactical_recommendations_ar: List[str]


class AggregatedInsights(CamelModel):
    movement_patterns: List[str] = []
    technical_strengths: List[str] = []
    technical_weaknesses: List[str] = []
    tactical_observations: List[str] = []
    body_positioning: List[str] = []
    ball_handling: List[str] = []


class AnalysisReport(CamelModel):
    """Canonical report produced by both the vision and the simulation path"""

    analysis_id: str
    source: AnalysisSource
    identifier: str
    subject_name: Optional[str] = None
    team_tag: Optional[str] = None
    clip_kind: Optional[str] = None
    frames_analyzed: int
    generated_at: datetime

    overall_score: int
    possession_percentage: int
    movement_analysis: MovementAnalysis
    technical_analysis: TechnicalAnalysis
    tactical_analysis: TacticalAnalysis
    heatmap_zones: HeatmapZones
    dominant_zone: str
    weak_zone: str

    strengths: List[str]
    strengths_ar: List[str]
    improvements: List[str]
    improvements_ar: List[str]
    drill_recommendations: List[DrillRecommendation]
    coach_notes: str
    coach_notes_ar: str
    key_moments: List[KeyMoment]

    team_insights: TeamInsights
    aggregated_insights: Optional[AggregatedInsights] = None
    frame_analyses: List[FrameObservation] = []

    def to_response(self) -> Dict[str, Any]:
        """JSON-ready dict with the camelCase contract names"""
        return self.model_dump(mode="json", by_alias=True)
