"""
Report assembly - the last step shared by both analysis paths

Checks required fields, clamps every numeric field into its valid range,
keeps the bilingual lists index-aligned and attaches the bookkeeping fields.
Out-of-range values are clamped. Absent fields and bilingual lists that align
to fewer than MIN_PHRASES entries are rejected.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import ValidationError

from coachvision.errors import ReportAssemblyError
from coachvision.models.analysis import (
    AnalysisReport,
    AnalysisRequest,
    AnalysisSource,
    DrillPriority,
    FrameObservation,
    MomentCategory,
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
    clamp,
    zone_extremes,
)
from coachvision.utils.logger import get_logger

logger = get_logger(__name__)

MIN_PHRASES = 3
MAX_PHRASES = 5

REQUIRED_FIELDS = (
    "overallScore",
    "possessionPercentage",
    "movementAnalysis",
    "technicalAnalysis",
    "tacticalAnalysis",
    "heatmapZones",
    "strengths",
    "strengthsAr",
    "improvements",
    "improvementsAr",
    "drillRecommendations",
    "coachNotes",
    "coachNotesAr",
    "keyMoments",
    "teamInsights",
)

SECTION_FIELDS = {
    "movementAnalysis": tuple(MOVEMENT_RANGES.keys()),
    "technicalAnalysis": TECHNICAL_FIELDS,
    "tacticalAnalysis": TACTICAL_FIELDS,
    "heatmapZones": HEATMAP_ZONES,
}

ID_PREFIXES = {
    AnalysisSource.VISION: "RVA",
    AnalysisSource.SIMULATION: "VA",
}


def generate_analysis_id(source: AnalysisSource, now: datetime) -> str:
    """``RVA-`` (vision) or ``VA-`` (simulation) + epoch millis + random suffix"""
    return f"{ID_PREFIXES[source]}-{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:8]}"


def _missing(path: str) -> ReportAssemblyError:
    return ReportAssemblyError(f"Required report field missing: {path}", details={"field": path})


def _number(value: Any, path: str) -> float:
    # bool is an int subclass but never a valid score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ReportAssemblyError(
            f"Report field {path} is not numeric",
            details={"field": path, "value": repr(value)[:50]}
        )
    return value


def _clamp_int(value: Any, bounds, path: str) -> int:
    return int(round(clamp(_number(value, path), bounds)))


def _clamp_float(value: Any, bounds, path: str) -> float:
    return round(float(clamp(_number(value, path), bounds)), 1)


def _aligned(english: Sequence[str], arabic: Sequence[str], path: str):
    """Cut both languages to their common length, at most MAX_PHRASES"""
    length = min(len(english), len(arabic), MAX_PHRASES)
    if len(english) != len(arabic):
        logger.warning(f"Bilingual list length mismatch ({len(english)} vs {len(arabic)}), keeping {length}")
    if length < MIN_PHRASES:
        raise ReportAssemblyError(
            f"Report field {path} has {length} aligned entries, at least {MIN_PHRASES} required",
            details={"field": path, "count": length}
        )
    return list(english[:length]), list(arabic[:length])


def _enum_value(value: Any, enum_type, default):
    try:
        return enum_type(str(value).strip().lower()).value
    except ValueError:
        logger.warning(f"Unknown {enum_type.__name__} '{value}', using '{default.value}'")
        return default.value


class ReportAssembler:
    """Finalizes raw generator output into an AnalysisReport"""

    def __init__(
        self,
        id_factory: Optional[Callable[[AnalysisSource, datetime], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.id_factory = id_factory or generate_analysis_id
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def assemble(
        self,
        body: Dict[str, Any],
        source: AnalysisSource,
        request: AnalysisRequest,
        frame_analyses: Optional[List[FrameObservation]] = None,
    ) -> AnalysisReport:
        """
        Validate, clamp and finalize a generator's report body

        Args:
            body: Raw report body keyed by camelCase names
            source: Which path produced the body
            request: The originating request (identifiers)
            frame_analyses: Ordered frame observations for the vision path

        Returns:
            AnalysisReport

        Raises:
            ReportAssemblyError: if a required field is absent or a bilingual
                list aligns to fewer than MIN_PHRASES entries
        """
        for name in REQUIRED_FIELDS:
            if body.get(name) is None:
                raise _missing(name)
        for section, fields in SECTION_FIELDS.items():
            if not isinstance(body[section], dict):
                raise _missing(section)
            for name in fields:
                if body[section].get(name) is None:
                    raise _missing(f"{section}.{name}")

        movement = {}
        for name, bounds in MOVEMENT_RANGES.items():
            path = f"movementAnalysis.{name}"
            value = body["movementAnalysis"][name]
            if name in MOVEMENT_FLOAT_FIELDS:
                movement[name] = _clamp_float(value, bounds, path)
            else:
                movement[name] = _clamp_int(value, bounds, path)
        movement["avgSpeed"] = min(movement["avgSpeed"], movement["maxSpeed"])

        technical = {
            name: _clamp_int(body["technicalAnalysis"][name], SCORE_RANGE, f"technicalAnalysis.{name}")
            for name in TECHNICAL_FIELDS
        }
        tactical = {
            name: _clamp_int(body["tacticalAnalysis"][name], SCORE_RANGE, f"tacticalAnalysis.{name}")
            for name in TACTICAL_FIELDS
        }
        heatmap = {
            name: _clamp_int(body["heatmapZones"][name], ZONE_RANGE, f"heatmapZones.{name}")
            for name in HEATMAP_ZONES
        }
        dominant_zone, weak_zone = zone_extremes(heatmap)

        strengths, strengths_ar = _aligned(body["strengths"], body["strengthsAr"], "strengths")
        improvements, improvements_ar = _aligned(body["improvements"], body["improvementsAr"], "improvements")

        drills = [
            {**drill, "priority": _enum_value(drill.get("priority"), DrillPriority, DrillPriority.MEDIUM)}
            for drill in body["drillRecommendations"]
        ]
        moments = [
            {**moment, "category": _enum_value(moment.get("category"), MomentCategory, MomentCategory.HIGHLIGHT)}
            for moment in body["keyMoments"]
        ]

        frames = list(frame_analyses or []) if source == AnalysisSource.VISION else []
        now = self.clock()

        try:
            report = AnalysisReport.model_validate({
                "analysisId": self.id_factory(source, now),
                "source": source,
                "identifier": request.identifier,
                "subjectName": request.subject_name,
                "teamTag": request.team_tag,
                "clipKind": request.clip_kind,
                "framesAnalyzed": len(frames),
                "generatedAt": now,
                "overallScore": _clamp_int(body["overallScore"], SCORE_RANGE, "overallScore"),
                "possessionPercentage": _clamp_int(
                    body["possessionPercentage"], POSSESSION_RANGE, "possessionPercentage"
                ),
                "movementAnalysis": movement,
                "technicalAnalysis": technical,
                "tacticalAnalysis": tactical,
                "heatmapZones": heatmap,
                "dominantZone": dominant_zone,
                "weakZone": weak_zone,
                "strengths": strengths,
                "strengthsAr": strengths_ar,
                "improvements": improvements,
                "improvementsAr": improvements_ar,
                "drillRecommendations": drills,
                "coachNotes": body["coachNotes"],
                "coachNotesAr": body["coachNotesAr"],
                "keyMoments": moments,
                "teamInsights": body["teamInsights"],
                "aggregatedInsights": body.get("aggregatedInsights"),
                "frameAnalyses": frames,
            })
        except ValidationError as e:
            first = e.errors()[0]
            path = ".".join(str(part) for part in first["loc"])
            raise ReportAssemblyError(
                f"Report field {path} is invalid: {first['msg']}",
                details={"field": path, "errors": e.error_count()}
            ) from e

        logger.info(
            f"📋 Report {report.analysis_id} assembled ({source.value}, "
            f"{report.frames_analyzed} frames, overall {report.overall_score})"
        )
        return report
