"""
Vision path analyzer - per-frame model calls reduced by one aggregation call
"""

from typing import Optional

from coachvision.analyzers.base_analyzer import AnalyzerOutput, BaseAnalyzer
from coachvision.config import settings
from coachvision.models.analysis import AnalysisRequest, AnalysisSource
from coachvision.services.deterministic_synthesizer import build_team_insights
from coachvision.services.frame_analyzer import FrameAnalyzer, FrameContext
from coachvision.services.frame_planner import parse_video_metadata, plan_frame_timestamps
from coachvision.services.observation_aggregator import ObservationAggregator
from coachvision.services.vision_client import VisionModelClient
from coachvision.utils.team_profiles import get_team_profile


class VisionAnalyzer(BaseAnalyzer):
    """Runs planner, frame analyzer and aggregator for requests carrying frames"""

    def __init__(
        self,
        client: VisionModelClient,
        frame_analyzer: Optional[FrameAnalyzer] = None,
        aggregator: Optional[ObservationAggregator] = None,
        max_frames: Optional[int] = None,
    ):
        super().__init__("vision")
        self.client = client
        self.frame_analyzer = frame_analyzer or FrameAnalyzer(client)
        self.aggregator = aggregator or ObservationAggregator(client)
        self.max_frames = max_frames or settings.MAX_ANALYSIS_FRAMES

    async def validate_input(self, request: AnalysisRequest) -> bool:
        if not request.has_frames:
            return False
        if not self.client.enabled:
            self.logger.info(f"Vision client '{self.client.name}' disabled, {request.identifier} goes to simulation")
            return False
        return True

    async def analyze(self, request: AnalysisRequest) -> AnalyzerOutput:
        frames = list(request.frames or [])
        if len(frames) > self.max_frames:
            self.logger.warning(f"Received {len(frames)} frames, analyzing the first {self.max_frames}")
            frames = frames[:self.max_frames]

        metadata = parse_video_metadata(request.duration_seconds, request.width, request.height, request.frame_rate)
        timestamps = plan_frame_timestamps(metadata.duration, len(frames))
        context = FrameContext(
            subject_name=request.subject_name,
            team_tag=request.team_tag,
            clip_kind=request.clip_kind,
        )

        self.logger.info(
            f"🎬 Vision analysis for {request.identifier}: {len(frames)} frames over "
            f"{metadata.duration:g}s ({metadata.width}x{metadata.height} @ {metadata.frame_rate:g}fps)"
        )
        observations = await self.frame_analyzer.analyze_frames(frames, timestamps, context)
        body = await self.aggregator.aggregate(observations, context, metadata.duration)
        body["teamInsights"] = build_team_insights(get_team_profile(request.team_tag))

        return AnalyzerOutput(body=body, source=AnalysisSource.VISION, frame_analyses=observations)
