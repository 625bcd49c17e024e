"""
Video Analysis Service - entry point of the analysis pipeline

Picks the vision path when the request carries frames and a model is
available, and falls through to the simulation path whenever the vision path
fails or runs out of time. The caller gets a complete report or an
InvalidRequestError, never a partial report.
"""

import asyncio
from typing import Any, Dict, List, Optional

from coachvision.analyzers.base_analyzer import AnalyzerOutput
from coachvision.analyzers.simulation_analyzer import SimulationAnalyzer
from coachvision.analyzers.vision_analyzer import VisionAnalyzer
from coachvision.config import settings
from coachvision.errors import AnalysisError, InvalidRequestError
from coachvision.models.analysis import AnalysisReport, AnalysisRequest
from coachvision.services.redis_service import RedisReportStore, ReportStore
from coachvision.services.report_assembler import ReportAssembler
from coachvision.services.s3_service import FrameStore, S3FrameStore
from coachvision.services.vision_client import OpenAIVisionClient, VisionModelClient
from coachvision.utils.logger import PerformanceLogger, get_logger

logger = get_logger(__name__)


class VideoAnalysisService:
    def __init__(
        self,
        vision_client: Optional[VisionModelClient] = None,
        report_store: Optional[ReportStore] = None,
        frame_store: Optional[FrameStore] = None,
        assembler: Optional[ReportAssembler] = None,
        vision_analyzer: Optional[VisionAnalyzer] = None,
        simulation_analyzer: Optional[SimulationAnalyzer] = None,
        timeout: Optional[float] = None,
        persist_frames: Optional[bool] = None,
    ):
        self.vision_analyzer = vision_analyzer or VisionAnalyzer(vision_client or OpenAIVisionClient())
        self.simulation_analyzer = simulation_analyzer or SimulationAnalyzer()
        self.assembler = assembler or ReportAssembler()
        self.report_store = report_store if report_store is not None else RedisReportStore()
        self.frame_store = frame_store if frame_store is not None else S3FrameStore()
        self.timeout = timeout or settings.ANALYSIS_TIMEOUT
        self.persist_frames = settings.PERSIST_FRAMES if persist_frames is None else persist_frames

    async def analyze(self, request: AnalysisRequest) -> AnalysisReport:
        """
        Produce exactly one report for a request

        Args:
            request: Validated analysis request

        Returns:
            AnalysisReport from the vision path, or from the simulation path
            when the vision path is unavailable, fails or times out

        Raises:
            InvalidRequestError: when the request cannot be analyzed at all
        """
        perf_logger = PerformanceLogger("video_analysis")
        perf_logger.start(f"analysis of {request.identifier}")

        report = None
        if await self.vision_analyzer.validate_input(request):
            report = await self._try_vision(request)

        if report is None:
            output = await self.simulation_analyzer.analyze(request)
            report = self.assembler.assemble(output.body, output.source, request)

        if report.frames_analyzed and self.persist_frames:
            await self._persist_frames(report.analysis_id, request.frames or [], report.frames_analyzed)

        # Persistence failures are logged by the store and never fail the request
        await self.report_store.save_report(report)

        duration = perf_logger.end(f"{report.source.value} report {report.analysis_id}")
        if duration is not None:
            perf_logger.metric("analysis_duration", round(duration, 3), "s")
        return report

    async def _try_vision(self, request: AnalysisRequest) -> Optional[AnalysisReport]:
        """Vision path under the caller-level timeout, None means fall back"""
        try:
            output: AnalyzerOutput = await asyncio.wait_for(
                self.vision_analyzer.analyze(request),
                timeout=self.timeout
            )
            return self.assembler.assemble(output.body, output.source, request, output.frame_analyses)
        except InvalidRequestError:
            raise
        except asyncio.TimeoutError:
            logger.warning(
                f"⏱️ Vision analysis of {request.identifier} exceeded {self.timeout:g}s, "
                f"falling back to simulation"
            )
        except AnalysisError as e:
            logger.warning(
                f"🔄 Vision analysis of {request.identifier} failed ({e.error_code}: {e.message}), "
                f"falling back to simulation"
            )
        except Exception as e:
            logger.error(
                f"❌ Vision analysis of {request.identifier} raised {type(e).__name__}: {e}, "
                f"falling back to simulation"
            )
        return None

    async def _persist_frames(self, analysis_id: str, frames: List[str], count: int):
        if not self.frame_store.enabled:
            return
        for index, frame in enumerate(frames[:count]):
            await self.frame_store.store_frame(analysis_id, index, frame)

    async def analyze_payload(self, payload: Any) -> AnalysisReport:
        """Parse a raw inbound payload and analyze it"""
        request = AnalysisRequest.from_payload(payload)
        return await self.analyze(request)

    async def get_report(self, analysis_id: str) -> Optional[Dict[str, Any]]:
        return await self.report_store.get_report(analysis_id)

    async def list_reports(self, identifier: str) -> List[str]:
        """Analysis ids stored for a clip, oldest first"""
        return await self.report_store.list_report_ids(identifier)

    async def get_frame_urls(self, analysis_id: str) -> Optional[List[str]]:
        """
        Frame URLs of a stored analysis

        Returns:
            URLs for the analyzed frames (empty when frames are not persisted),
            None when the analysis is unknown
        """
        report = await self.report_store.get_report(analysis_id)
        if report is None:
            return None
        count = report.get("framesAnalyzed") or 0
        if not count or not self.persist_frames:
            return []
        return await self.frame_store.get_frame_urls(analysis_id, count)


video_analysis_service = VideoAnalysisService()


def get_video_analysis_service() -> VideoAnalysisService:
    """FastAPI dependency, overridden in tests"""
    return video_analysis_service
