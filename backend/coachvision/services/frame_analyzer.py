"""
Per-frame vision analysis

Each sampled frame is described independently by the vision model. A failing
frame yields an empty placeholder observation and never aborts the batch.
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, ValidationError

from coachvision.config import settings
from coachvision.errors import AnalysisError, SchemaViolationError
from coachvision.models.analysis import FrameObservation
from coachvision.services.vision_client import VisionModelClient, call_with_retries, image_content
from coachvision.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FrameContext:
    """Shared context for every frame of one request"""
    subject_name: Optional[str] = None
    team_tag: Optional[str] = None
    clip_kind: Optional[str] = None


FRAME_ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "observations": {
            "type": "array",
            "items": {"type": "string"},
            "description": "General observations about the frame",
        },
        "playerActions": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Specific actions the player is performing",
        },
        "technicalNotes": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Technical aspects observed (ball control, passing, shooting, etc.)",
        },
        "tacticalNotes": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Tactical observations (positioning, movement, awareness)",
        },
    },
    "required": ["observations", "playerActions", "technicalNotes", "tacticalNotes"],
    "additionalProperties": False,
}


class FramePayload(BaseModel):
    """Validated model response for one frame"""

    model_config = ConfigDict(extra="forbid")

    observations: List[str]
    playerActions: List[str]
    technicalNotes: List[str]
    tacticalNotes: List[str]


def build_frame_prompt(context: FrameContext, timestamp: float) -> str:
    return f"""You are an expert football coach and video analyst. Analyze this video frame from a football training/match session.

Context:
- Player Name: {context.subject_name or 'Unknown'}
- Team Jersey Color: {context.team_tag or 'Not specified'}
- Video Type: {context.clip_kind or 'training'}
- Frame Timestamp: {timestamp}s

Analyze what you see in this frame and provide detailed observations about:
1. Player positioning and body posture
2. Ball handling technique (if ball is visible)
3. Movement patterns and direction
4. Tactical positioning relative to other players
5. Technical execution of any action being performed

Be specific and detailed in your observations. Focus on actionable coaching insights."""


class FrameAnalyzer:
    """Runs one vision call per frame and collects ordered observations"""

    def __init__(
        self,
        client: VisionModelClient,
        concurrency: Optional[int] = None,
        retries: Optional[int] = None,
        backoff_seconds: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        self.client = client
        self.concurrency = max(1, concurrency or settings.FRAME_ANALYSIS_CONCURRENCY)
        self.retries = settings.FRAME_ANALYSIS_RETRIES if retries is None else retries
        self.backoff_seconds = settings.RETRY_BACKOFF_SECONDS if backoff_seconds is None else backoff_seconds
        self.max_tokens = max_tokens or settings.FRAME_MAX_TOKENS

    async def analyze_frame(
        self,
        frame_base64: str,
        frame_index: int,
        timestamp: float,
        context: FrameContext,
    ) -> FrameObservation:
        """
        Describe a single frame

        Args:
            frame_base64: Frame image, bare base64 or data URL
            frame_index: 0-based position of the frame in the clip sample
            timestamp: Frame time in seconds
            context: Subject/team/clip context shared by the batch

        Returns:
            FrameObservation; on any failure the four lists are empty and
            ``failed`` is set
        """
        messages = [
            {"role": "system", "content": build_frame_prompt(context, timestamp)},
            {
                "role": "user",
                "content": [
                    image_content(frame_base64),
                    {"type": "text", "text": "Analyze this football video frame and provide detailed coaching observations."},
                ],
            },
        ]

        async def _call():
            raw = await self.client.complete_json(messages, "frame_analysis", FRAME_ANALYSIS_SCHEMA, self.max_tokens)
            try:
                return FramePayload.model_validate(raw)
            except ValidationError as e:
                raise SchemaViolationError(
                    f"Frame {frame_index} response violates schema",
                    details={"frame_index": frame_index, "errors": e.error_count()}
                ) from e

        try:
            payload = await call_with_retries(_call, self.retries, self.backoff_seconds, f"Frame {frame_index}")
        except Exception as e:
            # Cancellation is a BaseException and still reaches the caller
            error_code = e.error_code if isinstance(e, AnalysisError) else type(e).__name__
            logger.error(f"❌ FRAME {frame_index} ANALYSIS FAILED ({error_code}): {e}")
            return FrameObservation(frame_index=frame_index, timestamp=timestamp, failed=True)

        logger.info(
            f"✅ Frame {frame_index} analyzed at {timestamp:.2f}s: "
            f"{len(payload.observations)} observations, {len(payload.playerActions)} actions"
        )
        return FrameObservation(
            frame_index=frame_index,
            timestamp=timestamp,
            observations=tuple(payload.observations),
            player_actions=tuple(payload.playerActions),
            technical_notes=tuple(payload.technicalNotes),
            tactical_notes=tuple(payload.tacticalNotes),
        )

    async def analyze_frames(
        self,
        frames: Sequence[str],
        timestamps: Sequence[float],
        context: FrameContext,
    ) -> List[FrameObservation]:
        """
        Analyze every frame with bounded parallelism

        Results are placed by frame index, so the returned list is ordered
        0..N-1 whatever order the calls complete in.
        """
        if len(frames) != len(timestamps):
            raise ValueError(f"{len(frames)} frames but {len(timestamps)} timestamps")

        semaphore = asyncio.Semaphore(self.concurrency)
        results: List[Optional[FrameObservation]] = [None] * len(frames)

        async def _run(index: int):
            async with semaphore:
                logger.info(f"Analyzing frame {index + 1}/{len(frames)} at {timestamps[index]:.2f}s")
                results[index] = await self.analyze_frame(frames[index], index, timestamps[index], context)

        await asyncio.gather(*(_run(index) for index in range(len(frames))))

        failed = sum(1 for observation in results if observation.failed)
        if failed:
            logger.warning(f"{failed}/{len(frames)} frames failed and were left empty")
        return results
