"""
Frame timestamp planning and clip metadata defaults
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from coachvision.config import settings
from coachvision.errors import InvalidRequestError


@dataclass(frozen=True)
class VideoMetadata:
    """Clip metadata after defaults are applied"""
    duration: float
    width: int
    height: int
    frame_rate: float


def parse_video_metadata(
    duration: Optional[float] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    frame_rate: Optional[float] = None,
) -> VideoMetadata:
    """Fill missing clip metadata with the configured defaults"""
    return VideoMetadata(
        duration=duration or settings.DEFAULT_VIDEO_DURATION,
        width=width or settings.DEFAULT_VIDEO_WIDTH,
        height=height or settings.DEFAULT_VIDEO_HEIGHT,
        frame_rate=frame_rate or settings.DEFAULT_FRAME_RATE,
    )


def _round_half_up(value: float, decimals: int) -> float:
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def _strictly_interior(timestamps: List[float], duration: float) -> bool:
    if timestamps[0] <= 0 or timestamps[-1] >= duration:
        return False
    return all(a < b for a, b in zip(timestamps, timestamps[1:]))


def plan_frame_timestamps(duration: float, frame_count: int, decimals: int = 1) -> List[float]:
    """
    Evenly sample frame timestamps strictly inside a clip

    The clip is split into ``frame_count + 1`` equal intervals and the inner
    boundaries are returned, so neither endpoint is ever sampled. Values are
    rounded to ``decimals`` places unless rounding would collapse neighbours
    or touch an endpoint, in which case the exact values are kept.

    Args:
        duration: Clip length in seconds, must be positive
        frame_count: Number of frames to sample, at least 1
        decimals: Rounding precision for the timestamps

    Returns:
        ``frame_count`` strictly increasing timestamps in (0, duration)
    """
    if duration is None or not math.isfinite(duration) or duration <= 0:
        raise InvalidRequestError(
            f"Cannot plan frames for non-positive duration: {duration}",
            details={"duration": duration}
        )
    if frame_count < 1:
        raise InvalidRequestError(
            f"Frame count must be at least 1, got {frame_count}",
            details={"frame_count": frame_count}
        )

    interval = duration / (frame_count + 1)
    exact = [interval * i for i in range(1, frame_count + 1)]
    rounded = [_round_half_up(value, decimals) for value in exact]

    if _strictly_interior(rounded, duration):
        return rounded
    return exact


def format_timestamp(seconds: float) -> str:
    """Render seconds as an ``m:ss`` label"""
    total = max(0, int(seconds))
    return f"{total // 60}:{total % 60:02d}"
