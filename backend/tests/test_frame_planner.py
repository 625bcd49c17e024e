"""
Tests for frame timestamp planning
"""

import pytest

from coachvision.errors import InvalidRequestError
from coachvision.services.frame_planner import format_timestamp, parse_video_metadata, plan_frame_timestamps


def test_even_interior_sampling():
    assert plan_frame_timestamps(60, 5) == [10.0, 20.0, 30.0, 40.0, 50.0]


def test_single_frame_is_midpoint():
    assert plan_frame_timestamps(9, 1) == [4.5]


def test_rounds_to_tenth_of_a_second():
    assert plan_frame_timestamps(10, 2) == [3.3, 6.7]


def test_falls_back_to_exact_values_when_rounding_collapses():
    timestamps = plan_frame_timestamps(0.2, 3)
    assert len(timestamps) == 3
    assert all(0 < t < 0.2 for t in timestamps)
    assert all(a < b for a, b in zip(timestamps, timestamps[1:]))


@pytest.mark.parametrize("duration,count", [(37.3, 12), (1, 8), (600, 24)])
def test_strictly_increasing_and_interior(duration, count):
    timestamps = plan_frame_timestamps(duration, count)
    assert len(timestamps) == count
    assert timestamps[0] > 0 and timestamps[-1] < duration
    assert all(a < b for a, b in zip(timestamps, timestamps[1:]))


def test_deterministic():
    assert plan_frame_timestamps(47.9, 7) == plan_frame_timestamps(47.9, 7)


@pytest.mark.parametrize("duration", [0, -3, float("nan")])
def test_rejects_non_positive_duration(duration):
    with pytest.raises(InvalidRequestError) as exc_info:
        plan_frame_timestamps(duration, 3)
    assert exc_info.value.error_code == "INVALID_REQUEST"


def test_rejects_zero_frames():
    with pytest.raises(InvalidRequestError):
        plan_frame_timestamps(30, 0)


def test_metadata_defaults():
    metadata = parse_video_metadata()
    assert metadata.duration == 60.0
    assert (metadata.width, metadata.height) == (1920, 1080)
    assert metadata.frame_rate == 30.0


def test_metadata_keeps_given_values():
    metadata = parse_video_metadata(12.5, 1280, 720, 25)
    assert metadata.duration == 12.5
    assert (metadata.width, metadata.height, metadata.frame_rate) == (1280, 720, 25)


@pytest.mark.parametrize("seconds,label", [(0, "0:00"), (9.9, "0:09"), (75, "1:15"), (600, "10:00")])
def test_format_timestamp(seconds, label):
    assert format_timestamp(seconds) == label
