"""
Tests for per-frame analysis: failure isolation and ordering
"""

import asyncio

import pytest

from coachvision.errors import VisionModelError, VisionModelTimeout
from coachvision.services.frame_analyzer import FrameAnalyzer, FrameContext, build_frame_prompt

CONTEXT = FrameContext(subject_name="Omar", team_tag="yellow", clip_kind="training")
FRAMES = [f"frame{i}" for i in range(5)]
TIMESTAMPS = [10.0, 20.0, 30.0, 40.0, 50.0]


def make_analyzer(client, **kwargs):
    kwargs.setdefault("concurrency", 4)
    kwargs.setdefault("retries", 0)
    kwargs.setdefault("backoff_seconds", 0)
    return FrameAnalyzer(client, **kwargs)


@pytest.mark.asyncio
async def test_all_frames_succeed(fake_vision_client):
    client = fake_vision_client()
    results = await make_analyzer(client).analyze_frames(FRAMES, TIMESTAMPS, CONTEXT)

    assert [r.frame_index for r in results] == [0, 1, 2, 3, 4]
    assert [r.timestamp for r in results] == TIMESTAMPS
    assert results[2].observations == ("frame2: player receives on the half turn",)
    assert not any(r.failed for r in results)
    assert sorted(client.frame_calls) == FRAMES


@pytest.mark.asyncio
@pytest.mark.parametrize("failure", [
    VisionModelError("provider down"),
    VisionModelTimeout("too slow"),
    RuntimeError("unexpected client bug"),
])
async def test_single_frame_failure_is_isolated(fake_vision_client, frame_payload, failure):
    def handler(frame):
        if frame == "frame2":
            raise failure
        return frame_payload(frame)

    results = await make_analyzer(fake_vision_client(frame_handler=handler)).analyze_frames(
        FRAMES, TIMESTAMPS, CONTEXT
    )

    assert len(results) == 5
    assert results[2].failed and results[2].is_empty
    assert results[2].frame_index == 2 and results[2].timestamp == 30.0
    for index in (0, 1, 3, 4):
        assert not results[index].failed
        assert results[index].player_actions == (f"frame{index}: short pass",)


@pytest.mark.asyncio
async def test_schema_violation_yields_empty_frame(fake_vision_client, frame_payload):
    def handler(frame):
        payload = frame_payload(frame)
        if frame == "frame1":
            del payload["tacticalNotes"]
        return payload

    results = await make_analyzer(fake_vision_client(frame_handler=handler)).analyze_frames(
        FRAMES, TIMESTAMPS, CONTEXT
    )
    assert results[1].failed and results[1].is_empty
    assert not results[0].failed


@pytest.mark.asyncio
async def test_extra_keys_are_a_schema_violation(fake_vision_client, frame_payload):
    client = fake_vision_client(frame_handler=lambda frame: {**frame_payload(frame), "score": 9})
    observation = await make_analyzer(client).analyze_frame("frame0", 0, 1.0, CONTEXT)
    assert observation.failed


@pytest.mark.asyncio
async def test_order_is_by_index_under_reversed_completion(fake_vision_client, frame_payload, slow):
    # frame0 finishes last, frame4 first
    def handler(frame):
        index = int(frame[len("frame"):])
        return slow(0.01 * (len(FRAMES) - index), frame_payload(frame))

    client = fake_vision_client(frame_handler=handler)
    results = await make_analyzer(client, concurrency=len(FRAMES)).analyze_frames(FRAMES, TIMESTAMPS, CONTEXT)

    assert client.frame_calls == FRAMES
    assert [r.frame_index for r in results] == [0, 1, 2, 3, 4]
    assert [r.observations[0].split(":")[0] for r in results] == FRAMES


@pytest.mark.asyncio
async def test_concurrency_is_bounded(fake_vision_client, frame_payload):
    active = 0
    peak = 0

    async def handler_async(frame):
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0.01)
        active -= 1
        return frame_payload(frame)

    client = fake_vision_client(frame_handler=handler_async)
    await make_analyzer(client, concurrency=2).analyze_frames(FRAMES, TIMESTAMPS, CONTEXT)
    assert peak == 2


@pytest.mark.asyncio
async def test_retry_recovers_transient_failure(fake_vision_client, frame_payload):
    attempts = []

    def handler(frame):
        attempts.append(frame)
        if len(attempts) == 1:
            raise VisionModelError("blip")
        return frame_payload(frame)

    observation = await make_analyzer(fake_vision_client(frame_handler=handler), retries=1).analyze_frame(
        "frame0", 0, 1.0, CONTEXT
    )
    assert len(attempts) == 2
    assert not observation.failed


@pytest.mark.asyncio
async def test_no_retry_by_default(fake_vision_client):
    attempts = []

    def handler(frame):
        attempts.append(frame)
        raise VisionModelError("down")

    observation = await make_analyzer(fake_vision_client(frame_handler=handler)).analyze_frame(
        "frame0", 0, 1.0, CONTEXT
    )
    assert attempts == ["frame0"]
    assert observation.failed


@pytest.mark.asyncio
async def test_mismatched_timestamps_rejected(fake_vision_client):
    with pytest.raises(ValueError):
        await make_analyzer(fake_vision_client()).analyze_frames(FRAMES, TIMESTAMPS[:2], CONTEXT)


def test_prompt_carries_context():
    prompt = build_frame_prompt(CONTEXT, 12.5)
    assert "Omar" in prompt
    assert "yellow" in prompt
    assert "12.5s" in prompt


def test_prompt_defaults_for_missing_context():
    prompt = build_frame_prompt(FrameContext(), 1.0)
    assert "Unknown" in prompt
    assert "Not specified" in prompt
