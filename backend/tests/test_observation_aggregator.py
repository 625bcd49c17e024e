"""
Tests for the observation aggregator
"""

import pytest

from coachvision.errors import AggregationError, VisionModelError
from coachvision.models.analysis import FrameObservation
from coachvision.models.ranges import HEATMAP_ZONES, TECHNICAL_FIELDS
from coachvision.services.frame_analyzer import FrameContext
from coachvision.services.observation_aggregator import (
    REPORT_SCHEMA,
    ObservationAggregator,
    build_aggregation_prompt,
)

CONTEXT = FrameContext(subject_name="Omar", team_tag="yellow", clip_kind="match")


def observations(count=3, empty=()):
    frames = []
    for index in range(count):
        if index in empty:
            frames.append(FrameObservation(frame_index=index, timestamp=10.0 * (index + 1), failed=True))
        else:
            frames.append(FrameObservation(
                frame_index=index,
                timestamp=10.0 * (index + 1),
                observations=(f"obs {index}",),
                player_actions=(f"action {index}",),
                technical_notes=(f"technical {index}",),
                tactical_notes=(f"tactical {index}",),
            ))
    return frames


def make_aggregator(client, retries=0):
    return ObservationAggregator(client, retries=retries, backoff_seconds=0)


@pytest.mark.asyncio
async def test_returns_camel_case_body(fake_vision_client):
    client = fake_vision_client()
    body = await make_aggregator(client).aggregate(observations(), CONTEXT, 40)

    assert body["overallScore"] == 74
    assert body["technicalAnalysis"]["firstTouch"] == 81
    assert body["tacticalAnalysis"]["offTheBallMovement"] == 71
    assert body["drillRecommendations"][0]["nameAr"] == "روندو 4 ضد 2"
    assert body["keyMoments"][1]["sourceFrameIndex"] == 2
    assert len(client.aggregate_calls) == 1


@pytest.mark.asyncio
async def test_prompt_flattens_frames_in_order(fake_vision_client):
    client = fake_vision_client()
    await make_aggregator(client).aggregate(observations(), CONTEXT, 40)

    prompt = client.aggregate_calls[0][1]["content"]
    assert prompt.index("obs 0") < prompt.index("obs 1") < prompt.index("obs 2")
    assert "Frames Analyzed: 3" in prompt
    assert "Video Duration: 40 seconds" in prompt


def test_prompt_skips_empty_frames():
    prompt = build_aggregation_prompt(observations(3, empty=(1,)), CONTEXT, 30)
    assert "obs 1" not in prompt
    assert "obs 0" in prompt and "obs 2" in prompt


@pytest.mark.asyncio
async def test_out_of_range_source_frame_is_dropped(fake_vision_client, aggregate_payload):
    def handler(messages):
        body = aggregate_payload()
        body["keyMoments"][0]["sourceFrameIndex"] = 17
        return body

    body = await make_aggregator(fake_vision_client(aggregate_handler=handler)).aggregate(
        observations(), CONTEXT, 40
    )
    assert body["keyMoments"][0]["sourceFrameIndex"] is None
    assert body["keyMoments"][1]["sourceFrameIndex"] == 2


@pytest.mark.asyncio
async def test_model_failure_is_fatal(fake_vision_client):
    def handler(messages):
        raise VisionModelError("provider down")

    with pytest.raises(AggregationError) as exc_info:
        await make_aggregator(fake_vision_client(aggregate_handler=handler)).aggregate(observations(), CONTEXT, 40)
    assert exc_info.value.details["cause"] == "MODEL_CALL_FAILED"


@pytest.mark.asyncio
async def test_unexpected_client_error_becomes_aggregation_error(fake_vision_client):
    def handler(messages):
        raise RuntimeError("unexpected client bug")

    with pytest.raises(AggregationError) as exc_info:
        await make_aggregator(fake_vision_client(aggregate_handler=handler)).aggregate(observations(), CONTEXT, 40)
    assert exc_info.value.details["cause"] == "RuntimeError"


@pytest.mark.asyncio
async def test_schema_violation_is_fatal(fake_vision_client, aggregate_payload):
    def handler(messages):
        body = aggregate_payload()
        del body["technicalAnalysis"]["heading"]
        return body

    with pytest.raises(AggregationError) as exc_info:
        await make_aggregator(fake_vision_client(aggregate_handler=handler)).aggregate(observations(), CONTEXT, 40)
    assert exc_info.value.details["cause"] == "SCHEMA_VIOLATION"


@pytest.mark.asyncio
async def test_unknown_priority_is_a_schema_violation(fake_vision_client, aggregate_payload):
    def handler(messages):
        body = aggregate_payload()
        body["drillRecommendations"][0]["priority"] = "urgent"
        return body

    with pytest.raises(AggregationError):
        await make_aggregator(fake_vision_client(aggregate_handler=handler)).aggregate(observations(), CONTEXT, 40)


@pytest.mark.asyncio
async def test_retry_recovers_aggregation(fake_vision_client, aggregate_payload):
    calls = []

    def handler(messages):
        calls.append(1)
        if len(calls) == 1:
            raise VisionModelError("blip")
        return aggregate_payload()

    body = await make_aggregator(fake_vision_client(aggregate_handler=handler), retries=1).aggregate(
        observations(), CONTEXT, 40
    )
    assert len(calls) == 2
    assert body["overallScore"] == 74


@pytest.mark.asyncio
async def test_all_empty_frames_skip_the_model_call(fake_vision_client):
    client = fake_vision_client()
    with pytest.raises(AggregationError):
        await make_aggregator(client).aggregate(observations(3, empty=(0, 1, 2)), CONTEXT, 40)
    assert client.aggregate_calls == []


@pytest.mark.asyncio
async def test_no_frames_rejected(fake_vision_client):
    with pytest.raises(AggregationError):
        await make_aggregator(fake_vision_client()).aggregate([], CONTEXT, 40)


def test_schema_is_strict_everywhere():
    def walk(node):
        if node.get("type") == "object":
            assert node["additionalProperties"] is False
            assert node["required"] == list(node["properties"].keys())
            for child in node["properties"].values():
                walk(child)
        elif node.get("type") == "array":
            walk(node["items"])

    walk(REPORT_SCHEMA)


def test_schema_states_ranges():
    technical = REPORT_SCHEMA["properties"]["technicalAnalysis"]["properties"]
    assert list(technical) == list(TECHNICAL_FIELDS)
    assert "(0-100)" in technical["ballControl"]["description"]
    movement = REPORT_SCHEMA["properties"]["movementAnalysis"]["properties"]
    assert movement["maxSpeed"]["type"] == "number"
    assert "(0-15000)" in movement["totalDistance"]["description"]
    assert list(REPORT_SCHEMA["properties"]["heatmapZones"]["properties"]) == list(HEATMAP_ZONES)
