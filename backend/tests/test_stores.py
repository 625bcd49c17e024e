"""
Tests for the report store and the frame store
"""

import pytest

from coachvision.models.analysis import AnalysisRequest, AnalysisSource
from coachvision.services.deterministic_synthesizer import DeterministicSynthesizer
from coachvision.services.redis_service import RedisReportStore, report_key, video_index_key
from coachvision.services.s3_service import S3FrameStore, decode_frame, frame_key


@pytest.fixture
def report(fixed_assembler):
    body = DeterministicSynthesizer().synthesize("clip-42", "yellow", 1048576)
    return fixed_assembler.assemble(body, AnalysisSource.SIMULATION, AnalysisRequest(identifier="clip-42"))


@pytest.mark.asyncio
async def test_save_and_load_report(report_store, fake_redis, report):
    assert await report_store.save_report(report) is True

    assert report_key(report.analysis_id) in fake_redis.values
    assert fake_redis.lists[video_index_key("clip-42")] == [report.analysis_id]
    assert fake_redis.expiry[report_key(report.analysis_id)] is None
    assert await report_store.get_report(report.analysis_id) == report.to_response()


@pytest.mark.asyncio
async def test_ttl_is_applied(fake_redis, report):
    store = RedisReportStore(client=fake_redis, ttl=600)
    await store.save_report(report)
    assert fake_redis.expiry[report_key(report.analysis_id)] == 600


@pytest.mark.asyncio
async def test_arabic_text_survives_round_trip(report_store, report):
    await report_store.save_report(report)
    stored = await report_store.get_report(report.analysis_id)
    assert stored["strengthsAr"] == report.strengths_ar


@pytest.mark.asyncio
async def test_unknown_report_is_none(report_store):
    assert await report_store.get_report("VA-missing") is None
    assert await report_store.list_report_ids("nothing") == []


@pytest.mark.asyncio
async def test_corrupt_report_is_none(report_store, fake_redis):
    fake_redis.values[report_key("VA-bad")] = "{not json"
    assert await report_store.get_report("VA-bad") is None


@pytest.mark.asyncio
async def test_redis_failures_are_swallowed(failing_redis, report):
    store = RedisReportStore(client=failing_redis)
    assert await store.save_report(report) is False
    assert await store.get_report(report.analysis_id) is None
    assert await store.list_report_ids("clip-42") == []


def test_frame_key_layout():
    assert frame_key("RVA-1-abc", 3) == "video-analysis/RVA-1-abc/frame-3.jpg"


def test_decode_frame_accepts_data_url():
    assert decode_frame("data:image/jpeg;base64,ZnJhbWUw") == b"frame0"
    assert decode_frame("ZnJhbWUw") == b"frame0"


@pytest.mark.asyncio
async def test_store_frame(fake_s3):
    store = S3FrameStore(client=fake_s3, bucket="frames")
    key = await store.store_frame("RVA-1", 0, "ZnJhbWUw")

    assert key == "video-analysis/RVA-1/frame-0.jpg"
    stored = fake_s3.objects[key]
    assert stored["bucket"] == "frames"
    assert stored["content_type"] == "image/jpeg"
    assert stored["metadata"] == {"analysis_id": "RVA-1", "frame_index": "0"}


@pytest.mark.asyncio
async def test_invalid_base64_is_not_stored(fake_s3):
    store = S3FrameStore(client=fake_s3, bucket="frames")
    assert await store.store_frame("RVA-1", 0, "not base64!") is None
    assert fake_s3.objects == {}


@pytest.mark.asyncio
async def test_frame_urls(fake_s3):
    store = S3FrameStore(client=fake_s3, bucket="frames")
    urls = await store.get_frame_urls("RVA-1", 2)
    assert len(urls) == 2
    assert urls[1].startswith("https://frames.example.com/video-analysis/RVA-1/frame-1.jpg")


@pytest.mark.asyncio
async def test_disabled_store_is_inert():
    store = S3FrameStore(client=None, bucket="frames")
    store.enabled = False
    assert await store.store_frame("RVA-1", 0, "ZnJhbWUw") is None
    assert await store.get_frame_urls("RVA-1", 2) == []
