"""
Pytest configuration and fixtures for testing
"""

import asyncio
import inspect
from datetime import datetime, timezone

import pytest
import redis

from coachvision.services.redis_service import RedisReportStore
from coachvision.services.report_assembler import ReportAssembler
from coachvision.services.vision_client import VisionModelClient


class FakeVisionClient(VisionModelClient):
    """
    Scriptable vision client

    ``frame_handler(frame)`` answers frame calls, keyed by the frame string
    the test passed in; ``aggregate_handler(messages)`` answers the
    aggregation call. Handlers may raise, or return an awaitable.
    """

    name = "fake"

    def __init__(self, frame_handler=None, aggregate_handler=None, enabled=True):
        self.frame_handler = frame_handler or frame_response
        self.aggregate_handler = aggregate_handler or (lambda messages: aggregate_body())
        self._enabled = enabled
        self.frame_calls = []
        self.aggregate_calls = []

    @property
    def enabled(self):
        return self._enabled

    async def complete_json(self, messages, schema_name, schema, max_tokens):
        if schema_name == "frame_analysis":
            url = messages[1]["content"][0]["image_url"]["url"]
            frame = url.split(",", 1)[1]
            self.frame_calls.append(frame)
            result = self.frame_handler(frame)
        else:
            self.aggregate_calls.append(messages)
            result = self.aggregate_handler(messages)
        if inspect.isawaitable(result):
            result = await result
        return result


def frame_response(frame):
    return {
        "observations": [f"{frame}: player receives on the half turn"],
        "playerActions": [f"{frame}: short pass"],
        "technicalNotes": [f"{frame}: clean first touch"],
        "tacticalNotes": [f"{frame}: good scanning before receiving"],
    }


def aggregate_body(frame_count=3):
    return {
        "overallScore": 74,
        "possessionPercentage": 58,
        "aggregatedInsights": {
            "movementPatterns": ["Drifts into the left half-space"],
            "technicalStrengths": ["Clean first touch"],
            "technicalWeaknesses": ["Weak foot passing"],
            "tacticalObservations": ["Scans before receiving"],
            "bodyPositioning": ["Open body shape"],
            "ballHandling": ["Close control under pressure"],
        },
        "movementAnalysis": {
            "totalDistance": 6200,
            "maxSpeed": 27.4,
            "avgSpeed": 8.1,
            "sprintCount": 14,
            "highIntensityRuns": 30,
            "accelerations": 41,
            "decelerations": 38,
        },
        "technicalAnalysis": {
            "ballControl": 78,
            "passing": 72,
            "passingAccuracy": 80,
            "shooting": 61,
            "shootingAccuracy": 58,
            "dribbling": 70,
            "firstTouch": 81,
            "heading": 52,
        },
        "tacticalAnalysis": {
            "positioning": 75,
            "spaceCreation": 68,
            "defensiveAwareness": 60,
            "pressingIntensity": 66,
            "offTheBallMovement": 71,
        },
        "heatmapZones": {
            "leftDefense": 8,
            "centerDefense": 10,
            "rightDefense": 6,
            "leftMidfield": 22,
            "centerMidfield": 30,
            "rightMidfield": 12,
            "leftAttack": 18,
            "centerAttack": 14,
            "rightAttack": 6,
        },
        "strengths": ["Clean first touch", "Scans early", "Quick combinations"],
        "strengthsAr": ["لمسة أولى نظيفة", "يستكشف مبكراً", "تمريرات سريعة"],
        "improvements": ["Weak foot passing", "Tracking back", "Shot selection"],
        "improvementsAr": ["التمرير بالقدم الضعيفة", "التراجع الدفاعي", "اختيار التسديد"],
        "drillRecommendations": [
            {
                "name": "Rondo 4v2",
                "nameAr": "روندو 4 ضد 2",
                "duration": "15 mins",
                "priority": "high",
                "description": "One-touch circulation",
                "descriptionAr": "تدوير الكرة بلمسة واحدة",
            },
        ],
        "coachNotes": "Comfortable on the ball, needs work on the weak foot.",
        "coachNotesAr": "مرتاح مع الكرة ويحتاج للعمل على القدم الضعيفة.",
        "keyMoments": [
            {
                "timestamp": "0:15",
                "description": "Turns out of pressure",
                "descriptionAr": "يتخلص من الضغط",
                "category": "highlight",
                "sourceFrameIndex": 0,
            },
            {
                "timestamp": "0:45",
                "description": "Loses the ball on the weak foot",
                "descriptionAr": "يفقد الكرة بالقدم الضعيفة",
                "category": "improvement",
                "sourceFrameIndex": frame_count - 1,
            },
        ],
    }


class FakeRedis:
    """Dict-backed stand-in for the redis client calls the report store makes"""

    def __init__(self, fail=False):
        self.values = {}
        self.lists = {}
        self.expiry = {}
        self.fail = fail

    def _check(self):
        if self.fail:
            raise redis.ConnectionError("connection refused")

    def set(self, key, value, ex=None):
        self._check()
        self.values[key] = value
        self.expiry[key] = ex
        return True

    def get(self, key):
        self._check()
        return self.values.get(key)

    def rpush(self, key, value):
        self._check()
        self.lists.setdefault(key, []).append(value)
        return len(self.lists[key])

    def lrange(self, key, start, end):
        self._check()
        items = self.lists.get(key, [])
        return items[start:] if end == -1 else items[start:end + 1]


class FakeS3:
    """Records put_object calls and hands out predictable URLs"""

    def __init__(self):
        self.objects = {}

    def put_object(self, Bucket, Key, Body, ContentType, Metadata):
        self.objects[Key] = {"bucket": Bucket, "body": Body, "content_type": ContentType, "metadata": Metadata}
        return {"ETag": "etag"}

    def generate_presigned_url(self, method, Params, ExpiresIn):
        return f"https://{Params['Bucket']}.example.com/{Params['Key']}?expires={ExpiresIn}"


FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fake_vision_client():
    """Factory for scriptable vision clients"""
    return FakeVisionClient


@pytest.fixture
def frame_payload():
    return frame_response


@pytest.fixture
def aggregate_payload():
    return aggregate_body


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def failing_redis():
    return FakeRedis(fail=True)


@pytest.fixture
def fake_s3():
    return FakeS3()


@pytest.fixture
def report_store(fake_redis):
    return RedisReportStore(client=fake_redis, ttl=0)


@pytest.fixture
def fixed_assembler():
    """Assembler with a fixed clock and sequential ids"""
    counter = iter(range(1, 10_000))
    return ReportAssembler(
        id_factory=lambda source, now: f"TEST-{source.value}-{next(counter)}",
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def sample_request_payload():
    """Inbound payload without frames (simulation path)"""
    return {
        "identifier": "clip-42",
        "subjectName": "Omar",
        "teamTag": "yellow",
        "clipKind": "training",
        "fileSize": 1048576,
        "durationSeconds": 60,
    }


@pytest.fixture
def sample_vision_payload(sample_request_payload):
    """Inbound payload with three frames (vision path)"""
    return {**sample_request_payload, "frames": ["frame0", "frame1", "frame2"]}


@pytest.fixture
def slow():
    """Awaitable factory: ``slow(seconds, value)`` resolves to value after a delay"""
    async def _slow(seconds, value):
        await asyncio.sleep(seconds)
        return value
    return _slow
