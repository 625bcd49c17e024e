"""
Redis report store - the persistence port for finished reports
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import redis

from coachvision.config import settings
from coachvision.models.analysis import AnalysisReport
from coachvision.utils.logger import get_logger

logger = get_logger(__name__)


def report_key(analysis_id: str) -> str:
    return f"analysis:{analysis_id}"


def video_index_key(identifier: str) -> str:
    return f"analysis:video:{identifier}"


class ReportStore(ABC):
    """Port for persisting finished reports"""

    @abstractmethod
    async def save_report(self, report: AnalysisReport) -> bool:
        """Persist a report, True on success"""

    @abstractmethod
    async def get_report(self, analysis_id: str) -> Optional[Dict[str, Any]]:
        """Stored report JSON (camelCase) or None"""

    @abstractmethod
    async def list_report_ids(self, identifier: str) -> List[str]:
        """Analysis ids stored for one video, oldest first"""


class RedisReportStore(ReportStore):
    def __init__(self, client=None, ttl: Optional[int] = None):
        if client is None:
            client = redis.Redis(
                host=settings.REDIS_HOST,
                port=settings.REDIS_PORT,
                password=settings.REDIS_PASSWORD or None,
                db=settings.REDIS_DB,
                decode_responses=True
            )
            logger.info(f"Using Redis at {settings.REDIS_HOST}:{settings.REDIS_PORT}")
        self.redis_client = client
        self.ttl = settings.REPORT_CACHE_TTL if ttl is None else ttl

    async def save_report(self, report: AnalysisReport) -> bool:
        """Store the report JSON and append its id to the video index"""
        key = report_key(report.analysis_id)
        try:
            json_value = json.dumps(report.to_response(), ensure_ascii=False)
            self.redis_client.set(key, json_value, ex=self.ttl or None)
            self.redis_client.rpush(video_index_key(report.identifier), report.analysis_id)
            logger.info(f"Saved report {report.analysis_id} for video {report.identifier}")
            return True
        except redis.RedisError as e:
            logger.error(f"Redis SET failed for key {key}: {e}")
            return False

    async def get_report(self, analysis_id: str) -> Optional[Dict[str, Any]]:
        key = report_key(analysis_id)
        try:
            value = self.redis_client.get(key)
            if isinstance(value, bytes):
                value = value.decode('utf-8')
            return json.loads(value) if value else None
        except redis.RedisError as e:
            logger.error(f"Redis GET failed for key {key}: {e}")
            return None
        except ValueError as e:
            logger.error(f"Stored report under {key} is not valid JSON: {e}")
            return None

    async def list_report_ids(self, identifier: str) -> List[str]:
        key = video_index_key(identifier)
        try:
            ids = self.redis_client.lrange(key, 0, -1)
        except redis.RedisError as e:
            logger.error(f"Redis LRANGE failed for key {key}: {e}")
            return []
        return [i.decode('utf-8') if isinstance(i, bytes) else i for i in ids]
