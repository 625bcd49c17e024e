"""
AWS S3 frame store - optional blob persistence for sampled frames
"""

import base64
import binascii
from abc import ABC, abstractmethod
from typing import List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from coachvision.config import settings
from coachvision.utils.logger import get_logger

logger = get_logger(__name__)


def frame_key(analysis_id: str, frame_index: int) -> str:
    return f"video-analysis/{analysis_id}/frame-{frame_index}.jpg"


def decode_frame(frame_base64: str) -> bytes:
    """Decode a bare base64 frame or a data URL into image bytes"""
    payload = frame_base64.split(",", 1)[1] if frame_base64.startswith("data:") else frame_base64
    return base64.b64decode(payload, validate=True)


class FrameStore(ABC):
    """Port for persisting sampled frames"""

    enabled: bool = False

    @abstractmethod
    async def store_frame(self, analysis_id: str, frame_index: int, frame_base64: str) -> Optional[str]:
        """Persist one frame, returning its key or None"""

    @abstractmethod
    async def get_frame_urls(self, analysis_id: str, count: int) -> List[str]:
        """URLs for the first ``count`` frames of an analysis"""


class S3FrameStore(FrameStore):
    def __init__(self, client=None, bucket: Optional[str] = None):
        self.bucket = bucket or settings.S3_BUCKET
        self.url_expiry = settings.FRAME_URL_EXPIRY

        if client is not None:
            self.client = client
            self.enabled = True
            return

        # Check if S3 is configured
        if not all([settings.AWS_ACCESS_KEY_ID, settings.AWS_SECRET_ACCESS_KEY, self.bucket]):
            logger.warning("S3 credentials not configured - frame persistence disabled")
            self.client = None
            self.enabled = False
            return

        self.client = boto3.client(
            's3',
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            region_name=settings.AWS_REGION,
            endpoint_url=settings.AWS_ENDPOINT_URL,
        )
        self.enabled = True
        logger.info(f"S3 frame store initialized for bucket: {self.bucket}")

    async def store_frame(self, analysis_id: str, frame_index: int, frame_base64: str) -> Optional[str]:
        """
        Upload one base64 frame as a JPEG object

        Args:
            analysis_id: Analysis the frame belongs to
            frame_index: 0-based frame position
            frame_base64: Frame image, bare base64 or data URL

        Returns:
            S3 key if successful, None if failed
        """
        if not self.enabled:
            return None

        key = frame_key(analysis_id, frame_index)
        try:
            body = decode_frame(frame_base64)
        except (binascii.Error, ValueError) as e:
            logger.error(f"Frame {frame_index} of {analysis_id} is not valid base64: {e}")
            return None

        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType="image/jpeg",
                Metadata={"analysis_id": analysis_id, "frame_index": str(frame_index)},
            )
            logger.info(f"Stored frame {frame_index} for {analysis_id}: {key}")
            return key
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to store frame {frame_index} for {analysis_id}: {e}")
            return None

    async def get_frame_urls(self, analysis_id: str, count: int) -> List[str]:
        """Presigned GET URLs for frames 0..count-1"""
        if not self.enabled:
            return []

        urls = []
        for index in range(count):
            try:
                urls.append(self.client.generate_presigned_url(
                    'get_object',
                    Params={'Bucket': self.bucket, 'Key': frame_key(analysis_id, index)},
                    ExpiresIn=self.url_expiry,
                ))
            except (BotoCoreError, ClientError) as e:
                logger.error(f"Failed to generate presigned URL for frame {index} of {analysis_id}: {e}")
        return urls
