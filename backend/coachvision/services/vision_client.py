"""
Vision model client - the outbound port for every model call

The pipeline only depends on ``VisionModelClient.complete_json``: send chat
messages (optionally carrying an image) together with a strict JSON schema
and get the parsed JSON object back, or an exception.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

import openai
from openai import AsyncOpenAI

from coachvision.config import settings
from coachvision.errors import SchemaViolationError, VisionModelError, VisionModelTimeout
from coachvision.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def image_content(frame_base64: str, detail: str = "high") -> Dict[str, Any]:
    """Chat content part for a base64 frame, accepting bare or data-URL input"""
    url = frame_base64 if frame_base64.startswith("data:") else f"data:image/jpeg;base64,{frame_base64}"
    return {"type": "image_url", "image_url": {"url": url, "detail": detail}}


class VisionModelClient(ABC):
    """Interface for vision-capable model providers"""

    name: str = "provider"

    @property
    def enabled(self) -> bool:
        return True

    @abstractmethod
    async def complete_json(
        self,
        messages: List[Dict[str, Any]],
        schema_name: str,
        schema: Dict[str, Any],
        max_tokens: int,
    ) -> Dict[str, Any]:
        """
        Run one model call constrained to ``schema``

        Returns:
            The parsed JSON object

        Raises:
            VisionModelError: network, provider or empty-response failure
            SchemaViolationError: response is not a JSON object
        """


class OpenAIVisionClient(VisionModelClient):
    """Vision client backed by the OpenAI chat completions API"""

    name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_MODEL
        self.timeout = timeout if timeout is not None else settings.OPENAI_TIMEOUT
        self._enabled = settings.ai_analysis_enabled

        if not self._enabled:
            logger.info("💰 AI Analysis DISABLED - vision path unavailable, simulation only")
        elif not self.api_key:
            logger.error("❌ OPENAI_API_KEY not set! Vision path unavailable.")
            self._enabled = False
        elif len(self.api_key) < 20:
            logger.error("❌ OPENAI_API_KEY seems invalid (too short). Vision path unavailable.")
            self._enabled = False

        if client is not None:
            self.client = client
            self._enabled = True
        elif self._enabled:
            self.client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)
        else:
            self.client = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def complete_json(
        self,
        messages: List[Dict[str, Any]],
        schema_name: str,
        schema: Dict[str, Any],
        max_tokens: int,
    ) -> Dict[str, Any]:
        if self.client is None:
            raise VisionModelError("Vision client is disabled", details={"provider": self.name})

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=0.3,
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": schema_name, "strict": True, "schema": schema},
                },
            )
        except openai.APITimeoutError as e:
            raise VisionModelTimeout(f"OpenAI API timeout: {e}", details={"schema": schema_name}) from e
        except openai.RateLimitError as e:
            raise VisionModelError(f"OpenAI rate limit exceeded: {e}", details={"schema": schema_name}) from e
        except openai.OpenAIError as e:
            raise VisionModelError(f"OpenAI API failed: {e}", details={"schema": schema_name}) from e

        if getattr(response, "usage", None):
            logger.debug(
                f"TOKEN USAGE ({schema_name}) - Total: {response.usage.total_tokens}, "
                f"Prompt: {response.usage.prompt_tokens}, Completion: {response.usage.completion_tokens}"
            )

        if not response.choices or not response.choices[0].message:
            raise VisionModelError("OpenAI returned empty choices", details={"schema": schema_name})

        content = response.choices[0].message.content
        if not content:
            raise VisionModelError("OpenAI returned empty content", details={"schema": schema_name})

        return parse_json_object(content, schema_name)


def parse_json_object(content: Any, schema_name: str) -> Dict[str, Any]:
    """Decode a model response body into a JSON object"""
    if isinstance(content, dict):
        return content
    try:
        parsed = json.loads(content)
    except (TypeError, ValueError) as e:
        raise SchemaViolationError(
            f"Response for {schema_name} is not valid JSON: {e}",
            details={"schema": schema_name, "excerpt": str(content)[:200]}
        ) from e
    if not isinstance(parsed, dict):
        raise SchemaViolationError(
            f"Response for {schema_name} is not a JSON object",
            details={"schema": schema_name, "type": type(parsed).__name__}
        )
    return parsed


async def call_with_retries(
    call: Callable[[], Awaitable[T]],
    retries: int,
    backoff_seconds: float,
    label: str,
) -> T:
    """
    Await ``call()`` with up to ``retries`` extra attempts and exponential backoff

    Only model failures are retried; the last failure is re-raised.
    """
    attempt = 0
    while True:
        try:
            return await call()
        except (VisionModelError, SchemaViolationError) as e:
            if attempt >= retries:
                raise
            delay = backoff_seconds * (2 ** attempt)
            logger.warning(f"{label} failed ({e.error_code}), retry {attempt + 1}/{retries} after {delay:.2f}s")
            await asyncio.sleep(delay)
            attempt += 1
