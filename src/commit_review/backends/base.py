"""
Review backend interface.

A backend turns a prompt into a parsed ReviewResponse. HTTP backends share
the transport handling and reply parsing defined here.
"""

import json
import re
from typing import Any, Protocol, runtime_checkable

import httpx
import structlog
from pydantic import ValidationError

from commit_review.review.errors import BackendCallError, ResponseFormatError
from commit_review.review.models import ReviewResponse
from commit_review.review.prompts import ReviewPrompt

logger = structlog.get_logger(__name__)

FENCED_JSON = re.compile(r"```(?:json)?\n([\s\S]*?)\n```")
BARE_KEY = re.compile(r"([\w\d]+):")


@runtime_checkable
class ReviewBackend(Protocol):
    """Anything that can review one prompt."""

    async def analyze(self, prompt: ReviewPrompt) -> ReviewResponse: ...


def _load_json(content: str) -> Any:
    """Parse model output as JSON, trying harder each step.

    1. The whole text
    2. The first fenced code block
    3. That block with bare keys quoted and single quotes swapped
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass

    match = FENCED_JSON.search(content)
    if not match:
        raise ResponseFormatError()

    block = match.group(1)
    try:
        return json.loads(block)
    except json.JSONDecodeError:
        pass

    repaired = BARE_KEY.sub(r'"\1":', block).replace("'", '"')
    try:
        return json.loads(repaired)
    except json.JSONDecodeError as e:
        raise ResponseFormatError() from e


def parse_review_payload(content: str) -> ReviewResponse:
    """
    Parse a model reply into a ReviewResponse.

    Raises:
        ResponseFormatError: If no JSON can be recovered or it lacks
            ``result``/``list``
    """
    data = _load_json(content)
    if not isinstance(data, dict):
        raise ResponseFormatError()
    try:
        return ReviewResponse.model_validate(data)
    except ValidationError as e:
        raise ResponseFormatError() from e


class HttpReviewBackend:
    """Base for backends reached over HTTP with httpx."""

    provider = ""
    default_base_url = ""
    default_model = ""
    path = ""

    def __init__(
        self,
        base_url: str = "",
        model: str = "",
        api_key: str | None = None,
        temperature: float = 0.2,
        timeout: float = 180.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize backend.

        Args:
            base_url: Server root (backend default when empty)
            model: Model name (backend default when empty)
            api_key: Bearer token, if the server needs one
            temperature: Sampling temperature
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self.model = model or self.default_model
        self.api_key = api_key
        self.temperature = temperature
        self.timeout = timeout
        self.transport = transport

    def headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def build_payload(self, prompt: ReviewPrompt) -> dict[str, Any]:
        raise NotImplementedError

    def extract_content(self, data: dict[str, Any]) -> str:
        raise NotImplementedError

    @staticmethod
    def messages(prompt: ReviewPrompt) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": prompt.system},
            {"role": "user", "content": prompt.user},
        ]

    async def analyze(self, prompt: ReviewPrompt) -> ReviewResponse:
        """Send one review request and parse the reply."""
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers(),
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.post(self.path, json=self.build_payload(prompt))
                response.raise_for_status()
                data = response.json()
            content = self.extract_content(data)
        except httpx.HTTPError as e:
            raise BackendCallError(str(e) or type(e).__name__, provider=self.provider) from e
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            # Reply envelope is not what the API documents
            raise BackendCallError(
                f"Unexpected {self.provider} reply: {e}", provider=self.provider
            ) from e

        logger.debug("Backend replied", provider=self.provider, chars=len(content))
        return parse_review_payload(content)
