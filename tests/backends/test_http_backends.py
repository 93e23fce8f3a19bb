"""
Tests for the HTTP review backends.

Requests are served by httpx.MockTransport so no server is needed.
"""

import json

import httpx
import pytest

from commit_review.backends.ollama import OllamaBackend
from commit_review.backends.openai import LMStudioBackend, OpenAIBackend
from commit_review.review.errors import BackendCallError, ResponseFormatError
from commit_review.review.models import Verdict
from commit_review.review.prompts import ReviewPrompt

PROMPT = ReviewPrompt(system="You review code.", user="<git_diff>\n+x\n</git_diff>\n")
APPROVED = '{"result": "YES", "list": []}'


def recording_transport(reply, status_code: int = 200):
    """MockTransport returning ``reply`` and recording requests."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if isinstance(reply, str):
            return httpx.Response(status_code, text=reply)
        return httpx.Response(status_code, json=reply)

    return httpx.MockTransport(handler), requests


def openai_reply(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def ollama_reply(content: str) -> dict:
    return {"message": {"role": "assistant", "content": content}, "done": True}


# =============================================================================
# OPENAI-COMPATIBLE
# =============================================================================

class TestOpenAIBackend:
    """Tests for the chat completions backend."""

    @pytest.mark.asyncio
    async def test_request_shape(self):
        transport, requests = recording_transport(openai_reply(APPROVED))
        backend = OpenAIBackend(
            base_url="https://llm.example.com/",
            model="gpt-test",
            api_key="sk-test",
            temperature=0.1,
            transport=transport,
        )

        response = await backend.analyze(PROMPT)

        assert response.result == Verdict.YES
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://llm.example.com/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        body = json.loads(request.content)
        assert body["model"] == "gpt-test"
        assert body["temperature"] == 0.1
        assert body["stream"] is False
        assert body["chatId"]
        assert body["messages"] == [
            {"role": "system", "content": PROMPT.system},
            {"role": "user", "content": PROMPT.user},
        ]

    @pytest.mark.asyncio
    async def test_defaults(self):
        transport, requests = recording_transport(openai_reply(APPROVED))
        backend = OpenAIBackend(transport=transport)

        await backend.analyze(PROMPT)

        assert str(requests[0].url) == "https://api.openai.com/v1/chat/completions"
        assert "Authorization" not in requests[0].headers
        assert json.loads(requests[0].content)["model"] == "gpt-4o-mini"

    @pytest.mark.asyncio
    async def test_lmstudio_uses_local_server(self):
        transport, requests = recording_transport(openai_reply(APPROVED))

        await LMStudioBackend(transport=transport).analyze(PROMPT)

        assert str(requests[0].url) == "http://localhost:1234/v1/chat/completions"

    @pytest.mark.asyncio
    async def test_http_error_is_backend_call_error(self):
        transport, _ = recording_transport({"error": "overloaded"}, status_code=503)
        backend = OpenAIBackend(api_key="sk", transport=transport)

        with pytest.raises(BackendCallError) as exc_info:
            await backend.analyze(PROMPT)

        assert exc_info.value.provider == "OPENAI"

    @pytest.mark.asyncio
    async def test_unexpected_envelope_is_backend_call_error(self):
        transport, _ = recording_transport({"id": "x", "choices": []})
        backend = OpenAIBackend(api_key="sk", transport=transport)

        with pytest.raises(BackendCallError, match="Unexpected OPENAI reply"):
            await backend.analyze(PROMPT)

    @pytest.mark.asyncio
    async def test_non_json_body_is_backend_call_error(self):
        transport, _ = recording_transport("<html>gateway</html>")
        backend = OpenAIBackend(api_key="sk", transport=transport)

        with pytest.raises(BackendCallError):
            await backend.analyze(PROMPT)

    @pytest.mark.asyncio
    async def test_bad_content_is_format_error(self):
        transport, _ = recording_transport(openai_reply("Looks good to me!"))
        backend = OpenAIBackend(api_key="sk", transport=transport)

        with pytest.raises(ResponseFormatError):
            await backend.analyze(PROMPT)

    @pytest.mark.asyncio
    async def test_connection_error_is_backend_call_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        backend = OpenAIBackend(api_key="sk", transport=httpx.MockTransport(handler))

        with pytest.raises(BackendCallError, match="connection refused"):
            await backend.analyze(PROMPT)


# =============================================================================
# OLLAMA
# =============================================================================

class TestOllamaBackend:
    """Tests for the Ollama chat backend."""

    @pytest.mark.asyncio
    async def test_request_shape(self):
        transport, requests = recording_transport(ollama_reply(APPROVED))
        backend = OllamaBackend(model="qwen2.5-coder", temperature=0.3, transport=transport)

        response = await backend.analyze(PROMPT)

        assert response.result == Verdict.YES
        assert str(requests[0].url) == "http://localhost:11434/api/chat"
        body = json.loads(requests[0].content)
        assert body["model"] == "qwen2.5-coder"
        assert body["options"] == {"temperature": 0.3}
        assert body["stream"] is False

    @pytest.mark.asyncio
    async def test_fenced_reply_parsed(self):
        content = '```json\n{"result": "NO", "list": [{"severity": "high", "description": "XSS"}]}\n```'
        transport, _ = recording_transport(ollama_reply(content))

        response = await OllamaBackend(transport=transport).analyze(PROMPT)

        assert response.result == Verdict.NO
        assert response.has_high_severity

    @pytest.mark.asyncio
    async def test_missing_message_is_format_error(self):
        """An empty reply has nothing to parse."""
        transport, _ = recording_transport({"done": True})

        with pytest.raises(ResponseFormatError):
            await OllamaBackend(transport=transport).analyze(PROMPT)
