"""OpenAI-compatible chat completions backend (OpenAI, LM Studio)."""

import uuid
from typing import Any

from commit_review.review.prompts import ReviewPrompt

from .base import HttpReviewBackend


class OpenAIBackend(HttpReviewBackend):
    """Review through ``POST /v1/chat/completions``."""

    provider = "OPENAI"
    default_base_url = "https://api.openai.com"
    default_model = "gpt-4o-mini"
    path = "/v1/chat/completions"

    def build_payload(self, prompt: ReviewPrompt) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": self.messages(prompt),
            "temperature": self.temperature,
            "stream": False,
            "chatId": str(uuid.uuid4()),
        }

    def extract_content(self, data: dict[str, Any]) -> str:
        return data["choices"][0]["message"]["content"] or ""


class LMStudioBackend(OpenAIBackend):
    """LM Studio's local OpenAI-compatible server."""

    provider = "LMSTUDIO"
    default_base_url = "http://localhost:1234"
    default_model = "local-model"
