"""Ollama chat backend."""

from typing import Any

from commit_review.review.prompts import ReviewPrompt

from .base import HttpReviewBackend


class OllamaBackend(HttpReviewBackend):
    """Review through Ollama's ``POST /api/chat``."""

    provider = "OLLAMA"
    default_base_url = "http://localhost:11434"
    default_model = "llama3.1"
    path = "/api/chat"

    def build_payload(self, prompt: ReviewPrompt) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": self.messages(prompt),
            "options": {"temperature": self.temperature},
            "stream": False,
        }

    def extract_content(self, data: dict[str, Any]) -> str:
        return (data.get("message") or {}).get("content") or ""
