"""Model backends that review a prompt and return a parsed result."""

from .base import HttpReviewBackend, ReviewBackend, parse_review_payload
from .ollama import OllamaBackend
from .openai import LMStudioBackend, OpenAIBackend
from .registry import BackendRegistry, default_registry

__all__ = [
    "ReviewBackend",
    "HttpReviewBackend",
    "parse_review_payload",
    "OpenAIBackend",
    "LMStudioBackend",
    "OllamaBackend",
    "BackendRegistry",
    "default_registry",
]
