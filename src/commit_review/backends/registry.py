"""
Backend registry.

Maps provider names to backend factories. Build one with
``default_registry()`` and pass it where backends are created.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from commit_review.review.errors import ConfigurationError

from .base import ReviewBackend
from .ollama import OllamaBackend
from .openai import LMStudioBackend, OpenAIBackend

if TYPE_CHECKING:
    from commit_review.config import ReviewConfig

logger = structlog.get_logger(__name__)

BackendFactory = Callable[["ReviewConfig"], ReviewBackend]


class BackendRegistry:
    """Provider name -> backend factory."""

    def __init__(self) -> None:
        self._factories: dict[str, BackendFactory] = {}

    def register(self, name: str, factory: BackendFactory) -> None:
        """
        Register a backend factory.

        Args:
            name: Provider name, matched case-insensitively (e.g. "openai")
            factory: Callable taking a ReviewConfig and returning a backend
        """
        if not name or not isinstance(name, str):
            raise ValueError("Provider name must be a non-empty string")
        if not callable(factory):
            raise ValueError("Backend factory must be callable")
        self._factories[name.strip().upper()] = factory

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().upper() in self._factories

    def create(self, config: "ReviewConfig") -> ReviewBackend:
        """
        Build the backend named by ``config.provider_type``.

        Raises:
            ConfigurationError: If the provider is not registered
        """
        factory = self._factories.get(config.provider)
        if factory is None:
            raise ConfigurationError(
                f"Unsupported provider type: {config.provider_type} "
                f"(supported: {', '.join(self.names())})"
            )
        logger.debug("Creating backend", provider=config.provider)
        return factory(config)


def _http_factory(backend_cls: type) -> BackendFactory:
    def factory(config: "ReviewConfig") -> ReviewBackend:
        return backend_cls(
            base_url=config.base_url,
            model=config.model,
            api_key=config.api_key,
            temperature=config.temperature,
            timeout=config.request_timeout,
        )

    return factory


def default_registry() -> BackendRegistry:
    """Registry with every built-in backend."""
    registry = BackendRegistry()
    registry.register("OPENAI", _http_factory(OpenAIBackend))
    registry.register("LMSTUDIO", _http_factory(LMStudioBackend))
    registry.register("OLLAMA", _http_factory(OllamaBackend))
    return registry
