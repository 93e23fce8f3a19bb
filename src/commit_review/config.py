"""Configuration for commit-review.

Settings come from the repository being committed to: a ``.env`` file, the
``aiCheckConfig`` object of ``package.json`` or the ``[tool.commit-review]``
table of ``pyproject.toml``. ``COMMIT_REVIEW_*`` environment variables
override file values.
"""

import json
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from commit_review.review.errors import ConfigurationError

ENV_PREFIX = "COMMIT_REVIEW_"

# Providers that run locally and need no API key
KEYLESS_PROVIDERS = {"OLLAMA", "LMSTUDIO"}


# Key names used in .env, package.json and pyproject.toml
SOURCE_KEYS = {
    "providerType": "provider_type",
    "apiKey": "api_key",
    "model": "model",
    "baseURL": "base_url",
    "temperature": "temperature",
    "requestTimeout": "request_timeout",
    "maxChunkSize": "max_chunk_size",
    "maxConcurrency": "max_concurrency",
    "enabledFileExtensions": "enabled_file_extensions",
    "strict": "strict",
    "correctedResult": "corrected_result",
    "showNormal": "show_normal",
    "language": "language",
    "customPrompts": "custom_prompts",
    "checkSecurity": "check_security",
    "checkPerformance": "check_performance",
    "checkStyle": "check_style",
}

# Never coerced to numbers or booleans
TEXT_FIELDS = {"provider_type", "api_key", "model", "base_url", "language", "custom_prompts"}


def _coerce(value: Any) -> Any:
    """Turn ``"true"``/``"false"`` and numeric strings into Python values."""
    if not isinstance(value, str):
        return value
    text = value.strip()
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


@dataclass
class ReviewConfig:
    """Review settings.

    Field names follow Python style; ``from_mapping`` also accepts the
    camelCase keys used in ``.env`` and ``package.json``.
    """

    # Backend
    provider_type: str = "OPENAI"
    api_key: str | None = None
    model: str = ""  # empty = backend default
    base_url: str = ""  # empty = backend default
    temperature: float = 0.2
    request_timeout: float = 180.0

    # Chunking and dispatch
    max_chunk_size: int = 12000
    max_concurrency: int | None = None
    enabled_file_extensions: str | list[str] = ".html, .js, .jsx, .ts, .tsx, .vue"

    # Verdict policy
    strict: bool = True
    corrected_result: bool = True
    show_normal: bool = False

    # Prompt content
    language: str = "english"
    custom_prompts: str = ""
    check_security: bool = True
    check_performance: bool = True
    check_style: bool = False

    @property
    def file_extensions(self) -> list[str]:
        """Enabled extensions, lower-cased, each with its leading dot."""
        raw = self.enabled_file_extensions
        items = raw.split(",") if isinstance(raw, str) else raw
        return [ext.strip().lower() for ext in items if ext and ext.strip()]

    @property
    def provider(self) -> str:
        return self.provider_type.strip().upper()

    def validate(self) -> None:
        """Raise ConfigurationError when the settings cannot work."""
        if not self.provider_type or not self.provider_type.strip():
            raise ConfigurationError("providerType is required")
        if self.provider not in KEYLESS_PROVIDERS and not self.api_key:
            raise ConfigurationError("apiKey is required in config")
        if not isinstance(self.max_chunk_size, int) or self.max_chunk_size <= 0:
            raise ConfigurationError(
                f"maxChunkSize must be a positive integer, got {self.max_chunk_size!r}"
            )
        if not self.file_extensions:
            raise ConfigurationError("enabledFileExtensions must list at least one extension")
        if self.max_concurrency is not None and self.max_concurrency <= 0:
            raise ConfigurationError("maxConcurrency must be positive when set")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ReviewConfig":
        """
        Create configuration from a key/value mapping.

        Keys are the camelCase names of ``SOURCE_KEYS`` or exact field names.
        Anything else, such as ``BASE_URL`` of the host project, is ignored.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = SOURCE_KEYS.get(key, key)
            if name not in known or value is None:
                continue
            if name in TEXT_FIELDS:
                values[name] = value if isinstance(value, str) else str(value)
            else:
                values[name] = _coerce(value)
        return cls(**values)

    @classmethod
    def load(cls, repo_root: str | Path, environ: Mapping[str, str] | None = None) -> "ReviewConfig":
        """
        Load configuration for a repository.

        Raises:
            ConfigurationError: If no configuration source exists or it is unreadable
        """
        root = Path(repo_root)
        data = cls._read_files(root)
        data.update(cls._read_env(os.environ if environ is None else environ))
        return cls.from_mapping(data)

    @staticmethod
    def _read_files(root: Path) -> dict[str, Any]:
        env_path = root / ".env"
        if env_path.exists():
            return {k: v for k, v in dotenv_values(env_path).items() if v}

        pkg_path = root / "package.json"
        if pkg_path.exists():
            try:
                pkg = json.loads(pkg_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid package.json: {e}") from e
            if isinstance(pkg.get("aiCheckConfig"), dict):
                return dict(pkg["aiCheckConfig"])

        pyproject_path = root / "pyproject.toml"
        if pyproject_path.exists():
            try:
                pyproject = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as e:
                raise ConfigurationError(f"Invalid pyproject.toml: {e}") from e
            table = pyproject.get("tool", {}).get("commit-review")
            if isinstance(table, dict):
                return dict(table)

        raise ConfigurationError(
            "No commit-review configuration found in .env, package.json or pyproject.toml"
        )

    @staticmethod
    def _read_env(environ: Mapping[str, str]) -> dict[str, Any]:
        return {
            key[len(ENV_PREFIX):].lower(): value
            for key, value in environ.items()
            if key.startswith(ENV_PREFIX) and value
        }
