"""
Shared fixtures for review pipeline tests.

Builders and sample diffs live in ``review_helpers``.
"""

from unittest.mock import AsyncMock

import pytest

from commit_review.config import ReviewConfig
from review_helpers import COMMENTED_DIFF, CSS_DIFF, JS_TWO_HUNKS, make_response


# =============================================================================
# DIFF FIXTURES
# =============================================================================

@pytest.fixture
def js_two_hunks() -> str:
    return JS_TWO_HUNKS


@pytest.fixture
def multi_file_diff() -> str:
    """JS, CSS and TS changes in one diff."""
    return JS_TWO_HUNKS + CSS_DIFF + COMMENTED_DIFF


# =============================================================================
# CONFIG / BACKEND FIXTURES
# =============================================================================

@pytest.fixture
def config() -> ReviewConfig:
    """Keyless config reviewing JS/TS with a 1000-char chunk size."""
    return ReviewConfig(
        provider_type="OLLAMA",
        enabled_file_extensions=".js, .ts",
        max_chunk_size=1000,
        strict=True,
    )


@pytest.fixture
def approving_backend() -> AsyncMock:
    """Backend that approves everything."""
    backend = AsyncMock()
    backend.analyze.return_value = make_response("YES")
    return backend
