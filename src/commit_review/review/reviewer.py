"""
Code Reviewer

Runs the whole review: filter the diff, pack it into chunks, review every
chunk concurrently and merge the verdicts.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

from .aggregator import ResultAggregator
from .chunker import ChunkPacker
from .diff_filter import DiffFilter
from .dispatcher import ReviewDispatcher
from .models import Chunk, ReviewResponse, ReviewVerdict, Verdict
from .prompts import build_review_prompt

if TYPE_CHECKING:
    from commit_review.backends.base import ReviewBackend
    from commit_review.backends.registry import BackendRegistry
    from commit_review.config import ReviewConfig

logger = structlog.get_logger(__name__)


class CodeReviewer:
    """
    Review a staged diff with a model backend.

    Pipeline:
    1. DiffFilter: per-file sections of enabled file types, new code only
    2. ChunkPacker: size-bounded chunks
    3. ReviewDispatcher: one concurrent backend call per chunk
    4. ResultAggregator: one verdict under the strictness policy
    """

    def __init__(
        self,
        config: "ReviewConfig",
        backend: "ReviewBackend | None" = None,
        registry: "BackendRegistry | None" = None,
    ):
        """
        Initialize the reviewer.

        Args:
            config: Review settings, validated here
            backend: Backend to use; built from the registry when omitted
            registry: Backend registry (default: all built-in backends)

        Raises:
            ConfigurationError: If the config is invalid or names an unknown provider
        """
        config.validate()
        self.config = config

        if backend is None:
            if registry is None:
                from commit_review.backends.registry import default_registry

                registry = default_registry()
            backend = registry.create(config)
        self.backend = backend

        self.diff_filter = DiffFilter()
        self.packer = ChunkPacker(max_chunk_size=config.max_chunk_size)
        self.dispatcher = ReviewDispatcher(
            corrected_result=config.corrected_result,
            max_concurrency=config.max_concurrency,
        )
        self.aggregator = ResultAggregator(strict=config.strict)

    def split_into_chunks(
        self, diff: str, allowed_extensions: Iterable[str] | None = None
    ) -> list[Chunk]:
        """Filter and pack a diff."""
        extensions = (
            self.config.file_extensions if allowed_extensions is None else allowed_extensions
        )
        sections = self.diff_filter.filter(diff, extensions)
        return self.packer.pack(sections)

    def split_diff(
        self, diff: str, allowed_extensions: Iterable[str] | None = None
    ) -> list[str]:
        """Chunk contents, as they will be sent for review."""
        return [chunk.content for chunk in self.split_into_chunks(diff, allowed_extensions)]

    async def review(
        self, diff: str, allowed_extensions: Iterable[str] | None = None
    ) -> ReviewVerdict:
        """
        Review a diff.

        Args:
            diff: Unified diff of the staged changes
            allowed_extensions: Extensions to review (default: configured ones)

        Returns:
            The merged verdict; YES with nothing listed when no chunk is produced
        """
        chunks = self.split_into_chunks(diff, allowed_extensions)
        if not chunks:
            logger.info("Nothing to review")
            return ReviewVerdict(result=Verdict.YES)

        logger.info(
            "Running code review",
            sessions=len(chunks),
            provider=self.config.provider,
        )
        results = await self.dispatcher.dispatch(chunks, self._analyze_chunk)
        verdict = self.aggregator.aggregate(results)

        logger.info(
            "Code review finished",
            result=verdict.result.value,
            issues=len(verdict.issues),
            errors=len(verdict.errors),
        )
        return verdict

    async def _analyze_chunk(self, chunk: Chunk) -> ReviewResponse:
        prompt = build_review_prompt(chunk.content, self.config)
        return await self.backend.analyze(prompt)
