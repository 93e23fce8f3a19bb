"""
Review Dispatcher

Fans chunk reviews out concurrently and records each outcome on its own.
"""

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from .models import Chunk, ChunkResult, ReviewResponse, Verdict

logger = structlog.get_logger(__name__)

AnalyzeFn = Callable[[Chunk], Awaitable[ReviewResponse]]


class ReviewDispatcher:
    """Run one analysis call per chunk, all at once."""

    def __init__(
        self,
        corrected_result: bool = True,
        max_concurrency: int | None = None,
    ):
        """
        Initialize dispatcher.

        Args:
            corrected_result: Recompute each verdict from its issue list
            max_concurrency: Optional cap on in-flight calls (None = no cap)
        """
        self.corrected_result = corrected_result
        self.max_concurrency = max_concurrency

    async def dispatch(self, chunks: list[Chunk], analyze: AnalyzeFn) -> list[ChunkResult]:
        """
        Review every chunk.

        A failing call never cancels its siblings; its exception is stored in
        that chunk's result slot.

        Returns:
            One ChunkResult per chunk, in chunk order
        """
        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        async def review_one(index: int, chunk: Chunk) -> ChunkResult:
            if semaphore is None:
                return await self._analyze(index, chunk, analyze)
            async with semaphore:
                return await self._analyze(index, chunk, analyze)

        tasks = [review_one(i, chunk) for i, chunk in enumerate(chunks)]
        return list(await asyncio.gather(*tasks))

    async def _analyze(self, index: int, chunk: Chunk, analyze: AnalyzeFn) -> ChunkResult:
        try:
            response = await analyze(chunk)
            if not isinstance(response, ReviewResponse):
                raise TypeError(
                    f"Backend returned {type(response).__name__}, expected ReviewResponse"
                )
            if self.corrected_result:
                response = correct_result(response)
            result = ChunkResult.success(response)
        except Exception as e:
            logger.warning(
                "Chunk review failed",
                chunk=index,
                files=chunk.file_names,
                error=str(e),
                error_kind=type(e).__name__,
            )
            return ChunkResult.failure(e)

        logger.debug(
            "Chunk reviewed",
            chunk=index,
            result=response.result.value,
            issues=len(response.issues),
        )
        return result


def correct_result(response: ReviewResponse) -> ReviewResponse:
    """Derive the verdict from the issues: YES iff nothing is high severity."""
    result = Verdict.NO if response.has_high_severity else Verdict.YES
    if result == response.result:
        return response
    logger.debug(
        "Corrected chunk verdict",
        reported=response.result.value,
        corrected=result.value,
    )
    return response.model_copy(update={"result": result})
