"""
Result Aggregator

Merges per-chunk outcomes into one verdict. This is the only place where
chunk failures become a run failure.
"""

from .errors import BackendCallError
from .models import ChunkResult, Issue, ReviewVerdict, Verdict


class ResultAggregator:
    """Combine chunk results under a strictness policy."""

    def __init__(self, strict: bool = True):
        """
        Initialize aggregator.

        Args:
            strict: Any error fails the run. When False, backend call
                failures are tolerated; other errors still fail it.
        """
        self.strict = strict

    def aggregate(self, results: list[ChunkResult]) -> ReviewVerdict:
        passed = all(self._chunk_passed(r) for r in results)

        issues: list[Issue] = []
        for r in results:
            issues.extend(r.issues)
        # sorted() is stable, equal severities keep chunk order
        issues = sorted(issues, key=lambda issue: issue.weight, reverse=True)

        errors = [r.error for r in results if r.error is not None]

        return ReviewVerdict(
            result=Verdict.YES if passed else Verdict.NO,
            issues=issues,
            errors=errors,
        )

    def _chunk_passed(self, result: ChunkResult) -> bool:
        if result.result == Verdict.YES:
            return True
        if self.strict:
            return False
        return isinstance(result.error, BackendCallError)


def aggregate(results: list[ChunkResult], strict: bool = True) -> ReviewVerdict:
    """Module-level shortcut for ``ResultAggregator(strict).aggregate``."""
    return ResultAggregator(strict).aggregate(results)
