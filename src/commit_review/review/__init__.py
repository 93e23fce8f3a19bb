"""
Review Module

Diff segmentation, concurrent chunk review and verdict aggregation.
"""

from .aggregator import ResultAggregator, aggregate
from .chunker import ChunkPacker, pack_sections
from .diff_filter import DiffFilter, filter_diff
from .dispatcher import ReviewDispatcher
from .errors import (
    BackendCallError,
    ConfigurationError,
    GitError,
    ResponseFormatError,
    ReviewError,
)
from .hunk_splitter import split_file_diff
from .models import (
    Chunk,
    ChunkResult,
    DiffSection,
    Fragment,
    Issue,
    ReviewResponse,
    ReviewVerdict,
    Severity,
    Verdict,
)
from .reviewer import CodeReviewer

__all__ = [
    "CodeReviewer",
    "DiffFilter",
    "filter_diff",
    "split_file_diff",
    "ChunkPacker",
    "pack_sections",
    "ReviewDispatcher",
    "ResultAggregator",
    "aggregate",
    "DiffSection",
    "Fragment",
    "Chunk",
    "ChunkResult",
    "Issue",
    "ReviewResponse",
    "ReviewVerdict",
    "Severity",
    "Verdict",
    "ReviewError",
    "ConfigurationError",
    "BackendCallError",
    "ResponseFormatError",
    "GitError",
]
