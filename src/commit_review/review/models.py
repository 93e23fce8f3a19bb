"""
Data models for the review pipeline.

Diff pieces (sections, fragments, chunks) and run results are plain
dataclasses. Backend replies are pydantic models so a malformed reply is
rejected at the boundary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class Severity(str, Enum):
    """How severe a flagged issue is."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def weight(self) -> int:
        """Ordering weight, higher sorts first."""
        return SEVERITY_WEIGHTS[self]


SEVERITY_WEIGHTS = {
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
}


class Verdict(str, Enum):
    """Pass/fail decision for a chunk or a whole run."""

    YES = "YES"  # approved
    NO = "NO"  # rejected


# =============================================================================
# Diff pieces
# =============================================================================


@dataclass
class DiffSection:
    """One file's filtered diff text."""

    file_name: str
    content: str

    @property
    def length(self) -> int:
        return len(self.content)


@dataclass
class Fragment:
    """A length-tagged piece of diff content ready to be packed."""

    content: str
    file_name: str = ""
    length: int | None = None

    def __post_init__(self) -> None:
        if self.length is None:
            self.length = len(self.content)


@dataclass
class Chunk:
    """Fragments sent together as one review request."""

    fragments: list[Fragment] = field(default_factory=list)

    @property
    def content(self) -> str:
        """Fragment contents joined by newline, in packing order."""
        return "\n".join(f.content for f in self.fragments)

    @property
    def length(self) -> int:
        return len(self.content)

    @property
    def file_names(self) -> list[str]:
        """Distinct file names in packing order."""
        names: list[str] = []
        for fragment in self.fragments:
            if fragment.file_name and fragment.file_name not in names:
                names.append(fragment.file_name)
        return names


# =============================================================================
# Backend replies
# =============================================================================


class Issue(BaseModel):
    """A single problem flagged by the model."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    perspective: str = "general"
    description: str
    suggestion: str = ""
    location: str = ""

    @field_validator("severity", mode="before")
    @classmethod
    def _lower_severity(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("perspective", "suggestion", "location", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        # Models often send null for optional fields
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @property
    def weight(self) -> int:
        return self.severity.weight


class ReviewResponse(BaseModel):
    """Parsed reply for one chunk: ``{"result": ..., "list": [...]}``."""

    model_config = ConfigDict(populate_by_name=True)

    result: Verdict
    issues: list[Issue] = Field(alias="list")

    @field_validator("result", mode="before")
    @classmethod
    def _upper_result(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def has_high_severity(self) -> bool:
        return any(issue.severity == Severity.HIGH for issue in self.issues)


# =============================================================================
# Run results
# =============================================================================


@dataclass
class ChunkResult:
    """Outcome of one chunk: either a response or an error, never both."""

    response: ReviewResponse | None = None
    error: Exception | None = None

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            raise ValueError("ChunkResult needs exactly one of response or error")

    @classmethod
    def success(cls, response: ReviewResponse) -> "ChunkResult":
        return cls(response=response)

    @classmethod
    def failure(cls, error: Exception) -> "ChunkResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.response is not None

    @property
    def result(self) -> Verdict | None:
        return self.response.result if self.response else None

    @property
    def issues(self) -> list[Issue]:
        return list(self.response.issues) if self.response else []


@dataclass
class ReviewVerdict:
    """Aggregate decision for a whole run."""

    result: Verdict
    issues: list[Issue] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.result == Verdict.YES

    def to_dict(self) -> dict[str, Any]:
        """Convert to the ``{result, list, errors}`` wire shape."""
        return {
            "result": self.result.value,
            "list": [issue.model_dump(mode="json") for issue in self.issues],
            "errors": [str(error) for error in self.errors],
        }
