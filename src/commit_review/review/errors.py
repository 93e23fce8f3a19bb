"""Exceptions raised by the review pipeline."""


class ReviewError(Exception):
    """Base class for commit-review errors."""


class ConfigurationError(ReviewError):
    """Configuration is missing or invalid (e.g. unknown provider)."""


class BackendCallError(ReviewError):
    """A backend call could not complete.

    Tolerated by the aggregator in non-strict mode; every other error fails
    the run.
    """

    def __init__(
        self,
        message: str,
        provider: str = "",
        error_type: str = "API_ERROR",
    ):
        super().__init__(message)
        self.provider = provider
        self.error_type = error_type


class ResponseFormatError(ReviewError):
    """The backend reply could not be parsed into a review result."""

    def __init__(self, message: str = "The returned data does not match the expected review format"):
        super().__init__(message)


class GitError(ReviewError):
    """A git command failed."""
