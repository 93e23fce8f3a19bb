"""
commit-review

Reviews staged changes with a language model before a commit completes.
"""

from commit_review.config import ReviewConfig
from commit_review.review import CodeReviewer, ReviewVerdict

__version__ = "0.1.0"

__all__ = [
    "CodeReviewer",
    "ReviewConfig",
    "ReviewVerdict",
]
