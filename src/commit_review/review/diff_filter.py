"""
Diff Filter

Splits a multi-file diff into per-file sections and keeps only the new code
of files with an enabled extension.
"""

import os
import re
from collections.abc import Iterable

import structlog

from .models import DiffSection

logger = structlog.get_logger(__name__)


class DiffFilter:
    """Split a unified diff by file and strip what the review should not see."""

    # A file header starts a new section
    FILE_BOUNDARY = re.compile(r"(?=^diff --git)", re.MULTILINE)
    FILE_HEADER = re.compile(r"^diff --git a/(.+?) b/(.+?)$", re.MULTILINE)

    def filter(
        self, diff: str, allowed_extensions: Iterable[str]
    ) -> list[DiffSection]:
        """
        Filter a diff down to reviewable sections.

        Args:
            diff: Raw unified diff (several files)
            allowed_extensions: Enabled extensions with leading dot, e.g. ".js"

        Returns:
            One DiffSection per kept file, in diff order
        """
        allowed = {ext.strip().lower() for ext in allowed_extensions}
        sections: list[DiffSection] = []

        for raw_section in self.FILE_BOUNDARY.split(diff):
            file_name = self.file_name(raw_section)
            if file_name is None:
                continue

            extension = self.extension(file_name)
            if extension not in allowed:
                logger.debug("Skipping file", file=file_name, extension=extension)
                continue

            sections.append(
                DiffSection(file_name=file_name, content=self.strip_lines(raw_section))
            )

        logger.debug("Filtered diff", sections=len(sections))
        return sections

    def file_name(self, section: str) -> str | None:
        """The ``a/`` path of a section header, or None without a header."""
        match = self.FILE_HEADER.search(section)
        if not match:
            return None
        return match.group(1)

    @staticmethod
    def extension(file_name: str) -> str:
        """Lower-cased extension including the dot ("" when there is none)."""
        return os.path.splitext(file_name)[1].lower()

    @staticmethod
    def is_comment_line(line: str) -> bool:
        """Trimmed line starts with ``//``. Diff markers are not looked through."""
        return line.strip().startswith("//")

    @classmethod
    def strip_lines(cls, section: str) -> str:
        """Drop removed lines and ``//`` comment lines."""
        kept = [
            line
            for line in section.split("\n")
            if not line.startswith("-") and not cls.is_comment_line(line)
        ]
        return "\n".join(kept)


def filter_diff(diff: str, allowed_extensions: Iterable[str]) -> list[DiffSection]:
    """Module-level shortcut for ``DiffFilter().filter``."""
    return DiffFilter().filter(diff, allowed_extensions)
