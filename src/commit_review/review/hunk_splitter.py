"""
Hunk Splitter

Splits one oversized file diff into fragments at hunk boundaries. A single
hunk larger than the limit is cut into raw character windows.
"""

import re

from .models import Fragment

HUNK_BOUNDARY = re.compile(r"(?=^@@ -)", re.MULTILINE)


def file_header(file_name: str) -> str:
    """Synthetic header repeated at the top of every continuation fragment."""
    return f"diff --git a/{file_name} b/{file_name}\n"


def split_file_diff(file_name: str, file_diff: str, max_size: int) -> list[Fragment]:
    """
    Split a single file's diff into fragments of at most ``max_size`` chars.

    Hunks are kept whole when they fit. Fragments after the first start with
    a repeated file header so each one still names its file.

    Args:
        file_name: Path of the file, used for the repeated header
        file_diff: Filtered diff text of that file
        max_size: Maximum fragment length in characters

    Returns:
        Fragments in original hunk order
    """
    if max_size <= 0:
        raise ValueError(f"max_size must be positive, got {max_size}")

    head = file_header(file_name)
    if len(head) >= max_size:
        # No room for a header next to any content
        head = ""

    fragments: list[Fragment] = []
    current = ""

    def emit(content: str) -> None:
        fragments.append(Fragment(content=content, file_name=file_name))

    for hunk in HUNK_BOUNDARY.split(file_diff):
        piece = hunk.strip()
        if not piece:
            continue

        # Buffer holds real content and the hunk won't fit alongside it
        if current not in ("", head) and len(current) + len(piece) > max_size:
            emit(current.rstrip("\n"))
            current = head

        if len(current) + len(piece) > max_size:
            # First window continues the buffer up to exactly max_size
            room = max_size - len(current)
            emit(current + piece[:room])
            piece = piece[room:]
            current = head

            width = max_size - len(head)
            while len(head) + len(piece) > max_size:
                emit(head + piece[:width])
                piece = piece[width:]

        if piece:
            current += piece + "\n"

    if current not in ("", head):
        emit(current.rstrip("\n"))

    return fragments
