"""
Chunk Packer

Packs filtered diff sections into size-bounded chunks, one review request
per chunk.
"""

import structlog

from .hunk_splitter import split_file_diff
from .models import Chunk, DiffSection, Fragment

logger = structlog.get_logger(__name__)

# Fragments in a chunk are joined by one newline
SEPARATOR = "\n"


class ChunkPacker:
    """Greedy packer: smallest fragments first, one pass."""

    def __init__(self, max_chunk_size: int = 12000):
        """
        Initialize packer.

        Args:
            max_chunk_size: Maximum characters per chunk (default 12000)
        """
        if max_chunk_size <= 0:
            raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
        self.max_chunk_size = max_chunk_size

    def pack(self, sections: list[DiffSection]) -> list[Chunk]:
        """
        Pack sections into chunks.

        Strategy:
        1. Sections at or over the limit are split at hunk boundaries
        2. Fragments are sorted ascending by length (stable)
        3. A chunk is closed when the next fragment would overflow it

        The packing order, not the file order, decides chunk content order.
        """
        fragments = self.expand(sections)
        ordered = sorted(fragments, key=lambda f: f.length)

        chunks: list[Chunk] = []
        current: list[Fragment] = []
        current_size = 0

        for fragment in ordered:
            added = fragment.length + (len(SEPARATOR) if current else 0)
            if current and current_size + added > self.max_chunk_size:
                chunks.append(Chunk(fragments=current))
                current = []
                current_size = 0
                added = fragment.length

            current.append(fragment)
            current_size += added

        if current:
            chunks.append(Chunk(fragments=current))

        logger.debug(
            "Packed diff",
            fragments=len(fragments),
            chunks=len(chunks),
            sizes=[c.length for c in chunks],
        )
        return chunks

    def expand(self, sections: list[DiffSection]) -> list[Fragment]:
        """Turn sections into fragments, splitting the oversized ones."""
        fragments: list[Fragment] = []

        for section in sections:
            content = section.content.strip()
            if len(content) < self.max_chunk_size:
                fragments.append(Fragment(content=content, file_name=section.file_name))
            else:
                split = split_file_diff(section.file_name, content, self.max_chunk_size)
                logger.debug(
                    "Split oversized file",
                    file=section.file_name,
                    length=len(content),
                    fragments=len(split),
                )
                fragments.extend(split)

        return fragments


def pack_sections(sections: list[DiffSection], max_chunk_size: int) -> list[Chunk]:
    """Module-level shortcut for ``ChunkPacker(max_chunk_size).pack``."""
    return ChunkPacker(max_chunk_size).pack(sections)
