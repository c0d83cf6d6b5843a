"""
Boundary-aware text chunking for lexical search over long documents.

Hierarchical splitting:
1. Structural boundaries (triple newlines, then paragraphs)
2. Sentences, for sections longer than max_chunk_size
3. Words, when sentence splitting leaves chunks far over the limit

Consecutive chunks share an overlap prefix (the last overlap_size/10 words of
the previous chunk) so context survives a split. Small chunks absorb the chunks
that follow them and punctuation-only noise is dropped.

A single word longer than max_chunk_size is never cut; it becomes its own chunk.
"""

import logging
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHUNK_SIZE = 1000   # Target ~1000 characters per chunk
DEFAULT_MIN_CHUNK_SIZE = 250    # Minimum meaningful chunk size
DEFAULT_OVERLAP_SIZE = 150      # Overlap for context continuity

SECTION_SEPARATORS = ("\n\n\n", "\n\n")
WORD_FALLBACK_FACTOR = 1.5
MIN_ALPHANUMERIC_RATIO = 0.3

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_WHITESPACE = re.compile(r"\s+")


class ChunkingOptions(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    max_chunk_size: int = Field(default=DEFAULT_MAX_CHUNK_SIZE, gt=0)
    min_chunk_size: int = Field(default=DEFAULT_MIN_CHUNK_SIZE, ge=0)
    overlap_size: int = Field(default=DEFAULT_OVERLAP_SIZE, ge=0)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def alphanumeric_ratio(text: str) -> float:
    if not text:
        return 0.0
    return sum(1 for char in text if char.isalnum()) / len(text)


def _is_atomic(text: str) -> bool:
    return not any(char.isspace() for char in text)


class TextChunker:
    """Split long text into overlapping, size-bounded chunks"""

    def __init__(self, options=None):
        if options is None:
            options = ChunkingOptions()
        elif not isinstance(options, ChunkingOptions):
            options = ChunkingOptions.model_validate(options)

        self.options = options
        self.max_chunk_size = options.max_chunk_size
        self.min_chunk_size = options.min_chunk_size
        self.overlap_size = options.overlap_size

    def chunk(self, text: Optional[str]) -> List[str]:
        """
        Split text into chunks.

        Args:
            text: Input text (None/blank returns no chunks)

        Returns:
            Ordered list of normalized chunk strings
        """
        if not text or not text.strip():
            return []

        logger.debug(
            f"Chunking text: {len(text)} chars, max={self.max_chunk_size}, "
            f"min={self.min_chunk_size}, overlap={self.overlap_size}"
        )

        chunks: List[str] = []
        for section in self._split_sections(text):
            if len(section) <= self.max_chunk_size:
                chunks.append(section)
            else:
                chunks.extend(self._split_large_section(section))

        merged = self._merge_small_chunks(chunks)

        result = []
        for chunk in merged:
            chunk = normalize_whitespace(chunk)
            if alphanumeric_ratio(chunk) > MIN_ALPHANUMERIC_RATIO:
                result.append(chunk)
            else:
                logger.debug(f"Dropping low-content chunk: {chunk[:40]!r}")

        logger.debug(f"Created {len(result)} chunks from {len(chunks)} candidates")
        return result

    def _split_sections(self, text: str) -> List[str]:
        sections = [text]
        for separator in SECTION_SEPARATORS:
            sections = [part for section in sections for part in section.split(separator)]
        # Sizes are measured on the raw text; whitespace is normalized last
        return [section.strip() for section in sections if section.strip()]

    def _split_large_section(self, section: str) -> List[str]:
        chunks = self._accumulate(_SENTENCE_BOUNDARY.split(section))

        limit = self.max_chunk_size * WORD_FALLBACK_FACTOR
        if not chunks or any(len(chunk) > limit and not _is_atomic(chunk) for chunk in chunks):
            logger.debug(f"Sentence split left oversized chunks, splitting {len(section)} chars by words")
            return self._accumulate(section.split())

        return chunks

    def _accumulate(self, units: List[str]) -> List[str]:
        """Pack sentences or words into chunks up to max_chunk_size."""
        chunks: List[str] = []
        current = ""
        previous = ""

        for unit in units:
            unit = unit.strip()
            if not unit:
                continue

            if len(unit) > self.max_chunk_size and _is_atomic(unit):
                # Oversized word: emitted alone and not carried into the overlap
                if current:
                    chunks.append(current)
                chunks.append(unit)
                current = ""
                previous = ""
                continue

            separator = 1 if current else 0
            if len(current) + separator + len(unit) <= self.max_chunk_size:
                current = f"{current} {unit}" if current else unit
                continue

            if current:
                chunks.append(current)
                previous = current

            overlap = self._overlap_text(previous)
            seeded = f"{overlap} {unit}" if overlap else unit
            current = seeded if len(seeded) <= self.max_chunk_size else unit

        if current:
            chunks.append(current)

        return chunks

    def _overlap_text(self, text: str) -> str:
        # Approximates overlap_size characters as overlap_size/10 words
        word_count = self.overlap_size // 10
        if not text or word_count <= 0:
            return ""
        return " ".join(text.split()[-word_count:])

    def _merge_small_chunks(self, chunks: List[str]) -> List[str]:
        merged: List[str] = []
        i = 0

        while i < len(chunks):
            current = chunks[i]

            while (
                len(current) < self.min_chunk_size
                and i + 1 < len(chunks)
                and len(current) + 1 + len(chunks[i + 1]) <= self.max_chunk_size
            ):
                i += 1
                current = f"{current} {chunks[i]}"

            merged.append(current)
            i += 1

        return merged


def chunk_text(text: Optional[str], options=None) -> List[str]:
    """
    Split text into overlapping, retrieval-sized chunks.

    Args:
        text: Text to split
        options: ChunkingOptions, dict (snake_case or camelCase) or None

    Returns:
        List of chunk strings (empty for blank input)

    Example:
        >>> chunk_text("A.\\n\\nB.\\n\\nC.\\n\\nD.", {"minChunkSize": 10, "maxChunkSize": 100})
        ['A. B. C. D.']
    """
    return TextChunker(options).chunk(text)
