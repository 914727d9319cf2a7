"""Byte-bounded, sentence-aware text chunking."""

from __future__ import annotations

import re

from furigana_tool.config import ChunkingConfig
from furigana_tool.types import Chunk

_ENCODING = "utf-8"
# Split after full-width sentence terminators and line breaks, keeping them.
_SENTENCE_SPLIT = re.compile(r"(?<=[。．！？\n])")


def byte_length(text: str) -> int:
    """Return the UTF-8 encoded size of `text` in bytes."""
    return len(text.encode(_ENCODING))


def split_sentences(text: str) -> list[str]:
    return [part for part in _SENTENCE_SPLIT.split(text) if part]


def split_text(text: str, limit: int) -> list[str]:
    """Split `text` into fragments of at most `limit` UTF-8 bytes.

    Sentence units are packed greedily, so a fragment only ends mid-sentence
    when that one sentence is larger than `limit` by itself; such a sentence
    is cut on character positions by `_bisect_unit`. Joining the result
    reproduces `text` exactly.

    A single character that encodes to more than `limit` bytes cannot be
    split further and is returned as its own oversized fragment.
    """

    if limit <= 0:
        raise ValueError("limit must be a positive number of bytes")

    if byte_length(text) <= limit:
        return [text]

    chunks: list[str] = []
    buffer = ""

    for unit in split_sentences(text):
        if byte_length(buffer + unit) <= limit:
            buffer += unit
            continue

        if buffer:
            chunks.append(buffer)
            buffer = unit
            # The unit that started the new buffer may itself be oversized.
            if byte_length(buffer) > limit:
                chunks.extend(_bisect_unit(buffer, limit))
                buffer = ""
        else:
            chunks.extend(_bisect_unit(unit, limit))

    if buffer:
        chunks.append(buffer)

    return chunks


def _bisect_unit(unit: str, limit: int) -> list[str]:
    """Cut one oversized unit into the longest prefixes that fit `limit`."""

    pieces: list[str] = []
    remaining = unit
    while remaining:
        end = len(remaining)
        while end > 1 and byte_length(remaining[:end]) > limit:
            end //= 2
        while end < len(remaining) and byte_length(remaining[: end + 1]) <= limit:
            end += 1
        pieces.append(remaining[:end])
        remaining = remaining[end:]
    return pieces


class TextChunker:
    """Splits request text into `Chunk` values sized for one service call."""

    def __init__(self, config: ChunkingConfig | None = None) -> None:
        self.config = config or ChunkingConfig()

    @property
    def limit(self) -> int:
        return self.config.max_chunk_bytes

    def split(self, text: str) -> list[Chunk]:
        fragments = split_text(text, self.limit)
        total = len(fragments)
        return [
            Chunk(text=fragment, index=index, total=total, byte_length=byte_length(fragment))
            for index, fragment in enumerate(fragments)
        ]
