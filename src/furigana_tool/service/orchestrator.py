"""Sequential chunk pipeline: split, annotate, format, join."""

from __future__ import annotations

import logging

from furigana_tool.errors import AnnotationError, OrchestrationError, is_failure
from furigana_tool.obs.tracing import Timer, TraceStore
from furigana_tool.render.formatter import chunk_separator, format_result
from furigana_tool.service.client import Annotator
from furigana_tool.text.chunker import TextChunker, byte_length
from furigana_tool.types import DEFAULT_OUTPUT_STYLE, Chunk, OutputStyle, normalize_grade

logger = logging.getLogger(__name__)


class ChunkOrchestrator:
    """Annotates arbitrarily long text through a size-limited service.

    The text is split by `TextChunker`, each chunk is sent to the annotator
    and formatted in order, and the formatted pieces are joined. Chunks are
    processed one after another: the first failure stops the run and is
    reported with its 1-based chunk position, and no partial output is ever
    returned.
    """

    def __init__(
        self,
        annotator: Annotator,
        chunker: TextChunker | None = None,
        *,
        trace_store: TraceStore | None = None,
    ) -> None:
        self.annotator = annotator
        self.chunker = chunker or TextChunker()
        self.trace_store = trace_store

    def process(
        self,
        text: str,
        grade: int | None = None,
        style: OutputStyle = DEFAULT_OUTPUT_STYLE,
    ) -> str | AnnotationError:
        style = OutputStyle.parse(style)
        grade = normalize_grade(grade)
        chunks = self.chunker.split(text)
        logger.debug(
            "Annotating %d bytes in %d chunk(s) (limit=%d)",
            byte_length(text),
            len(chunks),
            self.chunker.limit,
        )

        with Timer() as timer:
            outcome = self._run(chunks, grade, style)

        if self.trace_store is not None:
            self.trace_store.create_record(
                input_bytes=byte_length(text),
                chunk_count=len(chunks),
                style=style.value,
                grade=grade,
                latency_ms=timer.elapsed_ms,
                error=outcome.describe() if is_failure(outcome) else None,
            )
        return outcome

    def _run(
        self, chunks: list[Chunk], grade: int | None, style: OutputStyle
    ) -> str | AnnotationError:
        if len(chunks) == 1:
            result = self.annotator.annotate(chunks[0].text, grade)
            if is_failure(result):
                return result
            return format_result(result, style)

        formatted: list[str] = []
        for chunk in chunks:
            with Timer() as timer:
                result = self.annotator.annotate(chunk.text, grade)
            logger.debug(
                "Chunk %d/%d (%d bytes) took %.1f ms",
                chunk.position,
                chunk.total,
                chunk.byte_length,
                timer.elapsed_ms,
            )
            if is_failure(result):
                logger.warning(
                    "Chunk %d/%d failed: %s", chunk.position, chunk.total, result.describe()
                )
                return OrchestrationError(
                    chunk_index=chunk.position,
                    chunk_total=chunk.total,
                    cause=result,
                )
            formatted.append(format_result(result, style))

        return chunk_separator(style).join(formatted)
