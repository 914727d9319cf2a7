"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

MIN_GRADE = 1
MAX_GRADE = 8


def normalize_grade(grade: int | None) -> int | None:
    """Return `grade` when it is a valid school grade (1-8), else `None`."""

    if grade is None or isinstance(grade, bool):
        return None
    if MIN_GRADE <= grade <= MAX_GRADE:
        return grade
    return None


class OutputStyle(str, Enum):
    """Rendering style for an annotation result."""

    BRACKET = "bracket"
    RUBY = "ruby"
    ROMAN = "roman"

    @classmethod
    def parse(cls, value: str | OutputStyle | None) -> OutputStyle:
        if isinstance(value, OutputStyle):
            return value
        try:
            return cls(value)
        except ValueError:
            return DEFAULT_OUTPUT_STYLE


DEFAULT_OUTPUT_STYLE = OutputStyle.RUBY


@dataclass(slots=True)
class SubWord:
    """A sub-unit of a word with its own reading."""

    surface: str
    furigana: str | None = None
    roman: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> SubWord:
        return cls(
            surface=str(payload.get("surface", "")),
            furigana=payload.get("furigana"),
            roman=payload.get("roman"),
        )


@dataclass(slots=True)
class Word:
    """One word of an annotation result, optionally split into subwords."""

    surface: str
    furigana: str | None = None
    roman: str | None = None
    subword: list[SubWord] | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Word:
        raw_subwords = payload.get("subword")
        subword = (
            [SubWord.from_payload(item) for item in raw_subwords]
            if isinstance(raw_subwords, list)
            else None
        )
        return cls(
            surface=str(payload.get("surface", "")),
            furigana=payload.get("furigana"),
            roman=payload.get("roman"),
            subword=subword,
        )


@dataclass(slots=True)
class FuriganaResult:
    """Parsed `result` object of a furigana service response."""

    word: list[Word] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> FuriganaResult:
        words = payload.get("word") or []
        return cls(word=[Word.from_payload(item) for item in words])


@dataclass(frozen=True, slots=True)
class AnnotationRequest:
    """Text and optional grade filter sent to the service for one chunk."""

    text: str
    grade: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "grade", normalize_grade(self.grade))


@dataclass(slots=True)
class Chunk:
    """A contiguous slice of the input text sized for one service call."""

    text: str
    index: int
    total: int
    byte_length: int

    @property
    def position(self) -> int:
        """1-based position, as reported to users."""
        return self.index + 1


@dataclass(slots=True)
class ToolTrace:
    """Trace record for an executed tool call."""

    name: str
    input_payload: dict[str, Any]
    output_preview: str
    latency_ms: float
    is_error: bool = False
