from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from furigana_tool.errors import AnnotationFailure
from furigana_tool.service.client import Annotator
from furigana_tool.types import FuriganaResult, SubWord, Word

_KANJI_READINGS = {
    "漢": ("かん", "kan"),
    "字": ("じ", "ji"),
    "読": ("よ", "yo"),
    "方": ("かた", "kata"),
    "教": ("おし", "oshi"),
    "日": ("に", "ni"),
    "本": ("ほん", "hon"),
    "語": ("ご", "go"),
    "文": ("ぶん", "bun"),
    "章": ("しょう", "shou"),
}


def char_words(text: str) -> list[dict[str, Any]]:
    """One word per character; known kanji get a reading, others echo the surface."""

    words: list[dict[str, Any]] = []
    for char in text:
        furigana, roman = _KANJI_READINGS.get(char, (char, ""))
        words.append({"surface": char, "furigana": furigana, "roman": roman})
    return words


class CharAnnotator(Annotator):
    """Chunk-size-agnostic stub: its output depends only on the characters."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, int | None]] = []

    def annotate(self, text: str, grade: int | None = None) -> FuriganaResult | AnnotationFailure:
        self.calls.append((text, grade))
        return FuriganaResult.from_payload({"word": char_words(text)})


class ScriptedAnnotator(Annotator):
    """Returns queued outcomes in call order."""

    def __init__(self, outcomes: list[FuriganaResult | AnnotationFailure]) -> None:
        self._outcomes = list(outcomes)
        self.calls: list[str] = []

    def annotate(self, text: str, grade: int | None = None) -> FuriganaResult | AnnotationFailure:
        self.calls.append(text)
        return self._outcomes.pop(0)


@pytest.fixture()
def char_annotator() -> CharAnnotator:
    return CharAnnotator()


@pytest.fixture()
def sentence_result() -> FuriganaResult:
    """Service result for 漢字の読み方を教えてください."""

    return FuriganaResult(
        word=[
            Word(surface="漢字", furigana="かんじ", roman="kanji"),
            Word(surface="の", furigana="の", roman="no"),
            Word(
                surface="読み方",
                subword=[
                    SubWord(surface="読", furigana="よ", roman="yo"),
                    SubWord(surface="み", furigana="み", roman="mi"),
                    SubWord(surface="方", furigana="かた", roman="kata"),
                ],
            ),
            Word(surface="を", furigana="を", roman="wo"),
            Word(
                surface="教えて",
                subword=[
                    SubWord(surface="教", furigana="おし", roman="oshi"),
                    SubWord(surface="えて", furigana="えて", roman="ete"),
                ],
            ),
            Word(surface="ください", furigana="ください", roman="kudasai"),
        ]
    )


def make_service_client(
    handler_payload: Any = None,
    *,
    status_code: int = 200,
    raise_error: bool = False,
    seen: list[httpx.Request] | None = None,
) -> httpx.Client:
    """httpx client backed by a fake furigana endpoint.

    With no `handler_payload`, the fake answers with `char_words` of the query.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if raise_error:
            raise httpx.ConnectError("Connection refused")
        if handler_payload is not None:
            return httpx.Response(status_code=status_code, json=handler_payload)
        body = json.loads(request.content)
        result = {"word": char_words(body["params"]["q"])}
        return httpx.Response(
            status_code=status_code,
            json={"id": body["id"], "jsonrpc": "2.0", "result": result},
        )

    return httpx.Client(transport=httpx.MockTransport(handler))
