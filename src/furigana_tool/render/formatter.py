"""Renders a furigana result as bracketed, ruby-markup or romanized text."""

from __future__ import annotations

from collections.abc import Callable

from furigana_tool.types import FuriganaResult, OutputStyle, SubWord, Word


def _has_distinct_reading(item: Word | SubWord) -> bool:
    # Kana-only surfaces come back with furigana == surface; nothing to add.
    return bool(item.furigana) and item.furigana != item.surface


def _render_inline(result: FuriganaResult, annotate: Callable[[str, str], str]) -> str:
    parts: list[str] = []
    for word in result.word:
        if _has_distinct_reading(word):
            parts.append(annotate(word.surface, word.furigana or ""))
        elif word.subword:
            parts.append(
                "".join(
                    annotate(sub.surface, sub.furigana or "")
                    if _has_distinct_reading(sub)
                    else sub.surface
                    for sub in word.subword
                )
            )
        else:
            parts.append(word.surface)
    return "".join(parts)


def format_bracket(result: FuriganaResult) -> str:
    """Bracket notation: 漢字（かんじ）."""
    return _render_inline(result, lambda surface, reading: f"{surface}（{reading}）")


def format_ruby(result: FuriganaResult) -> str:
    """HTML ruby markup: <ruby>漢字<rt>かんじ</rt></ruby>."""
    return _render_inline(
        result, lambda surface, reading: f"<ruby>{surface}<rt>{reading}</rt></ruby>"
    )


def format_roman(result: FuriganaResult) -> str:
    """One line per word with reading and romanization.

    Words with subwords get a `surface:` header followed by one indented
    `- surface: furigana (roman)` line per subword.
    """

    lines: list[str] = []
    for word in result.word:
        furigana = word.furigana or ""
        roman = word.roman or ""
        if word.subword:
            details = "\n".join(
                f"  - {sub.surface}: {sub.furigana or ''} ({sub.roman or ''})"
                for sub in word.subword
            )
            lines.append(f"{word.surface}:\n{details}")
        elif furigana or roman:
            lines.append(f"{word.surface}: {furigana} ({roman})")
        else:
            lines.append(word.surface)
    return "\n".join(lines)


_FORMATTERS: dict[OutputStyle, Callable[[FuriganaResult], str]] = {
    OutputStyle.BRACKET: format_bracket,
    OutputStyle.RUBY: format_ruby,
    OutputStyle.ROMAN: format_roman,
}


def format_result(result: FuriganaResult, style: OutputStyle) -> str:
    return _FORMATTERS[OutputStyle.parse(style)](result)


def chunk_separator(style: OutputStyle) -> str:
    """Separator placed between formatted chunks.

    Roman output is a block of lines per chunk; inline styles flow together.
    """
    return "\n" if OutputStyle.parse(style) is OutputStyle.ROMAN else ""
