from furigana_tool.render.formatter import (
    chunk_separator,
    format_bracket,
    format_result,
    format_roman,
    format_ruby,
)
from furigana_tool.types import FuriganaResult, OutputStyle, SubWord, Word


def test_bracket_sentence(sentence_result: FuriganaResult) -> None:
    assert format_bracket(sentence_result) == "漢字（かんじ）の読（よ）み方（かた）を教（おし）えてください"


def test_ruby_markup() -> None:
    result = FuriganaResult(
        word=[
            Word(surface="漢字", furigana="かんじ"),
            Word(surface="の", furigana="の"),
            Word(
                surface="読み方",
                subword=[
                    SubWord(surface="読", furigana="よ"),
                    SubWord(surface="み", furigana="み"),
                    SubWord(surface="方", furigana="かた"),
                ],
            ),
        ]
    )

    assert format_ruby(result) == (
        "<ruby>漢字<rt>かんじ</rt></ruby>の<ruby>読<rt>よ</rt></ruby>み<ruby>方<rt>かた</rt></ruby>"
    )


def test_reading_equal_to_surface_is_suppressed() -> None:
    result = FuriganaResult(word=[Word(surface="ひらがな", furigana="ひらがな", roman="hiragana")])

    assert format_bracket(result) == "ひらがな"
    assert format_ruby(result) == "ひらがな"


def test_word_reading_takes_precedence_over_subwords() -> None:
    result = FuriganaResult(
        word=[
            Word(
                surface="読み方",
                furigana="よみかた",
                subword=[SubWord(surface="読", furigana="よ")],
            )
        ]
    )

    assert format_bracket(result) == "読み方（よみかた）"


def test_word_without_reading_is_bare() -> None:
    result = FuriganaResult(word=[Word(surface="ABC"), Word(surface="。", furigana="")])

    assert format_bracket(result) == "ABC。"
    assert format_roman(result) == "ABC\n。"


def test_roman_detailed_lines(sentence_result: FuriganaResult) -> None:
    assert format_roman(sentence_result) == "\n".join(
        [
            "漢字: かんじ (kanji)",
            "の: の (no)",
            "読み方:",
            "  - 読: よ (yo)",
            "  - み: み (mi)",
            "  - 方: かた (kata)",
            "を: を (wo)",
            "教えて:",
            "  - 教: おし (oshi)",
            "  - えて: えて (ete)",
            "ください: ください (kudasai)",
        ]
    )


def test_roman_missing_fields_render_empty() -> None:
    result = FuriganaResult(
        word=[
            Word(surface="東京", roman="toukyou"),
            Word(surface="駅", subword=[SubWord(surface="駅")]),
        ]
    )

    assert format_roman(result) == "東京:  (toukyou)\n駅:\n  - 駅:  ()"


def test_format_result_dispatches_on_style(sentence_result: FuriganaResult) -> None:
    assert format_result(sentence_result, OutputStyle.BRACKET) == format_bracket(sentence_result)
    assert format_result(sentence_result, OutputStyle.RUBY) == format_ruby(sentence_result)
    assert format_result(sentence_result, OutputStyle.ROMAN) == format_roman(sentence_result)


def test_chunk_separator_only_for_roman() -> None:
    assert chunk_separator(OutputStyle.ROMAN) == "\n"
    assert chunk_separator(OutputStyle.RUBY) == ""
    assert chunk_separator(OutputStyle.BRACKET) == ""


def test_result_parsed_from_service_payload() -> None:
    result = FuriganaResult.from_payload(
        {
            "word": [
                {"surface": "漢字", "furigana": "かんじ", "roman": "kanji"},
                {
                    "surface": "読み",
                    "furigana": "よみ",
                    "roman": "yomi",
                    "subword": [
                        {"surface": "読", "furigana": "よ", "roman": "yo"},
                        {"surface": "み", "furigana": "み", "roman": "mi"},
                    ],
                },
                {"surface": "。"},
            ]
        }
    )

    assert result.word[0] == Word(surface="漢字", furigana="かんじ", roman="kanji")
    assert result.word[1].subword == [
        SubWord(surface="読", furigana="よ", roman="yo"),
        SubWord(surface="み", furigana="み", roman="mi"),
    ]
    assert result.word[2] == Word(surface="。")
    assert FuriganaResult.from_payload({}).word == []
