"""Built-in tool implementations."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, Field, field_validator

from furigana_tool.agent.registry import ToolRegistry, ToolResponse, ToolSpec
from furigana_tool.config import FuriganaConfig
from furigana_tool.errors import is_failure
from furigana_tool.obs.tracing import TraceStore
from furigana_tool.service.client import FuriganaClient
from furigana_tool.service.orchestrator import ChunkOrchestrator
from furigana_tool.text.chunker import TextChunker
from furigana_tool.types import DEFAULT_OUTPUT_STYLE, OutputStyle, normalize_grade

logger = logging.getLogger(__name__)

GEN_FURIGANA_TOOL = "gen_furigana"
GEN_FURIGANA_DESCRIPTION = (
    "日本語テキストにふりがな（ひらがな読み）を付けます。"
    "漢字かな混じりのテキストを入力すると、各単語の読み方を返します。"
)
ERROR_PREFIX = "エラーが発生しました: "


class GenFuriganaInput(BaseModel):
    text: str = Field(min_length=1, description="ふりがなを付けたい日本語テキスト")
    grade: int | None = Field(
        default=None,
        description=(
            "学年指定（1-8）。指定した学年までに習う漢字にはふりがなを付けません。"
            "1=小1, 2=小2, ..., 6=小6, 7=中学, 8=それ以上"
        ),
    )
    output_format: OutputStyle = Field(
        default=DEFAULT_OUTPUT_STYLE,
        description=(
            "出力形式。bracket=括弧形式「漢字（かんじ）」、"
            "ruby=HTMLルビ形式「<ruby>漢字<rt>かんじ</rt></ruby>」、"
            "roman=ローマ字付き詳細形式（デフォルト: ruby）"
        ),
    )

    @field_validator("grade", mode="after")
    @classmethod
    def _drop_out_of_range_grade(cls, value: int | None) -> int | None:
        return normalize_grade(value)

    @field_validator("output_format", mode="before")
    @classmethod
    def _default_unknown_format(cls, value: Any) -> OutputStyle:
        return OutputStyle.parse(value if isinstance(value, str) else None)


def register_furigana_tool(registry: ToolRegistry, orchestrator: ChunkOrchestrator) -> None:
    """Register `gen_furigana`, backed by the chunk orchestrator."""

    def _gen_furigana(input_data: GenFuriganaInput) -> ToolResponse:
        outcome = orchestrator.process(
            input_data.text,
            grade=input_data.grade,
            style=input_data.output_format,
        )
        if is_failure(outcome):
            logger.info("gen_furigana failed: %s", outcome.describe())
            return ToolResponse(text=ERROR_PREFIX + outcome.describe(), is_error=True)
        return ToolResponse(text=outcome)

    registry.register(
        ToolSpec(
            name=GEN_FURIGANA_TOOL,
            description=GEN_FURIGANA_DESCRIPTION,
            args_schema=GenFuriganaInput,
            handler=_gen_furigana,
            tags=["japanese", "furigana"],
        )
    )


def build_registry(
    config: FuriganaConfig,
    *,
    http_client: httpx.Client | None = None,
    trace_store: TraceStore | None = None,
) -> ToolRegistry:
    """Wire client, chunker and orchestrator into a registry with all tools."""

    orchestrator = ChunkOrchestrator(
        FuriganaClient(config, http_client=http_client),
        TextChunker(config.chunking),
        trace_store=trace_store,
    )
    registry = ToolRegistry()
    register_furigana_tool(registry, orchestrator)
    return registry
