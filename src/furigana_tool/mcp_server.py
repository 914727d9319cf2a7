"""MCP server exposing `gen_furigana` over stdio or streamable HTTP."""

import argparse
import logging
import sys
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field, ValidationError

from furigana_tool.agent.registry import ToolRegistry
from furigana_tool.agent.tools import (
    GEN_FURIGANA_DESCRIPTION,
    GEN_FURIGANA_TOOL,
    GenFuriganaInput,
    build_registry,
)
from furigana_tool.config import ConfigError, FuriganaConfig

logger = logging.getLogger(__name__)

SERVER_NAME = "yahoo-furigana"

_INPUT_FIELDS = GenFuriganaInput.model_fields


def create_server(registry: ToolRegistry) -> FastMCP:
    """Build a FastMCP server whose tools delegate to `registry`."""

    mcp = FastMCP(name=SERVER_NAME)

    @mcp.tool(name=GEN_FURIGANA_TOOL, description=GEN_FURIGANA_DESCRIPTION)
    def gen_furigana(
        text: Annotated[str, Field(description=_INPUT_FIELDS["text"].description)],
        grade: Annotated[
            int | None, Field(description=_INPUT_FIELDS["grade"].description)
        ] = None,
        output_format: Annotated[
            str | None,
            Field(description=_INPUT_FIELDS["output_format"].description),
        ] = None,
    ) -> str:
        payload: dict[str, object] = {"text": text, "grade": grade}
        if output_format is not None:
            payload["output_format"] = output_format
        try:
            response = registry.execute(GEN_FURIGANA_TOOL, payload)
        except ValidationError as exc:
            raise ToolError(f"Invalid arguments: {exc}") from exc
        if response.is_error:
            raise ToolError(response.text)
        return response.text

    return mcp


def main() -> None:
    """Entry point for the `furigana-mcp` console script."""
    parser = argparse.ArgumentParser(description="Yahoo Furigana MCP server")
    parser.add_argument("--transport", choices=["stdio", "streamable-http"], default="stdio")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    # stdout carries the protocol on stdio; logs go to stderr.
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = FuriganaConfig.from_env()
    except ConfigError as exc:
        logger.error("Error: %s", exc)
        sys.exit(1)

    mcp = create_server(build_registry(config))
    logger.info("Yahoo Furigana MCP server started (transport=%s)", args.transport)

    if args.transport == "stdio":
        mcp.run()
    else:
        mcp.run(transport="streamable-http", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
