"""FastAPI entrypoint exposing the registered tools over HTTP.

Run with `uvicorn furigana_tool.api.main:create_app --factory`.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

import httpx
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, ValidationError

from furigana_tool.agent.tools import GEN_FURIGANA_TOOL, build_registry
from furigana_tool.config import FuriganaConfig
from furigana_tool.obs.tracing import TraceStore


class FuriganaRequest(BaseModel):
    text: str = Field(min_length=1)
    grade: int | None = None
    output_format: str | None = None


def create_app(
    config: FuriganaConfig | None = None,
    *,
    http_client: httpx.Client | None = None,
) -> FastAPI:
    """Build the HTTP app; reads `YAHOO_CLIENT_ID` when no config is given."""

    config = config or FuriganaConfig.from_env()
    trace_store = TraceStore()
    registry = build_registry(config, http_client=http_client, trace_store=trace_store)

    app = FastAPI(title="Furigana Tool", version="0.1.0")

    def _run_tool(name: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = registry.execute(name, payload)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return response.model_dump()

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "endpoint": config.endpoint,
            "max_chunk_bytes": config.chunking.max_chunk_bytes,
            "trace_count": len(trace_store.list_recent(limit=1000)),
        }

    @app.get("/tools")
    def tools() -> dict[str, Any]:
        return {
            "items": [
                {
                    "name": spec.name,
                    "description": spec.description,
                    "input_schema": spec.args_schema.model_json_schema(),
                    "tags": spec.tags,
                }
                for spec in registry.specs()
            ]
        }

    @app.post("/tools/{name}")
    def call_tool(name: str, payload: dict[str, Any]) -> dict[str, Any]:
        return _run_tool(name, payload)

    @app.post("/furigana")
    def furigana(request: FuriganaRequest) -> dict[str, Any]:
        return _run_tool(GEN_FURIGANA_TOOL, request.model_dump(exclude_none=True))

    @app.get("/traces")
    def traces(limit: int = 20) -> dict[str, Any]:
        records = [asdict(record) for record in trace_store.list_recent(limit=limit)]
        return {"items": records}

    @app.get("/traces/{trace_id}")
    def trace_detail(trace_id: str) -> dict[str, Any]:
        try:
            record = trace_store.get(trace_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return asdict(record)

    @app.get("/metrics")
    def metrics() -> dict[str, Any]:
        return trace_store.summary()

    return app
