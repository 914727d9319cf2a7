"""Configuration models for the furigana tool."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, ValidationError

DEFAULT_ENDPOINT = "https://jlp.yahooapis.jp/FuriganaService/V2/furigana"

APP_ID_ENV = "YAHOO_CLIENT_ID"
ENDPOINT_ENV = "FURIGANA_ENDPOINT"
TIMEOUT_ENV = "FURIGANA_TIMEOUT_SECONDS"
MAX_CHUNK_BYTES_ENV = "FURIGANA_MAX_CHUNK_BYTES"


class ConfigError(RuntimeError):
    """Raised when required process configuration is missing or invalid."""


class ChunkingConfig(BaseModel):
    """Configures the per-request byte ceiling used when splitting text.

    The service rejects oversized requests; 3000 bytes leaves room for the
    JSON-RPC envelope around the query text.
    """

    max_chunk_bytes: int = Field(default=3000, ge=1)


class FuriganaConfig(BaseModel):
    """Connection settings for the remote furigana service."""

    app_id: str = Field(min_length=1)
    endpoint: str = DEFAULT_ENDPOINT
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "FuriganaConfig":
        """Build a config from environment variables.

        Only `YAHOO_CLIENT_ID` is required. Meant to be called once at process
        start; the resulting value is passed to the client explicitly.
        """

        env = os.environ if environ is None else environ
        app_id = env.get(APP_ID_ENV, "").strip()
        if not app_id:
            raise ConfigError(f"{APP_ID_ENV} environment variable is required")

        values: dict[str, object] = {"app_id": app_id}
        if env.get(ENDPOINT_ENV):
            values["endpoint"] = env[ENDPOINT_ENV]
        if env.get(TIMEOUT_ENV):
            values["timeout_seconds"] = env[TIMEOUT_ENV]
        if env.get(MAX_CHUNK_BYTES_ENV):
            values["chunking"] = {"max_chunk_bytes": env[MAX_CHUNK_BYTES_ENV]}

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigError(f"Invalid furigana configuration: {exc}") from exc
