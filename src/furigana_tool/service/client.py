"""HTTP client for the Yahoo! JAPAN furigana service (JSON-RPC 2.0)."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from furigana_tool.config import FuriganaConfig
from furigana_tool.errors import (
    AnnotationFailure,
    EmptyResultError,
    ServiceError,
    TransportError,
)
from furigana_tool.types import AnnotationRequest, FuriganaResult

logger = logging.getLogger(__name__)

FURIGANA_METHOD = "jlp.furiganaservice.furigana"
JSONRPC_VERSION = "2.0"
REQUEST_ID = "1"


class Annotator(ABC):
    """Annotator interface used by the chunk orchestrator."""

    @abstractmethod
    def annotate(
        self, text: str, grade: int | None = None
    ) -> FuriganaResult | AnnotationFailure:
        """Annotate one fragment of text."""


class FuriganaClient(Annotator):
    """Sends one text fragment to the furigana service per call.

    No retries are attempted; the caller decides what a failure means for the
    rest of the request.
    """

    def __init__(
        self,
        config: FuriganaConfig,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Service settings, including the application id.
            http_client: Optional httpx.Client for dependency injection (testing).
        """
        self.config = config
        self._http_client = http_client

    def annotate(
        self, text: str, grade: int | None = None
    ) -> FuriganaResult | AnnotationFailure:
        """Annotate one fragment.

        Returns:
            The parsed result, or a `TransportError`, `ServiceError` or
            `EmptyResultError` describing why none is available.
        """
        request = AnnotationRequest(text=text, grade=grade)
        body = build_request_body(request)

        try:
            response = self._post(body)
        except httpx.RequestError as exc:
            logger.warning("Furigana request failed: %s", exc)
            return TransportError(status=None, status_text=str(exc) or type(exc).__name__)

        if not response.is_success:
            logger.warning(
                "Furigana service returned HTTP %s %s",
                response.status_code,
                response.reason_phrase,
            )
            return TransportError(
                status=response.status_code, status_text=response.reason_phrase
            )

        try:
            payload: dict[str, Any] = response.json()
        except ValueError:
            logger.warning("Furigana service returned a non-JSON body")
            return TransportError(
                status=response.status_code, status_text="invalid JSON response"
            )

        return parse_response(payload)

    def _post(self, body: dict[str, Any]) -> httpx.Response:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": f"Yahoo AppID: {self.config.app_id}",
        }

        client = self._http_client
        should_close = False
        if client is None:
            client = httpx.Client(timeout=self.config.timeout_seconds)
            should_close = True
        try:
            return client.post(
                self.config.endpoint,
                json=body,
                headers=headers,
                timeout=self.config.timeout_seconds,
            )
        finally:
            if should_close:
                client.close()


def build_request_body(request: AnnotationRequest) -> dict[str, Any]:
    params: dict[str, Any] = {"q": request.text}
    if request.grade is not None:
        params["grade"] = request.grade
    return {
        "id": REQUEST_ID,
        "jsonrpc": JSONRPC_VERSION,
        "method": FURIGANA_METHOD,
        "params": params,
    }


def parse_response(payload: Any) -> FuriganaResult | AnnotationFailure:
    """Classify a decoded JSON-RPC response body."""

    if not isinstance(payload, dict):
        return EmptyResultError()

    error = payload.get("error")
    if error is not None:
        code = error.get("code", 0) if isinstance(error, dict) else 0
        message = error.get("message", "") if isinstance(error, dict) else str(error)
        logger.warning("Furigana service error %s: %s", code, message)
        return ServiceError(code=code if isinstance(code, int) else 0, message=str(message))

    result = payload.get("result")
    if not isinstance(result, dict):
        return EmptyResultError()

    return FuriganaResult.from_payload(result)
