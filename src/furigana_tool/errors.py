"""Failure values returned by the annotation client and orchestrator.

These are plain values rather than exceptions: every component that can fail
returns either its result or one of these, so the failure path is part of the
signature.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TransportError:
    """The HTTP exchange failed (non-2xx status or network error)."""

    status: int | None
    status_text: str

    def describe(self) -> str:
        if self.status is None:
            return f"HTTPエラー: {self.status_text}"
        return f"HTTPエラー: {self.status} {self.status_text}".rstrip()


@dataclass(frozen=True, slots=True)
class ServiceError:
    """The service answered with a JSON-RPC error object."""

    code: int
    message: str

    def describe(self) -> str:
        return f"APIエラー: {self.message} (code: {self.code})"


@dataclass(frozen=True, slots=True)
class EmptyResultError:
    """The response carried neither `result` nor `error`."""

    def describe(self) -> str:
        return "結果が取得できませんでした"


AnnotationFailure = TransportError | ServiceError | EmptyResultError


@dataclass(frozen=True, slots=True)
class OrchestrationError:
    """A chunk failed while processing multi-chunk input."""

    chunk_index: int
    chunk_total: int
    cause: AnnotationFailure

    @property
    def message(self) -> str:
        """Message of the underlying failure, without chunk context."""
        if isinstance(self.cause, ServiceError):
            return self.cause.message
        return self.cause.describe()

    def describe(self) -> str:
        return f"{self.cause.describe()} (チャンク {self.chunk_index}/{self.chunk_total})"


AnnotationError = AnnotationFailure | OrchestrationError

ANNOTATION_ERROR_TYPES = (TransportError, ServiceError, EmptyResultError, OrchestrationError)


def is_failure(value: object) -> bool:
    return isinstance(value, ANNOTATION_ERROR_TYPES)
