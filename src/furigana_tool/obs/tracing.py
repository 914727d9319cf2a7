"""Request tracing and latency accounting."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(slots=True)
class AnnotationTrace:
    trace_id: str
    timestamp_utc: str
    input_bytes: int
    chunk_count: int
    style: str
    grade: int | None
    latency_ms: float
    error: str | None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class TraceStore:
    """In-memory trace storage for API-level observability."""

    def __init__(self, max_records: int = 1000) -> None:
        self._records: dict[str, AnnotationTrace] = {}
        self._max_records = max_records

    def create_record(
        self,
        *,
        input_bytes: int,
        chunk_count: int,
        style: str,
        grade: int | None,
        latency_ms: float,
        error: str | None = None,
    ) -> AnnotationTrace:
        trace_id = str(uuid.uuid4())
        record = AnnotationTrace(
            trace_id=trace_id,
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            input_bytes=input_bytes,
            chunk_count=chunk_count,
            style=style,
            grade=grade,
            latency_ms=latency_ms,
            error=error,
        )
        self._records[trace_id] = record
        while len(self._records) > self._max_records:
            del self._records[next(iter(self._records))]
        return record

    def get(self, trace_id: str) -> AnnotationTrace:
        record = self._records.get(trace_id)
        if record is None:
            raise KeyError(f"Trace not found: {trace_id}")
        return record

    def list_recent(self, limit: int = 20) -> list[AnnotationTrace]:
        return list(self._records.values())[-limit:]

    def summary(self) -> dict[str, float | int]:
        """Aggregate core observability metrics for dashboard display."""
        records = list(self._records.values())
        total = len(records)
        if total == 0:
            return {
                "total_requests": 0,
                "failed_requests": 0,
                "avg_latency_ms": 0.0,
                "p95_latency_ms": 0.0,
                "avg_chunks_per_request": 0.0,
                "total_input_bytes": 0,
            }

        latencies = sorted(record.latency_ms for record in records)
        p95_index = max(0, int((len(latencies) * 0.95) - 1))

        return {
            "total_requests": total,
            "failed_requests": sum(1 for record in records if not record.succeeded),
            "avg_latency_ms": sum(latencies) / total,
            "p95_latency_ms": latencies[p95_index],
            "avg_chunks_per_request": sum(record.chunk_count for record in records) / total,
            "total_input_bytes": sum(record.input_bytes for record in records),
        }


class Timer:
    """Simple context timer used around service calls."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
