"""Per-question timing spans, folded into a search analytics record."""

from __future__ import annotations

import time
from contextlib import contextmanager
from datetime import datetime, timezone
from uuid import uuid4

from kb_assistant.models.domain import SearchAnalytic


class TraceContext:
    """Collects named spans for one question.

    A span that exits with an exception is recorded with `status="error"` and
    the exception is re-raised; the caller decides how to degrade.
    """

    def __init__(self, trace_id: str | None = None) -> None:
        self.trace_id = trace_id or str(uuid4())
        self.started_at = datetime.now(timezone.utc)
        self.spans: list[dict] = []
        self._t0 = time.perf_counter()

    def _offset_ms(self) -> float:
        return round((time.perf_counter() - self._t0) * 1000, 3)

    @contextmanager
    def span(self, name: str, **metadata):
        record = {"name": name, "start_ms": self._offset_ms(), "status": "ok", **metadata}
        try:
            yield record
        except Exception:
            record["status"] = "error"
            raise
        finally:
            record["end_ms"] = self._offset_ms()
            record["duration_ms"] = round(record["end_ms"] - record["start_ms"], 3)
            self.spans.append(record)

    @property
    def elapsed_ms(self) -> float:
        return self._offset_ms()

    def to_analytic(
        self,
        query: str,
        normalized_query: str,
        results_count: int,
        tier: str,
        source_type: str,
    ) -> SearchAnalytic:
        return SearchAnalytic(
            analytic_id=self.trace_id,
            query=query,
            normalized_query=normalized_query,
            results_count=results_count,
            tier=tier,
            source_type=source_type,
            latency_ms=self.elapsed_ms,
            spans=list(self.spans),
            timestamp=self.started_at,
        )
