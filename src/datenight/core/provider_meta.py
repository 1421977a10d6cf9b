"""
Per-request provider call metadata.

Adapters report each call here: whether it ran live or was skipped as disabled,
how long it took, how many venues came back and, on failure, the error. The API
attaches both the raw calls and a `summary()` to `SearchResponse.meta`.

Recording goes through a contextvar, so concurrent requests never mix; outside a
`capture_provider_meta()` block it is a no-op.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator

MODE_LIVE = "live"
MODE_DISABLED = "disabled"


@dataclass
class ProviderMeta:
    calls: dict[str, dict[str, Any]] = field(default_factory=dict)

    def record(self, name: str, payload: dict[str, Any]) -> None:
        if not name:
            return
        self.calls[name] = dict(payload)

    def disabled(self) -> list[str]:
        return sorted(name for name, call in self.calls.items() if call.get("mode") == MODE_DISABLED)

    def failed(self) -> dict[str, str]:
        """Provider name -> error string for live calls that raised."""
        return {name: call["error"] for name, call in self.calls.items() if call.get("error")}

    def venue_counts(self) -> dict[str, int]:
        return {
            name: int(call.get("count", 0))
            for name, call in self.calls.items()
            if call.get("mode") == MODE_LIVE and not call.get("error")
        }

    def summary(self) -> dict[str, Any]:
        counts = self.venue_counts()
        return {
            "live": sorted(counts),
            "disabled": self.disabled(),
            "failed": self.failed(),
            "venues": sum(counts.values()),
        }


_provider_meta_var: contextvars.ContextVar[ProviderMeta | None] = contextvars.ContextVar(
    "datenight_provider_meta", default=None
)


def record_provider_call(name: str, payload: dict[str, Any]) -> None:
    meta = _provider_meta_var.get()
    if meta is None:
        return
    meta.record(name, payload)


@contextmanager
def capture_provider_meta() -> Iterator[ProviderMeta]:
    meta = ProviderMeta()
    token = _provider_meta_var.set(meta)
    try:
        yield meta
    finally:
        _provider_meta_var.reset(token)
