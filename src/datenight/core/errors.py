"""
Error taxonomy.

Only `InvalidRequest` ever reaches a caller. Provider failures are caught at the
aggregator boundary and surface as data (a `0` in provider stats plus a reason).
A disabled provider is not an error at all: it simply returns no venues.
"""

from __future__ import annotations


class ProviderRequestFailed(RuntimeError):
    """An enabled provider returned an error payload or an unusable response."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class InvalidRequest(ValueError):
    """The inbound search payload is unusable (bad coordinates, missing keyword, ...)."""
