"""Errors raised for malformed caller input."""

from __future__ import annotations


class InvalidURLError(ValueError):
    """Raised when an audit target is not an absolute http(s) URL."""

    pass


class UnknownCheckError(ValueError):
    """Raised when a check selection names ids missing from the registry."""

    def __init__(self, unknown: list[str], available: list[str]):
        self.unknown = unknown
        self.available = available
        super().__init__(f"Unknown check(s): {', '.join(unknown)}. Available: {', '.join(available)}")
