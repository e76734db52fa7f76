"""Exceptions raised by SolveRelay."""

from __future__ import annotations


class ValidationError(ValueError):
    """A parsed object does not satisfy its field contract."""

    def __init__(self, field: str, expected: str, message: str | None = None) -> None:
        self.field = field
        self.expected = expected
        super().__init__(message or f"field {field!r}: expected {expected}")


class UpstreamCallFailure(RuntimeError):
    """The external model call itself failed (network, auth, quota)."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    UPSTREAM = "upstream"

    def __init__(self, kind: str, message: str) -> None:
        self.kind = kind
        super().__init__(message)
