"""Errors raised while publishing index generations."""

from __future__ import annotations


class ClusterError(RuntimeError):
    """Raised when the search cluster cannot complete an operation."""


class ClusterNotAcknowledgedError(ClusterError):
    """Raised when the cluster does not acknowledge an admin or write operation."""

    def __init__(self, operation: str, target: str, detail: str | None = None) -> None:
        self.operation = operation
        self.target = target
        self.detail = detail
        message = f"Cluster did not acknowledge {operation} of '{target}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class IndexVerificationError(ClusterError):
    """Raised when a freshly built generation does not hold every written document."""

    def __init__(self, index: str, *, expected: int, actual: int) -> None:
        self.index = index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Index '{index}' holds {actual} documents after loading, expected {expected}"
        )


class ConcurrentPublishError(RuntimeError):
    """Raised when a publish is attempted for an alias that is already being published."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(f"A publish for alias '{alias}' is already in progress")
