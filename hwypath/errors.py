"""Exception types raised while loading graphs and planning routes."""

from __future__ import annotations


class HwyPathError(Exception):
    """Base class for all routing failures."""


class GraphIOError(HwyPathError, OSError):
    """A graph or route file could not be read or written."""


class GraphFormatError(HwyPathError, ValueError):
    """Structurally invalid graph or route file contents."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class VertexLookupError(HwyPathError, LookupError):
    """No vertex carries the requested label."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"No vertex found with label {label}")


class UnreachableError(HwyPathError, RuntimeError):
    """The search frontier ran dry before the destination was reached."""

    def __init__(self, source: str, destination: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"No route found from {source!r} to {destination!r}")


class DisconnectedError(HwyPathError, RuntimeError):
    """The predecessor chain does not lead back to the source."""
