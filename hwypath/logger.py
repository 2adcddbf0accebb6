"""Tab-separated progress tracing for graph loading, search and route output.

Each line reads `[LEVEL]<TAB>event<TAB>key=value...`. Lines go to stderr so
the driving directions on stdout stay machine-readable.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import TYPE_CHECKING, Any, Iterator, TextIO

if TYPE_CHECKING:
    from hwypath.graph.model import HighwayGraph


class LoggingMode(str, Enum):
    """Trace verbosity; `debug` adds every frontier push and pop."""

    NONE = "none"
    INFO = "info"
    DEBUG = "debug"

    @classmethod
    def from_value(cls, value: LoggingMode | str | None) -> LoggingMode:
        """Normalize CLI or API input into a `LoggingMode`."""
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        try:
            return cls(value.lower())
        except ValueError as exc:
            valid = ", ".join(mode.value for mode in cls)
            msg = f"Invalid logging mode: {value!r}. Expected one of {{{valid}}}."
            raise ValueError(msg) from exc

    @property
    def level(self) -> int:
        """Matching threshold for the stdlib loggers of the library modules."""
        return {
            LoggingMode.NONE: logging.WARNING,
            LoggingMode.INFO: logging.INFO,
            LoggingMode.DEBUG: logging.DEBUG,
        }[self]


def format_event(level: str, event: str, context: dict[str, Any]) -> str:
    """Render one trace line, dropping context values that are None."""
    fields = [f"[{level}]", event]
    fields.extend(f"{key}={value}" for key, value in context.items() if value is not None)
    return "\t".join(fields)


@dataclass(slots=True)
class Logger:
    """Trace sink shared by the planning pipeline and the search engine."""

    mode: LoggingMode = LoggingMode.NONE
    stream: TextIO | None = None

    @property
    def is_info_enabled(self) -> bool:  # noqa: D102
        return self.mode is not LoggingMode.NONE

    @property
    def is_debug_enabled(self) -> bool:  # noqa: D102
        return self.mode is LoggingMode.DEBUG

    def info(self, event: str, **context: Any) -> None:  # noqa: ANN401, D102
        if self.is_info_enabled:
            self._write(format_event("INFO", event, context))

    def debug(self, event: str, **context: Any) -> None:  # noqa: ANN401, D102
        if self.is_debug_enabled:
            self._write(format_event("DEBUG", event, context))

    def graph_stats(self, graph: HighwayGraph, name: str | None = None) -> None:
        """Report vertex and road counts of a freshly loaded graph."""
        self.info(
            "graph.stats",
            vertices=len(graph.vertices),
            edges=graph.edge_count,
            name=name or None,
        )

    @contextmanager
    def phase(self, name: str, **details: Any) -> Iterator[None]:  # noqa: ANN401
        """Bracket a pipeline step with `.start` and `.complete` or `.failed`."""
        if not self.is_info_enabled:
            yield
            return

        self.info(f"{name}.start", **details)
        started = perf_counter()
        try:
            yield
        except Exception as exc:
            self.info(f"{name}.failed", error=str(exc))
            raise
        self.info(f"{name}.complete", **details)
        self.debug(f"{name}.elapsed", seconds=f"{perf_counter() - started:.3f}")

    def _write(self, line: str) -> None:
        # Resolved per call so redirected stderr (tests, daemons) is honoured.
        print(line, file=self.stream if self.stream is not None else sys.stderr)
