"""TMG graph file reader."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

from hwypath.errors import GraphFormatError, GraphIOError
from hwypath.geo import Coordinate
from hwypath.graph.model import HighwayGraph

if TYPE_CHECKING:
    from collections.abc import Iterable

# region Types & Configuration

LOGGER = logging.getLogger(__name__)
# Tokens on a vertex line: label, latitude, longitude.
VERTEX_FIELDS = 3
# Leading tokens on an edge line: source index, dest index, road label.
EDGE_FIELDS = 3

Record = tuple[int, list[str]]

# endregion Types & Configuration


# region API


def load_graph(path: str | Path) -> HighwayGraph:
    """Read the TMG file at `path` and return the populated graph."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as handle:
            graph = parse_tmg(handle)
    except OSError as exc:
        msg = f"Unable to read graph file {path}: {exc.strerror or exc}"
        raise GraphIOError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"Graph file {path} is not valid UTF-8 text"
        raise GraphFormatError(msg) from exc

    LOGGER.info(
        "Loaded %s with %s vertices / %s edges",
        path,
        len(graph.vertices),
        graph.edge_count,
    )
    return graph


def parse_tmg(lines: Iterable[str]) -> HighwayGraph:
    """Build a graph from the lines of a TMG document.

    The first physical line is a format header and is discarded unread. It is
    followed by a `numVertices numEdges` line, the vertex records
    (`label lat lng`) and the edge records (`src dest label [lat lng]...`).
    """
    raw_lines = iter(lines)
    header = next(raw_lines, None)
    if header is None:
        msg = "Missing header line"
        raise GraphFormatError(msg, 1)
    LOGGER.debug("TMG header: %s", header.strip())
    records = _records(raw_lines, start=2)

    num_vertices, num_edges = _parse_counts(records)
    graph = HighwayGraph()

    for ordinal in range(num_vertices):
        line_number, tokens = _next_record(records, "vertex", ordinal, num_vertices)
        _parse_vertex(graph, line_number, tokens)

    for ordinal in range(num_edges):
        line_number, tokens = _next_record(records, "edge", ordinal, num_edges)
        _parse_edge(graph, line_number, tokens)

    extra = next(records, None)
    if extra is not None:
        msg = (
            f"Unexpected record after {num_vertices} vertices and "
            f"{num_edges} edges"
        )
        raise GraphFormatError(msg, extra[0])

    return graph


# endregion API


# region Record parsing


def _records(lines: Iterable[str], start: int = 1) -> Iterator[Record]:
    """Yield `(line_number, tokens)` for every non-blank line."""
    for line_number, line in enumerate(lines, start=start):
        tokens = line.split()
        if tokens:
            yield line_number, tokens


def _next_record(
    records: Iterator[Record],
    kind: str,
    ordinal: int,
    expected: int,
) -> Record:
    record = next(records, None)
    if record is None:
        msg = f"Expected {expected} {kind} records, found only {ordinal}"
        raise GraphFormatError(msg)
    return record


def _parse_counts(records: Iterator[Record]) -> tuple[int, int]:
    record = next(records, None)
    if record is None:
        msg = "Missing vertex and edge counts"
        raise GraphFormatError(msg)
    line_number, tokens = record
    if len(tokens) != 2:  # noqa: PLR2004
        msg = f"Expected '<numVertices> <numEdges>', got {' '.join(tokens)!r}"
        raise GraphFormatError(msg, line_number)

    num_vertices = _parse_int(tokens[0], "vertex count", line_number)
    num_edges = _parse_int(tokens[1], "edge count", line_number)
    if num_vertices < 0 or num_edges < 0:
        msg = f"Counts must be non-negative, got {num_vertices} {num_edges}"
        raise GraphFormatError(msg, line_number)
    return num_vertices, num_edges


def _parse_vertex(graph: HighwayGraph, line_number: int, tokens: list[str]) -> None:
    if len(tokens) != VERTEX_FIELDS:
        msg = f"Vertex record needs 'label lat lng', got {' '.join(tokens)!r}"
        raise GraphFormatError(msg, line_number)

    label = tokens[0]
    lat = _parse_float(tokens[1], "latitude", line_number)
    lng = _parse_float(tokens[2], "longitude", line_number)
    if graph.vertex_by_label(label) is not None:
        msg = f"Duplicate vertex label {label}"
        raise GraphFormatError(msg, line_number)
    graph.add_vertex(label, lat, lng)


def _parse_edge(graph: HighwayGraph, line_number: int, tokens: list[str]) -> None:
    if len(tokens) < EDGE_FIELDS:
        msg = f"Edge record needs 'src dest label', got {' '.join(tokens)!r}"
        raise GraphFormatError(msg, line_number)

    source = _parse_index(graph, tokens[0], line_number)
    dest = _parse_index(graph, tokens[1], line_number)
    label = tokens[2]
    shape_tokens = tokens[EDGE_FIELDS:]
    if len(shape_tokens) % 2:
        msg = f"Shape points for edge {label} must be lat/lng pairs"
        raise GraphFormatError(msg, line_number)

    shape_points = [
        Coordinate(
            _parse_float(shape_tokens[i], "shape point latitude", line_number),
            _parse_float(shape_tokens[i + 1], "shape point longitude", line_number),
        )
        for i in range(0, len(shape_tokens), 2)
    ]
    graph.add_road(source, dest, label, shape_points)


def _parse_index(graph: HighwayGraph, token: str, line_number: int) -> int:
    index = _parse_int(token, "vertex index", line_number)
    if not 0 <= index < len(graph.vertices):
        msg = f"Vertex index {index} out of range 0..{len(graph.vertices) - 1}"
        raise GraphFormatError(msg, line_number)
    return index


def _parse_int(token: str, what: str, line_number: int) -> int:
    try:
        return int(token)
    except ValueError as exc:
        msg = f"Invalid {what}: {token!r}"
        raise GraphFormatError(msg, line_number) from exc


def _parse_float(token: str, what: str, line_number: int) -> float:
    try:
        return float(token)
    except ValueError as exc:
        msg = f"Invalid {what}: {token!r}"
        raise GraphFormatError(msg, line_number) from exc


# endregion Record parsing
