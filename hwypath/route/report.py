"""Text, route-file and GeoJSON renderings of a planned route."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import orjson
from shapely.geometry import LineString, Point, mapping

from hwypath.errors import GraphFormatError, GraphIOError
from hwypath.geo import Coordinate
from hwypath.route.stitch import route_coordinates

if TYPE_CHECKING:
    from collections.abc import Iterable

    from hwypath.graph.model import HighwayGraph
    from hwypath.route.stitch import Route

# region Types & Configuration

LOGGER = logging.getLogger(__name__)
DIRECTIONS_HEADER = "Detailed directions:"
START_KEYWORD = "START"
MIN_LINESTRING_COORDS = 2
_COORDINATE_RE = re.compile(r"^\(([^,()]+),([^,()]+)\)$")


@dataclass(frozen=True, slots=True)
class PthHop:
    """One line of a route file: the road taken and where it ends."""

    road: str
    shape_points: tuple[Coordinate, ...]
    label: str
    point: Coordinate


@dataclass(frozen=True, slots=True)
class PthRoute:
    """Parsed contents of a route file."""

    start_label: str
    start_point: Coordinate
    hops: tuple[PthHop, ...]

    def labels(self) -> list[str]:
        return [self.start_label, *(hop.label for hop in self.hops)]

    def coordinates(self) -> list[Coordinate]:
        """Return every coordinate in travel order, shape points included."""
        coords = [self.start_point]
        for hop in self.hops:
            coords.extend(hop.shape_points)
            coords.append(hop.point)
        return coords


# endregion Types & Configuration


# region Directions


def format_directions(graph: HighwayGraph, route: Route) -> list[str]:
    """Return the header and one `Travel from ...` line per hop."""
    lines = [DIRECTIONS_HEADER]
    for hop in route.hops:
        edge = hop.edge
        lines.append(
            f"Travel from {graph.vertices[edge.source].label} "
            f"to {graph.vertices[edge.dest].label} "
            f"for {edge.length:.2f} along {edge.label}, total {hop.total:.2f}",
        )
    return lines


# endregion Directions


# region Route files


def render_pth(graph: HighwayGraph, route: Route) -> list[str]:
    """Return the lines of the route file for `route`."""
    start = graph.require_vertex(route.source)
    lines = [f"{START_KEYWORD} {start.label} {start.point}"]
    for hop in route.hops:
        dest = graph.vertices[hop.edge.dest]
        parts = [hop.edge.label]
        parts.extend(str(point) for point in hop.edge.shape_points)
        parts.extend([dest.label, str(dest.point)])
        lines.append(" ".join(parts))
    return lines


def write_pth(graph: HighwayGraph, route: Route, path: str | Path) -> None:
    """Write the route file for `route` to `path`."""
    path = Path(path)
    lines = render_pth(graph, route)
    try:
        with path.open("w", encoding="utf-8") as handle:
            handle.writelines(f"{line}\n" for line in lines)
    except OSError as exc:
        msg = f"Unable to write route file {path}: {exc.strerror or exc}"
        raise GraphIOError(msg) from exc
    LOGGER.info("Wrote %s route lines to %s", len(lines), path)


def read_pth(path: str | Path) -> PthRoute:
    """Read a route file written by `write_pth`."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as handle:
            return parse_pth(handle)
    except OSError as exc:
        msg = f"Unable to read route file {path}: {exc.strerror or exc}"
        raise GraphIOError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"Route file {path} is not valid UTF-8 text"
        raise GraphFormatError(msg) from exc


def parse_pth(lines: Iterable[str]) -> PthRoute:
    """Parse route file lines into labels and coordinates."""
    numbered = (
        (line_number, line.split())
        for line_number, line in enumerate(lines, start=1)
    )
    records = [(number, tokens) for number, tokens in numbered if tokens]
    if not records:
        msg = "Route file is empty"
        raise GraphFormatError(msg, 1)

    line_number, tokens = records[0]
    if len(tokens) != 3 or tokens[0] != START_KEYWORD:  # noqa: PLR2004
        msg = f"Expected 'START <label> <coordinate>', got {' '.join(tokens)!r}"
        raise GraphFormatError(msg, line_number)
    start_label = tokens[1]
    start_point = _parse_coordinate(tokens[2], line_number)

    hops: list[PthHop] = []
    for line_number, tokens in records[1:]:
        if len(tokens) < 3:  # noqa: PLR2004
            msg = f"Expected '<road> [points...] <label> <coordinate>', got {' '.join(tokens)!r}"
            raise GraphFormatError(msg, line_number)
        hops.append(
            PthHop(
                road=tokens[0],
                shape_points=tuple(
                    _parse_coordinate(token, line_number) for token in tokens[1:-2]
                ),
                label=tokens[-2],
                point=_parse_coordinate(tokens[-1], line_number),
            ),
        )
    return PthRoute(start_label, start_point, tuple(hops))


def _parse_coordinate(token: str, line_number: int) -> Coordinate:
    match = _COORDINATE_RE.match(token)
    if match is None:
        msg = f"Invalid coordinate {token!r}"
        raise GraphFormatError(msg, line_number)
    try:
        return Coordinate(float(match.group(1)), float(match.group(2)))
    except ValueError as exc:
        msg = f"Invalid coordinate {token!r}"
        raise GraphFormatError(msg, line_number) from exc


# endregion Route files


# region GeoJSON


def route_geojson(graph: HighwayGraph, route: Route) -> dict:
    """Create a GeoJSON feature collection describing the route."""
    start = graph.require_vertex(route.source)
    dest = graph.require_vertex(route.destination)
    features = [
        {
            "type": "Feature",
            "properties": {"role": "start", "label": start.label},
            "geometry": mapping(Point(start.point.lonlat())),
        },
        {
            "type": "Feature",
            "properties": {"role": "destination", "label": dest.label},
            "geometry": mapping(Point(dest.point.lonlat())),
        },
    ]

    coords = [point.lonlat() for point in route_coordinates(graph, route)]
    # A zero-hop route has no line to draw.
    if len(coords) >= MIN_LINESTRING_COORDS:
        features.append(
            {
                "type": "Feature",
                "properties": {
                    "role": "path",
                    "roads": [hop.edge.label for hop in route.hops],
                    "length_miles": route.total,
                },
                "geometry": mapping(LineString(coords)),
            },
        )

    return {"type": "FeatureCollection", "features": features}


def write_geojson(graph: HighwayGraph, route: Route, path: str | Path) -> None:
    """Persist the route GeoJSON to `path`."""
    path = Path(path)
    data = orjson.dumps(route_geojson(graph, route), option=orjson.OPT_INDENT_2)
    try:
        path.write_bytes(data)
    except OSError as exc:
        msg = f"Unable to write GeoJSON file {path}: {exc.strerror or exc}"
        raise GraphIOError(msg) from exc
    LOGGER.info("Serialized route to %s (%d bytes)", path, len(data))


# endregion GeoJSON
