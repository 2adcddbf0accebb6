from __future__ import annotations

from pathlib import Path

import orjson
import pytest

from hwypath.errors import DisconnectedError, GraphFormatError, GraphIOError
from hwypath.geo import Coordinate
from hwypath.graph.model import HighwayGraph
from hwypath.route.report import (
    format_directions,
    parse_pth,
    read_pth,
    render_pth,
    route_geojson,
    write_geojson,
    write_pth,
)
from hwypath.route.stitch import reconstruct_route, route_coordinates
from hwypath.search.dijkstra import shortest_path_tree


def _route(graph: HighwayGraph, source: str, destination: str):
    result = shortest_path_tree(graph, source, destination)
    return reconstruct_route(graph, result.predecessors, source, destination)


def test_reconstruct_orders_hops_from_source(line_graph: HighwayGraph) -> None:
    route = _route(line_graph, "A", "C")

    assert [hop.edge.label for hop in route.hops] == ["R1", "R2"]
    assert route.labels(line_graph) == ["A", "B", "C"]
    assert [round(hop.total, 6) for hop in route.hops] == [10.0, 15.0]
    assert route.total == pytest.approx(15.0, abs=1e-6)


def test_reconstruct_zero_hop_route(line_graph: HighwayGraph) -> None:
    route = _route(line_graph, "A", "A")
    assert route.hops == ()
    assert route.total == 0.0
    assert route_coordinates(line_graph, route) == [line_graph.vertices[0].point]


def test_reconstruct_missing_predecessor(line_graph: HighwayGraph) -> None:
    result = shortest_path_tree(line_graph, "A", "C")
    del result.predecessors["B"]

    with pytest.raises(DisconnectedError, match="No predecessor recorded for B"):
        reconstruct_route(line_graph, result.predecessors, "A", "C")


def test_reconstruct_detects_cycles(line_graph: HighwayGraph) -> None:
    ab = next(e for e in line_graph.incident(0) if e.label == "R1")
    ba = next(e for e in line_graph.incident(1) if e.label == "R1")
    predecessors = {"A": ba, "B": ab}

    with pytest.raises(DisconnectedError, match="cycle"):
        reconstruct_route(line_graph, predecessors, "C", "B")


def test_format_directions(line_graph: HighwayGraph) -> None:
    lines = format_directions(line_graph, _route(line_graph, "A", "C"))
    assert lines == [
        "Detailed directions:",
        "Travel from A to B for 10.00 along R1, total 10.00",
        "Travel from B to C for 5.00 along R2, total 15.00",
    ]


def test_format_directions_on_shortcut(shortcut_graph: HighwayGraph) -> None:
    lines = format_directions(shortcut_graph, _route(shortcut_graph, "A", "C"))
    assert lines[1:] == ["Travel from A to C for 8.00 along Direct, total 8.00"]


def test_render_pth_includes_shape_points(sample_graph: HighwayGraph) -> None:
    route = _route(sample_graph, "NY9@Main", "NY9@Elm")
    lines = render_pth(sample_graph, route)

    assert lines == [
        "START NY9@Main (42.75,-73.78)",
        "NY9 (42.755,-73.776) NY9@Elm (42.76,-73.77)",
    ]


def test_pth_round_trip(sample_graph: HighwayGraph, tmp_path: Path) -> None:
    route = _route(sample_graph, "NY9@Main", "US4@Rd")
    path = tmp_path / "route.pth"

    write_pth(sample_graph, route, path)
    parsed = read_pth(path)

    assert parsed.labels() == route.labels(sample_graph)
    assert [hop.road for hop in parsed.hops] == [hop.edge.label for hop in route.hops]
    expected = route_coordinates(sample_graph, route)
    assert len(parsed.coordinates()) == len(expected)
    for got, want in zip(parsed.coordinates(), expected):
        assert (got.lat, got.lng) == (want.lat, want.lng)


@pytest.mark.parametrize(
    ("lines", "line_number"),
    [
        ([], 1),
        (["BEGIN A (1.0,2.0)"], 1),
        (["START A (1.0,2.0)", "R1 B"], 2),
        (["START A (1.0,2.0)", "R1 B (1.0;2.0)"], 2),
        (["START A (1.0,2.0)", "R1 (x,1) B (1.0,2.0)"], 2),
    ],
)
def test_parse_pth_rejects_malformed_lines(lines: list[str], line_number: int) -> None:
    with pytest.raises(GraphFormatError) as excinfo:
        parse_pth(lines)
    assert excinfo.value.line_number == line_number


def test_parse_pth_reads_shape_points() -> None:
    parsed = parse_pth(["START A (1.0,2.0)", "R1 (1.5,2.5) (1.7,2.7) B (2.0,3.0)", ""])
    (hop,) = parsed.hops
    assert hop.shape_points == (Coordinate(1.5, 2.5), Coordinate(1.7, 2.7))
    assert hop.label == "B"
    assert parsed.start_point == Coordinate(1.0, 2.0)


def test_write_pth_to_missing_directory(line_graph: HighwayGraph, tmp_path: Path) -> None:
    with pytest.raises(GraphIOError):
        write_pth(line_graph, _route(line_graph, "A", "C"), tmp_path / "no" / "route.pth")


def test_route_geojson(sample_graph: HighwayGraph, tmp_path: Path) -> None:
    route = _route(sample_graph, "NY9@Main", "NY9@Elm")
    document = route_geojson(sample_graph, route)

    roles = [feature["properties"]["role"] for feature in document["features"]]
    assert roles == ["start", "destination", "path"]
    path_feature = document["features"][2]
    assert path_feature["geometry"]["type"] == "LineString"
    assert [list(c) for c in path_feature["geometry"]["coordinates"]] == [
        [-73.78, 42.75],
        [-73.776, 42.755],
        [-73.77, 42.76],
    ]

    out = tmp_path / "route.geojson"
    write_geojson(sample_graph, route, out)
    assert orjson.loads(out.read_bytes())["type"] == "FeatureCollection"


def test_route_geojson_without_hops(line_graph: HighwayGraph) -> None:
    document = route_geojson(line_graph, _route(line_graph, "B", "B"))
    assert [f["properties"]["role"] for f in document["features"]] == ["start", "destination"]


def test_read_pth_rejects_binary(tmp_path: Path) -> None:
    path = tmp_path / "route.pth"
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(GraphFormatError, match="UTF-8"):
        read_pth(path)


def test_read_pth_missing_file(tmp_path: Path) -> None:
    with pytest.raises(GraphIOError, match="Unable to read route file"):
        read_pth(tmp_path / "absent.pth")
