"""Command-line entrypoints for planning routes and inspecting graphs."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

from hwypath.errors import HwyPathError
from hwypath.graph.load import load_graph
from hwypath.logger import LoggingMode
from hwypath.plan import plan
from hwypath.route.report import format_directions, write_geojson, write_pth

def echo(message: str = "", *, stream: TextIO | None = None) -> None:
    """Write a line to the chosen stream and flush immediately."""
    stream = stream if stream is not None else sys.stdout
    stream.write(f"{message}\n")
    stream.flush()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="hwypath",
        description=(
            "Find the shortest driving route between two waypoints of a TMG "
            "graph and print detailed directions."
        ),
    )
    parser.add_argument("graph", type=Path, help="TMG graph file to load.")
    parser.add_argument("start", help="Label of the starting waypoint.")
    parser.add_argument("destination", help="Label of the destination waypoint.")
    parser.add_argument(
        "pth",
        nargs="?",
        type=Path,
        help="Optional .pth file to write the route to for map display.",
    )
    parser.add_argument(
        "--geojson",
        type=Path,
        help="Optional GeoJSON file to write the route to.",
    )
    parser.add_argument(
        "--logging-mode",
        default=LoggingMode.NONE.value,
        choices=[mode.value for mode in LoggingMode],
        help="Verbosity of pipeline progress written to stderr.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for `hwypath`."""
    args = parse_args(argv)
    logging.basicConfig(
        level=LoggingMode.from_value(args.logging_mode).level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = plan(args.graph, args.start, args.destination, args.logging_mode)
        for line in format_directions(result.graph, result.route):
            echo(line)
        if args.pth is not None:
            write_pth(result.graph, result.route, args.pth)
        if args.geojson is not None:
            write_geojson(result.graph, result.route, args.geojson)
    except (HwyPathError, FileNotFoundError) as exc:
        echo(str(exc), stream=sys.stderr)
        return 1

    return 0


def describe_main(argv: Sequence[str] | None = None) -> int:
    """Entry point for `hwypath-graph`: print a TMG graph's contents."""
    parser = argparse.ArgumentParser(
        prog="hwypath-graph",
        description="Load a TMG graph and print its vertices and edges.",
    )
    parser.add_argument("graph", type=Path, help="TMG graph file to load.")
    args = parser.parse_args(argv)

    try:
        graph = load_graph(args.graph)
    except HwyPathError as exc:
        echo(str(exc), stream=sys.stderr)
        return 1

    sys.stdout.write(graph.describe())
    return 0


if __name__ == "__main__":
    sys.exit(main())
