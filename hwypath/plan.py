"""High-level entrypoint for routing that wires graph setup and Dijkstra."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .logger import Logger, LoggingMode
from .route.stitch import Route, reconstruct_route
from .search.dijkstra import SearchResult, shortest_path_tree
from .setup import setup_graph

if TYPE_CHECKING:
    from pathlib import Path

    from .graph.model import HighwayGraph


@dataclass(slots=True)
class RoutePlan:
    """Graph, search outcome and ordered route for one request."""

    graph: HighwayGraph
    search: SearchResult
    route: Route


def plan(
    graph_path: str | Path | None,
    start: str,
    destination: str,
    logging_mode: LoggingMode | str = LoggingMode.NONE,
) -> RoutePlan:
    """Load a graph and plan the shortest route between two labels.

    Parameters
    ----------
    graph_path:
        TMG file to load; `None` falls back to the configured default.
    start:
        Label of the starting waypoint.
    destination:
        Label of the destination waypoint.
    logging_mode:
        Controls log verbosity for the planning pipeline. Accepts
        `LoggingMode` values or their lowercase string names.

    """
    logger = Logger(LoggingMode.from_value(logging_mode))

    with logger.phase("graph.setup"):
        graph = setup_graph(graph_path)
    logger.graph_stats(graph, name=str(graph_path) if graph_path else None)

    return plan_on(graph, start, destination, logger)


def plan_on(
    graph: HighwayGraph,
    start: str,
    destination: str,
    logger: Logger = Logger(),  # noqa: B008
) -> RoutePlan:
    """Plan a route on an already loaded graph."""
    with logger.phase("search.run", start=start, destination=destination):
        search = shortest_path_tree(graph, start, destination, logger=logger)

    with logger.phase("route.reconstruct"):
        route = reconstruct_route(graph, search.predecessors, start, destination)

    logger.info("route.ready", hops=len(route.hops), total=f"{route.total:.2f}")
    return RoutePlan(graph=graph, search=search, route=route)
