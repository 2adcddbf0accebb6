"""Dijkstra's shortest-path search between two labelled vertices."""

from __future__ import annotations

from dataclasses import dataclass, field
from heapq import heappop, heappush
from itertools import count
from typing import TYPE_CHECKING

from hwypath.errors import UnreachableError
from hwypath.logger import Logger

if TYPE_CHECKING:
    from hwypath.graph.model import Edge, HighwayGraph

# (cumulative distance, insertion order, last edge)
FrontierEntry = tuple[float, int, "Edge"]


@dataclass(slots=True)
class SearchResult:
    """Container for a completed search.

    `predecessors` maps each accepted vertex label to the edge that reached
    it (None for the source). `distances` holds the same labels, in the order
    they were accepted, with their shortest distance from the source.
    """

    source: str
    destination: str
    predecessors: dict[str, Edge | None] = field(default_factory=dict)
    distances: dict[str, float] = field(default_factory=dict)

    @property
    def distance(self) -> float:
        """Shortest distance from source to destination."""
        return self.distances[self.destination]


def shortest_path_tree(
    graph: HighwayGraph,
    source: str,
    destination: str,
    logger: Logger = Logger(),  # noqa: B008
) -> SearchResult:
    """Run Dijkstra's algorithm from `source` until `destination` is accepted.

    Parameters
    ----------
    graph:
        Graph to search. It is not modified; visited flags live in a list
        owned by this call.
    source:
        Label of the starting vertex.
    destination:
        Label of the vertex to stop at.
    logger:
        Logger receiving frontier traces at debug level.

    Returns
    -------
    SearchResult
        Predecessor edges and distances for every vertex accepted before the
        search stopped.

    Raises
    ------
    VertexLookupError
        Either label is not in the graph. Raised before any search work.
    UnreachableError
        The frontier emptied without reaching `destination`.

    """
    start = graph.require_vertex(source)
    target = graph.require_vertex(destination)

    result = SearchResult(source=start.label, destination=target.label)
    result.predecessors[start.label] = None
    result.distances[start.label] = 0.0
    if start.index == target.index:
        return result

    visited = graph.fresh_visited()
    visited[start.index] = True

    # Stale entries for already-visited vertices stay in the heap and are
    # skipped when popped; there is no decrease-key.
    frontier: list[FrontierEntry] = []
    tiebreak = count()
    for edge in graph.incident(start.index):
        _push(graph, frontier, tiebreak, edge.length, edge, logger)

    while True:
        entry = _pop_unvisited(graph, frontier, visited, logger)
        if entry is None:
            logger.info("search.unreachable", source=source, destination=destination)
            raise UnreachableError(source, destination)

        distance, _, edge = entry
        reached = graph.vertices[edge.dest]
        result.predecessors[reached.label] = edge
        result.distances[reached.label] = distance
        visited[reached.index] = True
        logger.debug("search.accept", vertex=reached.label, total=f"{distance:.2f}")

        if reached.index == target.index:
            logger.info(
                "search.complete",
                accepted=len(result.distances),
                distance=f"{distance:.2f}",
            )
            return result

        for out_edge in graph.incident(reached.index):
            if visited[out_edge.dest]:
                logger.debug(
                    "search.skip_visited",
                    vertex=graph.vertices[out_edge.dest].label,
                )
                continue
            _push(graph, frontier, tiebreak, distance + out_edge.length, out_edge, logger)


def _push(
    graph: HighwayGraph,
    frontier: list[FrontierEntry],
    tiebreak: count,
    distance: float,
    edge: Edge,
    logger: Logger,
) -> None:
    logger.debug(
        "frontier.push",
        total=distance,
        to=graph.vertices[edge.dest].label,
        via=edge.label,
    )
    heappush(frontier, (distance, next(tiebreak), edge))


def _pop_unvisited(
    graph: HighwayGraph,
    frontier: list[FrontierEntry],
    visited: list[bool],
    logger: Logger,
) -> FrontierEntry | None:
    """Pop entries until one leads to an unvisited vertex."""
    while frontier:
        entry = heappop(frontier)
        dest = entry[2].dest
        logger.debug(
            "frontier.pop",
            total=entry[0],
            to=graph.vertices[dest].label,
            visited=visited[dest],
        )
        if not visited[dest]:
            return entry
    return None
