"""Helpers for turning a predecessor map into an ordered route."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hwypath.errors import DisconnectedError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from hwypath.geo import Coordinate
    from hwypath.graph.model import Edge, HighwayGraph


@dataclass(frozen=True, slots=True)
class Hop:
    """One traversed edge and the distance travelled once it is done."""

    edge: Edge
    total: float


@dataclass(frozen=True, slots=True)
class Route:
    """Ordered hops from `source` to `destination`."""

    source: str
    destination: str
    hops: tuple[Hop, ...]

    @property
    def total(self) -> float:
        return self.hops[-1].total if self.hops else 0.0

    def labels(self, graph: HighwayGraph) -> list[str]:
        """Return the vertex labels visited, source first."""
        return [self.source, *(graph.vertices[hop.edge.dest].label for hop in self.hops)]


def reconstruct_route(
    graph: HighwayGraph,
    predecessors: Mapping[str, Edge | None],
    source: str,
    destination: str,
) -> Route:
    """Walk the predecessor edges back from `destination` to `source`."""
    reversed_edges: list[Edge] = []
    current = destination

    while current != source:
        if len(reversed_edges) > len(graph.vertices):
            msg = f"Predecessor chain from {destination} to {source} contains a cycle"
            raise DisconnectedError(msg)
        edge = predecessors.get(current)
        if edge is None:
            msg = f"No predecessor recorded for {current} on the way back to {source}"
            raise DisconnectedError(msg)
        reversed_edges.append(edge)
        current = graph.vertices[edge.source].label

    hops: list[Hop] = []
    total = 0.0
    for edge in reversed(reversed_edges):
        total += edge.length
        hops.append(Hop(edge, total))
    return Route(source=source, destination=destination, hops=tuple(hops))


def route_coordinates(graph: HighwayGraph, route: Route) -> list[Coordinate]:
    """Expand a route into vertex and shape-point coordinates in travel order."""
    start = graph.require_vertex(route.source)
    stitched: list[Coordinate] = [start.point]
    for hop in route.hops:
        stitched.extend(hop.edge.shape_points)
        stitched.append(graph.vertices[hop.edge.dest].point)
    return stitched
