"""In-memory highway graph: labelled vertices and shape-annotated edges."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import pairwise
from typing import TYPE_CHECKING, Iterator, Sequence

import networkx as nx

from hwypath.errors import VertexLookupError
from hwypath.geo import Coordinate

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True, eq=False)
class Vertex:
    """Waypoint of the graph, addressed by its dense index.

    Vertices compare and hash by identity; the graph owns exactly one per label.
    """

    index: int
    label: str
    point: Coordinate


@dataclass(frozen=True, slots=True, eq=False)
class Edge:
    """One direction of a road segment.

    `length` is measured along source -> shape points -> dest and is fixed
    when the edge is built.
    """

    label: str
    source: int
    dest: int
    shape_points: tuple[Coordinate, ...]
    length: float

    @classmethod
    def between(
        cls,
        label: str,
        source: Vertex,
        dest: Vertex,
        shape_points: Iterable[Coordinate] = (),
    ) -> Edge:
        """Build the edge from `source` to `dest` and measure its length."""
        points = tuple(shape_points)
        return cls(
            label=label,
            source=source.index,
            dest=dest.index,
            shape_points=points,
            length=polyline_length([source.point, *points, dest.point]),
        )


def polyline_length(points: Sequence[Coordinate]) -> float:
    """Sum the great-circle distances between consecutive points."""
    return sum((a.distance_to(b) for a, b in pairwise(points)), 0.0)


@dataclass(slots=True)
class HighwayGraph:
    """Undirected road graph stored as per-vertex lists of directed edges.

    `adjacency[i]` holds the edges leaving vertex `i`, most recently added
    road first. Every road contributes one edge to each endpoint's list.
    """

    vertices: list[Vertex] = field(default_factory=list)
    adjacency: list[list[Edge]] = field(default_factory=list)
    edge_count: int = 0
    _by_label: dict[str, int] = field(default_factory=dict, repr=False)

    def add_vertex(self, label: str, lat: float, lng: float) -> Vertex:
        """Append a vertex and return it; labels must be unique."""
        if label in self._by_label:
            msg = f"Duplicate vertex label: {label}"
            raise ValueError(msg)
        vertex = Vertex(len(self.vertices), label, Coordinate(lat, lng))
        self.vertices.append(vertex)
        self.adjacency.append([])
        self._by_label[label] = vertex.index
        return vertex

    def add_road(
        self,
        source: int,
        dest: int,
        label: str,
        shape_points: Sequence[Coordinate] = (),
    ) -> tuple[Edge, Edge]:
        """Add both directions of a road between two vertex indices."""
        for index in (source, dest):
            if not 0 <= index < len(self.vertices):
                msg = f"Vertex index {index} out of range 0..{len(self.vertices) - 1}"
                raise IndexError(msg)

        start = self.vertices[source]
        end = self.vertices[dest]
        forward = Edge.between(label, start, end, shape_points)
        backward = Edge.between(label, end, start, reversed(shape_points))

        self.adjacency[source].insert(0, forward)
        self.adjacency[dest].insert(0, backward)
        self.edge_count += 1
        return forward, backward

    def vertex_by_label(self, label: str) -> Vertex | None:
        """Return the vertex named `label`, or None when absent."""
        index = self._by_label.get(label)
        return None if index is None else self.vertices[index]

    def require_vertex(self, label: str) -> Vertex:
        """Return the vertex named `label` or raise `VertexLookupError`."""
        vertex = self.vertex_by_label(label)
        if vertex is None:
            raise VertexLookupError(label)
        return vertex

    def incident(self, index: int) -> list[Edge]:
        """Return the edges leaving vertex `index`."""
        return self.adjacency[index]

    def edges(self) -> Iterator[Edge]:
        """Yield every directed edge; twins are yielded separately."""
        for edges in self.adjacency:
            yield from edges

    def fresh_visited(self) -> list[bool]:
        """Return an all-unvisited flag list for one search run."""
        return [False] * len(self.vertices)

    def describe(self) -> str:
        """Render the vertices and their incident edges as text."""
        lines = [f"|V|={len(self.vertices)}, |E|={self.edge_count}"]
        for vertex in self.vertices:
            lines.append(f"{vertex.label} {vertex.point}")
            for edge in self.adjacency[vertex.index]:
                other = self.vertices[edge.dest]
                line = f"  to {other.label} {other.point} on {edge.label}"
                if edge.shape_points:
                    line += " via " + " ".join(str(p) for p in edge.shape_points)
                line += f" length {_trim(edge.length)}"
                lines.append(line)
        return "\n".join(lines) + "\n"

    def to_networkx(self) -> nx.MultiDiGraph:
        """Export as a NetworkX multigraph keyed by vertex label."""
        graph = nx.MultiDiGraph()
        for vertex in self.vertices:
            graph.add_node(vertex.label, y=vertex.point.lat, x=vertex.point.lng)
        for edge in self.edges():
            graph.add_edge(
                self.vertices[edge.source].label,
                self.vertices[edge.dest].label,
                name=edge.label,
                length=edge.length,
            )
        return graph


def _trim(value: float) -> str:
    """Format with at most three decimals and no trailing zeros."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return text if text != "-0" else "0"
