from __future__ import annotations

import math
from pathlib import Path
from typing import Callable

import pytest

from hwypath.geo import EARTH_RADIUS_MILES
from hwypath.graph.load import load_graph
from hwypath.graph.model import HighwayGraph


def degrees_for(miles: float) -> float:
    """Degrees of arc along the equator covering `miles`."""
    return math.degrees(miles / EARTH_RADIUS_MILES)


@pytest.fixture
def write_tmg(tmp_path: Path) -> Callable[[str], Path]:
    def _write(text: str, name: str = "graph.tmg") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def line_tmg(write_tmg: Callable[[str], Path]) -> Path:
    """A --10mi-- B --5mi-- C along the equator."""
    return write_tmg(
        "TMG 1.0 simple\n"
        "3 2\n"
        "A 0.0 0.0\n"
        f"B 0.0 {degrees_for(10)!r}\n"
        f"C 0.0 {degrees_for(15)!r}\n"
        "0 1 R1\n"
        "1 2 R2\n",
    )


@pytest.fixture
def line_graph(line_tmg: Path) -> HighwayGraph:
    return load_graph(line_tmg)


@pytest.fixture
def shortcut_graph(write_tmg: Callable[[str], Path]) -> HighwayGraph:
    """A--B is 3.5mi, B--C is 11.5mi and the direct A--C road is 8mi."""
    path = write_tmg(
        "TMG 1.0 simple\n"
        "3 3\n"
        "A 0.0 0.0\n"
        f"B 0.0 {-degrees_for(3.5)!r}\n"
        f"C 0.0 {degrees_for(8)!r}\n"
        "0 1 AB\n"
        "1 2 BC\n"
        "0 2 Direct\n",
    )
    return load_graph(path)


@pytest.fixture
def sample_graph() -> HighwayGraph:
    return load_graph(Path(__file__).resolve().parents[1] / "assets" / "graph.tmg")
