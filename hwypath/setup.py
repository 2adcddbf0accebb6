from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from hwypath.graph.load import load_graph

if TYPE_CHECKING:
    from hwypath.graph.model import HighwayGraph

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ASSETS_DIR = PROJECT_ROOT / "assets"
DEFAULT_GRAPH_FILE = ASSETS_DIR / "graph.tmg"
# Environment variable naming a TMG file to use instead of the default.
GRAPH_ENV_VAR = "HWYPATH_GRAPH"


def resolve_graph_path(graph_path: str | Path | None = None) -> Path:
    """Pick the explicit path, then `$HWYPATH_GRAPH`, then the bundled default."""
    if graph_path is not None:
        return Path(graph_path)
    from_env = os.environ.get(GRAPH_ENV_VAR)
    if from_env:
        return Path(from_env)
    return DEFAULT_GRAPH_FILE


def setup_graph(graph_path: str | Path | None = None) -> HighwayGraph:
    """Load the TMG graph used for routing.

    Parameters
    ----------
    graph_path:
        Optional custom path to the TMG file. When omitted, `$HWYPATH_GRAPH`
        is consulted and then the default `assets/graph.tmg` file is used.

    Returns
    -------
    HighwayGraph
        The fully built graph, ready for path-finding.

    """
    path = resolve_graph_path(graph_path)
    if not path.exists():
        msg = f"TMG file not found: {path}"
        raise FileNotFoundError(msg)

    return load_graph(path)
