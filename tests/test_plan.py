from __future__ import annotations

from pathlib import Path

import pytest

from hwypath.errors import GraphFormatError
from hwypath.plan import plan
from hwypath.setup import DEFAULT_GRAPH_FILE, GRAPH_ENV_VAR, resolve_graph_path, setup_graph


def test_plan_wires_load_search_and_route(line_tmg: Path) -> None:
    result = plan(line_tmg, "A", "C")

    assert result.route.labels(result.graph) == ["A", "B", "C"]
    assert result.search.distance == pytest.approx(result.route.total)


def test_plan_accepts_logging_mode_names(
    line_tmg: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    plan(line_tmg, "A", "B", logging_mode="info")
    err = capsys.readouterr().err
    assert "[INFO]\tgraph.setup.start" in err
    assert "[INFO]\troute.ready\thops=1\ttotal=10.00" in err


def test_resolve_graph_path_precedence(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv(GRAPH_ENV_VAR, raising=False)
    assert resolve_graph_path() == DEFAULT_GRAPH_FILE

    monkeypatch.setenv(GRAPH_ENV_VAR, str(tmp_path / "env.tmg"))
    assert resolve_graph_path() == tmp_path / "env.tmg"
    assert resolve_graph_path(tmp_path / "explicit.tmg") == tmp_path / "explicit.tmg"


def test_setup_graph_loads_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(GRAPH_ENV_VAR, raising=False)
    graph = setup_graph()
    assert graph.vertex_by_label("Lake") is not None


def test_setup_graph_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="TMG file not found"):
        setup_graph(tmp_path / "absent.tmg")


def test_setup_graph_propagates_format_errors(write_tmg) -> None:
    with pytest.raises(GraphFormatError):
        setup_graph(write_tmg("TMG 1.0 simple\nnot counts\n"))
