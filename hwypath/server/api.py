"""Flask API surface for exposing the route planner."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import BadRequest, NotFound, UnprocessableEntity

from hwypath.errors import UnreachableError, VertexLookupError
from hwypath.plan import plan_on
from hwypath.route.report import format_directions, route_geojson
from hwypath.setup import setup_graph

if TYPE_CHECKING:
    from hwypath.graph.model import HighwayGraph


def create_app(graph: HighwayGraph) -> Flask:
    """Build the Flask app serving routes over `graph`."""
    app = Flask(__name__)

    @app.after_request
    def _inject_cors(response: Response) -> Response:  # type: ignore[override]
        """Allow simple cross-origin requests from the browser frontend."""
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
        response.headers.setdefault("Access-Control-Allow-Headers", "Content-Type")
        response.headers.setdefault("Access-Control-Allow-Methods", "POST, OPTIONS")
        return response

    @app.route("/api/route", methods=["POST", "OPTIONS"])
    def route_planner() -> Response:
        """Plan the shortest route between two waypoint labels."""
        if request.method == "OPTIONS":
            return Response("", status=204)

        raw_payload = request.get_json(silent=True)
        if not isinstance(raw_payload, dict):
            msg = "Request body must be a JSON object."
            raise BadRequest(msg)

        start = _parse_label(raw_payload.get("start"), "start")
        destination = _parse_label(raw_payload.get("destination"), "destination")

        try:
            result = plan_on(graph, start, destination)
        except VertexLookupError as exc:
            raise NotFound(str(exc)) from exc
        except UnreachableError as exc:
            raise UnprocessableEntity(str(exc)) from exc

        return jsonify(
            {
                "directions": format_directions(graph, result.route)[1:],
                "labels": result.route.labels(graph),
                "total": round(result.route.total, 2),
                "route": route_geojson(graph, result.route),
            },
        )

    return app


def _parse_label(payload: object, field: str) -> str:
    """Validate that payload is a non-empty waypoint label."""
    if not isinstance(payload, str) or not payload.strip():
        msg = f"{field} must be a non-empty waypoint label."
        raise BadRequest(msg)
    return payload.strip()


if __name__ == "__main__":  # pragma: no cover
    create_app(setup_graph()).run()
