"""
main.py — Graph Step Visualizer Flask App
==========================================
Thin JSON front for the stepping core.  Whatever draws the graph (a
browser canvas, a desktop window) talks to these routes; nothing here
renders anything.

Routes:
  GET    /api/algorithms           – registry, for the algorithm picker
  GET    /api/graph                – nodes & edges
  POST   /api/graph/nodes          – add a node
  DELETE /api/graph/nodes/<id>     – remove a node (and its edges)
  POST   /api/graph/edges          – add an edge
  DELETE /api/graph/edges/<id>     – remove an edge
  POST   /api/select               – pick start / end node
  POST   /api/config/algo          – choose the algorithm
  POST   /api/config/speed         – choose the run-mode speed preset
  POST   /api/run                  – warm up (and start run mode); 202 with
                                     {"background": true}, then poll /api/state
  POST   /api/step/next            – advance one step
  POST   /api/step/prev            – rewind one step
  POST   /api/step/play            – toggle run mode
  POST   /api/tick                 – run-mode tick, call every tick_interval_ms
  POST   /api/shortest-path        – shortest path between start and end
  GET    /api/state                – current app state (for polling)

State management:
  One Workspace per app: the graph, the endpoint selection, the Stepper
  and its AutoRunner.  Every request that touches it holds the workspace
  lock, so the core only ever sees one caller at a time.  While run mode
  is on, editing, selecting and manual stepping are refused.

  Warm-ups run on the engine's background executor against a copy of the
  graph, never under the lock.  The finished Stepper is installed by the
  next request that looks at the workspace.
"""

import logging
import threading
from concurrent.futures import Future, wait
from typing import Dict, List, Optional

from flask import Blueprint, Flask, current_app, jsonify, request

from graph import Graph, START_COLOR, END_COLOR, PATH_COLOR
from algorithms import (
    AlgoInfo,
    CannotStep,
    GraphStepError,
    InvalidParameters,
    find_shortest_path,
    get_algorithm,
    list_algorithms,
    path_edges,
)
from engine import AutoRunner, Selection, Stepper, SPEED_PRESETS, warm_up_async

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__, url_prefix="/api")


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------
class Workspace:
    """Everything one editing session owns."""

    def __init__(self, graph: Graph, algorithm: str, tick_interval: float):
        self.graph:         Graph           = graph
        self.selection:     Selection       = Selection()
        self.stepper:       Stepper         = Stepper()
        self.runner:        AutoRunner      = AutoRunner(self.stepper, tick_interval)
        self.selected_algo: str             = algorithm
        self.last_path:     List[int]       = []
        self.lock:          threading.Lock  = threading.Lock()
        self.pending:       Optional[Future]         = None
        self.autoplay:      bool                     = False
        self.run_error:     Optional[GraphStepError] = None

    def invalidate(self) -> None:
        """The graph changed: the recorded run, any warm-up in flight and the path are stale."""
        self.runner.stop()
        self.stepper.reset()
        self.pending = None
        self.run_error = None
        self.last_path = []

    def begin_warm_up(self, info: AlgoInfo, params: dict, play: bool) -> Future:
        """Drop the current run and start warming up a new one in the background."""
        self.invalidate()
        self.autoplay = play
        self.pending = warm_up_async(self.graph, info, **params)
        return self.pending

    def collect(self) -> None:
        """Install a finished warm-up, if there is one.  Call with the lock held."""
        future = self.pending
        if future is None or not future.done():
            return
        self.pending = None
        try:
            stepper = future.result()
        except GraphStepError as exc:
            self.run_error = exc
            return
        self.stepper = stepper
        self.runner = AutoRunner(stepper, self.runner.interval)
        if self.autoplay:
            self.runner.start()

    def colors(self) -> Dict[int, str]:
        """Presentation color per node: base color, then selection, then path."""
        out = {nid: node.color for nid, node in self.graph.nodes.items()}
        if self.selection.start in out:
            out[self.selection.start] = START_COLOR
        if self.selection.end in out:
            out[self.selection.end] = END_COLOR
        for nid in self.last_path:
            if nid in out:
                out[nid] = PATH_COLOR
        return out


def get_workspace() -> Workspace:
    return current_app.extensions["graphstep"]


class Busy(Exception):
    """Request refused because run mode is active."""


def _require_idle(ws: Workspace) -> None:
    if ws.runner.is_running:
        raise Busy("Stop the running algorithm first.")


def _json() -> dict:
    return request.get_json(silent=True) or {}


def _playback(ws: Workspace, step=None) -> dict:
    step = step or ws.stepper.current_step
    return {
        "step":              step.to_dict() if step else None,
        "current_step":      ws.stepper.cursor,
        "total_steps":       ws.stepper.total_steps,
        "can_step_forward":  ws.stepper.can_step_forward() and not ws.runner.is_running,
        "can_step_backward": ws.stepper.can_step_backward() and not ws.runner.is_running,
        "is_running":        ws.runner.is_running,
        "warming":           ws.pending is not None,
        "error":             str(ws.run_error) if ws.run_error else None,
    }


def _int_field(data: dict, name: str) -> int:
    value = data.get(name)
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidParameters(f"'{name}' must be a node id.")
    return value


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@api.errorhandler(GraphStepError)
def handle_core_error(exc: GraphStepError):
    return jsonify({"error": str(exc)}), 400


@api.errorhandler(CannotStep)
@api.errorhandler(Busy)
def handle_conflict(exc: Exception):
    return jsonify({"error": str(exc)}), 409


# ---------------------------------------------------------------------------
# API: Registry & Graph
# ---------------------------------------------------------------------------
@api.route("/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})


@api.route("/graph", methods=["GET"])
def api_graph():
    ws = get_workspace()
    with ws.lock:
        return jsonify({"graph": ws.graph.to_dict(), "colors": ws.colors()})


@api.route("/graph/nodes", methods=["POST"])
def api_add_node():
    ws = get_workspace()
    data = _json()
    with ws.lock:
        _require_idle(ws)
        node = ws.graph.create_node(label=data.get("label"), color=data.get("color"))
        ws.invalidate()
        logger.debug("added %r", node)
        return jsonify({"node": node.to_dict()}), 201


@api.route("/graph/nodes/<int:node_id>", methods=["DELETE"])
def api_remove_node(node_id: int):
    ws = get_workspace()
    with ws.lock:
        _require_idle(ws)
        if not ws.graph.has_node(node_id):
            return jsonify({"error": f"Unknown node {node_id}"}), 404
        ws.graph.remove_node(node_id)
        ws.selection.discard(node_id)
        ws.invalidate()
        return jsonify({"graph": ws.graph.to_dict(), "selection": ws.selection.to_dict()})


@api.route("/graph/edges", methods=["POST"])
def api_add_edge():
    ws = get_workspace()
    data = _json()
    with ws.lock:
        _require_idle(ws)
        source = _int_field(data, "source")
        target = _int_field(data, "target")
        try:
            edge = ws.graph.create_edge(source, target)
        except KeyError as exc:
            raise InvalidParameters(f"Unknown node {exc.args[0]}") from None
        except ValueError as exc:
            raise InvalidParameters(str(exc)) from None
        ws.invalidate()
        return jsonify({"edge": edge.to_dict()}), 201


@api.route("/graph/edges/<int:edge_id>", methods=["DELETE"])
def api_remove_edge(edge_id: int):
    ws = get_workspace()
    with ws.lock:
        _require_idle(ws)
        if ws.graph.get_edge(edge_id) is None:
            return jsonify({"error": f"Unknown edge {edge_id}"}), 404
        ws.graph.remove_edge(edge_id)
        ws.invalidate()
        return jsonify({"graph": ws.graph.to_dict()})


@api.route("/select", methods=["POST"])
def api_select():
    ws = get_workspace()
    data = _json()
    with ws.lock:
        _require_idle(ws)
        node_id = _int_field(data, "node_id")
        if not ws.graph.has_node(node_id):
            return jsonify({"error": f"Unknown node {node_id}"}), 404
        ws.selection.select(node_id)
        ws.last_path = []
        return jsonify({"selection": ws.selection.to_dict(), "colors": ws.colors()})


# ---------------------------------------------------------------------------
# API: Config
# ---------------------------------------------------------------------------
@api.route("/config/algo", methods=["POST"])
def api_config_algo():
    ws = get_workspace()
    key = _json().get("algorithm", "")
    if get_algorithm(key) is None:
        raise InvalidParameters(f"Unknown algorithm: {key!r}")
    with ws.lock:
        ws.selected_algo = key
    return jsonify({"selected_algo": key})


@api.route("/config/speed", methods=["POST"])
def api_config_speed():
    ws = get_workspace()
    preset = _json().get("speed", "medium")
    if preset not in SPEED_PRESETS:
        raise InvalidParameters(f"Unknown speed: {preset!r}")
    with ws.lock:
        ws.runner.set_speed(preset)
        return jsonify({"tick_interval_ms": round(ws.runner.interval * 1000)})


# ---------------------------------------------------------------------------
# API: Run & Step Navigation
# ---------------------------------------------------------------------------
@api.route("/run", methods=["POST"])
def api_run():
    ws = get_workspace()
    data = _json()
    with ws.lock:
        ws.runner.stop()
        key  = data.get("algorithm", ws.selected_algo)
        info = get_algorithm(key)
        if info is None:
            ws.invalidate()
            raise InvalidParameters(f"Unknown algorithm: {key!r}")

        params = {}
        if info.requires_start:
            params["start"] = ws.selection.start
        if info.accepts_target and ws.selection.end is not None:
            params["target"] = ws.selection.end

        ws.selected_algo = key
        future = ws.begin_warm_up(info, params, data.get("play", True))
        if data.get("background"):
            return jsonify(_playback(ws)), 202

    wait([future])
    with ws.lock:
        ws.collect()
        exc = future.exception()
        if isinstance(exc, GraphStepError):
            raise exc
        return jsonify(_playback(ws))


@api.route("/step/next", methods=["POST"])
def api_step_next():
    ws = get_workspace()
    with ws.lock:
        ws.collect()
        _require_idle(ws)
        return jsonify(_playback(ws, ws.stepper.step_forward()))


@api.route("/step/prev", methods=["POST"])
def api_step_prev():
    ws = get_workspace()
    with ws.lock:
        ws.collect()
        _require_idle(ws)
        return jsonify(_playback(ws, ws.stepper.step_backward()))


@api.route("/step/play", methods=["POST"])
def api_step_play():
    ws = get_workspace()
    with ws.lock:
        ws.collect()
        ws.runner.toggle()
        return jsonify(_playback(ws))


@api.route("/tick", methods=["POST"])
def api_tick():
    ws = get_workspace()
    with ws.lock:
        ws.collect()
        step = ws.runner.tick()
        payload = _playback(ws)
        payload["advanced"] = step is not None
        return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Shortest path
# ---------------------------------------------------------------------------
@api.route("/shortest-path", methods=["POST"])
def api_shortest_path():
    ws = get_workspace()
    with ws.lock:
        _require_idle(ws)
        path = find_shortest_path(ws.selection.start, ws.selection.end, ws.graph)
        ws.last_path = [n.id for n in path]
        return jsonify({
            "found":  bool(path),
            "path":   ws.last_path,
            "edges":  [e.id for e in path_edges(ws.graph, path)],
            "colors": ws.colors(),
        })


@api.route("/state", methods=["GET"])
def api_state():
    ws = get_workspace()
    with ws.lock:
        ws.collect()
        state = _playback(ws)
        state.update({
            "selection":        ws.selection.to_dict(),
            "selected_algo":    ws.selected_algo,
            "tick_interval_ms": round(ws.runner.interval * 1000),
            "last_path":        ws.last_path,
        })
        return jsonify(state)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[dict] = None, graph: Optional[Graph] = None) -> Flask:
    """
    Build the app.  Settings come from the defaults below, then GRAPHSTEP_*
    environment variables, then `config`.
    """
    app = Flask(__name__)
    app.config.update(
        TICK_INTERVAL_MS=200,
        DEFAULT_ALGORITHM="bfs",
    )
    app.config.from_prefixed_env("GRAPHSTEP")
    if config:
        app.config.update(config)

    if get_algorithm(app.config["DEFAULT_ALGORITHM"]) is None:
        raise ValueError(f"Unknown DEFAULT_ALGORITHM {app.config['DEFAULT_ALGORITHM']!r}")

    app.extensions["graphstep"] = Workspace(
        graph if graph is not None else Graph.sample(),
        app.config["DEFAULT_ALGORITHM"],
        app.config["TICK_INTERVAL_MS"] / 1000,
    )
    app.register_blueprint(api)
    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Graph Step Visualizer on http://localhost:5000")
    create_app().run(debug=True, host="0.0.0.0", port=5000)
