"""
main.py — Algorithm Playback Flask App
=======================================
The JSON server that powers a renderer.  It owns ONE recorder and ONE
playback controller; a renderer polls /api/state and draws whatever
snapshot is current.

Routes:
  GET  /                        – service summary
  GET  /api/algorithms          – registry listing (optionally ?family=… &tag=…)
  GET  /api/graphs              – fixed graph topologies
  POST /api/run                 – run an algorithm, start playback
  POST /api/playback/pause      – pause
  POST /api/playback/resume     – resume
  POST /api/playback/cancel     – cancel the current run
  POST /api/playback/speed      – change delay (ms or preset name)
  POST /api/playback/next       – manual single step
  GET  /api/state               – tick the controller, return the current snapshot
  GET  /api/export              – full recorded run (all snapshots)
  POST /api/compare             – run two algorithms on the same input

Configuration:
  Defaults come from config.py; any of them can be overridden from the
  environment with the VISUALIZER_ prefix, e.g. VISUALIZER_DEFAULT_DELAY_MS=250.
"""

import logging

from flask import Flask, current_app, jsonify, request

import config
from config import board_size_warning, clamp_array_size, clamp_delay, setup_logging
from errors import VisualizerError, PreconditionError
from model import get_graph, graph_names
from algorithms import PLACEMENT, SORTING, PIECE_FOR_KEY, get_algorithm, list_algorithms, algorithms_by_family, algorithms_by_tag
from algorithms.arrays import generate_array
from algorithms.placement import EXPECTED_QUEEN_COUNTS, PieceKind
from algorithms.step import step_to_dict
from engine import PlaybackController, Recorder, compare, result_to_dict

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(overrides=None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config)
    app.config.from_prefixed_env("VISUALIZER")
    if overrides:
        app.config.update(overrides)

    app.extensions["playback"] = PlaybackController(delay_ms=app.config["DEFAULT_DELAY_MS"])
    app.extensions["recorder"] = Recorder()

    app.register_error_handler(VisualizerError, _handle_visualizer_error)
    _register_routes(app)
    return app


def _handle_visualizer_error(exc: VisualizerError):
    logger.info("rejected request: %s", exc)
    return jsonify({"error": str(exc)}), 400


# ---------------------------------------------------------------------------
# State helpers
# ---------------------------------------------------------------------------
def get_controller() -> PlaybackController:
    return current_app.extensions["playback"]


def get_recorder() -> Recorder:
    return current_app.extensions["recorder"]


def get_state() -> dict:
    """Playback status plus the current snapshot (serialised)."""
    ctrl = get_controller()
    rec  = get_recorder()
    state = ctrl.snapshot()
    state["algo_key"] = rec.trace.algo_key if rec.trace and ctrl.total_steps else None
    step = ctrl.current_step
    state["current_step"] = step_to_dict(step) if step is not None else None
    return state


def _payload() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise PreconditionError("Request body must be a JSON object")
    return data


def _int_param(data: dict, key: str, default=None):
    value = data.get(key, default)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise PreconditionError(f"'{key}' must be an integer, got {value!r}") from None


def _delay_param(data: dict):
    value = data.get("delay_ms")
    if value is None:
        return None
    try:
        return clamp_delay(value)
    except (TypeError, ValueError):
        raise PreconditionError(f"'delay_ms' must be a number or preset name, got {value!r}") from None


def _run_params(info, data: dict):
    """Translate a request body into Recorder.start() keyword arguments, plus a warning."""
    cfg = current_app.config
    warning = None

    if info.family == PLACEMENT:
        n = _int_param(data, "n", cfg["DEFAULT_BOARD_SIZE"])
        piece = PieceKind.parse(data.get("piece") or PIECE_FOR_KEY[info.key])
        warning = board_size_warning(n, piece)
        return {"n": n, "piece": piece.value}, warning

    if info.family == SORTING:
        if data.get("values") is not None:
            values = data["values"]
            if not isinstance(values, list):
                raise PreconditionError("'values' must be a list")
            return {"values": values}, warning
        size = clamp_array_size(_int_param(data, "size", cfg["DEFAULT_ARRAY_SIZE"]))
        return {"size": size, "seed": _int_param(data, "seed")}, warning

    params = {"graph": data.get("graph") or info.default_graph}
    if "source" in data:
        params["source"] = _int_param(data, "source")
    return params, warning


def _result_payload(info, params: dict, result) -> dict:
    body = {"result": result_to_dict(result)}
    if info.family == PLACEMENT and params.get("piece") == "queen":
        n = params["n"]
        if n < len(EXPECTED_QUEEN_COUNTS):
            body["expected_solutions"] = EXPECTED_QUEEN_COUNTS[n]
    return body


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def _register_routes(app: Flask) -> None:

    @app.route("/")
    def index():
        return jsonify({
            "service":    "algorithm-playback",
            "algorithms": len(list_algorithms()),
            "state":      get_controller().state.value,
        })

    # -----------------------------------------------------------------
    # API: Catalog
    # -----------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        family = request.args.get("family")
        tag    = request.args.get("tag")
        algos = algorithms_by_family(family) if family else list_algorithms()
        if tag:
            algos = [a for a in algos if a in algorithms_by_tag(tag)]
        return jsonify({"algorithms": [a.to_dict() for a in algos]})

    @app.route("/api/graphs")
    def api_graphs():
        return jsonify({"graphs": {name: get_graph(name).to_dict() for name in graph_names()}})

    # -----------------------------------------------------------------
    # API: Run Algorithm
    # -----------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data = _payload()
        algo_key = data.get("algo_key", "bfs")
        info = get_algorithm(algo_key)
        if info is None:
            raise PreconditionError(f"Unknown algorithm: {algo_key}")

        params, warning = _run_params(info, data)
        delay = _delay_param(data)

        ctrl = get_controller()
        ctrl.reset()
        rec = get_recorder()
        rec.start(algo_key, **params)
        metrics = rec.run_to_completion()

        ctrl.start(rec.trace.steps, delay_ms=delay)

        body = {
            "algo_key":    algo_key,
            "total_steps": len(rec.trace),
            "metrics":     metrics.__dict__,
            "warning":     warning,
            "playback":    ctrl.snapshot(),
        }
        body.update(_result_payload(info, rec.params, rec.result))
        return jsonify(body)

    # -----------------------------------------------------------------
    # API: Playback control
    # -----------------------------------------------------------------
    @app.route("/api/playback/pause", methods=["POST"])
    def api_pause():
        ctrl = get_controller()
        ctrl.tick()
        ctrl.pause()
        return jsonify(ctrl.snapshot())

    @app.route("/api/playback/resume", methods=["POST"])
    def api_resume():
        ctrl = get_controller()
        ctrl.resume()
        return jsonify(ctrl.snapshot())

    @app.route("/api/playback/cancel", methods=["POST"])
    def api_cancel():
        ctrl = get_controller()
        ctrl.cancel()
        return jsonify(ctrl.snapshot())

    @app.route("/api/playback/speed", methods=["POST"])
    def api_speed():
        data = _payload()
        if "delay_ms" not in data and "preset" not in data:
            raise PreconditionError("Provide 'delay_ms' or 'preset'")
        ctrl = get_controller()
        ctrl.tick()
        ctrl.set_speed(_delay_param({"delay_ms": data.get("delay_ms", data.get("preset"))}))
        return jsonify(ctrl.snapshot())

    @app.route("/api/playback/next", methods=["POST"])
    def api_next():
        ctrl = get_controller()
        moved = ctrl.next_step()
        state = get_state()
        state["moved"] = moved
        return jsonify(state)

    # -----------------------------------------------------------------
    # API: State / export
    # -----------------------------------------------------------------
    @app.route("/api/state")
    def api_state():
        get_controller().tick()
        return jsonify(get_state())

    @app.route("/api/export")
    def api_export():
        rec = get_recorder()
        if rec.trace is None:
            raise PreconditionError("Nothing recorded yet: POST /api/run first")
        return jsonify(rec.export())

    # -----------------------------------------------------------------
    # API: Comparison mode
    # -----------------------------------------------------------------
    @app.route("/api/compare", methods=["POST"])
    def api_compare():
        data = _payload()
        keys = data.get("algo_keys") or ["dijkstra", "bellman_ford"]
        if len(keys) != 2:
            raise PreconditionError("'algo_keys' must name exactly two algorithms")

        if data.get("values") is None and all(
            getattr(get_algorithm(k), "family", None) == SORTING for k in keys
        ):
            # both sorts must see the same array
            cfg = current_app.config
            size = clamp_array_size(_int_param(data, "size", cfg["DEFAULT_ARRAY_SIZE"]))
            data["values"] = generate_array(size, seed=_int_param(data, "seed"))

        recorders = []
        for key in keys:
            info = get_algorithm(key)
            if info is None:
                raise PreconditionError(f"Unknown algorithm: {key}")
            params, _ = _run_params(info, data)
            rec = Recorder()
            rec.start(key, **params)
            rec.run_to_completion()
            recorders.append(rec)

        result = compare(recorders[0], recorders[1])
        return jsonify({
            "left":          result.left.__dict__,
            "right":         result.right.__dict__,
            "winner_steps":  result.winner_steps,
            "results_agree": result.results_agree,
        })


app = create_app()


if __name__ == "__main__":
    setup_logging(app.config["LOG_LEVEL"])
    logger.info("Algorithm Playback server on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000)
