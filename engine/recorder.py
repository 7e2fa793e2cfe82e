"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (every snapshot plus the returned
result) into an immutable Trace, then computes the metrics card and
the comparison used by Comparison Mode.

Usage:
    rec = Recorder()
    rec.start("dijkstra", graph="weighted", source=0)
    rec.run_to_completion()          # exhausts the generator
    rec.trace.steps                  # tuple of snapshots, ready for playback
    rec.trace.result                 # ShortestPaths(...)
    rec.export()                     # JSON-friendly dict

Comparison Mode:
    Hold two Recorders, run both to completion on the SAME input, then
    compare(rec1, rec2) → ComparisonResult.  Dijkstra vs Bellman–Ford on
    a non-negative graph is the canonical cross-check: results agree.
"""

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from errors import PlaybackError, PreconditionError
from model import Graph, get_graph
from algorithms import GRAPH, PLACEMENT, SORTING, PIECE_FOR_KEY, AlgoInfo, get_algorithm
from algorithms.arrays import generate_array
from algorithms.step import step_to_dict, _jsonable

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Trace: the materialised, immutable output of one run
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Trace:
    algo_key: str
    steps:    Tuple = ()
    result:   Any   = None

    def __len__(self) -> int:
        return len(self.steps)


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:       str   = ""
    algo_label:     str   = ""
    family:         str   = ""
    total_steps:    int   = 0          # number of snapshots yielded
    wall_time_ms:   float = 0.0        # wall-clock time to run to completion
    memory_bytes:   int   = 0          # approx size of the snapshot buffer
    nodes_visited:  int   = 0          # graph family
    comparisons:    int   = 0          # sorting family
    swaps:          int   = 0          # sorting family
    solutions:      int   = 0          # placement family
    negative_cycle: bool  = False


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_steps:   str  = ""      # which algo needed fewer snapshots
    results_agree:  bool = False   # same final answer?


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        trace   : The Trace of the last completed run (None before).
        metrics : Computed RunMetrics (available after run_to_completion).
        params  : Resolved keyword arguments the generator was called with.
    """

    def __init__(self):
        self.trace:   Optional[Trace]      = None
        self.metrics: Optional[RunMetrics] = None
        self.params:  Dict[str, Any]       = {}

        self._algo_info: Optional[AlgoInfo] = None
        self._generator = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, **params) -> None:
        """
        Resolve parameters for the algorithm's family and create the
        generator.  Bad input raises PreconditionError here, before any
        snapshot is produced.

        graph     : graph=<Graph | dict | catalog name>, source=<int>
        sorting   : values=<list>  or  size=<int>, seed=<int>
        placement : n=<int>, piece=<"queen"|"knight"|"rook">
        """
        info = get_algorithm(algo_key)
        if info is None:
            raise PreconditionError(f"Unknown algorithm: {algo_key}")

        self._algo_info = info
        self.trace      = None
        self.metrics    = None

        if info.family == GRAPH:
            kwargs = self._graph_params(info, params)
        elif info.family == SORTING:
            kwargs = self._sorting_params(params)
        else:
            kwargs = self._placement_params(info, params)

        self.params = kwargs
        # generators run nothing until first next(); force the checks now
        self._generator = self._primed(info.fn(**kwargs))

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the generator, record every snapshot, compute metrics."""
        if self._generator is None:
            raise PlaybackError("Nothing to run: call start() first.")

        started = time.monotonic()
        steps = []
        gen = self._generator
        while True:
            try:
                steps.append(next(gen))
            except StopIteration as stop:
                result = stop.value
                break
        wall_ms = (time.monotonic() - started) * 1000
        self._generator = None

        self.trace = Trace(algo_key=self._algo_info.key, steps=tuple(steps), result=result)
        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "%s finished: %d steps in %.2f ms",
            self._algo_info.key, self.metrics.total_steps, self.metrics.wall_time_ms,
        )
        return self.metrics

    @property
    def steps(self) -> Tuple:
        return self.trace.steps if self.trace else ()

    @property
    def result(self):
        return self.trace.result if self.trace else None

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        params = {}
        for k, v in self.params.items():
            params[k] = v.to_dict() if isinstance(v, Graph) else _jsonable(v)
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "params":   params,
            "metrics":  self.metrics.__dict__ if self.metrics else {},
            "result":   result_to_dict(self.result),
            "steps":    [step_to_dict(s) for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Parameter resolution per family
    # ------------------------------------------------------------------
    @staticmethod
    def _graph_params(info: AlgoInfo, params: Dict[str, Any]) -> Dict[str, Any]:
        graph = params.get("graph") or info.default_graph
        if isinstance(graph, str):
            graph = get_graph(graph)
        elif isinstance(graph, dict):
            graph = Graph.from_dict(graph)
        elif not isinstance(graph, Graph):
            raise PreconditionError(f"Not a graph: {graph!r}")

        kwargs: Dict[str, Any] = {"graph": graph}
        if info.takes_source:
            kwargs["source"] = params.get("source", 0)
        return kwargs

    @staticmethod
    def _sorting_params(params: Dict[str, Any]) -> Dict[str, Any]:
        values = params.get("values")
        if values is None:
            values = generate_array(params.get("size", 20), seed=params.get("seed"))
        return {"values": list(values)}

    @staticmethod
    def _placement_params(info: AlgoInfo, params: Dict[str, Any]) -> Dict[str, Any]:
        n = params.get("n", 4)
        if not isinstance(n, int) or isinstance(n, bool) or n < 0:
            raise PreconditionError(f"Board size must be a non-negative integer, got {n!r}")
        return {"n": n, "piece": params.get("piece") or PIECE_FOR_KEY.get(info.key, "queen")}

    @staticmethod
    def _primed(gen):
        """Run the generator to its first snapshot so preconditions fire in start()."""
        try:
            first = next(gen)
        except StopIteration as stop:
            return _replay((), stop.value)
        return _chain(first, gen)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info  = self._algo_info
        steps = self.trace.steps
        last  = steps[-1] if steps else None

        mem = sys.getsizeof(steps)
        for s in steps:
            mem += sys.getsizeof(s)

        metrics = RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            family=info.family,
            total_steps=len(steps),
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
        )

        if info.family == GRAPH:
            metrics.nodes_visited = len(last.visited_set) if last else 0
            metrics.negative_cycle = bool(getattr(self.result, "negative_cycle", False))
        elif info.family == SORTING:
            metrics.comparisons = sum(1 for s in steps if s.comparing and not s.swapping)
            metrics.swaps       = sum(1 for s in steps if s.swapping)
        elif info.family == PLACEMENT:
            metrics.solutions = len(self.result or [])
        return metrics


def _chain(first, gen):
    yield first
    return (yield from gen)


def _replay(steps, result):
    yield from steps
    return result


# ---------------------------------------------------------------------------
# Result serialisation
# ---------------------------------------------------------------------------
def result_to_dict(result) -> Any:
    """JSON-friendly view of any algorithm's return value."""
    if result is None:
        return None
    if hasattr(result, "to_dict"):
        return result.to_dict()
    return _jsonable(result)


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    if l.total_steps == r.total_steps:
        winner = "tie"
    else:
        winner = l.algo_label if l.total_steps < r.total_steps else r.algo_label

    return ComparisonResult(
        left=l,
        right=r,
        winner_steps=winner,
        results_agree=_same_answer(left.result, right.result),
    )


def _same_answer(a, b) -> bool:
    # shortest-path results agree on distances, whatever the parents
    da, db = getattr(a, "distances", None), getattr(b, "distances", None)
    if da is not None and db is not None:
        return dict(da) == dict(db)
    return result_to_dict(a) == result_to_dict(b)
