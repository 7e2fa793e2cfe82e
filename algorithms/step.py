"""
step.py — Algorithm Step Snapshots
===================================
Every algorithm is a generator that yields snapshots and `return`s its
final result.  A snapshot is a frozen-in-time picture of what changed or
is being examined at one discrete instant:

    Step       – graph algorithms   (current node / edge, frontier, distances, …)
    SortStep   – sorting algorithms (array, comparing / swapping indices, …)
    BoardStep  – placement solvers  (one found solution)

Design decisions:
  - Snapshots are frozen dataclasses holding tuples / copied dicts only.
    The generator is the only writer; the playback controller and the
    renderer are pure readers.
  - `node_states` and `edge_states` hold only the elements that CHANGED at
    this step.  "Visited", "frontier" and "finalized" sets are carried as
    the current collections so a renderer never has to replay history.
  - `overlay` is a free-form dict so each algorithm can push whatever
    extra info it wants (queue contents, relaxation detail, matrix, …).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from model.board import Solution
from model.states import EdgeState, NodeState


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number  : 0-based index of this step in the run.
        current_node : NodeId being expanded / processed right now.
        current_edge : Index into Graph.edges of the edge being examined (or None).
        node_states  : {node_id: state_string} — only nodes that CHANGED.
        edge_states  : {edge_index: state_string} — only edges that CHANGED.
        visited_set  : NodeIds fully processed so far, in visit order.
        frontier     : NodeIds currently in the queue / heap / stack.
        distances    : {node_id: float} — current tentative distances.
        explanation  : Human-readable "why" text.
        overlay      : Free-form dict for algo-specific data:
                         • "queue"          – BFS queue
                         • "stack"          – DFS call stack / post-order stack
                         • "relaxed_edge"   – (u, v, w, improved)
                         • "matrix"         – Floyd-Warshall distance matrix
                         • "k", "i", "j"    – Floyd-Warshall triple
                         • "mst"            – Kruskal edges accepted so far
                         • "pass"           – Bellman-Ford pass number
                         • "negative_cycle" – Bellman-Ford flag
        is_final     : True on the very last step of the run.
    """

    step_number:  int                        = 0
    current_node: Optional[int]              = None
    current_edge: Optional[int]              = None
    node_states:  Dict[int, str]             = field(default_factory=dict)
    edge_states:  Dict[int, str]             = field(default_factory=dict)
    visited_set:  Tuple[int, ...]            = ()
    frontier:     Tuple[int, ...]            = ()
    distances:    Dict[int, float]           = field(default_factory=dict)
    explanation:  str                        = ""
    overlay:      Dict[str, Any]             = field(default_factory=dict)
    is_final:     bool                       = False


@dataclass(frozen=True)
class SortStep:
    """
    Attributes:
        step_number    : 0-based index of this step in the run.
        array          : The whole array as it looks after this step.
        comparing      : Indices being compared right now.
        swapping       : Indices just swapped.
        sorted_indices : Indices known to be in their final position.
        key_index      : Insertion sort — where the key currently sits.
        min_index      : Selection sort — current minimum candidate.
        written_index  : Merge sort — output position just written.
        explanation    : Human-readable "why" text.
        is_final       : True on the very last step of the run.
    """

    step_number:    int                 = 0
    array:          Tuple[Any, ...]     = ()
    comparing:      Tuple[int, ...]     = ()
    swapping:       Tuple[int, ...]     = ()
    sorted_indices: Tuple[int, ...]     = ()
    key_index:      Optional[int]       = None
    min_index:      Optional[int]       = None
    written_index:  Optional[int]       = None
    explanation:    str                 = ""
    is_final:       bool                = False


@dataclass(frozen=True)
class BoardStep:
    step_number:     int                = 0
    solution_index:  int                = 0
    solution:        Optional[Solution] = None
    total_solutions: int                = 0
    explanation:     str                = ""
    is_final:        bool               = False


# ---------------------------------------------------------------------------
# Convenience builder so graph algorithms don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that graph algorithms use to construct Steps cleanly.

    Usage inside an algorithm generator:
        sb = StepBuilder()
        sb.set_current(3)
        sb.set_frontier([4, 5])
        sb.explanation = "Node 3 was dequeued because it was discovered first."
        yield sb.build(step_number=3)

    The builder also numbers steps itself when `build()` is called without
    an explicit step_number.
    """

    def __init__(self):
        self._counter = 0
        self.reset()

    def reset(self):
        """Clear per-step fields.  The step counter survives."""
        self.current_node: Optional[int]     = None
        self.current_edge: Optional[int]     = None
        self.node_states:  Dict[int, str]    = {}
        self.edge_states:  Dict[int, str]    = {}
        self.visited_set:  List[int]         = []
        self.frontier:     List[int]         = []
        self.distances:    Dict[int, float]  = {}
        self.explanation:  str               = ""
        self.overlay:      Dict[str, Any]    = {}

    # -- helpers --
    def set_current(self, node_id: int):
        self.current_node = node_id
        self.node_states[node_id] = NodeState.CURRENT.value

    def set_frontier(self, nodes):
        self.frontier = list(nodes)

    def mark_frontier(self, node_id: int):
        self.node_states[node_id] = NodeState.FRONTIER.value

    def finalize(self, node_id: int):
        self.node_states[node_id] = NodeState.FINALIZED.value

    def mark_node(self, node_id: int, state: NodeState):
        self.node_states[node_id] = state.value

    def examine_edge(self, edge_index: int, state=EdgeState.ACTIVE):
        self.current_edge = edge_index
        self.edge_states[edge_index] = EdgeState(state).value

    def build(self, step_number: Optional[int] = None, is_final: bool = False) -> Step:
        if step_number is None:
            step_number = self._counter
        self._counter = step_number + 1
        return Step(
            step_number=step_number,
            current_node=self.current_node,
            current_edge=self.current_edge,
            node_states=dict(self.node_states),
            edge_states=dict(self.edge_states),
            visited_set=tuple(self.visited_set),
            frontier=tuple(self.frontier),
            distances=dict(self.distances),
            explanation=self.explanation,
            overlay=dict(self.overlay),
            is_final=is_final,
        )


# ---------------------------------------------------------------------------
# Serialisation (JSON-friendly: ∞ becomes the string "∞")
# ---------------------------------------------------------------------------
INF = float("inf")


def json_number(value):
    if isinstance(value, float) and value in (INF, -INF):
        return "∞" if value > 0 else "-∞"
    return value


def step_to_dict(step) -> Dict[str, Any]:
    """Serialise any snapshot type for the HTTP surface / Recorder.export()."""
    if isinstance(step, Step):
        return {
            "kind":         "graph",
            "step_number":  step.step_number,
            "current_node": step.current_node,
            "current_edge": step.current_edge,
            "node_states":  {str(k): v for k, v in step.node_states.items()},
            "edge_states":  {str(k): v for k, v in step.edge_states.items()},
            "visited_set":  list(step.visited_set),
            "frontier":     list(step.frontier),
            "distances":    {str(k): json_number(v) for k, v in step.distances.items()},
            "explanation":  step.explanation,
            "overlay":      _jsonable(step.overlay),
            "is_final":     step.is_final,
        }
    if isinstance(step, SortStep):
        return {
            "kind":           "sorting",
            "step_number":    step.step_number,
            "array":          list(step.array),
            "comparing":      list(step.comparing),
            "swapping":       list(step.swapping),
            "sorted_indices": list(step.sorted_indices),
            "key_index":      step.key_index,
            "min_index":      step.min_index,
            "written_index":  step.written_index,
            "explanation":    step.explanation,
            "is_final":       step.is_final,
        }
    if isinstance(step, BoardStep):
        return {
            "kind":            "placement",
            "step_number":     step.step_number,
            "solution_index":  step.solution_index,
            "solution":        step.solution.to_dict() if step.solution else None,
            "board":           step.solution.rows() if step.solution else [],
            "total_solutions": step.total_solutions,
            "explanation":     step.explanation,
            "is_final":        step.is_final,
        }
    raise TypeError(f"Not a snapshot: {step!r}")


def _jsonable(value):
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return json_number(value)
