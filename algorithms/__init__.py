"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the engine knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, family, default_graph, …),
        …
    }

Every `fn` is a generator function: it yields snapshots and returns the
final result.  Families decide which parameters the Recorder passes:

    graph      – fn(graph, [source])
    sorting    – fn(values)
    placement  – fn(n, piece)

Adding a new algorithm is: write the generator, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bfs            import bfs
from algorithms.dfs            import dfs, topological_sort
from algorithms.dijkstra       import dijkstra
from algorithms.bellman_ford   import bellman_ford
from algorithms.floyd_warshall import floyd_warshall
from algorithms.kruskal        import kruskal
from algorithms.bubble_sort    import bubble_sort
from algorithms.insertion_sort import insertion_sort
from algorithms.selection_sort import selection_sort
from algorithms.merge_sort     import merge_sort
from algorithms.placement      import placement_steps


GRAPH     = "graph"
SORTING   = "sorting"
PLACEMENT = "placement"


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bfs"
    label:            str                    # human label, e.g. "Breadth-First Search"
    fn:               Callable               # the generator function
    family:           str                    # GRAPH / SORTING / PLACEMENT
    default_graph:    Optional[str] = None   # catalog graph name for GRAPH algos
    takes_source:     bool     = False       # fn accepts a `source` node
    directed:         bool     = False       # reads edges as directed?
    supports_negative: bool    = False       # can handle negative edges?
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str      = ""
    complexity_space: str      = ""
    description:      str      = ""

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "family":           self.family,
            "default_graph":    self.default_graph,
            "takes_source":     self.takes_source,
            "directed":         self.directed,
            "supports_negative": self.supports_negative,
            "tags":             list(self.tags),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=bfs, family=GRAPH,
        default_graph="traversal", takes_source=True,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explore graph level by level using a queue.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=dfs, family=GRAPH,
        default_graph="traversal", takes_source=True,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explore as deep as possible before backtracking.",
    ),

    "topological_sort": AlgoInfo(
        key="topological_sort", label="Topological Sort", fn=topological_sort, family=GRAPH,
        default_graph="dag", directed=True,
        tags=["dag", "ordering"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Order a DAG so every edge points forward (reverse DFS post-order).",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=dijkstra, family=GRAPH,
        default_graph="weighted", takes_source=True,
        tags=["weighted", "shortest-path"],
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Shortest paths from a source; non-negative weights only.",
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman–Ford", fn=bellman_ford, family=GRAPH,
        default_graph="negative_weight", takes_source=True, directed=True,
        supports_negative=True,
        tags=["weighted", "shortest-path", "negative-edges"],
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Shortest paths with negative edges; flags negative cycles.",
    ),

    "floyd_warshall": AlgoInfo(
        key="floyd_warshall", label="Floyd–Warshall", fn=floyd_warshall, family=GRAPH,
        default_graph="all_pairs", directed=True, supports_negative=True,
        tags=["weighted", "all-pairs"],
        complexity_time="O(V³)", complexity_space="O(V²)",
        description="All-pairs shortest paths via dynamic programming.",
    ),

    "kruskal": AlgoInfo(
        key="kruskal", label="Kruskal's MST", fn=kruskal, family=GRAPH,
        default_graph="spanning_tree",
        tags=["weighted", "spanning-tree", "union-find"],
        complexity_time="O(E log E)", complexity_space="O(V)",
        description="Minimum spanning tree using union-find.",
    ),

    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=bubble_sort, family=SORTING,
        tags=["comparison", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swap adjacent out-of-order pairs.",
    ),

    "insertion_sort": AlgoInfo(
        key="insertion_sort", label="Insertion Sort", fn=insertion_sort, family=SORTING,
        tags=["comparison", "in-place", "stable"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Grow a sorted prefix by inserting one element at a time.",
    ),

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", fn=selection_sort, family=SORTING,
        tags=["comparison", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Select the minimum of the unsorted part and swap it into place.",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", fn=merge_sort, family=SORTING,
        tags=["comparison", "divide-and-conquer", "stable"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Split in halves, sort each, merge.",
    ),

    "n_queens": AlgoInfo(
        key="n_queens", label="N-Queens", fn=placement_steps, family=PLACEMENT,
        tags=["backtracking"],
        complexity_time="O(N!)", complexity_space="O(N²)",
        description="Place N queens so that no two attack each other.",
    ),

    "n_knights": AlgoInfo(
        key="n_knights", label="N-Knights", fn=placement_steps, family=PLACEMENT,
        tags=["backtracking"],
        complexity_time="O(2^(N²))", complexity_space="O(N²)",
        description="Place N knights so that no two attack each other.",
    ),

    "n_rooks": AlgoInfo(
        key="n_rooks", label="N-Rooks", fn=placement_steps, family=PLACEMENT,
        tags=["backtracking"],
        complexity_time="O(N!)", complexity_space="O(N²)",
        description="Place N rooks so that no two share a row or column.",
    ),
}

# placement keys → piece kind passed to placement_steps
PIECE_FOR_KEY: Dict[str, str] = {
    "n_queens":  "queen",
    "n_knights": "knight",
    "n_rooks":   "rook",
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_family(family: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.family == family]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "PIECE_FOR_KEY",
    "GRAPH", "SORTING", "PLACEMENT",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_family",
    "algorithms_by_tag",
]
