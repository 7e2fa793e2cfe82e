"""
catalog.py — Fixed Graph Topologies
====================================
The graphs each algorithm is demonstrated on.  Renderers lay these out
however they like; the core only cares about node count and edge order.

    from model.catalog import get_graph, GRAPHS
    g = get_graph("weighted")
"""

from typing import Callable, Dict, List

from errors import PreconditionError
from model.graph import Graph


def traversal_graph() -> Graph:
    """8-node undirected ring-ish graph shared by BFS and DFS."""
    return Graph(
        node_count=8,
        edges=[(0, 1), (0, 2), (1, 3), (2, 4), (3, 5), (4, 6), (5, 7), (6, 0), (7, 1)],
        directed=False,
        name="traversal",
    )


def weighted_graph() -> Graph:
    """6-node undirected weighted graph for Dijkstra."""
    return Graph(
        node_count=6,
        edges=[
            (0, 1, 4), (0, 2, 2), (1, 2, 1), (1, 3, 5),
            (2, 3, 8), (2, 4, 10), (3, 4, 2), (3, 5, 6), (4, 5, 3),
        ],
        directed=False,
        name="weighted",
    )


def negative_weight_graph() -> Graph:
    """5-node directed graph with negative edges (no negative cycle) for Bellman-Ford."""
    return Graph(
        node_count=5,
        edges=[
            (0, 1, 6), (0, 3, 7), (1, 2, 5), (1, 3, 8), (1, 4, -4),
            (2, 1, -2), (3, 2, -3), (3, 4, 9), (4, 0, 2), (4, 2, 7),
        ],
        directed=True,
        name="negative_weight",
    )


def all_pairs_graph() -> Graph:
    """5-node directed graph for Floyd-Warshall (node 4 is a sink)."""
    return Graph(
        node_count=5,
        edges=[
            (0, 1, 3), (0, 3, 7),
            (1, 0, 8), (1, 2, 2),
            (2, 0, 5), (2, 3, 1),
            (3, 0, 2), (3, 4, 3),
        ],
        directed=True,
        name="all_pairs",
    )


def spanning_tree_graph() -> Graph:
    """6-node graph for Kruskal.  Several edges are listed in both directions."""
    return Graph(
        node_count=6,
        edges=[
            (0, 1, 4), (0, 2, 4), (1, 2, 2), (1, 0, 4),
            (2, 3, 3), (2, 5, 2), (2, 4, 4), (3, 2, 3),
            (4, 2, 4), (4, 5, 3), (5, 2, 2), (5, 4, 3),
        ],
        directed=False,
        name="spanning_tree",
    )


def dag_graph() -> Graph:
    """6-node DAG for topological sort."""
    return Graph(
        node_count=6,
        edges=[(5, 2), (5, 0), (4, 0), (4, 1), (2, 3), (3, 1)],
        directed=True,
        name="dag",
    )


# ---------------------------------------------------------------------------
# Registry: keyed by graph name
# ---------------------------------------------------------------------------
GRAPHS: Dict[str, Callable[[], Graph]] = {
    "traversal":       traversal_graph,
    "weighted":        weighted_graph,
    "negative_weight": negative_weight_graph,
    "all_pairs":       all_pairs_graph,
    "spanning_tree":   spanning_tree_graph,
    "dag":             dag_graph,
}


def get_graph(name: str) -> Graph:
    """Build a fresh copy of the named graph."""
    factory = GRAPHS.get(name)
    if factory is None:
        raise PreconditionError(f"Unknown graph: {name!r} (known: {', '.join(GRAPHS)})")
    return factory()


def graph_names() -> List[str]:
    return list(GRAPHS)
