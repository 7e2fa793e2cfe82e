"""
floyd_warshall.py — Floyd–Warshall (All-Pairs Shortest Paths)
===============================================================
The signature "matrix algorithm".  Every step carries the full V×V
distance matrix so a renderer can draw it as a live grid.

Structure:
  for k in 0 … V-1:          ← "intermediate" node
      for i in 0 … V-1:
          for j in 0 … V-1:
              dist[i][j] = min(dist[i][j], dist[i][k] + dist[k][j])

The matrix is seeded with direct edge weights (edges read as directed;
the cheapest of parallel edges wins), ∞ elsewhere and 0 on the diagonal.
One Step is yielded per (k, i, j) triple, in nested order, whether or not
the cell changed.

Returns the final matrix as a tuple of tuples.
"""

from typing import Generator, List, Tuple

from model import Graph
from algorithms.dijkstra import INF, _fmt
from model.states import NodeState
from algorithms.step import Step, StepBuilder


Matrix = Tuple[Tuple[float, ...], ...]


def initial_matrix(graph: Graph) -> List[List[float]]:
    n = graph.node_count
    dist = [[INF] * n for _ in range(n)]
    for i in range(n):
        dist[i][i] = 0
    for edge in graph.edges:
        if edge.source != edge.target and edge.weight < dist[edge.source][edge.target]:
            dist[edge.source][edge.target] = edge.weight
    return dist


def floyd_warshall(graph: Graph) -> Generator[Step, None, Matrix]:
    n = graph.node_count
    if n == 0:
        return ()

    dist = initial_matrix(graph)

    sb = StepBuilder()
    sb.explanation = (
        f"Initialise the {n}×{n} distance matrix: diagonal = 0, "
        f"direct edges = weight, everything else = ∞."
    )
    sb.overlay["matrix"] = _freeze(dist)
    yield sb.build()

    # ==============================================================
    # MAIN TRIPLE LOOP
    # ==============================================================
    for k in range(n):
        for i in range(n):
            for j in range(n):
                old = dist[i][j]
                via = dist[i][k] + dist[k][j]
                updated = via < old
                if updated:
                    dist[i][j] = via

                sb.reset()
                sb.current_node = k
                sb.mark_node(i, NodeState.FRONTIER)
                sb.mark_node(j, NodeState.FRONTIER)
                sb.mark_node(k, NodeState.CURRENT)
                sb.overlay["k"] = k
                sb.overlay["i"] = i
                sb.overlay["j"] = j
                sb.overlay["updated"] = updated
                sb.overlay["matrix"]  = _freeze(dist)
                if updated:
                    sb.explanation = (
                        f"k={k}: dist[{i}][{j}] via {k} = {_fmt(dist[i][k])} + {_fmt(dist[k][j])} "
                        f"= {via} < {_fmt(old)} → UPDATE."
                    )
                else:
                    sb.explanation = (
                        f"k={k}: dist[{i}][{j}] = {_fmt(old)} stays "
                        f"(via {k}: {_fmt(via)})."
                    )
                yield sb.build()

    final = _freeze(dist)
    sb.reset()
    sb.overlay["matrix"] = final
    sb.explanation = "All pairs computed."
    yield sb.build(is_final=True)
    return final


def _freeze(dist: List[List[float]]) -> Matrix:
    return tuple(tuple(row) for row in dist)
