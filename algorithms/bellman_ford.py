"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
Single-source shortest paths over the graph read as DIRECTED, tolerant of
negative edge weights.

Structure:
  • Exactly V-1 full passes, relaxing one edge at a time in edge-list
    order (no early exit — every pass is shown).
  • One non-mutating check pass afterwards.  If any edge could still be
    relaxed there is a negative cycle reachable from the source; the
    result and the final step are FLAGGED rather than the distances being
    presented as if they were correct.

Yields a Step for:
  1. Initialisation
  2. Every edge examined in every pass (RELAXED or IGNORED)
  3. The final step (negative_cycle flag in the overlay)
"""

from typing import Dict, Generator, Optional

from model import Graph
from algorithms.dijkstra import INF, ShortestPaths, _fmt
from model.states import EdgeState
from algorithms.step import Step, StepBuilder


def bellman_ford(graph: Graph, source: int = 0) -> Generator[Step, None, ShortestPaths]:
    dist:   Dict[int, float]         = {nid: INF for nid in graph.nodes}
    parent: Dict[int, Optional[int]] = {nid: None for nid in graph.nodes}
    result = ShortestPaths(source=source, distances=dist, parents=parent)
    if graph.node_count == 0:
        return result
    graph.require_node(source, "source")

    V = graph.node_count
    dist[source] = 0

    # -- init step --
    sb = StepBuilder()
    sb.current_node = source
    sb.distances    = dict(dist)
    sb.explanation  = (
        f"Bellman-Ford init: dist[{source}] = 0, all others = ∞. "
        f"Will run {V - 1} pass(es) over all {graph.edge_count()} edges."
    )
    sb.overlay["pass"] = 0
    yield sb.build()

    # ==============================================================
    # MAIN PASSES
    # ==============================================================
    for pass_no in range(1, V):
        for edge_idx, edge in enumerate(graph.edges):
            u, v, w = edge.source, edge.target, edge.weight
            old = dist[v]
            improved = dist[u] != INF and dist[u] + w < dist[v]
            if improved:
                dist[v]   = dist[u] + w
                parent[v] = u

            sb.reset()
            sb.current_node = u
            sb.distances    = dict(dist)
            sb.overlay["pass"]         = pass_no
            sb.overlay["relaxed_edge"] = (u, v, w, improved)
            if improved:
                sb.examine_edge(edge_idx, EdgeState.RELAXED)
                sb.mark_frontier(v)
                sb.explanation = (
                    f"Pass {pass_no}: relax {u}→{v} (w={w}): {dist[u]} + {w} = {dist[v]} "
                    f"< {_fmt(old)} → UPDATE dist[{v}]."
                )
            else:
                sb.examine_edge(edge_idx, EdgeState.IGNORED)
                sb.explanation = (
                    f"Pass {pass_no}: edge {u}→{v} (w={w}) gives no improvement "
                    f"(dist[{u}] = {_fmt(dist[u])}, dist[{v}] = {_fmt(dist[v])})."
                )
            yield sb.build()

    # ==============================================================
    # NEGATIVE-CYCLE CHECK (read-only)
    # ==============================================================
    offending = None
    for edge_idx, edge in enumerate(graph.edges):
        if dist[edge.source] != INF and dist[edge.source] + edge.weight < dist[edge.target]:
            offending = edge_idx
            break
    result.negative_cycle = offending is not None

    sb.reset()
    sb.distances = dict(dist)
    sb.overlay["pass"]           = V - 1
    sb.overlay["negative_cycle"] = result.negative_cycle
    if offending is not None:
        e = graph.edge(offending)
        sb.examine_edge(offending, EdgeState.ACTIVE)
        sb.explanation = (
            f"⚠️ NEGATIVE CYCLE: edge {e.source}→{e.target} (w={e.weight}) can still be relaxed "
            f"after {V - 1} passes. These distances are NOT shortest paths."
        )
    else:
        sb.explanation = f"{V - 1} pass(es) complete, no negative cycle. Distances are final."
    yield sb.build(is_final=True)
    return result
