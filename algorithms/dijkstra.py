"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based single-source Dijkstra over the graph read as undirected,
using a min-heap (heapq) of (distance, node_id).

Selection rule: the unvisited node with the minimum tentative distance;
ties go to the smallest NodeId.  Heap tuples compare distance first and
node id second, so popping the heap gives exactly that order.  Stale heap
entries (a node already finalised) are discarded without a step.

Yields a Step at:
  1. Initialise distances (∞ everywhere, 0 at source)
  2. Select minimum-distance node  →  CURRENT, distance FINAL
  3. Each relaxation attempt toward an unvisited neighbour
       → edge RELAXED (improved) or IGNORED (no improvement)
  4. Final: all reachable nodes finalised

Terminates when every node is visited or no reachable unvisited node
remains.  Negative edge weights are rejected with PreconditionError;
use Bellman-Ford for those graphs.
"""

import heapq
from dataclasses import dataclass, field
from typing import Dict, Generator, List, Optional

from errors import PreconditionError
from model import Graph
from model.states import EdgeState
from algorithms.step import Step, StepBuilder


INF = float("inf")


@dataclass
class ShortestPaths:
    source:         int
    distances:      Dict[int, float]          = field(default_factory=dict)
    parents:        Dict[int, Optional[int]]  = field(default_factory=dict)
    negative_cycle: bool                      = False

    def path_to(self, target: int) -> List[int]:
        """Node list source → target, or [] if target is unreachable."""
        if self.distances.get(target, INF) == INF:
            return []
        path, cur, guard = [], target, len(self.distances) + 1
        while cur is not None and guard > 0:
            path.append(cur)
            cur = self.parents.get(cur)
            guard -= 1
        path.reverse()
        return path

    def to_dict(self) -> dict:
        return {
            "source":         self.source,
            "distances":      {str(k): (v if v != INF else "∞") for k, v in self.distances.items()},
            "parents":        {str(k): v for k, v in self.parents.items()},
            "negative_cycle": self.negative_cycle,
        }


def dijkstra(graph: Graph, source: int = 0) -> Generator[Step, None, ShortestPaths]:
    dist:   Dict[int, float]         = {nid: INF for nid in graph.nodes}
    parent: Dict[int, Optional[int]] = {nid: None for nid in graph.nodes}
    result = ShortestPaths(source=source, distances=dist, parents=parent)
    if graph.node_count == 0:
        return result
    graph.require_node(source, "source")
    if graph.has_negative_edges():
        raise PreconditionError("Dijkstra needs non-negative edge weights; use Bellman-Ford")

    dist[source] = 0
    pq = [(0, source)]
    visited: List[int] = []

    # --- init step ---
    sb = StepBuilder()
    sb.current_node = source
    sb.mark_frontier(source)
    sb.set_frontier([source])
    sb.distances = dict(dist)
    sb.explanation = f"Initialise: all distances = ∞ except source {source} = 0."
    sb.overlay["queue"] = list(pq)
    yield sb.build()

    # --- main loop ---
    while pq and len(visited) < graph.node_count:
        d, node = heapq.heappop(pq)
        if node in visited:
            continue            # stale entry

        visited.append(node)

        sb.reset()
        sb.visited_set = list(visited)
        sb.set_current(node)
        sb.set_frontier(_frontier(pq, visited))
        sb.distances = dict(dist)
        sb.explanation = (
            f"Select {node} with distance {d} — smallest among unvisited nodes. "
            f"Its distance is now FINAL."
        )
        sb.overlay["queue"] = sorted(pq)
        yield sb.build()

        # -- relax incident edges --
        for nbr, edge_idx in graph.undirected_neighbours(node):
            if nbr in visited:
                continue
            w = graph.edge(edge_idx).weight
            new_dist = dist[node] + w
            improved = new_dist < dist[nbr]
            old = dist[nbr]
            if improved:
                dist[nbr]   = new_dist
                parent[nbr] = node
                heapq.heappush(pq, (new_dist, nbr))

            sb.reset()
            sb.visited_set  = list(visited)
            sb.current_node = node
            sb.set_frontier(_frontier(pq, visited))
            sb.distances    = dict(dist)
            sb.overlay["relaxed_edge"] = (node, nbr, w, improved)
            sb.overlay["queue"]        = sorted(pq)
            if improved:
                sb.examine_edge(edge_idx, EdgeState.RELAXED)
                sb.mark_frontier(nbr)
                sb.explanation = (
                    f"Relax {node}→{nbr}: {dist[node]} + {w} = {new_dist} "
                    f"< {_fmt(old)} → UPDATE."
                )
            else:
                sb.examine_edge(edge_idx, EdgeState.IGNORED)
                sb.explanation = (
                    f"Edge {node}→{nbr}: {dist[node]} + {w} = {new_dist} "
                    f"≥ {_fmt(old)} → no improvement."
                )
            yield sb.build()

    # --- done ---
    sb.reset()
    sb.visited_set = list(visited)
    sb.distances   = dict(dist)
    for nid in visited:
        sb.finalize(nid)
    unreachable = [nid for nid in graph.nodes if dist[nid] == INF]
    sb.explanation = "All reachable nodes finalised." + (
        f" Unreachable: {', '.join(map(str, unreachable))}." if unreachable else ""
    )
    yield sb.build(is_final=True)
    return result


# ---------------------------------------------------------------------------
def _frontier(pq, visited) -> List[int]:
    seen, out = set(), []
    for _, n in sorted(pq):
        if n not in visited and n not in seen:
            seen.add(n)
            out.append(n)
    return out


def _fmt(value: float) -> str:
    return "∞" if value == INF else str(value)
