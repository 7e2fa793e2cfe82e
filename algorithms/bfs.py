"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS over the graph read as undirected.  Yields a Step
at every meaningful event:
  1. Initialise: source placed into the queue
  2. Dequeue a node  →  mark it CURRENT + VISITED
  3. Enqueue each unvisited, not-yet-queued neighbour  →  FRONTIER
  4. Final step: queue empty

Neighbour enqueue order is edge-list order.  A node is marked visited
when it is dequeued, and a neighbour is enqueued only if it is neither
visited nor already waiting in the queue.

Returns a TraversalResult with the visit order.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Generator, List

from model import Graph
from model.states import EdgeState
from algorithms.step import Step, StepBuilder


@dataclass
class TraversalResult:
    source:       int
    order:        List[int] = field(default_factory=list)   # visit (pre-)order
    finish_order: List[int] = field(default_factory=list)   # post-order (DFS only)

    def to_dict(self) -> dict:
        return {"source": self.source, "order": self.order, "finish_order": self.finish_order}


def bfs(graph: Graph, source: int = 0) -> Generator[Step, None, TraversalResult]:
    """
    Args:
        graph  : The graph to traverse (edges read as symmetric).
        source : Start NodeId.

    Yields:
        Step – one per event (init, dequeue, enqueue, done).
    """
    result = TraversalResult(source=source)
    if graph.node_count == 0:
        return result
    graph.require_node(source, "source")

    sb      = StepBuilder()
    queue   = deque([source])
    visited: List[int] = []

    # --- initialisation step ---
    sb.current_node = source
    sb.mark_frontier(source)
    sb.set_frontier(queue)
    sb.explanation = f"Initialise: source node {source} is placed into the queue."
    sb.overlay["queue"] = list(queue)
    yield sb.build()

    # --- main loop ---
    while queue:
        node = queue.popleft()
        visited.append(node)
        result.order.append(node)

        # -- dequeue event --
        sb.reset()
        sb.visited_set = list(visited)
        sb.set_current(node)
        sb.set_frontier(queue)
        sb.explanation = (
            f"Dequeue node {node} and mark it VISITED. "
            f"BFS always expands the node that was discovered earliest (FIFO)."
        )
        sb.overlay["queue"] = list(queue)
        yield sb.build()

        # -- enqueue neighbours --
        for nbr, edge_idx in graph.undirected_neighbours(node):
            if nbr in visited or nbr in queue:
                continue
            queue.append(nbr)

            sb.reset()
            sb.visited_set  = list(visited)
            sb.current_node = node
            sb.examine_edge(edge_idx, EdgeState.CHOSEN)
            sb.mark_frontier(nbr)
            sb.set_frontier(queue)
            sb.explanation  = f"Enqueue neighbour {nbr} of {node}."
            sb.overlay["queue"] = list(queue)
            yield sb.build()

    # --- exhausted ---
    sb.reset()
    sb.visited_set = list(visited)
    sb.explanation = f"Queue is empty. Visit order: {', '.join(map(str, visited))}."
    sb.overlay["queue"] = []
    yield sb.build(is_final=True)
    return result
