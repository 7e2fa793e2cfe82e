"""
dfs.py — Depth-First Search & Topological Sort
================================================
Generator-based DFS using an explicit stack of frames instead of Python
recursion, so every "enter node" and "finish node" event can be yielded
without nesting generators.

A frame is (node, position in its neighbour list).  Entering a node marks
it VISITED; a node is pushed onto the post-order stack only after all of
its descendants are finished.

  dfs              – undirected reading, from one source
  topological_sort – directed reading, roots 0 … V-1, result is the
                     REVERSE of the post-order stack.  Cyclic input is
                     rejected with CycleError before any step is yielded.

Yields a Step at:
  1. Enter a node          →  CURRENT / VISITED
  2. Descend along an edge →  edge CHOSEN
  3. Finish a node         →  FINALIZED, pushed on the post-order stack
  4. Final step
"""

from typing import Callable, Generator, List, Optional, Tuple

from errors import CycleError
from model import Graph
from algorithms.bfs import TraversalResult
from model.states import EdgeState
from algorithms.step import Step, StepBuilder


Neighbours = Callable[[int], List[Tuple[int, int]]]


# ---------------------------------------------------------------------------
# Shared explicit-stack walk
# ---------------------------------------------------------------------------
def _walk(
    neighbours: Neighbours,
    roots: List[int],
    sb: StepBuilder,
    result: TraversalResult,
) -> Generator[Step, None, None]:
    visited: List[int] = []
    finished: List[int] = []

    def snapshot_base(stack):
        sb.reset()
        sb.visited_set = list(visited)
        sb.set_frontier(node for node, _ in stack)
        sb.overlay["stack"]      = [node for node, _ in stack]
        sb.overlay["post_order"] = list(finished)

    for root in roots:
        if root in visited:
            continue

        stack: List[List[int]] = [[root, 0]]
        visited.append(root)
        result.order.append(root)

        snapshot_base(stack)
        sb.set_current(root)
        sb.explanation = f"Start a depth-first visit at {root}."
        yield sb.build()

        while stack:
            frame = stack[-1]
            node, pos = frame
            adj = neighbours(node)

            # next unvisited neighbour
            while pos < len(adj) and adj[pos][0] in visited:
                pos += 1
            frame[1] = pos + 1

            if pos < len(adj):
                nbr, edge_idx = adj[pos]
                stack.append([nbr, 0])
                visited.append(nbr)
                result.order.append(nbr)

                snapshot_base(stack)
                sb.examine_edge(edge_idx, EdgeState.CHOSEN)
                sb.set_current(nbr)
                sb.explanation = f"Descend {node} → {nbr}; {nbr} is now VISITED."
                yield sb.build()
                continue

            # all descendants done: post-visit
            stack.pop()
            finished.append(node)
            result.finish_order.append(node)

            snapshot_base(stack)
            sb.current_node = node
            sb.finalize(node)
            sb.explanation = (
                f"All neighbours of {node} explored — push {node} onto the post-order stack."
            )
            yield sb.build()


# ---------------------------------------------------------------------------
# DFS
# ---------------------------------------------------------------------------
def dfs(graph: Graph, source: int = 0) -> Generator[Step, None, TraversalResult]:
    result = TraversalResult(source=source)
    if graph.node_count == 0:
        return result
    graph.require_node(source, "source")

    sb = StepBuilder()
    yield from _walk(graph.undirected_neighbours, [source], sb, result)

    sb.reset()
    sb.visited_set = list(result.order)
    sb.overlay["post_order"] = list(result.finish_order)
    sb.explanation = f"DFS complete. Visit order: {', '.join(map(str, result.order))}."
    yield sb.build(is_final=True)
    return result


# ---------------------------------------------------------------------------
# Topological sort
# ---------------------------------------------------------------------------
def topological_sort(graph: Graph) -> Generator[Step, None, List[int]]:
    """
    Reverse post-order of a DFS over every root 0 … V-1, edges read as
    directed.  Raises CycleError on cyclic input.
    """
    cycle = find_cycle(graph)
    if cycle is not None:
        raise CycleError(cycle)
    if graph.node_count == 0:
        return []

    sb = StepBuilder()
    result = TraversalResult(source=0)
    yield from _walk(graph.out_neighbours, list(graph.nodes), sb, result)

    order = list(reversed(result.finish_order))
    sb.reset()
    sb.visited_set = list(result.order)
    sb.overlay["post_order"] = list(result.finish_order)
    sb.overlay["order"]      = list(order)
    sb.explanation = f"Reverse the post-order stack: {' → '.join(map(str, order))}."
    yield sb.build(is_final=True)
    return order


def find_cycle(graph: Graph) -> Optional[List[int]]:
    """
    Three-colour DFS over the directed reading.  Returns the cycle as a
    node list with the first node repeated last, or None for a DAG.
    """
    WHITE, GREY, BLACK = 0, 1, 2
    colour = [WHITE] * graph.node_count
    parent: List[Optional[int]] = [None] * graph.node_count

    for root in graph.nodes:
        if colour[root] != WHITE:
            continue
        colour[root] = GREY
        stack = [(root, iter(graph.out_neighbours(root)))]
        while stack:
            node, it = stack[-1]
            advanced = False
            for nbr, _ in it:
                if colour[nbr] == GREY:
                    cycle = [nbr]
                    cur = node
                    while cur != nbr:
                        cycle.append(cur)
                        cur = parent[cur]
                    cycle.append(nbr)
                    cycle.reverse()
                    return cycle
                if colour[nbr] == WHITE:
                    colour[nbr] = GREY
                    parent[nbr] = node
                    stack.append((nbr, iter(graph.out_neighbours(nbr))))
                    advanced = True
                    break
            if not advanced:
                colour[node] = BLACK
                stack.pop()
    return None
