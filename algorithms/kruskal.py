"""
kruskal.py — Kruskal's Minimum Spanning Tree
=============================================
Consider edges in ascending weight order (stable sort, so equal weights
keep input order); accept an edge if its endpoints lie in different
union-find components, otherwise reject it.  One Step per edge.

The graph is read as undirected.  The catalog graph lists some edges in
both directions; the second copy is simply rejected because its
endpoints are already connected.

For a disconnected graph the result is a spanning forest.
"""

from dataclasses import dataclass, field
from typing import Generator, List, Tuple

from model import Edge, Graph
from model.states import EdgeState
from algorithms.step import Step, StepBuilder


class DisjointSet:
    """Union-find with path compression and union by rank."""

    def __init__(self, size: int):
        self.parent = list(range(size))
        self.rank   = [0] * size

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:          # path compression
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: int, b: int) -> bool:
        """Merge the components of a and b.  False if they were already one."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            self.parent[ra] = rb
        elif self.rank[ra] > self.rank[rb]:
            self.parent[rb] = ra
        else:
            self.parent[rb] = ra
            self.rank[ra] += 1
        return True


@dataclass
class SpanningTree:
    edges:        List[Edge]  = field(default_factory=list)
    edge_indices: List[int]   = field(default_factory=list)
    total_weight: float       = 0

    def to_dict(self) -> dict:
        return {
            "edges":        [e.to_dict() for e in self.edges],
            "edge_indices": list(self.edge_indices),
            "total_weight": self.total_weight,
        }


def sorted_edges(graph: Graph) -> List[Tuple[int, Edge]]:
    """(edge_index, edge) by ascending weight; Python's sort is stable."""
    return sorted(enumerate(graph.edges), key=lambda pair: pair[1].weight)


def kruskal(graph: Graph) -> Generator[Step, None, SpanningTree]:
    result = SpanningTree()
    if graph.node_count == 0:
        return result

    dsu = DisjointSet(graph.node_count)
    sb  = StepBuilder()
    order = sorted_edges(graph)

    sb.explanation = f"Sort {len(order)} edges by weight; every node starts in its own component."
    sb.overlay["order"] = [idx for idx, _ in order]
    sb.overlay["mst"]   = []
    yield sb.build()

    for edge_idx, edge in order:
        accepted = dsu.union(edge.source, edge.target)
        if accepted:
            result.edges.append(edge)
            result.edge_indices.append(edge_idx)
            result.total_weight += edge.weight

        sb.reset()
        sb.overlay["mst"]          = list(result.edge_indices)
        sb.overlay["total_weight"] = result.total_weight
        sb.overlay["accepted"]     = accepted
        if accepted:
            sb.examine_edge(edge_idx, EdgeState.CHOSEN)
            sb.explanation = (
                f"Edge {edge.source}–{edge.target} (w={edge.weight}) joins two components → ACCEPT."
            )
        else:
            sb.examine_edge(edge_idx, EdgeState.IGNORED)
            sb.explanation = (
                f"Edge {edge.source}–{edge.target} (w={edge.weight}) would close a cycle → REJECT."
            )
        yield sb.build()

    sb.reset()
    sb.overlay["mst"]          = list(result.edge_indices)
    sb.overlay["total_weight"] = result.total_weight
    sb.explanation = (
        f"All edges considered: {len(result.edges)} edge(s), total weight {result.total_weight}."
    )
    yield sb.build(is_final=True)
    return result
