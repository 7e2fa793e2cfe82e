"""
edge.py — Weighted Edge
=======================
One `(source, target, weight)` triple of a graph's edge list.

Design decisions:
  - Endpoints are dense integer NodeIds, NOT node objects, so edges stay
    hashable and trivially serialisable.
  - Edges are immutable.  The edge's position in `Graph.edges` is its id:
    algorithms report `current_edge` as that index, so two parallel edges
    between the same pair never get confused.
  - Direction is a graph-level property; the same Edge is read as
    symmetric by BFS / DFS / Dijkstra / Kruskal and as directed by
    Bellman-Ford / Floyd-Warshall / topological sort.
"""

from typing import Optional


class Edge:
    """
    Attributes:
        source : Tail NodeId.
        target : Head NodeId.
        weight : Signed numeric cost (default 1). Negative for Bellman-Ford demos.
    """

    __slots__ = ("source", "target", "weight")

    def __init__(self, source: int, target: int, weight: float = 1):
        object.__setattr__(self, "source", source)
        object.__setattr__(self, "target", target)
        object.__setattr__(self, "weight", weight)

    def __setattr__(self, name, value):
        raise AttributeError("Edge is immutable")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def other_end(self, node_id: int) -> Optional[int]:
        """Given one endpoint, return the other (undirected reading)."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"source": self.source, "target": self.target, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=int(data["source"]),
            target=int(data["target"]),
            weight=data.get("weight", 1),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __iter__(self):
        yield self.source
        yield self.target
        yield self.weight

    def __repr__(self) -> str:
        return f"Edge({self.source}, {self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Edge)
            and self.source == other.source
            and self.target == other.target
            and self.weight == other.weight
        )

    def __hash__(self) -> int:
        return hash((self.source, self.target, self.weight))
