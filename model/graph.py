"""
graph.py — Graph Container
===========================
Passive value type the graph algorithms read from.  Nothing in here
mutates once the Graph is built.

Responsibilities:
  1. Hold a dense node set (0 … V-1) and an ORDERED edge list
  2. Adjacency queries, derived from the edge list   (neighbours, out_edges)
  3. Precondition checks                             (dangling NodeIds)
  4. Serialisation round-trip                        (to_dict / from_dict)

Design decisions:
  - Edge-list order is significant: BFS enqueues neighbours in that order,
    Bellman-Ford relaxes in that order, Kruskal breaks weight ties by it.
    The adjacency dict therefore stores edges in insertion order.
  - `directed` is a property of the whole graph.  `neighbours()` reads it;
    `undirected_neighbours()` / `out_neighbours()` are explicit so an
    algorithm that always treats edges one way never depends on the flag.
  - Adjacency entries carry the edge's index in `edges` so steps can name
    the edge being examined.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from errors import PreconditionError
from model.edge import Edge


EdgeLike = Union[Edge, Sequence]


class Graph:
    """
    Attributes:
        node_count : V — NodeIds are exactly 0 … V-1.
        edges      : Tuple of Edge in input order.
        directed   : Graph-level directedness (informational; see module doc).
        name       : Optional label, used by the catalog.
        _out       : {node_id: [(neighbour_id, edge_index), …]}  source → target
        _sym       : {node_id: [(neighbour_id, edge_index), …]}  both directions
    """

    def __init__(
        self,
        node_count: int,
        edges: Iterable[EdgeLike] = (),
        directed: bool = False,
        name: str = "",
    ):
        if node_count < 0:
            raise PreconditionError(f"node_count must be >= 0, got {node_count}")

        self.node_count: int         = node_count
        self.directed:   bool        = directed
        self.name:       str         = name
        self.edges:      Tuple[Edge, ...] = tuple(_coerce_edge(e) for e in edges)

        self._out: Dict[int, List[Tuple[int, int]]] = {n: [] for n in range(node_count)}
        self._sym: Dict[int, List[Tuple[int, int]]] = {n: [] for n in range(node_count)}

        for idx, edge in enumerate(self.edges):
            for end in (edge.source, edge.target):
                if not self.has_node(end):
                    raise PreconditionError(
                        f"Edge #{idx} {edge!r} references node {end!r}; "
                        f"valid NodeIds are 0..{node_count - 1}"
                    )
            self._out[edge.source].append((edge.target, idx))
            self._sym[edge.source].append((edge.target, idx))
            if edge.source != edge.target:
                self._sym[edge.target].append((edge.source, idx))

    # ==================================================================
    # NODE QUERIES
    # ==================================================================
    @property
    def nodes(self) -> range:
        return range(self.node_count)

    def has_node(self, node_id) -> bool:
        return isinstance(node_id, int) and not isinstance(node_id, bool) and 0 <= node_id < self.node_count

    def require_node(self, node_id, role: str = "node") -> int:
        """Return node_id if it exists, otherwise raise PreconditionError."""
        if not self.has_node(node_id):
            raise PreconditionError(
                f"{role} {node_id!r} is not in the graph (0..{self.node_count - 1})"
            )
        return node_id

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: int) -> List[Tuple[int, int]]:
        """[(neighbour_id, edge_index)] respecting the graph's own directedness."""
        if self.directed:
            return self.out_neighbours(node_id)
        return self.undirected_neighbours(node_id)

    def out_neighbours(self, node_id: int) -> List[Tuple[int, int]]:
        return list(self._out.get(node_id, []))

    def undirected_neighbours(self, node_id: int) -> List[Tuple[int, int]]:
        return list(self._sym.get(node_id, []))

    def edge(self, edge_index: int) -> Edge:
        return self.edges[edge_index]

    def degree(self, node_id: int) -> int:
        return len(self._sym.get(node_id, []))

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "name":       self.name,
            "node_count": self.node_count,
            "directed":   self.directed,
            "edges":      [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        try:
            node_count = int(data["node_count"])
        except (KeyError, TypeError, ValueError) as exc:
            raise PreconditionError(f"Graph needs an integer 'node_count': {exc}") from exc
        edges = data.get("edges", [])
        if not isinstance(edges, (list, tuple)):
            raise PreconditionError(f"Graph 'edges' must be a list, got {edges!r}")
        return cls(
            node_count=node_count,
            edges=edges,
            directed=bool(data.get("directed", False)),
            name=data.get("name", ""),
        )

    # ==================================================================
    # UTILITY
    # ==================================================================
    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges)

    def total_weight(self, edges: Optional[Iterable[Edge]] = None) -> float:
        return sum(e.weight for e in (self.edges if edges is None else edges))

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name else ""
        return f"Graph({label}nodes={self.node_count}, edges={self.edge_count()}, directed={self.directed})"


# ---------------------------------------------------------------------------
def _coerce_edge(raw: EdgeLike) -> Edge:
    """Accept Edge, (u, v), (u, v, w) or {"source", "target", "weight"}."""
    if isinstance(raw, Edge):
        edge = raw
    elif isinstance(raw, dict):
        try:
            edge = Edge.from_dict(raw)
        except (KeyError, TypeError, ValueError) as exc:
            raise PreconditionError(f"Malformed edge {raw!r}: {exc}") from exc
    elif isinstance(raw, (tuple, list)) and len(raw) in (2, 3):
        u, v = raw[0], raw[1]
        w = raw[2] if len(raw) == 3 else 1
        edge = Edge(u, v, w)
    else:
        raise PreconditionError(f"Malformed edge {raw!r}")

    if not is_number(edge.weight):
        raise PreconditionError(f"Edge {edge!r} weight must be a number, got {edge.weight!r}")
    return edge


def is_number(value) -> bool:
    """int or float, but not bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)
