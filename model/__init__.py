"""
model/
------
Core data layer.  Public API:

    from model import Graph, Edge, Board, Solution
    from model import NodeState, EdgeState, CellState
    from model import get_graph
"""

from model.states  import NodeState, EdgeState, CellState
from model.edge    import Edge
from model.graph   import Graph
from model.board   import Board, Solution
from model.catalog import get_graph, graph_names, GRAPHS

__all__ = [
    "NodeState", "EdgeState", "CellState",
    "Edge",
    "Graph",
    "Board",     "Solution",
    "get_graph", "graph_names", "GRAPHS",
]
