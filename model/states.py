"""
states.py — Visual State Vocabulary
====================================
The string values algorithms write into `Step.node_states` /
`Step.edge_states`, and the two occupancy values a board cell can hold.

Renderers map these 1-to-1 onto their palette; the core never picks
colours itself.
"""

from enum import Enum


# ---------------------------------------------------------------------------
# Node State: what a graph node looks like at one step
# ---------------------------------------------------------------------------
class NodeState(Enum):
    UNVISITED  = "unvisited"   # default
    FRONTIER   = "frontier"    # "seen but not yet processed" (queue / heap)
    VISITED    = "visited"     # fully processed
    CURRENT    = "current"     # the node being expanded RIGHT NOW
    FINALIZED  = "finalized"   # distance fixed (Dijkstra) / post-order done (DFS)
    SOURCE     = "source"      # start node


# ---------------------------------------------------------------------------
# Edge State: what a graph edge looks like at one step
# ---------------------------------------------------------------------------
class EdgeState(Enum):
    DEFAULT   = "default"
    RELAXED   = "relaxed"    # considered and improved a distance
    IGNORED   = "ignored"    # considered, no improvement / rejected
    CHOSEN    = "chosen"     # accepted into the MST / traversal tree
    ACTIVE    = "active"     # the edge being examined RIGHT NOW


# ---------------------------------------------------------------------------
# Cell State: placement-board occupancy
# ---------------------------------------------------------------------------
class CellState(Enum):
    EMPTY    = "-"
    OCCUPIED = "#"
