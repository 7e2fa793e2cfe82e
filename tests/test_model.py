import pytest

from errors import PreconditionError
from model import Board, CellState, Edge, Graph, Solution, get_graph, graph_names


def test_edge_is_immutable_and_hashable():
    e = Edge(0, 1, 5)
    with pytest.raises(AttributeError):
        e.weight = 3
    assert e == Edge(0, 1, 5)
    assert len({e, Edge(0, 1, 5), Edge(1, 0, 5)}) == 2
    assert tuple(e) == (0, 1, 5)
    assert e.other_end(1) == 0
    assert e.other_end(7) is None


def test_graph_accepts_tuples_dicts_and_edges():
    g = Graph(3, [(0, 1), (1, 2, 4), {"source": 2, "target": 0, "weight": -1}, Edge(0, 2)])
    assert g.edge_count() == 4
    assert g.edges[0].weight == 1
    assert g.edges[2] == Edge(2, 0, -1)
    assert g.has_negative_edges()
    assert g.total_weight() == 1 + 4 - 1 + 1


def test_graph_rejects_dangling_node_ids():
    with pytest.raises(PreconditionError):
        Graph(2, [(0, 2)])
    with pytest.raises(PreconditionError):
        Graph(2, [(0, "b")])
    with pytest.raises(PreconditionError):
        Graph(-1)


def test_graph_rejects_malformed_edges():
    with pytest.raises(PreconditionError):
        Graph(2, [(0,)])
    with pytest.raises(PreconditionError):
        Graph(2, [{"source": 0}])


@pytest.mark.parametrize("weight", ["x", None, True, [1]])
def test_graph_rejects_non_numeric_weights(weight):
    with pytest.raises(PreconditionError):
        Graph(2, [(0, 1, weight)])
    with pytest.raises(PreconditionError):
        Graph(2, [{"source": 0, "target": 1, "weight": weight}])
    with pytest.raises(PreconditionError):
        Graph(2, [Edge(0, 1, weight)])


def test_graph_accepts_float_and_negative_weights():
    g = Graph(2, [(0, 1, -2.5)])
    assert g.has_negative_edges()


@pytest.mark.parametrize("edges", [None, "0-1", 7])
def test_graph_from_dict_needs_an_edge_list(edges):
    with pytest.raises(PreconditionError):
        Graph.from_dict({"node_count": 2, "edges": edges})


def test_adjacency_keeps_edge_list_order():
    g = Graph(4, [(0, 2), (1, 0), (0, 3)], directed=True)
    assert g.out_neighbours(0) == [(2, 0), (3, 2)]
    assert g.undirected_neighbours(0) == [(2, 0), (1, 1), (3, 2)]
    assert g.neighbours(0) == g.out_neighbours(0)
    assert g.degree(0) == 3


def test_require_node():
    g = Graph(3)
    assert g.require_node(2) == 2
    with pytest.raises(PreconditionError):
        g.require_node(3, "source")
    with pytest.raises(PreconditionError):
        g.require_node(True)


def test_graph_dict_round_trip():
    g = get_graph("negative_weight")
    back = Graph.from_dict(g.to_dict())
    assert back.node_count == g.node_count
    assert back.directed is True
    assert back.edges == g.edges


def test_graph_from_dict_needs_node_count():
    with pytest.raises(PreconditionError):
        Graph.from_dict({"edges": []})


def test_catalog():
    assert set(graph_names()) == {
        "traversal", "weighted", "negative_weight", "all_pairs", "spanning_tree", "dag",
    }
    assert get_graph("traversal").node_count == 8
    assert get_graph("weighted").node_count == 6
    assert get_graph("dag").directed
    # fresh copy every call
    assert get_graph("weighted") is not get_graph("weighted")
    with pytest.raises(PreconditionError):
        get_graph("nope")


def test_board_place_remove_and_snapshot():
    board = Board(3)
    board.place(0, 1)
    board.place(2, 2)
    assert board.placed == 2
    snap = board.snapshot()
    board.remove(0, 1)
    # snapshot unaffected by later mutation
    assert snap.positions() == [(0, 1), (2, 2)]
    assert snap.occupied_count() == 2
    assert snap.rows() == ["-#-", "---", "--#"]
    assert board.placed == 1
    assert board.cells[0][1] is CellState.EMPTY


def test_board_bounds_and_negative_size():
    board = Board(2)
    assert board.in_bounds(1, 1)
    assert not board.in_bounds(2, 0)
    assert not board.in_bounds(0, -1)
    with pytest.raises(PreconditionError):
        Board(-1)


def test_solution_is_immutable():
    sol = Board(2).snapshot()
    with pytest.raises(AttributeError):
        sol.size = 4
    assert sol == Board(2).snapshot()
    assert sol.to_dict() == {"size": 2, "positions": []}
