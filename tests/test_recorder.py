import json
import logging

import pytest

from errors import CycleError, PlaybackError, PreconditionError
from model import Graph, get_graph
from algorithms import GRAPH, PLACEMENT, SORTING, REGISTRY, algorithms_by_family, get_algorithm, list_algorithms
from algorithms.bfs import TraversalResult
from algorithms.dijkstra import ShortestPaths
from engine import Recorder, Trace, compare


def record(algo_key, **params):
    rec = Recorder()
    rec.start(algo_key, **params)
    rec.run_to_completion()
    return rec


class TestRegistry:
    def test_every_entry_is_consistent(self):
        for key, info in REGISTRY.items():
            assert info.key == key
            assert info.family in (GRAPH, SORTING, PLACEMENT)
            assert callable(info.fn)
            if info.family == GRAPH:
                assert info.default_graph is not None
                get_graph(info.default_graph)

    def test_lookup_helpers(self):
        assert get_algorithm("kruskal").label == "Kruskal's MST"
        assert get_algorithm("nope") is None
        assert len(list_algorithms()) == len(REGISTRY)
        assert {a.key for a in algorithms_by_family(SORTING)} == {
            "bubble_sort", "insertion_sort", "selection_sort", "merge_sort",
        }
        assert {a.key for a in algorithms_by_family(PLACEMENT)} == {
            "n_queens", "n_knights", "n_rooks",
        }

    def test_to_dict_is_json_ready(self):
        json.dumps([a.to_dict() for a in list_algorithms()])


class TestRecorder:
    @pytest.mark.parametrize("key", sorted(REGISTRY))
    def test_every_algorithm_runs_with_defaults(self, key):
        params = {"values": [4, 2, 3, 1]} if REGISTRY[key].family == SORTING else {}
        rec = record(key, **params)
        assert isinstance(rec.trace, Trace)
        assert rec.trace.algo_key == key
        assert rec.metrics.total_steps == len(rec.trace) > 0
        assert rec.trace.steps[-1].is_final
        json.dumps(rec.export())

    def test_graph_run_captures_result(self):
        rec = record("bfs", graph="traversal", source=0)
        assert isinstance(rec.result, TraversalResult)
        assert rec.result.order == [0, 1, 2, 6, 3, 7, 4, 5]
        assert rec.metrics.nodes_visited == 8
        assert rec.metrics.family == GRAPH

    def test_graph_from_dict(self):
        rec = record("dijkstra", graph={"node_count": 2, "edges": [[0, 1, 7]]}, source=1)
        assert rec.result.distances == {0: 7, 1: 0}

    def test_sorting_metrics(self):
        rec = record("bubble_sort", values=[5, 3, 8, 1])
        assert rec.result == [1, 3, 5, 8]
        assert rec.metrics.swaps == 4
        assert rec.metrics.comparisons == 6

    def test_sorting_generated_array(self):
        rec = record("merge_sort", size=12, seed=5)
        assert len(rec.result) == 12
        assert rec.result == sorted(rec.params["values"])

    def test_placement_metrics(self):
        rec = record("n_queens", n=6)
        assert rec.metrics.solutions == 4
        assert rec.params == {"n": 6, "piece": "queen"}
        assert record("n_rooks", n=3).metrics.solutions == 6

    def test_placement_without_solutions_has_empty_trace(self):
        rec = record("n_queens", n=3)
        assert rec.trace.steps == ()
        assert rec.result == []

    def test_negative_cycle_reaches_metrics(self):
        g = Graph(3, [(0, 1, 1), (1, 2, -2), (2, 1, 1)], directed=True)
        rec = record("bellman_ford", graph=g, source=0)
        assert rec.metrics.negative_cycle is True

    def test_preconditions_raise_in_start(self):
        rec = Recorder()
        with pytest.raises(PreconditionError):
            rec.start("nope")
        with pytest.raises(PreconditionError):
            rec.start("bfs", source=99)
        with pytest.raises(PreconditionError):
            rec.start("n_queens", n=-1)
        with pytest.raises(PreconditionError):
            rec.start("dfs", graph=object())
        cyclic = Graph(2, [(0, 1), (1, 0)], directed=True)
        with pytest.raises(CycleError):
            rec.start("topological_sort", graph=cyclic)

    def test_run_before_start(self):
        with pytest.raises(PlaybackError):
            Recorder().run_to_completion()

    def test_completion_is_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="engine.recorder"):
            record("selection_sort", values=[2, 1])
        assert "selection_sort finished" in caplog.text

    def test_export_shape(self):
        rec = record("floyd_warshall")
        data = rec.export()
        assert data["algo_key"] == "floyd_warshall"
        assert data["params"]["graph"]["name"] == "all_pairs"
        assert data["result"][4][0] == "∞"
        assert data["steps"][0]["kind"] == "graph"
        assert len(data["steps"]) == rec.metrics.total_steps


class TestCompare:
    def test_dijkstra_and_bellman_ford_agree(self):
        g = get_graph("weighted")
        edges = [(e.source, e.target, e.weight) for e in g.edges]
        edges += [(e.target, e.source, e.weight) for e in g.edges]
        both_ways = Graph(g.node_count, edges, directed=True)

        left  = record("dijkstra", graph=both_ways, source=0)
        right = record("bellman_ford", graph=both_ways, source=0)
        result = compare(left, right)
        assert result.results_agree
        assert result.winner_steps == "Dijkstra's Algorithm"
        assert isinstance(left.result, ShortestPaths)

    def test_different_answers_disagree(self):
        left  = record("bfs", graph="traversal")
        right = record("dfs", graph="traversal")
        result = compare(left, right)
        assert not result.results_agree

    def test_sorts_agree_on_same_input(self):
        values = [9, 1, 8, 2, 7, 3]
        result = compare(record("merge_sort", values=values), record("insertion_sort", values=values))
        assert result.results_agree
        assert result.winner_steps in ("Merge Sort", "Insertion Sort", "tie")
