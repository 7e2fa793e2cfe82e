import pytest

from main import create_app


@pytest.fixture
def app():
    return create_app({"TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()


def test_index(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.get_json()["state"] == "idle"


def test_list_algorithms(client):
    data = client.get("/api/algorithms").get_json()
    keys = [a["key"] for a in data["algorithms"]]
    assert "dijkstra" in keys and "n_queens" in keys
    sorting = client.get("/api/algorithms?family=sorting").get_json()["algorithms"]
    assert {a["family"] for a in sorting} == {"sorting"}
    stable = client.get("/api/algorithms?family=sorting&tag=stable").get_json()["algorithms"]
    assert [a["key"] for a in stable] == ["insertion_sort", "merge_sort"]


def test_list_graphs(client):
    graphs = client.get("/api/graphs").get_json()["graphs"]
    assert graphs["weighted"]["node_count"] == 6


def test_run_queens_reports_expected_count(client):
    data = client.post("/api/run", json={"algo_key": "n_queens", "n": 4, "delay_ms": 300}).get_json()
    assert data["total_steps"] == 2
    assert data["expected_solutions"] == 2
    assert data["warning"] is None
    assert data["result"][0]["positions"] == [[0, 1], [1, 3], [2, 0], [3, 2]]
    assert data["playback"]["state"] == "running"
    assert data["playback"]["delay_ms"] == 300


def test_run_large_board_warns(client):
    data = client.post("/api/run", json={"algo_key": "n_queens", "n": 9}).get_json()
    assert "safe bound of 8" in data["warning"]
    assert data["total_steps"] == 352
    assert "expected_solutions" not in data


def test_run_sorting_with_values(client):
    data = client.post("/api/run", json={"algo_key": "bubble_sort", "values": [5, 3, 8, 1]}).get_json()
    assert data["result"] == [1, 3, 5, 8]
    assert data["metrics"]["swaps"] == 4


def test_run_sorting_generated_array_is_clamped(client):
    data = client.post("/api/run", json={"algo_key": "selection_sort", "size": 500, "seed": 1}).get_json()
    assert len(data["result"]) == 50


def test_run_graph_with_source(client):
    data = client.post("/api/run", json={"algo_key": "dijkstra", "source": 0}).get_json()
    assert data["result"]["distances"]["5"] == 13


def test_state_and_controls(client):
    client.post("/api/run", json={"algo_key": "bfs", "delay_ms": 2000})
    state = client.get("/api/state").get_json()
    assert state["state"] == "running"
    assert state["index"] == 0
    assert state["algo_key"] == "bfs"
    assert state["current_step"]["kind"] == "graph"

    assert client.post("/api/playback/pause").get_json()["state"] == "paused"
    nxt = client.post("/api/playback/next").get_json()
    assert nxt["moved"] is True
    assert nxt["index"] == 1
    assert client.post("/api/playback/resume").get_json()["state"] == "running"

    speed = client.post("/api/playback/speed", json={"delay_ms": 50}).get_json()
    assert speed["delay_ms"] == 100
    speed = client.post("/api/playback/speed", json={"preset": "slow"}).get_json()
    assert speed["delay_ms"] == 2000

    cancelled = client.post("/api/playback/cancel").get_json()
    assert cancelled["state"] == "cancelled"
    assert client.get("/api/state").get_json()["current_step"] is None


def test_export_after_run(client):
    assert client.get("/api/export").status_code == 400
    client.post("/api/run", json={"algo_key": "kruskal"})
    data = client.get("/api/export").get_json()
    assert data["algo_key"] == "kruskal"
    assert data["result"]["total_weight"] == 14


def test_compare_default_pair(client):
    graph = {
        "node_count": 4,
        "directed": True,
        "edges": [[0, 1, 1], [1, 0, 1], [1, 2, 2], [2, 1, 2], [0, 3, 9], [3, 0, 9], [2, 3, 1], [3, 2, 1]],
    }
    data = client.post("/api/compare", json={"graph": graph, "source": 0}).get_json()
    assert data["left"]["algo_key"] == "dijkstra"
    assert data["right"]["algo_key"] == "bellman_ford"
    assert data["results_agree"] is True


def test_compare_sorts_share_one_array(client):
    data = client.post(
        "/api/compare",
        json={"algo_keys": ["merge_sort", "insertion_sort"], "size": 10, "seed": 4},
    ).get_json()
    assert data["results_agree"] is True


@pytest.mark.parametrize("body", [
    {"algo_key": "nope"},
    {"algo_key": "n_queens", "n": -1},
    {"algo_key": "n_queens", "n": "four"},
    {"algo_key": "n_queens", "piece": "bishop"},
    {"algo_key": "bfs", "source": 99},
    {"algo_key": "bfs", "graph": "nope"},
    {"algo_key": "bubble_sort", "values": "abc"},
    {"algo_key": "bubble_sort", "values": [3, "a", 1]},
    {"algo_key": "merge_sort", "values": [3, None, 1]},
    {"algo_key": "dijkstra", "graph": {"node_count": 2, "edges": [[0, 1, "x"]]}},
    {"algo_key": "bfs", "graph": {"node_count": 2, "edges": None}},
    {"algo_key": "bfs", "delay_ms": "soon"},
    {"algo_key": "topological_sort", "graph": {"node_count": 2, "edges": [[0, 1], [1, 0]], "directed": True}},
])
def test_bad_requests_are_400(client, body):
    resp = client.post("/api/run", json=body)
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_speed_requires_a_value(client):
    assert client.post("/api/playback/speed", json={}).status_code == 400
    assert client.post("/api/playback/speed", json={"delay_ms": "x"}).status_code == 400


def test_env_override(monkeypatch):
    monkeypatch.setenv("VISUALIZER_DEFAULT_DELAY_MS", "250")
    app = create_app()
    assert app.config["DEFAULT_DELAY_MS"] == 250
    assert app.extensions["playback"].delay_ms == 250
