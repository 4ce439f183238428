"""Integration tests for the Flask app: routes, config and per-browser state."""

import threading

import pytest

from main import create_app


def add_triangle(client):
    for src, dst, cost in (("a", "b", 1), ("a", "c", 4), ("b", "c", 1)):
        resp = client.post("/api/graph/edge", json={"from": src, "to": dst, "cost": cost})
        assert resp.status_code == 200


class TestIndex:

    def test_index_renders(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"Add Edge" in resp.data
        assert b"Start Search" in resp.data


class TestGraphRoutes:

    def test_add_edge(self, client):
        resp = client.post("/api/graph/edge", json={"from": " a", "to": "b", "cost": "2"})
        data = resp.get_json()
        assert data["edge"] == {"from": "A", "to": "B", "cost": 2}
        assert data["node_ids"] == ["A", "B"]
        assert data["edge_count"] == 1
        assert 'data-id="A"' in data["svg"]

    def test_add_edge_from_form_fields(self, client):
        resp = client.post("/api/graph/edge", data={"from": "x", "to": "y", "cost": "3"})
        assert resp.get_json()["node_ids"] == ["X", "Y"]

    def test_bad_cost_rejected(self, client):
        resp = client.post("/api/graph/edge", json={"from": "A", "to": "B", "cost": 0})
        assert resp.status_code == 400
        assert "positive cost" in resp.get_json()["error"]
        assert client.get("/api/graph").get_json()["graph"]["nodes"] == []

    def test_get_graph(self, client):
        add_triangle(client)
        graph = client.get("/api/graph").get_json()["graph"]
        assert graph["nodes"] == ["A", "B", "C"]
        assert {"source": "A", "target": "C", "cost": 4} in graph["edges"]


class TestRunAndPlayback:

    def test_unknown_start(self, client):
        add_triangle(client)
        resp = client.post("/api/run", json={"start": "Q", "goal": "C", "algorithm": "BFS"})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Please enter valid start and goal nodes."

    def test_missing_algorithm(self, client):
        add_triangle(client)
        resp = client.post("/api/run", json={"start": "A", "goal": "C", "algorithm": ""})
        assert resp.status_code == 400

    def test_ucs_run(self, client):
        add_triangle(client)
        data = client.post("/api/run", json={"start": "a", "goal": "c", "algorithm": "UCS"}).get_json()
        assert [s["node"] for s in data["steps"]] == ["A", "B", "C"]
        assert data["total_steps"] == 3
        assert data["metrics"]["path_cost"] == 2
        assert data["frontier"] == ["C: A -> C (Cost: 4)"]
        assert "Priority Queue" in data["frontier_html"]

    def test_playback_progress(self, client, scheduler):
        add_triangle(client)
        client.post("/api/run", json={"start": "A", "goal": "C", "algorithm": "UCS"})

        state = client.get("/api/state").get_json()
        assert state["state"] == "running"
        assert state["highlighted"] == []

        scheduler.advance(1.0)
        state = client.get("/api/state").get_json()
        assert state["highlighted"] == ["A"]
        assert state["current_node"] == "A"
        assert 'class="node current" data-id="A"' in state["svg"]

        scheduler.advance(10.0)
        state = client.get("/api/state").get_json()
        assert state["state"] == "idle"
        assert state["highlighted"] == ["A", "B", "C"]
        assert state["current_step"] == 3

    def test_reset(self, client, scheduler):
        add_triangle(client)
        client.post("/api/run", json={"start": "A", "goal": "C", "algorithm": "BFS"})
        scheduler.advance(1.0)

        data = client.post("/api/reset").get_json()
        assert data["state"] == "idle"
        assert data["total_steps"] == 0
        assert "Run a search" in data["analytics"]
        assert client.get("/api/graph").get_json()["graph"] == {"nodes": [], "edges": []}

        scheduler.advance(5.0)
        assert client.get("/api/state").get_json()["highlighted"] == []


class TestWorkspaces:

    def test_clients_do_not_share_graphs(self, app):
        first, second = app.test_client(), app.test_client()
        add_triangle(first)
        assert second.get("/api/graph").get_json()["graph"]["nodes"] == []
        assert len(first.get("/api/graph").get_json()["graph"]["nodes"]) == 3


class TestConfig:

    def test_tick_interval_from_env(self, monkeypatch):
        monkeypatch.setenv("SEARCHVIZ_TICK_INTERVAL", "0.5")
        app = create_app({"SECRET_KEY": "test"})
        assert app.config["TICK_INTERVAL"] == 0.5

    def test_mapping_overrides_env(self, monkeypatch):
        monkeypatch.setenv("SEARCHVIZ_TICK_INTERVAL", "0.5")
        app = create_app({"TICK_INTERVAL": 2.0})
        assert app.config["TICK_INTERVAL"] == 2.0

    @pytest.mark.parametrize("interval", [0, -1.0])
    def test_rejects_non_positive_interval(self, interval):
        with pytest.raises(ValueError):
            create_app({"TICK_INTERVAL": interval})

    def test_workspace_uses_configured_interval(self, scheduler):
        app = create_app({"SCHEDULER": scheduler, "TICK_INTERVAL": 0.25, "SECRET_KEY": "test"})
        client = app.test_client()
        add_triangle(client)
        client.post("/api/run", json={"start": "A", "goal": "C", "algorithm": "DFS"})
        scheduler.advance(0.25)
        assert client.get("/api/state").get_json()["highlighted"] == ["A"]


class TestRequestBodies:

    @pytest.mark.parametrize("body", [["A"], "x", 3])
    def test_non_object_json_run(self, client, body):
        add_triangle(client)
        resp = client.post("/api/run", json=body)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Please enter valid start and goal nodes."

    @pytest.mark.parametrize("body", [["A", "B", 1], "A"])
    def test_non_object_json_edge(self, client, body):
        resp = client.post("/api/graph/edge", json=body)
        assert resp.status_code == 400

    def test_unicode_digit_cost(self, client):
        resp = client.post("/api/graph/edge", json={"from": "A", "to": "B", "cost": "²"})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Please enter valid node names and a positive cost."


class TestWorkspaceEviction:

    @pytest.fixture
    def small_app(self, scheduler):
        return create_app({"SCHEDULER": scheduler, "SECRET_KEY": "test", "MAX_WORKSPACES": 2})

    def test_least_recent_workspace_dropped(self, small_app, scheduler):
        first, second, third = (small_app.test_client() for _ in range(3))
        add_triangle(first)
        first.post("/api/run", json={"start": "A", "goal": "C", "algorithm": "BFS"})
        assert len(scheduler.active_tasks) == 1

        second.get("/api/graph")
        third.get("/api/graph")

        assert len(small_app.extensions["searchviz"]) == 2
        assert scheduler.active_tasks == []
        assert first.get("/api/graph").get_json()["graph"]["nodes"] == []

    def test_recent_use_keeps_workspace(self, small_app):
        first, second, third = (small_app.test_client() for _ in range(3))
        add_triangle(first)
        second.get("/api/graph")
        first.get("/api/graph")
        third.get("/api/graph")
        assert len(first.get("/api/graph").get_json()["graph"]["nodes"]) == 3

    def test_cookieless_clients_stay_bounded(self, small_app):
        client = small_app.test_client(use_cookies=False)
        for _ in range(10):
            client.get("/api/state")
        assert len(small_app.extensions["searchviz"]) == 2

    def test_cap_must_be_positive(self):
        with pytest.raises(ValueError):
            create_app({"MAX_WORKSPACES": 0})


class TestWorkspaceLocking:

    def test_edit_waits_for_workspace_lock(self, app, client):
        client.get("/api/graph")
        with client.session_transaction() as sess:
            sid = sess["sid"]
        ws = app.extensions["searchviz"].get(sid)
        done = threading.Event()

        def add():
            client.post("/api/graph/edge", json={"from": "A", "to": "B", "cost": 1})
            done.set()

        worker = threading.Thread(target=add)
        with ws.lock:
            worker.start()
            assert not done.wait(timeout=0.2)
            assert ws.search.graph.node_ids() == []
        worker.join(timeout=5)
        assert done.is_set()
        assert ws.search.graph.node_ids() == ["A", "B"]


class TestServerConfig:

    def test_debug_off_by_default(self, monkeypatch):
        monkeypatch.delenv("SEARCHVIZ_DEBUG", raising=False)
        app = create_app()
        assert app.config["DEBUG"] is False
        assert app.config["HOST"] == "127.0.0.1"

    def test_debug_from_env(self, monkeypatch):
        monkeypatch.setenv("SEARCHVIZ_DEBUG", "true")
        assert create_app().config["DEBUG"] is True
