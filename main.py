"""
main.py — Search Visualizer Flask App
=====================================
The web server that powers the visualizer.

Routes:
  GET  /                 – main UI
  GET  /api/graph        – current graph (nodes, edges) + SVG
  POST /api/graph/edge   – add one directed weighted edge
  POST /api/run          – run BFS / DFS / UCS and start playback
  GET  /api/state        – playback progress (polled by the page)
  POST /api/reset        – clear graph, trace and playback together

State management:
  Each browser gets a Workspace (SearchSession + NodeLayout) keyed by a
  random id kept in the Flask session cookie.  Workspaces live on the app
  object (app.extensions), in memory, one registry per app instance.

Configuration (app.config, overridable with SEARCHVIZ_* env vars):
  TICK_INTERVAL  – seconds between playback ticks (default 1.0)
  LAYOUT_SEED    – seed for random node placement (default: unseeded)
  SCHEDULER      – Scheduler instance for playback (default: TimerScheduler)
  MAX_WORKSPACES – browsers kept in memory before the least recent is dropped (256)
  DEBUG          – Flask debug mode for `python main.py` (default: off)
  HOST, PORT     – bind address for `python main.py` (default 127.0.0.1:5000)
"""

import logging
import secrets
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from flask import Flask, current_app, jsonify, render_template_string, request, session

from algorithms import list_algorithms
from engine import DEFAULT_TICK_INTERVAL, SearchSession, TimerScheduler
from ui import (
    FormError,
    NodeLayout,
    analytics_panel,
    edge_form,
    frontier_panel,
    parse_edge_form,
    parse_search_form,
    playback_status,
    pseudocode_viewer,
    render_canvas,
    search_form,
)

logger = logging.getLogger(__name__)

EXTENSION_KEY = "searchviz"

DEFAULT_MAX_WORKSPACES = 256


# ---------------------------------------------------------------------------
# Per-browser workspace
# ---------------------------------------------------------------------------
@dataclass
class Workspace:
    """
    One browser's graph, playback and layout.  Request handlers hold
    `lock` while they touch the graph or the layout; playback ticks never
    take it.
    """

    search: SearchSession
    layout: NodeLayout      = field(default_factory=NodeLayout)
    lock:   threading.RLock = field(default_factory=threading.RLock)

    def reset(self) -> None:
        with self.lock:
            self.search.reset()
            self.layout.reset()

    def render(self, playback: Optional[dict] = None) -> str:
        """SVG for `playback` (a SearchSession.state() dict), or for the live state."""
        with self.lock:
            if playback is None:
                playback = self.search.state()
            current = playback["current_node"] if playback["state"] == "running" else None
            return render_canvas(
                self.search.graph,
                self.layout,
                highlighted=playback["highlighted"],
                current=current,
            )


class WorkspaceRegistry:
    """
    Workspaces keyed by session id, created on first use.  At most
    `MAX_WORKSPACES` are kept; the least recently used one is stopped and
    dropped when a new browser arrives.
    """

    def __init__(self, app: Flask):
        self.app = app
        self.capacity = int(app.config["MAX_WORKSPACES"])
        self._workspaces: "OrderedDict[str, Workspace]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, sid: str) -> Workspace:
        with self._lock:
            ws = self._workspaces.get(sid)
            if ws is not None:
                self._workspaces.move_to_end(sid)
                return ws

            cfg = self.app.config
            ws = Workspace(
                search=SearchSession(
                    scheduler=cfg["SCHEDULER"] or TimerScheduler(),
                    interval=float(cfg["TICK_INTERVAL"]),
                ),
                layout=NodeLayout(seed=cfg["LAYOUT_SEED"]),
            )
            self._workspaces[sid] = ws
            logger.info("New workspace %s", sid[:8])

            while len(self._workspaces) > self.capacity:
                old_sid, old = self._workspaces.popitem(last=False)
                old.reset()
                logger.info("Evicted workspace %s", old_sid[:8])
            return ws

    def __len__(self) -> int:
        return len(self._workspaces)


def get_workspace() -> Workspace:
    if "sid" not in session:
        session["sid"] = secrets.token_hex(16)
    return current_app.extensions[EXTENSION_KEY].get(session["sid"])


def request_data() -> Mapping[str, Any]:
    """JSON object body if there is one, else form fields."""
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return body
    return request.form


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=secrets.token_hex(32),
        TICK_INTERVAL=DEFAULT_TICK_INTERVAL,
        LAYOUT_SEED=None,
        SCHEDULER=None,
        MAX_WORKSPACES=DEFAULT_MAX_WORKSPACES,
        DEBUG=False,
        HOST="127.0.0.1",
        PORT=5000,
    )
    app.config.from_prefixed_env("SEARCHVIZ")
    if config:
        app.config.update(config)

    if float(app.config["TICK_INTERVAL"]) <= 0:
        raise ValueError(f"TICK_INTERVAL must be positive: {app.config['TICK_INTERVAL']}")
    if int(app.config["MAX_WORKSPACES"]) < 1:
        raise ValueError(f"MAX_WORKSPACES must be at least 1: {app.config['MAX_WORKSPACES']}")

    app.extensions[EXTENSION_KEY] = WorkspaceRegistry(app)
    _register_routes(app)
    return app


def _register_routes(app: Flask) -> None:

    @app.errorhandler(FormError)
    def handle_form_error(err: FormError):
        app.logger.warning("Rejected input on %s: %s", request.path, err)
        return jsonify({"error": str(err)}), 400

    # -----------------------------------------------------------------------
    # Main UI Route
    # -----------------------------------------------------------------------
    @app.route("/")
    def index():
        ws = get_workspace()
        algos = list_algorithms()

        with ws.lock:
            record = ws.search.record
            playback = ws.search.state()
            return render_template_string(
                INDEX_TEMPLATE,
                svg=ws.render(playback),
                edge_form=edge_form(),
                search_form=search_form(algos, record.info.key.value if record else ""),
                frontier=frontier_panel(
                    record.final_frontier if record else (),
                    label=record.info.frontier_label if record else "Frontier",
                    show_cost=record.info.accumulates_cost if record else False,
                ),
                playback=playback_status(
                    playback["current_step"], playback["total_steps"], playback["state"] == "running"
                ),
                analytics=analytics_panel(record.metrics if record else None),
                pseudocode=pseudocode_viewer(record.info.pseudocode if record else []),
            )

    # -----------------------------------------------------------------------
    # API: Graph
    # -----------------------------------------------------------------------
    @app.route("/api/graph", methods=["GET"])
    def api_graph():
        ws = get_workspace()
        with ws.lock:
            return jsonify({"graph": ws.search.graph.to_dict(), "svg": ws.render()})

    @app.route("/api/graph/edge", methods=["POST"])
    def api_graph_edge():
        ws = get_workspace()
        form = parse_edge_form(request_data())
        with ws.lock:
            ws.search.add_edge(form.source, form.target, form.cost)
            graph = ws.search.graph
            return jsonify({
                "edge":       {"from": form.source, "to": form.target, "cost": form.cost},
                "node_ids":   graph.node_ids(),
                "edge_count": graph.edge_count(),
                "svg":        ws.render(),
            })

    # -----------------------------------------------------------------------
    # API: Search + Playback
    # -----------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        ws = get_workspace()
        data = request_data()
        with ws.lock:
            form = parse_search_form(data, ws.search.graph)
            record = ws.search.run(form.algorithm, form.start, form.goal)
            svg = ws.render()
        info = record.info

        payload = record.export()
        payload.update({
            "total_steps": len(record.trace),
            "svg":         svg,
            "frontier_html": frontier_panel(
                record.final_frontier, label=info.frontier_label, show_cost=info.accumulates_cost
            ),
            "analytics":   analytics_panel(record.metrics),
            "pseudocode":  pseudocode_viewer(info.pseudocode),
        })
        return jsonify(payload)

    @app.route("/api/state", methods=["GET"])
    def api_state():
        ws = get_workspace()
        with ws.lock:
            state = ws.search.state()
            state["svg"] = ws.render(state)
        return jsonify(state)

    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        ws = get_workspace()
        with ws.lock:
            ws.reset()
            state = ws.search.state()
            state["svg"] = ws.render(state)
        state.update({
            "frontier_html": frontier_panel(label="Frontier"),
            "analytics":     analytics_panel(),
        })
        return jsonify(state)


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Search Visualizer — BFS / DFS / UCS</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --text-muted: #484f58;
      --accent-cyan: #0ea5e9;
      --accent-teal: #06b6d4;
      --accent-emerald: #10b981;
      --accent-amber: #f59e0b;
      --accent-rose: #f43f5e;
    }
    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }
    #sidebar {
      width: 340px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }
    #main { flex: 1; display: flex; flex-direction: column; }
    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
    }
    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 20px;
      padding: 20px;
      background: var(--bg-dark);
      max-height: 320px;
      overflow: auto;
    }
    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 18px;
      margin-bottom: 16px;
    }
    .panel h3 {
      font-size: 13px;
      font-weight: 700;
      margin-bottom: 14px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }
    button {
      background: linear-gradient(135deg, var(--accent-cyan), var(--accent-teal));
      color: #fff;
      border: none;
      padding: 10px 16px;
      border-radius: 8px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
      margin-top: 8px;
    }
    .btn-primary { background: linear-gradient(135deg, var(--accent-emerald), #059669); }
    .btn-secondary { background: var(--bg-darker); border: 1px solid var(--border); }
    select, input[type="text"], input[type="number"] {
      width: 100%;
      padding: 10px 12px;
      margin: 6px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
      font-size: 13px;
    }
    label {
      display: block;
      margin: 10px 0 4px;
      font-size: 12px;
      color: var(--text-secondary);
      text-transform: uppercase;
    }
    #queueList { list-style: none; font-family: 'JetBrains Mono', monospace; font-size: 12px; }
    #queueList li { padding: 4px 0; color: var(--text-secondary); }
    .code-line { font-family: 'JetBrains Mono', monospace; font-size: 12px; white-space: pre; }
    .placeholder { color: var(--text-muted); font-style: italic; }
    .running-badge, .idle-badge {
      padding: 3px 8px; border-radius: 6px; font-size: 11px; font-weight: 700; margin-left: 8px;
    }
    .running-badge { background: var(--accent-emerald); }
    .idle-badge { background: var(--border); }
    #error { color: var(--accent-rose); font-size: 12px; min-height: 16px; }
    table { width: 100%; font-size: 13px; }
    table td:last-child { text-align: right; color: var(--accent-cyan); }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="edge-form">{{ edge_form|safe }}</div>
    <div id="search-form">{{ search_form|safe }}</div>
    <div id="error"></div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>
    <div id="bottom-panel">
      <div id="frontier">{{ frontier|safe }}</div>
      <div id="pseudocode">{{ pseudocode|safe }}</div>
    </div>
  </div>

  <script>
    let poller = null;

    async function call(method, url, data) {
      const res = await fetch(url, {
        method,
        headers: {'Content-Type': 'application/json'},
        body: data === undefined ? undefined : JSON.stringify(data),
      });
      const body = await res.json();
      document.getElementById('error').textContent = body.error || '';
      return body;
    }

    function setPlayback(state) {
      document.getElementById('current-step').textContent = state.current_step;
      document.getElementById('total-steps').textContent = state.total_steps;
    }

    async function poll() {
      const state = await call('GET', '/api/state');
      document.getElementById('canvas-svg').innerHTML = state.svg;
      setPlayback(state);
      if (state.state !== 'running') {
        clearInterval(poller);
        poller = null;
      }
    }

    document.getElementById('addEdgeForm').addEventListener('submit', async (e) => {
      e.preventDefault();
      const data = await call('POST', '/api/graph/edge', {
        from: document.getElementById('fromNode').value,
        to: document.getElementById('toNode').value,
        cost: document.getElementById('cost').value,
      });
      if (data.svg) {
        document.getElementById('canvas-svg').innerHTML = data.svg;
        e.target.reset();
      }
    });

    document.getElementById('startButton').addEventListener('click', async () => {
      const data = await call('POST', '/api/run', {
        start: document.getElementById('startNode').value,
        goal: document.getElementById('goalNode').value,
        algorithm: document.getElementById('algorithm').value,
      });
      if (data.error) return;
      document.getElementById('canvas-svg').innerHTML = data.svg;
      document.getElementById('frontier').innerHTML = data.frontier_html;
      document.getElementById('analytics').innerHTML = data.analytics;
      document.getElementById('pseudocode').innerHTML = data.pseudocode;
      setPlayback({current_step: 0, total_steps: data.total_steps});
      if (poller) clearInterval(poller);
      poller = setInterval(poll, 250);
    });

    document.getElementById('resetButton').addEventListener('click', async () => {
      if (poller) clearInterval(poller);
      poller = null;
      const data = await call('POST', '/api/reset');
      document.getElementById('canvas-svg').innerHTML = data.svg;
      document.getElementById('frontier').innerHTML = data.frontier_html;
      document.getElementById('analytics').innerHTML = data.analytics;
      setPlayback(data);
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    host, port = app.config["HOST"], int(app.config["PORT"])
    logger.info("Search Visualizer on http://%s:%d", host, port)
    app.run(debug=app.config["DEBUG"], host=host, port=port)
