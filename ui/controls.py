"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • edge_form           – from / to / cost inputs + Add Edge
  • search_form         – start / goal / algorithm + Start Search + Reset
  • frontier_panel      – live queue / stack / priority-queue contents
  • analytics_panel     – steps, nodes visited, path, cost, …
  • playback_status     – step counter and idle / running badge
  • pseudocode_viewer   – pseudocode of the selected algorithm

Design:
  - All panels are stateless render functions.
  - Output is raw HTML strings (no templating engine).
  - Anything that came from the user (node ids, paths) is escaped.
"""

from typing import List, Optional, Sequence

from markupsafe import escape

from algorithms import AlgoInfo
from algorithms.step import FrontierEntry
from engine import RunMetrics


# ---------------------------------------------------------------------------
# Edge Form
# ---------------------------------------------------------------------------
def edge_form() -> str:
    return """
    <div class="panel edge-form">
      <h3>➕ Add Edge</h3>
      <form id="addEdgeForm">
        <label>From: <input type="text" id="fromNode" maxlength="12" required></label>
        <label>To: <input type="text" id="toNode" maxlength="12" required></label>
        <label>Cost: <input type="number" id="cost" min="1" step="1" required></label>
        <button type="submit" class="btn-secondary">Add Edge</button>
      </form>
    </div>
    """


# ---------------------------------------------------------------------------
# Search Form
# ---------------------------------------------------------------------------
def search_form(algorithms: Sequence[AlgoInfo], selected_key: str = "") -> str:
    options = ['<option value="">-- Select --</option>']
    for algo in algorithms:
        sel = 'selected' if algo.key.value == selected_key else ''
        options.append(
            f'<option value="{algo.key.value}" title="{escape(algo.description)}" {sel}>'
            f'{algo.label} — {algo.complexity_time}</option>'
        )

    return f"""
    <div class="panel search-form">
      <h3>🧠 Search</h3>
      <label>Start: <input type="text" id="startNode" maxlength="12"></label>
      <label>Goal: <input type="text" id="goalNode" maxlength="12"></label>
      <label>Algorithm:
        <select id="algorithm">
          {''.join(options)}
        </select>
      </label>
      <button id="startButton" class="btn-primary">▶ Start Search</button>
      <button id="resetButton" class="btn-secondary">Reset</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Frontier Panel
# ---------------------------------------------------------------------------
def frontier_panel(
    entries: Sequence[FrontierEntry] = (),
    label: str = "Queue",
    show_cost: bool = False,
) -> str:
    items = [f"<li>{escape(e.describe(show_cost))}</li>" for e in entries]
    body = "".join(items) if items else '<li class="placeholder">empty</li>'
    return f"""
    <div class="panel frontier-panel">
      <h3>📋 {escape(label)}</h3>
      <ul id="queueList">{body}</ul>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Run a search to see metrics.</p>
        </div>
        """

    status = "✅ Reached" if metrics.goal_reached else "❌ Not reached"
    path = escape(" → ".join(metrics.path)) if metrics.path else "—"
    cost = metrics.path_cost if metrics.path_cost is not None else "—"

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {escape(metrics.algo_label)}</h3>
      <table>
        <tr><td>Goal:</td><td><strong>{status}</strong></td></tr>
        <tr><td>Total Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Nodes Visited:</td><td><strong>{metrics.nodes_visited}</strong></td></tr>
        <tr><td>Re-pops Skipped:</td><td><strong>{metrics.repops}</strong></td></tr>
        <tr><td>Path:</td><td><strong>{path}</strong></td></tr>
        <tr><td>Path Length:</td><td><strong>{metrics.path_length} edges</strong></td></tr>
        <tr><td>Path Cost:</td><td><strong>{cost}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Playback Status
# ---------------------------------------------------------------------------
def playback_status(current_step: int = 0, total_steps: int = 0, is_running: bool = False) -> str:
    badge = '<span class="running-badge">RUNNING</span>' if is_running else '<span class="idle-badge">IDLE</span>'
    return f"""
    <div class="panel playback-status">
      Step <span id="current-step">{current_step}</span> / <span id="total-steps">{total_steps}</span>
      {badge}
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str]) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div class="placeholder">Select an algorithm to view pseudocode</div>
        </div>
        """

    lines_html = [
        f'<div class="code-line" data-line="{i}">{escape(line)}</div>'
        for i, line in enumerate(pseudocode_lines)
    ]
    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """
