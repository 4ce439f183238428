"""
canvas.py — SVG Graph Renderer
================================
Pure rendering function: GraphStore + layout + highlighted nodes → SVG.

The renderer consumes:
  • graph       – the GraphStore (nodes, directed weighted edges)
  • layout      – NodeLayout with a position for every node
  • highlighted – node ids the playback has marked visited so far
  • config      – visual config (canvas size, colors, fonts, …)

Design decisions:
  - Positions are NOT part of the graph.  NodeLayout hands out a random
    spot the first time it sees a node and remembers it until reset.
  - render_canvas never mutates the graph; it may grow the layout.
  - Node ids are user input, so every label is escaped.
  - Parallel edges share a line; their cost labels are stacked along the
    perpendicular so each stays readable.
"""

import math
import random
from typing import Dict, Iterable, Optional, Tuple

from markupsafe import escape

from graph import GraphStore


# ---------------------------------------------------------------------------
# Visual config: palette and dimensions
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 800
    height: int = 600
    bg:     str = "#0d1117"

    # node colors (state → fill)
    node_colors: Dict[str, str] = {
        "unvisited": "#1c2128",   # dark grey
        "visited":   "#f59e0b",   # amber, highlighted by playback
        "current":   "#06b6d4",   # teal, latest tick
    }

    edge_color:         str = "#484f58"

    # node
    node_radius:        int = 20
    node_stroke:        str = "#30363d"
    node_stroke_width:  int = 2
    node_label_color:   str = "#e6edf3"
    node_label_size:    int = 13

    # edge
    edge_width:         int = 2
    edge_arrow_size:    int = 10
    edge_weight_color:  str = "#7d8590"
    edge_weight_size:   int = 12
    edge_weight_bg:     str = "#161b22"

    # random placement box (x range, y range)
    layout_x: Tuple[float, float] = (50.0, 750.0)
    layout_y: Tuple[float, float] = (50.0, 550.0)


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Node layout
# ---------------------------------------------------------------------------
class NodeLayout:
    """
    Remembers where each node is drawn.

    Attributes:
        positions : {node_id: (x, y)} in first-seen order.
    """

    def __init__(self, seed: Optional[int] = None, config: CanvasConfig = CONFIG):
        self._rng = random.Random(seed)
        self.config = config
        self.positions: Dict[str, Tuple[float, float]] = {}

    def position(self, node_id: str) -> Tuple[float, float]:
        if node_id not in self.positions:
            self.positions[node_id] = (
                self._rng.uniform(*self.config.layout_x),
                self._rng.uniform(*self.config.layout_y),
            )
        return self.positions[node_id]

    def place_all(self, node_ids: Iterable[str]) -> None:
        for nid in node_ids:
            self.position(nid)

    def reset(self) -> None:
        self.positions.clear()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    graph: GraphStore,
    layout: NodeLayout,
    highlighted: Iterable[str] = (),
    current: Optional[str] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        graph       : The graph to render.
        layout      : Node positions; unseen nodes are placed on the fly.
        highlighted : Nodes to fill as visited.
        current     : Node highlighted on the latest tick (drawn brighter).
        config      : Visual config.
    """
    layout.place_all(graph.node_ids())
    visited = set(highlighted)

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    # -- edges (draw first so nodes sit on top) --
    seen_pairs: Dict[Tuple[str, str], int] = {}
    for source, edge in graph.edges():
        pair = (source, edge.target)
        lane = seen_pairs.get(pair, 0)
        seen_pairs[pair] = lane + 1
        svg_parts.append(
            _render_edge(layout.position(source), layout.position(edge.target), edge.cost, lane, config)
        )

    # -- nodes --
    for nid in graph.node_ids():
        state = "unvisited"
        if nid == current:
            state = "current"
        elif nid in visited:
            state = "visited"
        svg_parts.append(_render_node(nid, layout.position(nid), state, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Node Rendering
# ---------------------------------------------------------------------------
def _render_node(node_id: str, pos: Tuple[float, float], state: str, config: CanvasConfig) -> str:
    fill = config.node_colors.get(state, config.node_colors["unvisited"])
    cx, cy = pos
    label = escape(node_id)
    return "\n".join([
        f'<g class="node {state}" data-id="{label}">',
        f'  <circle cx="{cx:.1f}" cy="{cy:.1f}" r="{config.node_radius}" '
        f'fill="{fill}" stroke="{config.node_stroke}" stroke-width="{config.node_stroke_width}"/>',
        f'  <text x="{cx:.1f}" y="{cy + 5:.1f}" text-anchor="middle" '
        f'font-size="{config.node_label_size}" font-family="\'DM Sans\', sans-serif" '
        f'fill="{config.node_label_color}" font-weight="600">{label}</text>',
        '</g>',
    ])


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def _render_edge(
    start: Tuple[float, float],
    end: Tuple[float, float],
    cost: int,
    lane: int,
    config: CanvasConfig,
) -> str:
    x1, y1 = start
    x2, y2 = end

    dx, dy = x2 - x1, y2 - y1
    dist = math.sqrt(dx * dx + dy * dy)
    if dist < 0.001:
        return ""  # self-loop or overlapping nodes

    # shorten the line by node_radius on both ends
    ux, uy = dx / dist, dy / dist
    r = config.node_radius
    x1_adj, y1_adj = x1 + ux * r, y1 + uy * r
    x2_adj, y2_adj = x2 - ux * r, y2 - uy * r

    parts = [
        '<g class="edge">',
        f'  <line x1="{x1_adj:.1f}" y1="{y1_adj:.1f}" x2="{x2_adj:.1f}" y2="{y2_adj:.1f}" '
        f'stroke="{config.edge_color}" stroke-width="{config.edge_width}"/>',
        _render_arrow(x2_adj, y2_adj, ux, uy, config.edge_color, config),
    ]

    # cost label at the midpoint, offset perpendicular (one lane per parallel edge)
    offset = 12 + lane * 22
    mx = (x1 + x2) / 2 - uy * offset
    my = (y1 + y2) / 2 + ux * offset
    parts.append(
        f'  <circle cx="{mx:.1f}" cy="{my:.1f}" r="11" fill="{config.edge_weight_bg}" opacity="0.9"/>'
    )
    parts.append(
        f'  <text x="{mx:.1f}" y="{my + 4:.1f}" text-anchor="middle" '
        f'font-size="{config.edge_weight_size}" font-family="\'DM Sans\', sans-serif" '
        f'fill="{config.edge_weight_color}" font-weight="600">{cost}</text>'
    )
    parts.append('</g>')
    return "\n".join(parts)


def _render_arrow(x: float, y: float, ux: float, uy: float, color: str, config: CanvasConfig) -> str:
    """Draw an arrowhead at (x, y) pointing in direction (ux, uy)."""
    size = config.edge_arrow_size
    px, py = -uy, ux
    p1_x = x - ux * size + px * (size * 0.5)
    p1_y = y - uy * size + py * (size * 0.5)
    p2_x = x - ux * size - px * (size * 0.5)
    p2_y = y - uy * size - py * (size * 0.5)
    return f'  <polygon points="{x:.1f},{y:.1f} {p1_x:.1f},{p1_y:.1f} {p2_x:.1f},{p2_y:.1f}" fill="{color}"/>'
