"""Unit tests for the SVG canvas and the HTML control panels."""

from algorithms import list_algorithms
from algorithms.step import FrontierEntry
from engine import RunMetrics
from ui import (
    NodeLayout,
    analytics_panel,
    frontier_panel,
    playback_status,
    pseudocode_viewer,
    render_canvas,
    search_form,
)
from ui.canvas import CONFIG


class TestNodeLayout:

    def test_positions_are_stable(self):
        layout = NodeLayout(seed=1)
        first = layout.position("A")
        assert layout.position("A") == first

    def test_positions_stay_inside_box(self):
        layout = NodeLayout(seed=3)
        layout.place_all(str(i) for i in range(50))
        for x, y in layout.positions.values():
            assert CONFIG.layout_x[0] <= x <= CONFIG.layout_x[1]
            assert CONFIG.layout_y[0] <= y <= CONFIG.layout_y[1]

    def test_same_seed_same_layout(self):
        a, b = NodeLayout(seed=9), NodeLayout(seed=9)
        a.place_all(["A", "B"])
        b.place_all(["A", "B"])
        assert a.positions == b.positions

    def test_reset(self):
        layout = NodeLayout(seed=1)
        layout.position("A")
        layout.reset()
        assert layout.positions == {}


class TestRenderCanvas:

    def test_empty_graph(self, graph):
        svg = render_canvas(graph, NodeLayout(seed=1))
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        assert 'class="node' not in svg

    def test_node_states(self, triangle):
        svg = render_canvas(triangle, NodeLayout(seed=1), highlighted=["A", "B"], current="B")
        assert '<g class="node visited" data-id="A">' in svg
        assert '<g class="node current" data-id="B">' in svg
        assert '<g class="node unvisited" data-id="C">' in svg

    def test_one_edge_group_per_edge(self, triangle):
        svg = render_canvas(triangle, NodeLayout(seed=1))
        assert svg.count('<g class="edge">') == 3

    def test_labels_escaped(self, graph):
        graph.add_edge("<B>", "A&", 1)
        svg = render_canvas(graph, NodeLayout(seed=1))
        assert "<B>" not in svg
        assert "&lt;B&gt;" in svg
        assert "A&amp;" in svg

    def test_does_not_touch_graph(self, triangle):
        before = triangle.to_dict()
        render_canvas(triangle, NodeLayout(seed=1), highlighted=["A"])
        assert triangle.to_dict() == before


class TestControls:

    def test_frontier_with_costs(self):
        entry = FrontierEntry("C", 4, ("A", "C"))
        html = frontier_panel([entry], label="Priority Queue", show_cost=True)
        assert '<ul id="queueList">' in html
        assert "C: A -&gt; C (Cost: 4)" in html
        assert "Priority Queue" in html

    def test_frontier_without_costs(self):
        html = frontier_panel([FrontierEntry("C", 0, ("A", "C"))])
        assert "Cost" not in html

    def test_empty_frontier(self):
        assert "empty" in frontier_panel()

    def test_analytics_placeholder(self):
        assert "Run a search to see metrics." in analytics_panel()

    def test_analytics_card(self):
        metrics = RunMetrics(
            algo_label="Uniform Cost Search", goal_reached=True,
            total_steps=3, nodes_visited=3, path=["A", "B", "C"], path_length=2, path_cost=2,
        )
        html = analytics_panel(metrics)
        assert "Reached" in html
        assert "A → B → C" in html
        assert "2 edges" in html

    def test_search_form_lists_every_algorithm(self):
        html = search_form(list_algorithms(), "UCS")
        for key in ("BFS", "DFS", "UCS"):
            assert f'value="{key}"' in html
        ucs = next(a for a in list_algorithms() if a.key.value == "UCS")
        assert f'title="{ucs.description}" selected>' in html

    def test_search_form_shows_descriptions(self):
        html = search_form(list_algorithms())
        for algo in list_algorithms():
            assert f'title="{algo.description}"' in html
        assert "selected>" not in html

    def test_playback_status(self):
        html = playback_status(2, 5, True)
        assert '<span id="current-step">2</span>' in html
        assert "RUNNING" in html
        assert "IDLE" in playback_status()

    def test_pseudocode_escaped(self):
        html = pseudocode_viewer(["if a < b:"])
        assert "a &lt; b" in html
        assert "Select an algorithm" in pseudocode_viewer([])
