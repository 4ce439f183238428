"""
ui/
---
Presentation layer and input boundary.

    from ui import render_canvas, NodeLayout
    from ui import edge_form, search_form, frontier_panel, …
    from ui import parse_edge_form, parse_search_form, FormError
"""

from ui.canvas import render_canvas, CanvasConfig, NodeLayout

from ui.controls import (
    edge_form,
    search_form,
    frontier_panel,
    analytics_panel,
    playback_status,
    pseudocode_viewer,
)

from ui.forms import (
    FormError,
    EdgeForm,
    SearchForm,
    parse_edge_form,
    parse_search_form,
)

__all__ = [
    "render_canvas",
    "CanvasConfig",
    "NodeLayout",
    "edge_form",
    "search_form",
    "frontier_panel",
    "analytics_panel",
    "playback_status",
    "pseudocode_viewer",
    "FormError",
    "EdgeForm",
    "SearchForm",
    "parse_edge_form",
    "parse_search_form",
]
