"""
graph/
-----
Core data layer.  Public API:

    from graph import GraphStore, Edge
"""

from graph.edge  import Edge
from graph.graph import GraphStore

__all__ = [
    "Edge",
    "GraphStore",
]
