"""
graph.py — GraphStore
=====================
Single source of truth for the directed weighted graph that the search
engine walks and the renderer draws.

Responsibilities:
  1. Grow the graph one edge at a time        (add_edge)
  2. Adjacency queries                        (neighbours, has_node)
  3. Read-only views for rendering / the API  (node_ids, edges, to_dict)
  4. Wipe everything                          (reset)

Design decisions:
  - `_adj[node_id] → [Edge, …]` in insertion order.  That order is
    significant: it decides traversal tie-breaks in every algorithm.
  - A node seen only as an edge target gets an empty list the moment it
    is registered, so "known node" and "has adjacency entry" coincide.
  - Inputs are assumed valid (non-empty ids, positive integer cost).
    Validation happens at the boundary in ui/forms.py.
  - One GraphStore per session, owned by a controller.  No module-level
    instance.
"""

import logging
from typing import Dict, Iterator, List, Tuple

from graph.edge import Edge

logger = logging.getLogger(__name__)


class GraphStore:
    """
    Attributes:
        _adj : {node_id: [Edge, …]} — dict order doubles as the node
               registry order (first time a node was referenced).
    """

    def __init__(self):
        self._adj: Dict[str, List[Edge]] = {}

    # ==================================================================
    # MUTATION
    # ==================================================================
    def add_edge(self, source: str, target: str, cost: int) -> Edge:
        """Register both endpoints and append source → target."""
        self._adj.setdefault(source, [])
        self._adj.setdefault(target, [])
        edge = Edge(target=target, cost=cost)
        self._adj[source].append(edge)
        logger.debug("add_edge %s -> %s (cost=%d)", source, target, cost)
        return edge

    def reset(self) -> None:
        """Drop every node and edge.  Safe to call on an empty store."""
        self._adj.clear()

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Edge]:
        """Outgoing edges in insertion order; empty for unknown nodes."""
        return list(self._adj.get(node_id, []))

    def has_node(self, node_id: str) -> bool:
        return node_id in self._adj

    # ==================================================================
    # READ-ONLY VIEWS
    # ==================================================================
    def node_ids(self) -> List[str]:
        return list(self._adj.keys())

    def edges(self) -> Iterator[Tuple[str, Edge]]:
        """Yield (source, edge) for every edge, source by source."""
        for source, out in self._adj.items():
            for edge in out:
                yield source, edge

    def node_count(self) -> int:
        return len(self._adj)

    def edge_count(self) -> int:
        return sum(len(out) for out in self._adj.values())

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": self.node_ids(),
            "edges": [
                {"source": source, **edge.to_dict()}
                for source, edge in self.edges()
            ],
        }

    def __repr__(self) -> str:
        return f"GraphStore(nodes={self.node_count()}, edges={self.edge_count()})"
