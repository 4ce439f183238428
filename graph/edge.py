"""
edge.py — Directed Weighted Edge
=================================
One outgoing entry in a node's adjacency list.

Design decisions:
  - The edge lives in its SOURCE node's list, so it only stores the
    target id and the cost.  The source is implied by where it sits.
  - `target` is a node-id string, NOT a node reference.  Keeps edges
    serialisable and free of circular references.
  - Cost is a positive integer.  The boundary validates it; the edge
    never re-checks.
  - Two edges with the same target and cost are still two edges —
    parallel edges are preserved, so equality is identity.
"""


class Edge:
    """
    Attributes:
        target : ID of the head node.
        cost   : Positive integer traversal cost.
    """

    __slots__ = ("target", "cost")

    def __init__(self, target: str, cost: int):
        self.target: str = target
        self.cost:   int = cost

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"target": self.target, "cost": self.cost}

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge(→ {self.target}, cost={self.cost})"
