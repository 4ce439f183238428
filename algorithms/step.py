"""
step.py — Frontier Entry
========================
Every search run produces a trace of FrontierEntry objects, one per pop.
An entry is a frozen-in-time picture of a candidate:

    • which node it points at
    • the accumulated cost of the route that produced it
    • the full route from the start node to that node

Design decisions:
  - One uniform record for all algorithms.  `cost` is always present;
    BFS and DFS leave it at 0 and nothing reads it.
  - Frozen dataclass with a tuple path, so entries can be shared between
    the trace, frontier snapshots and the player without copies.
  - `extend` is the only way to derive a child entry, keeping the
    "path starts at start and ends at node" invariant in one place.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class FrontierEntry:
    """
    Attributes:
        node : ID of the node this entry leads to.
        cost : Accumulated edge cost from the start (0 unless UCS).
        path : Node ids from the start to `node`, both inclusive.
    """

    node: str
    cost: int = 0
    path: Tuple[str, ...] = ()

    @classmethod
    def seed(cls, start: str) -> "FrontierEntry":
        return cls(node=start, cost=0, path=(start,))

    def extend(self, target: str, cost: int = 0) -> "FrontierEntry":
        """Child entry one edge further along; `cost` is added as-is."""
        return FrontierEntry(node=target, cost=self.cost + cost, path=self.path + (target,))

    def describe(self, show_cost: bool = False) -> str:
        """Frontier-panel line, e.g. ``"C: A -> B -> C (Cost: 2)"``."""
        text = f"{self.node}: {' -> '.join(self.path)}"
        if show_cost:
            text += f" (Cost: {self.cost})"
        return text

    def to_dict(self) -> dict:
        return {"node": self.node, "cost": self.cost, "path": list(self.path)}
