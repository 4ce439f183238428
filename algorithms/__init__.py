"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every search the visualizer knows about.

    from algorithms import Algorithm, REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        Algorithm.BFS: AlgoInfo(key, label, frontier_factory, pseudocode, …),
        …
    }

All three searches run the same loop (engine/search.py).  What differs
is the frontier discipline and whether costs accumulate, and both live
on the AlgoInfo card.  Adding a search is: write a Frontier subclass,
add an enum member and one entry here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from algorithms.frontier import Frontier
from algorithms.step     import FrontierEntry
from algorithms.bfs      import QueueFrontier, PSEUDOCODE as _bfs_pc
from algorithms.dfs      import StackFrontier, PSEUDOCODE as _dfs_pc
from algorithms.ucs      import CostFrontier,  PSEUDOCODE as _ucs_pc


# ---------------------------------------------------------------------------
# Algorithm: the enumeration the UI selects from
# ---------------------------------------------------------------------------
class Algorithm(str, Enum):
    BFS = "BFS"
    DFS = "DFS"
    UCS = "UCS"


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               Algorithm                  # registry key
    label:             str                        # e.g. "Breadth-First Search"
    frontier_factory:  Callable[[], Frontier]     # fresh frontier per run
    pseudocode:        List[str]                  # lines for the side-panel
    accumulates_cost:  bool = False               # UCS sums edge costs into entries
    frontier_label:    str  = "Queue"             # heading for the live frontier panel
    complexity_time:   str  = ""
    description:       str  = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[Algorithm, AlgoInfo] = {

    Algorithm.BFS: AlgoInfo(
        key=Algorithm.BFS, label="Breadth-First Search",
        frontier_factory=QueueFrontier, pseudocode=_bfs_pc,
        frontier_label="Queue",
        complexity_time="O(V + E)",
        description="Explores layer-by-layer. First visit uses the fewest edges.",
    ),

    Algorithm.DFS: AlgoInfo(
        key=Algorithm.DFS, label="Depth-First Search",
        frontier_factory=StackFrontier, pseudocode=_dfs_pc,
        frontier_label="Stack",
        complexity_time="O(V + E)",
        description="Dives deep before backtracking. Does NOT guarantee shortest path.",
    ),

    Algorithm.UCS: AlgoInfo(
        key=Algorithm.UCS, label="Uniform-Cost Search",
        frontier_factory=CostFrontier, pseudocode=_ucs_pc,
        accumulates_cost=True,
        frontier_label="Priority Queue",
        complexity_time="O(E² log E)",
        description="Always expands the cheapest route so far. Optimal for positive costs.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: Union[Algorithm, str]) -> Optional[AlgoInfo]:
    """Return AlgoInfo by enum member or value (case-insensitive), or None."""
    if isinstance(key, Algorithm):
        return REGISTRY.get(key)
    try:
        return REGISTRY.get(Algorithm(str(key).upper()))
    except ValueError:
        return None


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "Algorithm",
    "AlgoInfo",
    "Frontier",
    "FrontierEntry",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
]
