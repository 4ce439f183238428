"""
ucs.py — Uniform-Cost Search frontier
=====================================
Always removes the cheapest entry.  The frontier is re-sorted by cost on
every pop and the head is taken.

Tie-breaks matter for a replayable trace: `list.sort` is stable, so
entries with equal cost keep their CURRENT relative order in the
frontier.  That is not global insertion order, because earlier pops
already reordered the list.  A heap would break ties differently, which
is why this module does not use heapq.

With positive integer costs, the cost recorded at a node's first visit
is the minimum achievable cost (same guarantee as Dijkstra).
"""

from operator import attrgetter
from typing import List

from algorithms.frontier import Frontier
from algorithms.step import FrontierEntry


PSEUDOCODE: List[str] = [
    "def UCS(graph, start, goal):",                      # 0
    "    pq ← [(start, 0, [start])]",                    # 1
    "    visited ← {}",                                  # 2
    "    while pq is not empty:",                        # 3
    "        sort pq by cost (stable)",                  # 4
    "        (node, cost, path) ← pq.pop_front()",       # 5
    "        if node in visited: continue",              # 6
    "        visited.add(node)",                         # 7
    "        if node == goal: stop",                     # 8
    "        for (neighbour, w) in adj(node):",          # 9
    "            pq.push((neighbour, cost + w, path + [neighbour]))",  # 10
]

_by_cost = attrgetter("cost")


class CostFrontier(Frontier):

    def pop(self) -> FrontierEntry:
        self._entries.sort(key=_by_cost)
        return self._entries.pop(0)
