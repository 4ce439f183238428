"""
bfs.py — Breadth-First Search frontier
======================================
First-in-first-out: the entry that was discovered earliest leaves first,
so the search expands layer by layer and the first visit of any node
uses the fewest edges.  Costs are ignored.
"""

from collections import deque
from typing import List

from algorithms.frontier import Frontier
from algorithms.step import FrontierEntry


PSEUDOCODE: List[str] = [
    "def BFS(graph, start, goal):",                      # 0
    "    queue ← [(start, [start])]",                    # 1
    "    visited ← {}",                                  # 2
    "    while queue is not empty:",                     # 3
    "        (node, path) ← queue.dequeue()",            # 4
    "        if node in visited: continue",              # 5
    "        visited.add(node)",                         # 6
    "        if node == goal: stop",                     # 7
    "        for neighbour in adj(node):",               # 8
    "            queue.enqueue((neighbour, path + [neighbour]))",  # 9
]


class QueueFrontier(Frontier):

    def __init__(self):
        super().__init__()
        self._entries = deque()

    def pop(self) -> FrontierEntry:
        return self._entries.popleft()
