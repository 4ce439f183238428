"""
dfs.py — Depth-First Search frontier
====================================
Last-in-first-out stack.  After a node is expanded, the LAST neighbour
pushed is the next one explored, so for `A → [B, C]` the search dives
into C before it ever looks at B.

Nodes are marked visited on pop, not on push, so a node may sit on the
stack several times; the extra copies are popped, recorded and skipped.
"""

from typing import List

from algorithms.frontier import Frontier
from algorithms.step import FrontierEntry


PSEUDOCODE: List[str] = [
    "def DFS(graph, start, goal):",                      # 0
    "    stack ← [(start, [start])]",                    # 1
    "    visited ← {}",                                  # 2
    "    while stack is not empty:",                     # 3
    "        (node, path) ← stack.pop()",                # 4
    "        if node in visited: continue",              # 5
    "        visited.add(node)",                         # 6
    "        if node == goal: stop",                     # 7
    "        for neighbour in adj(node):",               # 8
    "            stack.push((neighbour, path + [neighbour]))",  # 9
]


class StackFrontier(Frontier):

    def pop(self) -> FrontierEntry:
        return self._entries.pop()
