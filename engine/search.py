"""
search.py — Search Engine
=========================
Runs BFS, DFS or UCS over a GraphStore and returns the step trace: every
frontier entry in the exact order it was popped, including entries for
nodes that turn out to be visited already.

The loop is shared; the algorithm only chooses the frontier discipline
and whether edge costs accumulate (see algorithms/__init__.py):

    seed frontier with (start, 0, [start])
    while frontier:
        entry ← frontier.pop()            # per policy
        trace.append(entry)               # unconditionally
        on_frontier(frontier.snapshot())  # every iteration
        if entry.node in visited: continue
        visited.add(entry.node)
        if entry.node == goal: break
        push one child per outgoing edge, in GraphStore order

Visited is marked on pop, which bounds expansions to one per distinct
node even on cyclic graphs, while the trace may hold more entries than
there are nodes.

The run is synchronous and eager: the whole trace exists before any
playback starts.  There is no success flag on the trace; use
`goal_reached` to derive one.
"""

import logging
from typing import Callable, List, Optional, Sequence, Union

from algorithms import Algorithm, AlgoInfo, get_algorithm
from algorithms.step import FrontierEntry
from graph import GraphStore

logger = logging.getLogger(__name__)

FrontierObserver = Callable[[List[FrontierEntry]], None]


class SearchEngine:
    """
    Attributes:
        graph : The GraphStore every run reads from.  It must not be
                mutated while `run` is executing.
    """

    def __init__(self, graph: GraphStore):
        self.graph = graph

    def run(
        self,
        algorithm: Union[Algorithm, str],
        start: str,
        goal: str,
        on_frontier: Optional[FrontierObserver] = None,
    ) -> List[FrontierEntry]:
        """
        Search from `start` towards `goal` and return the step trace.

        Args:
            algorithm   : Algorithm member or its value ("BFS", "DFS", "UCS").
            start       : Start node id.  Unknown ids are treated as
                          edge-less nodes, not errors.
            goal        : Goal node id.
            on_frontier : Called once per loop iteration, right after the
                          pop, with the frontier contents in order.

        Raises:
            ValueError – `algorithm` is not a registered search.
        """
        info = _resolve(algorithm)

        frontier = info.frontier_factory()
        frontier.push(FrontierEntry.seed(start))
        visited = set()
        trace: List[FrontierEntry] = []

        while frontier:
            entry = frontier.pop()
            trace.append(entry)
            if on_frontier is not None:
                on_frontier(frontier.snapshot())

            if entry.node in visited:
                continue
            visited.add(entry.node)

            if entry.node == goal:
                break

            for edge in self.graph.neighbours(entry.node):
                cost = edge.cost if info.accumulates_cost else 0
                frontier.push(entry.extend(edge.target, cost))

        logger.debug(
            "%s %s -> %s: %d steps, %d nodes visited",
            info.key.value, start, goal, len(trace), len(visited),
        )
        return trace


def goal_reached(trace: Sequence[FrontierEntry], goal: str) -> bool:
    """
    True if the run stopped on the goal.

    The loop only ends early on the goal's first visit, and a visited goal
    is never popped again, so "last entry is the goal" means success.
    """
    return bool(trace) and trace[-1].node == goal


def _resolve(algorithm: Union[Algorithm, str]) -> AlgoInfo:
    info = get_algorithm(algorithm)
    if info is None:
        raise ValueError(f"Unknown algorithm: {algorithm}")
    return info
