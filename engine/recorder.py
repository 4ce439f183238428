"""
recorder.py — Run Recorder & Analytics
========================================
Runs one search to completion, keeps everything the UI shows about it,
and computes the numbers for the Analytics panel.

Usage:
    rec = Recorder(engine)
    record = rec.record(Algorithm.UCS, start="A", goal="C")
    record.trace          # step trace, hand it to the StepPlayer
    record.snapshots      # frontier contents after every pop
    record.metrics        # the analytics card
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from algorithms import Algorithm, AlgoInfo, get_algorithm
from algorithms.step import FrontierEntry
from engine.search import SearchEngine, goal_reached

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass, rendered by the Analytics panel
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:       str            = ""
    algo_label:     str            = ""
    start:          str            = ""
    goal:           str            = ""
    total_steps:    int            = 0      # entries in the trace
    nodes_visited:  int            = 0      # distinct nodes popped
    repops:         int            = 0      # entries discarded as already visited
    goal_reached:   bool           = False
    path:           List[str]      = field(default_factory=list)
    path_length:    int            = 0      # edges on the path to the goal
    path_cost:      Optional[int]  = None   # only for cost-tracking searches
    wall_time_ms:   float          = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)


# ---------------------------------------------------------------------------
# RunRecord: one finished run
# ---------------------------------------------------------------------------
@dataclass
class RunRecord:
    info:      AlgoInfo
    start:     str
    goal:      str
    trace:     List[FrontierEntry]        = field(default_factory=list)
    snapshots: List[List[FrontierEntry]]  = field(default_factory=list)
    metrics:   RunMetrics                 = field(default_factory=RunMetrics)

    @property
    def final_frontier(self) -> List[FrontierEntry]:
        return self.snapshots[-1] if self.snapshots else []

    def export(self) -> Dict[str, Any]:
        return {
            "algorithm": self.info.key.value,
            "start":     self.start,
            "goal":      self.goal,
            "metrics":   self.metrics.to_dict(),
            "steps":     [e.to_dict() for e in self.trace],
            "frontier":  [
                e.describe(self.info.accumulates_cost) for e in self.final_frontier
            ],
        }


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:

    def __init__(self, engine: SearchEngine):
        self.engine = engine

    def record(self, algorithm: Union[Algorithm, str], start: str, goal: str) -> RunRecord:
        """Run the search eagerly and capture trace, snapshots and metrics."""
        info = get_algorithm(algorithm)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algorithm}")

        snapshots: List[List[FrontierEntry]] = []
        t0 = time.monotonic()
        trace = self.engine.run(info.key, start, goal, on_frontier=snapshots.append)
        wall_ms = (time.monotonic() - t0) * 1000

        record = RunRecord(info=info, start=start, goal=goal, trace=trace, snapshots=snapshots)
        record.metrics = _compute_metrics(record, wall_ms)
        logger.info(
            "Recorded %s %s -> %s: %d steps, goal %s",
            info.key.value, start, goal, len(trace),
            "reached" if record.metrics.goal_reached else "not reached",
        )
        return record


# ---------------------------------------------------------------------------
# Internal
# ---------------------------------------------------------------------------
def _compute_metrics(record: RunRecord, wall_ms: float) -> RunMetrics:
    info  = record.info
    trace = record.trace
    distinct = {e.node for e in trace}
    reached  = goal_reached(trace, record.goal)
    final    = trace[-1] if reached else None

    return RunMetrics(
        algo_key=info.key.value,
        algo_label=info.label,
        start=record.start,
        goal=record.goal,
        total_steps=len(trace),
        nodes_visited=len(distinct),
        repops=len(trace) - len(distinct),
        goal_reached=reached,
        path=list(final.path) if final else [],
        path_length=len(final.path) - 1 if final else 0,
        path_cost=final.cost if final and info.accumulates_cost else None,
        wall_time_ms=round(wall_ms, 2),
    )
