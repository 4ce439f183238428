"""
session.py — Search Session Controller
======================================
Owns one user's graph and everything derived from it:

    GraphStore  ← add_edge()
    SearchEngine / Recorder  ← run()
    StepPlayer  ← fed the fresh trace by run()

reset() is a single user action: playback stops, the trace is dropped and
the graph is cleared.  Graph edits and searches are never interleaved:
run() computes the whole trace before playback begins.
"""

import logging
import threading
from functools import partial
from typing import Callable, List, Optional, Union

from algorithms import Algorithm
from engine.player import DEFAULT_TICK_INTERVAL, StepPlayer
from engine.recorder import Recorder, RunRecord
from engine.scheduler import Scheduler
from engine.search import SearchEngine
from graph import GraphStore

logger = logging.getLogger(__name__)


class SearchSession:
    """
    Attributes:
        graph       : The session's GraphStore.
        engine      : SearchEngine bound to `graph`.
        player      : StepPlayer bound to `graph` (reset clears it).
        record      : RunRecord of the most recent run, or None.
        highlighted : Nodes highlighted so far by the current playback,
                      in tick order.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        interval: float = DEFAULT_TICK_INTERVAL,
        on_highlight: Optional[Callable[[str], None]] = None,
    ):
        self.graph    = GraphStore()
        self.engine   = SearchEngine(self.graph)
        self.recorder = Recorder(self.engine)
        self.player   = StepPlayer(scheduler=scheduler, interval=interval, graph=self.graph)
        self.record:      Optional[RunRecord] = None
        self.highlighted: List[str]           = []

        self._on_highlight = on_highlight
        self._run_id = 0
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Graph building
    # ------------------------------------------------------------------
    def add_edge(self, source: str, target: str, cost: int) -> None:
        self.graph.add_edge(source, target, cost)

    # ------------------------------------------------------------------
    # Search + playback
    # ------------------------------------------------------------------
    def run(self, algorithm: Union[Algorithm, str], start: str, goal: str) -> RunRecord:
        """Compute the full trace, then (re)start playback from step 0."""
        record = self.recorder.record(algorithm, start, goal)
        with self._lock:
            self._run_id += 1
            run_id = self._run_id
            self.record = record
            self.highlighted = []
        self.player.start(record.trace, on_highlight=partial(self._highlight, run_id))
        return record

    def reset(self) -> None:
        self.player.reset()
        with self._lock:
            self._run_id += 1
            self.record = None
            self.highlighted = []
        logger.info("Session reset")

    def _highlight(self, run_id: int, node: str) -> None:
        with self._lock:
            # late tick from a replaced run
            if run_id != self._run_id:
                return
            self.highlighted.append(node)
        if self._on_highlight is not None:
            self._on_highlight(node)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    def highlighted_nodes(self) -> List[str]:
        with self._lock:
            return list(self.highlighted)

    def state(self) -> dict:
        """Playback snapshot for polling clients."""
        # ticks append highlights while holding the player lock
        with self.player.lock:
            state = self.player.snapshot()
            state["highlighted"] = self.highlighted_nodes()
        return state
