"""
player.py — Step Trace Playback
===============================
Replays a finished step trace at a fixed cadence, one node per tick,
handing each node to a highlight callback (the renderer hooks in there).

State machine:
    IDLE     →  start()              →  RUNNING
    RUNNING  →  start()              →  RUNNING   (old timer cancelled first)
    RUNNING  →  (trace exhausted)    →  IDLE
    RUNNING  →  (highlight raises)   →  IDLE      (error propagates to the caller)
    any      →  reset()              →  IDLE      (graph cleared too)

Exactly one timer may drive the index.  Every start() bumps a generation
counter and the scheduled callback carries the generation it was created
for, so a tick from a cancelled timer that is already in flight is
ignored instead of advancing the index a second time.

The tick does not wait for the renderer: if a highlight callback is
slow, the scheduler still fires at the nominal interval.
"""

import logging
import threading
from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Sequence

from algorithms.step import FrontierEntry
from engine.scheduler import ScheduledTask, Scheduler, TimerScheduler
from graph import GraphStore

logger = logging.getLogger(__name__)

HighlightCallback = Callable[[str], None]


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlayerState(Enum):
    IDLE    = "idle"
    RUNNING = "running"


# ---------------------------------------------------------------------------
# Speed presets (seconds per tick)
# ---------------------------------------------------------------------------
DEFAULT_TICK_INTERVAL = 1.0

SPEED_PRESETS = {
    "slow":   DEFAULT_TICK_INTERVAL,
    "medium": 0.5,
    "fast":   0.2,
}


# ---------------------------------------------------------------------------
# StepPlayer
# ---------------------------------------------------------------------------
class StepPlayer:
    """
    Attributes:
        state         : Current PlayerState.
        trace         : The trace being replayed (empty when idle after reset).
        current_index : Index of the NEXT entry to highlight.
        interval      : Seconds between ticks.
        on_highlight  : Default callback(node_id) used when start() gets none.
        graph         : GraphStore cleared by reset(), if attached.
        lock          : Held for every state change; hold it to read several
                        fields of one run together.
    """

    def __init__(
        self,
        on_highlight: Optional[HighlightCallback] = None,
        scheduler: Optional[Scheduler] = None,
        interval: float = DEFAULT_TICK_INTERVAL,
        graph: Optional[GraphStore] = None,
    ):
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive: {interval}")
        self.on_highlight:  Optional[HighlightCallback] = on_highlight
        self.scheduler:     Scheduler                   = scheduler or TimerScheduler()
        self.interval:      float                       = interval
        self.graph:         Optional[GraphStore]        = graph
        self.trace:         List[FrontierEntry]         = []
        self.current_index: int                         = 0
        self.state:         PlayerState                 = PlayerState.IDLE

        self._task:       Optional[ScheduledTask]       = None
        self._highlight:  Optional[HighlightCallback]   = None
        self._generation: int                           = 0
        self.lock = threading.RLock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(
        self,
        trace: Sequence[FrontierEntry],
        on_highlight: Optional[HighlightCallback] = None,
    ) -> None:
        """Replace any running playback with `trace`, starting at index 0."""
        with self.lock:
            self._cancel_task()
            self._generation += 1
            self.trace         = list(trace)
            self.current_index = 0
            self._highlight    = on_highlight or self.on_highlight
            self.state         = PlayerState.RUNNING
            self._task = self.scheduler.call_every(
                self.interval, partial(self._on_tick, self._generation)
            )
        logger.debug("Playback started: %d steps every %.3fs", len(self.trace), self.interval)

    def reset(self) -> None:
        """Stop playback, forget the trace and clear the attached graph."""
        with self.lock:
            self._cancel_task()
            self._generation += 1
            self.trace         = []
            self.current_index = 0
            self._highlight    = None
            self.state         = PlayerState.IDLE
            if self.graph is not None:
                self.graph.reset()
        logger.debug("Playback reset")

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """
        Advance one step of the current playback.  Returns True if a node
        was highlighted.  Normally driven by the scheduler.
        """
        with self.lock:
            return self._advance()

    def _on_tick(self, generation: int) -> None:
        with self.lock:
            if generation != self._generation:
                return
            self._advance()

    def _advance(self) -> bool:
        if self.state != PlayerState.RUNNING:
            return False

        highlighted = False
        if self.current_index < len(self.trace):
            node = self.trace[self.current_index].node
            if self._highlight is not None:
                try:
                    self._highlight(node)
                except Exception:
                    self._stop()
                    raise
            self.current_index += 1
            highlighted = True

        if self.current_index == len(self.trace):
            self._stop()
            logger.debug("Playback finished after %d steps", len(self.trace))
        return highlighted

    def _stop(self) -> None:
        self._cancel_task()
        self.state = PlayerState.IDLE

    def _cancel_task(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        """Takes effect on the next start()."""
        self.interval = SPEED_PRESETS.get(preset, DEFAULT_TICK_INTERVAL)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.state == PlayerState.RUNNING

    @property
    def total_steps(self) -> int:
        return len(self.trace)

    @property
    def current_node(self) -> Optional[str]:
        """Most recently highlighted node, if any."""
        with self.lock:
            if 0 < self.current_index <= len(self.trace):
                return self.trace[self.current_index - 1].node
            return None

    def snapshot(self) -> Dict[str, Any]:
        """Playback fields read together, so they always describe one run."""
        with self.lock:
            return {
                "state":        self.state.value,
                "current_step": self.current_index,
                "total_steps":  len(self.trace),
                "current_node": self.current_node,
            }
