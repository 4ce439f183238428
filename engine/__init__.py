"""
engine/
-------
Search, recording & playback layer.

    from engine import SearchEngine, StepPlayer, SearchSession
"""

from engine.search    import SearchEngine, goal_reached
from engine.scheduler import Scheduler, ScheduledTask, TimerScheduler, ManualScheduler
from engine.player    import StepPlayer, PlayerState, SPEED_PRESETS, DEFAULT_TICK_INTERVAL
from engine.recorder  import Recorder, RunRecord, RunMetrics
from engine.session   import SearchSession

__all__ = [
    "SearchEngine",
    "goal_reached",
    "Scheduler",
    "ScheduledTask",
    "TimerScheduler",
    "ManualScheduler",
    "StepPlayer",
    "PlayerState",
    "SPEED_PRESETS",
    "DEFAULT_TICK_INTERVAL",
    "Recorder",
    "RunRecord",
    "RunMetrics",
    "SearchSession",
]
