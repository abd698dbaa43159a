"""Result storage and wave-by-wave execution."""

from auto_resolve.scheduler.store import ResultStore
from auto_resolve.scheduler.wavefront import SchedulerState, WavefrontScheduler

__all__ = [
    "ResultStore",
    "SchedulerState",
    "WavefrontScheduler",
]
