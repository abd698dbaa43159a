"""Wavefront execution of a validated task graph.

Each wave scans the unresolved tasks in declaration order, launches every task
whose dependencies have all resolved, and then waits for the whole batch of
pending results before scanning again:

    wave 1: config                 (no dependencies)
    wave 2: db, cache              (both depend on config, run concurrently)
    wave 3: app                    (depends on db and cache)

Results that are available immediately are stored during the scan, so tasks
later in declaration order can consume them within the same wave.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Mapping
from enum import Enum
from typing import Any

from auto_resolve.errors import DeadlockError, IllegalTransitionError
from auto_resolve.graph.builder import TaskGraph
from auto_resolve.graph.tasks import Deferred
from auto_resolve.scheduler.store import ResultStore

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


ALLOWED_TRANSITIONS: dict[SchedulerState, set[SchedulerState]] = {
    SchedulerState.RUNNING: {SchedulerState.COMPLETED, SchedulerState.FAILED},
    SchedulerState.COMPLETED: set(),
    SchedulerState.FAILED: set(),
}


def transition(*, current: SchedulerState, to: SchedulerState) -> SchedulerState:
    if to not in ALLOWED_TRANSITIONS.get(current, set()):
        raise IllegalTransitionError(f"Illegal transition: {current.value} -> {to.value}")
    return to


class WavefrontScheduler:
    """Drive one task graph to completion or failure.

    A scheduler owns its result store and runs exactly once.
    """

    def __init__(self, graph: TaskGraph, *, wave_log_level: int = logging.DEBUG) -> None:
        self._graph = graph
        self._wave_log_level = wave_log_level
        self._store = ResultStore()
        self._state = SchedulerState.RUNNING
        self._started = False
        self._waves = 0

        # Count of distinct dependencies not yet resolved, per task.
        self._pending: dict[str, int] = {
            name: len(set(deps)) for name, deps in graph.dependencies.items()
        }
        self._unresolved: list[str] = list(graph.tasks)

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def results(self) -> Mapping[str, Any]:
        return self._store

    @property
    def waves(self) -> int:
        return self._waves

    async def run(self) -> dict[str, Any]:
        """Resolve every task and return a name -> value mapping.

        Raises:
            DeadlockError: A wave launched nothing while tasks remain.
            Exception: The first task failure observed, unchanged.
        """

        if self._started:
            raise RuntimeError("A WavefrontScheduler can only run once")
        self._started = True

        try:
            while self._unresolved:
                self._waves += 1
                resolved_before = len(self._store)
                batch = self._launch_wave()
                if not batch:
                    if len(self._store) > resolved_before:
                        # Immediate results may have unblocked tasks scanned earlier.
                        continue
                    logger.warning(
                        "Task graph stalled",
                        extra={"wave": self._waves, "unresolved": list(self._unresolved)},
                    )
                    raise DeadlockError(self._unresolved)

                names = list(batch)
                values = await asyncio.gather(*batch.values())
                for name, value in zip(names, values):
                    self._resolve(name, value)
                self._unresolved = [n for n in self._unresolved if n not in self._store]
        except BaseException as e:
            self._state = transition(current=self._state, to=SchedulerState.FAILED)
            if not isinstance(e, DeadlockError):
                logger.debug("Task resolution failed", exc_info=True)
            raise

        self._state = transition(current=self._state, to=SchedulerState.COMPLETED)
        logger.info(
            "Resolved task graph",
            extra={"task_count": len(self._store), "waves": self._waves},
        )
        # Declaration order, not resolution order.
        return {name: self._store[name] for name in self._graph.tasks}

    def _launch_wave(self) -> dict[str, asyncio.Future[Any]]:
        batch: dict[str, asyncio.Future[Any]] = {}
        try:
            for name in self._unresolved:
                if self._pending[name]:
                    continue
                outcome = self._graph.tasks[name].invoke(self._store)
                if isinstance(outcome, Deferred):
                    # Start right away so the batch runs concurrently with the scan.
                    batch[name] = asyncio.ensure_future(outcome.awaitable)
                else:
                    self._resolve(name, outcome.value)
        except BaseException:
            self._abandon(batch)
            raise

        if not batch:
            self._unresolved = [n for n in self._unresolved if n not in self._store]

        logger.log(
            self._wave_log_level,
            "Launched wave",
            extra={"wave": self._waves, "deferred": list(batch), "resolved": len(self._store)},
        )
        return batch

    def _resolve(self, name: str, value: Any) -> None:
        self._store.set(name, value)
        for dependent in self._graph.dependents[name]:
            self._pending[dependent] -= 1

    @staticmethod
    def _abandon(batch: Mapping[str, Awaitable[Any]]) -> None:
        # Launched work keeps running; its outcome is collected and dropped.
        if batch:
            asyncio.gather(*batch.values(), return_exceptions=True)
