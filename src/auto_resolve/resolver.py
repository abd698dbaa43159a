"""Public entry points for resolving a task mapping."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from auto_resolve.config import ResolverSettings
from auto_resolve.graph.builder import build_graph
from auto_resolve.scheduler.wavefront import WavefrontScheduler

logger = logging.getLogger(__name__)


async def resolve(
    tasks: Mapping[str, Any] | None,
    *,
    settings: ResolverSettings | None = None,
) -> dict[str, Any]:
    """Resolve every task in `tasks` and return their values by name.

    Args:
        tasks: Task name -> task spec. `None` or an empty mapping resolves to
            an empty dict.
        settings: Resolver settings. If None, loads from environment.

    Returns:
        One entry per task name, in declaration order.

    Raises:
        GraphValidationError: A dependency is undefined or a task depends on
            itself. Raised before any task runs.
        DeadlockError: The remaining tasks can never become ready.
        Exception: The first task failure observed, unchanged.

    Example:
        >>> async def load_config():
        ...     return {"dsn": "sqlite://"}
        >>> await resolve({
        ...     "config": load_config(),
        ...     "db": lambda config: connect(config["dsn"]),
        ... })
    """

    if not tasks:
        return {}

    settings = settings or ResolverSettings()
    graph = build_graph(tasks, callback_names=settings.callback_names)

    logger.debug("Resolving tasks", extra={"tasks": graph.names})

    scheduler = WavefrontScheduler(
        graph,
        wave_log_level=logging.INFO if settings.log_waves else logging.DEBUG,
    )
    return await scheduler.run()


def resolve_sync(
    tasks: Mapping[str, Any] | None,
    *,
    settings: ResolverSettings | None = None,
) -> dict[str, Any]:
    """Run `resolve` on a fresh event loop.

    Must not be called from inside a running event loop.
    """

    return asyncio.run(resolve(tasks, settings=settings))
