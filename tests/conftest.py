"""Test configuration and fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

import pytest

from auto_resolve.config import ResolverSettings


@pytest.fixture
def settings() -> ResolverSettings:
    """Provide resolver settings isolated from any local `.env`."""
    return ResolverSettings(_env_file=None)


@pytest.fixture
def later() -> Callable[..., Coroutine[Any, Any, Any]]:
    """Provide a coroutine factory resolving to a value after a delay in milliseconds."""

    async def _later(value: Any, ms: float = 0) -> Any:
        await asyncio.sleep(ms / 1000)
        return value

    return _later


@pytest.fixture
def failing() -> Callable[..., Coroutine[Any, Any, Any]]:
    """Provide a coroutine factory raising an error after a delay in milliseconds."""

    async def _failing(error: BaseException, ms: float = 0) -> Any:
        await asyncio.sleep(ms / 1000)
        raise error

    return _failing
