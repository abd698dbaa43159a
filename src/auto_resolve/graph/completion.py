"""Adapt completion-callback style callables into awaitable-producing ones.

A completion-style callable does not return its result. It receives a callback
as its first or last argument and eventually calls it as
`callback(err, *results)`:

- a truthy `err` means failure;
- otherwise `results[0]` is the value (or, in collapse mode with more than one
  result, the list of all results).
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from collections.abc import Callable, Sequence
from typing import Any

from auto_resolve.config import DEFAULT_CALLBACK_NAMES
from auto_resolve.errors import CallbackError

logger = logging.getLogger(__name__)

# Strong references to awaitables returned by completion-style callables.
_background: set[asyncio.Future[Any]] = set()


def looks_like_callback(
    names: Sequence[str],
    *,
    leading: bool = False,
    callback_names: Sequence[str] = DEFAULT_CALLBACK_NAMES,
) -> bool:
    """Whether the first (`leading`) or last parameter name marks a callback."""

    if not names:
        return False
    candidate = names[0] if leading else names[-1]
    return candidate in callback_names


def _failure(err: object) -> BaseException:
    if isinstance(err, BaseException):
        return err
    return CallbackError(err)


def promisify(
    func: Callable[..., Any],
    *,
    leading: bool = False,
    collapse: bool = False,
) -> Callable[..., asyncio.Future[Any]]:
    """Wrap a completion-style callable.

    The returned callable takes the same arguments minus the callback, inserts
    a synthetic callback first (`leading`) or last, calls `func` and returns a
    future settled by the first callback invocation. It must be called with a
    running event loop. The callback may be invoked from any thread.

    If `func` raises synchronously the exception propagates to the caller. If
    `func` returns an awaitable, it is scheduled; when it finishes before the
    callback was invoked, its own outcome settles the future.
    """

    @functools.wraps(func)
    def adapted(*args: Any) -> asyncio.Future[Any]:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()

        def settle(err: object, results: tuple[Any, ...]) -> None:
            if future.done():
                logger.debug(
                    "Ignoring repeated completion callback",
                    extra={"callable": getattr(func, "__qualname__", repr(func))},
                )
                return
            if err:
                future.set_exception(_failure(err))
            elif collapse and len(results) > 1:
                future.set_result(list(results))
            else:
                future.set_result(results[0] if results else None)

        def callback(err: object = None, *results: Any) -> None:
            loop.call_soon_threadsafe(settle, err, results)

        call_args = (callback, *args) if leading else (*args, callback)
        returned = func(*call_args)

        if inspect.isawaitable(returned):
            inner = asyncio.ensure_future(returned)

            def _finished(done: asyncio.Future[Any]) -> None:
                if future.done():
                    return
                if done.cancelled():
                    future.cancel()
                elif done.exception() is not None:
                    future.set_exception(done.exception())  # type: ignore[arg-type]
                else:
                    # The callback may already be queued on the loop; let it win.
                    loop.call_soon(_settle_from_return, done.result())

            def _settle_from_return(value: Any) -> None:
                if not future.done():
                    future.set_result(value)

            _background.add(inner)
            inner.add_done_callback(_background.discard)
            inner.add_done_callback(_finished)

        return future

    return adapted
