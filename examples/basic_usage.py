#!/usr/bin/env python3
"""Resolve a small initialization graph.

This demonstrates the three ways to declare a task:

* a plain value (or an awaitable resolved in the first wave)
* a callable whose parameter names are its dependencies
* a classic `[deps..., func]` declaration receiving all results so far

`db` and `cache` both depend only on `config`, so they run concurrently.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import threading
from typing import Any, Sequence

from auto_resolve import ResolverSettings, resolve
from auto_resolve.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve an example task graph.")
    parser.add_argument("--delay", type=float, default=0.1, help="Simulated I/O delay in seconds")
    return parser.parse_args(argv)


async def _main(delay: float) -> dict[str, Any]:
    async def load_config() -> dict[str, str]:
        await asyncio.sleep(delay)
        return {"dsn": "sqlite:///app.db", "cache": "memory://"}

    async def db(config: dict[str, str]) -> str:
        await asyncio.sleep(delay)
        return f"connected to {config['dsn']}"

    def cache(config: dict[str, str], callback: Any) -> None:
        # Legacy completion-style API, completed from a worker thread.
        threading.Timer(delay, callback, args=(None, f"cache at {config['cache']}")).start()

    def app(results: dict[str, Any]) -> str:
        return f"app ready ({results['db']}, {results['cache']})"

    settings = ResolverSettings()
    configure_logging(settings.log_level)

    return await resolve(
        {
            "config": load_config(),
            "db": db,
            "cache": cache,
            "app": ["db", "cache", app],
            "version": "1.0",
        },
        settings=settings,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    results = asyncio.run(_main(args.delay))
    print(json.dumps(results, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
