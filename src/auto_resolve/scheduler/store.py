"""Write-once storage for resolved task values."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from auto_resolve.errors import ResultAlreadySetError


class ResultStore(Mapping[str, Any]):
    """Append-only mapping of task name to resolved value.

    Only the scheduler writes to it. Reads go through the `Mapping` interface;
    membership is by key, so falsy values count as resolved.
    """

    def __init__(self) -> None:
        self._results: dict[str, Any] = {}

    def __getitem__(self, name: str) -> Any:
        return self._results[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def __repr__(self) -> str:
        return f"ResultStore({self._results!r})"

    def set(self, name: str, value: Any) -> None:
        if name in self._results:
            raise ResultAlreadySetError(name)
        self._results[name] = value
