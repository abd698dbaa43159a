"""Task declarations and invocation outcomes.

A `Task` is the normalized form of one entry in a task mapping. Raw entries
(plain values, injected callables, classic `[deps..., func]` sequences) are
turned into tasks by `auto_resolve.graph.builder`; callers who prefer explicit
declarations build them with `task()`.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

from auto_resolve.errors import TaskDefinitionError
from auto_resolve.graph.signature import parameter_names


class TaskKind(str, Enum):
    VALUE = "value"
    CALLABLE = "callable"


class Binding(str, Enum):
    """How a callable task receives its inputs."""

    # One positional argument per dependency, in declared order.
    NAMED = "named"
    # A single argument: a snapshot of every result resolved so far.
    STORE = "store"


class Completion(str, Enum):
    """Where a completion-style callable expects its callback."""

    NONE = "none"
    TRAILING = "trailing"
    LEADING = "leading"


@dataclass(frozen=True, slots=True)
class Immediate:
    value: Any


@dataclass(frozen=True, slots=True)
class Deferred:
    awaitable: Awaitable[Any]


Outcome: TypeAlias = Immediate | Deferred


def as_outcome(value: Any) -> Outcome:
    """Tag a produced value as already resolved or still pending."""

    if inspect.isawaitable(value):
        return Deferred(value)
    return Immediate(value)


@dataclass(frozen=True, slots=True)
class Task:
    """A single unit of work.

    For value tasks only `value` is meaningful. For callable tasks, `func` is
    invoked once every name in `depends_on` has resolved.

    Tasks held by a built graph have their completion style folded in: `func`
    is already the adapted callable and `completion` is `Completion.NONE`.
    """

    kind: TaskKind
    value: Any = None
    func: Callable[..., Any] | None = None
    depends_on: tuple[str, ...] = ()
    binding: Binding = Binding.NAMED
    completion: Completion = Completion.NONE
    collapse: bool = False
    name: str | None = None

    def invoke(self, results: Mapping[str, Any]) -> Outcome:
        """Run the task against the results resolved so far.

        Exceptions raised synchronously by `func` propagate unchanged.
        """

        if self.kind is TaskKind.VALUE:
            return as_outcome(self.value)

        assert self.func is not None
        if self.binding is Binding.STORE:
            args: tuple[Any, ...] = (dict(results),)
        else:
            args = tuple(results[dep] for dep in self.depends_on)
        return as_outcome(self.func(*args))


def task(
    target: Any,
    *,
    depends_on: Iterable[str] | None = None,
    binding: Binding = Binding.NAMED,
    completion: Completion = Completion.NONE,
    collapse: bool = False,
) -> Task:
    """Declare a task explicitly.

    Non-callable targets become value tasks. For callables, `depends_on`
    defaults to the parameter names (minus the callback parameter when
    `completion` is set) for `Binding.NAMED`, and to no dependencies for
    `Binding.STORE`.

    Example:
        >>> task(lambda cfg: cfg["db"], depends_on=["config"])
    """

    if not callable(target):
        if depends_on:
            raise TaskDefinitionError("A value task cannot declare dependencies")
        if completion is not Completion.NONE:
            raise TaskDefinitionError("A value task cannot use a completion callback")
        return Task(kind=TaskKind.VALUE, value=target)

    if depends_on is None:
        if binding is Binding.STORE:
            deps: tuple[str, ...] = ()
        else:
            names = parameter_names(target)
            if completion is Completion.TRAILING:
                names = names[:-1]
            elif completion is Completion.LEADING:
                names = names[1:]
            deps = tuple(names)
    else:
        if isinstance(depends_on, str):
            raise TaskDefinitionError("depends_on must be a sequence of names, not a string")
        deps = tuple(depends_on)

    bad = [dep for dep in deps if not isinstance(dep, str)]
    if bad:
        raise TaskDefinitionError(f"Dependency names must be strings, got {bad!r}")

    return Task(
        kind=TaskKind.CALLABLE,
        func=target,
        depends_on=deps,
        binding=binding,
        completion=completion,
        collapse=collapse,
    )
