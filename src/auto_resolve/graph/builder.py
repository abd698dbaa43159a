"""Build and validate the dependency graph of a task mapping.

Raw task specs accepted per entry:

- a `Task` declaration (see `auto_resolve.graph.tasks.task`)
- a callable: its parameter names are its dependencies; a trailing
  callback-named parameter marks it as completion-style
- a list/tuple ending in a callable: the leading items are dependency names
  and the callable receives a snapshot of all results resolved so far; a
  leading callback-named parameter marks it as completion-style
- anything else: a value (awaitables are resolved in the first wave)

Validation is eager: the whole graph is checked before any task runs.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from auto_resolve.config import DEFAULT_CALLBACK_NAMES
from auto_resolve.errors import (
    CircularDependencyError,
    DependencyNotDefinedError,
    SignatureError,
    TaskDefinitionError,
)
from auto_resolve.graph.completion import looks_like_callback, promisify
from auto_resolve.graph.signature import parameter_names
from auto_resolve.graph.tasks import Binding, Completion, Task, TaskKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TaskGraph:
    """Normalized tasks plus their frozen dependency map.

    All mappings preserve the declaration order of the input.
    """

    tasks: Mapping[str, Task]
    dependencies: Mapping[str, tuple[str, ...]]
    dependents: Mapping[str, tuple[str, ...]]

    @property
    def names(self) -> list[str]:
        return list(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)


def _adapt(declared: Task) -> Task:
    if declared.completion is Completion.NONE:
        return declared
    assert declared.func is not None
    adapted = promisify(
        declared.func,
        leading=declared.completion is Completion.LEADING,
        collapse=declared.collapse,
    )
    return dataclasses.replace(declared, func=adapted, completion=Completion.NONE)


def _from_callable(func: Any, callback_names: Sequence[str]) -> Task:
    names = parameter_names(func)
    completion = Completion.NONE
    if looks_like_callback(names, callback_names=callback_names):
        names = names[:-1]
        completion = Completion.TRAILING
    return Task(
        kind=TaskKind.CALLABLE,
        func=func,
        depends_on=tuple(names),
        binding=Binding.NAMED,
        completion=completion,
    )


def _from_classic(name: str, spec: Sequence[Any], callback_names: Sequence[str]) -> Task:
    *deps, func = spec
    bad = [dep for dep in deps if not isinstance(dep, str)]
    if bad:
        raise TaskDefinitionError(
            f"Task {name}: dependency names must be strings, got {bad!r}"
        )

    try:
        names = parameter_names(func)
    except SignatureError:
        # Store-bound callables only ever get one argument; an opaque signature
        # simply means no callback convention.
        names = []
    leading = looks_like_callback(names, leading=True, callback_names=callback_names)

    return Task(
        kind=TaskKind.CALLABLE,
        func=func,
        depends_on=tuple(deps),
        binding=Binding.STORE,
        completion=Completion.LEADING if leading else Completion.NONE,
        collapse=leading,
    )


def normalize_task(
    name: str,
    spec: Any,
    *,
    callback_names: Sequence[str] = DEFAULT_CALLBACK_NAMES,
) -> Task:
    """Turn one raw task spec into a named, adapted `Task`."""

    if not isinstance(name, str):
        raise TaskDefinitionError(f"Task names must be strings, got {name!r}")

    if isinstance(spec, Task):
        declared = spec
    elif callable(spec):
        declared = _from_callable(spec, callback_names)
    elif isinstance(spec, (list, tuple)) and spec and callable(spec[-1]):
        declared = _from_classic(name, spec, callback_names)
    else:
        declared = Task(kind=TaskKind.VALUE, value=spec)

    return _adapt(dataclasses.replace(declared, name=name))


def validate(dependencies: Mapping[str, Sequence[str]]) -> None:
    """Check that every dependency exists and no task depends on itself.

    Raises:
        DependencyNotDefinedError: A dependency names an unknown task.
        CircularDependencyError: A task lists itself as a dependency.
    """

    for name, deps in dependencies.items():
        for dep in deps:
            if dep not in dependencies:
                raise DependencyNotDefinedError(dep)
            if dep == name:
                raise CircularDependencyError(name)


def build_graph(
    tasks: Mapping[str, Any],
    *,
    callback_names: Sequence[str] = DEFAULT_CALLBACK_NAMES,
) -> TaskGraph:
    """Normalize a raw task mapping and validate its dependency graph.

    The input mapping is not modified.
    """

    normalized = {
        name: normalize_task(name, spec, callback_names=callback_names)
        for name, spec in tasks.items()
    }
    dependencies = {name: t.depends_on for name, t in normalized.items()}
    validate(dependencies)

    dependents: dict[str, list[str]] = {name: [] for name in normalized}
    for name, deps in dependencies.items():
        # A task listing the same dependency twice still waits on it once.
        for dep in dict.fromkeys(deps):
            dependents[dep].append(name)

    logger.debug(
        "Built task graph",
        extra={
            "task_count": len(normalized),
            "edge_count": sum(len(deps) for deps in dependencies.values()),
        },
    )

    return TaskGraph(
        tasks=MappingProxyType(normalized),
        dependencies=MappingProxyType(dependencies),
        dependents=MappingProxyType({k: tuple(v) for k, v in dependents.items()}),
    )
