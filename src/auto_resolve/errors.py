"""Exception taxonomy for task resolution.

Error messages for graph validation and deadlock are part of the public
contract and must stay stable.
"""

from __future__ import annotations


class AutoResolveError(Exception):
    """Base class for all errors raised by auto_resolve itself."""


class GraphValidationError(AutoResolveError, ValueError):
    """The dependency graph is structurally unsound.

    Raised while building the graph, before any task executes.
    """


class DependencyNotDefinedError(GraphValidationError):
    def __init__(self, dependency: str) -> None:
        super().__init__(f"Dependency {dependency} not defined")
        self.dependency = dependency


class CircularDependencyError(GraphValidationError):
    def __init__(self, task: str) -> None:
        super().__init__(f"Circular dependency for {task}")
        self.task = task


class TaskDefinitionError(AutoResolveError, TypeError):
    """A task spec has a shape that cannot be turned into a task."""


class SignatureError(TaskDefinitionError):
    """Dependencies cannot be inferred from a callable's signature."""


class DeadlockError(AutoResolveError, RuntimeError):
    """A wave made no progress while tasks remain unresolved."""

    def __init__(self, unresolved: list[str]) -> None:
        super().__init__("Unresolvable dependencies: " + ", ".join(unresolved))
        self.unresolved = list(unresolved)


class CallbackError(AutoResolveError):
    """A completion callback reported a failure value that is not an exception."""

    def __init__(self, value: object) -> None:
        super().__init__(str(value))
        self.value = value


class IllegalTransitionError(AutoResolveError, ValueError):
    pass


class ResultAlreadySetError(AutoResolveError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Result already set for {self.name}"
