"""auto-resolve.

Resolve a mapping of named tasks whose order is implied by their dependencies:
- dependencies inferred from parameter names, or declared explicitly
- independent tasks run concurrently, wave by wave
- legacy completion-callback callables adapted on the fly
"""

__version__ = "0.1.0"

from auto_resolve.config import ResolverSettings
from auto_resolve.errors import (
    AutoResolveError,
    CallbackError,
    CircularDependencyError,
    DeadlockError,
    DependencyNotDefinedError,
    GraphValidationError,
    SignatureError,
    TaskDefinitionError,
)
from auto_resolve.graph.tasks import Binding, Completion, Task, task
from auto_resolve.resolver import resolve, resolve_sync

__all__ = [
    "__version__",
    "AutoResolveError",
    "Binding",
    "CallbackError",
    "CircularDependencyError",
    "Completion",
    "DeadlockError",
    "DependencyNotDefinedError",
    "GraphValidationError",
    "ResolverSettings",
    "SignatureError",
    "Task",
    "TaskDefinitionError",
    "resolve",
    "resolve_sync",
    "task",
]
