"""Task declarations, dependency inference and graph validation."""

from auto_resolve.graph.builder import TaskGraph, build_graph, normalize_task, validate
from auto_resolve.graph.completion import looks_like_callback, promisify
from auto_resolve.graph.signature import parameter_names
from auto_resolve.graph.tasks import (
    Binding,
    Completion,
    Deferred,
    Immediate,
    Outcome,
    Task,
    TaskKind,
    as_outcome,
    task,
)

__all__ = [
    "Binding",
    "Completion",
    "Deferred",
    "Immediate",
    "Outcome",
    "Task",
    "TaskGraph",
    "TaskKind",
    "as_outcome",
    "build_graph",
    "looks_like_callback",
    "normalize_task",
    "parameter_names",
    "promisify",
    "task",
    "validate",
]
