"""Unit tests for task normalization and graph validation."""

from __future__ import annotations

import pytest

from auto_resolve.errors import (
    CircularDependencyError,
    DependencyNotDefinedError,
    GraphValidationError,
    SignatureError,
    TaskDefinitionError,
)
from auto_resolve.graph.builder import build_graph, normalize_task, validate
from auto_resolve.graph.tasks import Binding, Completion, TaskKind, task


def test_value_task_has_no_dependencies() -> None:
    t = normalize_task("op1", "hej")
    assert t.kind is TaskKind.VALUE
    assert t.value == "hej"
    assert t.depends_on == ()
    assert t.name == "op1"


def test_injected_callable_depends_on_parameter_names() -> None:
    t = normalize_task("op3", lambda op1, op2: None)
    assert t.kind is TaskKind.CALLABLE
    assert t.depends_on == ("op1", "op2")
    assert t.binding is Binding.NAMED


def test_trailing_callback_is_not_a_dependency() -> None:
    def legacy(op1, callback):
        callback(None, op1)

    t = normalize_task("op2", legacy)
    assert t.depends_on == ("op1",)
    # Completion style is folded into the adapted callable.
    assert t.completion is Completion.NONE
    assert t.func is not legacy
    assert t.func.__wrapped__ is legacy


def test_custom_callback_names() -> None:
    t = normalize_task("op2", lambda op1, done: None, callback_names=["done"])
    assert t.depends_on == ("op1",)

    t = normalize_task("op2", lambda op1, callback: None, callback_names=["done"])
    assert t.depends_on == ("op1", "callback")


def test_classic_declaration_binds_the_store() -> None:
    func = lambda results: results["op1"]  # noqa: E731
    t = normalize_task("op3", ["op1", "op2", func])
    assert t.depends_on == ("op1", "op2")
    assert t.binding is Binding.STORE
    assert t.func is func


def test_classic_declaration_with_single_element() -> None:
    t = normalize_task("op1", (lambda results: 1,))
    assert t.depends_on == ()
    assert t.binding is Binding.STORE


def test_classic_declaration_with_leading_callback() -> None:
    def legacy(cb, results):
        cb(None, results)

    t = normalize_task("op2", ["op1", legacy])
    assert t.depends_on == ("op1",)
    assert t.func.__wrapped__ is legacy


def test_classic_declaration_with_opaque_callable() -> None:
    t = normalize_task("names", ["op1", sorted])
    assert t.depends_on == ("op1",)
    assert t.func is sorted


def test_classic_declaration_rejects_non_string_names() -> None:
    with pytest.raises(TaskDefinitionError, match="must be strings"):
        normalize_task("op2", [1, lambda results: None])


def test_sequences_without_trailing_callable_are_values() -> None:
    assert normalize_task("pair", ("a", "b")).kind is TaskKind.VALUE
    assert normalize_task("empty", []).value == []


def test_explicit_task_declaration() -> None:
    declared = task(lambda cfg: cfg, depends_on=["config"])
    t = normalize_task("db", declared)
    assert t.name == "db"
    assert t.depends_on == ("config",)


def test_explicit_completion_declaration() -> None:
    def legacy(config, done):
        done(None, config)

    declared = task(legacy, completion=Completion.TRAILING)
    assert declared.depends_on == ("config",)

    t = normalize_task("db", declared)
    assert t.completion is Completion.NONE
    assert t.func.__wrapped__ is legacy


def test_explicit_store_binding_without_dependencies() -> None:
    declared = task(lambda results: None, binding=Binding.STORE)
    assert declared.depends_on == ()


def test_explicit_value_cannot_declare_dependencies() -> None:
    with pytest.raises(TaskDefinitionError):
        task("value", depends_on=["op1"])


def test_explicit_depends_on_rejects_a_bare_string() -> None:
    with pytest.raises(TaskDefinitionError):
        task(lambda config: None, depends_on="config")


def test_variadic_injected_callable_fails_fast() -> None:
    with pytest.raises(SignatureError):
        normalize_task("op1", lambda *deps: None)


def test_task_names_must_be_strings() -> None:
    with pytest.raises(TaskDefinitionError):
        normalize_task(1, "value")  # type: ignore[arg-type]


def test_build_graph_keeps_declaration_order_and_dependents() -> None:
    graph = build_graph(
        {
            "op1": "hej",
            "op3": lambda op1, op2: None,
            "op2": lambda op1: None,
        }
    )
    assert graph.names == ["op1", "op3", "op2"]
    assert graph.dependencies["op3"] == ("op1", "op2")
    assert graph.dependents["op1"] == ("op3", "op2")
    assert graph.dependents["op3"] == ()
    assert len(graph) == 3


def test_build_graph_does_not_mutate_input() -> None:
    legacy = lambda op1, callback: callback(None, op1)  # noqa: E731
    tasks = {"op1": "hej", "op2": legacy}
    build_graph(tasks)
    assert tasks["op2"] is legacy


def test_dependency_map_is_read_only() -> None:
    graph = build_graph({"op1": "hej"})
    with pytest.raises(TypeError):
        graph.dependencies["op2"] = ()  # type: ignore[index]


def test_undefined_dependency() -> None:
    with pytest.raises(DependencyNotDefinedError) as excinfo:
        build_graph({"op1": "hej", "op2": lambda op3: "hov"})
    assert str(excinfo.value) == "Dependency op3 not defined"
    assert excinfo.value.dependency == "op3"


def test_self_dependency() -> None:
    with pytest.raises(CircularDependencyError) as excinfo:
        build_graph({"op1": "hej", "op2": lambda op2: "hov"})
    assert str(excinfo.value) == "Circular dependency for op2"
    assert excinfo.value.task == "op2"


def test_validation_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        validate({"op1": ("op1",)})
    assert issubclass(DependencyNotDefinedError, GraphValidationError)


def test_indirect_cycles_pass_validation() -> None:
    validate({"op1": ("op3",), "op2": ("op1",), "op3": ("op2",)})


def test_validation_runs_before_any_task() -> None:
    calls = []

    with pytest.raises(DependencyNotDefinedError):
        build_graph(
            {
                "op1": lambda: calls.append("op1"),
                "op2": lambda missing: None,
            }
        )
    assert calls == []
