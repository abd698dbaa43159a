"""Infer dependency names from a callable's signature."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from auto_resolve.errors import SignatureError

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _describe(func: Callable[..., Any]) -> str:
    return getattr(func, "__qualname__", None) or repr(func)


def parameter_names(func: Callable[..., Any]) -> list[str]:
    """Return the ordered positional parameter names of `func`.

    Bound methods do not report `self`, and `functools.partial` objects only
    report the parameters left unbound. Keyword-only parameters with a default
    are ignored since they are never filled from dependencies.

    Raises:
        SignatureError: If the signature cannot be inspected, or it declares
            parameters whose dependency names cannot be inferred positionally
            (`*args`, `**kwargs`, keyword-only without default).
    """

    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError) as e:
        raise SignatureError(
            f"Cannot infer dependencies of {_describe(func)}: no introspectable signature"
        ) from e

    names: list[str] = []
    for param in signature.parameters.values():
        if param.kind in _POSITIONAL:
            names.append(param.name)
        elif param.kind is inspect.Parameter.KEYWORD_ONLY:
            if param.default is inspect.Parameter.empty:
                raise SignatureError(
                    f"Cannot infer dependencies of {_describe(func)}: "
                    f"keyword-only parameter {param.name!r} has no default"
                )
        else:
            raise SignatureError(
                f"Cannot infer dependencies of {_describe(func)}: "
                f"variadic parameter {param.name!r}; declare depends_on explicitly"
            )
    return names
