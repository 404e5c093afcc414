"""Generate named test functions from a template and a list of values."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from pukeko.discovery import TEST_PREFIX, Namespace, bindings, namespace_name

logger = logging.getLogger("pukeko.parametric")


def case_name(template: Callable[..., Any], value: Any) -> str:
    return f"{TEST_PREFIX}{template.__name__}{value}"


def _make_case(
    template: Callable[..., Any], value: Any, name: str, module: str
) -> Callable[[], Any]:
    if isinstance(value, tuple):

        def case() -> Any:
            return template(*value)

    else:

        def case() -> Any:
            return template(value)

    case.__name__ = name
    case.__qualname__ = name
    case.__module__ = module
    case.__doc__ = template.__doc__
    return case


def parametric(
    namespace: Namespace, template: Callable[..., Any], values: Iterable[Any]
) -> list[str]:
    """Bind one zero-argument test function into `namespace` per value.

    Each function is named ``test_<template name><value>``. Tuple values are
    spread into positional arguments; any other value is passed as the single
    argument. Functions are bound immediately, so they are visible to the
    next discovery. An existing binding with the same name is replaced.

    The template itself should not start with ``test_``, otherwise it would
    be discovered and called without arguments.

    Returns the generated names in order.
    """
    target = bindings(namespace)
    module = namespace_name(namespace)
    names = []
    for value in values:
        name = case_name(template, value)
        if name in target:
            logger.debug(f"Replacing existing binding '{name}' in '{module}'")
        target[name] = _make_case(template, value, name, module)
        names.append(name)
    return names


def parametrize(
    values: Iterable[Any],
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator form of `parametric` for use at module level.

    Cases are bound into the module that defines the template::

        @parametrize([1, 2, 3])
        def positive(x):
            check(x > 0)
    """

    def decorator(template: Callable[..., Any]) -> Callable[..., Any]:
        parametric(template.__globals__, template, values)
        return template

    return decorator
