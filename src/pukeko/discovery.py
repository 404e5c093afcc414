"""Find test functions in a module or namespace mapping."""

from __future__ import annotations

from collections.abc import MutableMapping
from types import ModuleType
from typing import Any, Callable, Union

TEST_PREFIX = "test_"

Namespace = Union[ModuleType, MutableMapping[str, Any]]


def bindings(namespace: Namespace) -> MutableMapping[str, Any]:
    """Return the writable name -> object mapping behind `namespace`.

    For a module this is its ``__dict__``, so every bound name is visible,
    including private and imported ones.
    """
    if isinstance(namespace, ModuleType):
        return vars(namespace)
    if isinstance(namespace, MutableMapping):
        return namespace
    raise TypeError(
        f"Expected a module or a mutable mapping, got {type(namespace).__name__}"
    )


def namespace_name(namespace: Namespace) -> str:
    """Label used for `namespace` in console and log messages."""
    if isinstance(namespace, ModuleType):
        return namespace.__name__
    name = bindings(namespace).get("__name__")
    return name if isinstance(name, str) else "<namespace>"


def discover(namespace: Namespace) -> list[str]:
    """Names of the test functions in `namespace`, in binding order."""
    return [
        name
        for name, value in list(bindings(namespace).items())
        if isinstance(name, str) and name.startswith(TEST_PREFIX) and callable(value)
    ]


def resolve(namespace: Namespace, name: str) -> Callable[[], Any]:
    return bindings(namespace)[name]
