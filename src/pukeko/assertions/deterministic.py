"""Truth, equality and exception checks used inside test functions."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator

from pukeko.assertions.base import TestFailure

ExceptionKind = type[BaseException] | tuple[type[BaseException], ...]


def assert_true(value: Any) -> None:
    """Raise `TestFailure` unless `value` is exactly `True`."""
    if value is not True:
        raise TestFailure(f"Expression did not evaluate to `True`: {value}")


def assert_equal(left: Any, right: Any) -> None:
    """Raise `TestFailure` unless `left == right`.

    Both operands end up in the message, which is why `check` routes a
    two-operand call here instead of comparing first.
    """
    if not left == right:
        raise TestFailure(
            f"Expression did not evaluate to `True`: {left} != {right}"
        )


def _kind_name(expected: ExceptionKind) -> str:
    if isinstance(expected, tuple):
        return " or ".join(e.__name__ for e in expected)
    return expected.__name__


@contextmanager
def raises(expected: ExceptionKind) -> Iterator[None]:
    """Context manager form of `assert_raises`.

    Matching is by exception kind only: any instance of `expected`
    (or one of its subclasses) satisfies the check.
    """
    try:
        yield
    except expected:
        return
    except Exception as e:
        raise TestFailure(
            f"Expected {_kind_name(expected)} to be raised, "
            f"got {type(e).__name__}: {e}"
        ) from e
    raise TestFailure(
        f"Expected {_kind_name(expected)} to be raised, no exception was raised"
    )


def assert_raises(
    expected: ExceptionKind, func: Callable[..., Any], *args: Any, **kwargs: Any
) -> None:
    """Call `func(*args, **kwargs)` and require it to raise `expected`."""
    with raises(expected):
        func(*args, **kwargs)
