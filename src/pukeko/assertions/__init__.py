"""Assertion system used inside test functions."""

from pukeko.assertions.base import TestFailure
from pukeko.assertions.deterministic import (
    assert_equal,
    assert_raises,
    assert_true,
    raises,
)
from pukeko.assertions.dispatch import check, check_expression

__all__ = [
    "TestFailure",
    "assert_equal",
    "assert_raises",
    "assert_true",
    "check",
    "check_expression",
    "raises",
]
