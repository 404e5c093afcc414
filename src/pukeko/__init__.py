"""A small test runner for ``test_*`` functions in Python modules."""

from pukeko.assertions import (
    TestFailure,
    assert_equal,
    assert_raises,
    assert_true,
    check,
    check_expression,
    raises,
)
from pukeko.discovery import TEST_PREFIX, discover
from pukeko.parametric import parametric, parametrize
from pukeko.runner import (
    CaseResult,
    CaseStatus,
    Runner,
    RunResult,
    RunStatus,
    TestsFailedError,
    run_tests,
)

__all__ = [
    "TEST_PREFIX",
    "CaseResult",
    "CaseStatus",
    "RunResult",
    "RunStatus",
    "Runner",
    "TestFailure",
    "TestsFailedError",
    "assert_equal",
    "assert_raises",
    "assert_true",
    "check",
    "check_expression",
    "discover",
    "parametric",
    "parametrize",
    "raises",
    "run_tests",
]
