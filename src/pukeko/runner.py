from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pukeko.assertions.base import TestFailure
from pukeko.config import fail_fast_override
from pukeko.discovery import Namespace, discover, namespace_name, resolve


class CaseStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"


class RunStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class CaseResult:
    name: str
    status: CaseStatus = CaseStatus.PENDING
    message: str = ""
    duration_seconds: float = 0.0


@dataclass
class RunResult:
    """Outcome of running every test function in one namespace.

    `failures` only ever holds `TestFailure`s, keyed by test function name.
    If the run was aborted, `total` and `cases` cover the functions attempted
    up to and including the one that stopped it.
    """

    namespace_name: str
    fail_fast: bool = False
    status: RunStatus = RunStatus.IDLE
    total: int = 0
    failures: dict[str, TestFailure] = field(default_factory=dict)
    cases: list[CaseResult] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for c in self.cases if c.status == CaseStatus.PASSED)

    @property
    def ok(self) -> bool:
        return self.status == RunStatus.COMPLETED and not self.failures

    def to_dict(self) -> dict[str, Any]:
        return {
            "namespace": self.namespace_name,
            "fail_fast": self.fail_fast,
            "status": self.status.value,
            "total": self.total,
            "passed": self.passed,
            "failures": {name: f.message for name, f in self.failures.items()},
            "cases": [
                {
                    "name": c.name,
                    "status": c.status.value,
                    "message": c.message,
                }
                for c in self.cases
            ],
        }


class TestsFailedError(Exception):
    """Raised by `run_tests` after a completed run with failing tests."""

    __test__ = False

    def __init__(self, result: RunResult):
        self.result = result
        details = "; ".join(
            f"{name}: {failure.message}" for name, failure in result.failures.items()
        )
        super().__init__(
            f"Some tests failed in module {result.namespace_name}! {details}"
        )


class Runner:
    """Runs the test functions of one namespace, in discovery order."""

    def __init__(
        self,
        namespace: Namespace,
        fail_fast: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.namespace = namespace
        self.fail_fast = fail_fast
        self.logger = logger or logging.getLogger("pukeko")
        self.result: RunResult | None = None

    def execute(self) -> RunResult:
        # The process-wide override is checked on every run.
        fail_fast = self.fail_fast or fail_fast_override()
        module_name = namespace_name(self.namespace)
        names = discover(self.namespace)

        result = RunResult(namespace_name=module_name, fail_fast=fail_fast)
        self.result = result
        result.cases = [CaseResult(name=name) for name in names]
        result.status = RunStatus.RUNNING
        self.logger.debug(
            f"Running {len(names)} test function(s) in module '{module_name}' "
            f"(fail_fast={fail_fast})"
        )

        for case in result.cases:
            result.total += 1
            case.status = CaseStatus.RUNNING
            func = resolve(self.namespace, case.name)
            start = time.perf_counter()

            try:
                func()
            except TestFailure as e:
                self._finish(case, CaseStatus.FAILED, start, e.message)
                result.failures[case.name] = e
                if fail_fast:
                    self._abort(result)
                    raise
                continue
            except Exception as e:
                self._finish(case, CaseStatus.ERRORED, start, repr(e))
                self._abort(result)
                if fail_fast:
                    raise
                print(
                    f"Unexpected exception occurred in test function "
                    f"`{case.name}` in module `{module_name}`"
                )
                self.logger.error(
                    f"Unexpected exception in '{case.name}' "
                    f"in module '{module_name}': {e!r}"
                )
                raise
            self._finish(case, CaseStatus.PASSED, start)

        result.status = RunStatus.COMPLETED
        self.logger.debug(
            f"Finished module '{module_name}': {result.passed}/{result.total} passed"
        )
        return result

    def _finish(
        self, case: CaseResult, status: CaseStatus, start: float, message: str = ""
    ) -> None:
        case.status = status
        case.message = message
        case.duration_seconds = time.perf_counter() - start
        self.logger.debug(f"{status.value.upper()}  {case.name} {message}".rstrip())

    def _abort(self, result: RunResult) -> None:
        result.status = RunStatus.ABORTED
        # Cases after the abort point were never attempted.
        result.cases = [c for c in result.cases if c.status != CaseStatus.PENDING]


def run_tests(
    namespace: Namespace,
    fail_fast: bool = False,
    logger: logging.Logger | None = None,
) -> RunResult:
    """Run every ``test_*`` function in `namespace` and print a summary.

    If `fail_fast` is false, a failing test does not stop the others; after
    the run a summary is printed and `TestsFailedError` is raised if any
    failed. If it is true, the first exception of any kind propagates
    unchanged. The ``--PUKEKO_FAIL_FAST`` command line flag or the
    ``PUKEKO_FAIL_FAST`` environment variable force fail-fast on.

    Any exception other than `TestFailure` stops the run and is re-raised
    after naming the test function it came from.
    """
    from pukeko.reporting.text import format_summary

    result = Runner(namespace, fail_fast=fail_fast, logger=logger).execute()
    print(format_summary(result))
    if result.failures:
        raise TestsFailedError(result)
    return result
