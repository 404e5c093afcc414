from __future__ import annotations

import pytest
from junitparser import Error, Failure, JUnitXml

from pukeko.assertions import TestFailure
from pukeko.reporting.junit import write_junit
from pukeko.reporting.text import format_summary
from pukeko.runner import CaseResult, CaseStatus, RunResult, RunStatus


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def completed_result() -> RunResult:
    failure = TestFailure("Expression did not evaluate to `True`: 1 != 2")
    return RunResult(
        namespace_name="arith_tests",
        status=RunStatus.COMPLETED,
        total=3,
        failures={"test_sub": failure},
        cases=[
            CaseResult("test_add", CaseStatus.PASSED, duration_seconds=0.25),
            CaseResult("test_sub", CaseStatus.FAILED, failure.message, 0.5),
            CaseResult("test_mul", CaseStatus.PASSED, duration_seconds=0.25),
        ],
    )


@pytest.fixture
def aborted_result() -> RunResult:
    return RunResult(
        namespace_name="broken_tests",
        fail_fast=True,
        status=RunStatus.ABORTED,
        total=2,
        cases=[
            CaseResult("test_ok", CaseStatus.PASSED),
            CaseResult("test_crash", CaseStatus.ERRORED, "ZeroDivisionError('division by zero')"),
        ],
    )


# ---------------------------------------------------------------------------
# Text summary
# ---------------------------------------------------------------------------


def test_summary_success():
    result = RunResult(namespace_name="green", status=RunStatus.COMPLETED, total=4)
    assert format_summary(result) == "4 test function(s) ran successfully in module green"


def test_summary_lists_every_failure(completed_result):
    completed_result.failures["test_div"] = TestFailure("boom")
    text = format_summary(completed_result)
    assert text.splitlines() == [
        "Test failures occurred in module arith_tests",
        "Functions with failed tests:",
        "    test_sub: Expression did not evaluate to `True`: 1 != 2",
        "    test_div: boom",
    ]


# ---------------------------------------------------------------------------
# JUnit XML
# ---------------------------------------------------------------------------


def test_write_junit_creates_file(tmp_path, completed_result):
    path = write_junit(tmp_path / "reports" / "junit.xml", [completed_result])
    assert path.exists()


def test_write_junit_one_suite_per_namespace(tmp_path, completed_result, aborted_result):
    path = write_junit(tmp_path / "junit.xml", [completed_result, aborted_result])
    xml = JUnitXml.fromfile(str(path))
    assert [s.name for s in xml] == ["arith_tests", "broken_tests"]


def test_write_junit_case_results(tmp_path, completed_result):
    path = write_junit(tmp_path / "junit.xml", [completed_result])
    suite = next(iter(JUnitXml.fromfile(str(path))))

    assert suite.tests == 3
    assert suite.failures == 1
    assert suite.errors == 0
    assert suite.time == pytest.approx(1.0)

    cases = {case.name: case for case in suite}
    assert cases["test_add"].result == []
    assert cases["test_add"].classname == "arith_tests"
    failure = cases["test_sub"].result[0]
    assert isinstance(failure, Failure)
    assert "1 != 2" in failure.message


def test_write_junit_errored_case_and_properties(tmp_path, aborted_result):
    path = write_junit(tmp_path / "junit.xml", [aborted_result])
    suite = next(iter(JUnitXml.fromfile(str(path))))

    assert suite.errors == 1
    cases = {case.name: case for case in suite}
    assert isinstance(cases["test_crash"].result[0], Error)

    props = {p.name: p.value for p in suite.properties()}
    assert props == {"status": "aborted", "fail_fast": "true"}


def test_write_junit_empty(tmp_path):
    path = write_junit(tmp_path / "junit.xml", [])
    assert len(list(JUnitXml.fromfile(str(path)))) == 0
