from __future__ import annotations

from pathlib import Path
from typing import Iterable

from junitparser import Error, Failure, JUnitXml, TestCase, TestSuite

from pukeko.runner import CaseStatus, RunResult


def build_suite(result: RunResult) -> TestSuite:
    suite = TestSuite(result.namespace_name)
    suite.add_property("status", result.status.value)
    suite.add_property("fail_fast", str(result.fail_fast).lower())

    for case_result in result.cases:
        case = TestCase(case_result.name)
        case.classname = result.namespace_name
        case.time = case_result.duration_seconds
        if case_result.status == CaseStatus.FAILED:
            case.result = [Failure(case_result.message)]
        elif case_result.status == CaseStatus.ERRORED:
            case.result = [Error(case_result.message)]
        suite.add_testcase(case)

    # Set time after add_testcase (add_testcase resets it via update_statistics)
    suite.time = sum(c.duration_seconds for c in result.cases)
    return suite


def write_junit(path: Path, results: Iterable[RunResult]) -> Path:
    """Write junit.xml with one suite per namespace, return path."""
    xml = JUnitXml()
    for result in results:
        # Use append (not +=) to preserve properties and time
        xml.append(build_suite(result))

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path
