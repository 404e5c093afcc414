"""Plain-text run summaries printed to the console."""

from __future__ import annotations

from pukeko.runner import RunResult


def format_summary(result: RunResult) -> str:
    if result.failures:
        lines = [
            f"Test failures occurred in module {result.namespace_name}",
            "Functions with failed tests:",
        ]
        for function_name, failure in result.failures.items():
            lines.append(f"    {function_name}: {failure.message}")
        return "\n".join(lines)
    return (
        f"{result.total} test function(s) ran successfully "
        f"in module {result.namespace_name}"
    )
