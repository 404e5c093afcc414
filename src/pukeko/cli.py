from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="pukeko", help="Run test_* functions in Python modules")


def _resolve_run_options(
    targets: list[str] | None,
    config: str | None,
    fail_fast: bool,
    junit: str | None,
    debug_log: str | None,
) -> tuple[list[str], bool, str | None, str | None]:
    from pukeko.config import load_config

    if config is None:
        if not targets:
            typer.echo(
                "Error: no test targets given (pass modules or --config)", err=True
            )
            raise typer.Exit(1)
        return targets, fail_fast, junit, debug_log

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)
    try:
        run_config = load_config(config_path)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    # Command line values take precedence over the config file.
    return (
        targets or run_config.targets,
        fail_fast or run_config.fail_fast,
        junit or run_config.junit,
        debug_log or run_config.debug_log,
    )


@app.command()
def run(
    targets: list[str] | None = typer.Argument(
        None, help="Test modules (dotted names) or .py files"
    ),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to pukeko YAML config"
    ),
    fail_fast: bool = typer.Option(
        False, "--fail-fast", "-x", help="Stop at the first failing test function"
    ),
    junit: str | None = typer.Option(
        None, help="Write a JUnit XML report to this path"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(None, help="Write debug log to this path"),
):
    """Run the test functions of each target module."""
    from pukeko.loader import load_target
    from pukeko.reporting.text import format_summary
    from pukeko.runner import Runner, RunResult
    from pukeko.verbose import setup_logger

    targets, fail_fast, junit, debug_log = _resolve_run_options(
        targets, config, fail_fast, junit, debug_log
    )

    logger = setup_logger(
        Path(debug_log) if debug_log else None, verbose=verbose, logger_name="pukeko"
    )
    logger.debug(f"Starting run over {len(targets)} target(s)")

    results: list[RunResult] = []
    exit_code = 0
    try:
        for target in targets:
            try:
                module = load_target(target)
            except ValueError as e:
                typer.echo(f"Error: {e}", err=True)
                raise typer.Exit(1)

            runner = Runner(module, fail_fast=fail_fast, logger=logger)
            try:
                result = runner.execute()
            except Exception as e:
                if runner.result is not None:
                    results.append(runner.result)
                typer.echo(f"Error: {type(e).__name__}: {e}", err=True)
                exit_code = 1
                break
            results.append(result)
            typer.echo(format_summary(result))
            if result.failures:
                exit_code = 1
    finally:
        if junit:
            from pukeko.reporting.junit import write_junit

            junit_path = write_junit(Path(junit), results)
            typer.echo(f"JUnit report: {junit_path}")

    if exit_code:
        raise typer.Exit(exit_code)


@app.command("list")
def list_tests(
    targets: list[str] = typer.Argument(
        help="Test modules (dotted names) or .py files"
    ),
):
    """Print the test functions each target would run."""
    from pukeko.discovery import discover
    from pukeko.loader import load_target

    for target in targets:
        try:
            module = load_target(target)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
        names = discover(module)
        typer.echo(f"{module.__name__} ({len(names)} test function(s))")
        for name in names:
            typer.echo(f"  {name}")


@app.command()
def init(
    dir: str = typer.Option(
        "pukeko", "--dir", help="Directory to initialize test project in"
    ),
):
    """Initialize a new test project with an example config and test module."""
    project_dir = Path(dir)

    if not project_dir.exists():
        project_dir.mkdir(parents=True, exist_ok=True)

    config = project_dir / "pukeko.yaml"
    if config.exists():
        typer.echo(f"pukeko.yaml already exists in {dir}, skipping.")
        return

    config.write_text("""\
targets:
  - example_tests.py
fail_fast: false
junit: ${PUKEKO_OUT:-build}/junit.xml
""")

    (project_dir / "example_tests.py").write_text('''\
from pukeko import check, parametric, run_tests


def test_addition():
    check(1 + 1, 2)


def test_membership():
    check("k" in "pukeko")


def commutes(x, y):
    check(x + y, y + x)


parametric(globals(), commutes, [(1, 2), (3, 4)])


if __name__ == "__main__":
    import sys

    run_tests(sys.modules[__name__])
''')

    typer.echo(f"Initialized test project in {dir}:")
    typer.echo("  pukeko.yaml       - example run config")
    typer.echo("  example_tests.py  - example test module")
