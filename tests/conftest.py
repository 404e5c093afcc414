"""Pytest configuration and fixtures."""

import logging
import types

import pytest


@pytest.fixture(autouse=True)
def no_fail_fast_override(monkeypatch):
    """Keep the process-wide fail-fast switch off unless a test sets it."""
    monkeypatch.delenv("PUKEKO_FAIL_FAST", raising=False)


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Reset pukeko loggers after each test so handlers don't leak between tests."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not name.startswith("pukeko"):
            continue
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_module():
    """Build a module object whose attributes are bound in the given order."""

    def _make(name: str = "sample", **bindings) -> types.ModuleType:
        module = types.ModuleType(name)
        for key, value in bindings.items():
            setattr(module, key, value)
        return module

    return _make


@pytest.fixture
def write_tests(tmp_path):
    """Write a test module to a temp file and return its path."""

    def _write(content: str, name: str = "sample_tests.py"):
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write
