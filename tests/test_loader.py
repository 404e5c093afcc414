"""Tests for loading test modules."""

import json
import sys

import pytest

from pukeko.discovery import discover
from pukeko.loader import TargetLoadError, load_target


def test_load_file(write_tests):
    path = write_tests(
        "def test_one():\n    pass\n\n\ndef helper():\n    pass\n",
        name="loader_file_tests.py",
    )
    module = load_target(str(path))
    assert module.__name__ == "loader_file_tests"
    assert discover(module) == ["test_one"]
    assert module.test_one.__module__ == "loader_file_tests"


def test_load_same_file_twice_keeps_name(write_tests):
    path = write_tests("def test_one():\n    pass\n", name="loader_twice_tests.py")
    first = load_target(str(path))
    second = load_target(str(path))
    assert first.__name__ == second.__name__ == "loader_twice_tests"


def test_load_missing_file(tmp_path):
    with pytest.raises(TargetLoadError, match="not found"):
        load_target(str(tmp_path / "nope.py"))


def test_load_file_with_error_is_wrapped(write_tests):
    path = write_tests("raise RuntimeError('broken at import')\n", name="broken_tests.py")
    with pytest.raises(TargetLoadError, match="broken at import") as exc_info:
        load_target(str(path))
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert "broken_tests" not in sys.modules


def test_load_file_with_syntax_error(write_tests):
    path = write_tests("def test_one(:\n    pass\n", name="syntax_error_tests.py")
    with pytest.raises(TargetLoadError, match="SyntaxError") as exc_info:
        load_target(str(path))
    assert isinstance(exc_info.value.__cause__, SyntaxError)


def test_file_named_like_installed_module_does_not_shadow_it(tmp_path):
    test_dir = tmp_path / "suite"
    test_dir.mkdir()
    path = test_dir / "json.py"
    path.write_text("def test_one():\n    pass\n")

    module = load_target(str(path))
    assert module.__name__ == "suite.json"
    assert sys.modules["json"] is json


def test_broken_file_does_not_evict_existing_module(tmp_path):
    path = tmp_path / "json.py"
    path.write_text("raise RuntimeError('broken')\n")

    with pytest.raises(TargetLoadError):
        load_target(str(path))
    assert sys.modules["json"] is json


def test_same_stem_in_two_directories_gets_distinct_names(tmp_path):
    paths = []
    for directory in ("alpha", "beta"):
        (tmp_path / directory).mkdir()
        path = tmp_path / directory / "stem_clash_tests.py"
        path.write_text(f"WHERE = {directory!r}\n")
        paths.append(path)

    first = load_target(str(paths[0]))
    second = load_target(str(paths[1]))
    assert first.__name__ == "stem_clash_tests"
    assert second.__name__ == "beta.stem_clash_tests"
    assert (first.WHERE, second.WHERE) == ("alpha", "beta")


def test_load_dotted_module():
    module = load_target("pukeko.discovery")
    assert module.__name__ == "pukeko.discovery"


def test_load_missing_dotted_module():
    with pytest.raises(TargetLoadError, match="test module not found"):
        load_target("pukeko_no_such_module.tests")


def test_load_dotted_module_with_missing_dependency(tmp_path, monkeypatch):
    (tmp_path / "needs_dep_tests.py").write_text("import pukeko_missing_dependency\n")
    monkeypatch.syspath_prepend(str(tmp_path))

    with pytest.raises(TargetLoadError, match="failed to import") as exc_info:
        load_target("needs_dep_tests")
    assert "not found" not in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, ModuleNotFoundError)
