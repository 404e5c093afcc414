"""Load test modules named on the command line or in a config file."""

from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType


class TargetLoadError(ValueError):
    pass


def _file_module_name(path: Path) -> str:
    """Pick a ``sys.modules`` key for a test file.

    The file stem is used unless another file (or an installed module such
    as ``json``) already holds it, in which case the parent directory name
    is prefixed and a counter appended if that is taken too.
    """
    resolved = path.resolve()

    def _free(name: str) -> bool:
        existing = sys.modules.get(name)
        if existing is None:
            return True
        existing_file = getattr(existing, "__file__", None)
        return existing_file is not None and Path(existing_file).resolve() == resolved

    candidates = [path.stem, f"{resolved.parent.name}.{path.stem}"]
    for name in candidates:
        if _free(name):
            return name
    counter = 2
    while not _free(f"{candidates[-1]}_{counter}"):
        counter += 1
    return f"{candidates[-1]}_{counter}"


def _load_file(target: str) -> ModuleType:
    path = Path(target)
    if not path.is_file():
        raise TargetLoadError(f"test file not found: {target}")
    module_name = _file_module_name(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise TargetLoadError(f"cannot load test file: {target}")
    module = importlib.util.module_from_spec(spec)
    previous = sys.modules.get(module_name)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        if previous is None:
            sys.modules.pop(module_name, None)
        else:
            sys.modules[module_name] = previous
        raise TargetLoadError(
            f"failed to import test file {target}: {type(e).__name__}: {e}"
        ) from e
    return module


def load_target(target: str) -> ModuleType:
    """Import `target`, either a ``.py`` file path or a dotted module name.

    A file is loaded as a module named after its stem and registered in
    ``sys.modules`` so its functions report that module name. Any error
    raised while importing is wrapped in `TargetLoadError`.
    """
    if target.endswith(".py"):
        return _load_file(target)

    try:
        return importlib.import_module(target)
    except ModuleNotFoundError as e:
        # Only the target (or one of its parent packages) being absent counts
        # as not found; a missing dependency is an import failure.
        missing = e.name or ""
        if missing and (target == missing or target.startswith(f"{missing}.")):
            raise TargetLoadError(f"test module not found: {target}") from e
        raise TargetLoadError(
            f"failed to import test module {target}: {type(e).__name__}: {e}"
        ) from e
    except Exception as e:
        raise TargetLoadError(
            f"failed to import test module {target}: {type(e).__name__}: {e}"
        ) from e
