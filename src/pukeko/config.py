from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Sequence

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator

FAIL_FAST_FLAG = "--PUKEKO_FAIL_FAST"
FAIL_FAST_ENV = "PUKEKO_FAIL_FAST"

_TRUTHY = {"1", "true", "yes", "on"}


def fail_fast_override(
    argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None
) -> bool:
    """Whether the process asks for fail-fast on every run.

    Set by passing ``--PUKEKO_FAIL_FAST`` on the command line or by setting
    ``PUKEKO_FAIL_FAST`` to a truthy value. Read on each call, never cached.
    """
    argv = sys.argv if argv is None else argv
    environ = os.environ if environ is None else environ
    if FAIL_FAST_FLAG in argv:
        return True
    return environ.get(FAIL_FAST_ENV, "").strip().lower() in _TRUTHY


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    targets: list[str]
    fail_fast: bool = False
    junit: str | None = None
    debug_log: str | None = None

    @field_validator("targets")
    @classmethod
    def targets_must_not_be_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("targets must not be empty")
        return v


def _expand(value: object) -> object:
    if isinstance(value, str):
        return expandvars(value)
    if isinstance(value, list):
        return [_expand(v) for v in value]
    if isinstance(value, dict):
        return {k: _expand(v) for k, v in value.items()}
    return value


def _resolve_target(config_dir: Path, target: str) -> str:
    # Dotted module names are left for importlib.
    if target.endswith(".py") and not Path(target).is_absolute():
        return str((config_dir / target).resolve())
    return target


def load_config(path: Path) -> RunConfig:
    """Load and validate a run config from a YAML file.

    ``${VAR}`` references are expanded from the environment. Relative paths
    are resolved against the config file's directory.
    """
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    config = RunConfig(**_expand(raw))

    config.targets = [_resolve_target(config_dir, t) for t in config.targets]
    for field in ("junit", "debug_log"):
        value = getattr(config, field)
        if value is not None and not Path(value).is_absolute():
            setattr(config, field, str((config_dir / value).resolve()))

    return config
