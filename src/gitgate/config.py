"""Repository configuration for gitgate.

Settings are read from an optional ``.gitgate.yaml`` at the repository root
and validated against :class:`GateConfig`. A missing file yields defaults, so
a fresh repository needs no configuration at all.

Example ``.gitgate.yaml``::

    required_files: [README.md, LICENSE.md, CHANGELOG.md]
    source_dirs: [src]
    lint_command: [ruff, check, src, tests]
    timeout_s: 300
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import GitGateError

CONFIG_FILENAME = ".gitgate.yaml"
TIMEOUT_ENV = "GITGATE_TIMEOUT_S"
DEFAULT_TIMEOUT_S = 600


class ConfigError(GitGateError, ValueError):
    """Raised when the configuration file is invalid."""


def _default_test_command() -> list[str]:
    return [sys.executable, "-m", "pytest", "-q"]


class GateConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    hooks: list[str] = Field(default_factory=lambda: ["pre-commit", "pre-push"])
    required_files: list[str] = Field(default_factory=lambda: ["README.md", "LICENSE.md"])
    source_dirs: list[str] = Field(default_factory=lambda: ["src"])
    tests_dir: str = Field("tests", min_length=1)
    test_command: list[str] = Field(default_factory=_default_test_command)
    lint_command: list[str] = Field(default_factory=lambda: ["ruff", "check", "."])
    toc_command: list[str] = Field(default_factory=lambda: ["mdtoc", "--inplace", "README.md"])
    remote_tag_marker: str = Field("refs/tags/", min_length=1)
    timeout_s: int | None = Field(DEFAULT_TIMEOUT_S, ge=1)


def load_config(root: Path, config_path: Path | None = None) -> GateConfig:
    """Load configuration for the repository at ``root``.

    Args:
        root: Repository root; ``.gitgate.yaml`` is looked up there.
        config_path: Explicit file; must exist when given.

    Raises:
        ConfigError: On unreadable YAML, a non-mapping document, unknown keys
            or invalid values.
    """
    path = config_path or (root / CONFIG_FILENAME)
    if config_path is None and not path.exists():
        data: dict[str, Any] = {}
    else:
        data = _read_yaml(path)

    env_timeout = os.environ.get(TIMEOUT_ENV)
    if env_timeout:
        try:
            data["timeout_s"] = int(env_timeout)
        except ValueError as e:
            raise ConfigError(f"{TIMEOUT_ENV} must be an integer, got {env_timeout!r}") from e

    try:
        return GateConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")
    return data
