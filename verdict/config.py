"""Run configuration and its file loaders."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from .log import LogSink, logging_sink

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ValidationConfig:
    """Settings fixed for the duration of one run.

    fail_fast: stop at the first violation instead of collecting all of them.
    clock: source of "now" for time-dependent constraints.
    logger: optional sink for `Satisfied` / `Violated` entries.
    log_discarded_branches: when False, entries produced by an `or`
        alternative whose outcome is discarded are dropped.
    """

    fail_fast: bool = False
    clock: Clock = _utc_now
    logger: LogSink | None = None
    log_discarded_branches: bool = True

    def with_fail_fast(self, fail_fast: bool = True) -> ValidationConfig:
        return replace(self, fail_fast=fail_fast)

    def with_logger(self, logger: LogSink | None) -> ValidationConfig:
        return replace(self, logger=logger)


_KNOWN_KEYS = {"fail_fast", "log_discarded_branches", "log_level"}


def config_from_mapping(data: dict[str, Any]) -> ValidationConfig:
    """Build a config from plain data (as read from TOML or YAML)."""
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

    fail_fast = data.get("fail_fast", False)
    if not isinstance(fail_fast, bool):
        raise ValueError("fail_fast must be a boolean")

    log_discarded = data.get("log_discarded_branches", True)
    if not isinstance(log_discarded, bool):
        raise ValueError("log_discarded_branches must be a boolean")

    sink = None
    log_level = data.get("log_level")
    if log_level is not None:
        level = logging.getLevelName(str(log_level).strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log_level: {log_level!r}")
        sink = logging_sink(level=level)

    return ValidationConfig(
        fail_fast=fail_fast,
        logger=sink,
        log_discarded_branches=log_discarded,
    )


def load_config(path: Path) -> ValidationConfig:
    """
    Load a config file.

    TOML files may keep the settings under a ``[verdict]`` table or at the
    top level; YAML files likewise under a ``verdict:`` key or at the top.
    """
    suffix = path.suffix.lower()
    content = path.read_text(encoding="utf-8")

    if suffix == ".toml":
        import tomllib

        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Failed to parse config TOML: {e}") from e
    elif suffix in (".yml", ".yaml"):
        import yaml

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse config YAML: {e}") from e
    else:
        raise ValueError(f"Unsupported config format: {path.name}")

    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")

    section = data.get("verdict", data)
    if not isinstance(section, dict):
        raise ValueError("'verdict' section must be a mapping")
    return config_from_mapping(section)
