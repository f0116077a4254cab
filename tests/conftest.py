"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from verdict import LogEntry, ValidationConfig


@pytest.fixture
def entries() -> list[LogEntry]:
    """Log entries captured by the `logged` config."""
    return []


@pytest.fixture
def logged(entries: list[LogEntry]) -> ValidationConfig:
    """Collect-all config whose log sink appends to `entries`."""
    return ValidationConfig().with_logger(entries.append)


@pytest.fixture
def fail_fast() -> ValidationConfig:
    return ValidationConfig(fail_fast=True)
