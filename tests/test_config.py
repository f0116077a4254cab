"""Tests for run configuration and the standard logging bridge."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest

from verdict import ValidationConfig, config_from_mapping, load_config, logging_sink, try_validate
from verdict.log import BufferedSink, Satisfied

from helpers import not_blank


def test_defaults() -> None:
    config = ValidationConfig()
    assert config.fail_fast is False
    assert config.logger is None
    assert config.log_discarded_branches is True
    assert config.with_fail_fast().fail_fast is True


def test_clock_is_exposed_on_context() -> None:
    fixed = datetime(2024, 1, 1, tzinfo=timezone.utc)
    config = ValidationConfig(clock=lambda: fixed)
    assert try_validate(lambda v: v.now(), config).value == fixed


def test_config_from_mapping() -> None:
    config = config_from_mapping({"fail_fast": True, "log_discarded_branches": False, "log_level": "info"})
    assert config.fail_fast is True
    assert config.log_discarded_branches is False
    assert config.logger is not None


@pytest.mark.parametrize(
    "data, error",
    [
        ({"fail_fast": "yes"}, "fail_fast must be a boolean"),
        ({"log_discarded_branches": 1}, "log_discarded_branches must be a boolean"),
        ({"log_level": "loud"}, "Unknown log_level"),
        ({"strict": True}, "Unknown configuration keys: strict"),
    ],
)
def test_config_from_mapping_rejects_bad_values(data: dict, error: str) -> None:
    with pytest.raises(ValueError, match=error):
        config_from_mapping(data)


def test_load_toml_section(tmp_path: Path) -> None:
    path = tmp_path / "verdict.toml"
    path.write_text("[verdict]\nfail_fast = true\n", encoding="utf-8")
    assert load_config(path).fail_fast is True


def test_load_toml_top_level(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    path.write_text("log_discarded_branches = false\n", encoding="utf-8")
    assert load_config(path).log_discarded_branches is False


def test_load_yaml(tmp_path: Path) -> None:
    path = tmp_path / "verdict.yaml"
    path.write_text("verdict:\n  fail_fast: true\n  log_level: debug\n", encoding="utf-8")
    config = load_config(path)
    assert config.fail_fast is True
    assert config.logger is not None


def test_load_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == ValidationConfig()


def test_load_rejects_invalid_files(tmp_path: Path) -> None:
    bad_toml = tmp_path / "bad.toml"
    bad_toml.write_text("fail_fast = \n", encoding="utf-8")
    with pytest.raises(ValueError, match="Failed to parse config TOML"):
        load_config(bad_toml)

    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must be a mapping"):
        load_config(listing)

    other = tmp_path / "verdict.json"
    other.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported config format"):
        load_config(other)


def test_logging_sink_writes_records(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="verdict")
    config = ValidationConfig(logger=logging_sink())

    try_validate(lambda v: (not_blank(v, "x"), not_blank(v, "")), config)

    messages = [r.getMessage() for r in caplog.records if r.name == "verdict"]
    assert messages[0] == "satisfied test.notBlank at :"
    assert messages[1].startswith("violated test.notBlank at :")
    assert messages[1].endswith("must not be blank")


def test_logging_sink_respects_level(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="verdict")
    try_validate(lambda v: not_blank(v, ""), ValidationConfig(logger=logging_sink()))
    assert [r for r in caplog.records if r.name == "verdict"] == []


def test_buffered_sink_flush() -> None:
    received: list = []
    sink = BufferedSink()
    entry = Satisfied(constraint_id="x", root="", path="")
    sink(entry)

    sink.flush(received.append)
    assert received == [entry]
    assert sink.entries == []

    sink(entry)
    sink.flush(None)
    assert sink.entries == []
