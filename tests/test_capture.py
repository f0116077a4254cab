"""Tests for argument capture."""

from __future__ import annotations

from verdict import Failure, Success, Validation, ValidationConfig, capture, try_validate

from helpers import Counter, Person, not_blank, parse_int


def build_person(v: Validation, raw_name: str, raw_age: str) -> Person:
    name = capture(v, "name", not_blank, raw_name)
    age = capture(v, "age", parse_int, raw_age)
    return Person(name.value, age.value)


def test_all_arguments_valid() -> None:
    assert try_validate(lambda v: build_person(v, "Ada", "36")) == Success(Person("Ada", 36))


def test_collects_failures_of_every_argument() -> None:
    result = try_validate(lambda v: build_person(v, "", "old"))

    assert isinstance(result, Failure)
    assert [m.path.full_name for m in result.messages] == ["name", "age"]
    assert [m.constraint_id for m in result.messages] == ["test.notBlank", "test.int"]


def test_fail_fast_skips_remaining_arguments(fail_fast: ValidationConfig) -> None:
    parse = Counter(parse_int)

    def run(v: Validation) -> Person:
        name = capture(v, "name", not_blank, "")
        age = capture(v, "age", parse, "36")
        return Person(name.value, age.value)

    result = try_validate(run, fail_fast)
    assert isinstance(result, Failure)
    assert [m.path.full_name for m in result.messages] == ["name"]
    assert parse.calls == 0


def test_failed_capture_is_err() -> None:
    outcomes: list = []

    def run(v: Validation) -> None:
        outcomes.append(capture(v, "age", parse_int, "x"))
        outcomes.append(capture(v, "name", not_blank, "Ada"))

    result = try_validate(run)
    assert isinstance(result, Failure)
    failed, passed = outcomes
    assert not failed.ok
    assert passed.ok and passed.value == "Ada"


def test_constructor_not_reached_after_failure() -> None:
    built: list[Person] = []

    def run(v: Validation) -> Person:
        name = capture(v, "name", not_blank, " ")
        person = Person(name.value, 1)
        built.append(person)
        return person

    assert isinstance(try_validate(run), Failure)
    assert built == []
