"""Small validation functions and model types shared by the tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from verdict import Validation, constrain, reject, text


def not_blank(v: Validation, value: str) -> str:
    return constrain(
        v,
        value,
        "test.notBlank",
        lambda c: c.satisfies(bool(value.strip()), "must not be blank"),
    )


def at_least(v: Validation, value: int, minimum: int) -> int:
    return constrain(
        v,
        value,
        "test.atLeast",
        lambda c: c.satisfies(
            value >= minimum,
            lambda: text("must be greater than or equal to {0}", minimum),
        ),
    )


def at_most(v: Validation, value: int, maximum: int) -> int:
    return constrain(
        v,
        value,
        "test.atMost",
        lambda c: c.satisfies(
            value <= maximum,
            lambda: text("must be less than or equal to {0}", maximum),
        ),
    )


def parse_int(v: Validation, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        reject(v, "must be a valid integer", constraint_id="test.int", input=raw)


class Counter:
    """Wraps a validation function and counts how often it ran."""

    def __init__(self, fn: Callable[..., Any]):
        self.fn = fn
        self.calls = 0

    def __call__(self, v: Validation, *args: Any) -> Any:
        self.calls += 1
        return self.fn(v, *args)


@dataclass
class Address:
    street: str
    city: str


@dataclass
class Person:
    name: str
    age: int
    address: Address | None = None


@dataclass(eq=False)
class City:
    name: str
    users: list[User] = field(default_factory=list)


@dataclass(eq=False)
class User:
    name: str
    city: City | None = None


@dataclass(frozen=True)
class Name:
    value: str


@dataclass(frozen=True)
class FullName:
    first: Name
    last: Name


@dataclass(frozen=True)
class Account:
    id: int
    full_name: FullName
