"""Argument validation with named path segments."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from .accumulate import Accumulated, Err, Ok
from .result import Success
from .validation import Validation, add_path, ior

S = TypeVar("S")


def capture(v: Validation, name: str, block: Callable[..., S], *args: Any) -> Accumulated[S]:
    """Validate or transform an argument under the path segment `name`.

    `block` is called as ``block(v, *args)`` in its own scope. Failures are
    recorded in the enclosing scope; sibling captures still run unless the
    run is fail-fast. Reading `.value` of a failed capture aborts the
    enclosing scope, so a constructor is only reached when every captured
    argument it reads was valid:

        name = capture(v, "name", not_blank, raw_name)
        age = capture(v, "age", parse_int, raw_age)
        return User(name.value, age.value)
    """
    child = add_path(v, name)
    outcome = ior(child, block, *args)
    if isinstance(outcome, Success):
        return Ok(outcome.value)
    return Err(v.accumulate(list(outcome.messages)))
