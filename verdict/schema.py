"""
Per-property validation of an object.

    def validate_user(v: Validation, user: User) -> User:
        def rules(s: Schema[User]) -> None:
            s.field("name", user.name, not_blank)
            s.field("age", user.age, lambda v, age: at_least(v, age, 0))
        return schema(v, user, rules)

Each field runs in its own scope under a path segment named after it. A
field whose value already appears higher up the path (a back-reference) is
skipped without running its block.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from .accumulate import Accumulated, Ok
from .constraint import Constraint, constrain
from .validation import Validation, accumulating, add_path_checked, add_root

T = TypeVar("T")
V = TypeVar("V")

FieldBlock = Callable[[Validation, V], Any]


def type_name(obj: Any) -> str:
    return type(obj).__qualname__


class Schema(Generic[T]):
    """Field-level operations available inside a `schema` block."""

    def __init__(self, validation: Validation, obj: T):
        self.validation = validation
        self.obj = obj

    def field(self, name: str, value: V, block: FieldBlock[V]) -> Accumulated[V]:
        """Validate `value` under the path segment `name`."""
        child = add_path_checked(self.validation, name, value)
        if child is None:
            return Ok(value)
        outcome = accumulating(child, block, value)
        return Ok(value) if outcome.ok else outcome

    def constrain(self, constraint_id: str, check: Callable[[Constraint[T]], Any]) -> T:
        """Object-level constraint reported at the object's own path."""
        return constrain(self.validation, self.obj, constraint_id, check)


def schema(
    v: Validation,
    obj: T,
    block: Callable[[Schema[T]], Any],
    *,
    root: str | None = None,
) -> T:
    """Validate the fields of `obj` declared by `block` and return `obj`.

    The first schema of a run names the root (`root`, or the type's qualified
    name); nested schemas keep the existing root.
    """
    sv = add_root(v, root or type_name(obj), obj)
    block(Schema(sv, obj))
    return obj


def named(v: Validation, name: str, value: V, block: FieldBlock[V]) -> Accumulated[V]:
    """Validate a computed value under a caller-chosen path segment."""
    child = add_path_checked(v, name, value)
    if child is None:
        return Ok(value)
    outcome = accumulating(child, block, value)
    return Ok(value) if outcome.ok else outcome
