"""
Constraint evaluation.

A predicate is run, and only when it fails is the message built, located at
the current path, logged, and handed to the active accumulator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union

from .accumulate import ScopeToken
from .log import Satisfied, Violated, emit
from .message import Message, MessageLike, resolve
from .result import Success
from .validation import Validation, accumulating, bind, ior

T = TypeVar("T")
R = TypeVar("R")

Condition = Union[bool, Callable[[], bool]]


def _record(v: Validation, message: MessageLike, constraint_id: str, input: Any) -> ScopeToken:
    msg = resolve(message).with_details(input, constraint_id).located(v.root, v.path)
    emit(
        v.config.logger,
        lambda: Violated(
            constraint_id=constraint_id,
            root=v.root,
            path=v.path.full_name,
            input=input,
            args=msg.args,
            message=msg,
        ),
    )
    return v.accumulate([msg])


def evaluate(
    v: Validation,
    condition: Condition,
    message: MessageLike,
    *,
    constraint_id: str,
    input: Any = None,
) -> bool:
    """Check one predicate. Returns False if a failure was recorded.

    Under fail-fast a failure does not return: the accumulator aborts.
    """
    held = condition() if callable(condition) else bool(condition)
    if held:
        emit(
            v.config.logger,
            lambda: Satisfied(constraint_id=constraint_id, root=v.root, path=v.path.full_name, input=input),
        )
        return True
    _record(v, message, constraint_id, input)
    return False


def reject(v: Validation, message: MessageLike, *, constraint_id: str, input: Any = None) -> NoReturn:
    """Record a failure and abort the innermost scope.

    For transforms that cannot produce a value, e.g. parsing:

        try:
            return int(raw)
        except ValueError:
            reject(v, "must be a valid integer", constraint_id="string.int", input=raw)
    """
    _record(v, message, constraint_id, input).abort()


@dataclass(frozen=True)
class Constraint(Generic[T]):
    """Evaluator bound to one `constrain` block and its input."""

    validation: Validation
    constraint_id: str
    input: T

    def _id(self, suffix: str | None) -> str:
        return f"{self.constraint_id}.{suffix}" if suffix else self.constraint_id

    def satisfies(self, condition: Condition, message: MessageLike, *, id: str | None = None) -> bool:
        """Record a failure if `condition` does not hold and carry on."""
        return evaluate(
            self.validation,
            condition,
            message,
            constraint_id=self._id(id),
            input=self.input,
        )

    def require(self, condition: Condition, message: MessageLike, *, id: str | None = None) -> None:
        """Like `satisfies`, but a failure ends the enclosing `constrain` block."""
        v = self.validation
        held = condition() if callable(condition) else bool(condition)
        if held:
            emit(
                v.config.logger,
                lambda: Satisfied(constraint_id=self._id(id), root=v.root, path=v.path.full_name, input=self.input),
            )
            return
        _record(v, message, self._id(id), self.input).abort()

    def fail(self, message: MessageLike, *, id: str | None = None) -> None:
        self.require(False, message, id=id)


def constrain(v: Validation, input: T, constraint_id: str, check: Callable[[Constraint[T]], Any]) -> T:
    """Run `check` over `input` in its own scope and return `input`."""
    accumulating(v, lambda cv: check(Constraint(cv, constraint_id, input)))
    return input


def with_message(
    v: Validation,
    block: Callable[[Validation], R],
    build: Callable[[list[Message]], MessageLike],
    *,
    constraint_id: str,
    input: Any = None,
) -> R:
    """Run `block`; if anything failed, report one composite message instead.

    `build` receives the inner messages and should pass them to `text` as
    arguments so they become the composite's descendants.
    """
    outcome = ior(v, block)
    if isinstance(outcome, Success):
        return outcome.value
    inner = list(outcome.messages)
    composite = resolve(build(inner) if inner else "").with_details(input, constraint_id).located(v.root, v.path)
    emit(
        v.config.logger,
        lambda: Violated(
            constraint_id=constraint_id,
            root=v.root,
            path=v.path.full_name,
            input=input,
            args=composite.args,
            message=composite,
        ),
    )
    return bind(v, outcome.with_message(composite))
