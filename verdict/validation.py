"""
Session context and run entry points.

A `Validation` is threaded through every validation function as its first
argument. It is immutable: operators derive child contexts with a new path
or a new accumulator and never touch the one they received.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, NoReturn, TypeVar

from .accumulate import (
    AbortSignal,
    Accumulated,
    Accumulator,
    Err,
    Forwarding,
    Ok,
    ScopeToken,
    Uninitialized,
    buffer_for,
)
from .config import ValidationConfig
from .errors import ScopeError, ValidationError
from .message import Message
from .path import SKIP, Path, extend_checked
from .result import Both, Failure, Ior, Success, ValidationResult, to_result

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Validation:
    """Everything a validation function needs to know about where it runs.

    root: name of the top-level type being validated, set once per run.
    path: location of the current value in the object graph.
    config: run configuration.
    acc: accumulator receiving failures of the innermost scope.
    """

    root: str = ""
    path: Path = field(default_factory=Path.root)
    config: ValidationConfig = field(default_factory=ValidationConfig)
    acc: Accumulator = field(default_factory=Uninitialized, repr=False)

    @property
    def fail_fast(self) -> bool:
        return self.config.fail_fast

    def now(self) -> datetime:
        return self.config.clock()

    def accumulate(self, messages: list[Message]) -> ScopeToken:
        return self.acc.accumulate(messages)


def add_root(v: Validation, name: str, subject: Any = None) -> Validation:
    """Set the run's root name unless an enclosing scope already did."""
    if v.root:
        return v
    return replace(v, root=name, path=v.path.child("", subject))


def add_path(v: Validation, name: str, subject: Any = None) -> Validation:
    return replace(v, path=v.path.child(name, subject))


def add_path_checked(v: Validation, name: str, subject: Any) -> Validation | None:
    """Like `add_path`, but None when `subject` already appears on the path."""
    path = extend_checked(v.path, name, subject)
    if path is SKIP:
        return None
    return replace(v, path=path)


def append_path(v: Validation, text: str, subject: Any = None) -> Validation:
    """Add a segment rendered directly after the current one (no dot)."""
    return replace(v, path=v.path.child(text, subject, attached=True))


def raise_messages(v: Validation, messages: list[Message]) -> NoReturn:
    """Record `messages` and abort the innermost scope."""
    token = v.accumulate(list(messages))
    token.abort()


def ior(v: Validation, block: Callable[..., R], *args: Any) -> Ior[R]:
    """Run ``block(v, *args)`` in a buffering scope and report what it produced.

    Success when nothing failed, Both when the block finished but recorded
    failures, Failure when the block was aborted.
    """
    token = ScopeToken.mint()
    buffer = buffer_for(token, v.fail_fast)
    try:
        result = block(replace(v, acc=buffer), *args)
    except AbortSignal as signal:
        if signal.token != token:
            raise
        return Failure(tuple(buffer.messages))
    if buffer.messages:
        return Both(result, tuple(buffer.messages))
    return Success(result)


def accumulating(v: Validation, block: Callable[..., R], *args: Any) -> Accumulated[R]:
    """Run ``block(v, *args)`` in a forwarding scope.

    Failures go straight to the enclosing accumulator. A block that finishes
    yields Ok even if it recorded failures; one that was aborted yields Err.
    """
    token = ScopeToken.mint()
    forwarding = Forwarding(token, v.acc)
    try:
        return Ok(block(replace(v, acc=forwarding), *args))
    except AbortSignal as signal:
        if signal.token != token:
            raise
        if forwarding.outer_token is None:
            forwarding.outer_token = v.accumulate([])
        return Err(forwarding.outer_token)


def bind(v: Validation, outcome: Ior[T]) -> T:
    """Extract the value of an outcome, passing its failures to `v`."""
    if isinstance(outcome, Success):
        return outcome.value
    if isinstance(outcome, Failure):
        raise_messages(v, list(outcome.messages))
    v.accumulate(list(outcome.messages))
    return outcome.value


def try_validate(
    block: Callable[[Validation], R],
    config: ValidationConfig | None = None,
) -> ValidationResult[R]:
    """Run `block` as a top-level validation and return Success or Failure."""
    v = Validation(config=config or ValidationConfig())
    try:
        outcome = ior(v, block)
    except AbortSignal as signal:
        raise ScopeError(f"abort signal for scope {signal.token.id} escaped the run") from None
    result = to_result(outcome)
    if result.is_failure():
        logger.debug("validation failed with %d message(s)", len(result.messages))
    return result


def validate(block: Callable[[Validation], R], config: ValidationConfig | None = None) -> R:
    """Run `block` and return its value, or raise ValidationError."""
    result = try_validate(block, config)
    if isinstance(result, Failure):
        raise ValidationError(list(result.messages))
    return result.value
