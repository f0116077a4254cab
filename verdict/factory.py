"""
Deferred construction.

A factory body registers named binders and returns the constructor. Binders
are not run when they are registered; once the body has returned, every
binder runs in registration order, each under its own path segment. The
constructor is only called when all of them succeeded, and receives their
values positionally:

    def build_name(v: Validation, raw: str) -> Name:
        def body(f: FactoryScope) -> Callable[..., Name]:
            f.bind("value", not_blank, raw)
            return Name
        return factory(v, body)

    def build_user(v: Validation, raw_id: str, first: str, last: str) -> User:
        def body(f: FactoryScope) -> Callable[..., User]:
            f.bind("id", parse_int, raw_id)
            f.bind("full_name", build_full_name, first, last)
            return User
        return factory(v, body)

A binder whose block is itself a factory reports its failures below its own
segment, e.g. ``full_name.first.value``.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from .config import ValidationConfig
from .errors import DeferredValueError
from .message import Message
from .result import Success, ValidationResult
from .validation import Validation, add_path, add_root, ior, raise_messages, try_validate, validate

logger = logging.getLogger(__name__)

S = TypeVar("S")
R = TypeVar("R")

DEFAULT_ROOT = "factory"


class BindState(str, enum.Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


class Bound(Generic[S]):
    """Handle on a binder's value.

    Readable only once the whole factory resolved, i.e. every binder
    succeeded and the constructor is about to run.
    """

    def __init__(self, name: str, scope: FactoryScope):
        self.name = name
        self.state = BindState.PENDING
        self._scope = scope
        self._value: Any = None

    @property
    def value(self) -> S:
        if self.state is BindState.FAILED:
            raise DeferredValueError(f"binder '{self.name}' failed validation")
        if self._scope.state is BindState.FAILED:
            raise DeferredValueError(f"binder '{self.name}' belongs to a factory that failed validation")
        if self._scope.state is BindState.PENDING:
            raise DeferredValueError(f"binder '{self.name}' is read before all binders were resolved")
        return self._value

    def __call__(self) -> S:
        return self.value

    def _resolve(self, value: S) -> None:
        self._value = value
        self.state = BindState.RESOLVED

    def _fail(self) -> None:
        self.state = BindState.FAILED

    def __repr__(self) -> str:
        return f"Bound({self.name!r}, {self.state.value})"


@dataclass
class _Binder:
    name: str
    block: Callable[..., Any]
    args: tuple[Any, ...]
    bound: Bound[Any]


class FactoryScope:
    """Collects the binders of one factory body."""

    def __init__(self, validation: Validation):
        self.validation = validation
        self.state = BindState.PENDING
        self._binders: list[_Binder] = []

    def bind(self, name: str, block: Callable[..., S], *args: Any) -> Bound[S]:
        """Queue ``block(v, *args)`` to run under the path segment `name`."""
        if any(b.name == name for b in self._binders):
            raise ValueError(f"binder '{name}' is already registered")
        bound: Bound[S] = Bound(name, self)
        self._binders.append(_Binder(name, block, args, bound))
        return bound

    def _run(self) -> list[Message]:
        """Run all binders; return the failures in registration order."""
        v = self.validation
        failures: list[Message] = []
        for binder in self._binders:
            outcome = ior(add_path(v, binder.name), binder.block, *binder.args)
            if isinstance(outcome, Success):
                binder.bound._resolve(outcome.value)
                continue
            binder.bound._fail()
            failures.extend(outcome.messages)
            logger.debug("binder %s failed with %d message(s)", binder.name, len(outcome.messages))
            if v.fail_fast:
                break
        self.state = BindState.FAILED if failures else BindState.RESOLVED
        return failures

    def _values(self) -> list[Any]:
        return [b.bound.value for b in self._binders]


def factory(
    v: Validation,
    body: Callable[[FactoryScope], Callable[..., R]],
    *,
    root: str = DEFAULT_ROOT,
    check: Callable[[Validation, R], Any] | None = None,
) -> R:
    """Build an object from validated parts.

    `check`, if given, validates the constructed object in the factory's own
    scope; its failures are recorded against the run.
    """
    fv = add_root(v, root)
    scope = FactoryScope(fv)
    construct = body(scope)
    if not callable(construct):
        raise TypeError("factory body must return the constructor to call")

    failures = scope._run()
    if failures:
        raise_messages(fv, failures)

    obj = construct(*scope._values())
    if check is not None:
        check(fv, obj)
    return obj


def try_create(
    body: Callable[[FactoryScope], Callable[..., R]],
    config: ValidationConfig | None = None,
    *,
    root: str = DEFAULT_ROOT,
    check: Callable[[Validation, R], Any] | None = None,
) -> ValidationResult[R]:
    """Run a factory body as a top-level validation."""
    return try_validate(lambda v: factory(v, body, root=root, check=check), config)


def create(
    body: Callable[[FactoryScope], Callable[..., R]],
    config: ValidationConfig | None = None,
    *,
    root: str = DEFAULT_ROOT,
    check: Callable[[Validation, R], Any] | None = None,
) -> R:
    """Like `try_create`, but returns the object or raises ValidationError."""
    return validate(lambda v: factory(v, body, root=root, check=check), config)
