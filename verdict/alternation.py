"""
Alternation: accept a value if any one of several validations succeeds.

    value = or_(v, lambda v: at_least(v, n, 10)).or_else(lambda v: at_most(v, n, 5))

Each alternative runs in its own buffering scope, so an abort raised inside
one alternative (including under fail-fast) never leaves it. When every
alternative fails, their messages are folded into a single `verdict.or`
message whose descendants are the alternatives' messages in order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Generic, TypeVar

from .log import BufferedSink, Violated, emit
from .message import text
from .result import Both, Ior, Success
from .validation import Validation, bind, ior

logger = logging.getLogger(__name__)

R = TypeVar("R")

OR_CONSTRAINT_ID = "verdict.or"


@dataclass
class _Attempt(Generic[R]):
    outcome: Ior[R]
    logs: BufferedSink | None = None


def _attempt(v: Validation, block: Callable[[Validation], R]) -> _Attempt[R]:
    if v.config.log_discarded_branches or v.config.logger is None:
        return _Attempt(ior(v, block))
    sink = BufferedSink()
    buffered = replace(v, config=replace(v.config, logger=sink))
    return _Attempt(ior(buffered, block), sink)


@dataclass
class Alternation(Generic[R]):
    """Outcome of the alternatives tried so far."""

    validation: Validation
    outcome: Ior[R]
    pending: list[BufferedSink] = field(default_factory=list)

    def _flush(self, sinks: list[BufferedSink]) -> None:
        for sink in sinks:
            sink.flush(self.validation.config.logger)

    def or_(self, block: Callable[[Validation], R]) -> Alternation[R]:
        """Try `block` if nothing so far has succeeded."""
        if isinstance(self.outcome, Success):
            return self
        v = self.validation
        other = _attempt(v, block)
        if isinstance(other.outcome, Success):
            # earlier alternatives are discarded together with their log entries
            self._flush([other.logs] if other.logs else [])
            return Alternation(v, other.outcome)

        self._flush(self.pending + ([other.logs] if other.logs else []))
        composite = (
            text(
                "at least one constraint must be satisfied: [{0}, {1}]",
                list(self.outcome.messages),
                list(other.outcome.messages),
            )
            .with_details(None, OR_CONSTRAINT_ID)
            .located(v.root, v.path)
        )
        emit(
            v.config.logger,
            lambda: Violated(
                constraint_id=OR_CONSTRAINT_ID,
                root=v.root,
                path=v.path.full_name,
                args=composite.args,
                message=composite,
            ),
        )
        logger.debug("all alternatives failed at %s", v.path.full_name or "<root>")
        base = self.outcome if isinstance(self.outcome, Both) else other.outcome
        return Alternation(v, base.with_message(composite))

    def or_else(self, block: Callable[[Validation], R]) -> R:
        """Try `block` as the last alternative and return the accepted value."""
        return self.or_(block).bind()

    def bind(self) -> R:
        """Return the accepted value, passing any failure to the enclosing scope."""
        self._flush(self.pending)
        self.pending = []
        return bind(self.validation, self.outcome)


def or_(v: Validation, block: Callable[[Validation], R]) -> Alternation[R]:
    """Start an alternation with `block` as the first alternative."""
    first = _attempt(v, block)
    if first.logs is None:
        return Alternation(v, first.outcome)
    if isinstance(first.outcome, Success):
        first.logs.flush(v.config.logger)
        return Alternation(v, first.outcome)
    return Alternation(v, first.outcome, [first.logs])
