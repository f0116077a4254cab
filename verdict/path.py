"""
Validation paths and cycle detection.

A Path is an immutable, singly linked chain of segments from the root of the
validated object graph down to the value currently being checked. Each node
may carry the subject it was created for; the identities of all subjects on
the chain are kept in an ancestry set so that a back-reference can be
recognised in constant time and its subtree skipped.
"""

from __future__ import annotations

import datetime
import decimal
import enum
import fractions
import numbers
from dataclasses import dataclass, field
from typing import Any

# Values that compare by value rather than identity. The interpreter caches
# and interns many of them, so identity hits on these would be spurious.
_VALUE_TYPES: tuple[type, ...] = (
    type(None),
    str,
    bytes,
    bytearray,
    numbers.Number,
    decimal.Decimal,
    fractions.Fraction,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    enum.Enum,
    range,
    tuple,
    frozenset,
)


def is_reference(subject: Any) -> bool:
    """Whether `subject` takes part in identity-based cycle detection."""
    return not isinstance(subject, _VALUE_TYPES)


@dataclass(frozen=True, eq=False)
class Path:
    """One segment of a validation path.

    `attached` segments render directly after their parent (``items[0]<iterable
    element>``) instead of being joined with a dot.
    """

    name: str = ""
    subject: Any = None
    parent: Path | None = None
    attached: bool = False
    _ancestry: frozenset[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ancestry = self.parent._ancestry if self.parent is not None else frozenset()
        if is_reference(self.subject):
            ancestry = ancestry | {id(self.subject)}
        object.__setattr__(self, "_ancestry", ancestry)

    @classmethod
    def root(cls, subject: Any = None) -> Path:
        return cls(name="", subject=subject, parent=None)

    def child(self, name: str, subject: Any = None, *, attached: bool = False) -> Path:
        """Return a new node extending this one."""
        return Path(name=name, subject=subject, parent=self, attached=attached)

    def contains_subject(self, target: Any) -> bool:
        """Whether `target` (by identity) already appears on this chain."""
        if not is_reference(target):
            return False
        return id(target) in self._ancestry

    def segments(self) -> tuple[tuple[str, bool], ...]:
        """Non-empty (name, attached) segments from root to this node."""
        collected: list[tuple[str, bool]] = []
        node: Path | None = self
        while node is not None:
            if node.name:
                collected.append((node.name, node.attached))
            node = node.parent
        collected.reverse()
        return tuple(collected)

    @property
    def full_name(self) -> str:
        """Dotted path from the root, e.g. ``address.city`` or ``tags[1]<iterable element>``."""
        out = ""
        for name, attached in self.segments():
            if attached or not out:
                out += name
            else:
                out += "." + name
        return out

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.segments() == other.segments()

    def __hash__(self) -> int:
        return hash(self.segments())

    def __str__(self) -> str:
        return self.full_name


class _Skip:
    """Marker returned by `extend_checked` when the subject closes a cycle."""

    _instance: _Skip | None = None

    def __new__(cls) -> _Skip:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SKIP"

    def __bool__(self) -> bool:
        return False


SKIP = _Skip()


def extend_checked(path: Path, name: str, subject: Any) -> Path | _Skip:
    """Extend `path`, or return `SKIP` if `subject` is already an ancestor."""
    if subject is not None and path.contains_subject(subject):
        return SKIP
    return path.child(name, subject)


def element_segment(index: int) -> str:
    return f"[{index}]<iterable element>"


def value_segment(key: Any) -> str:
    return f"[{key}]<map value>"


def key_segment() -> str:
    return "<map key>"
