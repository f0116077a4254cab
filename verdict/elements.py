"""
Validation of every element of an iterable or every entry of a mapping.

All element failures are summarised under one composite message located at
the collection itself; the individual failures, with paths such as
``tags[2]<iterable element>`` or ``scores[alice]<map value>``, become its
descendants.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, TypeVar

from .constraint import with_message
from .message import text
from .path import element_segment, key_segment, value_segment
from .validation import Validation, accumulating, append_path

E = TypeVar("E")
K = TypeVar("K")
C = TypeVar("C")

EACH_ID = "verdict.iterable.each"
EACH_VALUE_ID = "verdict.map.eachValue"
EACH_KEY_ID = "verdict.map.eachKey"


def _visit(v: Validation, segment: str, subject: Any, block: Callable[[Validation, Any], Any]) -> None:
    if v.path.contains_subject(subject):
        return
    child = append_path(v, segment, subject)
    accumulating(child, block, subject)


def each(v: Validation, items: C, block: Callable[[Validation, E], Any]) -> C:
    """Validate each element of `items` with `block`."""

    def run(ev: Validation) -> None:
        for i, element in enumerate(items):
            _visit(ev, element_segment(i), element, block)

    with_message(
        v,
        run,
        lambda messages: text("some elements do not satisfy the constraint: {0}", messages),
        constraint_id=EACH_ID,
        input=items,
    )
    return items


def each_value(v: Validation, mapping: Mapping[K, E], block: Callable[[Validation, E], Any]) -> Mapping[K, E]:
    """Validate each value of `mapping` with `block`."""

    def run(ev: Validation) -> None:
        for key, value in mapping.items():
            _visit(ev, value_segment(key), value, block)

    with_message(
        v,
        run,
        lambda messages: text("some values do not satisfy the constraint: {0}", messages),
        constraint_id=EACH_VALUE_ID,
        input=mapping,
    )
    return mapping


def each_key(v: Validation, mapping: Mapping[K, Any], block: Callable[[Validation, K], Any]) -> Mapping[K, Any]:
    """Validate each key of `mapping` with `block`."""

    def run(ev: Validation) -> None:
        for key in mapping:
            _visit(ev, key_segment(), key, block)

    with_message(
        v,
        run,
        lambda messages: text("some keys do not satisfy the constraint: {0}", messages),
        constraint_id=EACH_KEY_ID,
        input=mapping,
    )
    return mapping

