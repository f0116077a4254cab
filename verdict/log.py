"""
Structured log entries for constraint evaluation.

The engine never writes log records on its own behalf for every constraint;
it hands `Satisfied` / `Violated` entries to the sink configured in
`ValidationConfig.logger`. `logging_sink` bridges that sink to the standard
`logging` module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Union

if TYPE_CHECKING:
    from .message import Message


@dataclass(frozen=True)
class Satisfied:
    """A constraint held."""

    constraint_id: str
    root: str
    path: str
    input: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": "satisfied",
            "constraint_id": self.constraint_id,
            "root": self.root,
            "path": self.path,
            "input": repr(self.input),
        }


@dataclass(frozen=True)
class Violated:
    """A constraint failed and `message` was recorded."""

    constraint_id: str
    root: str
    path: str
    input: Any = None
    args: tuple[Any, ...] = ()
    message: Message | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": "violated",
            "constraint_id": self.constraint_id,
            "root": self.root,
            "path": self.path,
            "input": repr(self.input),
            "args": [repr(a) for a in self.args],
            "text": self.message.text if self.message is not None else None,
        }


LogEntry = Union[Satisfied, Violated]
LogSink = Callable[[LogEntry], None]


def emit(sink: LogSink | None, build: Callable[[], LogEntry]) -> None:
    """Send an entry to `sink`; `build` is only called when a sink is installed."""
    if sink is not None:
        sink(build())


def logging_sink(logger: logging.Logger | None = None, level: int = logging.DEBUG) -> LogSink:
    """Adapt log entries to a standard library logger."""
    target = logger or logging.getLogger("verdict")

    def sink(entry: LogEntry) -> None:
        if not target.isEnabledFor(level):
            return
        if isinstance(entry, Satisfied):
            target.log(level, "satisfied %s at %s:%s", entry.constraint_id, entry.root, entry.path)
        else:
            text = entry.message.text if entry.message is not None else ""
            target.log(
                level,
                "violated %s at %s:%s input=%r: %s",
                entry.constraint_id,
                entry.root,
                entry.path,
                entry.input,
                text,
            )

    return sink


@dataclass
class BufferedSink:
    """Holds entries back until the caller decides whether to keep them."""

    entries: list[LogEntry] = field(default_factory=list)

    def __call__(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def flush(self, target: LogSink | None) -> None:
        if target is not None:
            for entry in self.entries:
                target(entry)
        self.entries.clear()
