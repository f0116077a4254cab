"""Error descriptors produced when a constraint fails."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, Union

from .path import Path


@dataclass(frozen=True)
class Message:
    """A single constraint failure.

    `root`, `path`, `input` and `constraint_id` are filled in by the evaluator
    when the message is recorded; message builders only supply `text` and
    `args`. `descendants` holds the inner failures a composite message
    summarises (alternation, each-element, each-entry).
    """

    constraint_id: str = ""
    text: str = ""
    root: str = ""
    path: Path = field(default_factory=Path.root)
    input: Any = None
    args: tuple[Any, ...] = ()
    descendants: tuple[Message, ...] = ()

    def with_details(self, input: Any, constraint_id: str) -> Message:
        return replace(self, input=input, constraint_id=constraint_id)

    def located(self, root: str, path: Path) -> Message:
        return replace(self, root=root, path=path)

    def walk(self) -> Iterable[Message]:
        """This message followed by all of its descendants, depth first."""
        yield self
        for child in self.descendants:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        d: dict[str, Any] = {
            "constraint_id": self.constraint_id,
            "text": self.text,
            "root": self.root,
            "path": self.path.full_name,
            "input": _plain(self.input),
        }
        if self.args:
            d["args"] = [_plain(a) for a in self.args]
        if self.descendants:
            d["descendants"] = [m.to_dict() for m in self.descendants]
        return d

    def __str__(self) -> str:
        loc = self.root
        if self.path.full_name:
            loc = f"{loc}.{self.path.full_name}" if loc else self.path.full_name
        return f"[{self.constraint_id}] {loc} - {self.text}"


# Builds a message lazily; only called when a constraint fails.
MessageProvider = Callable[[], Union[Message, str]]

MessageLike = Union[Message, str, MessageProvider]


def text(template: str, *args: Any) -> Message:
    """Build a message from a ``str.format`` template.

    Message arguments are rendered as their text and collected as descendants,
    including messages nested inside lists or tuples.
    """
    rendered = [_render(a) for a in args]
    descendants: list[Message] = []
    for a in args:
        _collect(a, descendants)
    content = template.format(*rendered) if args else template
    return Message(text=content, args=tuple(args), descendants=tuple(descendants))


def resolve(message: MessageLike) -> Message:
    """Turn whatever a constraint supplied into a Message."""
    if callable(message) and not isinstance(message, Message):
        message = message()
    if isinstance(message, str):
        return Message(text=message)
    return message


def _render(arg: Any) -> Any:
    if isinstance(arg, Message):
        return arg.text
    if isinstance(arg, (list, tuple)):
        return "[" + ", ".join(str(_render(a)) for a in arg) + "]"
    return arg


def _collect(arg: Any, out: list[Message]) -> None:
    if isinstance(arg, Message):
        out.append(arg)
    elif isinstance(arg, (list, tuple)):
        for a in arg:
            _collect(a, out)


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Message):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    return repr(value)


def leaf_count(messages: Iterable[Message]) -> int:
    """Number of leaf failures, looking through composite messages."""
    total = 0
    for m in messages:
        total += leaf_count(m.descendants) if m.descendants else 1
    return total
