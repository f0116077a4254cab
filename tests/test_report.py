"""Tests for failure rendering."""

from __future__ import annotations

import json

from rich.console import Console

from verdict import Schema, Validation, each, messages_to_json, print_failure, render_messages, schema, try_validate

from helpers import Person, at_least, not_blank


def failing_person(v: Validation) -> Person:
    person = Person("", 30)

    def rules(s: Schema[Person]) -> None:
        s.field("name", person.name, not_blank)
        s.field("age", [person.age, -1], lambda fv, ages: each(fv, ages, lambda ev, n: at_least(ev, n, 0)))

    return schema(v, person, rules)


def recording_console() -> Console:
    return Console(record=True, width=200, color_system=None)


def test_print_failure_lists_messages() -> None:
    console = recording_console()
    print_failure(try_validate(failing_person), console)
    output = console.export_text()

    assert "Person: 2 constraint violation(s)" in output
    assert "must not be blank" in output
    assert "age[1]<iterable element>" in output
    assert "verdict.iterable.each" in output


def test_print_failure_on_success() -> None:
    console = recording_console()
    print_failure(try_validate(lambda v: not_blank(v, "ok")), console)
    assert "valid" in console.export_text()


def test_render_messages_has_one_row_per_message() -> None:
    result = try_validate(failing_person)
    table = render_messages(result.messages, title="Person")
    # name, the each composite and its single descendant
    assert table.row_count == 3
    assert table.title == "Person"


def test_messages_to_json() -> None:
    result = try_validate(failing_person)
    data = json.loads(messages_to_json(result.messages))

    assert [d["path"] for d in data] == ["name", "age"]
    assert data[1]["descendants"][0]["path"] == "age[1]<iterable element>"
    assert data[1]["descendants"][0]["input"] == -1
