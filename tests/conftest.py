from __future__ import annotations

import io

import pytest

from netprompt.commands import CommandDescriptor, parse_command
from netprompt.engine import Engine
from netprompt.grammar import Statement, parse


def make_descriptor(description: str, handler=None) -> CommandDescriptor:
    return parse_command(description, handler or (lambda out, args: None))


def make_statement(line: str) -> Statement:
    statements = parse(line)
    assert len(statements) == 1
    return statements[0]


class Recorder:
    """Handler that remembers every argument list it was called with."""

    def __init__(self, output: str = "") -> None:
        self.calls: list[list[str]] = []
        self.output = output

    def __call__(self, out, args: list[str]) -> None:
        self.calls.append(list(args))
        if self.output:
            out.write(self.output)


@pytest.fixture
def sink() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def engine(sink: io.StringIO) -> Engine:
    engine = Engine(output=sink)
    engine.new_command_set("default")
    return engine
