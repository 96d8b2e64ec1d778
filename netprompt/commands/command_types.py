#!/usr/bin/env python3
# netprompt/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- Handler / Completer / Filter: the callable protocols supplied by the
  embedding application.
- MatchTier / CompletionTier: ordered strength of a match or completion.
- CommandDescriptor: a parsed command description bound to its handler.
- CommandSet: a named, ordered group of descriptors (one menu).
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Protocol, Sequence, TextIO

from netprompt.errors import GrammarError, RegistrationError
from netprompt.grammar import Statement, parse_description

logger = logging.getLogger(__name__)


class Handler(Protocol):
    """Protocol for a command implementation: write all output to `out`."""

    def __call__(self, out: TextIO, args: list[str]) -> Any:  # pragma: no cover - signature only
        ...


class Completer(Protocol):
    """Protocol for a placeholder completer: partial text -> candidates."""

    def __call__(self, partial: str) -> Sequence[str]:  # pragma: no cover - signature only
        ...


class Filter(Protocol):
    """Protocol for an output filter: read `source`, write `sink`."""

    def __call__(self, source: TextIO, sink: TextIO, args: list[str]) -> Any:  # pragma: no cover - signature only
        ...


class MatchTier(IntEnum):
    NONE = 0
    WILDCARD = 1
    SUBSTITUTION = 2
    EXACT = 3


class CompletionTier(IntEnum):
    NONE = 0
    PARTIAL = 1
    EXACT = 2


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """
    A registered command.

    Attributes:
        description: The statement parsed from the description string.
        handler: Callback invoked with (out, args) when the command wins a match.
        source: The description string as registered (used in help/debug output).
    """

    description: Statement
    handler: Handler
    source: str = ""

    @property
    def segments(self):
        return self.description.segments

    @property
    def is_wildcard(self) -> bool:
        return self.description.has_wildcard

    @property
    def has_substitution(self) -> bool:
        return any(s.is_placeholder and not s.is_wildcard for s in self.description.segments)

    def invoke(self, out: TextIO, args: list[str]) -> Any:
        """Execute the underlying handler with provided output sink and arguments."""
        return self.handler(out, args)


def parse_command(description: str, handler: Handler) -> CommandDescriptor:
    """Parse a description string into a descriptor, or raise RegistrationError."""
    try:
        statements = parse_description(description)
    except GrammarError as exc:
        raise RegistrationError(str(exc)) from exc

    if len(statements) != 1:
        raise RegistrationError("expected a single command")
    statement = statements[0]
    if statement.filters or statement.output_target is not None:
        raise RegistrationError("command descriptions cannot contain filters or output redirection")
    return CommandDescriptor(description=statement, handler=handler, source=description)


@dataclass(slots=True)
class CommandSet:
    """
    A named, ordered set of commands.

    Registration order matters: among descriptors with the same match tier the
    earliest registered one wins.
    """

    name: str
    descriptors: list[CommandDescriptor] = field(default_factory=list)

    def register(self, description: str, handler: Handler) -> CommandDescriptor:
        """
        Register a command. The description syntax is:

            cmd [word ...] [$n[:completionType] ...] [$*[:completionType]]

        $n matches a single argument and can reorder arguments ("foo $2 $1"
        called as "foo a b" receives ["b", "a"]); $* matches all remaining
        arguments.
        """
        descriptor = parse_command(description, handler)
        self.descriptors.append(descriptor)
        logger.debug("registered %r in command set %r", description, self.name)
        return descriptor

    def command(self, description: str) -> Callable[[Handler], Handler]:
        """Decorator form of `register`."""

        def wrapper(func: Handler) -> Handler:
            self.register(description, func)
            return func

        return wrapper

    def __len__(self) -> int:
        return len(self.descriptors)

    def __iter__(self):
        return iter(self.descriptors)
