#!/usr/bin/env python3
# netprompt/engine.py
from __future__ import annotations

"""
The engine: one object owning every table a prompt needs.

Provides:
- command-set registry and navigation stack
- completer and filter tables
- `evaluate` (run a submitted line) and `suggest` (tab completion)

Tables are expected to be filled during a single-threaded registration phase
and only read afterwards.
"""

import logging
import sys
from typing import Dict, Optional, TextIO

from netprompt.commands import (
    CommandDescriptor,
    CommandRegistry,
    CommandSet,
    CommandSetStack,
    Completer,
    Filter,
    select,
)
from netprompt.errors import RegistrationError
from netprompt.grammar import Statement
from netprompt.interface.completion import suggest as _suggest
from netprompt.interface.handler import Outcome, handle_line

logger = logging.getLogger(__name__)


class Engine:
    """Command line engine: registration, matching, completion and execution."""

    def __init__(self, output: Optional[TextIO] = None) -> None:
        self._output = output
        self.registry = CommandRegistry()
        self.stack = CommandSetStack(self.registry)
        self.completers: Dict[str, Completer] = {}
        self.filters: Dict[str, Filter] = {}

    @property
    def output(self) -> TextIO:
        """Default sink for command output and user-visible messages."""
        return self._output if self._output is not None else sys.stdout

    # ---------------- Registration ----------------

    def new_command_set(self, name: str) -> CommandSet:
        """Create a command set; the first one created is the bottom of the stack."""
        return self.registry.create(name)

    def command_set(self, name: str) -> CommandSet:
        return self.registry[name]

    def root_command_set(self) -> Optional[CommandSet]:
        """The bottom of the navigation stack (first set created)."""
        return self.registry.first()

    def register_completer(self, type_name: str, fn: Completer) -> None:
        """Register a completer for placeholders tagged ':<type_name>'."""
        if type_name in self.completers:
            raise RegistrationError(f"{type_name} is already registered")
        self.completers[type_name] = fn
        logger.debug("registered completer %r", type_name)

    def register_filter(self, name: str, fn: Filter) -> None:
        """
        Register an output filter. In

            cmd | foo arg1 arg2

        'foo' is the filter name and ["arg1", "arg2"] is passed to it.
        """
        if name in self.filters:
            raise RegistrationError(f"filter {name} is already registered")
        self.filters[name] = fn
        logger.debug("registered filter %r", name)

    # ---------------- Navigation ----------------

    def push_command_set(self, name: str) -> CommandSet:
        return self.stack.push(name)

    def pop_command_set(self) -> CommandSet:
        return self.stack.pop()

    def current_command_set(self) -> Optional[CommandSet]:
        return self.stack.current()

    # ---------------- Per-line API ----------------

    def match(self, statement: Statement) -> Optional[CommandDescriptor]:
        command_set = self.current_command_set()
        if command_set is None:
            return None
        return select(statement, command_set)

    def completer(self, type_name: Optional[str]) -> Optional[Completer]:
        if type_name is None:
            return None
        return self.completers.get(type_name)

    def evaluate(self, line: str) -> list[Outcome]:
        """Run a submitted line; see `netprompt.interface.handler.handle_line`."""
        return handle_line(self, line)

    def suggest(self, partial_line: str) -> list[str]:
        """Return full replacement lines for a partially typed line."""
        return _suggest(partial_line, self.current_command_set(), self.completer)
