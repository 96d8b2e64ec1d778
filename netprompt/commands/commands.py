#!/usr/bin/env python3
# netprompt/commands/commands.py
from __future__ import annotations

"""
Command-set registry and navigation stack.

This module provides:
- CommandRegistry: in-memory mapping of command-set names to CommandSets.
- CommandSetStack: the menu stack selecting the active command set.
"""

import logging
from typing import Dict, Optional

from netprompt.errors import CommandSetStackError, RegistrationError, UnknownCommandSetError

from .command_types import CommandSet

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Holds all command sets, in creation order."""

    def __init__(self) -> None:
        self._sets_by_name: Dict[str, CommandSet] = {}

    # ---------------- Registration ----------------

    def create(self, name: str) -> CommandSet:
        """Create and register a command set, ensuring no name collisions."""
        if name in self._sets_by_name:
            raise RegistrationError(f"command set {name} is already registered")
        command_set = CommandSet(name)
        self._sets_by_name[name] = command_set
        logger.debug("created command set %r", name)
        return command_set

    # ---------------- Lookup ----------------

    def get(self, name: str) -> Optional[CommandSet]:
        """Return the command set by name, or None if not found."""
        return self._sets_by_name.get(name)

    def __getitem__(self, name: str) -> CommandSet:
        command_set = self._sets_by_name.get(name)
        if command_set is None:
            raise UnknownCommandSetError(f"unknown command set: {name}")
        return command_set

    def __contains__(self, name: object) -> bool:
        return name in self._sets_by_name

    def __len__(self) -> int:
        return len(self._sets_by_name)

    def first(self) -> Optional[CommandSet]:
        """Return the first command set ever created."""
        return next(iter(self._sets_by_name.values()), None)

    def names(self) -> list[str]:
        return list(self._sets_by_name.keys())

    def all(self) -> list[CommandSet]:
        return list(self._sets_by_name.values())


class CommandSetStack:
    """
    Navigation stack over a registry.

    Before anything is pushed the bottom of the stack is the registry's first
    command set; the stack never drops below that element.
    """

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry
        self._pushed: list[CommandSet] = []

    def push(self, name: str) -> CommandSet:
        command_set = self._registry[name]
        self._pushed.append(command_set)
        logger.debug("entered command set %r (depth %d)", name, self.depth)
        return command_set

    def pop(self) -> CommandSet:
        if not self._pushed:
            raise CommandSetStackError("can't pop command set")
        command_set = self._pushed.pop()
        logger.debug("left command set %r (depth %d)", command_set.name, self.depth)
        return command_set

    def current(self) -> Optional[CommandSet]:
        if self._pushed:
            return self._pushed[-1]
        return self._registry.first()

    @property
    def depth(self) -> int:
        """Number of command sets on the stack, including the bottom one."""
        if self._registry.first() is None:
            return 0
        return len(self._pushed) + 1

    def names(self) -> list[str]:
        """Stack contents from bottom to top (e.g. for a 'default/names-set' prompt)."""
        current = [s.name for s in self._pushed]
        bottom = self._registry.first()
        return ([bottom.name] if bottom is not None else []) + current
