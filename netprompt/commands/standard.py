#!/usr/bin/env python3
# netprompt/commands/standard.py
from __future__ import annotations

"""
Ready-made handlers for menu navigation.

Register them like any other command:

    root.register("names", push_command_set(engine, "names-set"))
    names.register("exit", pop_command_set(engine))
    root.register("enter $1", push_command_set_arg(engine))
"""

from typing import TYPE_CHECKING, TextIO

from netprompt.errors import CommandSetError

from .command_types import Handler

if TYPE_CHECKING:
    from netprompt.engine import Engine


def push_command_set(engine: "Engine", name: str) -> Handler:
    """Return a handler that enters the named command set."""

    def handler(out: TextIO, args: list[str]) -> None:
        try:
            engine.push_command_set(name)
        except CommandSetError as exc:
            out.write(f"{exc}\n")

    return handler


def push_command_set_arg(engine: "Engine") -> Handler:
    """Return a handler that enters the command set named by its single argument."""

    def handler(out: TextIO, args: list[str]) -> None:
        if len(args) != 1:
            out.write("expected a single argument\n")
            return
        try:
            engine.push_command_set(args[0])
        except CommandSetError as exc:
            out.write(f"{exc}\n")

    return handler


def pop_command_set(engine: "Engine") -> Handler:
    """Return a handler that leaves the current command set."""

    def handler(out: TextIO, args: list[str]) -> None:
        try:
            engine.pop_command_set()
        except CommandSetError as exc:
            out.write(f"{exc}\n")

    return handler
