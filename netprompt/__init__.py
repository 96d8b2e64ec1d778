#!/usr/bin/env python3
# netprompt/__init__.py
from __future__ import annotations
"""
netprompt: an interactive command line engine in the style of network
equipment consoles.

Commands are registered from textual descriptions such as
`show interface $1:iface` into named command sets; submitted lines are
parsed into statements, matched against the active set and executed with
their output optionally piped through filters or redirected to a file.

    engine = Engine()
    root = engine.new_command_set("default")

    @root.command("hello $*:name")
    def hello(out, names):
        out.write("Hello " + " and ".join(names) + "\\n")

    engine.evaluate("hello Todd Ellen | grep -i todd")
"""

from netprompt.engine import Engine
from netprompt.errors import (
    CommandSetError,
    CommandSetStackError,
    GrammarError,
    LexError,
    NetPromptError,
    ParseError,
    PipelineError,
    RegistrationError,
    UnknownCommandSetError,
)
from netprompt.interface.handler import Outcome, OutcomeKind

__version__ = "0.1.0"

__all__ = [
    "Engine",
    "Outcome",
    "OutcomeKind",
    "NetPromptError",
    "GrammarError",
    "LexError",
    "ParseError",
    "RegistrationError",
    "CommandSetError",
    "UnknownCommandSetError",
    "CommandSetStackError",
    "PipelineError",
    "__version__",
]
