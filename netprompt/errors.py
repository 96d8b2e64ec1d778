#!/usr/bin/env python3
# netprompt/errors.py
from __future__ import annotations

"""Exception types raised by the engine."""


class NetPromptError(Exception):
    """Base exception for netprompt."""


class GrammarError(NetPromptError):
    """Base exception for a line or description that cannot be parsed."""


class LexError(GrammarError):
    """Raised when tokenization stops on an error token."""


class ParseError(GrammarError):
    """Raised when the token stream does not form valid statements."""


class RegistrationError(NetPromptError):
    """Raised when a command, completer, filter or command set cannot be registered."""


class CommandSetError(NetPromptError):
    """Base exception for command-set navigation failures."""


class UnknownCommandSetError(CommandSetError, KeyError):
    """Raised when a command set name is not registered."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class CommandSetStackError(CommandSetError):
    """Raised when popping the last command set off the stack."""


class PipelineError(NetPromptError):
    """Raised when a filter chain cannot be wired."""
