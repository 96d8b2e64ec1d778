#!/usr/bin/env python3
# netprompt/commands/__init__.py
from __future__ import annotations

"""
Package for command management and matching.

Provides:
- Data structures and protocols (`CommandDescriptor`, `CommandSet`, `Handler`,
  `Completer`, `Filter`, `MatchTier`, `CompletionTier`).
- Registry and menu stack (`CommandRegistry`, `CommandSetStack`).
- Matching (`score`, `select`) and argument extraction (`extract_args`).
- Navigation handlers (`push_command_set`, `push_command_set_arg`, `pop_command_set`).
"""

from .command_types import (
    CommandDescriptor,
    CommandSet,
    Completer,
    CompletionTier,
    Filter,
    Handler,
    MatchTier,
    parse_command,
)
from .commands import CommandRegistry, CommandSetStack
from .matcher import match_segment, score, select
from .arguments import extract_args
from .standard import pop_command_set, push_command_set, push_command_set_arg

__all__ = [
    "CommandDescriptor",
    "CommandSet",
    "Completer",
    "CompletionTier",
    "Filter",
    "Handler",
    "MatchTier",
    "parse_command",
    "CommandRegistry",
    "CommandSetStack",
    "match_segment",
    "score",
    "select",
    "extract_args",
    "pop_command_set",
    "push_command_set",
    "push_command_set_arg",
]
