#!/usr/bin/env python3
# netprompt/interface/__init__.py
from __future__ import annotations

"""
Package for line evaluation and the interactive console.

Provides:
- Completion (per-descriptor and prompt-level aggregation).
- Filter pipeline execution over one-slot relays.
- Line handler producing per-statement outcomes.
- Dynamic plugin loader.
- CLI frontends with history and completion (prompt_toolkit / readline / plain).
"""


# Completion and pipeline FIRST (handler depends on them)
from .completion import aggregate, complete, completion_match_segment, suggest
from .pipeline import Relay, RelayReader, RelayWriter, execute, resolve_filters

# Line handler
from .handler import Outcome, OutcomeKind, handle_line, run_statement

# Loader
from .loader import load_plugins

# CLI frontends
from .cli import BaseCLI, PromptToolkitCLI, ReadlineCLI, make_cli

__all__ = [
    # completion
    "aggregate",
    "complete",
    "completion_match_segment",
    "suggest",
    # pipeline
    "Relay",
    "RelayReader",
    "RelayWriter",
    "execute",
    "resolve_filters",
    # handler
    "Outcome",
    "OutcomeKind",
    "handle_line",
    "run_statement",
    # loader
    "load_plugins",
    # cli
    "BaseCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "make_cli",
]
