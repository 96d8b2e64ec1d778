#!/usr/bin/env python3
# netprompt/interface/handler.py
from __future__ import annotations

"""
Line evaluation.

One submitted line may hold several statements separated by ';' or newlines.
They are matched and executed strictly left to right, each one (filter chain
included) finishing before the next starts. Processing stops at the first
statement that matches no command.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from netprompt.commands import CommandDescriptor, extract_args
from netprompt.errors import GrammarError, PipelineError
from netprompt.grammar import Statement, parse
from netprompt.ui import print_line

from .pipeline import execute

if TYPE_CHECKING:
    from netprompt.engine import Engine

logger = logging.getLogger(__name__)


class OutcomeKind(Enum):
    NOOP = "noop"
    EXECUTED = "executed"
    PARSE_ERROR = "parse-error"
    NOT_FOUND = "command-not-found"


@dataclass(frozen=True, slots=True)
class Outcome:
    """
    Result of one statement (or of the whole line for NOOP / PARSE_ERROR).

    Attributes:
        kind: What happened.
        text: Canonical command text for EXECUTED and NOT_FOUND, the error
            message for PARSE_ERROR, empty for NOOP.
        error: Runtime error reported while executing, if any.
    """

    kind: OutcomeKind
    text: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind in (OutcomeKind.NOOP, OutcomeKind.EXECUTED) and self.error is None


def run_statement(engine: "Engine", statement: Statement, descriptor: CommandDescriptor) -> Optional[str]:
    """Execute a matched statement; return a runtime error message or None."""
    args = extract_args(statement.segments, descriptor.segments)
    sink = engine.output
    try:
        execute(
            lambda out: descriptor.invoke(out, args),
            statement.filters,
            engine.filters,
            statement.output_target,
            sink,
        )
    except SystemExit:
        raise
    except PipelineError as exc:
        logger.warning("%s: %s", statement.as_user(), exc)
        print_line(str(exc), file=sink)
        return str(exc)
    except Exception as exc:
        logger.exception("command %r failed", descriptor.source)
        message = f"[error] {type(exc).__name__}: {exc}"
        print_line(message, file=sink)
        return message
    return None


def handle_line(engine: "Engine", input_line: str) -> list[Outcome]:
    """
    Parse and execute a (possibly multi-statement) input line.

    Returns one Outcome per processed statement.
    """
    if not input_line.strip():
        return [Outcome(OutcomeKind.NOOP)]

    try:
        statements = parse(input_line)
    except GrammarError as exc:
        print_line(f"parse error: {exc}", file=engine.output)
        return [Outcome(OutcomeKind.PARSE_ERROR, str(exc))]

    if not statements:
        return [Outcome(OutcomeKind.NOOP)]

    outcomes: list[Outcome] = []
    for statement in statements:
        text = statement.as_user()
        descriptor = engine.match(statement)
        if descriptor is None:
            print_line(f"{text}: command not found", file=engine.output)
            outcomes.append(Outcome(OutcomeKind.NOT_FOUND, text))
            break
        error = run_statement(engine, statement, descriptor)
        outcomes.append(Outcome(OutcomeKind.EXECUTED, text, error))
    return outcomes
