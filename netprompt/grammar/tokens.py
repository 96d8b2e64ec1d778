#!/usr/bin/env python3
# netprompt/grammar/tokens.py
from __future__ import annotations

"""
Token model shared by the lexer and the statement parser.

Provides:
- TokenKind: closed set of token kinds emitted by the lexer.
- Token: a (kind, text) pair with its offset in the scanned text.
- LexMode: description mode (placeholders recognized) or user input mode.
"""

from dataclasses import dataclass, field
from enum import Enum


class TokenKind(Enum):
    WORD = "Word"
    QUOTED_STRING = "QuotedString"
    STATEMENT_SEPARATOR = "StatementSeparator"
    LINE_CONTINUATION = "LineContinuation"
    PLACEHOLDER = "Placeholder"
    PLACEHOLDER_COMPLETION_TYPE = "PlaceholderCompletionType"
    PIPE = "Pipe"
    OUTPUT_REDIRECT = "OutputRedirect"
    OUTPUT_FILENAME = "OutputFilename"
    ERROR = "Error"
    END_OF_INPUT = "EndOfInput"

    def __str__(self) -> str:
        return self.value


class LexMode(Enum):
    DESCRIPTION = "description"
    INPUT = "input"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    # offset of the token in the scanned text
    pos: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f'<{self.kind} "{self.text}">'
