#!/usr/bin/env python3
# netprompt/grammar/__init__.py
from __future__ import annotations

"""
Package for the command grammar.

Provides:
- Token model and the streaming lexer (`lex`).
- Segment / Statement data structures.
- The statement parser (`parse`, `parse_description`).
"""

from .tokens import LexMode, Token, TokenKind
from .lexer import lex
from .statement import (
    WILDCARD_TEXT,
    FilterInvocation,
    Segment,
    SegmentKind,
    Statement,
    join_segments,
    quote_word,
)
from .parser import parse, parse_description, unquote

__all__ = [
    "LexMode",
    "Token",
    "TokenKind",
    "lex",
    "WILDCARD_TEXT",
    "FilterInvocation",
    "Segment",
    "SegmentKind",
    "Statement",
    "join_segments",
    "quote_word",
    "parse",
    "parse_description",
    "unquote",
]
