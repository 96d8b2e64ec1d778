#!/usr/bin/env python3
# netprompt/grammar/parser.py
from __future__ import annotations

"""
Statement parser.

Consumes the lazy token stream from the lexer with one token of pushback and
assembles Statements through a small set of state functions:

    start_statement -> mid_statement -> (filter | output_file) -> ...

The first lexer or parser error aborts the whole line.
"""

import logging
import re
from typing import Callable, Iterator, Optional

from netprompt.errors import LexError, ParseError

from .lexer import lex
from .statement import WILDCARD_TEXT, FilterInvocation, Segment, Statement
from .tokens import LexMode, Token, TokenKind

logger = logging.getLogger(__name__)

_ESCAPE_RE = re.compile(r"\\(\r\n|\n|\r|.)", re.DOTALL)

_ParseState = Callable[[], Optional["_ParseState"]]


def unquote(text: str) -> str:
    """Strip the delimiters of a QuotedString token and resolve its escapes."""
    delimiter, body = text[0], text[1:-1]

    def _replace(match: re.Match[str]) -> str:
        escaped = match.group(1)
        if escaped in ("\n", "\r", "\r\n"):
            return ""
        if escaped in (delimiter, "\\"):
            return escaped
        return match.group(0)

    return _ESCAPE_RE.sub(_replace, body)


class _StatementBuilder:
    """Mutable accumulator for the statement currently being parsed."""

    def __init__(self) -> None:
        self.segments: list[Segment] = []
        self.filters: list[FilterInvocation] = []
        self.output_target: Optional[str] = None

    def add_placeholder(self, segment: Segment) -> None:
        for existing in self.segments:
            if existing.same_placeholder(segment):
                raise ParseError(f"duplicate placeholder ${segment.text}")
        self.segments.append(segment)

    def build(self) -> Statement:
        return Statement(
            segments=tuple(self.segments),
            filters=tuple(self.filters),
            output_target=self.output_target,
        )


class _Parser:
    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._pushed: list[Token] = []
        self.current = _StatementBuilder()
        self.parsed: list[Statement] = []

    # ---------------- Token access ----------------

    def next(self) -> Token:
        if self._pushed:
            return self._pushed.pop()
        while True:
            tok = next(self._tokens, Token(TokenKind.END_OF_INPUT, ""))
            if tok.kind is TokenKind.ERROR:
                raise LexError(tok.text)
            # continuations only join physical lines
            if tok.kind is not TokenKind.LINE_CONTINUATION:
                return tok

    def peek(self) -> Token:
        tok = self.next()
        self.backup(tok)
        return tok

    def backup(self, tok: Token) -> None:
        self._pushed.append(tok)

    @staticmethod
    def unexpected(tok: Token) -> ParseError:
        return ParseError(f"unexpected {tok.kind} token '{tok.text}'")

    # ---------------- States ----------------

    def run(self) -> list[Statement]:
        state: Optional[_ParseState] = self.start_statement
        while state is not None:
            state = state()
        self.finish_statement()
        return self.parsed

    def finish_statement(self) -> None:
        if self.current.segments:
            self.parsed.append(self.current.build())
        self.current = _StatementBuilder()

    def start_statement(self) -> Optional[_ParseState]:
        self.finish_statement()
        while True:
            tok = self.next()
            if tok.kind is TokenKind.END_OF_INPUT:
                return None
            if tok.kind is TokenKind.STATEMENT_SEPARATOR:
                # empty statements (";;" or blank lines) are skipped
                continue
            if tok.kind in (TokenKind.WORD, TokenKind.QUOTED_STRING):
                self.backup(tok)
                return self.mid_statement
            raise self.unexpected(tok)

    def mid_statement(self) -> Optional[_ParseState]:
        while True:
            tok = self.next()
            kind = tok.kind
            if kind is TokenKind.END_OF_INPUT:
                return None
            if kind is TokenKind.WORD:
                self.current.segments.append(Segment.literal(tok.text))
            elif kind is TokenKind.QUOTED_STRING:
                self.current.segments.append(Segment.literal(unquote(tok.text)))
            elif kind is TokenKind.PLACEHOLDER:
                self.backup(tok)
                return self.placeholder
            elif kind is TokenKind.PIPE:
                return self.filter
            elif kind is TokenKind.OUTPUT_REDIRECT:
                return self.output_file
            elif kind is TokenKind.STATEMENT_SEPARATOR:
                return self.start_statement
            else:
                raise self.unexpected(tok)

    def placeholder(self) -> Optional[_ParseState]:
        tok = self.next()
        if tok.text != WILDCARD_TEXT and int(tok.text) == 0:
            raise ParseError(f"placeholder index must be positive: ${tok.text}")
        completion_type = None
        if self.peek().kind is TokenKind.PLACEHOLDER_COMPLETION_TYPE:
            completion_type = self.next().text
        self.current.add_placeholder(Segment.placeholder(tok.text, completion_type))
        return self.mid_statement

    def filter(self) -> Optional[_ParseState]:
        name = self.next()
        if name.kind is not TokenKind.WORD:
            raise ParseError("expected word after |")
        args: list[str] = []
        while True:
            tok = self.peek()
            if tok.kind is TokenKind.WORD:
                args.append(self.next().text)
            elif tok.kind is TokenKind.QUOTED_STRING:
                args.append(unquote(self.next().text))
            else:
                break
        self.current.filters.append(FilterInvocation(name.text, tuple(args)))
        return self.mid_statement

    def output_file(self) -> Optional[_ParseState]:
        filename = self.next()
        if filename.kind is not TokenKind.OUTPUT_FILENAME:
            raise ParseError("expected output filename")
        if self.current.output_target is not None:
            raise ParseError("cannot specify multiple output files")
        self.current.output_target = filename.text

        tok = self.next()
        if tok.kind is TokenKind.END_OF_INPUT:
            return None
        if tok.kind is TokenKind.STATEMENT_SEPARATOR:
            return self.start_statement
        if tok.kind is TokenKind.OUTPUT_REDIRECT:
            raise ParseError("cannot specify multiple output files")
        raise self.unexpected(tok)


def parse(text: str, mode: LexMode = LexMode.INPUT) -> list[Statement]:
    """
    Parse a whole line into statements.

    Raises:
        LexError: the tokenizer stopped on an error token.
        ParseError: the tokens do not form valid statements.
    """
    statements = _Parser(lex(text, mode)).run()
    logger.debug("parsed %d statement(s) from %r", len(statements), text)
    return statements


def parse_description(text: str) -> list[Statement]:
    return parse(text, LexMode.DESCRIPTION)
