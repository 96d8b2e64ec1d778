#!/usr/bin/env python3
# netprompt/grammar/lexer.py
from __future__ import annotations

"""
Streaming tokenizer for command descriptions and user input.

The scanner is a small state machine: every state is a generator that yields
the tokens it completes and returns the next state. Tokens are therefore
produced on demand, and the first Error token ends the scan.

Rules:
- spaces and tabs separate words
- ';', '\\n' and '\\r' emit a statement separator
- '\\' followed by end-of-line is a line continuation
- '`', '"' and "'" open a quoted string
- '|' starts a filter, '>' starts an output filename
- in description mode '$*' and '$<digits>' are placeholders, optionally
  followed by ':<completion type>'
"""

from typing import Callable, Generator, Iterator, Optional

from .tokens import LexMode, Token, TokenKind

EOF_RUNE = ""
QUOTE_DELIMITERS = ("`", '"', "'")

_TokenStream = Generator[Token, None, Optional["_State"]]
_State = Callable[[], _TokenStream]


def is_space(ch: str) -> bool:
    return ch in (" ", "\t")


def is_end_of_line(ch: str) -> bool:
    return ch in ("\r", "\n")


def is_alphanumeric(ch: str) -> bool:
    return ch == "_" or (ch != EOF_RUNE and ch.isalnum())


class _Lexer:
    """Single left-to-right scan with one rune of backup."""

    def __init__(self, text: str, mode: LexMode) -> None:
        self.text = text
        self.mode = mode
        self.start = 0
        self.pos = 0
        self.width = 0
        self.failed = False

    # ---------------- Scanning primitives ----------------

    def next(self) -> str:
        if self.pos >= len(self.text):
            self.width = 0
            return EOF_RUNE
        ch = self.text[self.pos]
        self.width = 1
        self.pos += 1
        return ch

    def backup(self) -> None:
        self.pos -= self.width

    def peek(self) -> str:
        ch = self.next()
        self.backup()
        return ch

    def ignore(self) -> None:
        self.start = self.pos

    def skip_space(self) -> None:
        while is_space(self.peek()):
            self.next()
            self.ignore()

    def token(self, kind: TokenKind) -> Token:
        tok = Token(kind, self.text[self.start:self.pos], self.start)
        self.start = self.pos
        return tok

    def error(self, message: str) -> Token:
        self.failed = True
        return Token(TokenKind.ERROR, message, self.start)

    def is_word(self, ch: str) -> bool:
        if ch in (EOF_RUNE, " ", "\t", "\n", "\r", ";", "|", ">"):
            return False
        # '$' only has meaning while reading command descriptions
        return not (ch == "$" and self.mode is LexMode.DESCRIPTION)

    # ---------------- States ----------------

    def run(self) -> Iterator[Token]:
        state: Optional[_State] = self.lex_command
        while state is not None:
            state = yield from state()
        if not self.failed:
            yield Token(TokenKind.END_OF_INPUT, "", self.pos)

    def lex_command(self) -> _TokenStream:
        while True:
            self.skip_space()
            ch = self.next()
            if ch in QUOTE_DELIMITERS:
                return self._quote_state(ch)
            if ch == ";":
                yield self.token(TokenKind.STATEMENT_SEPARATOR)
            elif ch == "|":
                return self.lex_filter
            elif ch == ">":
                yield self.token(TokenKind.OUTPUT_REDIRECT)
                return self.lex_filename
            elif ch == "$" and self.mode is LexMode.DESCRIPTION:
                return self.lex_placeholder
            elif ch == "\\" and is_end_of_line(self.peek()):
                while is_end_of_line(self.peek()):
                    self.next()
                yield self.token(TokenKind.LINE_CONTINUATION)
            elif is_end_of_line(ch):
                yield self.token(TokenKind.STATEMENT_SEPARATOR)
            elif ch == EOF_RUNE:
                return None
            else:
                return self.lex_word

    def lex_word(self) -> _TokenStream:
        while self.is_word(self.next()):
            pass
        self.backup()
        yield self.token(TokenKind.WORD)
        return self.lex_command

    def _quote_state(self, delimiter: str) -> _State:
        def lex_quote() -> _TokenStream:
            while True:
                ch = self.next()
                if ch == "\\" and self.peek() != EOF_RUNE:
                    # escaped delimiter or backslash-newline, kept verbatim
                    self.next()
                    continue
                if ch == EOF_RUNE or is_end_of_line(ch):
                    yield self.error("unterminated quoted string")
                    return None
                if ch == delimiter:
                    break
            yield self.token(TokenKind.QUOTED_STRING)
            return self.lex_command

        return lex_quote

    def lex_filter(self) -> _TokenStream:
        yield self.token(TokenKind.PIPE)
        self.skip_space()
        ch = self.peek()
        if ch == "|":
            self.next()
            return self.lex_filter
        if ch == ";" or is_end_of_line(ch) or ch == EOF_RUNE:
            # the parser reports the missing filter name
            return self.lex_command
        if self.is_word(ch) or ch in QUOTE_DELIMITERS:
            return self.lex_command
        yield self.error(f"unexpected filter character '{ch}'")
        return None

    def lex_filename(self) -> _TokenStream:
        self.skip_space()
        while True:
            ch = self.next()
            if self.is_word(ch):
                continue
            if ch in (";", EOF_RUNE) or is_space(ch) or is_end_of_line(ch):
                self.backup()
                if self.pos > self.start:
                    yield self.token(TokenKind.OUTPUT_FILENAME)
                return self.lex_command
            yield self.error(f"unexpected filename character '{ch}'")
            return None

    def lex_placeholder(self) -> _TokenStream:
        self.ignore()
        ch = self.next()
        if ch == "*":
            yield self.token(TokenKind.PLACEHOLDER)
        elif ch.isdecimal():
            while self.peek().isdecimal():
                self.next()
            yield self.token(TokenKind.PLACEHOLDER)
        elif ch == EOF_RUNE:
            yield self.error("unterminated placeholder")
            return None
        else:
            yield self.error(f"invalid placeholder character '{ch}'")
            return None

        if self.peek() == ":":
            return self.lex_completion_type
        return self.lex_command

    def lex_completion_type(self) -> _TokenStream:
        self.next()
        self.ignore()
        while is_alphanumeric(self.next()):
            pass
        self.backup()
        yield self.token(TokenKind.PLACEHOLDER_COMPLETION_TYPE)
        return self.lex_command


def lex(text: str, mode: LexMode = LexMode.INPUT) -> Iterator[Token]:
    """
    Lazily tokenize `text`.

    The stream ends with either an Error token or an EndOfInput token.
    """
    return _Lexer(text, mode).run()
