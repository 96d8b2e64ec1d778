#!/usr/bin/env python3
# netprompt/grammar/statement.py
from __future__ import annotations

"""
Parsed statement model.

This module defines:
- SegmentKind / Segment: one element of a statement's word list, either a
  literal word or a placeholder ($1, $2, ..., $*) with an optional
  completion type.
- FilterInvocation: one '| name args...' stage.
- Statement: segments, filter chain and optional output target.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

WILDCARD_TEXT = "*"

# Words containing any of these are re-quoted when rendered back to a line.
_NEEDS_QUOTING = re.compile(r"""[\s;|>$`"'\\]""")


class SegmentKind(Enum):
    LITERAL = "literal"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True, slots=True)
class Segment:
    """
    A single statement segment.

    Attributes:
        kind: LITERAL or PLACEHOLDER.
        text: The word for literals; the digits or '*' for placeholders.
        index: Numeric placeholder index, None for literals and for the wildcard.
        completion_type: Name of the completer used for a placeholder.
    """

    kind: SegmentKind
    text: str
    index: Optional[int] = None
    completion_type: Optional[str] = None

    @classmethod
    def literal(cls, text: str) -> "Segment":
        return cls(SegmentKind.LITERAL, text)

    @classmethod
    def placeholder(cls, text: str, completion_type: Optional[str] = None) -> "Segment":
        """Build a placeholder from its lexed text ('*' or digits)."""
        index = None if text == WILDCARD_TEXT else int(text)
        return cls(SegmentKind.PLACEHOLDER, text, index, completion_type)

    @property
    def is_literal(self) -> bool:
        return self.kind is SegmentKind.LITERAL

    @property
    def is_placeholder(self) -> bool:
        return self.kind is SegmentKind.PLACEHOLDER

    @property
    def is_wildcard(self) -> bool:
        return self.kind is SegmentKind.PLACEHOLDER and self.index is None

    def same_placeholder(self, other: "Segment") -> bool:
        """True when both are placeholders with the same index (or both wildcards)."""
        return self.is_placeholder and other.is_placeholder and self.index == other.index

    def as_user(self) -> str:
        if self.is_placeholder:
            suffix = f":{self.completion_type}" if self.completion_type else ""
            return f"${self.text}{suffix}"
        return quote_word(self.text)

    def __str__(self) -> str:
        if self.completion_type:
            return f"<{self.kind.value} {self.text} complete:{self.completion_type}>"
        return f"<{self.kind.value} {self.text}>"


@dataclass(frozen=True, slots=True)
class FilterInvocation:
    name: str
    args: tuple[str, ...] = ()

    def as_user(self) -> str:
        return " ".join([self.name, *(quote_word(arg) for arg in self.args)])


@dataclass(frozen=True, slots=True)
class Statement:
    segments: tuple[Segment, ...]
    filters: tuple[FilterInvocation, ...] = field(default=())
    output_target: Optional[str] = None

    @property
    def words(self) -> list[str]:
        return [segment.text for segment in self.segments]

    @property
    def wildcard_position(self) -> Optional[int]:
        """Position of the first wildcard placeholder, if any."""
        for position, segment in enumerate(self.segments):
            if segment.is_wildcard:
                return position
        return None

    @property
    def has_wildcard(self) -> bool:
        return self.wildcard_position is not None

    def as_user(self) -> str:
        """Render the statement back to canonical user text (used for history)."""
        parts = [join_segments(self.segments)]
        parts.extend(f"| {invocation.as_user()}" for invocation in self.filters)
        if self.output_target is not None:
            parts.append(f"> {self.output_target}")
        return " ".join(parts)

    def __str__(self) -> str:
        body = " ".join(str(segment) for segment in self.segments)
        if self.filters:
            chain = " ".join(f"{f.name}{list(f.args)}" for f in self.filters)
            body = f"{body} filter: {chain}"
        return "{" + body + "}"


def quote_word(text: str) -> str:
    """Quote a word so it lexes back as a single segment with the same text."""
    if text and not _NEEDS_QUOTING.search(text):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def join_segments(segments: Iterable[Segment]) -> str:
    return " ".join(segment.as_user() for segment in segments)
