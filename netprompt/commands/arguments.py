#!/usr/bin/env python3
# netprompt/commands/arguments.py
from __future__ import annotations

from typing import Sequence

from netprompt.grammar import Segment


def extract_args(user: Sequence[Segment], described: Sequence[Segment]) -> list[str]:
    """
    Build the handler's argument list from a matched statement.

    Numbered placeholders are ordered by their index, so "go $2 $1" called as
    "go a b" yields ["b", "a"]. Words captured by a wildcard follow the
    numbered arguments in their original order.
    """
    numbered: list[tuple[int, str]] = []
    captured: list[str] = []
    for position, segment in enumerate(described):
        if position >= len(user):
            break
        if segment.is_wildcard:
            captured = [word.text for word in user[position:]]
            break
        if segment.is_placeholder:
            numbered.append((segment.index, user[position].text))

    numbered.sort(key=lambda pair: pair[0])
    return [text for _, text in numbered] + captured
