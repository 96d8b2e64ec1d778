#!/usr/bin/env python3
# netprompt/interface/completion.py
from __future__ import annotations

"""
Command line completion.

Two layers:
- `complete` compares partially typed segments against one descriptor and
  returns a tier (NONE / PARTIAL / EXACT) with candidate words.
  PARTIAL means "replace the last typed word" (fo -> foo, and also
  show -> version when the next descriptor word is a literal); EXACT means
  the typed words already match and placeholder candidates are offered as a
  new word (show interface -> show interface eth0).
- `suggest` runs `complete` over every descriptor of the active command set
  and turns the surviving candidates into full replacement lines.
"""

import logging
from typing import Callable, Iterable, Mapping, Optional, Sequence

from netprompt.commands import CommandDescriptor, CommandSet, Completer, CompletionTier
from netprompt.errors import GrammarError
from netprompt.grammar import Segment, TokenKind, join_segments, lex, parse

logger = logging.getLogger(__name__)

CompleterLookup = Callable[[Optional[str]], Optional[Completer]]

_NO_COMPLETION: tuple[CompletionTier, list[str]] = (CompletionTier.NONE, [])


def completion_match_segment(user: Segment, described: Segment) -> CompletionTier:
    if described.is_placeholder:
        return CompletionTier.PARTIAL
    if described.text == user.text:
        return CompletionTier.EXACT
    if described.text.startswith(user.text):
        return CompletionTier.PARTIAL
    return CompletionTier.NONE


def _lookup_from(completers: Mapping[str, Completer] | CompleterLookup) -> CompleterLookup:
    if callable(completers):
        return completers
    return lambda name: completers.get(name) if name is not None else None


def complete(
    line: Sequence[Segment],
    descriptor: CommandDescriptor,
    completers: Mapping[str, Completer] | CompleterLookup,
) -> tuple[CompletionTier, list[str]]:
    """Return (tier, candidates) for the typed segments against one descriptor."""
    lookup = _lookup_from(completers)
    described = descriptor.segments

    # no user input, so offer the first word of each command
    if not line and described[0].is_literal:
        return CompletionTier.EXACT, [described[0].text]

    if len(line) > len(described) and not descriptor.is_wildcard:
        return _NO_COMPLETION

    if len(line) >= len(described) and descriptor.is_wildcard:
        completer = lookup(described[-1].completion_type)
        if completer is None:
            return _NO_COMPLETION
        last_text = line[-1].text
        candidates = list(completer(last_text))
        # nothing new to offer beyond what is already typed
        if len(candidates) == 1 and candidates[0] == last_text:
            return _NO_COMPLETION
        return CompletionTier.PARTIAL, candidates

    tier = CompletionTier.NONE
    target = 0
    for position, user_segment in enumerate(line):
        tier = completion_match_segment(user_segment, described[position])
        if tier is CompletionTier.NONE:
            return _NO_COMPLETION
        target = position

    if tier is CompletionTier.EXACT:
        # statement is already fully and exactly specified
        if target == len(described) - 1:
            return _NO_COMPLETION
        target += 1

    segment = described[target]
    if segment.is_placeholder:
        completer = lookup(segment.completion_type)
        if completer is None:
            return _NO_COMPLETION
        seed = line[target].text if target < len(line) else ""
        candidates = list(completer(seed))
        if not candidates:
            return _NO_COMPLETION
        return tier, candidates

    # a literal always replaces the last typed word
    return CompletionTier.PARTIAL, [segment.text]


def aggregate(
    line: Sequence[Segment],
    results: Iterable[tuple[CompletionTier, Sequence[str]]],
) -> list[str]:
    """
    Merge per-descriptor results into replacement lines.

    When both PARTIAL and EXACT results exist only the PARTIAL ones are kept:
    completing the word being typed wins over proposing a new trailing word.
    """
    kept = [(tier, words) for tier, words in results if tier is not CompletionTier.NONE]
    if not kept:
        return []

    tiers = {tier for tier, _ in kept}
    if CompletionTier.PARTIAL in tiers and CompletionTier.EXACT in tiers:
        kept = [(tier, words) for tier, words in kept if tier is not CompletionTier.EXACT]
    has_exact = any(tier is CompletionTier.EXACT for tier, _ in kept)

    words = sorted(word for _, candidates in kept for word in candidates)

    working = list(line)
    if has_exact or not working:
        working.append(Segment.literal(""))

    suggestions: list[str] = []
    previous = ""
    for word in words:
        # empty or duplicate?
        if not word or word == previous:
            continue
        previous = word
        working[-1] = Segment.literal(word)
        suggestions.append(join_segments(working))
    return suggestions


def _statement_start(text: str) -> int:
    """Offset just past the last statement separator of `text`."""
    start = 0
    for tok in lex(text):
        if tok.kind is TokenKind.STATEMENT_SEPARATOR:
            start = tok.pos + len(tok.text)
    return start


def suggest(
    text: str,
    command_set: Optional[CommandSet],
    completers: Mapping[str, Completer] | CompleterLookup,
) -> list[str]:
    """
    Produce full-line suggestions for a partially typed line.

    Only the statement after the last separator is completed; the text before
    it is kept verbatim in every suggestion. Lines that do not parse, and
    statements already carrying a filter chain or an output redirect, yield
    no suggestions.
    """
    if command_set is None:
        return []
    try:
        parse(text)
    except GrammarError as exc:
        logger.debug("no completion for %r: %s", text, exc)
        return []

    start = _statement_start(text)
    statements = parse(text[start:])
    if statements and (statements[-1].filters or statements[-1].output_target is not None):
        return []

    line = statements[-1].segments if statements else ()
    results = [complete(line, descriptor, completers) for descriptor in command_set]
    prefix = text[:start]
    if prefix.endswith(";"):
        prefix += " "
    return [prefix + suggestion for suggestion in aggregate(line, results)]
