#!/usr/bin/env python3
# netprompt/commands/matcher.py
from __future__ import annotations

"""
Scoring of user statements against command descriptors.

A score is the weakest tier seen while comparing segments:
    NONE < WILDCARD < SUBSTITUTION < EXACT
Selection keeps the first descriptor whose score is strictly higher than the
best so far, so ties go to the earliest registered descriptor.
"""

import logging
from typing import Iterable, Optional

from netprompt.grammar import Segment, Statement

from .command_types import CommandDescriptor, MatchTier

logger = logging.getLogger(__name__)


def match_segment(user: Segment, described: Segment) -> MatchTier:
    if described.is_placeholder:
        return MatchTier.WILDCARD if described.is_wildcard else MatchTier.SUBSTITUTION
    return MatchTier.EXACT if described.text == user.text else MatchTier.NONE


def score(statement: Statement, descriptor: CommandDescriptor) -> MatchTier:
    user_segments = statement.segments
    described = descriptor.segments
    wildcard_at = descriptor.description.wildcard_position

    if len(user_segments) > len(described) and wildcard_at is None:
        return MatchTier.NONE
    if len(user_segments) < len(described):
        return MatchTier.NONE

    result = MatchTier.EXACT
    for position, user_segment in enumerate(user_segments):
        if wildcard_at is not None and position >= wildcard_at:
            # the wildcard absorbs everything from here on
            return MatchTier.WILDCARD
        tier = match_segment(user_segment, described[position])
        if tier is MatchTier.NONE:
            return MatchTier.NONE
        result = min(result, tier)
    return result


def select(statement: Statement, descriptors: Iterable[CommandDescriptor]) -> Optional[CommandDescriptor]:
    """Return the winning descriptor, or None when nothing scores above NONE."""
    best: Optional[CommandDescriptor] = None
    best_tier = MatchTier.NONE
    for descriptor in descriptors:
        tier = score(statement, descriptor)
        if tier > best_tier:
            best, best_tier = descriptor, tier
    if best is not None:
        logger.debug("matched %r to %r (%s)", statement.as_user(), best.source, best_tier.name)
    return best
