"""
Name Resolver
=============

Turns what somebody SAID into an island or character id.

Voice transcription is messy. People say "blue" when they mean "East Blue",
or "the east blue sea". So we:

1. Normalize both sides (lowercase, letters/digits/spaces only)
2. Try an exact match first
3. Then try a partial match - either side contained in the other

First match in list order wins, in both passes. No fuzzy scoring,
no stemming, no synonyms.

Author: Scan Data Collector Team
"""

import logging
import re
from typing import Optional, Sequence

from scan_collector.models import NamedEntity

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_NOT_ALNUM_SPACE = re.compile(r"[^a-z0-9 ]")


def normalize(text: Optional[str]) -> str:
    """
    Reduce free-form text to its comparable form.

    Examples:
        "  East-Blue!! "  -> "eastblue"
        "Water\\t7"        -> "water 7"
        None              -> ""
    """
    if not text:
        return ""
    lowered = _WHITESPACE.sub(" ", text.lower())
    cleaned = _NOT_ALNUM_SPACE.sub("", lowered)
    return _WHITESPACE.sub(" ", cleaned).strip()


def match_entity(entities: Sequence[NamedEntity], phrase: Optional[str]) -> Optional[NamedEntity]:
    """
    Find the entity a spoken phrase refers to.

    Args:
        entities: Reference list, in priority order
        phrase: What the user said

    Returns:
        The matching entity, or None if nothing matches
    """
    wanted = normalize(phrase)
    if not wanted:
        # "" is a substring of everything
        return None

    candidates = [(entity, normalize(entity.name)) for entity in entities]

    for entity, name in candidates:
        if name == wanted:
            return entity

    for entity, name in candidates:
        if name and (wanted in name or name in wanted):
            return entity

    return None


def resolve(entities: Sequence[NamedEntity], phrase: Optional[str]) -> Optional[int]:
    """Same as match_entity, but returns just the id."""
    entity = match_entity(entities, phrase)
    return entity.id if entity else None


class NameResolver:
    """
    Resolves spoken island/character names against a reference source.

    The source is either a fixed table or the database - see reference_data.py.
    """

    def __init__(self, source):
        self.source = source

    async def resolve_island(self, phrase: Optional[str]) -> Optional[NamedEntity]:
        island = match_entity(await self.source.islands(), phrase)
        if island is None:
            logger.info(f"[resolver] No island matches '{phrase}'")
        return island

    async def resolve_character(self, phrase: Optional[str]) -> Optional[NamedEntity]:
        character = match_entity(await self.source.characters(), phrase)
        if character is None:
            logger.info(f"[resolver] No character matches '{phrase}'")
        return character
