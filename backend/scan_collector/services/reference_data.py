"""
Reference Data
==============

Islands and characters - the names people say out loud.

Two ways to get them:

1. FixedReferenceSource  - a table handed in at startup (never changes)
2. StoreReferenceSource  - asks the database every time (fresh per request)

Both have the same two methods, so the resolver doesn't care which one it got.

Author: Scan Data Collector Team
"""

from dataclasses import dataclass, field

from scan_collector.models import NamedEntity


@dataclass(frozen=True)
class ReferenceTable:
    """An immutable list of islands and characters."""
    islands: tuple[NamedEntity, ...] = field(default_factory=tuple)
    characters: tuple[NamedEntity, ...] = field(default_factory=tuple)

    @classmethod
    def from_names(cls, islands, characters) -> "ReferenceTable":
        """Build a table from plain name lists; ids are assigned 1, 2, 3, ..."""
        return cls(
            islands=tuple(NamedEntity(id=i, name=n) for i, n in enumerate(islands, start=1)),
            characters=tuple(NamedEntity(id=i, name=n) for i, n in enumerate(characters, start=1)),
        )


# Used for the fixed source and to seed an empty database
DEFAULT_REFERENCE_TABLE = ReferenceTable.from_names(
    islands=[
        "East Blue",
        "Alabasta",
        "Skypiea",
        "Water 7",
        "Thriller Bark",
        "Fish-Man Island",
        "Dressrosa",
        "Wano",
    ],
    characters=[
        "Luffy",
        "Zoro",
        "Nami",
        "Usopp",
        "Sanji",
        "Chopper",
        "Robin",
        "Franky",
        "Brook",
        "Jinbe",
    ],
)


class FixedReferenceSource:
    """Serves a ReferenceTable given at construction."""

    def __init__(self, table: ReferenceTable):
        self.table = table

    async def islands(self) -> list[NamedEntity]:
        return list(self.table.islands)

    async def characters(self) -> list[NamedEntity]:
        return list(self.table.characters)


class StoreReferenceSource:
    """Reloads islands/characters from the database on every call."""

    def __init__(self, store):
        self.store = store

    async def islands(self) -> list[NamedEntity]:
        return await self.store.list_islands()

    async def characters(self) -> list[NamedEntity]:
        return await self.store.list_characters()
