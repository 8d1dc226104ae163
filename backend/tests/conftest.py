"""Shared fixtures: a fake store that records calls, and a real in-memory store."""

import asyncio
from collections import defaultdict

import pytest

from scan_collector.models import NamedEntity, Reading
from scan_collector.services import ReadingStore, StorageError


EAST_BLUE = NamedEntity(id=1, name="East Blue")
LUFFY = NamedEntity(id=1, name="Luffy")


class FakeReadingStore:
    """In-memory stand-in for ReadingStore. Every call is recorded in `calls`."""

    def __init__(self, islands=(EAST_BLUE,), characters=(LUFFY,)):
        self.islands = list(islands)
        self.characters = list(characters)
        self.readings: dict[int, dict] = {}
        self.calls = defaultdict(list)
        self.fail = False
        self._next_id = 1

    def _record(self, name, *args):
        self.calls[name].append(args)
        if self.fail:
            raise StorageError(f"{name} failed")

    def _reading(self, reading_id) -> Reading:
        row = self.readings[reading_id]
        island = next(i for i in self.islands if i.id == row["island_id"])
        character = next(c for c in self.characters if c.id == row["character_id"])
        return Reading(
            reading_id=reading_id,
            island_name=island.name,
            character_name=character.name,
            **row,
        )

    async def insert_reading(self, ultrasonic, lidar, island_id, character_id):
        self._record("insert_reading", ultrasonic, lidar, island_id, character_id)
        new_id = self._next_id
        self._next_id += 1
        self.readings[new_id] = {
            "ultrasonic_value": ultrasonic,
            "lidar_value": lidar,
            "island_id": island_id,
            "character_id": character_id,
        }
        return new_id

    async def get_latest_reading(self):
        self._record("get_latest_reading")
        if not self.readings:
            return None
        return self._reading(max(self.readings))

    async def get_all_readings(self):
        self._record("get_all_readings")
        return [self._reading(i) for i in sorted(self.readings, reverse=True)]

    async def get_reading(self, reading_id):
        self._record("get_reading", reading_id)
        return self._reading(reading_id) if reading_id in self.readings else None

    async def update_reading(self, reading_id, island_id, character_id):
        self._record("update_reading", reading_id, island_id, character_id)
        if reading_id not in self.readings:
            return 0
        self.readings[reading_id].update(island_id=island_id, character_id=character_id)
        return 1

    async def delete_reading(self, reading_id):
        self._record("delete_reading", reading_id)
        return 1 if self.readings.pop(reading_id, None) is not None else 0

    async def list_islands(self):
        self._record("list_islands")
        return list(self.islands)

    async def list_characters(self):
        self._record("list_characters")
        return list(self.characters)

    def call_count(self, name: str) -> int:
        return len(self.calls[name])


@pytest.fixture
def fake_store():
    return FakeReadingStore()


@pytest.fixture
def sqlite_store():
    """A real ReadingStore on an in-memory SQLite database, seeded with East Blue / Luffy."""
    store = ReadingStore("sqlite://", timeout=5.0)
    store.create_tables()
    asyncio.run(store.seed_reference_data([EAST_BLUE], [LUFFY]))
    yield store
    store.close()


def envelope(request_type="IntentRequest", intent=None, **slots) -> dict:
    """Build a voice platform request body."""
    request = {"type": request_type}
    if intent:
        request["intent"] = {
            "name": intent,
            "slots": {name: {"name": name, "value": value} for name, value in slots.items()},
        }
    return {"version": "1.0", "session": {"new": True}, "request": request}


@pytest.fixture
def make_envelope():
    return envelope
