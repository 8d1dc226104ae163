"""
Latest Reading Locator
======================

Voice commands like "delete my scan" don't say WHICH scan. They always mean
the latest one - the reading with the highest reading_id.

Finding that reading is step one. Acting on it (update/delete) is step two,
done by the dispatcher. Another reading could arrive between the two steps;
we accept that (one device, low traffic) and take no lock.

Author: Scan Data Collector Team
"""

from typing import Optional

from scan_collector.models import Reading


class LatestReadingLocator:
    """Finds the subject of implicit voice commands. Never changes anything."""

    def __init__(self, store):
        self.store = store

    async def locate(self) -> Optional[Reading]:
        """The latest reading, or None if there are no readings yet."""
        return await self.store.get_latest_reading()
