"""
Services Package
================

These are the "workers" that do the actual work.

- ReadingStore: Talks to the database
- NameResolver: Turns spoken names into island/character ids
- LatestReadingLocator: Finds the reading voice commands act on
- ResponseComposer: Decides what the skill says back
- CommandDispatcher: The boss that runs voice commands
"""

from .reading_store import ReadingStore, StorageError, ConstraintError
from .reference_data import (
    ReferenceTable,
    FixedReferenceSource,
    StoreReferenceSource,
    DEFAULT_REFERENCE_TABLE,
)
from .name_resolver import NameResolver, normalize, resolve
from .reading_locator import LatestReadingLocator
from .response_composer import ResponseComposer
from .command_dispatcher import CommandDispatcher

__all__ = [
    "ReadingStore",
    "StorageError",
    "ConstraintError",
    "ReferenceTable",
    "FixedReferenceSource",
    "StoreReferenceSource",
    "DEFAULT_REFERENCE_TABLE",
    "NameResolver",
    "normalize",
    "resolve",
    "LatestReadingLocator",
    "ResponseComposer",
    "CommandDispatcher",
]
