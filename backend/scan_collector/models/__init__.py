"""
Models Package
==============

This is where all our data models live.
Import from here instead of the individual files.

Example:
    from scan_collector.models import Reading, AddReadingRequest
"""

from .reading import (
    # What's stored
    Reading,
    NamedEntity,

    # What the device / frontend sends us
    AddReadingRequest,
    UpdateReadingRequest,

    # What we send back
    ReadingListResponse,
    AddReadingResponse,
    MutationResponse,
)
from .voice import (
    IntentKind,
    OutcomeStatus,
    VoiceRequestEnvelope,
    CommandOutcome,
    VoiceResponse,
)

__all__ = [
    "Reading",
    "NamedEntity",
    "AddReadingRequest",
    "UpdateReadingRequest",
    "ReadingListResponse",
    "AddReadingResponse",
    "MutationResponse",
    "IntentKind",
    "OutcomeStatus",
    "VoiceRequestEnvelope",
    "CommandOutcome",
    "VoiceResponse",
]
