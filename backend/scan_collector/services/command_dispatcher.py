"""
Command Dispatcher
==================

This is the BRAIN of the voice skill!

WHAT IT DOES:
------------
1. Works out which kind of request came in (IntentKind)
2. Runs the one handler registered for that kind
3. Hands the outcome to the ResponseComposer

THE OPERATIONS:
--------------
    QUERY_LATEST   locate latest            -> read it back
    SAVE_NEW       resolve island+character -> insert
    UPDATE_LATEST  resolve island+character -> locate latest -> update
    DELETE_LATEST  locate latest            -> delete
    LAUNCH / HELP / CANCEL / FALLBACK / SESSION_ENDED -> fixed text

WHEN THINGS GO WRONG:
--------------------
- A name doesn't match      -> AMBIGUOUS (user hears an example phrase)
- No readings at all        -> NOT_FOUND (user hears "nothing to ...")
- Database error / timeout  -> UPSTREAM_FAILURE (logged, user hears an apology)

Nothing here ever raises at the user.

Author: Scan Data Collector Team
"""

import logging
from typing import Awaitable, Callable, Optional

from scan_collector.models import (
    CommandOutcome,
    IntentKind,
    OutcomeStatus,
    VoiceRequestEnvelope,
    VoiceResponse,
)
from scan_collector.services.name_resolver import NameResolver
from scan_collector.services.reading_locator import LatestReadingLocator
from scan_collector.services.reading_store import StorageError
from scan_collector.services.response_composer import ResponseComposer
from scan_collector.utils.validation import parse_sensor_value

logger = logging.getLogger(__name__)

Handler = Callable[[VoiceRequestEnvelope], Awaitable[CommandOutcome]]

# Slot names as configured in the skill's interaction model
ISLAND_SLOT = "IslandName"
CHARACTER_SLOT = "CharacterName"
NEW_ISLAND_SLOT = "NewIslandName"
NEW_CHARACTER_SLOT = "NewCharacterName"
ULTRASONIC_SLOT = "UltrasonicValue"
LIDAR_SLOT = "LidarValue"


class InvalidSlotValue(ValueError):
    """A spoken number slot held something that isn't a finite number."""

    def __init__(self, slot: str):
        super().__init__(f"Slot {slot} is not a finite number")
        self.slot = slot


class CommandDispatcher:
    """
    Routes voice requests to handlers.

    HOW TO USE:
    ----------
    dispatcher = CommandDispatcher(store, resolver)
    response = await dispatcher.dispatch(envelope)   # VoiceResponse
    """

    def __init__(
        self,
        store,
        resolver: NameResolver,
        composer: Optional[ResponseComposer] = None,
    ):
        """
        Args:
            store: The persistence collaborator (see reading_store.ReadingStore)
            resolver: Resolves spoken island/character names
            composer: Builds the spoken replies
        """
        self.store = store
        self.resolver = resolver
        self.locator = LatestReadingLocator(store)
        self.composer = composer or ResponseComposer()

        self._handlers: dict[IntentKind, Handler] = {
            IntentKind.LAUNCH: self._fixed_reply,
            IntentKind.QUERY_LATEST: self.query_latest,
            IntentKind.SAVE_NEW: self.save_new,
            IntentKind.UPDATE_LATEST: self.update_latest,
            IntentKind.DELETE_LATEST: self.delete_latest,
            IntentKind.HELP: self._fixed_reply,
            IntentKind.CANCEL: self._fixed_reply,
            IntentKind.FALLBACK: self._fixed_reply,
            IntentKind.SESSION_ENDED: self._fixed_reply,
        }
        missing = set(IntentKind) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No handler for intent kinds: {sorted(k.value for k in missing)}")

    # =========================================================================
    # ENTRY POINT
    # =========================================================================

    async def dispatch(self, envelope: VoiceRequestEnvelope) -> VoiceResponse:
        """Handle one voice request start to finish."""
        kind = IntentKind.from_envelope(envelope.request_type, envelope.intent_name)
        logger.info(f"[voice] {envelope.request_type} {envelope.intent_name or ''} -> {kind.value}")

        try:
            outcome = await self._handlers[kind](envelope)
        except StorageError:
            logger.exception(f"[voice] {kind.value} failed talking to the database")
            outcome = CommandOutcome(status=OutcomeStatus.UPSTREAM_FAILURE)
        except Exception:
            # The voice platform always gets an envelope back, never a bare 500
            logger.exception(f"[voice] {kind.value} failed unexpectedly")
            outcome = CommandOutcome(status=OutcomeStatus.UPSTREAM_FAILURE)

        return self.composer.compose(kind, outcome)

    # =========================================================================
    # HANDLERS
    # =========================================================================

    async def _fixed_reply(self, envelope: VoiceRequestEnvelope) -> CommandOutcome:
        return CommandOutcome(status=OutcomeStatus.SUCCESS)

    async def query_latest(self, envelope: VoiceRequestEnvelope) -> CommandOutcome:
        latest = await self.locator.locate()
        if latest is None:
            return CommandOutcome(status=OutcomeStatus.NOT_FOUND)
        return CommandOutcome(status=OutcomeStatus.SUCCESS, reading=latest)

    async def save_new(self, envelope: VoiceRequestEnvelope) -> CommandOutcome:
        """Save a new reading tagged with the spoken island and character."""
        try:
            ultrasonic = _number_slot(envelope, ULTRASONIC_SLOT)
            lidar = _number_slot(envelope, LIDAR_SLOT)
        except InvalidSlotValue as e:
            return CommandOutcome(status=OutcomeStatus.INVALID_INPUT, failed_slot=_spoken(e.slot))

        island = await self.resolver.resolve_island(envelope.slot_value(ISLAND_SLOT))
        if island is None:
            return CommandOutcome(status=OutcomeStatus.AMBIGUOUS, failed_slot="island")
        character = await self.resolver.resolve_character(envelope.slot_value(CHARACTER_SLOT))
        if character is None:
            return CommandOutcome(status=OutcomeStatus.AMBIGUOUS, failed_slot="character")

        new_id = await self.store.insert_reading(ultrasonic, lidar, island.id, character.id)
        logger.info(f"[voice] Saved reading {new_id} for {character.name} on {island.name}")

        return CommandOutcome(
            status=OutcomeStatus.SUCCESS,
            island_name=island.name,
            character_name=character.name,
            ultrasonic_value=ultrasonic,
            lidar_value=lidar,
        )

    async def update_latest(self, envelope: VoiceRequestEnvelope) -> CommandOutcome:
        """
        Re-tag the latest reading.

        Names are resolved BEFORE locating the reading, so a bad name never
        leads to an update.
        """
        island_phrase = envelope.slot_value(NEW_ISLAND_SLOT) or envelope.slot_value(ISLAND_SLOT)
        character_phrase = (
            envelope.slot_value(NEW_CHARACTER_SLOT) or envelope.slot_value(CHARACTER_SLOT)
        )

        island = await self.resolver.resolve_island(island_phrase)
        if island is None:
            return CommandOutcome(status=OutcomeStatus.AMBIGUOUS, failed_slot="island")
        character = await self.resolver.resolve_character(character_phrase)
        if character is None:
            return CommandOutcome(status=OutcomeStatus.AMBIGUOUS, failed_slot="character")

        # Step 1: locate the subject
        latest = await self.locator.locate()
        if latest is None:
            return CommandOutcome(status=OutcomeStatus.NOT_FOUND)

        # Step 2: act on it
        affected = await self.store.update_reading(latest.reading_id, island.id, character.id)
        if not affected:
            # Deleted between the two steps
            return CommandOutcome(status=OutcomeStatus.NOT_FOUND)

        return CommandOutcome(
            status=OutcomeStatus.SUCCESS,
            reading=latest,
            island_name=island.name,
            character_name=character.name,
        )

    async def delete_latest(self, envelope: VoiceRequestEnvelope) -> CommandOutcome:
        latest = await self.locator.locate()
        if latest is None:
            return CommandOutcome(status=OutcomeStatus.NOT_FOUND)

        affected = await self.store.delete_reading(latest.reading_id)
        if not affected:
            return CommandOutcome(status=OutcomeStatus.NOT_FOUND)

        return CommandOutcome(status=OutcomeStatus.SUCCESS, reading=latest)


# =============================================================================
# HELPERS
# =============================================================================

def _number_slot(envelope: VoiceRequestEnvelope, slot: str) -> float:
    """Spoken number slot as a float. Missing means 0."""
    raw = envelope.slot_value(slot)
    if raw is None:
        return 0.0
    value = parse_sensor_value(raw)
    if value is None:
        raise InvalidSlotValue(slot)
    return value


def _spoken(slot: str) -> str:
    return {ULTRASONIC_SLOT: "ultrasonic value", LIDAR_SLOT: "LiDAR value"}.get(slot, slot)
