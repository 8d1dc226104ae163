"""
Voice Models
============
Pydantic models for the voice skill endpoint.

WHAT COMES IN:
-------------
The voice platform POSTs a request envelope. We only care about three things:
    - request.type          LaunchRequest / IntentRequest / SessionEndedRequest
    - request.intent.name   e.g. "DeleteScanIntent"
    - request.intent.slots  e.g. {"IslandName": {"name": "IslandName", "value": "east blue"}}

Everything else in the envelope (session, context, ...) is ignored.

WHAT GOES OUT:
-------------
    {
        "version": "1.0",
        "response": {
            "outputSpeech": {"type": "PlainText", "text": "..."},
            "reprompt": {"outputSpeech": {"type": "PlainText", "text": "..."}},
            "shouldEndSession": false
        }
    }

Author: Scan Data Collector Team
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional
from enum import Enum

from .reading import Reading


# =============================================================================
# ENUMS
# =============================================================================

class IntentKind(str, Enum):
    """
    Every kind of voice request we know how to handle.

    The dispatcher keeps exactly one handler per kind.
    """
    LAUNCH = "launch"
    QUERY_LATEST = "query_latest"
    SAVE_NEW = "save_new"
    UPDATE_LATEST = "update_latest"
    DELETE_LATEST = "delete_latest"
    HELP = "help"
    CANCEL = "cancel"
    FALLBACK = "fallback"
    SESSION_ENDED = "session_ended"

    @classmethod
    def from_envelope(cls, request_type: str, intent_name: Optional[str]) -> "IntentKind":
        """Map the platform's request type + intent name onto a kind."""
        if request_type == "LaunchRequest":
            return cls.LAUNCH
        if request_type == "SessionEndedRequest":
            return cls.SESSION_ENDED
        if request_type != "IntentRequest":
            return cls.FALLBACK
        return INTENT_NAMES.get(intent_name or "", cls.FALLBACK)


# Platform intent name -> kind
INTENT_NAMES: dict[str, IntentKind] = {
    "GetCharacterIntent": IntentKind.QUERY_LATEST,
    "GetLatestScanIntent": IntentKind.QUERY_LATEST,
    "SaveScanIntent": IntentKind.SAVE_NEW,
    "UpdateScanIntent": IntentKind.UPDATE_LATEST,
    "DeleteScanIntent": IntentKind.DELETE_LATEST,
    "AMAZON.HelpIntent": IntentKind.HELP,
    "AMAZON.CancelIntent": IntentKind.CANCEL,
    "AMAZON.StopIntent": IntentKind.CANCEL,
    "AMAZON.FallbackIntent": IntentKind.FALLBACK,
}


class OutcomeStatus(str, Enum):
    """
    How a voice command ended.

    - SUCCESS: Did what was asked
    - NOT_FOUND: Needed a latest reading but there are none
    - AMBIGUOUS: A spoken name didn't match any island/character
    - INVALID_INPUT: A spoken number wasn't a number
    - UPSTREAM_FAILURE: The database failed or timed out
    """
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"
    INVALID_INPUT = "invalid_input"
    UPSTREAM_FAILURE = "upstream_failure"


# =============================================================================
# REQUEST ENVELOPE - What the voice platform sends us
# =============================================================================

class Slot(BaseModel):
    """A named value the platform pulled out of what the user said."""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    value: Optional[str] = None


class Intent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    slots: dict[str, Slot] = Field(default_factory=dict)


class VoiceRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = Field(..., description="LaunchRequest, IntentRequest or SessionEndedRequest")
    intent: Optional[Intent] = None


class VoiceRequestEnvelope(BaseModel):
    """
    The full body the voice platform POSTs to /alexa.

    Only `request` is required - session and context are accepted and ignored.
    """
    model_config = ConfigDict(extra="ignore")

    version: Optional[str] = None
    session: Optional[dict[str, Any]] = None
    request: VoiceRequest

    @property
    def request_type(self) -> str:
        return self.request.type

    @property
    def intent_name(self) -> Optional[str]:
        return self.request.intent.name if self.request.intent else None

    def slot_value(self, name: str) -> Optional[str]:
        """Spoken value of a slot, or None if the slot is missing/empty."""
        if not self.request.intent:
            return None
        slot = self.request.intent.slots.get(name)
        if slot is None or not slot.value:
            return None
        return slot.value


# =============================================================================
# OUTCOMES AND RESPONSES
# =============================================================================

class CommandOutcome(BaseModel):
    """
    Result of one voice command. Lives only for the current request.

    The composer turns this into spoken text.
    """
    status: OutcomeStatus
    reading: Optional[Reading] = None
    island_name: Optional[str] = None
    character_name: Optional[str] = None
    ultrasonic_value: Optional[float] = None
    lidar_value: Optional[float] = None
    # Which slot failed to resolve (for AMBIGUOUS / INVALID_INPUT)
    failed_slot: Optional[str] = None


class VoiceResponse(BaseModel):
    """What the skill says back (before wrapping it for the platform)."""
    speech: str
    reprompt: Optional[str] = None
    end_session: bool = True

    def to_envelope(self) -> dict:
        """Wrap in the platform's response format."""
        response: dict[str, Any] = {"shouldEndSession": self.end_session}
        # SessionEndedRequest replies must not speak
        if self.speech:
            response["outputSpeech"] = {"type": "PlainText", "text": self.speech}
        if self.reprompt:
            response["reprompt"] = {
                "outputSpeech": {"type": "PlainText", "text": self.reprompt}
            }
        return {"version": "1.0", "response": response}
