"""
Voice Skill Router
==================

The voice platform POSTs every skill request here.

Endpoint:
  POST /alexa  - Takes the platform's request envelope, returns its response envelope.

All the real work happens in the CommandDispatcher. This router just
unwraps and wraps.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from scan_collector.models import VoiceRequestEnvelope

logger = logging.getLogger(__name__)

router = APIRouter(tags=["voice"])


_dispatcher = None  # This gets set when the app starts


def set_command_dispatcher(dispatcher):
    global _dispatcher
    _dispatcher = dispatcher


def get_command_dispatcher():
    if _dispatcher is None:
        raise HTTPException(status_code=500, detail="Server not fully started yet")
    return _dispatcher


@router.post("/alexa")
async def handle_voice_request(
    envelope: VoiceRequestEnvelope,
    dispatcher=Depends(get_command_dispatcher),
):
    """
    Run one voice request.

    **Body (JSON)**: the platform request envelope. Only `request.type`,
    `request.intent.name` and `request.intent.slots` are used.

    **Returns**: `{"version": "1.0", "response": {...}}` with the spoken text,
    an optional reprompt, and `shouldEndSession`.
    """
    response = await dispatcher.dispatch(envelope)
    return response.to_envelope()
