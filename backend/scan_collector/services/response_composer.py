"""
Response Composer
=================

Picks what the skill says back.

One template per (intent kind, outcome status). Names and numbers go in
exactly as they came from the database or the user - no re-normalizing.

Author: Scan Data Collector Team
"""

from scan_collector.models import CommandOutcome, IntentKind, OutcomeStatus, VoiceResponse


LAUNCH_TEXT = "You can ask for your latest scan, update your scan, delete it, or save one."
HELP_TEXT = (
    "You can say: what's my latest scan, save a scan for Luffy on East Blue, "
    "change my scan to Zoro on Wano, or delete my scan."
)
GOODBYE_TEXT = "Goodbye!"
FALLBACK_TEXT = "Sorry, I didn't get that. You can ask for your latest scan, or say help."
APOLOGY_TEXT = "Sorry, something went wrong. Please try again later."
REPROMPT_TEXT = "What would you like to do?"

AMBIGUOUS_SAVE_TEXT = (
    "I couldn't match that {slot}. Try something like: save a scan for Luffy on East Blue."
)
AMBIGUOUS_UPDATE_TEXT = (
    "I couldn't match that {slot}. Try something like: change my scan to Zoro on Wano."
)
INVALID_NUMBER_TEXT = "That {slot} doesn't sound like a number. Please try again."


class ResponseComposer:
    """Maps an outcome to spoken text. No decisions beyond choosing a template."""

    def compose(self, kind: IntentKind, outcome: CommandOutcome) -> VoiceResponse:
        if outcome.status == OutcomeStatus.UPSTREAM_FAILURE:
            return VoiceResponse(speech=APOLOGY_TEXT)

        if kind == IntentKind.LAUNCH:
            return VoiceResponse(speech=LAUNCH_TEXT, reprompt=LAUNCH_TEXT, end_session=False)
        if kind == IntentKind.HELP:
            return VoiceResponse(speech=HELP_TEXT, reprompt=REPROMPT_TEXT, end_session=False)
        if kind == IntentKind.CANCEL:
            return VoiceResponse(speech=GOODBYE_TEXT)
        if kind == IntentKind.SESSION_ENDED:
            return VoiceResponse(speech="")
        if kind == IntentKind.FALLBACK:
            return VoiceResponse(speech=FALLBACK_TEXT, reprompt=REPROMPT_TEXT, end_session=False)

        if kind == IntentKind.QUERY_LATEST:
            return self._query_latest(outcome)
        if kind == IntentKind.SAVE_NEW:
            return self._save_new(outcome)
        if kind == IntentKind.UPDATE_LATEST:
            return self._update_latest(outcome)
        if kind == IntentKind.DELETE_LATEST:
            return self._delete_latest(outcome)

        return VoiceResponse(speech=FALLBACK_TEXT, reprompt=REPROMPT_TEXT, end_session=False)

    def _query_latest(self, outcome: CommandOutcome) -> VoiceResponse:
        if outcome.status == OutcomeStatus.NOT_FOUND:
            return VoiceResponse(speech="I couldn't find any scans yet.")
        reading = outcome.reading
        return VoiceResponse(
            speech=(
                f"Your latest scan shows {reading.character_name} on {reading.island_name}. "
                f"Ultrasonic is {_number(reading.ultrasonic_value)} centimeters, "
                f"and LiDAR is {_number(reading.lidar_value)} centimeters."
            )
        )

    def _save_new(self, outcome: CommandOutcome) -> VoiceResponse:
        if outcome.status == OutcomeStatus.AMBIGUOUS:
            text = AMBIGUOUS_SAVE_TEXT.format(slot=outcome.failed_slot or "name")
            return VoiceResponse(speech=text, reprompt=text, end_session=False)
        if outcome.status == OutcomeStatus.INVALID_INPUT:
            text = INVALID_NUMBER_TEXT.format(slot=outcome.failed_slot or "value")
            return VoiceResponse(speech=text, reprompt=text, end_session=False)
        return VoiceResponse(
            speech=f"Saved a scan for {outcome.character_name} on {outcome.island_name}."
        )

    def _update_latest(self, outcome: CommandOutcome) -> VoiceResponse:
        if outcome.status == OutcomeStatus.AMBIGUOUS:
            text = AMBIGUOUS_UPDATE_TEXT.format(slot=outcome.failed_slot or "name")
            return VoiceResponse(speech=text, reprompt=text, end_session=False)
        if outcome.status == OutcomeStatus.NOT_FOUND:
            return VoiceResponse(speech="There are no scans to update.")
        return VoiceResponse(
            speech=(
                f"Updated your latest scan to {outcome.character_name} "
                f"on {outcome.island_name}."
            )
        )

    def _delete_latest(self, outcome: CommandOutcome) -> VoiceResponse:
        if outcome.status == OutcomeStatus.NOT_FOUND:
            return VoiceResponse(speech="There are no scans to delete.")
        return VoiceResponse(speech="Deleted your latest scan.")


def _number(value: float) -> str:
    """10.0 -> "10", 10.5 -> "10.5" (sounds better out loud)."""
    return str(int(value)) if float(value).is_integer() else str(value)
