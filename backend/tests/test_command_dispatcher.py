"""Tests for the CommandDispatcher and ResponseComposer."""

import asyncio

import pytest

from scan_collector.models import IntentKind, VoiceRequestEnvelope
from scan_collector.services import (
    CommandDispatcher,
    NameResolver,
    StoreReferenceSource,
)


@pytest.fixture
def dispatcher(fake_store):
    return CommandDispatcher(fake_store, NameResolver(StoreReferenceSource(fake_store)))


@pytest.fixture
def run(dispatcher, make_envelope):
    def _run(request_type="IntentRequest", intent=None, **slots):
        body = VoiceRequestEnvelope.model_validate(make_envelope(request_type, intent, **slots))
        return asyncio.run(dispatcher.dispatch(body))
    return _run


def test_every_intent_kind_has_a_handler(dispatcher):
    assert set(dispatcher._handlers) == set(IntentKind)


@pytest.mark.parametrize(
    "request_type, intent, kind",
    [
        ("LaunchRequest", None, IntentKind.LAUNCH),
        ("SessionEndedRequest", None, IntentKind.SESSION_ENDED),
        ("IntentRequest", "GetCharacterIntent", IntentKind.QUERY_LATEST),
        ("IntentRequest", "SaveScanIntent", IntentKind.SAVE_NEW),
        ("IntentRequest", "UpdateScanIntent", IntentKind.UPDATE_LATEST),
        ("IntentRequest", "DeleteScanIntent", IntentKind.DELETE_LATEST),
        ("IntentRequest", "AMAZON.HelpIntent", IntentKind.HELP),
        ("IntentRequest", "AMAZON.StopIntent", IntentKind.CANCEL),
        ("IntentRequest", "SomethingElseIntent", IntentKind.FALLBACK),
        ("CanFulfillIntentRequest", None, IntentKind.FALLBACK),
    ],
)
def test_intent_kind_mapping(request_type, intent, kind):
    assert IntentKind.from_envelope(request_type, intent) is kind


# =============================================================================
# QUERY LATEST
# =============================================================================

def test_query_latest_reads_back_everything(fake_store, run):
    asyncio.run(fake_store.insert_reading(10, 20, 1, 1))

    response = run(intent="GetCharacterIntent")

    for text in ("Luffy", "East Blue", "10", "20"):
        assert text in response.speech
    assert response.end_session is True


def test_query_latest_with_no_readings(run):
    response = run(intent="GetCharacterIntent")
    assert response.speech == "I couldn't find any scans yet."


# =============================================================================
# SAVE NEW
# =============================================================================

def test_save_new_inserts_resolved_ids(fake_store, run):
    response = run(intent="SaveScanIntent", IslandName="East Blue", CharacterName="Luffy")

    assert fake_store.calls["insert_reading"] == [(0.0, 0.0, 1, 1)]
    assert "Luffy" in response.speech
    assert "East Blue" in response.speech


def test_save_new_uses_spoken_numbers(fake_store, run):
    run(
        intent="SaveScanIntent",
        IslandName="blue",
        CharacterName="luffy",
        UltrasonicValue="12",
        LidarValue="30.5",
    )

    assert fake_store.calls["insert_reading"] == [(12.0, 30.5, 1, 1)]


def test_save_new_with_unknown_character_is_ambiguous(fake_store, run):
    response = run(intent="SaveScanIntent", IslandName="East Blue", CharacterName="Blackbeard")

    assert fake_store.call_count("insert_reading") == 0
    assert "character" in response.speech
    assert response.end_session is False


def test_save_new_with_missing_slots_is_ambiguous(fake_store, run):
    response = run(intent="SaveScanIntent")

    assert fake_store.call_count("insert_reading") == 0
    assert "island" in response.speech


def test_save_new_with_bad_number_is_invalid_input(fake_store, run):
    response = run(
        intent="SaveScanIntent",
        IslandName="East Blue",
        CharacterName="Luffy",
        UltrasonicValue="?",
    )

    assert fake_store.call_count("insert_reading") == 0
    assert "ultrasonic value" in response.speech


# =============================================================================
# UPDATE LATEST
# =============================================================================

def test_update_with_unresolvable_island_never_updates(fake_store, run):
    asyncio.run(fake_store.insert_reading(10, 20, 1, 1))

    response = run(intent="UpdateScanIntent", NewIslandName="Atlantis", NewCharacterName="Luffy")

    assert fake_store.call_count("update_reading") == 0
    assert "island" in response.speech
    assert response.end_session is False


def test_update_latest_targets_highest_id(fake_store, run):
    asyncio.run(fake_store.insert_reading(1, 1, 1, 1))
    asyncio.run(fake_store.insert_reading(2, 2, 1, 1))

    response = run(intent="UpdateScanIntent", NewIslandName="east blue", NewCharacterName="luffy")

    assert fake_store.calls["update_reading"] == [(2, 1, 1)]
    assert response.speech == "Updated your latest scan to Luffy on East Blue."


def test_update_accepts_plain_slot_names(fake_store, run):
    asyncio.run(fake_store.insert_reading(1, 1, 1, 1))

    run(intent="UpdateScanIntent", IslandName="East Blue", CharacterName="Luffy")

    assert fake_store.call_count("update_reading") == 1


def test_update_with_no_readings_is_not_found(fake_store, run):
    response = run(intent="UpdateScanIntent", NewIslandName="East Blue", NewCharacterName="Luffy")

    assert fake_store.call_count("update_reading") == 0
    assert response.speech == "There are no scans to update."


# =============================================================================
# DELETE LATEST
# =============================================================================

def test_delete_with_no_readings_is_not_found(fake_store, run):
    response = run(intent="DeleteScanIntent")

    assert fake_store.call_count("delete_reading") == 0
    assert response.speech == "There are no scans to delete."


def test_delete_removes_latest(fake_store, run):
    asyncio.run(fake_store.insert_reading(1, 1, 1, 1))
    asyncio.run(fake_store.insert_reading(2, 2, 1, 1))

    response = run(intent="DeleteScanIntent")

    assert fake_store.calls["delete_reading"] == [(2,)]
    assert list(fake_store.readings) == [1]
    assert response.speech == "Deleted your latest scan."


# =============================================================================
# FIXED REPLIES AND FAILURES
# =============================================================================

def test_launch_keeps_session_open(fake_store, run):
    response = run("LaunchRequest")

    assert response.end_session is False
    assert response.reprompt
    assert not fake_store.calls


def test_session_ended_says_nothing(run):
    response = run("SessionEndedRequest")

    assert response.speech == ""
    assert "outputSpeech" not in response.to_envelope()["response"]


def test_stop_says_goodbye(run):
    assert run(intent="AMAZON.StopIntent").speech == "Goodbye!"


def test_unknown_intent_gets_fallback(run):
    response = run(intent="OrderPizzaIntent")

    assert "didn't get that" in response.speech
    assert response.end_session is False


def test_storage_failure_becomes_apology(fake_store, run):
    fake_store.fail = True

    response = run(intent="DeleteScanIntent")

    assert response.speech == "Sorry, something went wrong. Please try again later."
    assert fake_store.call_count("delete_reading") == 0


def test_unexpected_failure_becomes_apology(fake_store, run, monkeypatch):
    async def broken():
        raise RuntimeError("row mapping blew up")

    monkeypatch.setattr(fake_store, "get_latest_reading", broken)

    response = run(intent="GetCharacterIntent")

    assert response.speech == "Sorry, something went wrong. Please try again later."
    assert response.end_session is True
