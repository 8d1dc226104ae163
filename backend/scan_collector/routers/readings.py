"""
Readings API Router
===================

All the REST endpoints for readings and reference data.

The sensor device (and any dashboard) talks to these. The voice skill
doesn't - it goes through /alexa and the CommandDispatcher.

ALL ENDPOINTS:
-------------
POST   /addReading             - Save a new reading
GET    /readings               - List all readings (newest first)
GET    /latestReading          - The most recent reading
PUT    /updateReading/{id}     - Change a reading's island/character
DELETE /deleteReading/{id}     - Delete a reading
GET    /islands                - List islands
GET    /characters             - List characters

BAD INPUT:
---------
Bodies are checked by pydantic before we get here. If ultrasonic_value is
"abc" the request is rejected with 400 and the database is never called.

Author: Scan Data Collector Team
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from scan_collector.models import (
    AddReadingRequest,
    AddReadingResponse,
    MutationResponse,
    NamedEntity,
    Reading,
    ReadingListResponse,
    UpdateReadingRequest,
)
from scan_collector.services.reading_store import ConstraintError, StorageError
from scan_collector.utils.validation import validate_record_id

logger = logging.getLogger(__name__)

router = APIRouter(tags=["readings"])


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================

_reading_store = None  # This gets set when the app starts


def set_reading_store(store):
    """Called when the app starts to give us the reading store."""
    global _reading_store
    _reading_store = store


def get_reading_store():
    """Get the reading store for use in endpoints."""
    if _reading_store is None:
        raise HTTPException(status_code=500, detail="Server not fully started yet")
    return _reading_store


def _storage_failure(action: str, error: StorageError) -> HTTPException:
    logger.error(f"[api] {action} failed: {error}")
    return HTTPException(status_code=500, detail=f"Failed to {action}. Please try again later.")


def _check_id(reading_id: int):
    if not validate_record_id(reading_id):
        raise HTTPException(status_code=400, detail="Reading id must be a positive integer")


# =============================================================================
# READINGS
# =============================================================================

@router.post("/addReading", response_model=AddReadingResponse, status_code=201)
async def add_reading(request: AddReadingRequest, store=Depends(get_reading_store)):
    """
    Save a new reading from the sensor device.

    Send us:
    - ultrasonic_value: distance from the ultrasonic sensor (cm)
    - lidar_value: distance from the LiDAR sensor (cm)
    - island_id / character_id: which island and character this scan is for
    """
    try:
        new_id = await store.insert_reading(
            request.ultrasonic_value,
            request.lidar_value,
            request.island_id,
            request.character_id,
        )
    except ConstraintError:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown island_id {request.island_id} or character_id {request.character_id}",
        )
    except StorageError as e:
        raise _storage_failure("save reading", e)

    return AddReadingResponse(message="Reading saved", reading_id=new_id)


@router.get("/readings", response_model=ReadingListResponse)
async def get_all_readings(store=Depends(get_reading_store)):
    """Every reading, newest first."""
    try:
        readings = await store.get_all_readings()
    except StorageError as e:
        raise _storage_failure("load readings", e)
    return ReadingListResponse(readings=readings, total=len(readings))


@router.get("/latestReading", response_model=Reading)
async def get_latest_reading(store=Depends(get_reading_store)):
    """The reading with the highest id. 404 if there aren't any yet."""
    try:
        latest = await store.get_latest_reading()
    except StorageError as e:
        raise _storage_failure("load latest reading", e)
    if latest is None:
        raise HTTPException(status_code=404, detail="No readings yet")
    return latest


@router.put("/updateReading/{reading_id}", response_model=MutationResponse)
async def update_reading(
    reading_id: int,
    request: UpdateReadingRequest,
    store=Depends(get_reading_store),
):
    """Change which island and character a reading belongs to."""
    _check_id(reading_id)
    try:
        affected = await store.update_reading(reading_id, request.island_id, request.character_id)
    except ConstraintError:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown island_id {request.island_id} or character_id {request.character_id}",
        )
    except StorageError as e:
        raise _storage_failure("update reading", e)

    if not affected:
        raise HTTPException(status_code=404, detail=f"Reading {reading_id} not found")
    return MutationResponse(message="Reading updated", reading_id=reading_id, affected=affected)


@router.delete("/deleteReading/{reading_id}", response_model=MutationResponse)
async def delete_reading(reading_id: int, store=Depends(get_reading_store)):
    """Delete a reading for good."""
    _check_id(reading_id)
    try:
        affected = await store.delete_reading(reading_id)
    except StorageError as e:
        raise _storage_failure("delete reading", e)

    if not affected:
        raise HTTPException(status_code=404, detail=f"Reading {reading_id} not found")
    return MutationResponse(message="Reading deleted", reading_id=reading_id, affected=affected)


# =============================================================================
# REFERENCE DATA
# =============================================================================

@router.get("/islands", response_model=list[NamedEntity])
async def get_islands(store=Depends(get_reading_store)):
    """All islands."""
    try:
        return await store.list_islands()
    except StorageError as e:
        raise _storage_failure("load islands", e)


@router.get("/characters", response_model=list[NamedEntity])
async def get_characters(store=Depends(get_reading_store)):
    """All characters."""
    try:
        return await store.list_characters()
    except StorageError as e:
        raise _storage_failure("load characters", e)
