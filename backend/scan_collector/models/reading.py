"""
Reading Models
==============
Pydantic models for scan readings and the reference data they point at.

This module defines the data structures shared by the REST API and the
voice skill:
- Request models: What the sensor device / frontend sends to the backend
- Response models: What the backend returns
- Domain models: Readings and named entities (islands, characters)

A READING:
    The device measures a distance twice (ultrasonic + LiDAR) and tags the
    sample with the island and the character it was scanned for.

Author: Scan Data Collector Team
"""

from pydantic import BaseModel, Field


# =============================================================================
# DOMAIN MODELS
# =============================================================================

class NamedEntity(BaseModel):
    """
    An island or a character.

    Reference data - we never change these, we only look them up.
    """
    id: int = Field(..., description="Identifier in the store")
    name: str = Field(..., description="Display name (e.g. 'East Blue', 'Luffy')")


class Reading(BaseModel):
    """
    A single stored scan, joined with its island and character names.

    The reading with the highest reading_id is the "latest" one. That's the
    only ordering rule we use.
    """
    reading_id: int = Field(..., description="Identifier assigned by the store")
    ultrasonic_value: float = Field(..., description="Ultrasonic distance (cm)")
    lidar_value: float = Field(..., description="LiDAR distance (cm)")
    island_id: int = Field(..., description="Island reference")
    character_id: int = Field(..., description="Character reference")
    island_name: str = Field(..., description="Island display name")
    character_name: str = Field(..., description="Character display name")


# =============================================================================
# REQUEST MODELS - What the device / frontend sends to the backend
# =============================================================================

class AddReadingRequest(BaseModel):
    """
    Request body for saving a new reading.

    Sensor values must be real, finite JSON numbers and ids JSON integers.
    "abc", "10", true, NaN and Infinity are all rejected before we touch
    the database.

    Example Request:
        POST /addReading
        {
            "ultrasonic_value": 10.5,
            "lidar_value": 20.1,
            "island_id": 1,
            "character_id": 1
        }
    """
    ultrasonic_value: float = Field(
        ...,
        description="Ultrasonic distance in centimeters",
        allow_inf_nan=False,
        strict=True,
        examples=[10.5],
    )
    lidar_value: float = Field(
        ...,
        description="LiDAR distance in centimeters",
        allow_inf_nan=False,
        strict=True,
        examples=[20.1],
    )
    island_id: int = Field(..., gt=0, strict=True, description="Island identifier")
    character_id: int = Field(..., gt=0, strict=True, description="Character identifier")


class UpdateReadingRequest(BaseModel):
    """
    Request body for re-tagging a reading.

    Only the island and character can change. Sensor values are what the
    device measured, so they stay as they are.
    """
    island_id: int = Field(..., gt=0, strict=True, description="New island identifier")
    character_id: int = Field(..., gt=0, strict=True, description="New character identifier")


# =============================================================================
# RESPONSE MODELS - What backend returns
# =============================================================================

class ReadingListResponse(BaseModel):
    """Response containing a list of readings (newest first)."""
    readings: list[Reading] = Field(..., description="List of readings")
    total: int = Field(..., description="Total count of readings")


class AddReadingResponse(BaseModel):
    """Returned by POST /addReading."""
    message: str = Field(..., description="Status message")
    reading_id: int = Field(..., description="Identifier of the new reading")


class MutationResponse(BaseModel):
    """Returned by update/delete endpoints."""
    message: str = Field(..., description="Status message")
    reading_id: int = Field(..., description="Identifier of the affected reading")
    affected: int = Field(..., description="Number of rows changed")
