"""
Pydantic models for hydrophone readings.

Only ``longitude`` and ``latitude`` are validated strictly.  The other
sensor fields are accepted with any value and normalised by
``HydrophoneService``: numbers are kept, anything else becomes
``None``, ``shipDetected`` is coerced to a boolean and empty strings
fall back to their defaults.
"""

from typing import Any

from pydantic import BaseModel, Field

from .common import Number


class HydrophoneReading(BaseModel):
    """Schema for a reading pushed to the current hydrophone snapshot."""

    longitude: Number = Field(..., examples=[122.05])
    latitude: Number = Field(..., examples=[29.87])
    heading: Any = None
    temperature: Any = None
    humidity: Any = None
    pressure: Any = None
    salinity: Any = None
    shipDetected: Any = False
    shipType: Any = ""
    timestamp: Any = None


class HydroHistoryCreate(HydrophoneReading):
    """Schema for saving a reading to the hydrophone history."""

    name: Any = ""
