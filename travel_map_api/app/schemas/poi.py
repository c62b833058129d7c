"""
Pydantic models for points of interest.

A POI is a named coordinate with an optional address and a list of
free-form tags.  ``name``, ``lng`` and ``lat`` are required on
creation; the remaining fields are stored as sent.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, StrictStr

from .common import Number


class PoiCreate(BaseModel):
    """Schema for creating a point of interest."""

    name: StrictStr = Field(..., min_length=1, examples=["Pier"])
    lng: Number = Field(..., examples=[120.1])
    lat: Number = Field(..., examples=[30.2])
    address: Any = ""
    tags: Any = Field(default_factory=list)


class PoiUpdate(BaseModel):
    """Schema for patching a point of interest.

    All fields are optional; only the keys present in the request are
    written to the stored document.
    """

    name: Optional[StrictStr] = None
    lng: Optional[Number] = None
    lat: Optional[Number] = None
    address: Optional[str] = None
    tags: Optional[List[Any]] = None
