"""
Pydantic models for attractions.

Attractions are like points of interest with a description, but only
the name is mandatory.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, StrictStr


class AttractionCreate(BaseModel):
    """Schema for creating an attraction."""

    name: StrictStr = Field(..., min_length=1, examples=["Old Lighthouse"])
    lng: Any = None
    lat: Any = None
    address: Any = ""
    tags: Any = Field(default_factory=list)
    desc: Any = ""


class AttractionUpdate(BaseModel):
    """Schema for patching an attraction; only sent keys are applied."""

    name: Optional[StrictStr] = None
    lng: Any = None
    lat: Any = None
    address: Optional[str] = None
    tags: Optional[List[Any]] = None
    desc: Optional[str] = None
