"""
Pydantic models for routes.

A route is a named, ordered list of coordinate pairs.  At least one
coordinate is required when a route is created.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, StrictStr


class RouteCreate(BaseModel):
    """Schema for creating a route."""

    name: StrictStr = Field(..., min_length=1, examples=["Loop"])
    coords: List[Any] = Field(..., min_length=1, examples=[[[120.1, 30.2], [120.2, 30.3]]])


class RouteUpdate(BaseModel):
    """Schema for patching a route; only sent keys are applied."""

    name: Optional[StrictStr] = None
    coords: Optional[List[Any]] = None
