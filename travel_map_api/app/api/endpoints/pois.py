"""
Point of interest endpoints.

CRUD over the ``pois`` collection.  Validation and not-found errors
raised by ``PoiService`` are rendered by the application's exception
handlers as ``{"message": ...}`` with status 400 or 404.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, status

from travel_map_api.app.services.poi_service import PoiService

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_pois() -> List[Dict[str, Any]]:
    """Return all POIs ordered by name."""
    return await PoiService.list_items()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_poi(payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
    """Create a POI.  ``name``, ``lng`` and ``lat`` are required."""
    return await PoiService.create_item(payload)


@router.put("/{poi_id}")
async def update_poi(poi_id: str, payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
    """Patch a POI; fields missing from the body keep their values."""
    return await PoiService.update_item(poi_id, payload)


@router.delete("/{poi_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_poi(poi_id: str) -> None:
    await PoiService.delete_item(poi_id)
    return None
