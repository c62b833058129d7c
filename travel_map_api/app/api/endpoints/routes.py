"""
Route endpoints.

Routes are listed newest first.  Creating a route without a non-empty
``coords`` list is rejected with 400.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, status

from travel_map_api.app.services.route_service import RouteService

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_routes() -> List[Dict[str, Any]]:
    return await RouteService.list_items()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_route(payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
    """Create a route from a name and an ordered list of coordinates."""
    return await RouteService.create_item(payload)


@router.put("/{route_id}")
async def update_route(route_id: str, payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
    """Patch a route's ``name`` and/or ``coords``."""
    return await RouteService.update_item(route_id, payload)


@router.delete("/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_route(route_id: str) -> None:
    await RouteService.delete_item(route_id)
    return None
