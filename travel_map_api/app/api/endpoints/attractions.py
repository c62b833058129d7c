"""Attraction endpoints: the same CRUD shape as POIs, but only ``name`` is required."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, status

from travel_map_api.app.services.attraction_service import AttractionService

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_attractions() -> List[Dict[str, Any]]:
    return await AttractionService.list_items()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_attraction(payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
    return await AttractionService.create_item(payload)


@router.put("/{attraction_id}")
async def update_attraction(
    attraction_id: str, payload: Optional[Dict[str, Any]] = Body(None)
) -> Dict[str, Any]:
    return await AttractionService.update_item(attraction_id, payload)


@router.delete("/{attraction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_attraction(attraction_id: str) -> None:
    await AttractionService.delete_item(attraction_id)
    return None
