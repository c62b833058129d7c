"""
Hydrophone endpoints.

``/hydrophone`` exposes the single current reading; ``/hydro/history``
manages saved readings and lets an operator apply one of them to the
current reading via ``/hydro/history/{id}/send``.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, status

from travel_map_api.app.services.hydrophone_service import HydrophoneService

router = APIRouter()


@router.get("/hydrophone/latest", response_model=Dict[str, Any])
async def latest_reading() -> Dict[str, Any]:
    """Return the current reading, ``{}`` before the first update."""
    return await HydrophoneService.latest()


@router.post("/hydrophone/update", status_code=status.HTTP_201_CREATED)
async def update_reading(payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
    """Overwrite the current reading.

    ``longitude`` and ``latitude`` must be numbers; other fields are
    normalised rather than rejected.
    """
    await HydrophoneService.update(payload)
    return {"ok": True}


@router.get("/hydro/history", response_model=List[Dict[str, Any]])
async def list_history() -> List[Dict[str, Any]]:
    return await HydrophoneService.list_history()


@router.post("/hydro/history", status_code=status.HTTP_201_CREATED)
async def save_history(payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
    """Save a reading for later use without changing the current one."""
    return await HydrophoneService.create_history(payload)


@router.delete("/hydro/history/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_history(record_id: str) -> None:
    await HydrophoneService.delete_history(record_id)
    return None


@router.post("/hydro/history/{record_id}/send")
async def send_history(record_id: str) -> Dict[str, Any]:
    """Apply a saved reading to the current one and stamp its ``sentAt``."""
    return await HydrophoneService.send_history(record_id)
