"""
Audit log endpoint.

Returns the retained operation log verbatim, most recent entry first.
There is no filtering or pagination; the log is bounded in size.
"""

from typing import Any, Dict, List

from fastapi import APIRouter

from travel_map_api.app.services.audit_service import AuditService

router = APIRouter()


@router.get("/logs", response_model=List[Dict[str, Any]])
async def list_logs() -> List[Dict[str, Any]]:
    return await AuditService.list_logs()
