"""
Top-level API router.

Aggregates the collection routers under a unified prefix.  The
application mounts this router at ``/api``.
"""

from fastapi import APIRouter

from .endpoints import attractions, audit, hydrophone, pois, routes, statistics

router = APIRouter()

router.include_router(routes.router, prefix="/routes", tags=["routes"])
router.include_router(pois.router, prefix="/pois", tags=["pois"])
router.include_router(attractions.router, prefix="/attractions", tags=["attractions"])
# Hydrophone paths span two prefixes (/hydrophone and /hydro/history),
# so the router declares full paths itself.
router.include_router(hydrophone.router, tags=["hydrophone"])
router.include_router(statistics.router, tags=["statistics"])
router.include_router(audit.router, tags=["audit"])
