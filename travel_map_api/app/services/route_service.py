"""
Business logic for routes.

Routes are stamped with ``createdAt`` on creation and listed newest
first.
"""

from travel_map_api.app.schemas.route import RouteCreate, RouteUpdate
from travel_map_api.app.services.collection_service import CollectionService


class RouteService(CollectionService):
    """Service for managing drawn routes."""

    collection = "routes"
    create_schema = RouteCreate
    update_schema = RouteUpdate
    audit_prefix = "route"
    sort_field = "createdAt"
    sort_descending = True
    stamp_created_at = True
