"""
Business logic for points of interest.

POIs are listed alphabetically by name.  Creation requires a name and
numeric ``lng``/``lat``; ``address`` defaults to an empty string and
``tags`` to an empty list.
"""

from travel_map_api.app.schemas.poi import PoiCreate, PoiUpdate
from travel_map_api.app.services.collection_service import CollectionService


class PoiService(CollectionService):
    """Service for managing points of interest."""

    collection = "pois"
    create_schema = PoiCreate
    update_schema = PoiUpdate
    audit_prefix = "poi"
    sort_field = "name"
