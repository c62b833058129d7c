"""Business logic for attractions, listed alphabetically by name."""

from travel_map_api.app.schemas.attraction import AttractionCreate, AttractionUpdate
from travel_map_api.app.services.collection_service import CollectionService


class AttractionService(CollectionService):
    collection = "attractions"
    create_schema = AttractionCreate
    update_schema = AttractionUpdate
    audit_prefix = "attraction"
    sort_field = "name"
