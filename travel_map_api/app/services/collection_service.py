"""
Generic CRUD over one list-shaped collection.

``CollectionService`` implements list/create/update/delete for a
collection of documents identified by an ``id`` field.  Concrete
services declare which collection they own, the schemas used to
validate create and update payloads, the prefix of their audit entry
types and how listings are ordered.

Each mutating call performs one full read-modify-write cycle against
the document store and then appends an audit entry.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from travel_map_api.app.core.exceptions import InvalidPayloadError, NotFoundError
from travel_map_api.app.core.store import load_collection, new_id, save_collection, utc_now_iso
from travel_map_api.app.services.audit_service import AuditService

logger = logging.getLogger(__name__)


def _has_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(item) for item in value.values())
    if isinstance(value, list):
        return any(_has_non_finite(item) for item in value)
    return False


def validate_payload(schema: Type[BaseModel], payload: Any, message: Optional[str] = None) -> BaseModel:
    """Validate a raw request body against ``schema``.

    Anything that is not a mapping, holds ``NaN`` or an infinity
    anywhere, or fails the schema, raises ``InvalidPayloadError``
    carrying ``message`` (or the default one).
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict) or _has_non_finite(payload):
        raise InvalidPayloadError(message)
    try:
        return schema.model_validate(payload)
    except SchemaValidationError as exc:
        logger.info("Rejected %s payload: %s", schema.__name__, exc.errors(include_url=False))
        raise InvalidPayloadError(message) from exc


class CollectionService:
    """Base class for services over a collection of id-keyed documents."""

    collection: str = ""
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    audit_prefix: str = ""
    # Field used to order listings and its direction.
    sort_field: str = "name"
    sort_descending: bool = False
    # Whether created documents carry a ``createdAt`` timestamp.
    stamp_created_at: bool = False

    @classmethod
    def _sort_key(cls, document: Dict[str, Any]) -> str:
        value = document.get(cls.sort_field) if isinstance(document, dict) else None
        return value if isinstance(value, str) else ""

    @classmethod
    async def list_items(cls) -> List[Dict[str, Any]]:
        """Return every document in the collection, ordered for display.

        Ordering is applied to the returned copy only; the stored
        sequence keeps insertion order.
        """
        return sorted(load_collection(cls.collection), key=cls._sort_key, reverse=cls.sort_descending)

    @classmethod
    def build_document(cls, data: BaseModel) -> Dict[str, Any]:
        """Turn a validated create payload into a new document."""
        document = {"id": new_id(), **data.model_dump()}
        if cls.stamp_created_at:
            document["createdAt"] = utc_now_iso()
        return document

    @classmethod
    async def create_item(cls, payload: Any) -> Dict[str, Any]:
        """Validate ``payload``, append the new document and persist the collection."""
        data = validate_payload(cls.create_schema, payload)
        documents = load_collection(cls.collection)
        document = cls.build_document(data)
        documents.append(document)
        save_collection(cls.collection, documents)
        logger.info("Created %s %s", cls.audit_prefix, document["id"])
        await AuditService.log(
            f"{cls.audit_prefix}_create", {"id": document["id"], "name": document.get("name")}
        )
        return document

    @classmethod
    async def update_item(cls, item_id: str, payload: Any) -> Dict[str, Any]:
        """Patch the document with ``item_id`` using only the keys sent.

        Keys absent from ``payload`` keep their stored values and the
        ``id`` itself can never be changed.  Raises ``NotFoundError``
        if no document matches.
        """
        documents = load_collection(cls.collection)
        index = cls._index_of(documents, item_id)
        if index is None:
            raise NotFoundError()
        data = validate_payload(cls.update_schema, payload)
        updated = {**documents[index], **data.model_dump(exclude_unset=True)}
        documents[index] = updated
        save_collection(cls.collection, documents)
        logger.info("Updated %s %s", cls.audit_prefix, item_id)
        await AuditService.log(f"{cls.audit_prefix}_update", {"id": item_id})
        return updated

    @classmethod
    async def delete_item(cls, item_id: str) -> None:
        """Remove the document with ``item_id`` or raise ``NotFoundError``."""
        documents = load_collection(cls.collection)
        remaining = [doc for doc in documents if not cls._matches(doc, item_id)]
        if len(remaining) == len(documents):
            raise NotFoundError()
        save_collection(cls.collection, remaining)
        logger.info("Deleted %s %s", cls.audit_prefix, item_id)
        await AuditService.log(f"{cls.audit_prefix}_delete", {"id": item_id})

    @staticmethod
    def _matches(document: Any, item_id: str) -> bool:
        return isinstance(document, dict) and document.get("id") == item_id

    @classmethod
    def _index_of(cls, documents: List[Dict[str, Any]], item_id: str) -> Optional[int]:
        for index, document in enumerate(documents):
            if cls._matches(document, item_id):
                return index
        return None
