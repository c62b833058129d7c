"""
Service layer for hydrophone readings.

Two collections are involved.  ``hydrophone`` holds a single snapshot,
the reading currently shown on the map, which is overwritten as a
whole by every update.  ``hydro_history`` is a list of saved readings
that an operator can later "send", i.e. apply to the snapshot.

Validation is forgiving: only ``longitude`` and ``latitude`` must be
numbers.  Every other sensor field is normalised instead of rejected
(see ``normalize_reading``).

Sending touches both collections and is not atomic.  The snapshot is
written first and the history record's ``sentAt`` second, so a failure
in between leaves an applied snapshot whose source record still looks
unsent.  Both writes are keyed by the history record id and simply
overwrite, so retrying a send after such a failure is safe.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from travel_map_api.app.core.exceptions import NotFoundError
from travel_map_api.app.core.store import load_collection, new_id, save_collection, utc_now_iso
from travel_map_api.app.schemas.hydrophone import HydroHistoryCreate, HydrophoneReading
from travel_map_api.app.services.audit_service import AuditService
from travel_map_api.app.services.collection_service import validate_payload

logger = logging.getLogger(__name__)

SNAPSHOT_COLLECTION = "hydrophone"
HISTORY_COLLECTION = "hydro_history"

UNNAMED_RECORD = "Unnamed"
COORDINATES_REQUIRED = "Invalid payload: longitude/latitude must be numbers"

SENSOR_FIELDS = ("heading", "temperature", "humidity", "pressure", "salinity")


def _number_or_none(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return None


def normalize_reading(source: Dict[str, Any], timestamp: Optional[str] = None) -> Dict[str, Any]:
    """Build a snapshot document from the sensor fields of ``source``.

    Numeric sensor fields that are missing or not numbers become
    ``None``, ``shipDetected`` is coerced to a boolean, an empty or
    non-string ``shipType`` becomes ``""`` and a missing ``timestamp``
    is replaced by the current time.  An explicit ``timestamp`` argument
    always wins over the one in ``source``.
    """
    ship_detected = source.get("shipDetected")
    ship_type = source.get("shipType")
    if timestamp is None:
        timestamp = source.get("timestamp")
        if not isinstance(timestamp, str) or not timestamp:
            timestamp = utc_now_iso()
    reading: Dict[str, Any] = {
        "longitude": source.get("longitude"),
        "latitude": source.get("latitude"),
    }
    for field in SENSOR_FIELDS:
        reading[field] = _number_or_none(source.get(field))
    reading["shipDetected"] = ship_detected if isinstance(ship_detected, bool) else bool(ship_detected)
    reading["shipType"] = ship_type if isinstance(ship_type, str) else ""
    reading["timestamp"] = timestamp
    return reading


class HydrophoneService:
    """Service for the hydrophone snapshot and its saved history."""

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------
    @classmethod
    async def latest(cls) -> Dict[str, Any]:
        """Return the current snapshot, or ``{}`` if none was ever written."""
        return load_collection(SNAPSHOT_COLLECTION)

    @classmethod
    async def update(cls, payload: Any) -> Dict[str, Any]:
        """Replace the snapshot with a validated, normalised reading."""
        data = validate_payload(HydrophoneReading, payload, COORDINATES_REQUIRED)
        snapshot = normalize_reading(data.model_dump())
        save_collection(SNAPSHOT_COLLECTION, snapshot)
        logger.info("Hydrophone snapshot updated at %s", snapshot["timestamp"])
        await AuditService.log("hydrophone_update", {"ts": snapshot["timestamp"]})
        return snapshot

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    @classmethod
    async def list_history(cls) -> List[Dict[str, Any]]:
        """Return saved readings, most recently created first."""

        def created_at(record: Any) -> str:
            value = record.get("createdAt") if isinstance(record, dict) else None
            return value if isinstance(value, str) else ""

        return sorted(load_collection(HISTORY_COLLECTION), key=created_at, reverse=True)

    @classmethod
    async def create_history(cls, payload: Any) -> Dict[str, Any]:
        """Save a reading to the history without touching the snapshot."""
        data = validate_payload(HydroHistoryCreate, payload, COORDINATES_REQUIRED)
        name = data.name if isinstance(data.name, str) and data.name else UNNAMED_RECORD
        record = {"id": new_id(), "name": name}
        record.update(normalize_reading(data.model_dump()))
        record["createdAt"] = utc_now_iso()
        record["sentAt"] = None
        history = load_collection(HISTORY_COLLECTION)
        history.append(record)
        save_collection(HISTORY_COLLECTION, history)
        logger.info("Saved hydrophone reading %s (%s)", record["id"], name)
        await AuditService.log("hydro_history_create", {"id": record["id"], "name": name})
        return record

    @classmethod
    async def delete_history(cls, record_id: str) -> None:
        """Remove a saved reading or raise ``NotFoundError``."""
        history = load_collection(HISTORY_COLLECTION)
        remaining = [r for r in history if not (isinstance(r, dict) and r.get("id") == record_id)]
        if len(remaining) == len(history):
            raise NotFoundError()
        save_collection(HISTORY_COLLECTION, remaining)
        logger.info("Deleted hydrophone reading %s", record_id)
        await AuditService.log("hydro_history_delete", {"id": record_id})

    @classmethod
    async def send_history(cls, record_id: str) -> Dict[str, Any]:
        """Apply a saved reading to the snapshot and mark it as sent.

        The snapshot is re-stamped with the time of application, and
        the same timestamp is recorded as the history record's
        ``sentAt``.  Returns ``{"ok": True, "applied": <snapshot>}``.
        """
        history = load_collection(HISTORY_COLLECTION)
        record = next(
            (r for r in history if isinstance(r, dict) and r.get("id") == record_id),
            None,
        )
        if record is None:
            raise NotFoundError()

        # Phase one: overwrite the snapshot.
        snapshot = normalize_reading(record, timestamp=utc_now_iso())
        save_collection(SNAPSHOT_COLLECTION, snapshot)

        # Phase two: mark the source record.
        record["sentAt"] = snapshot["timestamp"]
        save_collection(HISTORY_COLLECTION, history)

        logger.info("Sent hydrophone reading %s at %s", record_id, snapshot["timestamp"])
        await AuditService.log("hydro_history_send", {"id": record_id, "ts": snapshot["timestamp"]})
        return {"ok": True, "applied": snapshot}
