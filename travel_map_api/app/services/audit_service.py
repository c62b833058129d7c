"""
Audit service for recording and listing performed operations.

Entries are kept in the ``logs`` collection, newest first, and the
collection is trimmed to ``settings.audit_log_limit`` entries on every
append so the oldest entries are evicted first.  The log is
independent of the collections it describes: deleting a document
leaves its history in place.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from travel_map_api.app.core.config import settings
from travel_map_api.app.core.store import load_collection, new_id, save_collection, utc_now_iso

logger = logging.getLogger(__name__)

LOGS_COLLECTION = "logs"


class AuditService:
    """Service class for writing and retrieving audit entries."""

    @classmethod
    async def log(cls, entry_type: str, detail: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Prepend a new entry and persist the trimmed log.

        Parameters
        ----------
        entry_type : str
            Operation identifier such as ``poi_create`` or
            ``hydro_history_send``.
        detail : Optional[dict]
            Small mapping describing the affected document.
        """
        entry = {"id": new_id(), "type": entry_type, "detail": detail or {}, "ts": utc_now_iso()}
        logs = load_collection(LOGS_COLLECTION)
        logs.insert(0, entry)
        del logs[max(settings.audit_log_limit, 0):]
        save_collection(LOGS_COLLECTION, logs)
        logger.debug("Audit %s %s", entry_type, entry["detail"])
        return entry

    @classmethod
    async def list_logs(cls) -> List[Dict[str, Any]]:
        """Return every retained entry, most recent first."""
        return load_collection(LOGS_COLLECTION)
