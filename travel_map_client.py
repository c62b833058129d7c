"""Travel map records API client.

This module defines a small client wrapper around the records API
served by ``travel_map_api``.  It is used by scripts that feed the map,
for example a hydrophone bridge pushing the latest sensor reading, and
by operators who prefer a Python shell to the admin page.  The client
uses the ``requests`` library internally to make HTTP calls.

The client exposes high-level methods for each collection:

* :meth:`list_pois`, :meth:`create_poi`, :meth:`update_poi`, :meth:`delete_poi`
  and the same four for routes and attractions.
* :meth:`latest_hydrophone` and :meth:`push_hydrophone` for the current
  hydrophone reading.
* :meth:`list_history`, :meth:`save_history`, :meth:`delete_history` and
  :meth:`send_history` for saved readings.
* :meth:`stats` and :meth:`logs` for request counters and the audit log.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dictionary
with keys ``status_code`` and ``message``, the latter taken from the
server's ``{"message": ...}`` body when available.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Optional[Dict[str, Any]]


class TravelMapAPI:
    """Client for interacting with the travel map records API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3000``.
                The ``/api`` prefix is added by the client.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Error]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path below ``/api`` (e.g. ``/pois``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  ``data`` is the parsed JSON
            response, or ``None`` for empty responses such as 204.
        """
        url = f"{self.base_url}/api{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str) -> Tuple[List[Dict[str, Any]], Error]:
        data, error = self._request("GET", path)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def _delete(self, path: str) -> Tuple[bool, Error]:
        _, error = self._request("DELETE", path)
        if error:
            return False, error
        return True, None

    # ------------------------------------------------------------------
    # Points of interest
    # ------------------------------------------------------------------
    def list_pois(self) -> Tuple[List[Dict[str, Any]], Error]:
        """Retrieve all POIs, ordered by name."""
        return self._list("/pois")

    def create_poi(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Create a POI.  ``payload`` needs ``name``, ``lng`` and ``lat``."""
        return self._request("POST", "/pois", json_body=payload)

    def update_poi(self, poi_id: str, changes: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Patch a POI with the given fields and return the stored result."""
        return self._request("PUT", f"/pois/{poi_id}", json_body=changes)

    def delete_poi(self, poi_id: str) -> Tuple[bool, Error]:
        return self._delete(f"/pois/{poi_id}")

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------
    def list_routes(self) -> Tuple[List[Dict[str, Any]], Error]:
        """Retrieve all routes, newest first."""
        return self._list("/routes")

    def create_route(self, name: str, coords: List[Any]) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("POST", "/routes", json_body={"name": name, "coords": coords})

    def update_route(self, route_id: str, changes: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("PUT", f"/routes/{route_id}", json_body=changes)

    def delete_route(self, route_id: str) -> Tuple[bool, Error]:
        return self._delete(f"/routes/{route_id}")

    # ------------------------------------------------------------------
    # Attractions
    # ------------------------------------------------------------------
    def list_attractions(self) -> Tuple[List[Dict[str, Any]], Error]:
        return self._list("/attractions")

    def create_attraction(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("POST", "/attractions", json_body=payload)

    def update_attraction(
        self, attraction_id: str, changes: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("PUT", f"/attractions/{attraction_id}", json_body=changes)

    def delete_attraction(self, attraction_id: str) -> Tuple[bool, Error]:
        return self._delete(f"/attractions/{attraction_id}")

    # ------------------------------------------------------------------
    # Hydrophone
    # ------------------------------------------------------------------
    def latest_hydrophone(self) -> Tuple[Dict[str, Any], Error]:
        """Return the current reading (``{}`` if none was pushed yet)."""
        data, error = self._request("GET", "/hydrophone/latest")
        if error:
            return {}, error
        return data or {}, None

    def push_hydrophone(self, reading: Dict[str, Any]) -> Tuple[bool, Error]:
        """Overwrite the current reading.

        Args:
            reading: Sensor values; ``longitude`` and ``latitude`` are
                required, the remaining fields are optional.
        Returns:
            A tuple ``(success, error)``.
        """
        data, error = self._request("POST", "/hydrophone/update", json_body=reading)
        if error:
            return False, error
        return bool(data and data.get("ok")), None

    def list_history(self) -> Tuple[List[Dict[str, Any]], Error]:
        """Retrieve saved readings, most recently saved first."""
        return self._list("/hydro/history")

    def save_history(self, reading: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Save a reading for later without applying it."""
        return self._request("POST", "/hydro/history", json_body=reading)

    def delete_history(self, record_id: str) -> Tuple[bool, Error]:
        return self._delete(f"/hydro/history/{record_id}")

    def send_history(self, record_id: str) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Apply a saved reading to the current one.

        Returns:
            A tuple ``(applied, error)`` where ``applied`` is the new
            current reading.
        """
        data, error = self._request("POST", f"/hydro/history/{record_id}/send")
        if error:
            return None, error
        return (data or {}).get("applied"), None

    # ------------------------------------------------------------------
    # Statistics and audit log
    # ------------------------------------------------------------------
    def stats(self) -> Tuple[Dict[str, int], Error]:
        """Return request counts keyed by ``"<METHOD> <path>"``."""
        data, error = self._request("GET", "/stats")
        if error:
            return {}, error
        return data or {}, None

    def logs(self) -> Tuple[List[Dict[str, Any]], Error]:
        """Return the audit log, most recent entry first."""
        return self._list("/logs")
