"""
Error types raised by the store and the service layer.

Each error carries the user-facing ``message`` and the HTTP status it
maps to.  ``main.create_app`` registers a handler that renders any
``RecordsError`` as ``{"message": ...}`` with that status.
"""


class RecordsError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidPayloadError(RecordsError):
    """A required field is missing or has the wrong type."""

    status_code = 400
    default_message = "Invalid payload"


class NotFoundError(RecordsError):
    """No document in the collection carries the requested id."""

    status_code = 404
    default_message = "Not found"


class StorageWriteError(RecordsError):
    """A collection could not be written to disk."""

    status_code = 500
    default_message = "Storage write failed"

    def __init__(self, collection: str, reason: str) -> None:
        super().__init__()
        self.collection = collection
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.message}: {self.collection} ({self.reason})"
