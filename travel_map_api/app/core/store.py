"""
File-backed document store.

Every collection lives in its own JSON file under ``settings.data_dir``
and is always read and written as a whole: callers load the full
collection, change it in memory and save the full collection back.
This module provides those two primitives (``load_collection`` and
``save_collection``), an initialiser run on application start
(``init_store``) and the id/timestamp helpers used by the services.

There is no locking or versioning.  Two requests that interleave their
read-modify-write cycles on the same collection can lose an update:
whichever saves last wins.  The workload (a single operator, low
request rate) makes this acceptable.

A missing or unreadable file is not an error.  ``load_with_status``
returns the empty default for the collection together with a
``recovered`` flag, and a warning is logged so the corruption does not
go unnoticed.
"""

import json
import logging
import os
import tempfile
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Union

from .config import settings
from .exceptions import StorageWriteError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
Collection = Union[List[Document], Document]

# Collection name -> shape of its persisted value.
COLLECTIONS: Dict[str, type] = {
    "pois": list,
    "routes": list,
    "attractions": list,
    "hydrophone": dict,
    "hydro_history": list,
    "logs": list,
    "stats": dict,
}


@dataclass
class LoadResult:
    """Outcome of reading a collection from disk.

    ``recovered`` is true when the file was missing, unreadable or held
    a value of the wrong shape and ``documents`` is the empty default,
    and also when entries that are not documents were dropped from a
    list-shaped collection.
    """

    documents: Collection
    recovered: bool = False


def get_data_dir() -> Path:
    """Compute the directory holding the collection files.

    If ``settings.data_dir`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    data_dir = settings.data_dir
    if os.path.isabs(data_dir):
        return Path(data_dir)
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return (base_dir / data_dir).resolve()


def collection_path(name: str) -> Path:
    _shape(name)
    return get_data_dir() / f"{name}.json"


def _shape(name: str) -> type:
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise KeyError(f"Unknown collection: {name}") from None


def _reject_constant(constant: str) -> Any:
    raise ValueError(f"{constant} is not valid JSON")


def load_with_status(name: str) -> LoadResult:
    """Read a whole collection, substituting the empty default on failure."""
    shape = _shape(name)
    path = collection_path(name)
    if not path.exists():
        return LoadResult(documents=shape(), recovered=True)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f, parse_constant=_reject_constant)
    except (OSError, ValueError) as exc:
        logger.warning("Collection %s is unreadable (%s); using empty default", name, exc)
        return LoadResult(documents=shape(), recovered=True)
    if not isinstance(data, shape):
        logger.warning(
            "Collection %s holds %s instead of %s; using empty default",
            name,
            type(data).__name__,
            shape.__name__,
        )
        return LoadResult(documents=shape(), recovered=True)
    if shape is list:
        documents = [doc for doc in data if isinstance(doc, dict)]
        if len(documents) != len(data):
            logger.warning(
                "Collection %s holds %d non-document entries; dropping them",
                name,
                len(data) - len(documents),
            )
            return LoadResult(documents=documents, recovered=True)
    return LoadResult(documents=data)


def load_collection(name: str) -> Collection:
    """Return the current contents of a collection."""
    return load_with_status(name).documents


def save_collection(name: str, documents: Collection) -> None:
    """Overwrite a collection on disk with ``documents``.

    The data is written to a temporary file in the same directory and
    moved over the target with ``os.replace`` so that readers never see
    a partially written file.  Any OS error is raised as
    ``StorageWriteError``.  ``NaN`` and infinities are not JSON, so
    documents holding them are refused with ``ValueError`` before
    anything is written.
    """
    shape = _shape(name)
    if not isinstance(documents, shape):
        raise TypeError(f"Collection {name} must be a {shape.__name__}")
    path = collection_path(name)
    payload = json.dumps(documents, ensure_ascii=False, indent=2, allow_nan=False)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        logger.error("Failed to write collection %s: %s", name, exc)
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise StorageWriteError(name, str(exc)) from exc


def init_store() -> None:
    """Create the data directory and seed missing collection files.

    Existing files are left untouched, including unreadable ones; they
    are healed the next time their collection is saved.
    """
    data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    for name, shape in COLLECTIONS.items():
        if not collection_path(name).exists():
            save_collection(name, shape())
    logger.info("Document store ready at %s", data_dir)


def new_id() -> str:
    """Return a fresh random document identifier."""
    return uuid.uuid4().hex


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. ``2024-05-01T08:30:00.123Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
