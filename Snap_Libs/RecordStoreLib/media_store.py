"""
Media store contract and in-memory implementation.

Image records persist through a MediaStore: a keyed store of record
metadata (StoredRecord) plus a separate keyed store of encoded image blobs.
Every operation is async because real implementations do I/O.

Classes:
    MediaStore: Structural contract implemented by every store
    InMemoryMediaStore: Dict-backed store for tests and ephemeral use

Functions:
    get_default_store: Get the process-wide default store (singleton)
    set_default_store: Replace the process-wide default store
    reset_default_store: Drop the default store so the next call recreates it
"""

import logging
from typing import Dict, List, Optional, Protocol, Sequence

from Snap_Libs.constants import FIRST_STORE_ID
from Snap_Libs.errors import NotFoundError
from Snap_Libs.RecordStoreLib.stored_record import StoredRecord

logger = logging.getLogger(__name__)


class MediaStore(Protocol):
    """Contract for record and media persistence."""

    async def retrieve_record(self, record_id: int) -> StoredRecord: ...

    async def retrieve_media(self, media_id: int) -> bytes: ...

    async def store_media(self, media: bytes, media_id: Optional[int] = None) -> int: ...

    async def store_record(self, record: StoredRecord) -> int: ...

    async def delete_record(self, record_id: int, media_ids: Sequence[int]) -> None: ...

    async def all(self) -> List[StoredRecord]: ...


class InMemoryMediaStore:
    """
    MediaStore kept in process memory.

    Record and media ids are separate integer sequences starting at 1.
    Payloads are copied on the way in so callers cannot mutate stored blobs.
    """

    def __init__(self) -> None:
        self._records: Dict[int, StoredRecord] = {}
        self._media: Dict[int, bytes] = {}
        self._next_record_id = FIRST_STORE_ID
        self._next_media_id = FIRST_STORE_ID

    @property
    def record_count(self) -> int:
        return len(self._records)

    @property
    def media_count(self) -> int:
        return len(self._media)

    async def retrieve_record(self, record_id: int) -> StoredRecord:
        if record_id not in self._records:
            raise NotFoundError("record", record_id)
        return self._records[record_id]

    async def retrieve_media(self, media_id: int) -> bytes:
        if media_id not in self._media:
            raise NotFoundError("media", media_id)
        return self._media[media_id]

    async def store_media(self, media: bytes, media_id: Optional[int] = None) -> int:
        if not isinstance(media, (bytes, bytearray)):
            raise TypeError(f"media must be bytes, got {type(media)}")

        if media_id is None:
            media_id = self._next_media_id
            self._next_media_id += 1
        else:
            self._next_media_id = max(self._next_media_id, media_id + 1)

        self._media[media_id] = bytes(media)
        logger.debug(f"Stored media {media_id} ({len(media)} bytes)")
        return media_id

    async def store_record(self, record: StoredRecord) -> int:
        if record.id is None:
            record = record.with_id(self._next_record_id)
            self._next_record_id += 1
        else:
            self._next_record_id = max(self._next_record_id, record.id + 1)

        self._records[record.id] = record
        logger.debug(f"Stored record {record.id}")
        return record.id

    async def delete_record(self, record_id: int, media_ids: Sequence[int]) -> None:
        for media_id in media_ids:
            self._media.pop(media_id, None)
        self._records.pop(record_id, None)
        logger.debug(f"Deleted record {record_id} and media {list(media_ids)}")

    async def all(self) -> List[StoredRecord]:
        return [self._records[record_id] for record_id in sorted(self._records)]


# Global singleton store
_default_store: Optional[MediaStore] = None


def get_default_store() -> MediaStore:
    """
    Get the global default store (singleton).

    Creates an in-memory store on first call. Applications that need
    persistence install a FileMediaStore with ``set_default_store``.
    """
    global _default_store

    if _default_store is None:
        _default_store = InMemoryMediaStore()
        logger.info("Created default in-memory media store")

    return _default_store


def set_default_store(store: MediaStore) -> None:
    global _default_store
    _default_store = store
    logger.info(f"Default media store set to {type(store).__name__}")


def reset_default_store() -> None:
    global _default_store
    _default_store = None
