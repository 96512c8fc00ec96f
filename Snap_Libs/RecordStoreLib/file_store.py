"""
Directory-backed media store for Snapshot.

Layout under the base directory:
- records/<id>.snaprec: one JSON document per record (camelCase wire form)
- media/<id>.snapmedia: one encoded image per blob

Blocking file I/O runs in a worker thread so the event loop stays free.
Filesystem failures are raised as StoreError; unknown ids as NotFoundError.

Classes:
    FileMediaStore: MediaStore implementation over a directory tree
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from Snap_Libs.constants import (
    FIRST_STORE_ID,
    MEDIA_DIR_NAME,
    MEDIA_EXTENSION,
    RECORDS_DIR_NAME,
    RECORD_EXTENSION,
)
from Snap_Libs.errors import NotFoundError, StoreError
from Snap_Libs.RecordStoreLib.stored_record import StoredRecord

logger = logging.getLogger(__name__)


def _ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def _id_from_path(path: Path) -> Optional[int]:
    try:
        return int(path.stem)
    except ValueError:
        return None


def _sort_key(path: Path) -> Tuple[bool, int, str]:
    record_id = _id_from_path(path)
    return (record_id is None, record_id or 0, path.name)


def _next_id(directory: Path, extension: str) -> int:
    ids = [_id_from_path(path) for path in directory.glob(f"*{extension}")]
    ids = [value for value in ids if value is not None]
    return max(ids) + 1 if ids else FIRST_STORE_ID


class FileMediaStore:
    """
    MediaStore persisted as files under ``base_dir``.

    Ids continue from the highest id found on disk when the store is opened.
    A single writer per directory is assumed.
    """

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = Path(base_dir)
        self.records_dir = _ensure_dir(self.base_dir / RECORDS_DIR_NAME)
        self.media_dir = _ensure_dir(self.base_dir / MEDIA_DIR_NAME)
        self._next_record_id = _next_id(self.records_dir, RECORD_EXTENSION)
        self._next_media_id = _next_id(self.media_dir, MEDIA_EXTENSION)

    def _record_path(self, record_id: int) -> Path:
        return self.records_dir / f"{int(record_id)}{RECORD_EXTENSION}"

    def _media_path(self, media_id: int) -> Path:
        return self.media_dir / f"{int(media_id)}{MEDIA_EXTENSION}"

    # Blocking helpers, run through asyncio.to_thread

    def _read_record(self, record_id: int) -> StoredRecord:
        path = self._record_path(record_id)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise NotFoundError("record", record_id)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Could not read record {record_id}: {e}") from e

        if not isinstance(payload, dict):
            raise StoreError(f"Record file {path.name} does not hold an object")

        return StoredRecord.from_dict(payload).with_id(record_id)

    def _read_media(self, media_id: int) -> bytes:
        try:
            return self._media_path(media_id).read_bytes()
        except FileNotFoundError:
            raise NotFoundError("media", media_id)
        except OSError as e:
            raise StoreError(f"Could not read media {media_id}: {e}") from e

    def _write_media(self, media: bytes, media_id: int) -> None:
        try:
            self._media_path(media_id).write_bytes(bytes(media))
        except OSError as e:
            raise StoreError(f"Could not write media {media_id}: {e}") from e

    def _write_record(self, record: StoredRecord) -> None:
        try:
            self._record_path(record.id).write_text(
                json.dumps(record.to_dict(), indent=2), encoding="utf-8"
            )
        except OSError as e:
            raise StoreError(f"Could not write record {record.id}: {e}") from e

    def _delete_files(self, record_id: int, media_ids: Sequence[int]) -> None:
        paths = [self._media_path(media_id) for media_id in media_ids]
        paths.append(self._record_path(record_id))
        try:
            for path in paths:
                path.unlink(missing_ok=True)
        except OSError as e:
            raise StoreError(f"Could not delete record {record_id}: {e}") from e

    def _read_all(self) -> List[StoredRecord]:
        records: List[StoredRecord] = []
        for path in sorted(self.records_dir.glob(f"*{RECORD_EXTENSION}"), key=_sort_key):
            record_id = _id_from_path(path)
            if record_id is None:
                logger.warning(f"Skipping record file with non-numeric name: {path.name}")
                continue
            try:
                records.append(self._read_record(record_id))
            except StoreError as e:
                logger.warning(f"Skipping unreadable record file {path.name}: {e}")
        return records

    # MediaStore interface

    async def retrieve_record(self, record_id: int) -> StoredRecord:
        return await asyncio.to_thread(self._read_record, record_id)

    async def retrieve_media(self, media_id: int) -> bytes:
        return await asyncio.to_thread(self._read_media, media_id)

    async def store_media(self, media: bytes, media_id: Optional[int] = None) -> int:
        if not isinstance(media, (bytes, bytearray)):
            raise TypeError(f"media must be bytes, got {type(media)}")

        if media_id is None:
            media_id = self._next_media_id
            self._next_media_id += 1
        else:
            self._next_media_id = max(self._next_media_id, media_id + 1)

        await asyncio.to_thread(self._write_media, media, media_id)
        logger.debug(f"Stored media {media_id} ({len(media)} bytes) in {self.media_dir}")
        return media_id

    async def store_record(self, record: StoredRecord) -> int:
        if record.id is None:
            record = record.with_id(self._next_record_id)
            self._next_record_id += 1
        else:
            self._next_record_id = max(self._next_record_id, record.id + 1)

        await asyncio.to_thread(self._write_record, record)
        logger.debug(f"Stored record {record.id} in {self.records_dir}")
        return record.id

    async def delete_record(self, record_id: int, media_ids: Sequence[int]) -> None:
        await asyncio.to_thread(self._delete_files, record_id, list(media_ids))
        logger.debug(f"Deleted record {record_id} and media {list(media_ids)}")

    async def all(self) -> List[StoredRecord]:
        return await asyncio.to_thread(self._read_all)
