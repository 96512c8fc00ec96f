"""
Persisted form of an image record.

A StoredRecord is the metadata a store keeps for one record: its ids, the
ids of its three image blobs, the transform's plain-mapping form, and the
sync bookkeeping. ``to_dict``/``from_dict`` use the camelCase wire names.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from Snap_Libs.constants import (
    FIELD_EDITED_ID,
    FIELD_GUID,
    FIELD_ID,
    FIELD_LAST_SYNC_VERSION,
    FIELD_LOCAL_FILTER_CHANGES,
    FIELD_LOCAL_IMAGE_CHANGES,
    FIELD_ORIGINAL_ID,
    FIELD_THUMBNAIL_ID,
    FIELD_TRANSFORM,
    NEVER_SYNCED,
)


def _optional_id(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _flag(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    return default


@dataclass(frozen=True)
class StoredRecord:
    id: Optional[int] = None
    guid: str = ""
    original_id: Optional[int] = None
    edited_id: Optional[int] = None
    thumbnail_id: Optional[int] = None
    transform: Dict[str, Any] = field(default_factory=dict)
    local_image_changes: bool = True
    local_filter_changes: bool = True
    last_sync_version: int = NEVER_SYNCED

    def with_id(self, record_id: int) -> "StoredRecord":
        return replace(self, id=record_id)

    def media_ids(self) -> List[int]:
        """Blob ids referenced by this record, original first."""
        return [
            media_id
            for media_id in (self.original_id, self.edited_id, self.thumbnail_id)
            if media_id is not None
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            FIELD_ID: self.id,
            FIELD_GUID: self.guid,
            FIELD_ORIGINAL_ID: self.original_id,
            FIELD_EDITED_ID: self.edited_id,
            FIELD_THUMBNAIL_ID: self.thumbnail_id,
            FIELD_TRANSFORM: dict(self.transform),
            FIELD_LOCAL_IMAGE_CHANGES: self.local_image_changes,
            FIELD_LOCAL_FILTER_CHANGES: self.local_filter_changes,
            FIELD_LAST_SYNC_VERSION: self.last_sync_version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredRecord":
        """
        Create from the wire form, tolerating missing or malformed fields.

        Missing change flags default to True (the record is treated as
        unsynced) and a missing sync version to ``NEVER_SYNCED``.
        """
        transform = data.get(FIELD_TRANSFORM)
        if not isinstance(transform, dict):
            transform = {}

        last_sync_version = data.get(FIELD_LAST_SYNC_VERSION, NEVER_SYNCED)
        try:
            last_sync_version = int(last_sync_version)
        except (TypeError, ValueError):
            last_sync_version = NEVER_SYNCED

        return cls(
            id=_optional_id(data.get(FIELD_ID)),
            guid=str(data.get(FIELD_GUID) or ""),
            original_id=_optional_id(data.get(FIELD_ORIGINAL_ID)),
            edited_id=_optional_id(data.get(FIELD_EDITED_ID)),
            thumbnail_id=_optional_id(data.get(FIELD_THUMBNAIL_ID)),
            transform=dict(transform),
            local_image_changes=_flag(data.get(FIELD_LOCAL_IMAGE_CHANGES), True),
            local_filter_changes=_flag(data.get(FIELD_LOCAL_FILTER_CHANGES), True),
            last_sync_version=last_sync_version,
        )
