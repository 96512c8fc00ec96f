"""
RecordStoreLib - Image records and their persistence

This module provides the image record cache, the state of its three
image slots, and the stores records are persisted to.
"""

from Snap_Libs.RecordStoreLib.slot_state import (
    ArtifactKind,
    ChangeKind,
    SlotSet,
    SlotStatus,
    invalidate_dependents,
)
from Snap_Libs.RecordStoreLib.stored_record import StoredRecord
from Snap_Libs.RecordStoreLib.media_store import (
    MediaStore,
    InMemoryMediaStore,
    get_default_store,
    set_default_store,
    reset_default_store,
)
from Snap_Libs.RecordStoreLib.file_store import FileMediaStore
from Snap_Libs.RecordStoreLib.image_record import ImageRecord

__all__ = [
    "ArtifactKind",
    "ChangeKind",
    "SlotSet",
    "SlotStatus",
    "invalidate_dependents",
    "StoredRecord",
    "MediaStore",
    "InMemoryMediaStore",
    "get_default_store",
    "set_default_store",
    "reset_default_store",
    "FileMediaStore",
    "ImageRecord",
]
