"""
Image records for Snapshot.

An ImageRecord is one photo in the library. It caches three encoded images:

- original: the image as captured or imported
- edited: the original rendered through the record's filter transform
- thumbnail: the edited image rendered at THUMBNAIL_HEIGHT

Images are loaded from the store lazily, derived images are re-rendered
lazily when the original or the transform changes, and ``save`` writes the
slots in dependency order (original, edited, thumbnail, then metadata) so a
stale derived image is never persisted.

A record assumes a single writer: concurrent calls that mutate the same
record (two overlapping ``save`` calls, for instance) must be serialized by
the caller.

Classes:
    ImageRecord: Cache and persistence for one photo
"""

import logging
import uuid
from typing import Dict, List, NamedTuple, Optional

from Snap_Libs.constants import NEVER_SYNCED, THUMBNAIL_HEIGHT
from Snap_Libs.ImageEditingLib.filter_transform import FilterTransform
from Snap_Libs.ImageEditingLib.render import Renderer, render_filtered_async
from Snap_Libs.RecordStoreLib.media_store import MediaStore, get_default_store
from Snap_Libs.RecordStoreLib.slot_state import (
    ArtifactKind,
    ChangeKind,
    SlotSet,
    SlotStatus,
    fresh_slots,
    invalidate_dependents,
    mark_changed,
    mark_cleared,
    mark_loaded,
    mark_stored,
    needs_clear,
    needs_derive,
    needs_fetch,
    needs_store,
    stored_slots,
)
from Snap_Libs.RecordStoreLib.stored_record import StoredRecord

logger = logging.getLogger(__name__)


class _SlotSpec(NamedTuple):
    derived: bool
    height: Optional[int]


_SLOT_SPECS: Dict[ArtifactKind, _SlotSpec] = {
    ArtifactKind.ORIGINAL: _SlotSpec(derived=False, height=None),
    ArtifactKind.EDITED: _SlotSpec(derived=True, height=None),
    ArtifactKind.THUMBNAIL: _SlotSpec(derived=True, height=THUMBNAIL_HEIGHT),
}

# Later slots are rendered from earlier ones
SAVE_ORDER = (ArtifactKind.ORIGINAL, ArtifactKind.EDITED, ArtifactKind.THUMBNAIL)


class ImageRecord:
    """
    Cache and persistence for one photo.

    Example:
        >>> record = ImageRecord(store=store)
        >>> record.set_original(jpeg_bytes)
        >>> record.set_transform(FilterTransform(sepia=0.5))
        >>> thumbnail = await record.get_thumbnail()
        >>> await record.save()
        >>> same = await ImageRecord.from_database(record.id, store=store)
    """

    @classmethod
    async def from_database(
        cls,
        record_id: int,
        store: Optional[MediaStore] = None,
        renderer: Optional[Renderer] = None,
    ) -> "ImageRecord":
        """
        Load a record's metadata from the store. Images stay unloaded.

        Raises:
            NotFoundError: If the store has no record with this id
        """
        store = store if store is not None else get_default_store()
        data = await store.retrieve_record(record_id)
        return cls.from_list_record(data, store=store, renderer=renderer)

    @classmethod
    def from_list_record(
        cls,
        data: StoredRecord,
        store: Optional[MediaStore] = None,
        renderer: Optional[Renderer] = None,
    ) -> "ImageRecord":
        """Rebuild a record from its stored form without touching the store."""
        result = cls(store=store, renderer=renderer)

        result.id = data.id
        result._guid = data.guid
        result._slots = stored_slots(data.original_id, data.edited_id, data.thumbnail_id)
        result._transform = FilterTransform.from_dict(data.transform) if data.transform else None

        result.local_image_changes = data.local_image_changes
        result.local_filter_changes = data.local_filter_changes
        result.last_sync_version = data.last_sync_version

        return result

    @classmethod
    async def get_all(
        cls,
        store: Optional[MediaStore] = None,
        renderer: Optional[Renderer] = None,
    ) -> List["ImageRecord"]:
        store = store if store is not None else get_default_store()
        records = await store.all()
        return [cls.from_list_record(data, store=store, renderer=renderer) for data in records]

    def __init__(
        self,
        store: Optional[MediaStore] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self._store = store if store is not None else get_default_store()
        self._renderer = renderer if renderer is not None else render_filtered_async

        self.id: Optional[int] = None
        self._guid = uuid.uuid4().hex

        self._slots = fresh_slots()
        self._transform: Optional[FilterTransform] = None

        self.local_image_changes = True
        self.local_filter_changes = True
        self.last_sync_version = NEVER_SYNCED

    def __repr__(self) -> str:
        return (
            f"ImageRecord(id={self.id!r}, guid={self._guid!r}, "
            f"original={self.original_state.value}, edited={self.edited_state.value}, "
            f"thumbnail={self.thumbnail_state.value})"
        )

    @property
    def guid(self) -> str:
        return self._guid

    @property
    def slots(self) -> SlotSet:
        return self._slots

    @property
    def original_id(self) -> Optional[int]:
        return self._slots.original.artifact_id

    @property
    def edited_id(self) -> Optional[int]:
        return self._slots.edited.artifact_id

    @property
    def thumbnail_id(self) -> Optional[int]:
        return self._slots.thumbnail.artifact_id

    @property
    def original_state(self) -> SlotStatus:
        return self._slots.original.status

    @property
    def edited_state(self) -> SlotStatus:
        return self._slots.edited.status

    @property
    def thumbnail_state(self) -> SlotStatus:
        return self._slots.thumbnail.status

    @property
    def transform(self) -> Optional[FilterTransform]:
        return self._transform

    def set_transform(self, transform: Optional[FilterTransform]) -> None:
        """
        Replace the filter transform.

        The edited image and thumbnail become out of date and the record is
        flagged as having local filter changes.

        Raises:
            TypeError: If transform is neither None nor a FilterTransform
        """
        if transform is not None and not isinstance(transform, FilterTransform):
            raise TypeError(f"Expected FilterTransform or None, got {type(transform)}")

        self._transform = transform
        self._slots = invalidate_dependents(self._slots, ChangeKind.TRANSFORM)
        self.local_filter_changes = True

    def set_original(self, media: bytes) -> None:
        """
        Replace the original image.

        The original becomes a pending write (overwriting its stored blob on
        the next save, if there is one), the edited image and thumbnail
        become out of date, and the record is flagged as having local image
        changes.

        Raises:
            TypeError: If media is not bytes
        """
        if not isinstance(media, (bytes, bytearray)):
            raise TypeError(f"media must be bytes, got {type(media)}")

        self._slots = self._slots.with_slot(
            ArtifactKind.ORIGINAL, mark_changed(self._slots.original, bytes(media))
        )
        self._slots = invalidate_dependents(self._slots, ChangeKind.ORIGINAL)
        self.local_image_changes = True

    async def get_original(self) -> Optional[bytes]:
        return await self._resolve(ArtifactKind.ORIGINAL)

    async def get_edited(self) -> Optional[bytes]:
        return await self._resolve(ArtifactKind.EDITED)

    async def get_thumbnail(self) -> Optional[bytes]:
        return await self._resolve(ArtifactKind.THUMBNAIL)

    async def draw_filtered(self, height: Optional[int] = None) -> Optional[bytes]:
        """
        Render the original through the current transform.

        Returns None when there is no original or no transform.

        Raises:
            RenderError: If the renderer fails
        """
        original = await self.get_original()
        if original is None or self._transform is None:
            return None
        return await self._renderer(original, self._transform, height)

    async def _fetch(self, kind: ArtifactKind) -> None:
        state = self._slots.get(kind)
        value = await self._store.retrieve_media(state.artifact_id)
        self._slots = self._slots.with_slot(kind, mark_loaded(self._slots.get(kind), value))
        logger.debug(f"Record {self.id}: loaded {kind.value} from media {state.artifact_id}")

    async def _derive(self, kind: ArtifactKind) -> None:
        value = await self.draw_filtered(_SLOT_SPECS[kind].height)
        # draw_filtered may have loaded the original, so re-read the slot set
        self._slots = self._slots.with_slot(kind, mark_changed(self._slots.get(kind), value))
        size = "empty" if value is None else f"{len(value)} bytes"
        logger.debug(f"Record {self.id}: derived {kind.value} ({size})")

    async def _resolve(self, kind: ArtifactKind) -> Optional[bytes]:
        if needs_fetch(self._slots.get(kind)):
            await self._fetch(kind)

        if _SLOT_SPECS[kind].derived and needs_derive(self._slots.get(kind)):
            await self._derive(kind)

        return self._slots.get(kind).value

    async def _persist(self, kind: ArtifactKind) -> None:
        if _SLOT_SPECS[kind].derived and self._slots.get(kind).status == SlotStatus.OUT_OF_DATE:
            await self._derive(kind)

        state = self._slots.get(kind)
        if _SLOT_SPECS[kind].derived and needs_clear(state):
            # Nothing to render any more; the old blob must not be reloaded
            self._slots = self._slots.with_slot(kind, mark_cleared(state))
            logger.debug(f"Record {self.id}: dropped {kind.value} media {state.artifact_id}")
            return

        if not needs_store(state):
            return

        artifact_id = await self._store.store_media(state.value, state.artifact_id)
        self._slots = self._slots.with_slot(kind, mark_stored(self._slots.get(kind), artifact_id))
        logger.debug(f"Record {self.id}: stored {kind.value} as media {artifact_id}")

    def to_stored_record(self) -> StoredRecord:
        """Snapshot of the record's metadata in its persisted form."""
        return StoredRecord(
            id=self.id,
            guid=self._guid,
            original_id=self.original_id,
            edited_id=self.edited_id,
            thumbnail_id=self.thumbnail_id,
            transform=self._transform.to_dict() if self._transform else {},
            local_image_changes=self.local_image_changes,
            local_filter_changes=self.local_filter_changes,
            last_sync_version=self.last_sync_version,
        )

    async def save(self) -> None:
        """
        Persist the record: original, edited, thumbnail, then metadata.

        Out-of-date derived images are re-rendered before they are written.
        A derived image that renders to nothing (no transform, or no original)
        loses its artifact id, so the metadata no longer points at an old render.
        Slots stay in their current state after a write; the change flags
        are left for the sync process to clear.

        Raises:
            RenderError: If re-rendering a derived image fails
            StoreError: If a write fails; earlier writes are not rolled back
        """
        for kind in SAVE_ORDER:
            await self._persist(kind)

        self.id = await self._store.store_record(self.to_stored_record())
        logger.info(f"Saved record {self.id} (guid {self._guid})")

    async def delete(self) -> None:
        """Remove the record and its stored images. No-op for an unsaved record."""
        if self.id is None:
            return

        media_ids = [
            artifact_id
            for artifact_id in (self.original_id, self.edited_id, self.thumbnail_id)
            if artifact_id is not None
        ]
        await self._store.delete_record(self.id, media_ids)
        logger.info(f"Deleted record {self.id} with media {media_ids}")
