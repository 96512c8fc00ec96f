"""
Unit tests for the StoredRecord wire format.
"""

from Snap_Libs.constants import NEVER_SYNCED
from Snap_Libs.RecordStoreLib.stored_record import StoredRecord


class TestToDict:
    """Tests for StoredRecord.to_dict."""

    def test_uses_camel_case_wire_names(self):
        """Test every field is written under its camelCase name."""
        record = StoredRecord(
            id=4, guid="abc", original_id=1, edited_id=2, thumbnail_id=3,
            transform={"sepia": 0.5}, local_image_changes=False,
            local_filter_changes=True, last_sync_version=7,
        )

        assert record.to_dict() == {
            "id": 4,
            "guid": "abc",
            "originalId": 1,
            "editedId": 2,
            "thumbnailId": 3,
            "transform": {"sepia": 0.5},
            "localImageChanges": False,
            "localFilterChanges": True,
            "lastSyncVersion": 7,
        }

    def test_from_dict_restores_record(self):
        """Test from_dict restores a written record."""
        record = StoredRecord(id=1, guid="g", original_id=5, transform={"blur": 2.0},
                              local_filter_changes=False, last_sync_version=3)

        assert StoredRecord.from_dict(record.to_dict()) == record


class TestFromDict:
    """Tests for StoredRecord.from_dict."""

    def test_defaults_for_missing_fields(self):
        """Test missing fields fall back to defaults."""
        record = StoredRecord.from_dict({})

        assert record.id is None
        assert record.guid == ""
        assert record.media_ids() == []
        assert record.transform == {}
        assert record.local_image_changes is True
        assert record.local_filter_changes is True
        assert record.last_sync_version == NEVER_SYNCED

    def test_normalizes_malformed_fields(self):
        """Test malformed fields are coerced or reset to defaults."""
        record = StoredRecord.from_dict({
            "id": "12",
            "originalId": "nope",
            "editedId": True,
            "transform": ["not", "a", "dict"],
            "localImageChanges": "yes",
            "lastSyncVersion": "x",
        })

        assert record.id == 12
        assert record.original_id is None
        assert record.edited_id is None
        assert record.transform == {}
        assert record.local_image_changes is True
        assert record.last_sync_version == NEVER_SYNCED


class TestHelpers:
    """Tests for with_id and media_ids."""

    def test_with_id(self):
        """Test with_id returns a copy with the new id."""
        assert StoredRecord(guid="g").with_id(9) == StoredRecord(id=9, guid="g")

    def test_media_ids_skip_missing(self):
        """Test media_ids leaves out absent ids."""
        assert StoredRecord(original_id=1, thumbnail_id=3).media_ids() == [1, 3]
