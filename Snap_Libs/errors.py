"""
Error types for Snapshot.

Classes:
    SnapshotError: Base class for every library error
    NotFoundError: A store lookup missed a record or media id
    RenderError: The renderer could not produce an image from a source
    StoreError: A write or delete against the persistent store failed
"""

from typing import Any


class SnapshotError(Exception):
    """Base exception for all Snapshot errors."""


class NotFoundError(SnapshotError, KeyError):
    """
    A record or media id is unknown to the store.

    Attributes:
        kind: What was looked up ("record" or "media")
        identifier: The id that missed
    """

    def __init__(self, kind: str, identifier: Any):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"No {kind} stored under id {identifier!r}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0])


class RenderError(SnapshotError):
    """Decoding, filtering, or encoding an image failed."""


class StoreError(SnapshotError, OSError):
    """Writing to or deleting from the persistent store failed."""
