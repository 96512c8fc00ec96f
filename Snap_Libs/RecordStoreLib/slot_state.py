"""
Artifact slot states for image records.

Each record caches three artifacts (original, edited, thumbnail). Every
artifact lives in a slot whose state is one of four immutable variants:

- NotLoaded: nothing in memory; the store may hold the artifact
- Loaded: the in-memory value is exactly what the store holds
- Changed: the in-memory value has not been written to the store
- OutOfDate: the in-memory value was derived from inputs that changed since

State changes are plain functions that return a new state. The edited
and thumbnail slots depend on the original image and on the transform;
``invalidate_dependents`` applies that dependency graph to a whole
``SlotSet``.

Classes:
    SlotStatus, ArtifactKind, ChangeKind: Enumerations
    NotLoaded, Loaded, Changed, OutOfDate: Slot state variants
    SlotSet: The three slots of one record

Functions:
    fresh_slots, stored_slots: Initial slot sets
    mark_loaded, mark_changed, mark_out_of_date, mark_stored, mark_cleared: Transitions
    needs_fetch, needs_derive, needs_store, needs_clear: Predicates
    invalidate_dependents: Mark the slots that depend on a changed input
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import ClassVar, Dict, Optional, Tuple, Union


class SlotStatus(str, Enum):
    NOT_LOADED = "not_loaded"
    LOADED = "loaded"
    CHANGED = "changed"
    OUT_OF_DATE = "out_of_date"


class ArtifactKind(str, Enum):
    ORIGINAL = "original"
    EDITED = "edited"
    THUMBNAIL = "thumbnail"


class ChangeKind(str, Enum):
    ORIGINAL = "original"
    TRANSFORM = "transform"


@dataclass(frozen=True)
class NotLoaded:
    """Nothing in memory. ``artifact_id`` points at the stored blob, if any."""
    status: ClassVar[SlotStatus] = SlotStatus.NOT_LOADED

    artifact_id: Optional[int] = None

    @property
    def value(self) -> None:
        return None


@dataclass(frozen=True)
class Loaded:
    """In-memory value equals the blob stored under ``artifact_id``."""
    status: ClassVar[SlotStatus] = SlotStatus.LOADED

    value: bytes
    artifact_id: int

    def __post_init__(self) -> None:
        if self.value is None:
            raise ValueError("Loaded slot requires a value")
        if self.artifact_id is None:
            raise ValueError("Loaded slot requires an artifact id")


@dataclass(frozen=True)
class Changed:
    """In-memory value is pending a write (``None`` when there is nothing to write)."""
    status: ClassVar[SlotStatus] = SlotStatus.CHANGED

    value: Optional[bytes] = None
    artifact_id: Optional[int] = None


@dataclass(frozen=True)
class OutOfDate:
    """In-memory value, if any, was derived from superseded inputs."""
    status: ClassVar[SlotStatus] = SlotStatus.OUT_OF_DATE

    value: Optional[bytes] = None
    artifact_id: Optional[int] = None


SlotState = Union[NotLoaded, Loaded, Changed, OutOfDate]


@dataclass(frozen=True)
class SlotSet:
    original: SlotState
    edited: SlotState
    thumbnail: SlotState

    def get(self, kind: ArtifactKind) -> SlotState:
        return getattr(self, ArtifactKind(kind).value)

    def with_slot(self, kind: ArtifactKind, state: SlotState) -> "SlotSet":
        return replace(self, **{ArtifactKind(kind).value: state})


# Which slots are derived from each kind of input
DEPENDENTS: Dict[ChangeKind, Tuple[ArtifactKind, ...]] = {
    ChangeKind.ORIGINAL: (ArtifactKind.EDITED, ArtifactKind.THUMBNAIL),
    ChangeKind.TRANSFORM: (ArtifactKind.EDITED, ArtifactKind.THUMBNAIL),
}


def fresh_slots() -> SlotSet:
    """Slots of a record that has never been stored: all pending, all empty."""
    return SlotSet(original=Changed(), edited=Changed(), thumbnail=Changed())


def stored_slots(
    original_id: Optional[int],
    edited_id: Optional[int],
    thumbnail_id: Optional[int],
) -> SlotSet:
    """Slots of a record reconstructed from the store: nothing loaded yet."""
    return SlotSet(
        original=NotLoaded(original_id),
        edited=NotLoaded(edited_id),
        thumbnail=NotLoaded(thumbnail_id),
    )


def mark_loaded(state: SlotState, value: bytes) -> Loaded:
    """
    Record the value fetched for a NotLoaded slot.

    Raises:
        ValueError: If the slot is not NotLoaded or has no artifact id
    """
    if not isinstance(state, NotLoaded) or state.artifact_id is None:
        raise ValueError(f"Cannot load a slot in state {state.status.value} "
                         f"with artifact id {state.artifact_id!r}")
    return Loaded(value=value, artifact_id=state.artifact_id)


def mark_changed(state: SlotState, value: Optional[bytes]) -> Changed:
    """Replace the in-memory value; the artifact id is kept for overwriting."""
    return Changed(value=value, artifact_id=state.artifact_id)


def mark_out_of_date(state: SlotState) -> OutOfDate:
    return OutOfDate(value=state.value, artifact_id=state.artifact_id)


def mark_stored(state: SlotState, artifact_id: int) -> Changed:
    """
    Record the id a Changed value was written under.

    The slot stays Changed; only its artifact id is updated.

    Raises:
        ValueError: If the slot is not Changed
    """
    if not isinstance(state, Changed):
        raise ValueError(f"Only a changed slot can be stored, got {state.status.value}")
    return Changed(value=state.value, artifact_id=artifact_id)


def mark_cleared(state: SlotState) -> Changed:
    """
    Forget the stored artifact of a Changed slot whose value is absent.

    Raises:
        ValueError: If the slot is not Changed or still holds a value
    """
    if not isinstance(state, Changed) or state.value is not None:
        raise ValueError(f"Only an empty changed slot can be cleared, got {state.status.value}")
    return Changed()


def needs_fetch(state: SlotState) -> bool:
    return isinstance(state, NotLoaded) and state.artifact_id is not None


def needs_derive(state: SlotState) -> bool:
    """A derived slot is rebuilt when it has no stored artifact or is stale."""
    return state.artifact_id is None or isinstance(state, OutOfDate)


def needs_store(state: SlotState) -> bool:
    return isinstance(state, Changed) and state.value is not None


def needs_clear(state: SlotState) -> bool:
    """An empty Changed slot still pointing at a stored artifact."""
    return isinstance(state, Changed) and state.value is None and state.artifact_id is not None


def invalidate_dependents(slots: SlotSet, change: ChangeKind) -> SlotSet:
    """Mark every slot derived from ``change`` as OutOfDate."""
    result = slots
    for kind in DEPENDENTS[ChangeKind(change)]:
        result = result.with_slot(kind, mark_out_of_date(result.get(kind)))
    return result
