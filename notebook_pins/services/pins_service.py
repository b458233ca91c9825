"""Pin index service with lazy reconciliation against the note store."""

import asyncio
import logging
from enum import Enum

from notebook_pins.domain.note import NoteEntity
from notebook_pins.domain.pins import PinnedNote, PinResult, PinsState
from notebook_pins.notes.base import NotesAdapter
from notebook_pins.storage.base import PinsRepository
from notebook_pins.storage.sanitizer import create_empty_state, now_ms, sanitize_state

logger = logging.getLogger(__name__)

UNTITLED = "(Untitled)"
MISSING_CONTEXT_MESSAGE = "Missing note or notebook context."
INVALID_REORDER_MESSAGE = "Invalid reorder payload."


class PinStatus(Enum):
    STALE = "stale"
    MOVED = "moved"
    IN_PLACE = "in_place"


def classify_pin(note: NoteEntity | None, folder_id: str) -> PinStatus:
    """Compare a pin's folder with the live note it points at."""
    if note is None or not note.is_live or not note.parent_id:
        return PinStatus.STALE
    if note.parent_id != folder_id:
        return PinStatus.MOVED
    return PinStatus.IN_PLACE


class PinsService:
    """Owns the pin index and keeps it consistent with the note store.

    Consistency is restored lazily: when a folder is listed, when a single
    note reports a change and during a full sweep. Operations are serialized
    on an asyncio lock so a debounced refresh never interleaves with a
    mutation.
    """

    def __init__(self, *, repository: PinsRepository, notes_adapter: NotesAdapter):
        self.repository = repository
        self.notes_adapter = notes_adapter
        self._state = create_empty_state()
        self._saved_state = self._state.model_copy(deep=True)
        self._lock = asyncio.Lock()

    async def init(self) -> None:
        """Load the stored index, sanitize it and write the clean copy back."""
        async with self._lock:
            self._state = sanitize_state(await self.repository.load_state())
            await self.repository.save_state(self._state)
            self._saved_state = self._state.model_copy(deep=True)
        logger.info(f"Loaded {len(self._state.note_to_folder_index)} pins")

    def get_pinned_ids(self, folder_id: str) -> list[str]:
        return list(self._state.pins_by_folder_id.get(folder_id, []))

    def get_state_snapshot(self) -> PinsState:
        return self._state.model_copy(deep=True)

    async def pin_note(self, note_id: str, folder_id: str) -> PinResult:
        if not note_id or not folder_id:
            return PinResult(changed=False, message=MISSING_CONTEXT_MESSAGE)

        async with self._lock:
            existing_folder_id = self._state.note_to_folder_index.get(note_id)
            if existing_folder_id == folder_id:
                return PinResult(
                    changed=False, message="This note is already pinned in this notebook."
                )

            max_pins = await self.repository.get_max_pins()
            current_pins = self._state.pins_by_folder_id.get(folder_id, [])
            if max_pins > 0 and len(current_pins) >= max_pins:
                return PinResult(
                    changed=False,
                    message=f"This notebook already has the maximum of {max_pins} pins.",
                )

            if existing_folder_id:
                self._remove_pin(note_id, existing_folder_id)

            self._state.pins_by_folder_id.setdefault(folder_id, []).append(note_id)
            self._state.note_to_folder_index[note_id] = folder_id
            await self._persist()

        logger.debug(f"Pinned note {note_id} in folder {folder_id}")
        return PinResult(changed=True)

    async def unpin_note(self, note_id: str, folder_id: str) -> PinResult:
        if not note_id or not folder_id:
            return PinResult(changed=False, message=MISSING_CONTEXT_MESSAGE)

        async with self._lock:
            if not self._remove_pin(note_id, folder_id):
                return PinResult(changed=False)
            await self._persist()

        logger.debug(f"Unpinned note {note_id} from folder {folder_id}")
        return PinResult(changed=True)

    async def reorder_pins(self, folder_id: str, note_ids_in_order: list[str]) -> PinResult:
        """Replace a folder's pin order with a permutation of its current pins.

        Args:
            folder_id: Folder whose pins are reordered
            note_ids_in_order: Every pinned note ID of the folder, in the new order

        Returns:
            PinResult, unchanged with a message for any payload that is not an
            exact permutation of the current pins
        """
        if not folder_id:
            return PinResult(changed=False, message="Missing notebook context.")

        async with self._lock:
            current = self._state.pins_by_folder_id.get(folder_id, [])
            if not current or not isinstance(note_ids_in_order, (list, tuple)):
                return PinResult(changed=False, message=INVALID_REORDER_MESSAGE)

            requested = list(note_ids_in_order)
            if (
                not requested
                or not all(isinstance(note_id, str) for note_id in requested)
                or len(set(requested)) != len(requested)
                or len(requested) != len(current)
                or not set(requested) <= set(current)
            ):
                return PinResult(changed=False, message=INVALID_REORDER_MESSAGE)

            if requested == current:
                return PinResult(changed=False)

            self._state.pins_by_folder_id[folder_id] = requested
            await self._persist()

        logger.debug(f"Reordered {len(requested)} pins in folder {folder_id}")
        return PinResult(changed=True)

    async def list_pinned_notes(self, folder_id: str) -> list[PinnedNote]:
        """List the live pins of a folder, purging or migrating drifted ones.

        Pins whose note is gone, soft-deleted or without a folder are removed.
        Pins whose note moved elsewhere follow the note when auto-migrate is
        enabled and are removed otherwise. All changes are persisted once.
        """
        async with self._lock:
            note_ids = self.get_pinned_ids(folder_id)
            if not note_ids:
                return []

            auto_migrate = await self.repository.get_auto_migrate_on_move()
            notes: list[PinnedNote] = []
            stale_note_ids: list[str] = []
            migrations: list[tuple[str, str]] = []

            for note_id in note_ids:
                note = await self._resolve_note(note_id)
                status = classify_pin(note, folder_id)
                if status is PinStatus.STALE:
                    stale_note_ids.append(note_id)
                elif status is PinStatus.MOVED:
                    if auto_migrate:
                        migrations.append((note_id, note.parent_id))
                    else:
                        stale_note_ids.append(note_id)
                else:
                    notes.append(
                        PinnedNote(
                            note_id=note_id,
                            title=note.title or UNTITLED,
                            is_todo=bool(note.is_todo),
                            todo_completed=bool(note.todo_completed),
                        )
                    )

            for note_id in stale_note_ids:
                self._remove_pin(note_id, folder_id)
            for note_id, to_folder_id in migrations:
                self._move_pin(note_id, folder_id, to_folder_id)

            if stale_note_ids or migrations:
                logger.info(
                    f"Folder {folder_id}: removed {len(stale_note_ids)} stale pins, "
                    f"migrated {len(migrations)}"
                )
                await self._persist()

        return notes

    async def open_pinned_note(self, note_id: str) -> None:
        await self.notes_adapter.open_note(note_id)

    async def handle_note_change(self, note_id: str) -> None:
        """Reconcile the pin of a single note after the host reports a change."""
        async with self._lock:
            folder_id = self._state.note_to_folder_index.get(note_id)
            if not folder_id:
                return

            note = await self._resolve_note(note_id)
            status = classify_pin(note, folder_id)
            if status is PinStatus.IN_PLACE:
                return

            if status is PinStatus.MOVED and await self.repository.get_auto_migrate_on_move():
                changed = self._move_pin(note_id, folder_id, note.parent_id)
            else:
                changed = self._remove_pin(note_id, folder_id)

            if changed:
                logger.debug(f"Note {note_id} changed, pin in folder {folder_id} {status.value}")
                await self._persist()

    async def reconcile_pins(self) -> None:
        """Sweep every pin in the index and fix drift accumulated while unobserved."""
        async with self._lock:
            entries = list(self._state.note_to_folder_index.items())
            if not entries:
                return

            auto_migrate = await self.repository.get_auto_migrate_on_move()
            removed = 0
            migrated = 0

            for note_id, folder_id in entries:
                note = await self._resolve_note(note_id)
                status = classify_pin(note, folder_id)
                if status is PinStatus.IN_PLACE:
                    continue
                if status is PinStatus.MOVED and auto_migrate:
                    migrated += self._move_pin(note_id, folder_id, note.parent_id)
                else:
                    removed += self._remove_pin(note_id, folder_id)

            if removed or migrated:
                logger.info(
                    f"Reconciled {len(entries)} pins: removed {removed}, migrated {migrated}"
                )
                await self._persist()

    async def _resolve_note(self, note_id: str) -> NoteEntity | None:
        try:
            return await self.notes_adapter.get_note(note_id)
        except Exception as e:
            logger.warning(f"Note lookup failed for {note_id}, treating pin as stale: {e}")
            return None

    def _remove_pin(self, note_id: str, folder_id: str) -> bool:
        note_ids = self._state.pins_by_folder_id.get(folder_id)
        if not note_ids or note_id not in note_ids:
            return False

        remaining = [nid for nid in note_ids if nid != note_id]
        if remaining:
            self._state.pins_by_folder_id[folder_id] = remaining
        else:
            del self._state.pins_by_folder_id[folder_id]

        if self._state.note_to_folder_index.get(note_id) == folder_id:
            del self._state.note_to_folder_index[note_id]
        return True

    def _move_pin(self, note_id: str, from_folder_id: str, to_folder_id: str) -> bool:
        if not to_folder_id or from_folder_id == to_folder_id:
            return False
        if not self._remove_pin(note_id, from_folder_id):
            return False

        destination = self._state.pins_by_folder_id.setdefault(to_folder_id, [])
        if note_id not in destination:
            destination.append(note_id)
        self._state.note_to_folder_index[note_id] = to_folder_id
        return True

    async def _persist(self) -> None:
        """Save the current state, rolling memory back to the last saved copy on failure."""
        self._state = sanitize_state(self._state)
        self._state.updated_at = now_ms()
        try:
            await self.repository.save_state(self._state)
        except Exception:
            self._state = self._saved_state.model_copy(deep=True)
            raise
        self._saved_state = self._state.model_copy(deep=True)
