from typing import Protocol

from notebook_pins.domain.note import NoteEntity


class NotesAdapter(Protocol):
    async def get_note(self, note_id: str) -> NoteEntity | None:
        """Get live metadata for a note, or None when it cannot be found."""
        ...

    async def open_note(self, note_id: str) -> None:
        """Navigate the host application to a note."""
        ...

    async def aclose(self) -> None:
        """Release connections held by the adapter."""
        ...
