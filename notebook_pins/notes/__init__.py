from notebook_pins.notes.base import NotesAdapter

__all__ = ["NotesAdapter"]
