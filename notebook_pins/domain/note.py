"""Note domain models."""

from pydantic import BaseModel


class NoteEntity(BaseModel):
    """Live note metadata as returned by the note store.

    Attributes:
        id: Note ID
        title: Note title, may be empty
        parent_id: ID of the folder the note currently lives in
        is_todo: Non-zero when the note is a to-do
        todo_completed: Completion timestamp, zero when open
        deleted_time: Soft-delete timestamp, zero or missing when live
    """

    id: str
    title: str | None = None
    parent_id: str | None = None
    is_todo: int = 0
    todo_completed: int = 0
    deleted_time: int | None = None

    @property
    def is_live(self) -> bool:
        return not (self.deleted_time is not None and self.deleted_time > 0)
