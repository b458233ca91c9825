"""Pin index domain models."""

from typing import Literal

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

STATE_VERSION: Literal[1] = 1


class PinsState(BaseModel):
    """Persisted pin index.

    Attributes:
        version: Schema tag, always ``STATE_VERSION`` after sanitizing
        pins_by_folder_id: Folder ID -> ordered list of pinned note IDs
        note_to_folder_index: Note ID -> the folder it is pinned in
        updated_at: Milliseconds since epoch of the last persist
    """

    version: int = STATE_VERSION
    pins_by_folder_id: dict[str, list[str]] = {}
    note_to_folder_index: dict[str, str] = {}
    updated_at: int | float = 0

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class PinnedNote(BaseModel):
    """A pinned note as shown in the panel."""

    note_id: str
    title: str
    is_todo: bool = False
    todo_completed: bool = False

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class PinResult(BaseModel):
    """Outcome of a pin mutation. Validation problems are reported here, never raised."""

    changed: bool
    message: str | None = None
