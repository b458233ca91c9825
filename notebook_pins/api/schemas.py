from typing import Literal

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class PinRequest(BaseModel):
    note_id: str

    model_config = _CAMEL


class ReorderRequest(BaseModel):
    note_ids_in_order: list[str]

    model_config = _CAMEL


class FolderSelection(BaseModel):
    """Selected notebook, or no notebook when folder_id is missing."""

    folder_id: str | None = None
    title: str | None = None

    model_config = _CAMEL


class WorkspaceEvent(BaseModel):
    type: Literal["NOTE_SELECTION_CHANGE", "NOTE_CHANGE", "SYNC_COMPLETE"]
    id: str | None = None
