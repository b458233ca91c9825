"""Panel render and action models."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from notebook_pins.domain.pins import PinnedNote

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class PanelCapabilities(BaseModel):
    reorder: bool = False


class PanelRenderModel(BaseModel):
    """Everything the panel needs to draw itself."""

    folder_id: str | None = None
    folder_name: str | None = None
    title: str = "Pinned notes"
    empty_message: str = ""
    pins: list[PinnedNote] = []
    capabilities: PanelCapabilities = PanelCapabilities()
    show_horizontal_scrollbar: bool = False
    error: str | None = None

    model_config = _CAMEL


class OpenNoteAction(BaseModel):
    type: Literal["OPEN_NOTE"]
    note_id: str = Field(min_length=1)

    model_config = _CAMEL


class UnpinNoteAction(BaseModel):
    type: Literal["UNPIN_NOTE"]
    note_id: str = Field(min_length=1)
    folder_id: str = Field(min_length=1)

    model_config = _CAMEL


class ReorderPinsAction(BaseModel):
    type: Literal["REORDER_PINS"]
    folder_id: str = Field(min_length=1)
    note_ids_in_order: list[str]

    model_config = _CAMEL


PanelAction = Annotated[
    Union[OpenNoteAction, UnpinNoteAction, ReorderPinsAction],
    Field(discriminator="type"),
]
