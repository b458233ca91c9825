"""Glue between the host workspace, the panel and the pins service."""

import logging

from notebook_pins.domain.panel import (
    OpenNoteAction,
    PanelAction,
    PanelCapabilities,
    PanelRenderModel,
    ReorderPinsAction,
    UnpinNoteAction,
)
from notebook_pins.domain.pins import PinResult
from notebook_pins.notes.base import NotesAdapter
from notebook_pins.services.pins_service import PinsService
from notebook_pins.storage.base import PanelPreferences

logger = logging.getLogger(__name__)

NO_FOLDER_MESSAGE = "Select a notebook to view pinned notes."
EMPTY_FOLDER_MESSAGE = "Right-click a note -> Pin in this notebook."
RENDER_FAILED_MESSAGE = "Unable to render pinned notes right now."


class PanelController:
    """Tracks the selected notebook and the latest panel model.

    The host reports folder selection and forwards panel actions here; the
    HTTP layer reads ``model`` to draw the panel.
    """

    def __init__(
        self,
        *,
        service: PinsService,
        notes_adapter: NotesAdapter,
        preferences: PanelPreferences | None = None,
    ):
        self.service = service
        self.notes_adapter = notes_adapter
        self.preferences = preferences
        self.folder_id: str | None = None
        self.folder_name: str | None = None
        self.model = PanelRenderModel(title="PINNED", empty_message=NO_FOLDER_MESSAGE)

    async def startup(self) -> None:
        """Sweep drift accumulated while nothing was watching, then draw the panel."""
        await self.service.reconcile_pins()
        await self.refresh()

    def select_folder(self, folder_id: str, title: str | None = None) -> None:
        self.folder_id = folder_id
        self.folder_name = title or "Notebook"

    def clear_folder(self) -> None:
        self.folder_id = None
        self.folder_name = None

    async def refresh(self) -> PanelRenderModel:
        try:
            show_scrollbar = (
                await self.preferences.get_show_horizontal_scrollbar()
                if self.preferences
                else False
            )
            if not self.folder_id:
                self.model = PanelRenderModel(
                    title="Pinned notes",
                    empty_message=NO_FOLDER_MESSAGE,
                    show_horizontal_scrollbar=show_scrollbar,
                )
                return self.model

            pins = await self.service.list_pinned_notes(self.folder_id)
            self.model = PanelRenderModel(
                folder_id=self.folder_id,
                folder_name=self.folder_name,
                title=f'Pinned in "{self.folder_name}"',
                empty_message=EMPTY_FOLDER_MESSAGE,
                pins=pins,
                capabilities=PanelCapabilities(reorder=len(pins) > 1),
                show_horizontal_scrollbar=show_scrollbar,
            )
        except Exception as e:
            logger.exception("Failed to refresh the pins panel")
            self.model = PanelRenderModel(
                title="Pinned notes",
                empty_message=RENDER_FAILED_MESSAGE,
                error=str(e) or "Unknown error",
            )
        return self.model

    async def pin_selected(self, note_id: str | None) -> str | None:
        """Pin the selected note in the selected notebook.

        Returns:
            A message for the user, or None when there is nothing to report
        """
        if not self.folder_id or not note_id:
            return "Select a note in a notebook before pinning."

        result = await self.pin_note_in_folder(note_id, self.folder_id)
        return result.message

    async def pin_note_in_folder(self, note_id: str, folder_id: str) -> PinResult:
        """Pin a note after checking that it currently lives in the folder."""
        note = await self.notes_adapter.get_note(note_id)
        if note is None:
            return PinResult(changed=False, message="The selected note is not available.")
        if note.parent_id != folder_id:
            return PinResult(
                changed=False,
                message="You can only pin notes that belong to the current notebook.",
            )

        result = await self.service.pin_note(note_id, folder_id)
        await self.refresh()
        return result

    async def unpin_selected(self, note_id: str | None) -> str | None:
        if not self.folder_id or not note_id:
            return "Select a note in a notebook before unpinning."

        result = await self.service.unpin_note(note_id, self.folder_id)
        await self.refresh()
        return result.message

    async def handle_action(self, action: PanelAction) -> PinResult | None:
        if isinstance(action, OpenNoteAction):
            await self.service.open_pinned_note(action.note_id)
            return None

        if isinstance(action, UnpinNoteAction):
            result = await self.service.unpin_note(action.note_id, action.folder_id)
        elif isinstance(action, ReorderPinsAction):
            result = await self.service.reorder_pins(action.folder_id, action.note_ids_in_order)
        else:
            return None

        await self.refresh()
        return result
