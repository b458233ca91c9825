from fastapi import APIRouter, HTTPException, Request
from loguru import logger

from notebook_pins.api.schemas import FolderSelection, PinRequest, ReorderRequest, WorkspaceEvent
from notebook_pins.events import WorkspaceEvents
from notebook_pins.panel.actions import parse_panel_action
from notebook_pins.panel.controller import PanelController
from notebook_pins.services.pins_service import PinsService


def _create_panel_action_endpoint(controller: PanelController):
    """Create the webview message bridge handler."""

    async def panel_action(request: Request):
        body = await request.body()
        action = parse_panel_action(body)
        if action is None:
            logger.debug("Ignoring malformed panel message")
            return {"handled": False}

        try:
            result = await controller.handle_action(action)
        except Exception as e:
            logger.error(f"Error handling panel action {action.type}: {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e

        response = {"handled": True, "changed": False, "message": None}
        if result is not None:
            response.update(result.model_dump())
        return response

    return panel_action


def _create_folder_selection_endpoint(controller: PanelController, events: WorkspaceEvents):
    """Create the handler for notebook selection changes reported by the host."""

    async def select_folder(selection: FolderSelection):
        if selection.folder_id:
            controller.select_folder(selection.folder_id, selection.title)
        else:
            controller.clear_folder()
        await events.on_folder_selection_change()
        return controller.model.model_dump(by_alias=True)

    return select_folder


def _create_workspace_event_endpoint(events: WorkspaceEvents):
    """Create the handler for note and sync notifications reported by the host."""

    async def workspace_event(event: WorkspaceEvent):
        try:
            if event.type == "NOTE_SELECTION_CHANGE":
                await events.on_note_selection_change()
            elif event.type == "NOTE_CHANGE":
                await events.on_note_change({"id": event.id})
            else:
                await events.on_sync_complete()
        except Exception as e:
            logger.error(f"Error handling workspace event {event.type}: {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e
        return {"accepted": True}

    return workspace_event


def _create_pins_endpoints(service: PinsService, controller: PanelController):
    """Create the folder pin handlers: list, pin, unpin and reorder."""

    async def list_pins(folder_id: str):
        try:
            pins = await service.list_pinned_notes(folder_id)
        except Exception as e:
            logger.error(f"Error listing pins of {folder_id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e
        return [pin.model_dump(by_alias=True) for pin in pins]

    async def pin_note(folder_id: str, pin: PinRequest):
        try:
            result = await controller.pin_note_in_folder(pin.note_id, folder_id)
        except Exception as e:
            logger.error(f"Error pinning note {pin.note_id} in {folder_id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e
        return result.model_dump()

    async def unpin_note(folder_id: str, note_id: str):
        try:
            result = await service.unpin_note(note_id, folder_id)
            await controller.refresh()
        except Exception as e:
            logger.error(f"Error unpinning note {note_id} from {folder_id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e
        return result.model_dump()

    async def reorder_pins(folder_id: str, reorder: ReorderRequest):
        try:
            result = await service.reorder_pins(folder_id, reorder.note_ids_in_order)
            await controller.refresh()
        except Exception as e:
            logger.error(f"Error reordering pins in {folder_id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e
        return result.model_dump()

    return list_pins, pin_note, unpin_note, reorder_pins


def get_endpoints_router(
    *,
    service: PinsService,
    controller: PanelController,
    events: WorkspaceEvents,
) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        return {"status": "healthy"}

    @router.get("/api/panel")
    async def panel_model():
        return controller.model.model_dump(by_alias=True)

    @router.get("/api/state")
    async def state_snapshot():
        return service.get_state_snapshot().model_dump(by_alias=True)

    @router.post("/api/reconcile")
    async def reconcile():
        try:
            await service.reconcile_pins()
            await controller.refresh()
        except Exception as e:
            logger.error(f"Error reconciling pins: {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e
        return service.get_state_snapshot().model_dump(by_alias=True)

    list_pins, pin_note, unpin_note, reorder_pins = _create_pins_endpoints(service, controller)
    router.get("/api/folders/{folder_id}/pins")(list_pins)
    router.post("/api/folders/{folder_id}/pins")(pin_note)
    router.put("/api/folders/{folder_id}/pins")(reorder_pins)
    router.delete("/api/folders/{folder_id}/pins/{note_id}")(unpin_note)

    router.post("/api/panel/actions")(_create_panel_action_endpoint(controller))
    router.post("/api/workspace/folder")(_create_folder_selection_endpoint(controller, events))
    router.post("/api/workspace/events")(_create_workspace_event_endpoint(events))

    return router
