import sys

from loguru import logger

from notebook_pins.api import create_app
from notebook_pins.config import settings
from notebook_pins.events import WorkspaceEvents
from notebook_pins.notes.joplin import JoplinNotesAdapter
from notebook_pins.panel.controller import PanelController
from notebook_pins.services.pins_service import PinsService
from notebook_pins.storage.local import LocalSettingsStore
from notebook_pins.storage.settings_repository import (
    AUTO_MIGRATE_ON_MOVE_SETTING_KEY,
    MAX_PINS_SETTING_KEY,
    SHOW_HORIZONTAL_SCROLLBAR_SETTING_KEY,
    STATE_SETTING_KEY,
    SettingsStateRepository,
)

logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

logger.info(f"Initializing notebook pins against Joplin at {settings.joplin_api_url}")
settings_store = LocalSettingsStore(filepath=settings.settings_store_path)
settings_store.register_defaults(
    {
        STATE_SETTING_KEY: "",
        MAX_PINS_SETTING_KEY: settings.default_max_pins,
        AUTO_MIGRATE_ON_MOVE_SETTING_KEY: settings.default_auto_migrate_on_move,
        SHOW_HORIZONTAL_SCROLLBAR_SETTING_KEY: settings.default_show_horizontal_scrollbar,
    }
)
repository = SettingsStateRepository(settings_store)
notes_adapter = JoplinNotesAdapter(
    base_url=settings.joplin_api_url,
    token=settings.joplin_api_token,
    timeout=settings.joplin_api_timeout,
)
service = PinsService(repository=repository, notes_adapter=notes_adapter)
controller = PanelController(
    service=service, notes_adapter=notes_adapter, preferences=repository
)
events = WorkspaceEvents(
    refresh=controller.refresh,
    handle_note_change=service.handle_note_change,
    reconcile=service.reconcile_pins,
    debounce_ms=settings.refresh_debounce_ms,
)
app = create_app(service=service, controller=controller, events=events)
