import json

from notebook_pins.domain.pins import PinsState
from notebook_pins.storage.base import PanelPreferences, PinsRepository, SettingsStore
from notebook_pins.storage.sanitizer import (
    normalize_boolean_setting,
    normalize_max_pins,
    now_ms,
    parse_stored_state,
    sanitize_state,
)

STATE_SETTING_KEY = "notebookPins.state"
MAX_PINS_SETTING_KEY = "notebookPins.maxPinsPerNotebook"
AUTO_MIGRATE_ON_MOVE_SETTING_KEY = "notebookPins.autoMigrateOnMove"
SHOW_HORIZONTAL_SCROLLBAR_SETTING_KEY = "notebookPins.showHorizontalScrollbar"


class SettingsStateRepository(PinsRepository, PanelPreferences):
    """Pins repository storing the index as a JSON string in a settings store."""

    def __init__(self, settings: SettingsStore) -> None:
        self._settings = settings

    async def load_state(self) -> PinsState:
        raw = await self._settings.value(STATE_SETTING_KEY)
        return parse_stored_state(raw)

    async def save_state(self, state: PinsState) -> None:
        sanitized = sanitize_state(state)
        sanitized.updated_at = now_ms()
        payload = json.dumps(sanitized.model_dump(by_alias=True))
        await self._settings.set_value(STATE_SETTING_KEY, payload)

    async def get_max_pins(self) -> int:
        raw = await self._settings.value(MAX_PINS_SETTING_KEY)
        return normalize_max_pins(raw)

    async def get_auto_migrate_on_move(self) -> bool:
        raw = await self._settings.value(AUTO_MIGRATE_ON_MOVE_SETTING_KEY)
        return normalize_boolean_setting(raw)

    async def get_show_horizontal_scrollbar(self) -> bool:
        raw = await self._settings.value(SHOW_HORIZONTAL_SCROLLBAR_SETTING_KEY)
        return normalize_boolean_setting(raw)
