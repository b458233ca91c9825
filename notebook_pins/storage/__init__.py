from notebook_pins.storage.base import PanelPreferences, PinsRepository, SettingsStore

__all__ = ["PanelPreferences", "PinsRepository", "SettingsStore"]
