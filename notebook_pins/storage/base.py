from typing import Any, Protocol

from notebook_pins.domain.pins import PinsState


class SettingsStore(Protocol):
    """Key/value settings owned by the host application."""

    async def value(self, key: str) -> Any:
        """Get the raw value stored under a key, or None."""
        ...

    async def set_value(self, key: str, value: Any) -> None:
        """Store a raw value under a key."""
        ...


class PinsRepository(Protocol):
    """Persistence and configuration for the pin index."""

    async def load_state(self) -> PinsState:
        """Load the stored pin index."""
        ...

    async def save_state(self, state: PinsState) -> None:
        """Sanitize, stamp and store the pin index."""
        ...

    async def get_max_pins(self) -> int:
        """Maximum pins per folder, 0 for unlimited."""
        ...

    async def get_auto_migrate_on_move(self) -> bool:
        """Whether pins follow notes moved to another folder."""
        ...


class PanelPreferences(Protocol):
    """Cosmetic panel settings."""

    async def get_show_horizontal_scrollbar(self) -> bool:
        """Whether the pin strip shows a horizontal scrollbar."""
        ...
