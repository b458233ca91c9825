import json
from pathlib import Path
from typing import Any, Mapping

from notebook_pins.storage.base import SettingsStore


class LocalSettingsStore(SettingsStore):
    """Settings store that keeps its values in a JSON file."""

    def __init__(self, filepath: str | Path | None = None) -> None:
        """Initialize LocalSettingsStore.

        Args:
            filepath: Path to the settings file. If provided and exists, will auto-load.
                     If provided and doesn't exist, it is created on the first write.
                     If not provided, values are kept in memory only.
        """
        self._filepath = str(filepath) if filepath else None

        if self._filepath and Path(self._filepath).exists():
            with open(self._filepath, "r") as f:
                data = json.load(f)
            self._values: dict[str, Any] = dict(data.get("values", {}))
        else:
            self._values = {}

    async def value(self, key: str) -> Any:
        return self._values.get(key)

    async def set_value(self, key: str, value: Any) -> None:
        self._values[key] = value
        if self._filepath:
            self.save()

    def register_defaults(self, defaults: Mapping[str, Any]) -> None:
        """Store each default whose key has no value yet."""
        missing = {key: value for key, value in defaults.items() if key not in self._values}
        if not missing:
            return
        self._values.update(missing)
        if self._filepath:
            self.save()

    def save(self, filepath: str | None = None) -> None:
        """Save the settings to a JSON file.

        Args:
            filepath: Path to save to. If not provided, uses the filepath from initialization.
        """
        save_path = filepath or self._filepath
        if not save_path:
            raise ValueError(
                "No filepath provided and no default filepath set during initialization"
            )

        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        with open(save_path, "w") as f:
            json.dump({"values": self._values}, f)
