from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Plugin settings store
    settings_store_path: str = "data/settings.json"

    # Joplin Data API settings
    joplin_api_url: str = "http://localhost:41184"
    joplin_api_token: str = ""
    joplin_api_timeout: float = 5.0

    # Defaults registered into the settings store when missing
    default_max_pins: int = 0  # 0 means unlimited
    default_auto_migrate_on_move: bool = False
    default_show_horizontal_scrollbar: bool = False

    # Panel settings
    refresh_debounce_ms: int = 150
    static_dir: Path = Path(__file__).parent / "panel" / "static"

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()
