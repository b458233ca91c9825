"""CLI for sweeping the stored pin index against the Joplin note store"""

import argparse
import asyncio

from notebook_pins.config import settings
from notebook_pins.notes.joplin import JoplinNotesAdapter
from notebook_pins.services.pins_service import PinsService
from notebook_pins.storage.local import LocalSettingsStore
from notebook_pins.storage.settings_repository import SettingsStateRepository


async def main(settings_store_path: str, api_url: str, token: str) -> None:
    repository = SettingsStateRepository(LocalSettingsStore(filepath=settings_store_path))
    notes_adapter = JoplinNotesAdapter(
        base_url=api_url, token=token, timeout=settings.joplin_api_timeout
    )
    service = PinsService(repository=repository, notes_adapter=notes_adapter)

    try:
        await service.init()
        await service.reconcile_pins()
    finally:
        await notes_adapter.aclose()

    state = service.get_state_snapshot()
    if not state.pins_by_folder_id:
        print("No pinned notes.")
    for folder_id, note_ids in state.pins_by_folder_id.items():
        print(f"{folder_id}: {', '.join(note_ids)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--settings-store",
        type=str,
        required=False,
        help="Settings file holding the pin index",
        default=settings.settings_store_path,
    )
    parser.add_argument(
        "--api-url",
        type=str,
        required=False,
        help="Joplin Data API URL",
        default=settings.joplin_api_url,
    )
    parser.add_argument(
        "--token",
        type=str,
        required=False,
        help="Joplin Data API token",
        default=settings.joplin_api_token,
    )

    args = parser.parse_args()

    asyncio.run(
        main(
            settings_store_path=args.settings_store,
            api_url=args.api_url,
            token=args.token,
        )
    )
