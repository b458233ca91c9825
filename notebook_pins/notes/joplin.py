"""Notes adapter backed by the Joplin Data API."""

import logging
import webbrowser
from typing import Any, Callable
from urllib.parse import quote

import httpx

from notebook_pins.domain.note import NoteEntity
from notebook_pins.notes.base import NotesAdapter

logger = logging.getLogger(__name__)

NOTE_FIELDS = "id,title,parent_id,is_todo,todo_completed,deleted_time"


class JoplinNotesAdapter(NotesAdapter):
    """Looks notes up through the Data API and opens them through the joplin:// URL scheme."""

    def __init__(
        self,
        *,
        base_url: str,
        token: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
        opener: Callable[[str], Any] = webbrowser.open,
    ):
        """Initialize the adapter.

        Args:
            base_url: Root URL of the Joplin Data API
            token: Data API authorization token
            timeout: Request timeout in seconds
            client: Preconfigured client, mainly for tests
            opener: Callable launching a URL in the desktop application
        """
        self._token = token
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._opener = opener

    async def get_note(self, note_id: str) -> NoteEntity | None:
        try:
            response = await self._client.get(
                f"/notes/{quote(note_id, safe='')}",
                params={"fields": NOTE_FIELDS, "token": self._token},
            )
            if response.status_code == 404:
                return None
            response.raise_for_status()
            return NoteEntity.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to fetch note {note_id}: {e}")
            return None

    async def open_note(self, note_id: str) -> None:
        self._opener(f"joplin://x-callback-url/openNote?id={quote(note_id, safe='')}")

    async def aclose(self) -> None:
        await self._client.aclose()
