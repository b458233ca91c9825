from typing import Generator

import pytest
from fastapi.testclient import TestClient

from notebook_pins.api import create_app
from notebook_pins.domain.note import NoteEntity
from notebook_pins.events import WorkspaceEvents
from notebook_pins.panel.controller import PanelController
from notebook_pins.services.pins_service import PinsService
from tests.fakes import FakeNotesAdapter, MemoryPinsRepository


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def test_notes() -> dict[str, NoteEntity]:
    return {
        "note1": NoteEntity(id="note1", title="One", parent_id="folderA"),
        "note2": NoteEntity(id="note2", title="Two", parent_id="folderA"),
        "note3": NoteEntity(id="note3", title="Three", parent_id="folderA", is_todo=1),
        "note4": NoteEntity(id="note4", title="Four", parent_id="folderB"),
    }


@pytest.fixture
def fake_notes_adapter(test_notes: dict[str, NoteEntity]) -> FakeNotesAdapter:
    return FakeNotesAdapter(test_notes)


@pytest.fixture
def memory_repository() -> MemoryPinsRepository:
    return MemoryPinsRepository()


@pytest.fixture
def service(
    memory_repository: MemoryPinsRepository, fake_notes_adapter: FakeNotesAdapter
) -> PinsService:
    """Service over the fakes. Tests call ``init`` themselves."""
    return PinsService(repository=memory_repository, notes_adapter=fake_notes_adapter)


@pytest.fixture
def controller(
    service: PinsService,
    fake_notes_adapter: FakeNotesAdapter,
    memory_repository: MemoryPinsRepository,
) -> PanelController:
    return PanelController(
        service=service, notes_adapter=fake_notes_adapter, preferences=memory_repository
    )


@pytest.fixture
def events(service: PinsService, controller: PanelController) -> WorkspaceEvents:
    return WorkspaceEvents(
        refresh=controller.refresh,
        handle_note_change=service.handle_note_change,
        reconcile=service.reconcile_pins,
        debounce_ms=10,
    )


@pytest.fixture
def test_client(
    service: PinsService, controller: PanelController, events: WorkspaceEvents
) -> Generator[TestClient, None, None]:
    """Test client whose lifespan initializes the service from the fake repository."""
    app = create_app(service=service, controller=controller, events=events)
    with TestClient(app) as client:
        yield client
