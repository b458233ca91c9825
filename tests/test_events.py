"""Tests for workspace event routing and the debounced refresh."""

import asyncio

import pytest

from notebook_pins.events import Debouncer, WorkspaceEvents

pytestmark = pytest.mark.anyio


class Recorder:
    def __init__(self) -> None:
        self.refreshes = 0
        self.reconciles = 0
        self.changed_notes: list[str] = []

    async def refresh(self) -> None:
        self.refreshes += 1

    async def reconcile(self) -> None:
        self.reconciles += 1

    async def handle_note_change(self, note_id: str) -> None:
        self.changed_notes.append(note_id)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def workspace_events(recorder: Recorder) -> WorkspaceEvents:
    return WorkspaceEvents(
        refresh=recorder.refresh,
        handle_note_change=recorder.handle_note_change,
        reconcile=recorder.reconcile,
        debounce_ms=20,
    )


async def test_debouncer_coalesces_bursts(recorder: Recorder) -> None:
    debouncer = Debouncer(recorder.refresh, wait_ms=20)

    debouncer.trigger()
    debouncer.trigger()
    debouncer.trigger()
    assert recorder.refreshes == 0
    assert debouncer.pending

    await asyncio.sleep(0.1)
    assert recorder.refreshes == 1
    assert not debouncer.pending


async def test_debouncer_flush_and_cancel(recorder: Recorder) -> None:
    debouncer = Debouncer(recorder.refresh, wait_ms=1000)

    await debouncer.flush()
    assert recorder.refreshes == 0, "Flushing with nothing pending should do nothing"

    debouncer.trigger()
    await debouncer.flush()
    assert recorder.refreshes == 1

    debouncer.trigger()
    debouncer.cancel()
    assert not debouncer.pending
    assert recorder.refreshes == 1


async def test_debounced_callback_failure_is_contained() -> None:
    calls = []

    async def failing() -> None:
        calls.append(1)
        raise RuntimeError("refresh failed")

    debouncer = Debouncer(failing, wait_ms=5)
    debouncer.trigger()
    await asyncio.sleep(0.05)

    assert calls == [1]


async def test_folder_selection_refreshes_immediately(
    workspace_events: WorkspaceEvents, recorder: Recorder
) -> None:
    await workspace_events.on_note_selection_change()
    await workspace_events.on_folder_selection_change()

    assert recorder.refreshes == 1
    await asyncio.sleep(0.1)
    assert recorder.refreshes == 1, "A pending debounced refresh should be superseded"


async def test_note_selection_changes_share_one_refresh(
    workspace_events: WorkspaceEvents, recorder: Recorder
) -> None:
    await workspace_events.on_note_selection_change()
    await workspace_events.on_note_selection_change()
    assert recorder.refreshes == 0

    await asyncio.sleep(0.1)
    assert recorder.refreshes == 1


async def test_note_change_reconciles_the_note_then_refreshes(
    workspace_events: WorkspaceEvents, recorder: Recorder
) -> None:
    await workspace_events.on_note_change({"id": "note1"})
    await workspace_events.on_note_change({"id": ""})
    await workspace_events.on_note_change({"id": 42})
    await workspace_events.on_note_change(None)

    assert recorder.changed_notes == ["note1"]
    await asyncio.sleep(0.1)
    assert recorder.refreshes == 1


async def test_sync_complete_runs_full_reconciliation(
    workspace_events: WorkspaceEvents, recorder: Recorder
) -> None:
    await workspace_events.on_sync_complete()

    assert recorder.reconciles == 1
    await workspace_events.debounced_refresh.flush()
    assert recorder.refreshes == 1
