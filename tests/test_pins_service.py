"""Tests for pin, unpin and reorder operations of PinsService."""

import pytest

from notebook_pins.services.pins_service import PinsService
from notebook_pins.storage.sanitizer import sanitize_state
from tests.fakes import FakeNotesAdapter, MemoryPinsRepository

pytestmark = pytest.mark.anyio


async def test_init_loads_and_writes_back_sanitized_state(
    memory_repository: MemoryPinsRepository, fake_notes_adapter: FakeNotesAdapter
) -> None:
    memory_repository.state = sanitize_state({"pinsByFolderId": {"folderA": ["note1"]}})
    memory_repository.state.pins_by_folder_id["folderB"] = ["note1", ""]
    service = PinsService(repository=memory_repository, notes_adapter=fake_notes_adapter)

    await service.init()

    assert service.get_pinned_ids("folderA") == ["note1"]
    assert service.get_pinned_ids("folderB") == []
    assert memory_repository.save_count == 1


async def test_pins_and_unpins_notes_in_notebook_context(service: PinsService) -> None:
    await service.init()

    pin_result = await service.pin_note("note1", "folderA")
    assert pin_result.changed is True
    assert service.get_pinned_ids("folderA") == ["note1"]

    unpin_result = await service.unpin_note("note1", "folderA")
    assert unpin_result.changed is True
    assert service.get_pinned_ids("folderA") == []
    assert "folderA" not in service.get_state_snapshot().pins_by_folder_id


async def test_pin_requires_note_and_folder(service: PinsService) -> None:
    await service.init()

    for note_id, folder_id in (("", "folderA"), ("note1", "")):
        result = await service.pin_note(note_id, folder_id)
        assert result.changed is False
        assert result.message


async def test_pinning_twice_is_a_no_op(
    service: PinsService, memory_repository: MemoryPinsRepository
) -> None:
    await service.init()
    await service.pin_note("note1", "folderA")
    saves = memory_repository.save_count

    result = await service.pin_note("note1", "folderA")

    assert result.changed is False
    assert "already pinned" in result.message
    assert service.get_pinned_ids("folderA") == ["note1"]
    assert memory_repository.save_count == saves


async def test_pinning_elsewhere_moves_the_pin(service: PinsService) -> None:
    await service.init()
    await service.pin_note("note1", "folderA")
    await service.pin_note("note2", "folderA")

    result = await service.pin_note("note1", "folderB")

    assert result.changed is True
    assert service.get_pinned_ids("folderA") == ["note2"]
    assert service.get_pinned_ids("folderB") == ["note1"]
    assert service.get_state_snapshot().note_to_folder_index == {
        "note1": "folderB",
        "note2": "folderA",
    }


async def test_enforces_max_pins_per_notebook(
    service: PinsService, memory_repository: MemoryPinsRepository
) -> None:
    memory_repository.max_pins = 1
    await service.init()

    await service.pin_note("note1", "folderA")
    result = await service.pin_note("note2", "folderA")

    assert result.changed is False
    assert "maximum of 1" in result.message
    assert service.get_pinned_ids("folderA") == ["note1"]


async def test_capacity_rejection_keeps_the_pin_in_its_old_folder(
    service: PinsService, memory_repository: MemoryPinsRepository
) -> None:
    memory_repository.max_pins = 1
    await service.init()
    await service.pin_note("note1", "folderA")
    await service.pin_note("note4", "folderB")

    result = await service.pin_note("note4", "folderA")

    assert result.changed is False
    assert service.get_pinned_ids("folderB") == ["note4"]


async def test_unpin_elsewhere_is_a_silent_no_op(
    service: PinsService, memory_repository: MemoryPinsRepository
) -> None:
    await service.init()
    await service.pin_note("note1", "folderA")
    saves = memory_repository.save_count

    result = await service.unpin_note("note1", "folderB")

    assert result.changed is False
    assert result.message is None
    assert service.get_pinned_ids("folderA") == ["note1"]
    assert memory_repository.save_count == saves


async def test_pin_reorder_unpin_scenario(service: PinsService) -> None:
    await service.init()

    await service.pin_note("n1", "f1")
    assert service.get_pinned_ids("f1") == ["n1"]
    await service.pin_note("n2", "f1")
    assert service.get_pinned_ids("f1") == ["n1", "n2"]
    await service.reorder_pins("f1", ["n2", "n1"])
    assert service.get_pinned_ids("f1") == ["n2", "n1"]
    await service.unpin_note("n1", "f1")
    assert service.get_pinned_ids("f1") == ["n2"]


@pytest.mark.parametrize(
    "requested",
    [
        [],
        ["note1", "note2"],
        ["note1", "note1", "note2"],
        ["note1", "note2", "note3", "note4"],
        ["note1", "note2", "note4"],
        [["note1"], "note2", "note3"],
        ["note1", "note2", 3],
    ],
)
async def test_reorder_rejects_anything_but_a_permutation(
    service: PinsService, memory_repository: MemoryPinsRepository, requested: list[str]
) -> None:
    await service.init()
    for note_id in ("note1", "note2", "note3"):
        await service.pin_note(note_id, "folderA")
    saves = memory_repository.save_count

    result = await service.reorder_pins("folderA", requested)

    assert result.changed is False
    assert result.message == "Invalid reorder payload."
    assert service.get_pinned_ids("folderA") == ["note1", "note2", "note3"]
    assert memory_repository.save_count == saves


async def test_reorder_rejects_folder_without_pins(service: PinsService) -> None:
    await service.init()

    result = await service.reorder_pins("folderA", ["note1"])

    assert result.changed is False
    assert result.message == "Invalid reorder payload."


async def test_reorder_with_identical_order_does_not_persist(
    service: PinsService, memory_repository: MemoryPinsRepository
) -> None:
    await service.init()
    await service.pin_note("note1", "folderA")
    await service.pin_note("note2", "folderA")
    saves = memory_repository.save_count

    result = await service.reorder_pins("folderA", ["note1", "note2"])

    assert result.changed is False
    assert result.message is None
    assert memory_repository.save_count == saves


async def test_snapshot_and_pinned_ids_are_defensive_copies(service: PinsService) -> None:
    await service.init()
    await service.pin_note("note1", "folderA")

    service.get_pinned_ids("folderA").append("intruder")
    snapshot = service.get_state_snapshot()
    snapshot.pins_by_folder_id["folderA"].append("intruder")
    snapshot.note_to_folder_index["intruder"] = "folderA"

    assert service.get_pinned_ids("folderA") == ["note1"]
    assert "intruder" not in service.get_state_snapshot().note_to_folder_index


async def test_persisted_state_matches_memory(
    service: PinsService, memory_repository: MemoryPinsRepository
) -> None:
    await service.init()
    await service.pin_note("note1", "folderA")
    await service.pin_note("note4", "folderB")

    stored = memory_repository.state
    assert stored.pins_by_folder_id == {"folderA": ["note1"], "folderB": ["note4"]}
    assert stored.note_to_folder_index == {"note1": "folderA", "note4": "folderB"}
    assert stored.updated_at > 0


async def test_repository_write_failure_propagates(
    service: PinsService, memory_repository: MemoryPinsRepository
) -> None:
    await service.init()
    memory_repository.fail_on_save = True

    with pytest.raises(OSError, match="Disk full"):
        await service.pin_note("note1", "folderA")


async def test_write_failure_rolls_memory_back_to_last_saved_state(
    service: PinsService, memory_repository: MemoryPinsRepository
) -> None:
    await service.init()
    await service.pin_note("note1", "folderA")
    memory_repository.fail_on_save = True

    with pytest.raises(OSError):
        await service.pin_note("note2", "folderA")
    with pytest.raises(OSError):
        await service.unpin_note("note1", "folderA")

    assert service.get_pinned_ids("folderA") == ["note1"]
    assert service.get_state_snapshot().note_to_folder_index == {"note1": "folderA"}

    memory_repository.fail_on_save = False
    assert (await service.pin_note("note2", "folderA")).changed is True
    assert memory_repository.state.pins_by_folder_id == {"folderA": ["note1", "note2"]}


async def test_open_pinned_note_delegates_to_adapter(
    service: PinsService, fake_notes_adapter: FakeNotesAdapter
) -> None:
    await service.open_pinned_note("note1")
    assert fake_notes_adapter.opened == ["note1"]
