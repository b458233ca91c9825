from tests.fakes.fake_notes_adapter import FakeNotesAdapter
from tests.fakes.memory_repository import MemoryPinsRepository

__all__ = ["FakeNotesAdapter", "MemoryPinsRepository"]
