"""Normalization of untrusted pin state and setting values.

Everything in this module is total: malformed input is dropped or replaced
with a default, never raised.
"""

import json
import math
import re
import time
from collections.abc import Mapping
from typing import Any

from notebook_pins.domain.pins import STATE_VERSION, PinsState

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_TRUE_STRINGS = {"1", "true", "yes", "on"}


def now_ms() -> int:
    return int(time.time() * 1000)


def create_empty_state(now: int | None = None) -> PinsState:
    return PinsState(
        version=STATE_VERSION,
        pins_by_folder_id={},
        note_to_folder_index={},
        updated_at=now_ms() if now is None else now,
    )


def _is_valid_id(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def sanitize_state(raw: Any) -> PinsState:
    """Normalize arbitrary input into a valid pin index.

    Folders are walked in the input's insertion order and the first folder
    to claim a note keeps it; later claims are dropped. The reverse index is
    always rebuilt from ``pinsByFolderId`` and never read from the input.

    Args:
        raw: A PinsState, a decoded JSON mapping or anything else

    Returns:
        A PinsState satisfying every index invariant
    """
    if isinstance(raw, PinsState):
        raw = raw.model_dump(by_alias=True)
    source: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    pins_by_folder_id: dict[str, list[str]] = {}
    note_to_folder_index: dict[str, str] = {}

    candidate_pins = source.get("pinsByFolderId")
    if isinstance(candidate_pins, Mapping):
        for folder_id, note_ids in candidate_pins.items():
            if not _is_valid_id(folder_id) or not isinstance(note_ids, (list, tuple)):
                continue

            cleaned = []
            for note_id in note_ids:
                if not _is_valid_id(note_id) or note_id in note_to_folder_index:
                    continue
                note_to_folder_index[note_id] = folder_id
                cleaned.append(note_id)

            if cleaned:
                pins_by_folder_id[folder_id] = cleaned

    updated_at = source.get("updatedAt")
    if not _is_finite_number(updated_at):
        updated_at = now_ms()

    return PinsState(
        version=STATE_VERSION,
        pins_by_folder_id=pins_by_folder_id,
        note_to_folder_index=note_to_folder_index,
        updated_at=updated_at,
    )


def _decode(raw: Any) -> Any:
    if not isinstance(raw, str):
        return raw
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def parse_stored_state(raw: Any) -> PinsState:
    """Decode a stored payload, falling back to an empty state.

    The payload is accepted when it carries the current version tag or at
    least a ``pinsByFolderId`` key. Corrupt JSON and foreign shapes yield an
    empty state.
    """
    parsed = _decode(raw)
    if not isinstance(parsed, Mapping):
        return create_empty_state()

    version = parsed.get("version")
    has_current_version = not isinstance(version, bool) and version == STATE_VERSION
    if has_current_version or "pinsByFolderId" in parsed:
        return sanitize_state(parsed)

    return create_empty_state()


def normalize_max_pins(raw: Any) -> int:
    """Coerce a capacity setting to a non-negative int, 0 meaning unlimited."""
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        value = raw
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if not match:
            return 0
        try:
            value = int(match.group(1))
        except ValueError:
            return 0
    else:
        return 0

    if not math.isfinite(value) or value < 0:
        return 0
    return math.floor(value)


def normalize_boolean_setting(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw != 0
    if not isinstance(raw, str):
        return False

    return raw.strip().lower() in _TRUE_STRINGS
