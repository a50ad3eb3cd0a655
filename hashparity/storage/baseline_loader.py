# hashparity/storage/baseline_loader.py
# Baseline loader -- deserializes decompressed baseline content into an
# ordered list of BaselineEntry records.
#
# Wire format: a UTF-8 JSON array of objects
#   {"difficulty": str, "steps_type": str, "hash": str, "meter": int?}
# "steps_type" is the wire name of BaselineEntry.step_type.
# "meter" may be absent or null; otherwise it is an unsigned 32-bit integer.
# Unknown keys are ignored. Entry order is preserved.
# Any other shape raises InvalidBaselineFormatError.

import json
from typing import Any, List, Optional

from hashparity.data_models.chart_entry import BaselineEntry
from hashparity.exceptions import InvalidBaselineFormatError

_STEP_TYPE_WIRE_NAME: str = "steps_type"
_METER_MAX: int = 2**32 - 1


def _require_str(item: dict, key: str, index: int, source: str) -> str:
    if key not in item:
        raise InvalidBaselineFormatError(
            f"Baseline entry {index} in {source} is missing field '{key}'."
        )
    value = item[key]
    if not isinstance(value, str):
        raise InvalidBaselineFormatError(
            f"Baseline entry {index} in {source}: field '{key}' must be a "
            f"string, got {type(value).__name__}."
        )
    return value


def _optional_meter(item: dict, index: int, source: str) -> Optional[int]:
    value: Any = item.get("meter")
    if value is None:
        return None
    # bool is an int subclass; JSON true/false is not a meter.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidBaselineFormatError(
            f"Baseline entry {index} in {source}: field 'meter' must be an "
            f"unsigned integer, got {value!r}."
        )
    if not 0 <= value <= _METER_MAX:
        raise InvalidBaselineFormatError(
            f"Baseline entry {index} in {source}: field 'meter' out of range: "
            f"{value}."
        )
    return value


def load_baseline_entries(raw: bytes, source: str = "<baseline>") -> List[BaselineEntry]:
    """
    Parse decompressed baseline bytes.

    Raises InvalidBaselineFormatError if the bytes are not UTF-8 JSON, the
    document is not an array, or any element is not a valid entry object.
    """
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise InvalidBaselineFormatError(
            f"Failed to parse baseline JSON {source}: {exc}"
        ) from exc

    if not isinstance(payload, list):
        raise InvalidBaselineFormatError(
            f"Baseline {source} must be a JSON array of chart entries, "
            f"got {type(payload).__name__}."
        )

    entries = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise InvalidBaselineFormatError(
                f"Baseline entry {index} in {source} must be an object, "
                f"got {type(item).__name__}."
            )
        entries.append(BaselineEntry(
            step_type=_require_str(item, _STEP_TYPE_WIRE_NAME, index, source),
            difficulty=_require_str(item, "difficulty", index, source),
            hash=_require_str(item, "hash", index, source),
            meter=_optional_meter(item, index, source),
        ))
    return entries
