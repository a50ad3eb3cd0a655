# hashparity/engine_adapter.py
# EngineAdapter -- the only boundary between the harness and the chart
# hashing engine under test.
#
# The engine is an opaque callable:
#   compute(raw_bytes, format_hint) -> iterable of chart results
# Each chart result exposes step_type, difficulty and hash, either as
# attributes or as mapping keys ("steps_type" is accepted for step_type).
# Nothing is assumed about the order of charts beyond a consistent relative
# order within one group.
#
# Exceptions from the engine are caught only to attribute them to the
# fixture being checked. They are re-raised as EngineFailureError.

import importlib
from typing import Any, Callable, Iterable, List, Mapping

from hashparity.data_models.chart_entry import ActualEntry
from hashparity.exceptions import EngineFailureError, EngineLoadError

# Attribute looked up when an import path names a module only.
DEFAULT_ENGINE_ATTRIBUTE: str = "compute_chart_results"

_FIELDS = ("step_type", "difficulty", "hash")


def _field(result: Any, name: str) -> Any:
    if isinstance(result, Mapping):
        if name in result:
            return result[name]
        if name == "step_type" and "steps_type" in result:
            return result["steps_type"]
        raise KeyError(name)
    try:
        return getattr(result, name)
    except AttributeError:
        raise KeyError(name) from None


def _to_actual_entry(result: Any, index: int) -> ActualEntry:
    if isinstance(result, ActualEntry):
        return result
    values = {}
    for name in _FIELDS:
        try:
            value = _field(result, name)
        except KeyError:
            raise EngineFailureError(
                f"Engine result {index} has no '{name}': {result!r}"
            ) from None
        if not isinstance(value, str):
            raise EngineFailureError(
                f"Engine result {index}: '{name}' must be a string, "
                f"got {type(value).__name__}."
            )
        values[name] = value
    return ActualEntry(**values)


class EngineAdapter:
    """
    Wraps the engine callable.

    Method:
      compute_chart_results(raw, format_hint) -> List[ActualEntry]
    """

    def __init__(self, compute: Callable[[bytes, str], Iterable[Any]]):
        if not callable(compute):
            raise EngineLoadError(f"Engine is not callable: {compute!r}")
        self._compute = compute

    @classmethod
    def from_import_path(cls, import_path: str) -> "EngineAdapter":
        """
        Load the engine from "package.module:callable". A path without ":"
        uses the module's compute_chart_results attribute.

        Raises EngineLoadError if the path is empty, names no module or an
        empty attribute ("mod:"), the module fails to import for any reason,
        or the attribute is missing or not callable.
        """
        if not import_path:
            raise EngineLoadError(
                "No chart hashing engine configured. Set HASHPARITY_ENGINE to "
                "'package.module:callable'."
            )
        module_name, sep, attr = import_path.partition(":")
        if not module_name or (sep and not attr):
            raise EngineLoadError(
                f"Malformed engine path '{import_path}': expected "
                "'package.module' or 'package.module:callable'."
            )
        attr = attr or DEFAULT_ENGINE_ATTRIBUTE
        try:
            module = importlib.import_module(module_name)
        except Exception as exc:
            # Errors raised while executing the engine module count too.
            raise EngineLoadError(
                f"Cannot import engine module '{module_name}': {exc}"
            ) from exc
        compute = getattr(module, attr, None)
        if compute is None:
            raise EngineLoadError(
                f"Engine module '{module_name}' has no attribute '{attr}'."
            )
        return cls(compute)

    def compute_chart_results(self, raw: bytes, format_hint: str) -> List[ActualEntry]:
        """
        Run the engine over raw fixture bytes.

        Raises EngineFailureError if the engine raises, returns something that
        is not iterable, or returns a malformed chart result.
        """
        try:
            results = list(self._compute(raw, format_hint))
        except Exception as exc:
            raise EngineFailureError(
                f"Engine rejected {format_hint} input: "
                f"{type(exc).__name__}: {exc}"
            ) from exc
        return [_to_actual_entry(result, i) for i, result in enumerate(results)]
