# =============================================================================
# hashparity/exceptions.py
# Exception hierarchy for the hash parity harness.
# =============================================================================
#
# EXCEPTION HIERARCHY
# -------------------
#   HarnessError(RuntimeError)                 -- base; never raised directly
#     IoFailureError(HarnessError)             -- a file could not be read
#     CorruptArchiveError(HarnessError)        -- decompression failure
#     InvalidBaselineFormatError(HarnessError) -- baseline schema violation
#     EngineFailureError(HarnessError)         -- the engine rejected a fixture
#     EngineLoadError(HarnessError)            -- the engine could not be loaded
#
# MESSAGE CONTRACT
# ----------------
# Every message starts with the failure type id of its class followed by a
# colon ("CORRUPT_ARCHIVE: ..."), so the message alone identifies the
# failure class in console output and failure records. Messages are derived
# exclusively from constructor arguments.
#
# Failures during a single fixture check are caught by FixtureChecker and
# attributed to that fixture. EngineLoadError is a harness fault: it is
# raised before any fixture runs and ends the run with EXIT_HARNESS_ERROR.
# =============================================================================

from __future__ import annotations


class HarnessError(RuntimeError):
    """
    Base class for all harness exceptions.

    Attributes:
        failure_type_id: Key into FAILURE_TYPES. Class-level constant.
        detail:          Human-readable description without the type prefix.
        message:         "<failure_type_id>: <detail>".
    """

    failure_type_id: str = "HARNESS_INTERNAL_ERROR"

    def __init__(self, detail: str) -> None:
        if not isinstance(detail, str) or not detail:
            raise ValueError(
                f"{type(self).__name__}: detail must be a non-empty string"
            )
        self.detail:  str = detail
        self.message: str = f"{self.failure_type_id}: {detail}"
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(detail={self.detail!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HarnessError):
            return NotImplemented
        return type(self) is type(other) and self.detail == other.detail

    __hash__ = RuntimeError.__hash__


class IoFailureError(HarnessError):
    """Raised when a fixture or baseline file exists but cannot be read."""

    failure_type_id = "IO_FAILURE"


class CorruptArchiveError(HarnessError):
    """Raised when a zstd stream is empty, truncated or malformed."""

    failure_type_id = "CORRUPT_ARCHIVE"


class InvalidBaselineFormatError(HarnessError):
    """
    Raised when decompressed baseline content is not a JSON array of
    baseline entry objects.
    """

    failure_type_id = "INVALID_BASELINE_FORMAT"


class EngineFailureError(HarnessError):
    """Raised when the engine under test raises or returns a malformed result."""

    failure_type_id = "ENGINE_FAILURE"


class EngineLoadError(HarnessError):
    """Raised when the engine import path is missing, unimportable or not callable."""

    failure_type_id = "HARNESS_INTERNAL_ERROR"
