# hashparity/data_models/failure_record.py
# FailureRecord data class and failure type registry.

from dataclasses import dataclass
from typing import Optional


# ---------------------------------------------------------------------------
# FAILURE TYPE REGISTRY
# ---------------------------------------------------------------------------
# Maps every failure type id to the headline printed at the top of the
# diagnostic block. All fixture-level failure types end the run with
# EXIT_TESTS_FAILED; HARNESS_INTERNAL_ERROR ends it with EXIT_HARNESS_ERROR.

FAILURE_TYPES = {
    "IO_FAILURE":              "IO FAILURE",
    "CORRUPT_ARCHIVE":         "CORRUPT ARCHIVE",
    "INVALID_BASELINE_FORMAT": "INVALID BASELINE FORMAT",
    "ENGINE_FAILURE":          "ENGINE FAILURE",
    "MISSING_CHART":           "MISSING CHART DETECTED",
    "MISMATCH":                "MISMATCH DETECTED",
    "MISSING_BASELINE":        "MISSING BASELINE",
    "HARNESS_INTERNAL_ERROR":  "HARNESS INTERNAL ERROR",
}


@dataclass(frozen=True)
class FailureRecord:
    """
    Failure captured for one fixture. Written into the end-of-run report.

    Fields:
      failure_type_id -- Key from FAILURE_TYPES.
      fixture_name    -- Fixture.display_name; the rerun identifier.
      fixture_path    -- Filesystem path of the compressed fixture.
      digest          -- Content digest, or None if the failure happened
                         before the fixture was decompressed.
      detail          -- Multi-line diagnostic body.
    """
    failure_type_id: str
    fixture_name:    str
    fixture_path:    str
    digest:          Optional[str]
    detail:          str

    @property
    def headline(self) -> str:
        return FAILURE_TYPES.get(self.failure_type_id, self.failure_type_id)

    @property
    def message(self) -> str:
        """Headline, fixture context and detail, as printed in the report."""
        lines = [self.headline, f"File: {self.fixture_path}"]
        if self.digest is not None:
            lines.append(f"Hash: {self.digest}")
        lines.append(self.detail)
        return "\n".join(line for line in lines if line).strip()
