# hashparity/data_models/chart_entry.py
# Expected (baseline) and actual (engine) chart results, and the group key
# both are matched on.

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BaselineEntry:
    """
    One expected chart result, as recorded in a baseline file.

    Fields:
      step_type  -- Game-mode discriminator ("dance-single", "dance-double").
                    Serialized under the wire name "steps_type".
      difficulty -- Named difficulty ("Hard", "Edit"). Case-insensitive.
      hash       -- Expected chart hash.
      meter      -- Numeric difficulty rating. Display only; never matched.
    """
    step_type:  str
    difficulty: str
    hash:       str
    meter:      Optional[int] = None


@dataclass(frozen=True)
class ActualEntry:
    """One chart result computed by the engine under test."""
    step_type:  str
    difficulty: str
    hash:       str


@dataclass(frozen=True, order=True)
class ChartGroupKey:
    """
    (step_type, difficulty), both case-folded.

    Several charts may share a key (multiple edits for one song), so the
    matcher groups entries by key rather than treating it as unique.
    Ordering is lexicographic on (step_type, difficulty).
    """
    step_type:  str
    difficulty: str

    @classmethod
    def of(cls, entry) -> "ChartGroupKey":
        return cls(entry.step_type.casefold(), entry.difficulty.casefold())

    def __str__(self) -> str:
        return f"{self.step_type} {self.difficulty}"
