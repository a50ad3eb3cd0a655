# hashparity/data_models/verdict.py
# Verdict data classes produced by ChartMatcher and FixtureChecker.

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from hashparity.data_models.chart_entry import ChartGroupKey
from hashparity.data_models.failure_record import FailureRecord
from hashparity.data_models.fixture import Fixture


class VerdictKind(Enum):
    MATCH = "MATCH"
    MISMATCH = "MISMATCH"
    MISSING_FROM_ACTUAL = "MISSING_FROM_ACTUAL"


class OutcomeStatus(Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    SKIP = "SKIP"


@dataclass(frozen=True)
class ChartRow:
    """
    One compared index within a chart group.

    label is the baseline meter when recorded, otherwise the 1-based index.
    expected / actual are None when that side has no chart at this index.
    """
    label:    str
    expected: Optional[str]
    actual:   Optional[str]

    @property
    def matched(self) -> bool:
        return self.expected is not None and self.expected == self.actual


@dataclass(frozen=True)
class GroupVerdict:
    """
    Verdict for one ChartGroupKey present in the baseline.

    Fields:
      key             -- The chart group.
      kind            -- MATCH, MISMATCH or MISSING_FROM_ACTUAL.
      expected_hashes -- Baseline hashes in comparison order.
      actual_hashes   -- Engine hashes in comparison order. Empty when missing.
      rows            -- One ChartRow per compared index. Empty when missing.
    """
    key:             ChartGroupKey
    kind:            VerdictKind
    expected_hashes: Tuple[str, ...]
    actual_hashes:   Tuple[str, ...]
    rows:            Tuple[ChartRow, ...]

    @property
    def matched(self) -> bool:
        return self.kind is VerdictKind.MATCH


@dataclass(frozen=True)
class ComparisonReport:
    """
    Ordered group verdicts for one fixture.

    Fields:
      passed   -- True iff every baseline group matched.
      verdicts -- GroupVerdicts sorted by ChartGroupKey.
    """
    passed:   bool
    verdicts: Tuple[GroupVerdict, ...]

    @property
    def failures(self) -> Tuple[GroupVerdict, ...]:
        return tuple(v for v in self.verdicts if not v.matched)


@dataclass(frozen=True)
class FixtureOutcome:
    """
    Result of checking one fixture.

    digest is None when the check failed before decompression finished.
    report is None when the check never reached comparison.
    failure is set iff status is FAIL.
    """
    fixture: Fixture
    status:  OutcomeStatus
    digest:  Optional[str] = None
    report:  Optional[ComparisonReport] = None
    failure: Optional[FailureRecord] = None
