# hashparity/chart_matcher.py
# ChartMatcher -- compares expected (baseline) chart hashes against the
# engine's actual chart hashes, group by group.
#
# Comparison is exact string equality on hashes. Entries whose step type is
# outside the configured scope are dropped from both sides before grouping,
# so their presence, absence or content never affects the verdict.
# Groups present only in the actual results are not inspected.

from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Tuple

from hashparity.data_models.chart_entry import ActualEntry, BaselineEntry, ChartGroupKey
from hashparity.data_models.verdict import (
    ChartRow,
    ComparisonReport,
    GroupVerdict,
    VerdictKind,
)
from hashparity.harness_config import GroupComparison


def _group(entries: Iterable, step_types: frozenset) -> Dict[ChartGroupKey, list]:
    """Group in-scope entries by key, preserving relative order within a group."""
    groups: Dict[ChartGroupKey, list] = defaultdict(list)
    for entry in entries:
        key = ChartGroupKey.of(entry)
        if key.step_type not in step_types:
            continue
        groups[key].append(entry)
    return groups


def _rows(
    expected: Sequence[BaselineEntry],
    actual:   Sequence[ActualEntry],
) -> Tuple[ChartRow, ...]:
    """
    One row per index up to the longer side. The label is the baseline meter
    when recorded, otherwise the 1-based index.
    """
    rows = []
    for idx in range(max(len(expected), len(actual))):
        exp = expected[idx] if idx < len(expected) else None
        act = actual[idx] if idx < len(actual) else None
        if exp is not None and exp.meter is not None:
            label = str(exp.meter)
        else:
            label = str(idx + 1)
        rows.append(ChartRow(
            label=label,
            expected=exp.hash if exp is not None else None,
            actual=act.hash if act is not None else None,
        ))
    return tuple(rows)


class ChartMatcher:
    """
    Produces a ComparisonReport for one fixture.

    Args:
      step_types -- Step types in scope. Compared case-insensitively.
      comparison -- POSITIONAL: charts sharing a group key must appear in the
                    same order on both sides.
                    MULTISET: charts sharing a group key are compared as an
                    unordered collection (both sides sorted by hash first).

    Method:
      compare(expected, actual) -> ComparisonReport
    """

    def __init__(
        self,
        step_types: Iterable[str],
        comparison: GroupComparison = GroupComparison.POSITIONAL,
    ):
        self._step_types = frozenset(s.casefold() for s in step_types)
        self._comparison = comparison

    @property
    def step_types(self) -> frozenset:
        return self._step_types

    def _ordered(self, entries: List) -> List:
        if self._comparison is GroupComparison.MULTISET:
            return sorted(entries, key=lambda e: e.hash)
        return entries

    def compare(
        self,
        expected: Iterable[BaselineEntry],
        actual:   Iterable[ActualEntry],
    ) -> ComparisonReport:
        expected_groups = _group(expected, self._step_types)
        actual_groups   = _group(actual, self._step_types)

        verdicts = []
        for key in sorted(expected_groups):
            exp_entries = self._ordered(expected_groups[key])
            expected_hashes = tuple(e.hash for e in exp_entries)

            if key not in actual_groups:
                verdicts.append(GroupVerdict(
                    key=key,
                    kind=VerdictKind.MISSING_FROM_ACTUAL,
                    expected_hashes=expected_hashes,
                    actual_hashes=(),
                    rows=(),
                ))
                continue

            act_entries = self._ordered(actual_groups[key])
            rows = _rows(exp_entries, act_entries)
            matched = (
                len(exp_entries) == len(act_entries)
                and all(row.matched for row in rows)
            )
            verdicts.append(GroupVerdict(
                key=key,
                kind=VerdictKind.MATCH if matched else VerdictKind.MISMATCH,
                expected_hashes=expected_hashes,
                actual_hashes=tuple(a.hash for a in act_entries),
                rows=rows,
            ))

        return ComparisonReport(
            passed=all(v.matched for v in verdicts),
            verdicts=tuple(verdicts),
        )
