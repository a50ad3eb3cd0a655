# tests/unit/matching/test_chart_matcher.py
# Target: hashparity/chart_matcher.py

from __future__ import annotations

import pytest

from hashparity.chart_matcher import ChartMatcher
from hashparity.data_models.chart_entry import ActualEntry, BaselineEntry, ChartGroupKey
from hashparity.data_models.verdict import VerdictKind
from hashparity.harness_config import GroupComparison, StepTypeScope


# =============================================================================
# Helpers
# =============================================================================

def _exp(step_type, difficulty, hash_, meter=None) -> BaselineEntry:
    return BaselineEntry(step_type=step_type, difficulty=difficulty, hash=hash_, meter=meter)


def _act(step_type, difficulty, hash_) -> ActualEntry:
    return ActualEntry(step_type=step_type, difficulty=difficulty, hash=hash_)


def _matcher(comparison=GroupComparison.POSITIONAL, scope=StepTypeScope.SINGLE_AND_DOUBLE):
    return ChartMatcher(scope.step_types, comparison)


# =============================================================================
# Basic verdicts
# =============================================================================

class TestBasicVerdicts:

    def test_exact_reproduction_passes(self):
        report = _matcher().compare(
            [_exp("dance-single", "Hard", "abc123")],
            [_act("dance-single", "hard", "abc123")],
        )
        assert report.passed
        assert [v.kind for v in report.verdicts] == [VerdictKind.MATCH]

    def test_hash_difference_is_mismatch(self):
        report = _matcher().compare(
            [_exp("dance-single", "Hard", "abc123")],
            [_act("dance-single", "hard", "xyz999")],
        )
        assert not report.passed
        verdict = report.verdicts[0]
        assert verdict.kind is VerdictKind.MISMATCH
        assert verdict.expected_hashes == ("abc123",)
        assert verdict.actual_hashes == ("xyz999",)

    def test_missing_group_is_missing_not_mismatch(self):
        report = _matcher().compare(
            [_exp("dance-double", "Hard", "abc123")],
            [_act("dance-single", "hard", "abc123")],
        )
        assert not report.passed
        assert report.verdicts[0].kind is VerdictKind.MISSING_FROM_ACTUAL
        assert report.verdicts[0].rows == ()

    def test_empty_expected_passes(self):
        report = _matcher().compare([], [_act("dance-single", "hard", "x")])
        assert report.passed
        assert report.verdicts == ()

    def test_extra_actual_groups_ignored(self):
        report = _matcher().compare(
            [_exp("dance-single", "Hard", "a")],
            [_act("dance-single", "Hard", "a"), _act("dance-single", "Challenge", "b")],
        )
        assert report.passed
        assert len(report.verdicts) == 1


# =============================================================================
# Case folding and step type scope
# =============================================================================

class TestKeysAndScope:

    def test_keys_case_folded(self):
        report = _matcher().compare(
            [_exp("Dance-Single", "HARD", "a")],
            [_act("dance-single", "hard", "a")],
        )
        assert report.passed
        assert report.verdicts[0].key == ChartGroupKey("dance-single", "hard")

    def test_out_of_scope_expected_ignored(self):
        report = _matcher().compare(
            [_exp("dance-single", "Hard", "a"), _exp("pump-single", "Hard", "zzz")],
            [_act("dance-single", "Hard", "a")],
        )
        assert report.passed

    def test_out_of_scope_actual_ignored(self):
        report = _matcher().compare(
            [_exp("dance-single", "Hard", "a")],
            [_act("dance-single", "Hard", "a"), _act("dance-couple", "Hard", "q")],
        )
        assert report.passed

    def test_single_scope_ignores_double(self):
        report = _matcher(scope=StepTypeScope.SINGLE).compare(
            [_exp("dance-single", "Hard", "a"), _exp("dance-double", "Hard", "b")],
            [_act("dance-single", "Hard", "a")],
        )
        assert report.passed

    def test_double_in_default_scope(self):
        report = _matcher().compare(
            [_exp("dance-double", "Hard", "b")],
            [_act("dance-double", "Hard", "c")],
        )
        assert report.verdicts[0].kind is VerdictKind.MISMATCH

    def test_scope_stored_case_folded(self):
        assert ChartMatcher(["Dance-Single"]).step_types == frozenset({"dance-single"})


# =============================================================================
# Ordering
# =============================================================================

class TestOrdering:

    def test_verdicts_sorted_by_key(self):
        expected = [
            _exp("dance-single", "Hard", "1"),
            _exp("dance-double", "Medium", "2"),
            _exp("dance-single", "Easy", "3"),
            _exp("dance-double", "Beginner", "4"),
        ]
        actual = [_act(e.step_type, e.difficulty, e.hash) for e in reversed(expected)]
        keys = [v.key for v in _matcher().compare(expected, actual).verdicts]
        assert keys == [
            ChartGroupKey("dance-double", "beginner"),
            ChartGroupKey("dance-double", "medium"),
            ChartGroupKey("dance-single", "easy"),
            ChartGroupKey("dance-single", "hard"),
        ]

    def test_same_result_for_shuffled_groups(self):
        expected = [_exp("dance-single", d, d) for d in ("Hard", "Easy", "Edit")]
        actual = [_act("dance-single", d, d) for d in ("Edit", "Hard", "Easy")]
        first = _matcher().compare(expected, actual)
        second = _matcher().compare(list(reversed(expected)), actual)
        assert first == second


# =============================================================================
# Duplicate groups (multiple edits)
# =============================================================================

class TestDuplicateGroups:

    def test_positional_match(self):
        report = _matcher().compare(
            [_exp("dance-single", "Edit", "e1"), _exp("dance-single", "Edit", "e2")],
            [_act("dance-single", "Edit", "e1"), _act("dance-single", "Edit", "e2")],
        )
        assert report.passed
        assert len(report.verdicts[0].rows) == 2

    def test_positional_reordered_is_mismatch(self):
        report = _matcher().compare(
            [_exp("dance-single", "Edit", "e1"), _exp("dance-single", "Edit", "e2")],
            [_act("dance-single", "Edit", "e2"), _act("dance-single", "Edit", "e1")],
        )
        assert not report.passed
        assert report.verdicts[0].kind is VerdictKind.MISMATCH

    def test_multiset_reordered_matches(self):
        report = _matcher(GroupComparison.MULTISET).compare(
            [_exp("dance-single", "Edit", "e1"), _exp("dance-single", "Edit", "e2")],
            [_act("dance-single", "Edit", "e2"), _act("dance-single", "Edit", "e1")],
        )
        assert report.passed

    def test_multiset_still_counts_duplicates(self):
        report = _matcher(GroupComparison.MULTISET).compare(
            [_exp("dance-single", "Edit", "e1"), _exp("dance-single", "Edit", "e1")],
            [_act("dance-single", "Edit", "e1")],
        )
        assert not report.passed

    def test_extra_actual_chart_in_group_is_mismatch(self):
        report = _matcher().compare(
            [_exp("dance-single", "Edit", "e1")],
            [_act("dance-single", "Edit", "e1"), _act("dance-single", "Edit", "e2")],
        )
        verdict = report.verdicts[0]
        assert verdict.kind is VerdictKind.MISMATCH
        assert verdict.rows[1].expected is None
        assert verdict.rows[1].actual == "e2"
        assert not verdict.rows[1].matched

    def test_missing_actual_chart_in_group_is_mismatch(self):
        report = _matcher().compare(
            [_exp("dance-single", "Edit", "e1"), _exp("dance-single", "Edit", "e2")],
            [_act("dance-single", "Edit", "e1")],
        )
        verdict = report.verdicts[0]
        assert verdict.kind is VerdictKind.MISMATCH
        assert verdict.rows[0].matched
        assert verdict.rows[1].actual is None


# =============================================================================
# Row labels
# =============================================================================

class TestRowLabels:

    def test_meter_used_as_label(self):
        report = _matcher().compare(
            [_exp("dance-single", "Edit", "e1", meter=12), _exp("dance-single", "Edit", "e2")],
            [_act("dance-single", "Edit", "e1"), _act("dance-single", "Edit", "e2")],
        )
        assert [r.label for r in report.verdicts[0].rows] == ["12", "2"]

    def test_index_label_for_actual_only_row(self):
        report = _matcher().compare(
            [_exp("dance-single", "Edit", "e1", meter=7)],
            [_act("dance-single", "Edit", "e1"), _act("dance-single", "Edit", "e2")],
        )
        assert [r.label for r in report.verdicts[0].rows] == ["7", "2"]

    def test_meter_never_matched(self):
        report = _matcher().compare(
            [_exp("dance-single", "Hard", "a", meter=99)],
            [_act("dance-single", "Hard", "a")],
        )
        assert report.passed


class TestReportFailures:

    @pytest.mark.parametrize("comparison", list(GroupComparison))
    def test_failures_lists_only_failing_groups(self, comparison):
        report = _matcher(comparison).compare(
            [_exp("dance-single", "Hard", "a"), _exp("dance-single", "Easy", "b"),
             _exp("dance-double", "Hard", "c")],
            [_act("dance-single", "Hard", "a"), _act("dance-single", "Easy", "x")],
        )
        assert [v.key for v in report.failures] == [
            ChartGroupKey("dance-double", "hard"),
            ChartGroupKey("dance-single", "easy"),
        ]
