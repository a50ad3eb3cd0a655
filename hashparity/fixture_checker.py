# hashparity/fixture_checker.py
# FixtureChecker -- validates one fixture end to end:
#   read -> decompress -> digest -> resolve baseline -> compute -> compare
#
# Single-threaded. One fixture is fully validated before the caller starts
# the next. Decompressed content and baseline entries are local to check()
# and released when it returns; nothing is cached across fixtures.
#
# Every HarnessError raised during a check is converted into a FAIL outcome
# for that fixture. Other exceptions are harness bugs and propagate.

import sys
from typing import Optional, TextIO

from hashparity.archive_reader import decompress
from hashparity.chart_matcher import ChartMatcher
from hashparity.content_addressor import content_digest
from hashparity.data_models.fixture import Fixture
from hashparity.data_models.verdict import (
    ComparisonReport,
    FixtureOutcome,
    OutcomeStatus,
    VerdictKind,
)
from hashparity.engine_adapter import EngineAdapter
from hashparity.exceptions import HarnessError, IoFailureError
from hashparity.failure_handler import (
    failure_from_exception,
    failure_from_missing_baseline,
    failure_from_report,
)
from hashparity.harness_config import MissingBaselinePolicy
from hashparity.storage.baseline_store import BaselineStore


def _print_report(fixture: Fixture, report: ComparisonReport, out: TextIO) -> None:
    """Per-chart progress lines for one fixture."""
    print(f"File: {fixture.storage_path}", file=out)
    for verdict in report.verdicts:
        if verdict.kind is VerdictKind.MISSING_FROM_ACTUAL:
            print(f"  {verdict.key}: baseline present, engine missing chart", file=out)
            continue
        for row in verdict.rows:
            status = "....ok" if row.matched else "....MISMATCH"
            print(
                f"  {verdict.key} [{row.label}]: "
                f"baseline: {row.expected or '-'} -> engine: {row.actual or '-'} "
                f"{status}",
                file=out,
            )


class FixtureChecker:
    """
    Runs the per-fixture pipeline against a BaselineStore and an engine.

    Method:
      check(fixture) -> FixtureOutcome
    """

    def __init__(
        self,
        store:            BaselineStore,
        engine:           EngineAdapter,
        matcher:          ChartMatcher,
        missing_baseline: MissingBaselinePolicy = MissingBaselinePolicy.FAIL,
        out:              Optional[TextIO] = None,
    ):
        self._store            = store
        self._engine           = engine
        self._matcher          = matcher
        self._missing_baseline = missing_baseline
        self._out              = out if out is not None else sys.stdout

    def check(self, fixture: Fixture) -> FixtureOutcome:
        digest = None
        try:
            try:
                compressed = fixture.storage_path.read_bytes()
            except OSError as exc:
                raise IoFailureError(
                    f"Failed to read fixture {fixture.storage_path}: {exc}"
                ) from exc

            raw    = decompress(compressed, source=f"fixture {fixture.storage_path}")
            digest = content_digest(raw)

            expected = self._store.resolve(digest)
            if expected is None:
                if self._missing_baseline is MissingBaselinePolicy.SKIP:
                    return FixtureOutcome(
                        fixture=fixture, status=OutcomeStatus.SKIP, digest=digest,
                    )
                return FixtureOutcome(
                    fixture=fixture,
                    status=OutcomeStatus.FAIL,
                    digest=digest,
                    failure=failure_from_missing_baseline(
                        fixture, digest, str(self._store.path_for(digest)),
                    ),
                )

            actual = self._engine.compute_chart_results(raw, fixture.format_hint)
        except HarnessError as exc:
            return FixtureOutcome(
                fixture=fixture,
                status=OutcomeStatus.FAIL,
                digest=digest,
                failure=failure_from_exception(fixture, exc, digest),
            )

        report = self._matcher.compare(expected, actual)
        _print_report(fixture, report, self._out)

        if report.passed:
            return FixtureOutcome(
                fixture=fixture, status=OutcomeStatus.PASS, digest=digest, report=report,
            )
        return FixtureOutcome(
            fixture=fixture,
            status=OutcomeStatus.FAIL,
            digest=digest,
            report=report,
            failure=failure_from_report(fixture, digest, report),
        )
