# hashparity/failure_handler.py
# FailureHandler -- captures per-fixture failures and writes the end-of-run
# failure report.
#
# A failure is attributed to exactly one fixture and never aborts the run.
# Each diagnostic carries the fixture path, the content digest (when known)
# and the expected vs actual values, so a failure can be debugged from the
# report alone. The report ends every block with a rerun command addressing
# the fixture by its exact identifier.

import shlex
from typing import List, Optional, TextIO

from hashparity.data_models.failure_record import FailureRecord
from hashparity.data_models.fixture import Fixture
from hashparity.data_models.verdict import ComparisonReport, VerdictKind
from hashparity.exceptions import HarnessError
from hashparity.harness_version import RERUN_COMMAND


def failure_from_exception(
    fixture: Fixture,
    exc:     HarnessError,
    digest:  Optional[str] = None,
) -> FailureRecord:
    return FailureRecord(
        failure_type_id=exc.failure_type_id,
        fixture_name=fixture.display_name,
        fixture_path=str(fixture.storage_path),
        digest=digest,
        detail=exc.detail,
    )


def failure_from_missing_baseline(
    fixture:       Fixture,
    digest:        str,
    baseline_path: str,
) -> FailureRecord:
    return FailureRecord(
        failure_type_id="MISSING_BASELINE",
        fixture_name=fixture.display_name,
        fixture_path=str(fixture.storage_path),
        digest=digest,
        detail=f"Expected baseline: {baseline_path}",
    )


def failure_from_report(
    fixture: Fixture,
    digest:  str,
    report:  ComparisonReport,
) -> FailureRecord:
    """
    Build the failure for a failed comparison. The failure type is that of
    the first failing group in key order; the detail lists every failing group.
    """
    failing = report.failures
    if not failing:
        raise ValueError(
            f"Comparison for {fixture.display_name} passed; nothing to record."
        )

    blocks = []
    for verdict in failing:
        if verdict.kind is VerdictKind.MISSING_FROM_ACTUAL:
            blocks.append(
                f"Missing chart: {verdict.key}\n"
                f"Baseline Hashes: {list(verdict.expected_hashes)!r}"
            )
        else:
            blocks.append(
                f"Chart: {verdict.key}\n"
                f"Engine Hashes:   {list(verdict.actual_hashes)!r}\n"
                f"Baseline Hashes: {list(verdict.expected_hashes)!r}"
            )

    first = failing[0].kind
    return FailureRecord(
        failure_type_id=(
            "MISSING_CHART" if first is VerdictKind.MISSING_FROM_ACTUAL else "MISMATCH"
        ),
        fixture_name=fixture.display_name,
        fixture_path=str(fixture.storage_path),
        digest=digest,
        detail="\n\n".join(blocks),
    )


def rerun_instruction(fixture_name: str, command: str = RERUN_COMMAND) -> str:
    return f"rerun: {command} {shlex.quote(fixture_name)}"


class FailureHandler:
    """
    Collects FailureRecords in run order.

    Methods:
      record(failure)    -- append one failure.
      write_report(out)  -- print the failure list and one diagnostic block
                            per failure. Prints nothing when no failure
                            was recorded.
    """

    def __init__(self, rerun_command: str = RERUN_COMMAND):
        self._rerun_command = rerun_command
        self._failures: List[FailureRecord] = []

    @property
    def failures(self) -> List[FailureRecord]:
        return list(self._failures)

    def record(self, failure: FailureRecord) -> None:
        self._failures.append(failure)

    def write_report(self, out: TextIO) -> None:
        if not self._failures:
            return

        print("failures:", file=out)
        for failure in self._failures:
            print(f"    {failure.fixture_name}", file=out)

        for failure in self._failures:
            print(file=out)
            print(f"---- {failure.fixture_name} ----", file=out)
            print(failure.message, file=out)
            print(file=out)
            print(rerun_instruction(failure.fixture_name, self._rerun_command), file=out)
        print(file=out)
