# hashparity/run_harness.py
# Hash Parity Harness -- Entry Point.
#
# Standard invocation:
#   PACKS_DIR=tests/packs BASELINE_DIR=tests/baseline \
#   HASHPARITY_ENGINE=rssp:compute_all_hashes \
#       python -m hashparity.run_harness [FILTER] [--exact] [--skip S]... \
#           [--list] [--ignored]
#
# Rerun one fixture:
#   python -m hashparity.run_harness --exact "PackA/Song1/file.ssc.zst"
#
# EXIT CODES:
#   0    -- Every selected fixture passed, or the fixture root does not exist.
#   4    -- Internal harness error (engine not configured or not loadable).
#   101  -- At least one fixture failed.
#
# Single-threaded. Fixtures run strictly in display_name order, one fully
# validated before the next begins, so console output never interleaves.

import argparse
import os
import sys
from typing import Iterable, List, Optional, Sequence, TextIO

from hashparity.chart_matcher import ChartMatcher
from hashparity.data_models.fixture import Fixture
from hashparity.data_models.verdict import FixtureOutcome, OutcomeStatus
from hashparity.engine_adapter import EngineAdapter
from hashparity.exceptions import EngineLoadError
from hashparity.failure_handler import FailureHandler
from hashparity.fixture_checker import FixtureChecker
from hashparity.fixture_discoverer import FixtureDiscoverer
from hashparity.harness_config import (
    ENV_BASELINE_DIR,
    ENV_ENGINE,
    ENV_PACKS_DIR,
    HarnessConfig,
)
from hashparity.harness_version import (
    EXIT_HARNESS_ERROR,
    EXIT_OK,
    EXIT_TESTS_FAILED,
)
from hashparity.storage.baseline_store import BaselineStore


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Hash parity harness: checks chart hashes against recorded baselines.",
        prog="python -m hashparity.run_harness",
    )
    parser.add_argument(
        "filter",
        nargs="?",
        default=None,
        help="Run only fixtures whose identifier contains this string.",
    )
    parser.add_argument(
        "--exact",
        action="store_true",
        default=False,
        help="Match FILTER against the whole identifier instead of a substring.",
    )
    parser.add_argument(
        "--skip",
        action="append",
        default=[],
        metavar="SUBSTRING",
        help="Exclude fixtures whose identifier contains SUBSTRING. Repeatable.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        default=False,
        help="List selected fixture identifiers and exit without running.",
    )
    parser.add_argument(
        "--ignored",
        action="store_true",
        default=False,
        help="Run only ignored fixtures (none are defined).",
    )
    return parser


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def select_fixtures(fixtures: Iterable[Fixture], config: HarnessConfig) -> List[Fixture]:
    """
    Apply the identifier filter, the skip list and ignored-only mode.
    Input order is preserved.
    """
    if config.ignored:
        # No fixture is ever marked ignored.
        return []

    selected = []
    for fixture in fixtures:
        name = fixture.display_name
        if config.filter is not None:
            if config.exact and name != config.filter:
                continue
            if not config.exact and config.filter not in name:
                continue
        if any(skip in name for skip in config.skip):
            continue
        selected.append(fixture)
    return selected


class HarnessRunner:
    """
    Discovery -> filtering -> sequential checking -> report.

    Args:
      config -- HarnessConfig for this run.
      engine -- EngineAdapter to use. When None, it is loaded from
                config.engine_path the first time a fixture needs it.
      out    -- Report stream (stdout by default).
      err    -- Harness error stream (stderr by default).

    Method:
      run() -> int   exit code
    """

    def __init__(
        self,
        config: HarnessConfig,
        engine: Optional[EngineAdapter] = None,
        out:    Optional[TextIO] = None,
        err:    Optional[TextIO] = None,
    ):
        self._config   = config
        self._engine   = engine
        self._out      = out if out is not None else sys.stdout
        self._err      = err if err is not None else sys.stderr
        self._outcomes: List[FixtureOutcome] = []

    @property
    def outcomes(self) -> List[FixtureOutcome]:
        """Outcomes of the last run, in execution order."""
        return list(self._outcomes)

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def run(self) -> int:
        config = self._config
        self._outcomes = []

        if not config.packs_dir.exists():
            self._print(f"No fixture directory found at {config.packs_dir}.")
            return EXIT_OK

        fixtures = select_fixtures(FixtureDiscoverer(config.packs_dir).discover(), config)

        if config.list_only:
            for fixture in fixtures:
                self._print(fixture.display_name)
            return EXIT_OK

        engine = self._engine
        if engine is None and fixtures:
            try:
                engine = EngineAdapter.from_import_path(config.engine_path or "")
            except EngineLoadError as exc:
                print(exc.message, file=self._err)
                return EXIT_HARNESS_ERROR

        checker = FixtureChecker(
            store=BaselineStore(config.baseline_dir, config.baseline_ext),
            engine=engine,
            matcher=ChartMatcher(
                config.step_type_scope.step_types, config.group_comparison,
            ),
            missing_baseline=config.missing_baseline,
            out=self._out,
        )
        handler = FailureHandler()
        counts = {status: 0 for status in OutcomeStatus}

        self._print(f"running {len(fixtures)} tests")
        for fixture in fixtures:
            outcome = checker.check(fixture)
            self._outcomes.append(outcome)
            counts[outcome.status] += 1

            if outcome.status is OutcomeStatus.PASS:
                self._print(f"test {fixture.display_name} ... ok")
            elif outcome.status is OutcomeStatus.SKIP:
                self._print(f"test {fixture.display_name} ... skipped (no baseline)")
            else:
                self._print(f"test {fixture.display_name} ... FAILED")
                handler.record(outcome.failure)

            # Stream CI logs predictably.
            self._out.flush()

        self._print()
        handler.write_report(self._out)

        failed = counts[OutcomeStatus.FAIL]
        result = "ok" if failed == 0 else "FAILED"
        self._print(
            f"test result: {result}. {counts[OutcomeStatus.PASS]} passed; "
            f"{failed} failed; {counts[OutcomeStatus.SKIP]} skipped"
        )
        return EXIT_OK if failed == 0 else EXIT_TESTS_FAILED


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse the command line once, then run the harness."""
    config = HarnessConfig.from_args(_parse_args(argv))
    return HarnessRunner(config).run()


def run_harness(
    packs_dir:    str,
    baseline_dir: str,
    engine_path:  str,
    args:         Sequence[str] = (),
) -> int:
    """
    Programmatic entry point for the hash parity harness.

    Executes the harness exactly as if invoked via:
        PACKS_DIR=<packs_dir> BASELINE_DIR=<baseline_dir> \
        HASHPARITY_ENGINE=<engine_path> \
            python -m hashparity.run_harness <args...>

    Runs in a child process so that the exit-code semantics and the console
    report are identical to a command line run.

    Returns:
        int: Process exit code (0, 4 or 101).
    """
    import subprocess

    env = dict(os.environ)
    env[ENV_PACKS_DIR]    = packs_dir
    env[ENV_BASELINE_DIR] = baseline_dir
    env[ENV_ENGINE]       = engine_path

    cmd = [sys.executable, "-m", "hashparity.run_harness", *args]
    proc = subprocess.run(cmd, env=env)
    return proc.returncode


if __name__ == "__main__":
    sys.exit(main())
