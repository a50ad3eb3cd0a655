# hashparity/__init__.py
# Hash parity harness: checks a chart hashing engine against content-addressed
# golden baselines over a corpus of compressed simfile fixtures.
# Harness Version: 1.0.0
#
# ENTRY POINT:
#   python -m hashparity.run_harness [FILTER] [--exact] [--skip S]... [--list] [--ignored]
#
# CI GATE:
#   python -m hashparity.ci_gate

from .harness_version import (
    HARNESS_VERSION,
    EXIT_OK,
    EXIT_HARNESS_ERROR,
    EXIT_TESTS_FAILED,
)
from .archive_reader import decompress
from .content_addressor import content_digest
from .chart_matcher import ChartMatcher
from .engine_adapter import EngineAdapter
from .failure_handler import FailureHandler
from .fixture_checker import FixtureChecker
from .fixture_discoverer import FixtureDiscoverer
from .harness_config import (
    GroupComparison,
    HarnessConfig,
    MissingBaselinePolicy,
    StepTypeScope,
)
from .storage.baseline_store import BaselineStore
from .run_harness import HarnessRunner, main as run_main, run_harness

__all__ = [
    # Version constants
    "HARNESS_VERSION",
    "EXIT_OK",
    "EXIT_HARNESS_ERROR",
    "EXIT_TESTS_FAILED",
    # Pipeline components
    "decompress",
    "content_digest",
    "BaselineStore",
    "ChartMatcher",
    "EngineAdapter",
    "FailureHandler",
    "FixtureChecker",
    "FixtureDiscoverer",
    "HarnessRunner",
    # Configuration
    "GroupComparison",
    "HarnessConfig",
    "MissingBaselinePolicy",
    "StepTypeScope",
    # Entry points
    "run_main",
    "run_harness",
]
