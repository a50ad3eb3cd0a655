#!/usr/bin/env python3
# =============================================================================
# hashparity -- CI GATE
# File:   hashparity/ci_gate.py
# =============================================================================
#
# Runs the hash parity harness over the full fixture corpus in a child
# process and reduces its exit code to a merge decision.
#
#   HASHPARITY_ENGINE=rssp:compute_all_hashes python -m hashparity.ci_gate
#
# Roots are resolved exactly as `python -m hashparity.run_harness` resolves
# them, so a rerun command from the failure report targets the same tree.
#
# Exit codes:
#   0 -- Harness exit 0: merge permitted.
#   1 -- Any other harness exit, or the harness could not be started.
# =============================================================================

from __future__ import annotations

import os
import sys
from typing import Mapping, Optional

from hashparity.harness_config import ENV_ENGINE, resolve_roots
from hashparity.harness_version import EXIT_OK
from hashparity.run_harness import run_harness

GATE_PASS:  int = 0
GATE_BLOCK: int = 1


def main(environ: Optional[Mapping[str, str]] = None) -> int:
    env = os.environ if environ is None else environ
    packs_dir, baseline_dir = resolve_roots(env)

    try:
        result = run_harness(
            packs_dir=str(packs_dir),
            baseline_dir=str(baseline_dir),
            engine_path=env.get(ENV_ENGINE, ""),
        )
    except OSError as exc:
        print(f"CI-PARITY-GATE: cannot start harness: {exc}", file=sys.stderr)
        return GATE_BLOCK

    if result == EXIT_OK:
        print("CI-PARITY-GATE: harness result=PASS. Merge permitted.")
        return GATE_PASS
    print(
        f"CI-PARITY-GATE: harness result={result} "
        f"(packs={packs_dir}, baseline={baseline_dir}). Merge BLOCKED.",
        file=sys.stderr,
    )
    return GATE_BLOCK


if __name__ == "__main__":
    sys.exit(main())
