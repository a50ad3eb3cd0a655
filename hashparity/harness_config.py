# hashparity/harness_config.py
# HarnessConfig -- immutable run configuration, built once at startup and
# passed explicitly to discovery, filtering and checking.
#
# Sources:
#   CLI arguments  -- filter, --exact, --skip, --list, --ignored.
#   Environment    -- PACKS_DIR, BASELINE_DIR (shared with the baseline
#                     generation scripts), HASHPARITY_ENGINE,
#                     HASHPARITY_BASELINE_EXT.
#   Policies       -- fixed at construction; one behavior per axis.

import argparse
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Tuple

from hashparity.harness_version import BASELINE_EXTENSION, DANCE_DOUBLE, DANCE_SINGLE

ENV_PACKS_DIR:     str = "PACKS_DIR"
ENV_BASELINE_DIR:  str = "BASELINE_DIR"
ENV_ENGINE:        str = "HASHPARITY_ENGINE"
ENV_BASELINE_EXT:  str = "HASHPARITY_BASELINE_EXT"

DEFAULT_PACKS_DIR:    str = "packs"
DEFAULT_BASELINE_DIR: str = "baseline"


def resolve_roots(environ: Optional[Mapping[str, str]] = None) -> Tuple[Path, Path]:
    """
    (packs_dir, baseline_dir) from PACKS_DIR / BASELINE_DIR. Unset or empty
    values fall back to "packs" / "baseline", relative to the working
    directory. Every entry point resolves its roots here.
    """
    env = os.environ if environ is None else environ
    return (
        Path(env.get(ENV_PACKS_DIR) or DEFAULT_PACKS_DIR),
        Path(env.get(ENV_BASELINE_DIR) or DEFAULT_BASELINE_DIR),
    )


class MissingBaselinePolicy(Enum):
    """What a fixture with no stored baseline counts as."""
    FAIL = "FAIL"   # MISSING_BASELINE failure; a checked-in fixture drifted.
    SKIP = "SKIP"   # reported as skipped; does not affect the exit status.


class GroupComparison(Enum):
    """How charts sharing one (step_type, difficulty) group are compared."""
    POSITIONAL = "POSITIONAL"
    MULTISET   = "MULTISET"


class StepTypeScope(Enum):
    """Step types whose charts take part in comparison."""
    SINGLE            = (DANCE_SINGLE,)
    SINGLE_AND_DOUBLE = (DANCE_SINGLE, DANCE_DOUBLE)

    @property
    def step_types(self) -> frozenset:
        return frozenset(self.value)


@dataclass(frozen=True)
class HarnessConfig:
    """
    Fields:
      packs_dir        -- Fixture root.
      baseline_dir     -- Baseline root (nested "baseline/" probed by the store).
      filter           -- Optional identifier filter.
      exact            -- filter must equal the identifier instead of being a
                          substring of it.
      skip             -- Identifiers containing any of these are excluded.
      list_only        -- Print selected identifiers; run nothing.
      ignored          -- Run only ignored fixtures. None are defined, so the
                          selection is always empty.
      engine_path      -- Import path of the engine callable.
      baseline_ext     -- Baseline file suffix after the digest.
      missing_baseline -- MissingBaselinePolicy.
      group_comparison -- GroupComparison.
      step_type_scope  -- StepTypeScope.
    """
    packs_dir:        Path
    baseline_dir:     Path
    filter:           Optional[str] = None
    exact:            bool = False
    skip:             Tuple[str, ...] = ()
    list_only:        bool = False
    ignored:          bool = False
    engine_path:      Optional[str] = None
    baseline_ext:     str = BASELINE_EXTENSION
    missing_baseline: MissingBaselinePolicy = MissingBaselinePolicy.FAIL
    group_comparison: GroupComparison = GroupComparison.POSITIONAL
    step_type_scope:  StepTypeScope = StepTypeScope.SINGLE_AND_DOUBLE

    @classmethod
    def from_args(
        cls,
        args: argparse.Namespace,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "HarnessConfig":
        """Build the configuration from parsed CLI arguments and the environment."""
        env = os.environ if environ is None else environ
        packs_dir, baseline_dir = resolve_roots(env)
        return cls(
            packs_dir=packs_dir,
            baseline_dir=baseline_dir,
            filter=args.filter,
            exact=bool(args.exact),
            skip=tuple(args.skip or ()),
            list_only=bool(args.list),
            ignored=bool(args.ignored),
            engine_path=env.get(ENV_ENGINE) or None,
            baseline_ext=env.get(ENV_BASELINE_EXT) or BASELINE_EXTENSION,
        )
