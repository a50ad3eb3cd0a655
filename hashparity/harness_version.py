# hashparity/harness_version.py
# Harness version and layout constants. Single authoritative definition.
# Referenced by the discoverer, the baseline store, the runner and the
# failure handler. A change to any layout constant invalidates every
# recorded baseline tree and requires a harness version increment.

HARNESS_VERSION: str = "1.0.0"

# Outer extension carried by every stored fixture and baseline archive.
ARCHIVE_EXTENSION: str = "zst"

# Inner extensions accepted by the engine (format hints).
SIMFILE_EXTENSIONS: tuple = ("sm", "ssc")

# Baseline file suffix: <shard>/<digest>.<BASELINE_EXTENSION>
BASELINE_EXTENSION: str = "json.zst"

# Older trees nest the shards one level down, under <root>/baseline/.
NESTED_BASELINE_DIR: str = "baseline"

# Number of leading digest characters used as the shard directory name.
SHARD_PREFIX_LENGTH: int = 2

# Step types in scope for comparison.
DANCE_SINGLE: str = "dance-single"
DANCE_DOUBLE: str = "dance-double"

# Exit codes:
#   0   -- every selected fixture passed (or nothing to test).
#   4   -- internal harness error (engine not configured or not loadable).
#   101 -- at least one fixture failed.
EXIT_OK: int = 0
EXIT_HARNESS_ERROR: int = 4
EXIT_TESTS_FAILED: int = 101

# Command printed in failure reports so a single fixture can be rerun.
RERUN_COMMAND: str = "python -m hashparity.run_harness --exact"
