# hashparity/storage/baseline_store.py
# BaselineStore -- sharded, content-addressed, read-only baseline lookup.
#
# Layout:  <root>[/baseline]/<digest[:2]>/<digest>.<extension>
#
# The nested "<root>/baseline/" form is an older convention. It is probed
# once at construction; every lookup uses the root chosen then.
# A missing baseline file is a normal state and resolves to None.

import re
from pathlib import Path
from typing import List, Optional

from hashparity.archive_reader import decompress
from hashparity.data_models.chart_entry import BaselineEntry
from hashparity.exceptions import IoFailureError
from hashparity.harness_version import (
    BASELINE_EXTENSION,
    NESTED_BASELINE_DIR,
    SHARD_PREFIX_LENGTH,
)
from hashparity.storage.baseline_loader import load_baseline_entries

_HEX_DIGEST = re.compile(r"^[0-9a-f]+$")


def resolve_baseline_root(root: Path) -> Path:
    """Return <root>/baseline if it is a directory, else root."""
    nested = root / NESTED_BASELINE_DIR
    if nested.is_dir():
        return nested
    return root


class BaselineStore:
    """
    Maps a content digest to the expected chart results recorded for it.

    Method:
      resolve(digest) -> Optional[List[BaselineEntry]]
    """

    def __init__(self, root: Path, extension: str = BASELINE_EXTENSION):
        self._root      = resolve_baseline_root(Path(root))
        self._extension = extension.lstrip(".")

    @property
    def root(self) -> Path:
        """Baseline root in effect after the nested-layout probe."""
        return self._root

    @property
    def extension(self) -> str:
        return self._extension

    def path_for(self, digest: str) -> Path:
        """
        Storage path of the baseline for digest.
        Raises ValueError if digest is not a lower-case hex string of at
        least SHARD_PREFIX_LENGTH characters.
        """
        if len(digest) < SHARD_PREFIX_LENGTH or not _HEX_DIGEST.match(digest):
            raise ValueError(f"Not a content digest: {digest!r}")
        shard = digest[:SHARD_PREFIX_LENGTH]
        return self._root / shard / f"{digest}.{self._extension}"

    def resolve(self, digest: str) -> Optional[List[BaselineEntry]]:
        """
        Load the baseline entries for digest, or None if none is stored.

        Raises IoFailureError if the file exists but cannot be read,
        CorruptArchiveError if it does not decompress, and
        InvalidBaselineFormatError if its content is not a baseline.
        """
        path = self.path_for(digest)
        try:
            compressed = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise IoFailureError(
                f"Failed to read baseline file {path}: {exc}"
            ) from exc

        raw = decompress(compressed, source=f"baseline {path}")
        return load_baseline_entries(raw, source=str(path))
