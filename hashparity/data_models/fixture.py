# hashparity/data_models/fixture.py
# Fixture data class.

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Fixture:
    """
    One discovered simfile archive. Created by FixtureDiscoverer, consumed
    once per run by FixtureChecker. Never persisted.

    Fields:
      display_name -- Path relative to the fixture root, "/"-separated
                      (e.g. "PackA/Song1/file.ssc.zst"). Test identifier;
                      rerun instructions address fixtures by this value.
      storage_path -- Location of the compressed archive on disk.
      format_hint  -- Lower-cased inner extension ("sm" or "ssc"),
                      passed to the engine unchanged.
    """
    display_name: str
    storage_path: Path
    format_hint:  str
