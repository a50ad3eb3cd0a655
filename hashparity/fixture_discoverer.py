# hashparity/fixture_discoverer.py
# FixtureDiscoverer -- enumerates eligible fixture archives under a root.
#
# A file is a fixture iff its name has the outer extension "zst" and, once
# that is stripped, an inner extension in SIMFILE_EXTENSIONS (compared
# case-insensitively):  "Song.SSC.zst" -> format hint "ssc".
# Everything else is skipped without error.
#
# Filesystem enumeration order is unspecified. discover() always sorts by
# display_name before returning.

from pathlib import Path, PurePath
from typing import Iterator, List, Optional

from hashparity.data_models.fixture import Fixture
from hashparity.harness_version import ARCHIVE_EXTENSION, SIMFILE_EXTENSIONS


def fixture_format_hint(path: PurePath) -> Optional[str]:
    """Return the lower-cased inner extension if path names a fixture, else None."""
    if path.suffix != "." + ARCHIVE_EXTENSION:
        return None
    inner = PurePath(path.stem).suffix[1:].lower()
    if inner not in SIMFILE_EXTENSIONS:
        return None
    return inner


class FixtureDiscoverer:
    """
    Walks a fixture root.

    Methods:
      iter_fixtures() -> Iterator[Fixture]   lazy, filesystem order
      discover()      -> List[Fixture]       sorted by display_name
    """

    def __init__(self, root: Path):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def iter_fixtures(self) -> Iterator[Fixture]:
        for path in self._root.rglob("*"):
            format_hint = fixture_format_hint(path)
            if format_hint is None or not path.is_file():
                continue
            yield Fixture(
                display_name=path.relative_to(self._root).as_posix(),
                storage_path=path,
                format_hint=format_hint,
            )

    def discover(self) -> List[Fixture]:
        return sorted(self.iter_fixtures(), key=lambda f: f.display_name)
