# hashparity/archive_reader.py
# Archive Reader -- decompresses stored zstd archives into raw bytes.
#
# The same routine serves fixture archives and baseline archives.
# Pure: no filesystem access, no state between calls.
#
# Archives are produced by the zstd command line tool. When it compresses a
# pipe the frame header carries no content size, so frames are decoded with
# a streaming decompressor rather than a one-shot call. Concatenated frames
# are decoded in sequence.

import zstandard

from hashparity.exceptions import CorruptArchiveError


def _label(source: str) -> str:
    return f" ({source})" if source else ""


def decompress(data: bytes, source: str = "") -> bytes:
    """
    Decompress every zstd frame in data and return the concatenated content.

    source is a human-readable label (usually a path) included in error
    messages only.

    Raises CorruptArchiveError when data is empty, a frame is malformed,
    trailing bytes do not form a frame, or the final frame is truncated.
    """
    if not data:
        raise CorruptArchiveError(f"Archive is empty{_label(source)}.")

    dctx      = zstandard.ZstdDecompressor()
    chunks    = []
    remaining = data

    while remaining:
        dobj = dctx.decompressobj()
        try:
            chunks.append(dobj.decompress(remaining))
        except zstandard.ZstdError as exc:
            raise CorruptArchiveError(
                f"Failed to decompress archive{_label(source)}: {exc}"
            ) from exc
        if not dobj.eof:
            raise CorruptArchiveError(
                f"Archive is truncated{_label(source)}: "
                "zstd frame ended before its end marker."
            )
        remaining = dobj.unused_data

    return b"".join(chunks)
