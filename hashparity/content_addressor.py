# hashparity/content_addressor.py
# Content Addressor -- digest of decompressed fixture bytes.
#
# The digest names the baseline file for a fixture. Baselines were recorded
# with `md5sum` over the uncompressed simfile, so the digest is the MD5 hex
# string of the raw bytes. It is a lookup key only, never an integrity check.

import hashlib

DIGEST_LENGTH: int = 32


def content_digest(raw: bytes) -> str:
    """Return the 32-character lower-case hex MD5 digest of raw."""
    return hashlib.md5(raw, usedforsecurity=False).hexdigest()
