# tests/unit/core/test_content_addressor.py
# Target: hashparity/content_addressor.py

from __future__ import annotations

from hashparity.content_addressor import DIGEST_LENGTH, content_digest


class TestContentDigest:

    def test_empty_bytes_known_value(self):
        assert content_digest(b"") == "d41d8cd98f00b204e9800998ecf8427e"

    def test_known_value(self):
        assert content_digest(b"abc") == "900150983cd24fb0d6963f7d28e17f72"

    def test_fixed_width_lower_hex(self):
        digest = content_digest(b"#TITLE:x;")
        assert len(digest) == DIGEST_LENGTH
        assert digest == digest.lower()
        int(digest, 16)

    def test_deterministic(self):
        assert content_digest(b"same") == content_digest(b"same")

    def test_distinct_content_distinct_digest(self):
        assert content_digest(b"a") != content_digest(b"b")
