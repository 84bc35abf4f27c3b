"""Unit tests for canonical ID generation."""

import pytest

from canonurl.normalization import CanonicalIDGenerator, URLNormalizer


class TestCanonicalIDGenerator:
    """Test suite for CanonicalIDGenerator."""

    @pytest.fixture
    def id_gen(self):
        """Create a fresh CanonicalIDGenerator instance."""
        return CanonicalIDGenerator(URLNormalizer())

    def test_canonical_id_consistent(self, id_gen):
        """Test the same canonical string produces the same ID."""
        id1 = id_gen.get_canonical_id("example.com/path")
        id2 = id_gen.get_canonical_id("example.com/path")

        assert id1 == id2
        assert isinstance(id1, int)

    def test_canonical_id_different(self, id_gen):
        """Test different canonical strings produce different IDs."""
        # Different strings should (very likely) produce different IDs
        assert id_gen.get_canonical_id("example.com/a") != id_gen.get_canonical_id(
            "example.com/b"
        )

    def test_id_range(self, id_gen):
        """Test IDs are in signed int64 range."""
        for value in ["", "example.com/", "youtube.com/watch?v=abc"]:
            assert -(2**63) <= id_gen.get_canonical_id(value) < 2**63

    def test_url_id_ignores_tracking(self, id_gen):
        """Test tracking-only variants share a URL ID."""
        assert id_gen.get_url_id("https://example.com/a?utm_source=x") == id_gen.get_url_id(
            "example.com/a"
        )
        assert id_gen.get_url_id("https://x.com/u/status/9?s=20") == id_gen.get_url_id(
            "https://twitter.com/u/status/9"
        )

    def test_url_id_matches_canonical_id(self, id_gen):
        assert id_gen.get_url_id("https://www.example.com/p#x") == id_gen.get_canonical_id(
            "example.com/p"
        )

    def test_hex_id(self, id_gen):
        hex_id = id_gen.get_hex_id("example.com/")
        assert len(hex_id) == 16
        assert all(c in "0123456789abcdef" for c in hex_id)

    def test_default_normalizer(self):
        assert CanonicalIDGenerator().normalizer is not None
