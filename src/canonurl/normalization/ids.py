"""
Canonical ID generation.

A canonical ID is xxh3_64 over the UTF-8 canonical string, stored as a
signed int64 so it fits Polars/Parquet Int64 columns.
"""

from typing import Optional

import xxhash

from .url_normalizer import URLNormalizer, get_normalizer


def _to_signed(hash_val: int) -> int:
    # xxhash returns unsigned, convert to signed int64 range
    if hash_val >= 2**63:
        hash_val -= 2**64
    return hash_val


class CanonicalIDGenerator:
    """Generate stable IDs for canonical URLs."""

    def __init__(self, normalizer: Optional[URLNormalizer] = None):
        """
        Initialize ID generator.

        Args:
            normalizer: URL normalizer used by get_url_id (global one if None)
        """
        self.normalizer = normalizer or get_normalizer()

    def get_canonical_id(self, canonical: str) -> int:
        """
        Hash an already-normalized URL.

        Args:
            canonical: Canonical URL string

        Returns:
            64-bit hash as signed int64
        """
        return _to_signed(xxhash.xxh3_64(canonical.encode("utf-8")).intdigest())

    def get_url_id(self, url: Optional[str]) -> int:
        """
        Normalize a raw URL and hash the canonical form.

        URLs that differ only in tracking metadata share an ID.
        """
        return self.get_canonical_id(self.normalizer.normalize(url))

    def get_hex_id(self, canonical: str) -> str:
        """Get the canonical ID as 16 lowercase hex chars (unsigned)."""
        return xxhash.xxh3_64(canonical.encode("utf-8")).hexdigest()
