"""
Canonical URL normalization for archival deduplication.

Strips tracking/referral query parameters while keeping content-identifying
ones, so URLs that differ only in tracking metadata compare equal.
"""

from canonurl.batch import CanonicalBatchProcessor
from canonurl.config import Config, get_config, reset_config
from canonurl.matching import get_platform, normalize_url, urls_match
from canonurl.normalization import (
    CanonicalIDGenerator,
    CanonicalURL,
    Platform,
    URLNormalizer,
    classify_host,
    matches_domain,
)

__version__ = "0.1.0"

__all__ = [
    "normalize_url",
    "urls_match",
    "get_platform",
    "URLNormalizer",
    "CanonicalURL",
    "Platform",
    "classify_host",
    "matches_domain",
    "CanonicalIDGenerator",
    "CanonicalBatchProcessor",
    "Config",
    "get_config",
    "reset_config",
]
