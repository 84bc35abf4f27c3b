"""
URL canonicalization utilities.

Handles host classification, platform query rules, the normalization
pipeline, and canonical ID generation.
"""

from .domains import Platform, classify_host, matches_domain
from .ids import CanonicalIDGenerator
from .rules import TRACKING_PARAMS, YOUTUBE_KEEP_PARAMS
from .url_normalizer import (
    CanonicalURL,
    URLNormalizer,
    URLParseError,
    get_normalizer,
    reset_normalizer,
)

__all__ = [
    "Platform",
    "classify_host",
    "matches_domain",
    "TRACKING_PARAMS",
    "YOUTUBE_KEEP_PARAMS",
    "CanonicalURL",
    "URLNormalizer",
    "URLParseError",
    "get_normalizer",
    "reset_normalizer",
    "CanonicalIDGenerator",
]
