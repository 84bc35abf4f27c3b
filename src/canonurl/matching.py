"""
Public comparison and platform-label functions.

All three functions are total: they never raise for any string or None.
"""

import logging
from typing import Optional

from canonurl.config import get_config
from canonurl.normalization.domains import (
    Platform,
    classify_host,
    classify_host_substring,
    clean_host,
)
from canonurl.normalization.url_normalizer import URLParseError, get_normalizer

logger = logging.getLogger(__name__)


def normalize_url(url: Optional[str]) -> str:
    """Return the canonical form of a URL ("" for empty input)."""
    return get_normalizer().normalize(url)


def urls_match(url1: Optional[str], url2: Optional[str]) -> bool:
    """
    Check whether two URLs reference the same content.

    Args:
        url1: First URL
        url2: Second URL

    Returns:
        True if both canonical forms are identical
    """
    return normalize_url(url1) == normalize_url(url2)


def get_platform(url: Optional[str]) -> str:
    """
    Get the platform label for a URL.

    Only strictly parseable URLs are classified; scheme-less or malformed
    input is reported as "generic".

    Args:
        url: URL to analyze

    Returns:
        "twitter", "youtube" or "generic"
    """
    if not url:
        return Platform.GENERIC.value

    try:
        parsed = get_normalizer().parse_strict(url)
    except URLParseError as e:
        logger.debug("Unparseable URL %r classified as generic: %s", url, e)
        return Platform.GENERIC.value

    if get_config().platform_matching == "substring":
        return classify_host_substring(parsed.hostname or "").value
    return classify_host(clean_host(parsed.hostname or "")).value
