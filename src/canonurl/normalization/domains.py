"""
Host classification for platform-specific normalization rules.

A host is matched against registrable domains with a dot-anchored suffix
check, so ``mobile.twitter.com`` belongs to ``twitter.com`` while
``nottwitter.com`` does not.
"""

from enum import Enum
from typing import Callable, List, Tuple


class Platform(str, Enum):
    """Normalization policy selected for a host."""

    TWITTER = "twitter"
    YOUTUBE = "youtube"
    GENERIC = "generic"


def matches_domain(hostname: str, domain: str) -> bool:
    """
    Check whether a hostname is a domain or one of its subdomains.

    Args:
        hostname: Lowercased hostname with any leading ``www.`` removed
        domain: Bare registrable domain (e.g. 'twitter.com')

    Returns:
        True on an exact match or a dot-prefixed suffix match
    """
    return hostname == domain or hostname.endswith("." + domain)


def _any_domain(*domains: str) -> Callable[[str], bool]:
    return lambda host: any(matches_domain(host, domain) for domain in domains)


# Evaluated in order, first match wins
PLATFORM_RULES: List[Tuple[Callable[[str], bool], Platform]] = [
    (_any_domain("twitter.com", "x.com"), Platform.TWITTER),
    (_any_domain("youtube.com"), Platform.YOUTUBE),
    (lambda host: host == "youtu.be", Platform.YOUTUBE),
]

# Legacy containment table used by get_platform(platform_matching="substring")
_SUBSTRING_RULES: List[Tuple[Tuple[str, ...], Platform]] = [
    (("twitter.com", "x.com"), Platform.TWITTER),
    (("youtube.com", "youtu.be"), Platform.YOUTUBE),
]


def clean_host(hostname: str) -> str:
    """Lowercase a hostname and strip one leading ``www.``."""
    host = hostname.lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def classify_host(hostname: str) -> Platform:
    """
    Select the normalization policy for a cleaned hostname.

    Args:
        hostname: Output of clean_host()

    Returns:
        First matching Platform, or Platform.GENERIC
    """
    for predicate, platform in PLATFORM_RULES:
        if predicate(hostname):
            return platform
    return Platform.GENERIC


def classify_host_substring(hostname: str) -> Platform:
    """
    Classify a raw hostname by substring containment.

    Looser than classify_host(): ``eviltwitter.com.attacker.net`` is reported
    as twitter. Only the first ``www.`` occurrence is removed, wherever it is.
    """
    host = hostname.lower().replace("www.", "", 1)
    for needles, platform in _SUBSTRING_RULES:
        if any(needle in host for needle in needles):
            return platform
    return Platform.GENERIC
