"""
Per-platform query string rules.

- twitter: the status ID lives in the path, every query parameter is noise
- youtube: only the video (``v``) and playlist (``list``) IDs identify content
- generic: drop a fixed set of tracking/referral parameters, keep the rest
"""

from typing import List, Tuple
from urllib.parse import parse_qsl, quote_plus, urlencode

from .domains import Platform, matches_domain

# Tracking/referral parameters stripped from generic URLs. Names are matched
# case-sensitively: "UTM_SOURCE" is kept.
TRACKING_PARAMS: Tuple[str, ...] = (
    # Google Analytics & marketing
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_content",
    "utm_term",
    "utm_id",
    "utm_source_platform",
    "utm_creative_format",
    "utm_marketing_tactic",
    "_ga",
    "_gl",
    "gclid",
    "gclsrc",
    # Social click IDs
    "fbclid",
    "fb_action_ids",
    "fb_action_types",
    "fb_source",
    "fb_ref",
    "msclkid",
    "igshid",
    # Referral
    "ref",
    "ref_src",
    "ref_url",
    "source",
    # Email marketing
    "mc_cid",
    "mc_eid",
    # Ad campaigns and share tracking
    "campaign_id",
    "ad_id",
    "adset_id",
    "ad_name",
    "adset_name",
    "campaign_name",
    "share",
    "shared",
)

_TRACKING_SET = frozenset(TRACKING_PARAMS)

# Retained in this order, everything else is dropped
YOUTUBE_KEEP_PARAMS: Tuple[str, ...] = ("v", "list")


def _parse_query(query: str) -> List[Tuple[str, str]]:
    return parse_qsl(query, keep_blank_values=True)


def _quote_form(value: str, safe: str = "", encoding=None, errors=None) -> str:
    """Form-encode like a browser: '*' stays literal, '~' is escaped."""
    return quote_plus(value, safe="*", encoding=encoding, errors=errors).replace(
        "~", "%7E"
    )


def _strip_tracking(query: str) -> str:
    params = [(k, v) for k, v in _parse_query(query) if k not in _TRACKING_SET]
    return urlencode(params, quote_via=_quote_form)


def _keep_youtube_ids(query: str) -> str:
    first: dict = {}
    for key, value in _parse_query(query):
        first.setdefault(key, value)

    kept = [(key, first[key]) for key in YOUTUBE_KEEP_PARAMS if first.get(key)]
    return urlencode(kept, quote_via=_quote_form)


def filter_query(platform: Platform, query: str) -> str:
    """
    Apply the platform's query policy.

    Args:
        platform: Policy selected by classify_host()
        query: Raw query string without the leading '?'

    Returns:
        Filtered, re-serialized query string (may be empty)
    """
    if platform is Platform.TWITTER or not query:
        return ""
    if platform is Platform.YOUTUBE:
        return _keep_youtube_ids(query)
    return _strip_tracking(query)


def canonical_host(platform: Platform, host: str) -> str:
    """
    Map a cleaned host onto its canonical spelling.

    X links are folded onto twitter.com so both domains compare equal
    (``mobile.x.com`` becomes ``mobile.twitter.com``).
    """
    if platform is Platform.TWITTER and matches_domain(host, "x.com"):
        return host[: -len("x.com")] + "twitter.com"
    return host
