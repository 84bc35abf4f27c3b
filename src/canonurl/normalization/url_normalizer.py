"""
URL canonicalization for content-identity comparison.

Normalization runs as a three-tier pipeline:
- strict parse: standard URL parsing plus platform query rules
- scheme repair: scheme-less or protocol-relative input gets ``https://``
  prepended and is strictly parsed once more
- manual fallback: string surgery on the host, rest appended verbatim

The canonical form is ``host + path + ?query`` with no scheme, port or
fragment. Normalization never raises.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import SplitResult, quote, urlsplit

from .domains import Platform, classify_host, clean_host
from .rules import canonical_host, filter_query

logger = logging.getLogger(__name__)

# Pipeline tiers recorded on CanonicalURL.stage
STAGE_EMPTY = "empty"
STAGE_PARSED = "parsed"
STAGE_REPAIRED = "repaired"
STAGE_FALLBACK = "fallback"

_HAS_HTTP_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_LEADING_SCHEME = re.compile(r"^(https?:)?/+", re.IGNORECASE)
_HOST_TERMINATOR = re.compile(r"[/?#]")
_LEADING_WWW = re.compile(r"^www\.", re.IGNORECASE)

# Code points a URL parser refuses inside a host
_FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r<>^|\\%@[]\"'`{}")

# Schemes with hierarchical paths; all but file require a host
SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp", "file"})
_HOST_REQUIRED_SCHEMES = SPECIAL_SCHEMES - {"file"}

# Printable ASCII left as-is in hierarchical paths (space " < > ` { } are escaped)
_PATH_SAFE = "!$%&'()*+,-./:;=@[\\]^_|~"

# "example.com:8080/path" parses with "example.com" as its scheme
_PORT_LIKE_PATH = re.compile(r"^\d+(?:/|$)")


class URLParseError(ValueError):
    """Raised when a string does not strictly parse as an absolute URL."""


@dataclass(frozen=True)
class CanonicalURL:
    """
    Canonical URL components.

    Attributes:
        host: Lowercased host, leading www. removed ("" for mailto:, data:
            and other host-less URLs)
        path: Hierarchical paths have dot segments resolved and unsafe
            characters percent-encoded (existing escapes are never decoded).
            Opaque paths (mailto:, data:) are kept as given. Fallback results
            carry the verbatim remainder.
        query: Filtered query string without '?'
        platform: Policy applied to the query
        stage: Pipeline tier that produced the result
        raw: Original input
    """

    host: str
    path: str
    query: str
    platform: Platform
    stage: str
    raw: Optional[str]

    def to_string(self) -> str:
        """Compose the canonical string."""
        if self.query:
            return f"{self.host}{self.path}?{self.query}"
        return f"{self.host}{self.path}"

    def __str__(self) -> str:
        return self.to_string()


def _check_host(parsed: SplitResult) -> str:
    """Return the parsed hostname or raise URLParseError."""
    # .hostname strips IPv6 brackets; an IPv6 literal only carries hex and ':'
    host = parsed.hostname
    if not host:
        raise URLParseError(f"URL has no host: {parsed.geturl()!r}")

    is_ipv6 = "[" in parsed.netloc
    for char in host:
        if ord(char) < 0x20 or char in _FORBIDDEN_HOST_CHARS:
            raise URLParseError(f"Forbidden character {char!r} in host {host!r}")
        if char == ":" and not is_ipv6:
            raise URLParseError(f"Unexpected ':' in host {host!r}")
    return host


def _resolve_dot_segments(path: str) -> str:
    """Resolve '.' and '..' segments of an absolute path."""
    segments = path.split("/")[1:]
    resolved = []
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        if segment == "..":
            if resolved:
                resolved.pop()
            if is_last:
                resolved.append("")
        elif segment == ".":
            if is_last:
                resolved.append("")
        else:
            resolved.append(segment)
    return "/" + "/".join(resolved)


def _normalize_path(parsed: SplitResult) -> str:
    """
    Normalize the path the way a browser URL parser serializes it.

    Args:
        parsed: Strictly parsed URL

    Returns:
        Encoded, dot-resolved path for hierarchical URLs ('/' when a special
        URL has none), the opaque path unchanged otherwise
    """
    path = parsed.path
    if not parsed.netloc and not path.startswith("/"):
        return path

    path = quote(path, safe=_PATH_SAFE)
    if path.startswith("/"):
        path = _resolve_dot_segments(path)
    if not path and parsed.scheme in SPECIAL_SCHEMES:
        path = "/"
    return path


class URLNormalizer:
    """
    Canonical URL engine.

    Usage:
        normalizer = URLNormalizer()
        normalizer.normalize("https://www.youtube.com/watch?t=30&v=abc#x")
        # 'youtube.com/watch?v=abc'
    """

    def normalize(self, url: Optional[str]) -> str:
        """
        Normalize a URL to its canonical string.

        Args:
            url: Raw URL string (None and "" are accepted)

        Returns:
            Canonical string, "" for empty input
        """
        return self.canonicalize(url).to_string()

    def canonicalize(self, url: Optional[str]) -> CanonicalURL:
        """
        Run the normalization pipeline and return the structured result.

        Args:
            url: Raw URL string

        Returns:
            CanonicalURL with the tier that produced it
        """
        if not url:
            return CanonicalURL("", "", "", Platform.GENERIC, STAGE_EMPTY, url)

        try:
            return self._from_parsed(self.parse_strict(url), url, STAGE_PARSED)
        except URLParseError as e:
            logger.debug("Strict parse failed for %r: %s", url, e)

        repaired = self.repair_scheme(url)
        if repaired is not None:
            try:
                return self._from_parsed(
                    self.parse_strict(repaired), url, STAGE_REPAIRED
                )
            except URLParseError as e:
                logger.debug("Scheme repair failed for %r: %s", url, e)

        logger.debug("Falling back to manual normalization for %r", url)
        return self.manual_fallback(url)

    def parse_strict(self, url: str) -> SplitResult:
        """
        Parse an absolute URL, rejecting what a strict URL parser would.

        Host-less URLs (mailto:, data:, file:///) are accepted. Special
        schemes read their host past any run of slashes, so
        ``https:///example.com`` has host example.com.

        Args:
            url: Candidate URL string

        Returns:
            urlsplit() result with a usable scheme

        Raises:
            URLParseError: If the string has no scheme, is a scheme-less
                host:port, lacks a host its scheme requires, or has an invalid
                host or port
        """
        try:
            parsed = urlsplit(url)
            if parsed.scheme in _HOST_REQUIRED_SCHEMES and not parsed.netloc:
                parsed = self._reparse_authority(url, parsed)
            # Accessing .port validates it
            parsed.port
        except ValueError as e:
            raise URLParseError(f"Failed to parse URL {url!r}: {e}") from e

        if not parsed.scheme:
            raise URLParseError(f"URL has no scheme: {url!r}")
        if self._is_host_port(parsed):
            raise URLParseError(f"Host and port without scheme: {url!r}")

        if parsed.netloc:
            _check_host(parsed)
        elif parsed.scheme in _HOST_REQUIRED_SCHEMES:
            raise URLParseError(f"URL has no host: {url!r}")
        return parsed

    @staticmethod
    def _reparse_authority(url: str, parsed: SplitResult) -> SplitResult:
        """Re-split a special URL whose host follows extra or missing slashes."""
        rest = url.strip().split(":", 1)[1].lstrip("/\\")
        if not rest:
            return parsed
        return urlsplit(f"{parsed.scheme}://{rest}")

    @staticmethod
    def _is_host_port(parsed: SplitResult) -> bool:
        """Detect 'example.com:8080/path' or 'localhost:3000' read as a scheme."""
        if parsed.netloc:
            return False
        looks_like_host = "." in parsed.scheme or parsed.scheme == "localhost"
        return looks_like_host and bool(_PORT_LIKE_PATH.match(parsed.path))

    @staticmethod
    def repair_scheme(url: str) -> Optional[str]:
        """
        Build an https:// candidate for scheme-less input.

        Leading slashes (protocol-relative form) are dropped first.

        Returns:
            Repaired string, or None if the input already has an http(s) scheme
        """
        if _HAS_HTTP_SCHEME.match(url):
            return None
        return "https://" + url.lstrip("/")

    @staticmethod
    def manual_fallback(url: str) -> CanonicalURL:
        """
        Best-effort normalization without a URL parser.

        Only the host is cleaned. Everything from the first '/', '?' or '#'
        is kept verbatim, tracking parameters included.
        """
        stripped = _LEADING_SCHEME.sub("", url, count=1)
        match = _HOST_TERMINATOR.search(stripped)
        if match is None:
            host, rest = stripped, ""
        else:
            host, rest = stripped[: match.start()], stripped[match.start():]

        host = _LEADING_WWW.sub("", host, count=1).lower()
        return CanonicalURL(host, rest, "", Platform.GENERIC, STAGE_FALLBACK, url)

    def _from_parsed(
        self, parsed: SplitResult, raw: str, stage: str
    ) -> CanonicalURL:
        """Apply host cleaning and the platform query policy."""
        host = clean_host(parsed.hostname or "")
        platform = classify_host(host)

        return CanonicalURL(
            host=canonical_host(platform, host),
            path=_normalize_path(parsed),
            query=filter_query(platform, parsed.query),
            platform=platform,
            stage=stage,
            raw=raw,
        )


# Global normalizer instance
_normalizer: Optional[URLNormalizer] = None


def get_normalizer() -> URLNormalizer:
    """Get or create the global normalizer instance."""
    global _normalizer
    if _normalizer is None:
        _normalizer = URLNormalizer()
    return _normalizer


def reset_normalizer() -> None:
    """Reset the global normalizer (for testing)."""
    global _normalizer
    _normalizer = None
