"""
Basic normalization example.

Demonstrates platform rules, the recovery tiers, and canonical IDs.
"""

import logging

from canonurl import (
    CanonicalIDGenerator,
    URLNormalizer,
    get_config,
    get_platform,
    urls_match,
)


def main():
    """Run basic normalization example."""
    logging.basicConfig(
        level=get_config().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print("=" * 60)
    print("canonurl: Basic Normalization Example")
    print("=" * 60)

    normalizer = URLNormalizer()
    id_generator = CanonicalIDGenerator(normalizer)

    # Example 1: Platform rules
    print("\n1. Platform Rules")
    print("-" * 60)

    for raw_url in [
        "https://twitter.com/user/status/123?s=20&utm_source=x",
        "https://www.youtube.com/watch?t=30&list=PL1&v=abc123",
        "https://example.com/page?id=5&utm_source=fb&ref=home#top",
    ]:
        result = normalizer.canonicalize(raw_url)
        print(f"Raw URL:   {raw_url}")
        print(f"Platform:  {result.platform.value}")
        print(f"Canonical: {result}\n")

    # Example 2: Recovery tiers
    print("\n2. Recovery Tiers")
    print("-" * 60)

    for raw_url in [
        "example.com/page?utm_source=x",
        "//www.example.com/a?ref=x",
        "https://exa mple.com/Page?utm_source=x",
    ]:
        result = normalizer.canonicalize(raw_url)
        print(f"{raw_url!r:45} -> {result.to_string()!r} ({result.stage})")

    # Example 3: Comparison
    print("\n\n3. Comparison")
    print("-" * 60)

    url1 = "https://x.com/a/status/1?s=20"
    url2 = "https://twitter.com/a/status/1"
    print(f"{url1}\n{url2}")
    print(f"  Match: {urls_match(url1, url2)}")
    print(f"  Platform: {get_platform(url1)}")

    # Example 4: Canonical IDs
    print("\n\n4. Canonical IDs")
    print("-" * 60)

    id1 = id_generator.get_url_id("https://example.com/page?utm_medium=email")
    id2 = id_generator.get_url_id("example.com/page")
    print(f"  ID (tracking): {id1}")
    print(f"  ID (bare):     {id2}")
    print(f"  IDs match: {id1 == id2}")

    print("\n" + "=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
