"""
Batch deduplication example.

Annotates a DataFrame of archived links and drops canonical duplicates.
"""

import logging

import polars as pl

from canonurl import CanonicalBatchProcessor, get_config


def main():
    """Run batch deduplication example."""
    logging.basicConfig(
        level=get_config().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    processor = CanonicalBatchProcessor()

    archive = pl.DataFrame(
        {
            "url": [
                "https://twitter.com/user/status/1?s=20",
                "https://x.com/user/status/1",
                "https://www.youtube.com/watch?v=abc&t=42",
                "https://youtu.be/abc",
                "https://example.com/story?id=7&utm_campaign=launch",
                "example.com/story?id=7",
            ],
            "archived_by": ["alice", "bob", "carol", "dave", "erin", "frank"],
        }
    )

    print("Annotated:")
    print(processor.process_batch(archive))

    print("\nDuplicate groups:")
    print(processor.find_duplicates(archive))

    print("\nDeduplicated:")
    print(processor.deduplicate(archive))

    print(f"\nStats: {processor.get_stats()}")


if __name__ == "__main__":
    main()
