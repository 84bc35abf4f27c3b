"""
Batch canonicalization pipeline.

Annotates URL columns of Polars DataFrames with canonical forms, platform
labels and canonical IDs, and deduplicates rows by canonical identity.
"""

import logging
from typing import Optional

import polars as pl

from canonurl.config import get_config
from canonurl.normalization import (
    CanonicalIDGenerator,
    URLNormalizer,
    get_normalizer,
)
from canonurl.normalization.url_normalizer import STAGE_FALLBACK, STAGE_REPAIRED

logger = logging.getLogger(__name__)


class CanonicalBatchProcessor:
    """
    Process raw URL columns through the normalization pipeline.

    Output columns added to the input frame:
        - canonical_url: Utf8
        - platform: Utf8 ("twitter", "youtube", "generic")
        - canonical_id: Int64 (xxh3_64 of canonical_url)
    """

    def __init__(
        self,
        normalizer: Optional[URLNormalizer] = None,
        id_generator: Optional[CanonicalIDGenerator] = None,
        url_column: Optional[str] = None,
    ):
        """
        Initialize batch processor.

        Args:
            normalizer: URL normalizer instance (global one if None)
            id_generator: ID generator instance (creates new if None)
            url_column: Default URL column (defaults to config.url_column)
        """
        self.normalizer = normalizer or get_normalizer()
        self.id_generator = id_generator or CanonicalIDGenerator(self.normalizer)
        self.url_column = url_column or get_config().url_column

        self._rows_processed = 0
        self._repaired = 0
        self._fallbacks = 0

    def process_batch(
        self, df: pl.DataFrame, url_column: Optional[str] = None
    ) -> pl.DataFrame:
        """
        Annotate a batch of URLs with their canonical forms.

        Args:
            df: Input Polars DataFrame
            url_column: Column holding raw URLs (defaults to self.url_column)

        Returns:
            Input DataFrame with canonical_url, platform and canonical_id added

        Raises:
            KeyError: If the URL column is missing
        """
        column = url_column or self.url_column
        if column not in df.columns:
            raise KeyError(f"Column '{column}' not found in DataFrame")

        canonical_urls = []
        platforms = []
        canonical_ids = []

        for raw_url in df.get_column(column).to_list():
            result = self.normalizer.canonicalize(raw_url)
            canonical = result.to_string()

            if result.stage == STAGE_REPAIRED:
                self._repaired += 1
            elif result.stage == STAGE_FALLBACK:
                self._fallbacks += 1
                logger.debug("Manual fallback used for %r", raw_url)

            canonical_urls.append(canonical)
            platforms.append(result.platform.value)
            canonical_ids.append(self.id_generator.get_canonical_id(canonical))

        self._rows_processed += len(canonical_urls)
        logger.info(
            "Canonicalized %d URLs from column '%s'", len(canonical_urls), column
        )

        return df.with_columns(
            [
                pl.Series("canonical_url", canonical_urls, dtype=pl.Utf8),
                pl.Series("platform", platforms, dtype=pl.Utf8),
                pl.Series("canonical_id", canonical_ids, dtype=pl.Int64),
            ]
        )

    def deduplicate(
        self, df: pl.DataFrame, url_column: Optional[str] = None
    ) -> pl.DataFrame:
        """
        Keep only the first row for each canonical URL.

        Args:
            df: Input Polars DataFrame
            url_column: Column holding raw URLs

        Returns:
            Annotated DataFrame without canonical duplicates, input order kept
        """
        annotated = self.process_batch(df, url_column)
        deduped = annotated.unique(
            subset=["canonical_id"], keep="first", maintain_order=True
        )
        logger.info(
            "Dropped %d duplicate rows out of %d",
            len(annotated) - len(deduped),
            len(annotated),
        )
        return deduped

    def find_duplicates(
        self, df: pl.DataFrame, url_column: Optional[str] = None
    ) -> pl.DataFrame:
        """
        Group raw URLs sharing a canonical form.

        Args:
            df: Input Polars DataFrame
            url_column: Column holding raw URLs

        Returns:
            DataFrame with canonical_url, canonical_id, count and urls (raw
            URLs in input order), one row per canonical URL seen more than once
        """
        column = url_column or self.url_column
        annotated = self.process_batch(df, column)

        return (
            annotated.group_by("canonical_url", maintain_order=True)
            .agg(
                [
                    pl.col("canonical_id").first(),
                    pl.len().alias("count"),
                    pl.col(column).alias("urls"),
                ]
            )
            .filter(pl.col("count") > 1)
        )

    def get_stats(self) -> dict:
        """
        Get processing statistics.

        Returns:
            Dictionary with rows processed and recovery tier counts
        """
        return {
            "rows_processed": self._rows_processed,
            "repaired": self._repaired,
            "fallbacks": self._fallbacks,
        }
