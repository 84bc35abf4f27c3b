"""
Batch processing over Polars DataFrames.

Handles canonical annotation and deduplication of URL columns.
"""

from .processor import CanonicalBatchProcessor

__all__ = ["CanonicalBatchProcessor"]
