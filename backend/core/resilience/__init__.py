"""Resilience Patterns

Batch processing with error aggregation for offline jobs.
"""
from .batch import (
    BatchItemResult,
    BatchProcessor,
    BatchResult,
    BatchStrategy,
)

__all__ = [
    "BatchItemResult",
    "BatchProcessor",
    "BatchResult",
    "BatchStrategy",
]
