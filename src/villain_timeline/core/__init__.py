# ABOUTME: Business logic and orchestration layer
# ABOUTME: Raw issue records → canonical villain registry, timeline and dataset

"""
Core Layer: Business logic and workflow orchestration

This layer handles:
- Name normalization and deduplication across issues
- Timeline and summary statistics
- The villains.json dataset contract
- Pipeline orchestration (scrape → aggregate → write)

Data Flow: scraper/ records → Aggregation → persistence/ and chart/ outputs
"""

from .aggregator import aggregate, normalize_villain_name, process_series, slugify
from .models import (
    AggregationResult,
    CanonicalVillain,
    CorpusSummary,
    ProcessedData,
    RawIssueRecord,
    RawSeriesData,
    TimelineEntry,
)

# Import service on-demand to avoid circular imports
# Use: from villain_timeline.core.service import VillainTimelineService

__all__ = [
    "AggregationResult",
    "CanonicalVillain",
    "CorpusSummary",
    "ProcessedData",
    "RawIssueRecord",
    "RawSeriesData",
    "TimelineEntry",
    "aggregate",
    "normalize_villain_name",
    "process_series",
    "slugify",
]
