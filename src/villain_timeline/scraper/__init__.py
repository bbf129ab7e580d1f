# ABOUTME: Data extraction from the comic wiki
# ABOUTME: Pipeline Stage 1: issue pages → raw antagonist name records

"""
Scraper Layer: Get raw data from the wiki

This layer handles:
- Fetching issue pages with pacing and retries
- Extracting antagonist names from page HTML
- Placeholder records for issues that could not be fetched

Data Flow: Wiki pages → RawIssueRecord list → core/ aggregation
"""

from .base import IssueScraper, failed_issue_record
from .extractor import extract_antagonists, extract_item_name, is_navigation_noise
from .fandom import FandomIssueScraper

__all__ = [
    "FandomIssueScraper",
    "IssueScraper",
    "extract_antagonists",
    "extract_item_name",
    "failed_issue_record",
    "is_navigation_noise",
]
