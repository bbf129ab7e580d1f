# ABOUTME: Protocol interface for scraping per-issue antagonist records from a wiki
# ABOUTME: Lets the pipeline service run against any source that yields RawSeriesData

from collections.abc import Callable
from typing import Protocol

from villain_timeline.core.models import RawIssueRecord, RawSeriesData

ProgressCallback = Callable[[int, int, int], None]


class IssueScraper(Protocol):
    """Protocol for collecting antagonist records over a range of issues."""

    async def scrape_range(
        self,
        start_issue: int | None = None,
        end_issue: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> RawSeriesData:
        """Scrape every issue in the inclusive range, in ascending order.

        Args:
            start_issue: First issue (1-based)
            end_issue: Last issue, inclusive
            progress_callback: Called as (issue_number, index, total) before each issue

        Returns:
            One record per issue; failed issues carry an empty name list

        Raises:
            InvalidIssueRangeError: If the range is empty or starts below 1
        """
        ...

    async def close(self) -> None: ...


def failed_issue_record(issue_number: int) -> RawIssueRecord:
    """Placeholder record for an issue whose page could not be fetched."""
    return RawIssueRecord(issue_key=issue_number, title=f"Issue {issue_number} (Failed)", antagonist_names=())
