# ABOUTME: Marvel Fandom issue scraper built on httpx with tenacity retries
# ABOUTME: Fetches one page per issue with a polite delay and turns each page into a RawIssueRecord

import asyncio

import httpx

from villain_timeline.config import Config, get_config
from villain_timeline.core.models import RawIssueRecord, RawSeriesData
from villain_timeline.errors import FetchError, InvalidIssueRangeError
from villain_timeline.scraper.base import ProgressCallback, failed_issue_record
from villain_timeline.scraper.extractor import extract_antagonists
from villain_timeline.utils.logging import get_logger, log_fetch_call, with_issue_context
from villain_timeline.utils.retry import convert_http_error, fetch_retrying


class FandomIssueScraper:
    """Scrapes Marvel Fandom issue pages for antagonist listings."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        config: Config | None = None,
        retry_min_wait: float = 1.0,
    ):
        """Initialize the scraper.

        Args:
            client: HTTP client (optional, one is created and owned otherwise)
            config: Application config, defaults to the global instance
            retry_min_wait: Minimum backoff between retries of a transient failure
        """
        self.config = config or get_config()
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.request_timeout,
            follow_redirects=True,
        )
        self.retry_min_wait = retry_min_wait
        self.request_count = 0
        self.logger = get_logger(__name__)

    async def __aenter__(self) -> "FandomIssueScraper":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def get_issue_url(self, issue_number: int) -> str:
        """Wiki page URL for an issue."""
        return self.config.issue_url_template.format(issue=issue_number)

    async def _get(self, url: str) -> str:
        self.request_count += 1
        try:
            response = await self.http_client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise convert_http_error(e) from e

        if not response.text:
            raise FetchError("No response data received")
        return response.text

    @log_fetch_call("marvel_fandom")
    async def fetch_issue_markup(self, issue_number: int) -> str:
        """Fetch the raw HTML of an issue page, retrying transient failures.

        Raises:
            FetchError: If the page cannot be fetched
        """
        url = self.get_issue_url(issue_number)
        self.logger.debug("Fetching issue page", issue_key=issue_number, url=url)

        async for attempt in fetch_retrying(max_attempts=self.config.fetch_max_attempts, min_wait=self.retry_min_wait):
            with attempt:
                return await self._get(url)

        raise FetchError(f"No fetch attempt made for issue {issue_number}")

    async def scrape_issue(self, issue_number: int) -> RawIssueRecord:
        """Fetch one issue page and extract its antagonists.

        Raises:
            FetchError: If the page cannot be fetched
        """
        markup = await self.fetch_issue_markup(issue_number)
        antagonists = extract_antagonists(markup, issue_key=issue_number)

        return RawIssueRecord(
            issue_key=issue_number,
            title=self.config.issue_title_template.format(issue=issue_number),
            antagonist_names=antagonists,
        )

    async def scrape_range(
        self,
        start_issue: int | None = None,
        end_issue: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> RawSeriesData:
        """Scrape every issue in the inclusive range.

        A failed issue is logged and recorded with an empty antagonist list;
        the run continues with the next issue.

        Raises:
            InvalidIssueRangeError: If start < 1 or end < start
        """
        start = self.config.start_issue if start_issue is None else start_issue
        end = self.config.end_issue if end_issue is None else end_issue

        if start < 1 or end < start:
            raise InvalidIssueRangeError(f"Invalid issue range: {start}-{end}")

        total = end - start + 1
        issues: list[RawIssueRecord] = []

        self.logger.info("Starting scrape", series=self.config.series_name, start_issue=start, end_issue=end)

        for index, issue_number in enumerate(range(start, end + 1), start=1):
            if progress_callback:
                progress_callback(issue_number, index, total)

            with with_issue_context(issue_number) as logger:
                try:
                    record = await self.scrape_issue(issue_number)
                    logger.info("Scraped issue", antagonist_count=len(record.antagonist_names))
                except FetchError as e:
                    logger.warning("Failed to scrape issue", error=str(e), error_type=type(e).__name__)
                    record = failed_issue_record(issue_number)

            issues.append(record)

            if index < total and self.config.request_delay > 0:
                await asyncio.sleep(self.config.request_delay)

        raw_data = RawSeriesData(series=self.config.series_name, base_url=self.config.base_url, issues=issues)

        self.logger.info(
            "Scrape completed",
            total=total,
            with_antagonists=raw_data.issues_with_antagonists,
            requests=self.request_count,
        )

        return raw_data

    async def close(self) -> None:
        """Close the HTTP client if this scraper created it."""
        if self._owns_client:
            await self.http_client.aclose()
