# ABOUTME: Exception hierarchy shared by the scraper, extractor and aggregator
# ABOUTME: Separates recoverable page failures from fatal input errors

class VillainTimelineError(Exception):
    """Base exception for villain timeline errors."""

    pass


class ParseFailure(VillainTimelineError):
    """Raised when issue markup cannot be parsed into antagonist names.

    Never escapes the extractor; it is logged and degrades to an empty name list.
    """

    pass


class InvalidInputError(VillainTimelineError):
    """Raised when aggregation receives malformed records."""

    pass


class FetchError(VillainTimelineError):
    """Raised when an issue page cannot be fetched."""

    pass


class TransientFetchError(FetchError):
    """Raised for fetch failures worth retrying (timeouts, dropped connections, 429/5xx)."""

    pass


class InvalidIssueRangeError(VillainTimelineError):
    """Raised when a scrape is requested for an empty or negative issue range."""

    pass
