# ABOUTME: Logging configuration, progress tracking, and output formatting
# ABOUTME: Provides rich console output and structured logging for the pipeline

from .config import LoggingMode, configure_logging, get_logging_status
from .progress import ScrapeProgressTracker, create_scrape_progress
from .utils import get_logger, log_fetch_call, with_issue_context, with_operation_context, with_pipeline_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "get_logging_status",
    # Progress
    "ScrapeProgressTracker",
    "create_scrape_progress",
    # Utilities
    "get_logger",
    "log_fetch_call",
    "with_issue_context",
    "with_operation_context",
    "with_pipeline_context",
]
