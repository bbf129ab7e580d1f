# ABOUTME: Issue-by-issue progress tracking using Rich's built-in progress bar
# ABOUTME: Bridges the scraper's progress callback to a live terminal display

from typing import Any

from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn


class ScrapeProgressTracker:
    """Callable progress tracker handed to the scraper as its progress callback."""

    def __init__(self, progress: Progress, task_id: Any):
        self.progress = progress
        self.task_id = task_id

    def __call__(self, issue_number: int, index: int, total: int) -> None:
        self.progress.update(
            self.task_id,
            completed=index - 1,
            total=total,
            description=f"🕷️ Scraping issue #{issue_number}",
        )

    def __enter__(self):
        self.progress.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        task = self.progress.tasks[0] if self.progress.tasks else None
        if exc_type is None and task is not None and task.total is not None:
            self.progress.update(self.task_id, completed=task.total)
        self.progress.stop()


def create_scrape_progress(console, total: int, initial_description: str = "🕷️ Starting scrape...") -> ScrapeProgressTracker:
    """Create a progress bar for a scrape run.

    Args:
        console: Rich console instance
        total: Number of issues to be scraped
        initial_description: Initial progress description

    Returns:
        Tracker usable as a context manager and as the scraper progress callback
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )

    task_id = progress.add_task(initial_description, total=total)
    return ScrapeProgressTracker(progress, task_id)
