# ABOUTME: Tests for issue-by-issue scrape progress tracking
# ABOUTME: Validates create_scrape_progress and the tracker used as the scraper callback

from rich.console import Console
from rich.progress import Progress

from villain_timeline.utils.logging.progress import ScrapeProgressTracker, create_scrape_progress


class TestCreateScrapeProgress:
    """Test the create_scrape_progress function."""

    def test_create_scrape_progress(self):
        tracker = create_scrape_progress(Console(), total=20)

        assert isinstance(tracker, ScrapeProgressTracker)
        assert isinstance(tracker.progress, Progress)
        assert tracker.progress.tasks[0].total == 20
        assert tracker.progress.tasks[0].description == "🕷️ Starting scrape..."

    def test_custom_description(self):
        tracker = create_scrape_progress(Console(), total=5, initial_description="Warming up")

        assert tracker.progress.tasks[0].description == "Warming up"


class TestScrapeProgressTracker:
    """Test the tracker as a progress callback."""

    def test_callback_updates_task(self):
        tracker = create_scrape_progress(Console(quiet=True), total=3)

        tracker(42, 2, 3)

        task = tracker.progress.tasks[0]
        assert task.completed == 1
        assert task.description == "🕷️ Scraping issue #42"

    def test_context_manager_completes_bar(self):
        tracker = create_scrape_progress(Console(quiet=True), total=3)

        with tracker as ctx_tracker:
            assert ctx_tracker is tracker
            tracker(1, 1, 3)

        assert tracker.progress.tasks[0].completed == 3

    def test_context_manager_leaves_bar_on_error(self):
        tracker = create_scrape_progress(Console(quiet=True), total=3)

        try:
            with tracker:
                tracker(2, 2, 3)
                raise RuntimeError("scrape aborted")
        except RuntimeError:
            pass

        assert tracker.progress.tasks[0].completed == 1
