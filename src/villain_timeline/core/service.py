# ABOUTME: High-level service API orchestrating scrape → aggregate → JSON outputs
# ABOUTME: Writes villains.json and chart-config.json, mirrors them for the chart page

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from villain_timeline.chart import export_chart_config_json, generate_chart_config
from villain_timeline.config import Config, get_config
from villain_timeline.core.aggregator import process_series
from villain_timeline.core.models import ProcessedData, RawSeriesData
from villain_timeline.core.serialize import deserialize_dataset, serialize_processed_data
from villain_timeline.errors import VillainTimelineError
from villain_timeline.persistence import (
    CHART_CONFIG_FILENAME,
    VILLAINS_FILENAME,
    ensure_directories,
    mirror_to_public,
    read_json,
    write_json,
)
from villain_timeline.scraper.base import IssueScraper, ProgressCallback
from villain_timeline.utils.logging import get_logger


@dataclass(slots=True)
class PipelineResult:
    """Outcome of a full scrape run."""

    data: ProcessedData
    raw_data: RawSeriesData
    villains_path: Path
    chart_config_path: Path
    public_files: list[Path] = field(default_factory=list)

    @property
    def issues_scraped(self) -> int:
        return len(self.raw_data.issues)

    @property
    def issues_with_antagonists(self) -> int:
        return self.raw_data.issues_with_antagonists


class VillainTimelineService:
    """Service for building the villain dataset and chart configuration."""

    def __init__(
        self,
        scraper: IssueScraper | None = None,
        config: Config | None = None,
        data_dir: Path | None = None,
        public_data_dir: Path | None = None,
    ):
        self.config = config or get_config()
        self._scraper = scraper
        self.data_dir = Path(data_dir or self.config.data_dir)
        self.public_data_dir = Path(public_data_dir or self.config.public_data_dir)
        self.logger = get_logger(__name__)

    @property
    def scraper(self) -> IssueScraper:
        if self._scraper is None:
            from villain_timeline.scraper.fandom import FandomIssueScraper

            self._scraper = FandomIssueScraper(config=self.config)
        return self._scraper

    @property
    def villains_path(self) -> Path:
        return self.data_dir / VILLAINS_FILENAME

    @property
    def chart_config_path(self) -> Path:
        return self.data_dir / CHART_CONFIG_FILENAME

    def _write_chart_config(self, data: ProcessedData) -> Path:
        chart_config = generate_chart_config(data, width=self.config.chart_width, height=self.config.chart_height)
        return write_json(self.chart_config_path, export_chart_config_json(chart_config))

    async def run(
        self,
        start_issue: int | None = None,
        end_issue: int | None = None,
        progress_callback: ProgressCallback | None = None,
        processed_at: datetime | None = None,
    ) -> PipelineResult:
        """Scrape the issue range and write every output file.

        Raises:
            InvalidIssueRangeError: If the range is empty or starts below 1
        """
        ensure_directories(self.data_dir)

        raw_data = await self.scraper.scrape_range(start_issue, end_issue, progress_callback)
        self.logger.info(
            "Scraped issues",
            total=len(raw_data.issues),
            with_antagonists=raw_data.issues_with_antagonists,
        )

        data = process_series(raw_data, processed_at=processed_at)

        villains_path = write_json(self.villains_path, serialize_processed_data(data))
        chart_config_path = self._write_chart_config(data)
        public_files = mirror_to_public([villains_path, chart_config_path], self.public_data_dir)

        most_frequent = data.stats.most_frequent
        self.logger.info(
            "Pipeline completed",
            total_villains=data.stats.total_villains,
            most_frequent=most_frequent.canonical_name if most_frequent else None,
            most_frequent_count=most_frequent.frequency if most_frequent else 0,
            average_frequency=round(data.stats.average_frequency, 2),
        )

        return PipelineResult(
            data=data,
            raw_data=raw_data,
            villains_path=villains_path,
            chart_config_path=chart_config_path,
            public_files=public_files,
        )

    def rebuild_chart(self, dataset_path: Path | None = None) -> tuple[ProcessedData, Path]:
        """Regenerate chart-config.json from an existing villains.json without scraping.

        Raises:
            VillainTimelineError: If the dataset file does not exist
            InvalidInputError: If the file is not a villain dataset
        """
        path = Path(dataset_path or self.villains_path)
        if not path.exists():
            raise VillainTimelineError(f"No dataset found at {path}, run a scrape first")

        data = deserialize_dataset(read_json(path))
        chart_config_path = self._write_chart_config(data)
        mirror_to_public([chart_config_path], self.public_data_dir)

        self.logger.info("Rebuilt chart configuration", dataset=str(path), chart_config=str(chart_config_path))
        return data, chart_config_path

    async def close(self) -> None:
        """Release the scraper's HTTP resources."""
        if self._scraper is not None:
            await self._scraper.close()
