# ABOUTME: Tests for the villain-timeline CLI built on asyncclick
# ABOUTME: Exercises help, logging status, scrape and chart commands through the CliRunner

import json
from datetime import UTC, datetime

import pytest
from asyncclick.testing import CliRunner
from loguru import logger

from villain_timeline.config import reload_config
from villain_timeline.core.models import RawIssueRecord, RawSeriesData
from villain_timeline.errors import InvalidIssueRangeError
from villain_timeline.main import app as main


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Run every command from a scratch directory so logs and data land there."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("VILLAIN_TIMELINE_REQUEST_DELAY", "0")
    reload_config()
    yield
    logger.remove()
    monkeypatch.delenv("VILLAIN_TIMELINE_REQUEST_DELAY")
    reload_config()


class StubScraper:
    async def scrape_range(self, start_issue=None, end_issue=None, progress_callback=None):
        if start_issue < 1 or end_issue < start_issue:
            raise InvalidIssueRangeError(f"Invalid issue range: {start_issue}-{end_issue}")
        issues = []
        for index, issue in enumerate(range(start_issue, end_issue + 1), start=1):
            if progress_callback:
                progress_callback(issue, index, end_issue - start_issue + 1)
            issues.append(RawIssueRecord(issue_key=issue, antagonist_names=["Vulture (Adrian Toomes)"]))
        return RawSeriesData(series="Amazing Spider-Man Vol 1", base_url="https://example.com", issues=issues)

    async def close(self) -> None:
        pass


@pytest.fixture
def stub_scraper(monkeypatch):
    monkeypatch.setattr(
        "villain_timeline.core.service.VillainTimelineService.scraper", property(lambda self: StubScraper())
    )


def test_main_function_exists():
    """Test that the CLI group exists and is callable."""
    assert callable(main)


@pytest.mark.asyncio
async def test_main_command_help():
    runner = CliRunner()
    result = await runner.invoke(main, ["--help"])

    assert result.exit_code == 0
    assert "Villain Timeline" in result.output
    for command in ("scrape", "chart", "logging-status"):
        assert command in result.output


@pytest.mark.asyncio
async def test_main_with_logging_status():
    runner = CliRunner()
    result = await runner.invoke(main, ["logging-status"])

    assert result.exit_code == 0
    assert "Logging Configuration" in result.output


@pytest.mark.asyncio
async def test_scrape_writes_outputs(tmp_path, stub_scraper):
    runner = CliRunner()
    result = await runner.invoke(main, ["scrape", "--start", "1", "--end", "3", "--output-dir", str(tmp_path / "out")])

    assert result.exit_code == 0, result.output
    assert "Statistics" in result.output
    assert "Vulture" in result.output

    dataset = json.loads((tmp_path / "out" / "villains.json").read_text(encoding="utf-8"))
    assert dataset["stats"]["mostFrequent"] == "Vulture"
    assert dataset["stats"]["mostFrequentCount"] == 3
    assert (tmp_path / "out" / "chart-config.json").exists()
    assert (tmp_path / "public" / "data" / "villains.json").exists()


@pytest.mark.asyncio
async def test_scrape_invalid_range_exits_with_error(stub_scraper):
    runner = CliRunner()
    result = await runner.invoke(main, ["--json", "scrape", "--start", "10", "--end", "2"])

    assert result.exit_code == 1
    assert "Invalid issue range: 10-2" in result.output


@pytest.mark.asyncio
async def test_chart_rebuilds_from_dataset(tmp_path, stub_scraper):
    runner = CliRunner()
    await runner.invoke(main, ["scrape", "--start", "1", "--end", "2"])
    (tmp_path / "data" / "chart-config.json").unlink()

    result = await runner.invoke(main, ["chart"])

    assert result.exit_code == 0, result.output
    chart_config = json.loads((tmp_path / "data" / "chart-config.json").read_text(encoding="utf-8"))
    assert [point["villainCount"] for point in chart_config["data"]] == [1, 1]


@pytest.mark.asyncio
async def test_chart_without_dataset_fails():
    runner = CliRunner()
    result = await runner.invoke(main, ["chart"])

    assert result.exit_code == 1
    assert "No dataset found" in result.output


@pytest.mark.asyncio
async def test_chart_with_explicit_input(tmp_path):
    dataset = {
        "series": "Amazing Spider-Man Vol 1",
        "processedAt": datetime(2024, 1, 1, tzinfo=UTC).isoformat(),
        "stats": {"totalVillains": 1, "mostFrequent": "Chameleon", "mostFrequentCount": 2, "averageFrequency": 2.0},
        "villains": [
            {
                "id": "chameleon",
                "name": "Chameleon",
                "aliases": [],
                "firstAppearance": 1,
                "appearances": [1, 15],
                "frequency": 2,
            }
        ],
        "timeline": [{"issue": 1, "villainCount": 1, "villains": ["Chameleon"]}],
    }
    dataset_path = tmp_path / "saved.json"
    dataset_path.write_text(json.dumps(dataset), encoding="utf-8")

    runner = CliRunner()
    result = await runner.invoke(main, ["chart", "--input", str(dataset_path)])

    assert result.exit_code == 0, result.output
    chart_config = json.loads((tmp_path / "data" / "chart-config.json").read_text(encoding="utf-8"))
    assert set(chart_config["colors"]) == {"Chameleon"}
    assert chart_config["path"] == "M 60,20"


@pytest.mark.asyncio
async def test_scrape_unexpected_error_reported(monkeypatch):
    class BrokenScraper(StubScraper):
        async def scrape_range(self, start_issue=None, end_issue=None, progress_callback=None):
            raise RuntimeError("wiki layout changed")

    monkeypatch.setattr(
        "villain_timeline.core.service.VillainTimelineService.scraper", property(lambda self: BrokenScraper())
    )

    runner = CliRunner()
    result = await runner.invoke(main, ["scrape", "--start", "1", "--end", "2"])

    assert result.exit_code == 1
    assert "❌ wiki layout changed" in result.output
    assert "Traceback" not in result.output


@pytest.mark.asyncio
async def test_log_mode_setting_selects_production(tmp_path, monkeypatch):
    """Test VILLAIN_TIMELINE_LOG_MODE=production skips the log files of interactive mode."""
    monkeypatch.setenv("VILLAIN_TIMELINE_LOG_MODE", "production")
    reload_config()

    runner = CliRunner()
    result = await runner.invoke(main, ["logging-status"])

    assert result.exit_code == 0
    assert "Production" in result.output
    assert not (tmp_path / "logs").exists()


@pytest.mark.asyncio
async def test_interactive_log_mode_writes_log_directory(tmp_path, monkeypatch):
    monkeypatch.setenv("VILLAIN_TIMELINE_LOG_MODE", "interactive")
    reload_config()

    runner = CliRunner()
    result = await runner.invoke(main, ["logging-status"])

    assert result.exit_code == 0
    assert (tmp_path / "logs").is_dir()
