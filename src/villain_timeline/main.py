# ABOUTME: villain-timeline command line interface built on asyncclick
# ABOUTME: Provides commands for scraping the villain dataset, rebuilding the chart config and logging status

from pathlib import Path
from typing import NoReturn

import asyncclick as click
import structlog
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from villain_timeline.config import get_config
from villain_timeline.core.service import PipelineResult, VillainTimelineService
from villain_timeline.errors import VillainTimelineError
from villain_timeline.utils.logging import (
    LoggingMode,
    configure_logging,
    create_scrape_progress,
    get_logging_status,
    with_pipeline_context,
)
from villain_timeline.utils.rich_tables import (
    create_logging_status_table,
    create_statistics_table,
    create_top_villains_table,
    print_rich_table,
)

console = Console()


def _fail(logger: structlog.stdlib.BoundLogger, event: str, error: Exception) -> NoReturn:
    """Log a failed command, print it in red and exit with status 1."""
    if isinstance(error, (VillainTimelineError, OSError, ValueError)):
        logger.error(event, error=str(error), error_type=type(error).__name__)
    else:
        logger.exception(event, error=str(error), error_type=type(error).__name__)

    console.print(f"[red]❌ {escape(str(error))}[/red]")
    raise click.exceptions.Exit(1) from error


def _display_scrape_results(result: PipelineResult) -> None:
    """Display scrape statistics and output locations."""
    console.print(
        f"✅ Scraped [bold blue]{result.issues_scraped}[/bold blue] issues "
        f"([green]{result.issues_with_antagonists}[/green] with antagonists)"
    )

    print_rich_table(console, create_statistics_table(result.data))

    if result.data.villains:
        print_rich_table(console, create_top_villains_table(result.data.villains))

    console.print(f"💾 Dataset: [cyan]{result.villains_path}[/cyan]")
    console.print(f"📈 Chart config: [cyan]{result.chart_config_path}[/cyan]")
    if result.public_files:
        console.print(f"🌐 Copied {len(result.public_files)} file(s) to the public data directory")


@click.command()
@click.option("--start", "start_issue", type=int, default=None, help="First issue to scrape (default from config)")
@click.option("--end", "end_issue", type=int, default=None, help="Last issue to scrape, inclusive (default from config)")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for villains.json and chart-config.json",
)
@click.pass_context
async def scrape(ctx, start_issue: int | None, end_issue: int | None, output_dir: Path | None):
    """
    🕷️ Scrape antagonists from Marvel Fandom and build the villain dataset.

    Fetches each issue page, extracts its antagonists, deduplicates them
    across issues and writes the dataset plus the chart configuration.
    """
    await _scrape_async(start_issue, end_issue, output_dir, ctx.obj["json_output"])


async def _scrape_async(start_issue: int | None, end_issue: int | None, output_dir: Path | None, json_output: bool):
    """Run the scrape pipeline with optional UI display."""
    config = get_config()
    start = config.start_issue if start_issue is None else start_issue
    end = config.end_issue if end_issue is None else end_issue

    with with_pipeline_context("scrape", start_issue=start, end_issue=end) as logger:
        logger.info("Starting scrape pipeline")
        service = VillainTimelineService(config=config, data_dir=output_dir)

        try:
            if json_output:
                result = await service.run(start, end)
            else:
                console.print(
                    Panel.fit(
                        f"🕷️ [bold red]Villain Timeline[/bold red] 🕷️\n{config.series_name}: issues {start}-{end}",
                        border_style="red",
                    )
                )
                with create_scrape_progress(console, total=max(end - start + 1, 0)) as tracker:
                    result = await service.run(start, end, progress_callback=tracker)

        except Exception as e:
            _fail(logger, "Scrape pipeline failed", e)

        finally:
            await service.close()

        logger.info(
            "Scrape pipeline complete",
            issues=result.issues_scraped,
            total_villains=result.data.stats.total_villains,
        )

        if not json_output:
            _display_scrape_results(result)


@click.command()
@click.option(
    "--input",
    "dataset_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="villains.json to build from (default: data directory)",
)
@click.pass_context
def chart(ctx, dataset_path: Path | None):
    """
    📈 Rebuild chart-config.json from an existing villain dataset.
    """
    json_output = ctx.obj["json_output"]
    with with_pipeline_context("chart", dataset=str(dataset_path) if dataset_path else None) as logger:
        service = VillainTimelineService()
        try:
            data, chart_config_path = service.rebuild_chart(dataset_path)
        except Exception as e:
            _fail(logger, "Chart rebuild failed", e)

        if not json_output:
            console.print(
                f"✅ Chart config for [bold]{len(data.timeline)}[/bold] issues written to [cyan]{chart_config_path}[/cyan]"
            )


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show where logs are written and which libraries are quieted.
    """
    print_rich_table(console, create_logging_status_table(get_logging_status()))


def _setup_cli_logging(json_output: bool, log_level: str | None, log_file: str | None) -> None:
    """Configure logging from CLI flags, falling back to settings for anything not given.

    --json forces production mode; otherwise VILLAIN_TIMELINE_LOG_MODE decides.
    """
    settings = get_config()
    level = log_level or settings.log_level
    target = log_file or (str(settings.log_file) if settings.log_file else None)

    try:
        configure_logging(
            mode=LoggingMode.PRODUCTION if json_output else settings.log_mode,
            log_level=level,
            log_file=target,
        )
    except OSError:
        # Log file not writable, JSON on stdout still works
        configure_logging(mode=LoggingMode.PRODUCTION, log_level=level, log_file=None)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🕷️ Villain Timeline - Spider-Man antagonists issue by issue

    Scrape per-issue antagonist listings from Marvel Fandom, deduplicate them
    into a villain dataset and produce chart-ready configuration.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _setup_cli_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(scrape)
app.add_command(chart)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
