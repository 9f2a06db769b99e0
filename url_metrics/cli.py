"""CLI entry point for the URL Metrics inspector."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from url_metrics.errors import InvalidConfiguration
from url_metrics.grouping.device import device_emoji, device_label, width_range_label
from url_metrics.inspector import (
    Fingerprinter,
    Inspector,
    LatestSampleFingerprinter,
    PageInspection,
    StaticFingerprinter,
)
from url_metrics.models.config import InspectorConfig
from url_metrics.models.status import CollectionStatus, IndicatorState
from url_metrics.reporter.json_report import generate_json_report
from url_metrics.reporter.time_diff import human_time_diff
from url_metrics.store.sample_store import JsonSampleStore

console = Console()

_STATE_MARKUP = {
    IndicatorState.COMPLETE: "[green]■[/green]",
    IndicatorState.POPULATED: "[yellow]■[/yellow]",
    IndicatorState.EMPTY: "[dim]□[/dim]",
}


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _yes_no(value: bool) -> str:
    return "[green]true[/green]" if value else "[red]false[/red]"


def _indicator_strip(status: CollectionStatus) -> str:
    return "".join(_STATE_MARKUP[vs.state] for vs in status.viewport_statuses)


def _load_inspector(config: str, etag: str | None = None) -> Inspector:
    cfg = InspectorConfig.load(config)
    fingerprinter: Fingerprinter = (
        StaticFingerprinter(etag) if etag else LatestSampleFingerprinter()
    )
    return Inspector(cfg, JsonSampleStore(Path(cfg.store_dir)), fingerprinter)


def _print_inspection(inspection: PageInspection, cfg: InspectorConfig) -> None:
    status = inspection.status
    now = inspection.collection.now
    tz = cfg.display_timezone()

    overview = Table(title=f"URL Metrics for {inspection.page.url or inspection.page.slug}")
    overview.add_column("Metric", style="bold")
    overview.add_column("Value")
    overview.add_row("Status", f"{_indicator_strip(status)} {status.message}")
    overview.add_row("Is every group complete", _yes_no(status.every_group_complete))
    overview.add_row("Is every group populated", _yes_no(status.every_group_populated))
    overview.add_row("Is any group populated", _yes_no(status.any_group_populated))
    overview.add_row("Common LCP element", escape(status.common_element or "none"))
    console.print(overview)

    groups = Table(title="Viewport Groups")
    groups.add_column("Device", style="bold")
    groups.add_column("")
    groups.add_column("Min.", justify="right")
    groups.add_column("Max.", justify="right")
    groups.add_column("Count", justify="right")
    groups.add_column("Complete")
    groups.add_column("LCP Element")
    for group, vs in zip(inspection.collection, status.viewport_statuses):
        groups.add_row(
            device_label(group),
            device_emoji(group),
            str(group.min_width),
            "∞" if group.is_unbounded else str(group.max_width),
            f"{group.count()}/{group.sample_size}",
            _yes_no(vs.complete),
            escape(group.get_dominant_element() or "unknown"),
        )
    console.print(groups)

    console.print("\n[bold]URL Metrics[/bold]")
    if not inspection.url_metrics:
        console.print("[yellow]No URL Metrics collected yet[/yellow]")
    for metric in inspection.url_metrics:
        group = inspection.collection.group_for_width(metric.width)
        captured = metric.captured_at(tz)
        console.print(
            f"  {human_time_diff(metric.timestamp, now)} ago "
            f"({captured.strftime('%Y-%m-%d %H:%M:%S %Z')}) | {escape(metric.url or '-')} | "
            f"Viewport Group: {width_range_label(group)} ({group.device_classification()}) "
            f"{device_emoji(group)}"
        )
        console.print(f"    [dim]{escape(metric.model_dump_json(indent=2))}[/dim]", highlight=False)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Inspect collected URL Metrics across viewport groups"""
    setup_logging(verbose)


@cli.command()
@click.argument("page")
@click.option("--etag", "-e", default=None, help="Current ETag (defaults to the newest URL Metric's)")
@click.option("--json", "json_path", default=None, help="Also write a JSON report to this path")
@click.option("--report", "-r", is_flag=True, help="Write a JSON report to the configured report directory")
@click.option("--config", "-c", default="url-metrics.json", help="Config file path")
def inspect(
    page: str, etag: str | None, json_path: str | None, report: bool, config: str
) -> None:
    """Show viewport group status for one page (slug or URL)."""
    try:
        inspector = _load_inspector(config, etag)
        inspection = inspector.inspect(page)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        console.print("Run 'url-metrics init' to create a default config.")
        sys.exit(1)
    except (InvalidConfiguration, ValidationError) as e:
        console.print(f"[red]Status unavailable: {e}[/red]")
        sys.exit(1)
    except LookupError as e:
        console.print(f"[yellow]{e}[/yellow]")
        sys.exit(1)

    _print_inspection(inspection, inspector.config)

    report_paths = []
    if json_path:
        report_paths.append(Path(json_path))
    if report:
        report_dir = Path(inspector.config.report_output_dir)
        report_paths.append(report_dir / f"{inspection.page.slug}.json")
    for path in report_paths:
        generate_json_report(inspection, path)
        console.print(f"  JSON report: [blue]{escape(str(path))}[/blue]")


@cli.command("list")
@click.option("--config", "-c", default="url-metrics.json", help="Config file path")
def list_pages(config: str) -> None:
    """List stored pages with their viewport group status."""
    try:
        inspector = _load_inspector(config)
        inspections = inspector.inspect_all()
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except (InvalidConfiguration, ValidationError) as e:
        console.print(f"[red]Status unavailable: {e}[/red]")
        sys.exit(1)

    if not inspections:
        console.print("[yellow]No URL Metrics stored[/yellow]")
        return

    table = Table(title="URL Metrics")
    table.add_column("Slug", style="bold")
    table.add_column("URL")
    table.add_column("Modified")
    table.add_column("Groups")
    table.add_column("Status")
    table.add_column("Inspect", style="dim")
    for inspection in inspections:
        modified = datetime.fromtimestamp(
            inspection.page.modified, tz=inspector.config.display_timezone()
        )
        table.add_row(
            inspection.page.slug,
            inspection.page.url,
            modified.strftime("%Y/%m/%d at %H:%M"),
            _indicator_strip(inspection.status),
            inspection.status.message,
            inspection.status.edit_link or "",
        )
    console.print(table)


@cli.command()
@click.option("--store-dir", "-s", default="./url-metrics", help="Directory of page JSON documents")
def init(store_dir: str) -> None:
    """Create a default configuration file."""
    config_path = Path("url-metrics.json")
    if config_path.exists():
        if not click.confirm("url-metrics.json already exists. Overwrite?"):
            return

    cfg = InspectorConfig(store_dir=store_dir)
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nYou can now customize this file and run:")
    console.print("  [blue]url-metrics list[/blue]")


if __name__ == "__main__":
    cli()
