"""
Command-line interface for almanac-events.

Provides commands to extract calendar events from a document and to run
the extraction API server.

Usage:
    almanac-events extract ALMANAC.pdf   # Extract and save events
    almanac-events serve                 # Run the HTTP API
"""

import json
import sys

import click

from src.config.settings import get_settings
from src.observability.logging import setup_logging

STRATEGIES = ["auto", "lines", "blocks", "entries", "merged"]


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """Almanac Events - calendar event extraction from academic almanacs."""
    setup_logging(level="DEBUG" if debug else None)


@main.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--strategy",
    type=click.Choice(STRATEGIES),
    default=None,
    help="Segmentation strategy (default from EVENTS_STRATEGY)",
)
@click.option("--output-dir", default=None, help="Directory for JSON/CSV output")
@click.option("--save/--no-save", default=True, help="Write JSON, CSV and raw text files")
@click.option("--json", "as_json", is_flag=True, help="Print the event set as JSON")
@click.option("--limit", default=10, help="Number of sample events to print")
def extract(
    path: str,
    strategy: str | None,
    output_dir: str | None,
    save: bool,
    as_json: bool,
    limit: int,
) -> None:
    """Extract calendar events from a PDF or text file."""
    from src.event_extraction.config import EventExtractionConfig
    from src.event_extraction.extractor import EventExtractor
    from src.ingestion.text_loader import AcquisitionError
    from src.services.extraction_service import ExtractionService
    from src.storage.event_writer import EventFileWriter

    settings = get_settings()
    config = EventExtractionConfig(strategy=strategy) if strategy else EventExtractionConfig()
    service = ExtractionService(
        extractor=EventExtractor(config=config),
        writer=EventFileWriter(output_dir or settings.output_dir),
        settings=settings,
    )

    try:
        result = service.process_file(path, save=save)
    except AcquisitionError as e:
        click.echo(click.style(f"Extraction failed: {e}", fg="red"), err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.event_set.to_dict(), indent=2, ensure_ascii=False))
        return

    click.echo("\n=== Extraction Results ===")
    click.echo(f"Source: {result.source_name}")
    click.echo(f"Pages: {result.page_count}")
    click.echo(f"Total events found: {result.total_events}")
    groups = result.event_set.group_by_type()
    if groups:
        click.echo("Event types: " + ", ".join(
            f"{event_type} ({len(events)})" for event_type, events in groups.items()
        ))
    if "warning" in result.metadata:
        click.echo(click.style(f"Warning: {result.metadata['warning']}", fg="yellow"))

    if result.total_events:
        click.echo("\nSample events:")
        for index, event in enumerate(result.event_set.events[:limit], start=1):
            click.echo(
                f"  {index}. {event.title} ({event.date or 'no date'}) "
                f"- {event.type} [{event.confidence:.2f}]"
            )

    for fmt, outcome in result.saved_files.items():
        if outcome.success:
            click.echo(f"Saved {fmt}: {outcome.file_path}")
        else:
            click.echo(click.style(f"Failed to save {fmt}: {outcome.error}", fg="red"))


@main.command()
@click.option("--host", default=None, help="API server host")
@click.option("--port", default=None, type=int, help="API server port")
@click.option("--reload", is_flag=True, help="Enable auto-reload (dev only)")
@click.option("--metrics/--no-metrics", default=True, help="Enable metrics server")
@click.option("--metrics-port", default=None, type=int, help="Metrics server port")
def serve(
    host: str | None,
    port: int | None,
    reload: bool,
    metrics: bool,
    metrics_port: int | None,
) -> None:
    """Start the extraction API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    if metrics:
        from src.observability.metrics import get_metrics

        metrics_port = metrics_port or settings.metrics_port
        get_metrics().start_server(port=metrics_port)
        click.echo(f"Metrics available on http://localhost:{metrics_port}/metrics")

    click.echo(f"Starting API server on {host}:{port}")
    click.echo(f"API docs available on http://localhost:{port}/docs")

    uvicorn.run(
        "src.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
