"""
eventshare CLI - generate share text from the command line.

Usage:
    eventshare --help                          Show all commands
    eventshare generate events.json            Print share text
    eventshare generate events.json --intent   Also print the Twitter intent URL
    eventshare config                          Show the active share config
    eventshare serve                           Start the API server
"""

import json
from datetime import datetime
from pathlib import Path

import typer
from pydantic import TypeAdapter, ValidationError

from eventshare.schemas.event import Event, EventApiRecord
from eventshare.schemas.share import ShareTextRequest

app = typer.Typer(
    name="eventshare",
    help="eventshare CLI - share text for the study-session calendar",
    no_args_is_help=True,
)

_EVENT_LIST = TypeAdapter(list[Event | EventApiRecord])


# --- Output helpers ---


def _print_detail(label: str, value: object) -> None:
    """Print an indented metadata line."""
    typer.echo(f"  {label}: {value}", err=True)


def _print_error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"❌ {message}", err=True)


def load_events(path: Path) -> list[Event]:
    """
    Load events from a JSON file.

    Accepts a bare list of events, a ``{"events": [...]}`` object, or an
    admin API list response (``count``/``total``/``events``). Each event may
    be in share shape or raw API record shape.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        return ShareTextRequest.model_validate(data).to_events()

    items = _EVENT_LIST.validate_python(data)
    return [item.to_event() if isinstance(item, EventApiRecord) else item for item in items]


@app.command()
def generate(
    events_file: Path = typer.Argument(..., help="JSON file with events"),
    now: str | None = typer.Option(
        None, "--now", help="Reference time (ISO 8601), defaults to the current time"
    ),
    intent: bool = typer.Option(False, "--intent", "-i", help="Print the Twitter intent URL"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print result metadata"),
):
    """Generate share text for this month's upcoming events."""
    from eventshare.config import get_config
    from eventshare.core.logging import setup_logging
    from eventshare.services.share_content import build_share_content_generator
    from eventshare.services.social_utils import (
        build_fallback_share_text,
        build_twitter_intent_url,
    )

    setup_logging(debug=True if verbose else None)

    try:
        events = load_events(events_file)
    except OSError as e:
        _print_error(f"Cannot read {events_file}: {e}")
        raise typer.Exit(1) from e
    except (json.JSONDecodeError, ValidationError) as e:
        _print_error(f"Invalid events file {events_file}: {e}")
        raise typer.Exit(1) from e

    try:
        reference = datetime.fromisoformat(now) if now else None
    except ValueError as e:
        _print_error(f"Invalid --now value: {now}")
        raise typer.Exit(1) from e

    config = get_config()
    generator = build_share_content_generator(config)
    try:
        result = generator.generate(events, now=reference)
    except TypeError as e:
        _print_error(f"Cannot generate share text, using fallback: {e}")
        result = None

    share_text = (
        result.share_text
        if result is not None
        else build_fallback_share_text(config.share.destination_url)
    )
    typer.echo(share_text)

    if verbose and result is not None:
        typer.echo("", err=True)
        _print_detail("events", len(events))
        _print_detail("included", result.included_event_count)
        _print_detail("truncated", result.was_truncated)
        _print_detail("length", len(result.share_text))

    if intent:
        typer.echo("")
        typer.echo(build_twitter_intent_url(share_text, config.share.intent_url))


@app.command("config")
def show_config():
    """Show the active share text configuration."""
    from eventshare.config import get_config

    share = get_config().share
    typer.echo(share.to_generation_config().model_dump_json(indent=2))
    _print_detail("timezone", share.timezone)
    _print_detail("cache_ttl_seconds", share.cache_ttl_seconds)
    _print_detail("cache_max_size", share.cache_max_size)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable hot reload"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
):
    """Start the API server."""
    import subprocess

    cmd = ["uvicorn", "eventshare.main:app", "--host", "0.0.0.0", "--port", str(port)]
    if reload:
        cmd.append("--reload")

    subprocess.run(cmd, check=False)


if __name__ == "__main__":
    app()
