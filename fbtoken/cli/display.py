"""Shared console helpers for the fbtoken CLI."""

import json
from datetime import datetime

import click


def format_time_ago(iso_timestamp: str) -> str:
    """Format an ISO timestamp as a human-readable 'time ago' string."""
    if not iso_timestamp:
        return "never"
    try:
        dt = datetime.fromisoformat(iso_timestamp)
        delta = datetime.now() - dt
        if delta.total_seconds() < 60:
            # Includes timestamps in the future
            return "just now"
        elif delta.days > 0:
            return f"{delta.days}d ago"
        elif delta.seconds >= 3600:
            return f"{delta.seconds // 3600}h ago"
        else:
            return f"{delta.seconds // 60}m ago"
    except (TypeError, ValueError):
        return "unknown"


def format_saved_at(iso_timestamp) -> str:
    """Render a cached setup timestamp as 'YYYY-MM-DD HH:MM:SS (3h ago)'."""
    try:
        dt = datetime.fromisoformat(iso_timestamp)
    except (TypeError, ValueError):
        return "an unknown time"
    return f"{dt.strftime('%Y-%m-%d %H:%M:%S')} ({format_time_ago(iso_timestamp)})"


def show_detail(label: str, value: str):
    """Dim label followed by a highlighted value."""
    click.echo(f"{click.style(label, dim=True)} {click.style(value, fg='yellow')}")


def show_custom_token(token: str):
    click.echo(f"\n{click.style('Custom token created:', fg='green')} {click.style(token, dim=True)}")


def show_exchange_result(result: dict):
    click.secho("\nExchanged token result:", fg="green")
    click.secho(json.dumps(result, indent=2), fg="yellow")


def show_error(message: str, prefix: str = "Error:"):
    """Single red error line on stderr."""
    click.secho(f"{prefix} {message}", fg="red", err=True)
