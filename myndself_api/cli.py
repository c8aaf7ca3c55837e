"""
Command-line interface tools for the MyndSelf API.
"""

import asyncio
import json
from collections.abc import Coroutine
from typing import Any

import httpx
import typer

from .models import DailyCount, EmotionProfile, MoodRecord, TagCount

DEFAULT_BASE_URL = "http://localhost:8080"

app = typer.Typer(help="MyndSelf API CLI tools")


# MARK: - CLI Entry Points


def cli_log_mood() -> None:
    """Entry point for mood-log CLI command."""
    import typer

    typer.run(log_mood)


def cli_moods() -> None:
    """Entry point for mood-list CLI command."""
    import typer

    typer.run(moods)


# MARK: - Commands


@app.command()
def subscribe(
    email: str = typer.Argument(..., help="Email address to register"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MyndSelf API"
    ),
) -> None:
    """Register an email for early access."""

    async def _subscribe() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"{base_url}/api/subscribe", json={"email": email}
            )
            response.raise_for_status()
            print(f"Subscribed: {email}")

    _run_with_error_handling(_subscribe(), base_url)


@app.command()
def log_mood(
    mood: str = typer.Option("", "--mood", "-m", help="Mood label (default: neutral)"),
    note: str = typer.Option("", "--note", "-n", help="Free-text reflection"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MyndSelf API"
    ),
) -> None:
    """Record a mood entry."""

    async def _log_mood() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"{base_url}/api/mood", json={"mood": mood, "note": note}
            )
            response.raise_for_status()
            record = MoodRecord.model_validate(response.json()["item"])
            print(f"Recorded #{record.id}: {_format_mood(record)}")

    _run_with_error_handling(_log_mood(), base_url)


@app.command()
def moods(
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MyndSelf API"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """List all mood entries, oldest first."""

    async def _moods() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.get(f"{base_url}/api/mood")
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2))
                return

            for item in result["items"]:
                record = MoodRecord.model_validate(item)
                print(f"{record.id:>4}  {record.at}  {_format_mood(record)}")

    _run_with_error_handling(_moods(), base_url)


@app.command()
def profile(
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MyndSelf API"
    ),
) -> None:
    """Show the dominant emotion tags of recent entries."""

    async def _profile() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.get(f"{base_url}/api/mood/profile")
            response.raise_for_status()
            summary = EmotionProfile.model_validate(response.json()["profile"])
            tags = ", ".join(summary.dominant_tags) or "none"
            print(f"Dominant tags: {tags}")
            print(f"Last mood: {summary.last_mood or 'n/a'}")

    _run_with_error_handling(_profile(), base_url)


@app.command()
def analytics(
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MyndSelf API"
    ),
) -> None:
    """Show tag frequencies and entries per day."""

    async def _analytics() -> None:
        async with httpx.AsyncClient() as client:
            tags_response = await client.get(f"{base_url}/api/analytics/tags")
            tags_response.raise_for_status()
            daily_response = await client.get(f"{base_url}/api/analytics/daily")
            daily_response.raise_for_status()

            print("Tags:")
            for item in tags_response.json()["items"]:
                tag = TagCount.model_validate(item)
                print(f"  {tag.tag:<10} {tag.count}")
            print("Entries per day:")
            for item in daily_response.json()["items"]:
                day = DailyCount.model_validate(item)
                print(f"  {day.day}  {day.count}")

    _run_with_error_handling(_analytics(), base_url)


@app.command()
def health(
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MyndSelf API"
    ),
) -> None:
    """Check that the service is up."""

    async def _health() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.get(f"{base_url}/healthz")
            response.raise_for_status()
            print("ok" if response.json().get("ok") else "not ok")

    _run_with_error_handling(_health(), base_url)


# MARK: - Private Helpers


def _format_mood(record: MoodRecord) -> str:
    """Format a mood label with its optional note."""
    if not record.note:
        return record.mood
    return f"{record.mood} > {record.note}"


def _error_code(response: httpx.Response) -> str | None:
    """Extract the envelope error code from a failed response, if any."""
    try:
        return response.json().get("error")
    except (json.JSONDecodeError, AttributeError):
        return None


def _run_with_error_handling(coro: Coroutine[Any, Any, Any], base_url: str) -> None:
    """Run an async coroutine with standardized error handling."""
    try:
        asyncio.run(coro)
    except KeyboardInterrupt:
        print("\nStopped")
        raise typer.Exit(0)
    except httpx.ConnectError:
        print(f"Error: Could not connect to {base_url}")
        raise typer.Exit(1)
    except httpx.HTTPStatusError as e:
        code = _error_code(e.response)
        suffix = f" ({code})" if code else ""
        print(f"Error: HTTP {e.response.status_code}{suffix}")
        raise typer.Exit(1)
    except Exception as e:
        error_msg = str(e) if str(e) else f"Unknown error of type {type(e).__name__}"
        print(f"Error: {error_msg}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
