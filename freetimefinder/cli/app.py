"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.json_event_source import JsonEventSource
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import FreeTimeFinderError
from ..domain.models import MeetingRequest, TimeRange
from ..services.meeting_finder import MeetingFinderService

app = typer.Typer(
    name="freetimefinder",
    help="Find the free ranges of a day for a meeting",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)


def _configure_logging(level: int) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration.

    An explicitly given file must exist; without one the default location is
    tried and built-in defaults are used if nothing is found there.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if not config_path.exists():
        return AppConfig()
    return AppConfig.load_from_yaml(config_path)


def _parse_day(day_option: Optional[str]) -> pendulum.Date:
    if not day_option:
        return pendulum.today().date()
    try:
        return pendulum.from_format(day_option, "YYYY-MM-DD").date()
    except ValueError as e:
        raise ValueError(f"Ungültiges Datum '{day_option}': {e}") from e


def _describe_participants(config: AppConfig, emails: List[str]) -> str:
    """List participants as "name (email)" where the email belongs to a colleague."""
    described = []
    for email in emails:
        colleague = config.find_colleague_by_email(email)
        described.append(f"{colleague.display_name()} ({email})" if colleague else email)
    return ", ".join(described) or "-"


def _format_range(time_range: TimeRange) -> str:
    suffix = " (bis Tagesende)" if time_range.ends_at_end_of_day else ""
    return f"{time_range} Uhr ({time_range.duration} Min.){suffix}"


@app.command()
def find(
    participants: Annotated[Optional[List[str]], typer.Argument(help="Mandatory participants (names or email addresses).")] = None,
    optional: Annotated[Optional[List[str]], typer.Option("--optional", "-o", help="Optional participant, may be repeated.")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Meeting duration in minutes")] = None,
    events_file: Annotated[Optional[Path], typer.Option("--events", "-e", help="JSON file with the day's events")] = None,
    day: Annotated[Optional[str], typer.Option("--date", help="Day to search (YYYY-MM-DD). Defaults to today.")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Find the ranges of a day in which a meeting can take place.

    Examples:

        freetimefinder find alice bob --events events.json

        freetimefinder find alice -o carol --duration 60 --date 2024-11-25
    """
    try:
        config = _load_config(config_file)
        _configure_logging(logging.DEBUG if verbose else config.get_log_level())

        mandatory = config.resolve_participants(participants or [])
        optional_attendees = config.resolve_participants(optional or [])
        if not mandatory and not optional_attendees:
            console.print("[bold red]Fehler:[/bold red] Keine Teilnehmer angegeben.")
            raise typer.Exit(1)

        source_path = events_file or config.events_file
        if source_path is None:
            console.print(
                "[bold red]Fehler:[/bold red] Keine Termin-Datei angegeben "
                "(--events oder events_file in der Config)."
            )
            raise typer.Exit(1)

        search_day = _parse_day(day)
        min_duration = duration if duration is not None else config.defaults.duration_minutes
        request = MeetingRequest(
            duration=min_duration,
            attendees=frozenset(mandatory),
            optional_attendees=frozenset(optional_attendees),
        )

        console.print("[bold cyan]📊 Zusammenfassung:[/bold cyan]")
        console.print(f"   Pflicht-Teilnehmer: {_describe_participants(config, mandatory)}")
        console.print(f"   Optionale Teilnehmer: {_describe_participants(config, optional_attendees)}")
        console.print(f"   Tag: {search_day.format('DD.MM.YYYY')}")
        console.print(f"   Mindestdauer: {min_duration} Minuten")
        console.print()

        service = MeetingFinderService(event_source=JsonEventSource(source_path))
        ranges = asyncio.run(service.find_ranges(day=search_day, request=request))

        if not ranges:
            console.print(
                "[yellow]⚠ Keine verfügbaren Zeiträume gefunden.[/yellow]\n"
                "Versuchen Sie eine kürzere Mindestdauer oder weniger Teilnehmer."
            )
        else:
            console.print(f"[bold green]✓ {len(ranges)} verfügbare(r) Zeitraum/Zeiträume gefunden:[/bold green]\n")
            for time_range in ranges:
                console.print(f"  {_format_range(time_range)}")

        console.print()

    except (FileNotFoundError, ValueError, FreeTimeFinderError) as e:
        logger.debug("Search failed", exc_info=True)
        console.print(f"[bold red]Fehler:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def list_colleagues(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List all configured colleagues.
    """
    try:
        config = _load_config(config_file)

        if not config.colleagues:
            console.print("[yellow]Keine Kollegen in der Config-Datei definiert.[/yellow]")
            return

        table = Table(
            title="Konfigurierte Kollegen",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name (Alias)", style="bold yellow")
        table.add_column("E-Mail", style="dim")

        for colleague in config.colleagues:
            table.add_row(colleague.display_name(), colleague.email)

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]freetimefinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
