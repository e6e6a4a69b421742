"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.clock import format_booking, format_slot, parse_slot
from ..adapters.json_booking_store import JsonBookingStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import SlotError
from ..services.availability import AvailabilityService

app = typer.Typer(
    name="clinicslots",
    help="Check appointment availability and list free slots for clinic practitioners",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./clinicslots.yaml"),
]
BookingsOption = Annotated[
    Optional[Path],
    typer.Option("--bookings", "-b", help="Path to bookings JSON. Defaults to bookings_file from the config"),
]
DateOption = Annotated[
    Optional[str],
    typer.Option("--date", help="Calendar day (YYYY-MM-DD). Defaults to today"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Appointment slot availability for clinic practitioners.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    return AppConfig.load_from_yaml(config_path)


def _build_service(config: AppConfig, bookings_file: Optional[Path]) -> AvailabilityService:
    path = bookings_file or config.bookings_file
    if path is None:
        raise ValueError("No bookings file given. Use --bookings or set bookings_file in the config.")
    return AvailabilityService(booking_store=JsonBookingStore(path), config=config)


def _resolve_day(tz: str, date_option: Optional[str], allow_past: bool = False):
    """
    Parse --date in the configured timezone, defaulting to today.

    Days before today are rejected unless ``allow_past`` is set, since no
    appointment can be booked into them.
    """
    today = pendulum.now(tz).date()
    if not date_option:
        return today
    try:
        day = pendulum.from_format(date_option, "YYYY-MM-DD", tz=tz).date()
    except ValueError as e:
        raise ValueError(f"Invalid date '{date_option}': {e}") from e

    if not allow_past and day < today:
        raise ValueError(f"Appointment date cannot be in the past: {day.isoformat()}")
    return day


def _fail(message: object) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(message))}")
    raise typer.Exit(1)


@app.command()
def free(
    practitioner: Annotated[str, typer.Argument(help="Practitioner id or name")],
    date: DateOption = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Appointment length in minutes")] = None,
    config_file: ConfigOption = None,
    bookings_file: BookingsOption = None,
):
    """
    List the free slots of a practitioner's working day.

    Examples:

        clinicslots free sharma
        clinicslots free doc-1 --date 2024-11-25 --duration 60
    """
    try:
        config = _load_config(config_file)
        practitioner_id = config.resolve_practitioner(practitioner)
        day = _resolve_day(config.timezone, date)
        service = _build_service(config, bookings_file)

        working_day = config.working_day_for(practitioner_id, day)
        if not working_day.is_open:
            console.print(f"[yellow]Clinic closed on {day.isoformat()}.[/yellow]")
            return

        slots = service.list_free_slots(working_day, practitioner_id, day, duration)
    except (FileNotFoundError, ValueError, SlotError) as e:
        _fail(e)

    if not slots:
        console.print(f"[yellow]⚠ No free slots for {practitioner_id} on {day.isoformat()}.[/yellow]")
        return

    console.print(f"[bold green]✓ {len(slots)} free slot(s) for {practitioner_id} on {day.isoformat()}:[/bold green]\n")
    for slot in slots:
        console.print(f"  {format_slot(slot)}")


@app.command()
def check(
    practitioner: Annotated[str, typer.Argument(help="Practitioner id or name")],
    start: Annotated[str, typer.Argument(help="Slot start (HH:MM)")],
    end: Annotated[str, typer.Argument(help="Slot end (HH:MM)")],
    date: DateOption = None,
    exclude: Annotated[Optional[str], typer.Option("--exclude", help="Booking id to ignore (when moving an appointment)")] = None,
    config_file: ConfigOption = None,
    bookings_file: BookingsOption = None,
):
    """
    Check whether a slot is free. Exits with status 1 when it is taken.
    """
    try:
        config = _load_config(config_file)
        practitioner_id = config.resolve_practitioner(practitioner)
        day = _resolve_day(config.timezone, date)
        candidate = parse_slot(start, end)
        service = _build_service(config, bookings_file)

        result = service.check_availability(candidate, practitioner_id, day, exclude_booking_id=exclude)
    except (FileNotFoundError, ValueError, SlotError) as e:
        _fail(e)

    label = f"{format_slot(candidate)} on {day.isoformat()}"
    if result.available:
        console.print(f"[bold green]✓ {label} is free for {practitioner_id}.[/bold green]")
        return

    console.print(f"[bold red]✗ {label} is not available for {practitioner_id}.[/bold red]")
    for booking in result.conflicting_windows:
        console.print(f"  {format_booking(booking)}")
    raise typer.Exit(1)


@app.command()
def summary(
    practitioner: Annotated[str, typer.Argument(help="Practitioner id or name")],
    date: DateOption = None,
    config_file: ConfigOption = None,
    bookings_file: BookingsOption = None,
):
    """
    Show booking counts and remaining capacity for a practitioner's day.
    """
    try:
        config = _load_config(config_file)
        practitioner_id = config.resolve_practitioner(practitioner)
        day = _resolve_day(config.timezone, date, allow_past=True)
        service = _build_service(config, bookings_file)

        day_summary = service.day_summary(practitioner_id, day)
    except (FileNotFoundError, ValueError, SlotError) as e:
        _fail(e)

    table = Table(
        title=f"{practitioner_id} - {day.isoformat()}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Metric", style="bold yellow")
    table.add_column("Value")

    table.add_row("Open", "yes" if day_summary.working_day.is_open else "no")
    table.add_row("Active bookings", str(day_summary.occupying_count))
    table.add_row("Closed bookings", str(day_summary.terminal_count))
    table.add_row("Free slots", str(len(day_summary.free_slots)))
    table.add_row("Fully booked", "yes" if day_summary.fully_booked else "no")

    console.print()
    console.print(table)
    console.print()


@app.command()
def list_practitioners(
    config_file: ConfigOption = None,
):
    """
    List all configured practitioners.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)

    if not config.practitioners:
        console.print("[yellow]No practitioners defined in the config file.[/yellow]")
        return

    table = Table(
        title="Configured practitioners",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Id", style="bold yellow")
    table.add_column("Name")
    table.add_column("Overrides", style="dim")

    for practitioner in config.practitioners:
        table.add_row(
            practitioner.id,
            practitioner.name,
            ", ".join(sorted(practitioner.business_hours)) or "-"
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]clinicslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
