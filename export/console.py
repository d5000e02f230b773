"""Konsolenausgabe eines Allokationsergebnisses (Rich)."""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from solver.allocator import AllocationResult


def build_schedule_table(result: AllocationResult) -> Table:
    """Tabelle aller Placements in Buchungsreihenfolge."""
    table = Table(title="Generated Schedule", box=box.ROUNDED)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Tag")
    table.add_column("Slot")
    table.add_column("Kurs", style="bold")
    table.add_column("Raum")
    table.add_column("Lehrkraft")
    table.add_column("h", justify="right")
    for i, p in enumerate(result.placements, start=1):
        table.add_row(str(i), p.day, p.time_slot, p.course, p.room, p.teacher, str(p.duration))
    return table


def print_result(result: AllocationResult, console: Console | None = None,
                 show_messages: bool = False) -> None:
    console = console or Console()
    console.print(build_schedule_table(result))

    if result.unmet_hours:
        console.print("\n[yellow bold]Unvollständige Kurse:[/yellow bold]")
        for name, hours in result.unmet_hours.items():
            console.print(f"  [yellow]• {escape(name)}: {hours}h offen[/yellow]")
    else:
        console.print("\n[green]✓ Alle Kurse vollständig geplant.[/green]")

    if show_messages:
        console.print("\n[bold]Log Messages:[/bold]")
        for msg in result.messages:
            style = "red" if msg.startswith(("Could not", "Invalid")) else "dim"
            console.print(f"[{style}]{escape(msg)}[/{style}]", highlight=False)
