"""Einsatzplaner: Haupt-CLI.

Verwendung:
  python main.py config init              Default-Konfiguration anlegen
  python main.py config show              Konfiguration anzeigen
  python main.py sample                   Beispieldatensatz als JSON speichern
  python main.py validate                 Machbarkeits-Check
  python main.py run                      Allokation → Konsole + Protokoll
  python main.py run --excel --pdf        … zusätzlich Excel + PDF
  python main.py export <ergebnis.json>   Excel + PDF aus gespeichertem Ergebnis
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

# Standard-Pfade
DEFAULT_DATA_JSON = Path("output/schedule_data.json")
DEFAULT_RESULT_JSON = Path("output/allocation_result.json")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config():
    """Lädt die Konfiguration; ohne Datei gelten die Defaults."""
    from config.manager import ConfigManager
    from config.defaults import default_planner_config

    mgr = ConfigManager()
    if mgr.first_run_check():
        console.print(
            "[dim]Keine Konfiguration gefunden – Defaults werden verwendet "
            "(python main.py config init).[/dim]"
        )
        return default_planner_config()
    try:
        return mgr.load()
    except ValueError as e:
        console.print(f"[red bold]Konfiguration fehlerhaft:[/red bold]\n{e}")
        sys.exit(1)


def _load_data(json_path: str, use_sample: bool):
    from models.schedule_data import ScheduleData
    from data.sample_data import sample_data

    if use_sample:
        return sample_data(_load_config())

    p = Path(json_path)
    if not p.exists():
        console.print(
            f"[red]Keine Datendatei gefunden: {p}[/red]\n"
            "Verwenden Sie [bold]python main.py sample[/bold] "
            "oder das [bold]--sample[/bold] Flag."
        )
        sys.exit(1)
    console.print(f"[bold]Lade Datensatz:[/bold] {p}")
    try:
        return ScheduleData.load_json(p)
    except ValueError as e:
        console.print(f"[red bold]Datensatz ungültig:[/red bold]\n{e}")
        sys.exit(1)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anlegen oder anzeigen."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
def config_init(force: bool):
    """Legt die Default-Konfiguration als YAML an."""
    from config.manager import ConfigManager
    from config.defaults import default_planner_config

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow] "
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    mgr.save(default_planner_config())


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config()

    alloc = config.allocator
    console.print(Panel(
        f"[bold]{config.institution_name}[/bold]  |  "
        f"Tagesquelle: {alloc.day_mode.value}  |  Granularität: {alloc.granularity.value}",
        title="Planer-Konfiguration",
        border_style="cyan",
    ))

    table = Table(title="Zeitraster", box=box.ROUNDED)
    table.add_column("#")
    table.add_column("Slot")
    for i, slot in enumerate(config.time_grid.time_slots, start=1):
        table.add_row(str(i), slot)
    console.print(table)
    console.print(f"[bold]Tage:[/bold] {', '.join(config.time_grid.day_names)}")

    table2 = Table(title="Zeiträume", box=box.ROUNDED)
    table2.add_column("Name")
    table2.add_column("Start")
    table2.add_column("Ende")
    for name, period in config.periods.items():
        marker = " [green]●[/green]" if name == alloc.active_period else ""
        table2.add_row(name + marker, str(period.start or "—"), str(period.end or "—"))
    console.print(table2)

    w = alloc.weights
    console.print(
        f"[bold]Bewertung:[/bold] Basis {w.base_score} | "
        f"Lehrkraft belegt −{w.teacher_unavailable_penalty} | "
        f"Raum belegt −{w.room_unavailable_penalty} | "
        f"Tageslast ≥ {w.dispersion_threshold}h −{w.dispersion_penalty}"
    )
    console.print(f"[bold]Dauer pro Veranstaltung:[/bold] {alloc.event_duration}h")


# ─── SAMPLE ───────────────────────────────────────────────────────────────────

@click.command("sample")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad für JSON-Export.")
def cmd_sample(json_path: str):
    """Speichert den Beispieldatensatz (10 Lehrkräfte, 13 Kurse, 9 Räume)."""
    from data.sample_data import sample_data

    data = sample_data(_load_config())
    out_path = Path(json_path)
    data.save_json(out_path)
    console.print(f"\n[dim]{data.summary()}[/dim]")
    console.print(f"[green]✓[/green] JSON gespeichert: {out_path}")


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
@click.option("--sample", "use_sample", is_flag=True, default=False,
              help="Beispieldatensatz statt JSON verwenden.")
def cmd_validate(json_path: str, use_sample: bool):
    """Führt einen Machbarkeits-Check auf dem Datensatz durch."""
    data = _load_data(json_path, use_sample)
    console.print(f"\n{data.summary()}\n")
    report = data.validate_feasibility()
    report.print_rich()
    sys.exit(0 if report.is_feasible else 1)


# ─── RUN ──────────────────────────────────────────────────────────────────────

@click.command("run")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
@click.option("--sample", "use_sample", is_flag=True, default=False,
              help="Beispieldatensatz statt JSON verwenden.")
@click.option("--period", default=None,
              help="Zeitraum verwenden (setzt day_mode auf 'period').")
@click.option("--granularity", type=click.Choice(["slot", "day"]), default=None,
              help="Lehrer-Prüfung im Bewerter überschreiben.")
@click.option("--messages", "show_messages", is_flag=True, default=False,
              help="Alle Meldungen auf der Konsole ausgeben.")
@click.option("--excel", is_flag=True, default=False, help="Excel exportieren.")
@click.option("--pdf", is_flag=True, default=False, help="PDF exportieren.")
@click.option("--no-log", is_flag=True, default=False, help="Keine Protokolldatei schreiben.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Logging.")
def cmd_run(json_path: str, use_sample: bool, period: Optional[str],
            granularity: Optional[str], show_messages: bool, excel: bool,
            pdf: bool, no_log: bool, verbose: bool):
    """Führt die Greedy-Allokation aus."""
    from config.schema import AvailabilityGranularity, DayMode
    from solver.allocator import GreedyAllocator
    from analysis.solution_validator import SolutionValidator
    from export.console import print_result
    from export.log_writer import write_log

    _setup_logging(verbose)
    data = _load_data(json_path, use_sample)

    alloc_update = {}
    if period is not None:
        alloc_update.update(day_mode=DayMode.PERIOD, active_period=period)
    if granularity is not None:
        alloc_update["granularity"] = AvailabilityGranularity(granularity)
    if alloc_update:
        data = data.model_copy(update={"config": data.config.model_copy(update={
            "allocator": data.config.allocator.model_copy(update=alloc_update),
        })})

    report = data.validate_feasibility()
    if not report.is_feasible:
        report.print_rich()
        sys.exit(1)

    roster = data.build_roster()
    result = GreedyAllocator.from_config(data.config).allocate(roster.courses, roster.rooms)

    print_result(result, console=console, show_messages=show_messages)
    SolutionValidator().validate(result, data).print_rich()

    result.save_json(DEFAULT_RESULT_JSON)
    console.print(f"[green]✓[/green] Ergebnis gespeichert: {DEFAULT_RESULT_JSON}")

    if not no_log:
        path = write_log(result, Path(data.config.output.log_dir))
        console.print(f"[green]✓[/green] Protokoll geschrieben: {path}")

    _export(result, data, excel, pdf)


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.argument("ergebnis", type=click.Path(exists=True, path_type=Path),
                default=str(DEFAULT_RESULT_JSON))
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
@click.option("--sample", "use_sample", is_flag=True, default=False,
              help="Beispieldatensatz statt JSON verwenden.")
def cmd_export(ergebnis: Path, json_path: str, use_sample: bool):
    """Exportiert ein gespeichertes Ergebnis als Excel und PDF."""
    from solver.allocator import AllocationResult

    data = _load_data(json_path, use_sample)
    result = AllocationResult.load_json(ergebnis)
    _export(result, data, excel=True, pdf=True)


def _export(result, data, excel: bool, pdf: bool) -> None:
    out_dir = Path(data.config.output.export_dir)
    if excel:
        from export.excel_export import ExcelExporter
        path = out_dir / "einsatzplan.xlsx"
        ExcelExporter(result, data).export(path)
        console.print(f"[green]✓[/green] Excel gespeichert: {path}")
    if pdf:
        from export.pdf_export import PdfExporter
        exporter = PdfExporter(result, data)
        exporter.export_teacher_schedules(out_dir / "lehrkraefte.pdf")
        exporter.export_room_schedules(out_dir / "raeume.pdf")
        console.print(f"[green]✓[/green] PDF gespeichert: {out_dir}/lehrkraefte.pdf, raeume.pdf")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
def cli():
    """Einsatzplaner: Greedy-Zuweisung von Lehrveranstaltungen zu Slots,
    Räumen und Lehrkräften.

    Starten Sie mit: python main.py run --sample
    """


def main():
    cli()


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_sample)
cli.add_command(cmd_validate)
cli.add_command(cmd_run)
cli.add_command(cmd_export)


if __name__ == "__main__":
    main()
