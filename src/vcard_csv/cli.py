from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from .config import Settings, ensure_workspace, load_settings, parse_mode
from .convert import convert as convert_text
from .io import collect_sources, default_output_path, read_vcf_file, write_csv_file
from .model import Mode
from .report import FileOutcome, print_preview, print_summary

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="vcard-csv: convert vCard (.vcf) contact exports into spreadsheet-ready CSV.",
)
console = Console(stderr=True)

DEFAULT_CONF = Path("local") / "vcard-csv.conf"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _resolve(settings: Settings, mode: str | None, no_escape_quotes: bool) -> tuple[Mode, bool]:
    try:
        effective_mode = parse_mode(mode) if mode else settings.mode
    except ValueError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(code=2)
    escape = settings.escape_quotes and not no_escape_quotes
    return effective_mode, escape


def _convert_one(path: Path, mode: Mode, escape: bool):
    try:
        text = read_vcf_file(path)
    except (OSError, ValueError) as e:
        console.print(f"[bold red]Cannot read {path}:[/bold red] {e}")
        raise typer.Exit(code=2)
    return convert_text(text, mode=mode, escape_quotes=escape)


def _write(csv_text: str, out_path: Path) -> None:
    try:
        write_csv_file(csv_text, out_path)
    except OSError as e:
        console.print(f"[bold red]Cannot write {out_path}:[/bold red] {e}")
        raise typer.Exit(code=2)


def _run(
    files: list[Path],
    mode: Mode,
    escape: bool,
    settings: Settings,
    output: Path | None,
    out_dir: Path | None,
    stdout: bool,
) -> list[FileOutcome]:
    """Convert each file and write its CSV; shared by `convert` and `batch`."""
    if not files:
        console.print("[bold red]No .vcf files found.[/bold red]")
        raise typer.Exit(code=2)
    if output is not None and len(files) > 1:
        console.print("[bold red]--output can only be used with a single input file.[/bold red]")
        raise typer.Exit(code=2)

    outcomes: list[FileOutcome] = []
    for path in files:
        result = _convert_one(path, mode, escape)
        if stdout:
            sys.stdout.write(result.csv + "\n")
            outcomes.append(FileOutcome(source=path, result=result))
            continue
        out_path = output or default_output_path(path, out_dir, settings.output_suffix)
        _write(result.csv, out_path)
        outcomes.append(FileOutcome(source=path, result=result, out_path=out_path))
    return outcomes


# ── `convert` command ──────────────────────────────────────────────────────────

@app.command()
def convert(
    files: list[Path] = typer.Argument(..., help="One or more .vcf files"),
    mode: str | None = typer.Option(
        None, "--mode", "-m",
        help="fixed (name, 3 phones, 3 emails, addresses) or dynamic (one column per field). "
             "Falls back to local/vcard-csv.conf.",
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Explicit output .csv path"),
    out_dir: Path | None = typer.Option(
        None, "--out-dir", "-d", help="Folder for output files (default: next to each input)",
    ),
    stdout: bool = typer.Option(False, "--stdout", help="Print CSV instead of writing files"),
    no_escape_quotes: bool = typer.Option(
        False, "--no-escape-quotes", help="Fixed mode: leave embedded double quotes unescaped",
    ),
    config: Path = typer.Option(DEFAULT_CONF, "--config", help="Settings file (TOML)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Convert .vcf files to CSV (contacts.vcf → contacts_contacts.csv)."""
    _setup_logging(verbose)
    settings = load_settings(config)
    effective_mode, escape = _resolve(settings, mode, no_escape_quotes)

    outcomes = _run(files, effective_mode, escape, settings, output, out_dir, stdout)
    if not stdout:
        print_summary(outcomes, effective_mode.value)


# ── `batch` command ────────────────────────────────────────────────────────────

@app.command()
def batch(
    source_dir: Path | None = typer.Option(
        None, "--dir", "-i", help="Folder containing .vcf files (default: cards-in/)",
    ),
    out_dir: Path | None = typer.Option(
        None, "--out-dir", "-d", help="Folder for .csv files (default: csv-out/)",
    ),
    mode: str | None = typer.Option(None, "--mode", "-m", help="fixed or dynamic"),
    no_escape_quotes: bool = typer.Option(False, "--no-escape-quotes"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Convert every .vcf file in a folder.

    \b
    Workflow:
      1. Export contacts from your phone or mail client as .vcf
      2. Drop them into  cards-in/
      3. Run:  vcard-csv batch
    """
    _setup_logging(verbose)
    paths, settings = ensure_workspace()
    effective_mode, escape = _resolve(settings, mode, no_escape_quotes)
    source_dir = source_dir or paths.input_dir

    files = collect_sources(source_dir)
    if not files:
        console.print(Panel(
            f"[bold red]No .vcf files found in [white]{source_dir}/[/white][/bold red]\n\n"
            "Drop your exported contact files here and re-run.",
            title="Nothing to convert",
            border_style="red",
        ))
        raise typer.Exit(code=2)

    outcomes = _run(files, effective_mode, escape, settings, None, out_dir or paths.output_dir, False)
    print_summary(outcomes, effective_mode.value)


# ── `preview` command ──────────────────────────────────────────────────────────

@app.command()
def preview(
    file: Path = typer.Argument(..., help="A .vcf file"),
    mode: str | None = typer.Option(None, "--mode", "-m", help="fixed or dynamic"),
    rows: int | None = typer.Option(None, "--rows", "-n", help="How many contacts to show"),
    config: Path = typer.Option(DEFAULT_CONF, "--config", help="Settings file (TOML)"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Show the converted contacts as a table without writing anything."""
    _setup_logging(verbose)
    settings = load_settings(config)
    effective_mode, escape = _resolve(settings, mode, False)
    result = _convert_one(file, effective_mode, escape)
    print_preview(result, rows=rows or settings.preview_rows, title=file.name)


if __name__ == "__main__":
    app()
