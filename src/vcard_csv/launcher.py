from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

from .config import Settings, ensure_workspace, parse_mode
from .convert import convert
from .io import collect_sources, default_output_path, is_vcf, read_vcf_file, write_csv_file
from .model import Mode
from .report import FileOutcome, print_preview, print_summary

console = Console()


def _banner() -> None:
    console.print()
    console.print(
        Panel.fit(
            " vCard → CSV Converter  •  v0.2.0  •  Python ",
            style="magenta",
            border_style="bright_black",
            padding=(0, 2),
        )
    )
    console.print()


def _pick_files(prompt: str) -> list[Path]:
    pat = Prompt.ask(prompt + "\nEnter one or more globs (comma separated)", default="*.vcf")
    globs = [g.strip() for g in pat.split(",") if g.strip()]
    files: list[Path] = []
    for g in globs:
        files.extend(Path().glob(g))
    files = [f for f in files if f.is_file() and is_vcf(f)]
    if not files:
        console.print("[red]No .vcf files matched[/red]")
    else:
        console.print(f"[green]Matched {len(files)} file(s)[/green]")
    return files


def _pick_mode(default: Mode) -> Mode:
    choice = Prompt.ask("Schema", choices=["fixed", "dynamic"], default=default.value)
    return parse_mode(choice)


def _read(path: Path) -> str | None:
    try:
        return read_vcf_file(path)
    except (OSError, ValueError) as e:
        console.print(f"[bold red]Cannot read {path}:[/bold red] {e}")
        return None


def _convert_files(files: list[Path], mode: Mode, settings: Settings, out_dir: Path | None) -> list[FileOutcome]:
    outcomes: list[FileOutcome] = []
    for f in files:
        text = _read(f)
        if text is None:
            continue
        result = convert(text, mode=mode, escape_quotes=settings.escape_quotes)
        try:
            out = write_csv_file(result.csv, default_output_path(f, out_dir, settings.output_suffix))
        except OSError as e:
            console.print(f"[bold red]Cannot write CSV for {f}:[/bold red] {e}")
            continue
        outcomes.append(FileOutcome(source=f, result=result, out_path=out))
    return outcomes


def _preview(files: list[Path], mode: Mode, rows: int) -> None:
    for f in files:
        text = _read(f)
        if text is not None:
            print_preview(convert(text, mode=mode), rows=rows, title=f.name)


def _deps_check() -> None:
    from importlib.metadata import PackageNotFoundError, version

    rows: list[tuple[str, str]] = []
    for pkg in ("typer", "rich"):
        try:
            rows.append((pkg, version(pkg)))
        except PackageNotFoundError:
            rows.append((pkg, "NOT INSTALLED"))
    t = Table(title="Dependency Checker")
    t.add_column("Package", style="cyan")
    t.add_column("Version", style="bold")
    for r in rows:
        t.add_row(*r)
    console.print(t)


def main() -> None:
    paths, settings = ensure_workspace()
    while True:
        console.clear()
        _banner()
        console.print(Text("Choose an option:", style="bold"))
        console.print("  1) Convert vCard file(s) to CSV")
        console.print("  2) Preview vCard file(s) as a table")
        console.print(f"  3) Convert everything in {paths.input_dir.name}/")
        console.print("  4) Dependency checker")
        console.print("\n  q) Quit\n")

        choice = Prompt.ask("Option", default="q").strip().lower()
        if choice in {"q", "quit"}:
            break

        if choice == "1":
            files = _pick_files("Convert which vCard file(s)?")
            if files:
                mode = _pick_mode(settings.mode)
                print_summary(_convert_files(files, mode, settings, None), mode.value)

        elif choice == "2":
            files = _pick_files("Preview which vCard file(s)?")
            if files:
                _preview(files, _pick_mode(settings.mode), settings.preview_rows)

        elif choice == "3":
            files = collect_sources(paths.input_dir)
            if files:
                mode = _pick_mode(settings.mode)
                outcomes = _convert_files(files, mode, settings, paths.output_dir)
                print_summary(outcomes, mode.value)
            else:
                console.print(f"[red]No .vcf files in {paths.input_dir}[/red]")

        elif choice == "4":
            _deps_check()

        else:
            console.print("[red]Unknown option[/red]")

        if not Confirm.ask("\nReturn to menu?", default=True):
            break


if __name__ == "__main__":
    main()
