from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .convert import ConversionResult
from .model import FixedRecord

console = Console()

# ── Palette ────────────────────────────────────────────────────────────────────
_ACCENT  = "#4d9fff"
_GREEN   = "#3ecf8e"
_AMBER   = "#f0a500"
_TEXT    = "#c9d1e0"
_MID     = "#8896af"
_DIM     = "#546075"
_BORDER  = "#2a3347"


@dataclass
class FileOutcome:
    source: Path
    result: ConversionResult
    out_path: Path | None = None    # None when written to stdout


def _stat_panel(value: str, label: str, colour: str) -> Panel:
    body = Text()
    body.append(f"{value}\n", style=f"bold {colour}")
    body.append(label, style=f"dim {_DIM}")
    return Panel(body, border_style=_BORDER, padding=(0, 2), expand=True)


def summary_line(outcome: FileOutcome) -> str:
    return f"Converted {outcome.result.count} contacts to CSV format"


def print_summary(outcomes: list[FileOutcome], mode: str) -> None:
    total = sum(o.result.count for o in outcomes)
    widest = max((len(o.result.columns) for o in outcomes), default=0)

    console.print()
    console.print(Text("  CONVERSION SUMMARY", style=f"dim {_DIM}"))
    console.print()
    console.print(Columns([
        _stat_panel(str(total), "contacts converted", _ACCENT),
        _stat_panel(str(widest), "columns", _GREEN),
        _stat_panel(mode, "schema", _TEXT),
    ], equal=True, expand=True))
    console.print()

    for o in outcomes:
        row = Text()
        if o.result.count:
            row.append("  ✓ ", style=f"bold {_GREEN}")
        else:
            row.append("  · ", style=f"bold {_AMBER}")
        row.append(f"{o.source.name:<30}", style=_TEXT)
        row.append(f"  {summary_line(o)}", style=f"dim {_MID}")
        if o.out_path is not None:
            row.append(f"  → {o.out_path}", style=f"dim {_DIM}")
        console.print(row)
    console.print()


def print_preview(result: ConversionResult, rows: int = 10, title: str | None = None) -> None:
    """Show the first ``rows`` converted contacts as a table."""
    if not result.records:
        console.print(Text("  No contacts found.", style=f"dim {_DIM}"))
        return

    t = Table(title=title, show_lines=True, header_style="bold")
    for col in result.columns:
        t.add_column(col, style=_TEXT, overflow="fold")
    for record in result.records[:rows]:
        if isinstance(record, FixedRecord):
            t.add_row(*record.values())
        else:
            t.add_row(*(record.get(col, "") for col in result.columns))
    console.print(t)
    if result.count > rows:
        console.print(Text(f"  … {result.count - rows} more", style=f"dim {_DIM}"))
