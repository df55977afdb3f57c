#!/usr/bin/env python3
"""vcard-csv — vCard to CSV converter.  Run with:  python3 start.py"""
import sys
import os
from pathlib import Path

script_dir = os.path.dirname(os.path.abspath(__file__))
src_dir    = os.path.join(script_dir, "src")

sys.path.insert(0, src_dir)
os.environ["PYTHONPATH"] = src_dir + os.pathsep + os.environ.get("PYTHONPATH", "")
os.chdir(script_dir)

# ── First-run detection ───────────────────────────────────────────────────────
# Show a welcome message until something has been dropped into cards-in/
def _first_run() -> bool:
    in_dir = Path(script_dir) / "cards-in"
    return not in_dir.is_dir() or not any(in_dir.glob("*.vcf"))

def _welcome() -> None:
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console()
    console.print()
    console.print(Panel(
        Text.from_markup(
            "[bold #4d9fff]Welcome to vcard-csv[/] — vCard to CSV Converter\n\n"
            "There are just [bold]two folders[/] you need to know about:\n\n"
            "  [bold #4d9fff]cards-in/[/]   Drop your exported .vcf contact files here\n"
            "  [dim]           Export from your phone or mail client as vCard[/]\n\n"
            "  [bold #3ecf8e]csv-out/[/]    Your spreadsheet-ready .csv files appear here\n\n"
            "Settings (fixed or dynamic columns) live in [bold]local/vcard-csv.conf[/].\n\n"
            "[dim]When you're ready, choose option [bold]3[/] from the menu.[/]"
        ),
        title=Text("  Getting Started  ", style="dim #546075"),
        title_align="left",
        border_style="#2a3347",
        padding=(1, 2),
    ))
    console.print()
    console.input("[dim #546075]  Press Enter to continue…[/dim #546075]")

if _first_run():
    _welcome()

from vcard_csv.launcher import main
main()
