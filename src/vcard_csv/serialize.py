from __future__ import annotations

import re
from typing import Iterable, Sequence

from .extract import FIRST_NAME, LAST_NAME
from .model import FIXED_COLUMNS, DynamicRecord, FixedRecord, Mode, Table

_NEEDS_QUOTING = re.compile(r'[,"\r\n]')


def quote_cell(value: str, escape: bool = True) -> str:
    if escape:
        value = value.replace('"', '""')
    return f'"{value}"'


def header_cell(label: str) -> str:
    """Plain label, quoted only when it would otherwise split the header."""
    if _NEEDS_QUOTING.search(label):
        return quote_cell(label)
    return label


def _column_sort_key(label: str) -> tuple[int, str, str]:
    if label == FIRST_NAME:
        return (0, "", "")
    if label == LAST_NAME:
        return (1, "", "")
    # lowercase before uppercase on ties ("phone" < "Phone")
    return (2, label.casefold(), label.swapcase())


def dynamic_columns(records: Iterable[DynamicRecord]) -> list[str]:
    """Union of all record keys: First Name, Last Name, then alphabetical."""
    labels: set[str] = set()
    for record in records:
        labels.update(record)
    return sorted(labels, key=_column_sort_key)


def build_table(records: Sequence[FixedRecord | DynamicRecord], mode: Mode | str) -> Table:
    if Mode(mode) is Mode.FIXED:
        return Table(
            columns=list(FIXED_COLUMNS),
            rows=[record.values() for record in records],
        )
    columns = dynamic_columns(records)
    return Table(
        columns=columns,
        rows=[[record.get(col, "") for col in columns] for record in records],
    )


def render_table(table: Table, escape_quotes: bool = True) -> str:
    lines = [",".join(header_cell(col) for col in table.columns)]
    for row in table.rows:
        lines.append(",".join(quote_cell(v, escape_quotes) for v in row))
    return "\n".join(lines)


def serialize(
    records: Sequence[FixedRecord | DynamicRecord],
    mode: Mode | str,
    escape_quotes: bool = True,
) -> tuple[Table, str]:
    """Build the table for ``records`` and render it as a CSV document.

    Every data cell is wrapped in double quotes. Dynamic-mode cells always
    have embedded quotes doubled; fixed-mode cells only when ``escape_quotes``
    is set (turning it off reproduces the legacy unescaped output).
    Rows are joined with ``\\n`` and there is no trailing newline.
    """
    mode = Mode(mode)
    table = build_table(records, mode)
    return table, render_table(table, escape_quotes or mode is Mode.DYNAMIC)


def to_csv(
    records: Sequence[FixedRecord | DynamicRecord],
    mode: Mode | str,
    escape_quotes: bool = True,
) -> str:
    return serialize(records, mode, escape_quotes)[1]
