"""Text-in, CSV-out entry points over the splitter, extractor and serializer.

Nothing here touches the filesystem; callers hand in decoded ``.vcf`` text
and get records or a CSV string back.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .extract import extract_record
from .model import DynamicRecord, FixedRecord, Mode
from .serialize import serialize
from .splitter import split_cards

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    records: list[FixedRecord | DynamicRecord]
    csv: str
    columns: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)


def parse_vcf(text: str, mode: Mode | str = Mode.DYNAMIC) -> list[FixedRecord | DynamicRecord]:
    """One record per BEGIN:VCARD marker in ``text``."""
    mode = Mode(mode)
    return [extract_record(block, mode) for block in split_cards(text)]


def convert(text: str, mode: Mode | str = Mode.DYNAMIC, escape_quotes: bool = True) -> ConversionResult:
    records = parse_vcf(text, mode)
    table, csv_text = serialize(records, mode, escape_quotes)
    logger.debug("Converted %d contact(s) into %d column(s)", len(records), len(table.columns))
    return ConversionResult(records=records, csv=csv_text, columns=table.columns)
