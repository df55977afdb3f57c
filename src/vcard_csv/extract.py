from __future__ import annotations

import logging
import re
from types import MappingProxyType

from .model import MAX_EMAILS, MAX_PHONES, DynamicRecord, FieldLine, FixedRecord, Mode
from .splitter import BEGIN_MARKER, END_MARKER

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_VERSION_PREFIX = "VERSION:"

FIRST_NAME = "First Name"
LAST_NAME = "Last Name"

# vCard property name -> column label used by the dynamic schema
FIELD_LABELS = MappingProxyType({
    "FN": "Full Name",
    "N": "Name",
    "ORG": "Organization",
    "TITLE": "Title",
    "ROLE": "Role",
    "BDAY": "Birthday",
    "URL": "Website",
    "NOTE": "Notes",
    "NICKNAME": "Nickname",
    "CATEGORIES": "Categories",
})

# Properties whose label takes a TYPE= suffix ("Phone Cell", "Email Work")
TYPED_LABELS = MappingProxyType({
    "TEL": "Phone",
    "EMAIL": "Email",
    "ADR": "Address",
})


# ── Line parsing ───────────────────────────────────────────────────────────────

def split_name(full_name: str) -> tuple[str, str]:
    """Split a display name into (first, last) on whitespace.

    The first token is the first name; everything after it, re-joined with
    single spaces, is the last name.
    """
    parts = full_name.split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def parse_line(line: str) -> FieldLine | None:
    """Parse one trimmed ``NAME[;PARAM=VALUE...]:VALUE`` line.

    Returns None for lines that carry no value: blanks, the card markers,
    VERSION, lines without a colon or property name, and lines whose value
    is empty.
    """
    upper = line.upper()
    if not line or upper in (BEGIN_MARKER, END_MARKER) or upper.startswith(_VERSION_PREFIX):
        return None
    spec, sep, value = line.partition(":")
    value = value.strip()
    if not sep or not spec or not value:
        logger.debug("Skipping malformed line: %r", line)
        return None
    field_type, *params = spec.split(";")
    return FieldLine(spec=spec, type=field_type, params=params, value=value)


def iter_field_lines(block: str):
    for raw in _LINE_BREAK.split(block):
        fl = parse_line(raw.strip())
        if fl is not None:
            yield fl


def join_address(value: str) -> str:
    """Join the non-blank ';' components of an ADR value with ', '."""
    return ", ".join(part for part in value.split(";") if part.strip())


def normalize_label(fl: FieldLine) -> str:
    base = TYPED_LABELS.get(fl.type)
    if base is None:
        return FIELD_LABELS.get(fl.type, fl.type)
    kind = fl.type_param()
    if kind:
        return f"{base} {kind[0].upper()}{kind[1:].lower()}"
    return base


# ── Fixed schema ───────────────────────────────────────────────────────────────

def _pad(values: list[str], size: int) -> list[str]:
    return (values + [""] * size)[:size]


def extract_fixed(block: str) -> FixedRecord:
    full_name = ""
    phones: list[str] = []
    emails: list[str] = []
    addresses: list[str] = []

    for fl in iter_field_lines(block):
        if fl.spec == "FN":
            full_name = fl.value
        elif fl.spec.startswith("TEL"):
            phones.append(fl.value)
        elif fl.spec.startswith("EMAIL"):
            emails.append(fl.value)
        elif fl.spec.startswith("ADR"):
            adr = join_address(fl.value)
            if adr:
                addresses.append(adr)

    if len(phones) > MAX_PHONES or len(emails) > MAX_EMAILS:
        logger.debug("Dropping extra phones/emails for %r", full_name)

    first, last = split_name(full_name)
    p1, p2, p3 = _pad(phones, MAX_PHONES)
    e1, e2, e3 = _pad(emails, MAX_EMAILS)
    return FixedRecord(
        first_name=first,
        last_name=last,
        phone_1=p1, phone_2=p2, phone_3=p3,
        email_1=e1, email_2=e2, email_3=e3,
        addresses=", ".join(addresses),
    )


# ── Dynamic schema ─────────────────────────────────────────────────────────────

def _set_name(record: DynamicRecord, key: str, value: str) -> None:
    # First non-empty writer wins, whether it came from FN or N.
    if value and not record.get(key):
        record[key] = value


def _store(record: DynamicRecord, counts: dict[str, int], label: str, value: str) -> None:
    counts[label] = counts.get(label, 0) + 1
    key = label if counts[label] == 1 else f"{label} {counts[label]}"
    record[key] = value


def extract_dynamic(block: str) -> DynamicRecord:
    record: DynamicRecord = {}
    counts: dict[str, int] = {}

    for fl in iter_field_lines(block):
        if fl.spec == "FN":
            first, last = split_name(fl.value)
            _set_name(record, FIRST_NAME, first)
            _set_name(record, LAST_NAME, last)
        elif fl.spec == "N":
            parts = fl.value.split(";")
            _set_name(record, FIRST_NAME, parts[1] if len(parts) > 1 else "")
            _set_name(record, LAST_NAME, parts[0])
        elif fl.spec.startswith("ADR"):
            adr = join_address(fl.value)
            if adr:
                _store(record, counts, normalize_label(fl), adr)
        else:
            _store(record, counts, normalize_label(fl), fl.value)

    record.setdefault(FIRST_NAME, "")
    record.setdefault(LAST_NAME, "")
    return record


def extract_record(block: str, mode: Mode | str) -> FixedRecord | DynamicRecord:
    if Mode(mode) is Mode.FIXED:
        return extract_fixed(block)
    return extract_dynamic(block)
