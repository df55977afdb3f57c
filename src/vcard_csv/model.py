from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Mode(str, Enum):
    FIXED = "fixed"        # bounded columns: name, 3 phones, 3 emails, addresses
    DYNAMIC = "dynamic"    # one column per distinct field label


FIXED_COLUMNS: tuple[str, ...] = (
    "First Name",
    "Last Name",
    "Phone 1",
    "Phone 2",
    "Phone 3",
    "Email 1",
    "Email 2",
    "Email 3",
    "Addresses",
)

MAX_PHONES = 3
MAX_EMAILS = 3

# A dynamic-schema record: label -> value, insertion order = encounter order
DynamicRecord = dict[str, str]


@dataclass
class FixedRecord:
    first_name: str = ""
    last_name: str = ""
    phone_1: str = ""
    phone_2: str = ""
    phone_3: str = ""
    email_1: str = ""
    email_2: str = ""
    email_3: str = ""
    addresses: str = ""

    def values(self) -> list[str]:
        """Cell values in FIXED_COLUMNS order."""
        return [
            self.first_name, self.last_name,
            self.phone_1, self.phone_2, self.phone_3,
            self.email_1, self.email_2, self.email_3,
            self.addresses,
        ]


@dataclass
class FieldLine:
    spec: str                       # everything before the first colon
    type: str                       # spec up to the first ';'
    params: list[str] = field(default_factory=list)
    value: str = ""

    def type_param(self) -> str | None:
        """Value of the first TYPE= parameter, if any."""
        for p in self.params:
            if p.startswith("TYPE="):
                return p.split("=")[1] or None
        return None


@dataclass
class Table:
    columns: list[str]
    rows: list[list[str]] = field(default_factory=list)
