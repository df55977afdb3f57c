from __future__ import annotations

import re
from typing import Iterator

BEGIN_MARKER = "BEGIN:VCARD"
END_MARKER = "END:VCARD"

_BEGIN_RE = re.compile(re.escape(BEGIN_MARKER), re.IGNORECASE)


class CardBlocks:
    """Card blocks of a vCard document, in document order.

    Iterating again starts over from the first block. Each block starts with
    the ``BEGIN:VCARD`` marker and runs up to the next marker (any casing) or
    the end of the text. Anything before the first marker is ignored.
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[str]:
        start: int | None = None
        for m in _BEGIN_RE.finditer(self.text):
            if start is not None:
                yield BEGIN_MARKER + self.text[start:m.start()]
            start = m.end()
        if start is not None:
            yield BEGIN_MARKER + self.text[start:]


def split_cards(text: str) -> CardBlocks:
    return CardBlocks(text)
