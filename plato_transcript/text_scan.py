"""platoText extraction: a lazy scanner over "Label: content" blocks."""

from __future__ import annotations

import re
from typing import Iterator

from plato_transcript.defaults import TEXT
from plato_transcript.records import UtteranceRecord

# Regex to parse one block: label, colon, content up to the next blank line.
# Content is lazy and spans lines; text that does not fit is skipped over.
BLOCK_PATTERN = re.compile(
    rf"([{TEXT.label_chars}]+):\s*(.*?){re.escape(TEXT.block_terminator)}",
    re.DOTALL,
)


def iter_text_records(text: str) -> Iterator[UtteranceRecord]:
    """
    Yield one UtteranceRecord per block, in document order.

    Each search starts where the previous match ended, so a call always scans
    the whole input from the start and holds no state beyond its own position.
    Label and content are trimmed.
    """
    pos = 0
    while True:
        match = BLOCK_PATTERN.search(text, pos)
        if match is None:
            return
        pos = match.end()
        yield UtteranceRecord(
            speaker=match.group(1).strip(),
            utterance=match.group(2).strip(),
        )
