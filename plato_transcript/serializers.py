"""
Renderers for platoHtml and platoText.

These are the compatibility contracts for stored transcripts: tag names, class
names, separators and escaping must stay byte-for-byte as they are.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from plato_transcript.defaults import MARKUP, TEXT
from plato_transcript.records import Message, UtteranceRecord

logger = logging.getLogger(__name__)


def escape_angle_brackets(text: str) -> str:
    """Escape only < and >; everything else (including &) is written as is."""
    return text.replace("<", "&lt;").replace(">", "&gt;")


def records_to_plato_html(records: Iterable[UtteranceRecord]) -> str:
    """One dialogue paragraph per record, newline separated, trailing whitespace trimmed."""
    open_p = f'<{MARKUP.paragraph_tag} class="{MARKUP.paragraph_class}">'
    open_span = f'<{MARKUP.speaker_tag} class="{MARKUP.speaker_class}">'
    close_span = f"</{MARKUP.speaker_tag}>"
    close_p = f"</{MARKUP.paragraph_tag}>"

    lines = [
        f"{open_p}{open_span}{rec.speaker}{close_span} "
        f"{escape_angle_brackets(rec.utterance)}{close_p}\n"
        for rec in records
    ]
    return "".join(lines).rstrip()


def records_to_plato_text(records: Iterable[UtteranceRecord]) -> str:
    return "".join(
        f"{rec.speaker}: {rec.utterance}{TEXT.block_terminator}" for rec in records
    )


def messages_to_plato_text(messages: Iterable[Any]) -> str:
    """
    Render CMJ messages as platoText.

    Accepts Message instances or mappings. Entries without string `name` and
    `content` are skipped with a warning; they never abort the batch.
    """
    blocks: list[str] = []
    for index, entry in enumerate(messages):
        message = Message.from_dict(entry)
        if message is None:
            logger.warning("skipping malformed CMJ message %d: %r", index, entry)
            continue
        blocks.append(
            f"{message.name.strip()}: {message.content.strip()}{TEXT.block_terminator}"
        )
    return "".join(blocks)
