"""
Conversion entry points between platoHtml, platoText and CMJ.

Each function composes one extractor with one serializer or role policy:

- html_to_cmj:  markup extractor + configured-identity roles
- html_to_text: markup extractor + platoText serializer
- text_to_html: text scanner + platoHtml serializer
- text_to_cmj:  text scanner + fixed-identity roles
- cmj_to_text:  CMJ -> platoText serializer

Input checks differ on purpose: the CMJ-producing functions reject an empty
string, while html_to_text and text_to_html treat empty or whitespace-only
input as an empty transcript.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from plato_transcript.defaults import FORMATS
from plato_transcript.errors import InvalidInput
from plato_transcript.markup import MarkupParser, iter_markup_records
from plato_transcript.records import Message
from plato_transcript.roles import ConfiguredIdentityPolicy, FixedIdentityPolicy, IdentityPolicy
from plato_transcript.serializers import (
    messages_to_plato_text,
    records_to_plato_html,
    records_to_plato_text,
)
from plato_transcript.text_scan import iter_text_records

logger = logging.getLogger(__name__)


def _require_str(value: Any, what: str, *, non_empty: bool) -> None:
    if not isinstance(value, str) or (non_empty and not value):
        kind = "a non-empty string" if non_empty else "a string"
        raise InvalidInput(f"Invalid input: {what} must be {kind}")


# ----------------------------- core conversions ----------------------------- #


def html_to_cmj(
    html: str,
    *,
    policy: IdentityPolicy | None = None,
    parser: MarkupParser | None = None,
) -> list[Message]:
    _require_str(html, "platoHtml", non_empty=True)
    policy = policy or ConfiguredIdentityPolicy()
    return [
        Message(role=policy.classify(rec.speaker), name=rec.speaker, content=rec.utterance)
        for rec in iter_markup_records(html, parser)
    ]


def html_to_text(html: str, *, parser: MarkupParser | None = None) -> str:
    _require_str(html, "platoHtml", non_empty=False)
    if not html.strip():
        return ""
    return records_to_plato_text(iter_markup_records(html, parser))


def text_to_html(text: str) -> str:
    _require_str(text, "platoText", non_empty=False)
    if not text.strip():
        return ""
    return records_to_plato_html(iter_text_records(text))


def text_to_cmj(text: str, *, policy: IdentityPolicy | None = None) -> list[Message]:
    _require_str(text, "platoText", non_empty=True)
    policy = policy or FixedIdentityPolicy()
    return [
        Message(role=policy.classify(rec.speaker), name=rec.speaker, content=rec.utterance)
        for rec in iter_text_records(text)
    ]


def cmj_to_text(messages: Any) -> str:
    """Render CMJ as platoText. Never raises; a non-sequence yields ""."""
    if not isinstance(messages, (list, tuple)):
        logger.error("Invalid input: cmjMessages must be a list, got %s", type(messages).__name__)
        return ""
    return messages_to_plato_text(messages)


def cmj_to_html(messages: Any) -> str:
    return text_to_html(cmj_to_text(messages))


# ----------------------------- CMJ wire form -------------------------------- #


def messages_to_json(messages: list[Message], *, indent: int | None = 2) -> str:
    return json.dumps([m.to_dict() for m in messages], indent=indent, ensure_ascii=False)


def messages_from_json(payload: str) -> list[Message]:
    """
    Parse a JSON array of CMJ objects.

    Raises InvalidInput for invalid JSON or a non-array top level. Malformed
    entries are skipped with a warning.
    """
    _require_str(payload, "CMJ payload", non_empty=True)
    try:
        raw = json.loads(payload)
    except json.JSONDecodeError as e:
        raise InvalidInput(f"Invalid input: CMJ payload is not valid JSON ({e})") from e
    if not isinstance(raw, list):
        raise InvalidInput("Invalid input: CMJ payload must be a JSON array")

    messages: list[Message] = []
    for index, entry in enumerate(raw):
        message = Message.from_dict(entry)
        if message is None:
            logger.warning("skipping malformed CMJ message %d: %r", index, entry)
            continue
        messages.append(message)
    return messages


# ----------------------------- dispatch ------------------------------------- #


def convert(
    payload: Any,
    *,
    source: str,
    target: str,
    policy: IdentityPolicy | None = None,
) -> Any:
    """
    Convert `payload` from `source` to `target` format ("html", "text" or "cmj").

    CMJ is a list of Message (or mappings) on input and a list of Message on
    output. `policy` overrides the role policy of the CMJ-producing paths.
    """
    for name, fmt in (("source", source), ("target", target)):
        if fmt not in FORMATS:
            raise InvalidInput(f"Invalid input: unknown {name} format {fmt!r}")
    if source == target:
        raise InvalidInput(f"Invalid input: source and target are both {source!r}")

    if source == "html":
        if target == "cmj":
            return html_to_cmj(payload, policy=policy)
        return html_to_text(payload)
    if source == "text":
        if target == "cmj":
            return text_to_cmj(payload, policy=policy)
        return text_to_html(payload)
    if target == "text":
        return cmj_to_text(payload)
    return cmj_to_html(payload)
