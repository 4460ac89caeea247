"""
plato-transcript: convert dialogue transcripts between platoHtml, platoText and CMJ.

Public API:
- html_to_cmj, html_to_text, text_to_html, text_to_cmj, cmj_to_text
- cmj_to_html, convert, messages_to_json, messages_from_json
- Message, UtteranceRecord, InvalidInput
- ConfiguredIdentityPolicy, FixedIdentityPolicy
"""

from .convert import (
    cmj_to_html,
    cmj_to_text,
    convert,
    html_to_cmj,
    html_to_text,
    messages_from_json,
    messages_to_json,
    text_to_cmj,
    text_to_html,
)
from .errors import InvalidInput, TranscriptError
from .records import Message, UtteranceRecord
from .roles import ConfiguredIdentityPolicy, FixedIdentityPolicy, classify

__all__ = [
    "ConfiguredIdentityPolicy",
    "FixedIdentityPolicy",
    "InvalidInput",
    "Message",
    "TranscriptError",
    "UtteranceRecord",
    "classify",
    "cmj_to_html",
    "cmj_to_text",
    "convert",
    "html_to_cmj",
    "html_to_text",
    "messages_from_json",
    "messages_to_json",
    "text_to_cmj",
    "text_to_html",
]
