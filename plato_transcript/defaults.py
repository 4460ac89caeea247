"""
Centralized format constants for plato-transcript.

This is the SINGLE SOURCE OF TRUTH for the markup names, separators and role
sentinels shared by the extractors and serializers. Stored transcripts depend on
these exact values, so changing any of them breaks round-tripping.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


# ----------------------------- Roles ----------------------------- #

ROLE_USER: Literal["user"] = "user"
ROLE_ASSISTANT: Literal["assistant"] = "assistant"
ROLE_SYSTEM: Literal["system"] = "system"


@dataclass(frozen=True)
class RoleDefaults:
    """Speaker labels with a fixed conversational role."""

    system_label: str = "INSTRUCTIONS"
    # text -> CMJ compares against this literal instead of the configured machine name
    fixed_assistant_label: str = "MACHINA RATIOCINATRIX"
    machine_name: str = "MACHINA RATIOCINATRIX"  # default for settings.machine.name


# ----------------------------- platoHtml ----------------------------- #


@dataclass(frozen=True)
class MarkupDefaults:
    """Tag and class names of the platoHtml form."""

    paragraph_tag: str = "p"
    paragraph_class: str = "dialogue"
    speaker_tag: str = "span"
    speaker_class: str = "speaker"


# ----------------------------- platoText ----------------------------- #


@dataclass(frozen=True)
class TextDefaults:
    """Label alphabet and block separator of the platoText form."""

    label_chars: str = "A-Za-z0-9_ -"  # regex character-class body
    block_terminator: str = "\n\n"


# ----------------------------- Profile Constants ----------------------------- #

ROLES = RoleDefaults()
MARKUP = MarkupDefaults()
TEXT = TextDefaults()

FORMATS: tuple[str, ...] = ("html", "text", "cmj")
