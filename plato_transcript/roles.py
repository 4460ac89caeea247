"""
Speaker label -> conversational role.

Two policies exist because the two CMJ-producing conversions disagree on who the
assistant is:

- html -> CMJ asks the configured machine name (ConfiguredIdentityPolicy)
- text -> CMJ compares against a fixed label (FixedIdentityPolicy)

They agree as long as settings.machine.name keeps its default.
"""

from __future__ import annotations

from typing import Protocol

from plato_transcript.defaults import ROLE_ASSISTANT, ROLE_SYSTEM, ROLE_USER, ROLES
from plato_transcript.records import Role
from plato_transcript.settings import MachineSettings, get_settings


def classify(
    speaker_label: str,
    *,
    assistant_identity: str,
    system_label: str = ROLES.system_label,
) -> Role:
    """
    Map a speaker label to a role.

    The label is upper-cased; `assistant_identity` and `system_label` are
    compared as given, so they must already be upper case to ever match.
    """
    label = speaker_label.upper()
    if label == assistant_identity:
        return ROLE_ASSISTANT
    if label == system_label:
        return ROLE_SYSTEM
    return ROLE_USER


class IdentityPolicy(Protocol):
    @property
    def assistant_identity(self) -> str: ...

    def classify(self, speaker_label: str) -> Role: ...


class ConfiguredIdentityPolicy:
    """Assistant identity read from machine settings (process-wide unless injected)."""

    def __init__(self, machine: MachineSettings | None = None):
        self._machine = machine

    @property
    def assistant_identity(self) -> str:
        machine = self._machine if self._machine is not None else get_settings().machine
        return machine.name

    def classify(self, speaker_label: str) -> Role:
        return classify(speaker_label, assistant_identity=self.assistant_identity)

    def __repr__(self) -> str:
        return f"ConfiguredIdentityPolicy(assistant_identity={self.assistant_identity!r})"


class FixedIdentityPolicy:
    """Assistant identity pinned to the literal machine label."""

    assistant_identity: str = ROLES.fixed_assistant_label

    def classify(self, speaker_label: str) -> Role:
        return classify(speaker_label, assistant_identity=self.assistant_identity)

    def __repr__(self) -> str:
        return "FixedIdentityPolicy()"
