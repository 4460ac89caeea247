"""
Record types shared by the extractors, the role classifier and the serializers.

- UtteranceRecord: transient (speaker, utterance) pair produced by an extractor
- Message: one role-tagged chat message, the unit of the CMJ form

A conversation is a plain ordered list of Message; turn order is never changed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

from plato_transcript.defaults import ROLE_ASSISTANT, ROLE_SYSTEM, ROLE_USER

Role = Literal["user", "assistant", "system"]

VALID_ROLES: frozenset[str] = frozenset({ROLE_USER, ROLE_ASSISTANT, ROLE_SYSTEM})


@dataclass(frozen=True)
class UtteranceRecord:
    """
    One dialogue turn as pulled out of platoHtml or platoText.

    - speaker: trimmed speaker label
    - utterance: trimmed spoken content, without the "speaker:" prefix
    """

    speaker: str
    utterance: str


@dataclass(frozen=True)
class Message:
    """
    A single CMJ message.

    - role: "user", "assistant" or "system", derived from name by a role policy
    - name: trimmed speaker label
    - content: trimmed utterance
    """

    role: Role
    name: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "name": self.name, "content": self.content}

    @classmethod
    def from_dict(cls, obj: Any) -> Message | None:
        """
        Build a Message from a CMJ mapping.

        Returns None when `obj` is not a mapping or lacks string `name` and
        `content`. A missing or unknown role falls back to "user"; the only
        consumer of CMJ input renders name/content and ignores the role.
        """
        if isinstance(obj, Message):
            return obj
        if not isinstance(obj, Mapping):
            return None
        name = obj.get("name")
        content = obj.get("content")
        if not isinstance(name, str) or not isinstance(content, str):
            return None
        role = obj.get("role")
        if not isinstance(role, str) or role not in VALID_ROLES:
            role = ROLE_USER
        return cls(role=role, name=name, content=content)
