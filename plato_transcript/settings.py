from __future__ import annotations

import copy
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from plato_transcript.defaults import ROLES


# ----------------------------- helper utilities ----------------------------- #


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge two dicts without mutating inputs."""
    merged = copy.deepcopy(base)
    for key, val in overrides.items():
        if isinstance(val, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], val)
        else:
            merged[key] = val
    return merged


def _load_json(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


# ----------------------------- machine settings ----------------------------- #


class MachineSettings(BaseModel):
    """Identity of the assistant speaker in platoHtml transcripts."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = ROLES.machine_name

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        # labels are upper-cased before comparison, so the identity must be too
        value = value.strip().upper()
        if not value:
            raise ValueError("machine.name must be a non-empty string")
        return value


# ----------------------------- root settings -------------------------------- #


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    machine: MachineSettings = MachineSettings()


# ----------------------------- API functions -------------------------------- #


def default_settings() -> Settings:
    """Return a fresh Settings instance with defaults."""
    return Settings()


def load_overrides(path_or_dict: str | dict | None) -> dict:
    """Load overrides from a path or dict; None -> empty dict."""
    if path_or_dict is None:
        return {}
    if isinstance(path_or_dict, dict):
        return path_or_dict
    return _load_json(path_or_dict)


def resolve_settings(overrides_path: str | dict | None = None) -> Settings:
    """
    Resolve settings by deep-merging overrides (JSON file or dict) over defaults.

    Unknown keys are rejected by pydantic validation.
    """
    overrides = load_overrides(overrides_path)
    merged_dict = _deep_merge(default_settings().model_dump(), overrides)
    return Settings.model_validate(merged_dict)


# ----------------------------- process-wide value --------------------------- #

_current: Settings = default_settings()


def get_settings() -> Settings:
    """Return the process-wide settings. Converters only ever read this."""
    return _current


def set_settings(settings: Settings) -> Settings:
    """Install `settings` as the process-wide value and return the previous one."""
    global _current
    previous = _current
    _current = settings
    return previous
