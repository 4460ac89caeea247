"""Exceptions raised by the transcript converters."""

from __future__ import annotations


class TranscriptError(Exception):
    """Base class for plato-transcript errors."""


class InvalidInput(TranscriptError, ValueError):
    """
    Argument has the wrong type, or is empty where a transcript is required.

    Raised before any output is produced. Treat it as a caller bug, not a
    transient condition: every conversion is pure, so retrying cannot help.
    """
