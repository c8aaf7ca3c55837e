"""
Request schemas and input validation for the MyndSelf API.

Every write goes through this module. Emails are checked syntactically and
may be rejected; mood entries are never rejected, only defaulted.
"""

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MOOD = "neutral"
DEFAULT_NOTE = ""

# local@domain.rest with no whitespace; "@" may reappear after the dot
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.\S+")


# MARK: - Request Schemas


class SubscribeRequest(BaseModel):
    """Payload for signup requests."""

    model_config = ConfigDict(extra="ignore")

    email: Any = Field(None, description="Email address to register")


class MoodEntryRequest(BaseModel):
    """Payload for new mood entries. Both fields are optional."""

    model_config = ConfigDict(extra="ignore")

    mood: Any = Field(None, description="Mood label; defaults to neutral")
    note: Any = Field(None, description="Free-text note; defaults to empty")


# MARK: - Results


class EmailAccepted(BaseModel):
    email: str


class EmailRejected(BaseModel):
    error: Literal["invalid_email"] = "invalid_email"


EmailValidation = EmailAccepted | EmailRejected


class MoodEntry(BaseModel):
    """A mood entry with defaults applied, ready to be stored."""

    mood: str
    note: str


# MARK: - Validators


def validate_email(value: Any) -> EmailValidation:
    """
    Check that a value looks like an email address.

    This is a shape check only. The value is neither trimmed nor lower-cased,
    and no DNS lookup is made.

    Args:
        value: The raw ``email`` field from the request body

    Returns:
        EmailAccepted with the untouched address, or EmailRejected
    """
    if not isinstance(value, str) or not EMAIL_PATTERN.fullmatch(value):
        return EmailRejected()
    return EmailAccepted(email=value)


def resolve_mood_entry(payload: MoodEntryRequest | None) -> MoodEntry:
    """Apply the mood and note defaults. Content is accepted as-is."""
    payload = payload or MoodEntryRequest()
    return MoodEntry(
        mood=_text_or_default(payload.mood, DEFAULT_MOOD),
        note=_text_or_default(payload.note, DEFAULT_NOTE),
    )


def _is_blank(value: Any) -> bool:
    """None, empty string, zero and False count as missing. Empty lists and
    objects do not."""
    if value is None or value == "":
        return True
    return isinstance(value, (int, float)) and not value


def _text_or_default(value: Any, default: str) -> str:
    if _is_blank(value):
        return default
    return value if isinstance(value, str) else str(value)
