"""
Shared data models for the MyndSelf API.

This module defines the core domain records used across multiple layers
of the application (store, handlers, CLI).
"""

from pydantic import BaseModel, Field


class SignupRecord(BaseModel):
    """An early-access email signup."""

    email: str = Field(..., description="Email address as submitted")
    at: str = Field(..., description="ISO-8601 timestamp when the signup was stored")


class MoodRecord(BaseModel):
    """A single mood check-in from the journal."""

    id: int = Field(..., gt=0, description="Sequential id, starting at 1")
    mood: str = Field(..., description="Mood label, e.g. calm or stressed")
    note: str = Field("", description="Free-text reflection")
    at: str = Field(..., description="ISO-8601 timestamp when the entry was stored")


class EmotionProfile(BaseModel):
    """Summary of recent emotional tags across the journal."""

    dominant_tags: list[str] = Field(
        default_factory=list, description="Up to three most frequent emotion tags"
    )
    last_mood: str | None = Field(None, description="Mood label of the newest entry")
    sample_size: int = Field(0, description="Number of entries the profile covers")


class TagCount(BaseModel):
    """How often an emotion tag occurs across the journal."""

    tag: str
    count: int


class DailyCount(BaseModel):
    """Number of journal entries recorded on one UTC day."""

    day: str = Field(..., description="Date in YYYY-MM-DD form")
    count: int
