"""
Request handlers for the MyndSelf API.

Handlers orchestrate validation and store access and return response
envelopes. They know nothing about HTTP routing; ``server.create_app`` wires
them to paths. Each call is independent of every other call.
"""

import logging

from pydantic import BaseModel, Field

from .errors import InvalidEmailError
from .models import DailyCount, EmotionProfile, MoodRecord, SignupRecord, TagCount
from .profile import build_profile, daily_counts, tag_counts
from .store import RecordStore, utc_timestamp
from .validation import (
    EmailRejected,
    MoodEntryRequest,
    SubscribeRequest,
    resolve_mood_entry,
    validate_email,
)

logger = logging.getLogger(__name__)


# MARK: - Response Envelopes


class OkResponse(BaseModel):
    """Plain success envelope."""

    ok: bool = True


class MoodListResponse(OkResponse):
    items: list[MoodRecord] = Field(..., description="Mood entries, oldest first")


class MoodItemResponse(OkResponse):
    item: MoodRecord = Field(..., description="The stored mood entry")


class ProfileResponse(OkResponse):
    profile: EmotionProfile


class TagCountsResponse(OkResponse):
    items: list[TagCount] = Field(..., description="Tag counts, most frequent first")


class DailyCountsResponse(OkResponse):
    items: list[DailyCount] = Field(..., description="Entry counts, oldest day first")


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str = Field(..., description="Machine-readable error code")


# MARK: - Handlers


def health() -> OkResponse:
    """Liveness signal. Touches nothing."""
    return OkResponse()


async def create_signup(
    store: RecordStore, payload: SubscribeRequest | None
) -> OkResponse:
    """
    Register an early-access signup.

    A missing body counts as an empty one. Duplicate addresses are stored
    again rather than rejected.

    Args:
        store: The record store to append to
        payload: The parsed request body, if any

    Returns:
        A success envelope

    Raises:
        InvalidEmailError: The email is missing or malformed. The store is
            left untouched.
    """
    payload = payload or SubscribeRequest()
    result = validate_email(payload.email)
    if isinstance(result, EmailRejected):
        raise InvalidEmailError("email failed address-shape check")

    await store.append_signup(SignupRecord(email=result.email, at=utc_timestamp()))
    logger.info("Signup recorded")
    return OkResponse()


async def list_mood_entries(store: RecordStore) -> MoodListResponse:
    """Return every mood entry, oldest first."""
    items = await store.list_moods()
    return MoodListResponse(items=list(items))


async def create_mood_entry(
    store: RecordStore, payload: MoodEntryRequest | None
) -> MoodItemResponse:
    """
    Record a mood entry. Never rejects input; missing fields get defaults.

    Args:
        store: The record store to append to
        payload: The parsed request body, if any

    Returns:
        An envelope carrying the stored entry
    """
    entry = resolve_mood_entry(payload)
    record = await store.append_mood(entry.mood, entry.note)
    logger.info("Mood entry recorded", extra={"mood_id": record.id})
    return MoodItemResponse(item=record)


async def get_mood_profile(store: RecordStore) -> ProfileResponse:
    records = await store.list_moods()
    return ProfileResponse(profile=build_profile(records))


async def get_tag_analytics(store: RecordStore) -> TagCountsResponse:
    """Emotion tag frequencies over the whole journal."""
    records = await store.list_moods()
    return TagCountsResponse(items=tag_counts(records))


async def get_daily_analytics(store: RecordStore) -> DailyCountsResponse:
    records = await store.list_moods()
    return DailyCountsResponse(items=daily_counts(records))
