"""
Record storage implementation for the MyndSelf API.

This module provides an in-memory store for email signups and mood journal
entries. Both collections are append-only and live for as long as the
serving process does; nothing is persisted.
"""

import asyncio
from datetime import datetime, timezone

from .models import MoodRecord, SignupRecord

SEED_MOOD = "calm"
SEED_NOTE = "demo"


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RecordStore:
    """
    In-memory signup and mood storage.

    The store exclusively owns both collections. Callers only see copies
    through ``list_signups`` and ``list_moods``. There is deliberately no
    update or delete operation: mood ids are derived from the collection
    size, so removing an entry would cause id collisions.

    All operations go through a single asyncio lock so the size-based id
    assignment stays atomic even if handlers are awaited concurrently.
    """

    def __init__(self) -> None:
        self._signups: list[SignupRecord] = []
        self._moods: list[MoodRecord] = [
            MoodRecord(id=1, mood=SEED_MOOD, note=SEED_NOTE, at=utc_timestamp())
        ]
        self._lock = asyncio.Lock()

    async def append_signup(self, record: SignupRecord) -> None:
        """
        Store a signup. The caller is responsible for validating it first.

        Args:
            record: The signup to append
        """
        async with self._lock:
            self._signups.append(record)

    async def append_mood(self, mood: str, note: str) -> MoodRecord:
        """
        Append a mood entry with the next sequential id.

        Args:
            mood: Mood label, already defaulted by the caller
            note: Free-text note, already defaulted by the caller

        Returns:
            The stored MoodRecord
        """
        async with self._lock:
            record = MoodRecord(
                id=len(self._moods) + 1, mood=mood, note=note, at=utc_timestamp()
            )
            self._moods.append(record)
            return record

    async def list_moods(self) -> tuple[MoodRecord, ...]:
        """All mood entries, oldest first."""
        async with self._lock:
            return tuple(self._moods)

    async def list_signups(self) -> tuple[SignupRecord, ...]:
        """All signups, in the order they were received."""
        async with self._lock:
            return tuple(self._signups)
