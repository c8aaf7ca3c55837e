"""
Emotion tagging for mood journal entries.

Tags are plain keyword matches against the mood label and note. The profile
summarises the most frequent tags across the newest entries; the analytics
helpers aggregate tags and entry counts over the whole journal.
"""

from collections import Counter
from collections.abc import Sequence

from .models import DailyCount, EmotionProfile, MoodRecord, TagCount

EMOTION_KEYWORDS = (
    "calm",
    "peace",
    "gratitude",
    "stress",
    "hope",
    "sad",
    "anger",
    "focus",
    "fear",
    "tired",
)

PROFILE_WINDOW = 10
DOMINANT_TAG_COUNT = 3


def extract_tags(text: str) -> list[str]:
    """Return the emotion keywords contained in ``text``, in keyword order."""
    lowered = text.lower()
    return [keyword for keyword in EMOTION_KEYWORDS if keyword in lowered]


def build_profile(records: Sequence[MoodRecord]) -> EmotionProfile:
    """
    Build an emotion profile from the newest journal entries.

    Args:
        records: Mood records, oldest first (as returned by the store)

    Returns:
        The dominant tags of the last ten entries and the newest mood label
    """
    recent = list(reversed(records[-PROFILE_WINDOW:]))
    if not recent:
        return EmotionProfile()

    counts: Counter[str] = Counter()
    for record in recent:
        counts.update(extract_tags(f"{record.mood} {record.note}"))

    # Counter.most_common keeps first-seen order for equal counts
    dominant = [tag for tag, _ in counts.most_common(DOMINANT_TAG_COUNT)]
    return EmotionProfile(
        dominant_tags=dominant,
        last_mood=recent[0].mood,
        sample_size=len(recent),
    )


def tag_counts(records: Sequence[MoodRecord]) -> list[TagCount]:
    """
    Count emotion tags across every journal entry.

    Args:
        records: Mood records, oldest first

    Returns:
        One TagCount per tag seen, most frequent first
    """
    counts: Counter[str] = Counter()
    for record in records:
        counts.update(extract_tags(f"{record.mood} {record.note}"))
    return [TagCount(tag=tag, count=count) for tag, count in counts.most_common()]


def daily_counts(records: Sequence[MoodRecord]) -> list[DailyCount]:
    """Number of entries per UTC day, oldest day first."""
    # "at" is ISO-8601, so the first ten characters are the date
    counts = Counter(record.at[:10] for record in records)
    return [DailyCount(day=day, count=counts[day]) for day in sorted(counts)]
