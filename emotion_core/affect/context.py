"""Situational context attached to emotion tokens.

Context scales how strongly an emotion is expressed: an intimate
conversation at home amplifies, a professional setting in transit damps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, FrozenSet, Optional, Tuple

from emotion_core.affect.taxonomy import EmotionKind


# Mood history keeps only the most recent distinct kinds
MOOD_HISTORY_LIMIT = 5

# Bounds on the combined contextual multiplier
MIN_CONTEXTUAL_WEIGHT = 0.5
MAX_CONTEXTUAL_WEIGHT = 1.5


class EnvironmentType(str, Enum):
    """Physical environment the conversation happens in."""
    HOME = "home"
    WORK = "work"
    SOCIAL = "social"
    TRANSPORT = "transport"
    OUTDOOR = "outdoor"
    UNKNOWN = "unknown"


class SocialSetting(str, Enum):
    """Who else is present."""
    ALONE = "alone"
    GROUP = "group"
    INTIMATE = "intimate"
    PUBLIC = "public"
    PROFESSIONAL = "professional"


class TimeOfDay(str, Enum):
    """Coarse time-of-day bucket."""
    EARLY_MORNING = "early_morning"
    MORNING = "morning"
    MIDDAY = "midday"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"
    LATE_NIGHT = "late_night"

    @classmethod
    def from_hour(cls, hour: int) -> "TimeOfDay":
        """Bucket a 0-23 wall-clock hour."""
        hour = hour % 24
        if 5 <= hour <= 7:
            return cls.EARLY_MORNING
        if 8 <= hour <= 11:
            return cls.MORNING
        if 12 <= hour <= 13:
            return cls.MIDDAY
        if 14 <= hour <= 17:
            return cls.AFTERNOON
        if 18 <= hour <= 20:
            return cls.EVENING
        if 21 <= hour <= 23:
            return cls.NIGHT
        return cls.LATE_NIGHT

    @classmethod
    def now(cls) -> "TimeOfDay":
        return cls.from_hour(datetime.now().hour)


SOCIAL_WEIGHTS = {
    SocialSetting.ALONE: 1.0,
    SocialSetting.GROUP: 1.2,
    SocialSetting.INTIMATE: 1.3,
    SocialSetting.PUBLIC: 0.8,
    SocialSetting.PROFESSIONAL: 0.7,
}

ENVIRONMENT_WEIGHTS = {
    EnvironmentType.HOME: 1.1,
    EnvironmentType.WORK: 0.9,
    EnvironmentType.SOCIAL: 1.2,
    EnvironmentType.TRANSPORT: 0.8,
    EnvironmentType.OUTDOOR: 1.0,
    EnvironmentType.UNKNOWN: 1.0,
}


def _recent_moods(moods) -> Tuple[EmotionKind, ...]:
    """Deduplicate (first occurrence wins) and keep the last five."""
    seen = []
    for mood in moods:
        if mood not in seen:
            seen.append(mood)
    return tuple(seen[-MOOD_HISTORY_LIMIT:])


@dataclass(frozen=True)
class EmotionContext:
    """Situational descriptor for an emotional observation.

    Attributes:
        situation: Free-text situation label ("celebration", "training", ...)
        environment: Physical environment
        social_setting: Social setting
        time_of_day: Time-of-day bucket (defaults to the current local hour)
        activity: Free-text activity label
        conversation_turn: Turn counter of the conversation
        mood_history: Recent user moods, deduplicated, at most five
        tags: Free-form context tags
    """

    situation: str = ""
    environment: EnvironmentType = EnvironmentType.UNKNOWN
    social_setting: SocialSetting = SocialSetting.ALONE
    time_of_day: TimeOfDay = field(default_factory=TimeOfDay.now)
    activity: str = ""
    conversation_turn: int = 0
    mood_history: Tuple[EmotionKind, ...] = ()
    tags: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "mood_history", _recent_moods(self.mood_history))
        object.__setattr__(self, "tags", frozenset(self.tags))

    def merge(self, other: "EmotionContext") -> "EmotionContext":
        """Merge with a more recent context.

        Non-empty / non-default fields of ``other`` win; turn counters take
        the max; tags are unioned; mood histories are concatenated,
        deduplicated and truncated.
        """
        return EmotionContext(
            situation=other.situation or self.situation,
            environment=(
                other.environment
                if other.environment is not EnvironmentType.UNKNOWN
                else self.environment
            ),
            social_setting=other.social_setting,
            time_of_day=other.time_of_day,
            activity=other.activity or self.activity,
            conversation_turn=max(self.conversation_turn, other.conversation_turn),
            mood_history=self.mood_history + other.mood_history,
            tags=self.tags | other.tags,
        )

    def contextual_weight(self) -> float:
        """Intensity multiplier for this context, within [0.5, 1.5]."""
        weight = SOCIAL_WEIGHTS[self.social_setting] * ENVIRONMENT_WEIGHTS[self.environment]
        return max(MIN_CONTEXTUAL_WEIGHT, min(MAX_CONTEXTUAL_WEIGHT, weight))

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "situation": self.situation,
            "environment": self.environment.value,
            "social_setting": self.social_setting.value,
            "time_of_day": self.time_of_day.value,
            "activity": self.activity,
            "conversation_turn": self.conversation_turn,
            "mood_history": [mood.name for mood in self.mood_history],
            "tags": sorted(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "EmotionContext":
        """Deserialize from a dictionary; missing keys take defaults."""
        data = data or {}
        kwargs: dict[str, Any] = {
            "situation": data.get("situation", ""),
            "environment": EnvironmentType(data.get("environment", EnvironmentType.UNKNOWN.value)),
            "social_setting": SocialSetting(data.get("social_setting", SocialSetting.ALONE.value)),
            "activity": data.get("activity", ""),
            "conversation_turn": data.get("conversation_turn", 0),
            "mood_history": tuple(EmotionKind.from_name(m) for m in data.get("mood_history", [])),
            "tags": frozenset(data.get("tags", [])),
        }
        if "time_of_day" in data:
            kwargs["time_of_day"] = TimeOfDay(data["time_of_day"])
        return cls(**kwargs)
