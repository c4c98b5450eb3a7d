"""Emotion taxonomy on Russell's circumplex.

Every emotion kind sits at a fixed point in (valence, arousal) space:

- valence: -1.0 (unpleasant) to +1.0 (pleasant)
- arousal: 0.0 (calm) to 1.0 (highly activated)

Kinds are grouped into four categories. SYSTEM kinds describe the
companion's own processing states (uncertainty, learning, ...) rather than
user-facing affect and never blend with the other categories.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import List


class EmotionCategory(str, Enum):
    """Coarse affective category of an emotion kind."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    SYSTEM = "system"


# Compatibility thresholds on the circumplex
COMPATIBLE_VALENCE_GAP = 0.5
COMPATIBLE_AROUSAL_GAP = 0.3

# Largest possible distance: (-1, 0) to (1, 1)
MAX_CIRCUMPLEX_DISTANCE = math.sqrt(2.0 ** 2 + 1.0 ** 2)


class EmotionKind(Enum):
    """Registered emotion kinds with their circumplex coordinates.

    Each member's value is ``(display_name, valence, arousal, category)``.
    """

    # Basic emotions
    JOY = ("Joy", 0.8, 0.7, EmotionCategory.POSITIVE)
    SADNESS = ("Sadness", -0.7, 0.3, EmotionCategory.NEGATIVE)
    ANGER = ("Anger", -0.6, 0.9, EmotionCategory.NEGATIVE)
    FEAR = ("Fear", -0.8, 0.8, EmotionCategory.NEGATIVE)
    SURPRISE = ("Surprise", 0.1, 0.9, EmotionCategory.NEUTRAL)
    DISGUST = ("Disgust", -0.7, 0.5, EmotionCategory.NEGATIVE)

    # Social and extended positive emotions
    LOVE = ("Love", 0.9, 0.6, EmotionCategory.POSITIVE)
    EXCITEMENT = ("Excitement", 0.8, 0.9, EmotionCategory.POSITIVE)
    CONTENTMENT = ("Contentment", 0.6, 0.2, EmotionCategory.POSITIVE)
    SERENITY = ("Serenity", 0.5, 0.1, EmotionCategory.POSITIVE)
    CURIOSITY = ("Curiosity", 0.3, 0.6, EmotionCategory.POSITIVE)
    GRATITUDE = ("Gratitude", 0.8, 0.4, EmotionCategory.POSITIVE)
    EMPATHY = ("Empathy", 0.5, 0.4, EmotionCategory.POSITIVE)

    # Extended negative emotions
    ANXIETY = ("Anxiety", -0.5, 0.8, EmotionCategory.NEGATIVE)
    CONCERN = ("Concern", -0.3, 0.6, EmotionCategory.NEGATIVE)
    FRUSTRATION = ("Frustration", -0.6, 0.7, EmotionCategory.NEGATIVE)
    DISAPPOINTMENT = ("Disappointment", -0.5, 0.4, EmotionCategory.NEGATIVE)
    LONELINESS = ("Loneliness", -0.6, 0.3, EmotionCategory.NEGATIVE)

    # Self-related emotions
    GUILT = ("Guilt", -0.7, 0.6, EmotionCategory.NEGATIVE)
    SHAME = ("Shame", -0.8, 0.5, EmotionCategory.NEGATIVE)
    ENVY = ("Envy", -0.5, 0.6, EmotionCategory.NEGATIVE)
    PRIDE = ("Pride", 0.7, 0.6, EmotionCategory.POSITIVE)

    # Cognitive emotions
    CONFUSION = ("Confusion", -0.1, 0.5, EmotionCategory.NEUTRAL)
    BOREDOM = ("Boredom", -0.2, 0.1, EmotionCategory.NEUTRAL)
    RELIEF = ("Relief", 0.4, 0.3, EmotionCategory.POSITIVE)
    HOPE = ("Hope", 0.6, 0.5, EmotionCategory.POSITIVE)

    # Internal system states
    CONFIDENCE = ("Confidence", 0.5, 0.4, EmotionCategory.SYSTEM)
    UNCERTAINTY = ("Uncertainty", -0.2, 0.6, EmotionCategory.SYSTEM)
    PROCESSING = ("Processing", 0.0, 0.7, EmotionCategory.SYSTEM)
    LEARNING = ("Learning", 0.4, 0.6, EmotionCategory.SYSTEM)

    # Baseline
    NEUTRAL = ("Neutral", 0.0, 0.0, EmotionCategory.NEUTRAL)

    @property
    def display_name(self) -> str:
        return self.value[0]

    @property
    def valence(self) -> float:
        return self.value[1]

    @property
    def arousal(self) -> float:
        return self.value[2]

    @property
    def category(self) -> EmotionCategory:
        return self.value[3]

    @property
    def is_system(self) -> bool:
        return self.category is EmotionCategory.SYSTEM

    def distance_to(self, other: "EmotionKind") -> float:
        """Euclidean distance to another kind in (valence, arousal) space."""
        return math.hypot(self.valence - other.valence, self.arousal - other.arousal)

    def compatible_with(self) -> List["EmotionKind"]:
        """Kinds this one can plausibly blend into.

        A kind is compatible when neither side is a SYSTEM state and the two
        are close in valence or in arousal.
        """
        if self.is_system:
            return []
        return [
            other
            for other in EmotionKind
            if other is not self
            and not other.is_system
            and (
                abs(self.valence - other.valence) < COMPATIBLE_VALENCE_GAP
                or abs(self.arousal - other.arousal) < COMPATIBLE_AROUSAL_GAP
            )
        ]

    def complement_of(self) -> "EmotionKind":
        """Kind with opposite valence at a comparable arousal level.

        Ties resolve to the first kind in declaration order.
        """
        target_valence = -self.valence
        target_arousal = self.arousal
        best = EmotionKind.NEUTRAL
        best_distance = math.inf
        for kind in EmotionKind:
            distance = math.hypot(kind.valence - target_valence, kind.arousal - target_arousal)
            if distance < best_distance:
                best, best_distance = kind, distance
        return best

    @classmethod
    def from_name(cls, name: str) -> "EmotionKind":
        """Look up a kind by member name, case-insensitive."""
        return cls[name.strip().upper()]


def kinds_in(category: EmotionCategory) -> List[EmotionKind]:
    """All registered kinds belonging to a category, in declaration order."""
    return [kind for kind in EmotionKind if kind.category is category]
