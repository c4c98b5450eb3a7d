"""Emotion tokens: quantified, immutable emotional observations.

Intensity uses an integer 0-1000 scale (500 is the neutral baseline).
Secondary emotions share the same scale. Tokens never change in place;
blending, decay and context merges all return new tokens.
"""

from __future__ import annotations

import time
import uuid
from types import MappingProxyType
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from emotion_core.affect.context import EmotionContext
from emotion_core.affect.taxonomy import EmotionKind


MIN_INTENSITY = 0
MAX_INTENSITY = 1000
NEUTRAL_INTENSITY = 500


def clamp_intensity(value: float) -> int:
    """Round to the nearest integer and clamp into [0, 1000]."""
    return max(MIN_INTENSITY, min(MAX_INTENSITY, int(round(value))))


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def now_millis() -> int:
    return int(time.time() * 1000)


class SourceType(str, Enum):
    """Where an emotional observation came from."""
    TEXT_ANALYSIS = "text_analysis"
    VOICE_ANALYSIS = "voice_analysis"
    FACIAL_RECOGNITION = "facial_recognition"
    GESTURE_ANALYSIS = "gesture_analysis"
    PHYSIOLOGICAL_SENSORS = "physiological_sensors"
    CONTEXT_INFERENCE = "context_inference"
    USER_EXPLICIT = "user_explicit"
    AI_GENERATED = "ai_generated"


@dataclass(frozen=True)
class EmotionSource:
    """Provenance of a token."""
    source_type: SourceType
    confidence_score: float = 1.0
    processing_method: str = ""

    def __post_init__(self):
        object.__setattr__(self, "confidence_score", clamp_unit(self.confidence_score))

    def to_dict(self) -> dict:
        return {
            "source_type": self.source_type.value,
            "confidence_score": self.confidence_score,
            "processing_method": self.processing_method,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EmotionSource":
        return cls(
            source_type=SourceType(data["source_type"]),
            confidence_score=data.get("confidence_score", 1.0),
            processing_method=data.get("processing_method", ""),
        )


def _clean_secondary(secondary: Mapping[EmotionKind, float]) -> Dict[EmotionKind, int]:
    cleaned = {}
    for kind, value in secondary.items():
        value = clamp_intensity(value)
        if value > 0:
            cleaned[kind] = value
    return cleaned


@dataclass(frozen=True)
class EmotionToken:
    """A quantified emotional observation.

    Attributes:
        primary: Primary emotion kind
        intensity: 0-1000 (0 none, 500 neutral baseline, 1000 maximum)
        secondary: Co-occurring kinds mapped to 0-1000 intensities, zeros pruned (read-only)
        context: Situational context
        confidence: 0.0-1.0 confidence in the observation
        source: Provenance
        metadata: Free-form annotations
        token_id: Unique identifier
        timestamp: Creation time in epoch milliseconds
    """

    primary: EmotionKind
    intensity: int
    context: EmotionContext = field(default_factory=EmotionContext)
    confidence: float = 1.0
    source: EmotionSource = field(default_factory=lambda: EmotionSource(SourceType.AI_GENERATED))
    secondary: Mapping[EmotionKind, int] = field(default_factory=dict)
    metadata: Mapping[str, Any] = field(default_factory=dict)
    token_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: int = field(default_factory=now_millis)

    def __post_init__(self):
        """Clamp intensities and confidence into range."""
        object.__setattr__(self, "intensity", clamp_intensity(self.intensity))
        object.__setattr__(self, "confidence", clamp_unit(self.confidence))
        object.__setattr__(self, "secondary", MappingProxyType(_clean_secondary(self.secondary)))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def normalized_intensity(self) -> float:
        """Intensity on a 0.0-1.0 scale."""
        return self.intensity / MAX_INTENSITY

    @property
    def intensity_percent(self) -> int:
        """Intensity on the coarse 0-100 scale."""
        return max(0, min(100, self.intensity // 10))

    def evolve(self, **changes: Any) -> "EmotionToken":
        """Return a copy with ``changes`` applied and a fresh token id."""
        changes.setdefault("token_id", str(uuid.uuid4()))
        return replace(self, **changes)

    def blend(self, other: "EmotionToken", weight: float = 0.5) -> "EmotionToken":
        """Blend with another token.

        Args:
            other: Token to blend in
            weight: How much of ``other`` to include (0 = all self, 1 = all other)

        Returns:
            A new token keeping this token's primary kind, or this token
            unchanged when only one side is a SYSTEM kind
        """
        if self.primary.is_system != other.primary.is_system:
            return self

        weight = clamp_unit(weight)
        keep = 1.0 - weight

        secondary = {}
        for kind in list(self.secondary) + [k for k in other.secondary if k not in self.secondary]:
            secondary[kind] = (
                self.secondary.get(kind, 0) * keep + other.secondary.get(kind, 0) * weight
            )

        metadata = dict(self.metadata)
        metadata.update(other.metadata)

        return self.evolve(
            intensity=self.intensity * keep + other.intensity * weight,
            secondary=secondary,
            confidence=(self.confidence + other.confidence) / 2.0,
            context=self.context.merge(other.context),
            metadata=metadata,
        )

    def dominant_emotion(self) -> EmotionKind:
        """Kind with the highest intensity across primary and secondary.

        The primary kind wins ties; other ties go to the first secondary
        entry in insertion order.
        """
        best, best_value = self.primary, self.intensity
        for kind, value in self.secondary.items():
            if value > best_value:
                best, best_value = kind, value
        return best

    def _weighted_coordinate(self, coordinate: str) -> float:
        total = getattr(self.primary, coordinate) * self.normalized_intensity
        secondary_weight = 0.0
        for kind, value in self.secondary.items():
            normalized = value / MAX_INTENSITY
            total += getattr(kind, coordinate) * normalized
            secondary_weight += normalized
        return total / (1.0 + secondary_weight)

    def valence(self) -> float:
        """Overall valence, damped by the total secondary weight."""
        return self._weighted_coordinate("valence")

    def arousal(self) -> float:
        """Overall arousal, damped by the total secondary weight."""
        return self._weighted_coordinate("arousal")

    def with_context(self, context: EmotionContext) -> "EmotionToken":
        """Scale intensity by the context's weight and merge the context in."""
        return self.evolve(
            intensity=self.intensity * context.contextual_weight(),
            context=self.context.merge(context),
        )

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "token_id": self.token_id,
            "timestamp": self.timestamp,
            "primary_emotion": self.primary.name,
            "intensity": self.intensity,
            "secondary_emotions": {kind.name: value for kind, value in self.secondary.items()},
            "context": self.context.to_dict(),
            "confidence": self.confidence,
            "source": self.source.to_dict(),
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EmotionToken":
        """Deserialize from :meth:`to_dict` output."""
        kwargs: dict[str, Any] = {
            "primary": EmotionKind.from_name(data["primary_emotion"]),
            "intensity": data["intensity"],
            "secondary": {
                EmotionKind.from_name(name): value
                for name, value in data.get("secondary_emotions", {}).items()
            },
            "context": EmotionContext.from_dict(data.get("context")),
            "confidence": data.get("confidence", 1.0),
            "metadata": data.get("metadata", {}),
        }
        if "source" in data:
            kwargs["source"] = EmotionSource.from_dict(data["source"])
        if "token_id" in data:
            kwargs["token_id"] = data["token_id"]
        if "timestamp" in data:
            kwargs["timestamp"] = data["timestamp"]
        return cls(**kwargs)


def neutral_token(context: Optional[EmotionContext] = None) -> EmotionToken:
    """Initial resting state: NEUTRAL at the 500 baseline."""
    return EmotionToken(
        primary=EmotionKind.NEUTRAL,
        intensity=NEUTRAL_INTENSITY,
        context=context or EmotionContext(),
        confidence=1.0,
        source=EmotionSource(SourceType.AI_GENERATED, 1.0),
    )
