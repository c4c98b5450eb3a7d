"""Configuration for the emotion processor and personality profiles.

Processor knobs are clamped rather than rejected: an out-of-range decay
rate becomes the nearest valid one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from pydantic import BaseModel, field_validator


# Processing cycle period (seconds)
DEFAULT_TICK_SECONDS = 0.1

# Bounded history ring
DEFAULT_HISTORY_SIZE = 100

# Personality knob defaults and bounds
DEFAULT_DECAY_RATE = 0.95
DECAY_RATE_BOUNDS = (0.8, 0.99)

DEFAULT_SENSITIVITY = 1.0
SENSITIVITY_BOUNDS = (0.5, 2.0)

DEFAULT_BLEND_WEIGHT = 0.3
BLEND_WEIGHT_BOUNDS = (0.1, 0.7)

# Minimum intensity a state must reach to be published (0-1000 scale)
DEFAULT_MIN_INTENSITY = 100


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, float(value)))


@dataclass
class ProcessorConfig:
    """Tuning for :class:`~emotion_core.affect.processor.EmotionProcessor`.

    Attributes:
        decay_rate: Per-tick multiplicative decay, clamped to [0.8, 0.99]
        context_sensitivity: Multiplier on blended batch intensity, [0.5, 2.0]
        blend_weight: Base weight for pairwise blending, [0.1, 0.7]
        min_intensity: Publish floor on the 0-1000 scale
        tick_seconds: Processing cycle period
        history_size: Capacity of the history ring
    """

    decay_rate: float = DEFAULT_DECAY_RATE
    context_sensitivity: float = DEFAULT_SENSITIVITY
    blend_weight: float = DEFAULT_BLEND_WEIGHT
    min_intensity: int = DEFAULT_MIN_INTENSITY
    tick_seconds: float = DEFAULT_TICK_SECONDS
    history_size: int = DEFAULT_HISTORY_SIZE

    def __post_init__(self):
        self.decay_rate = _clamp(self.decay_rate, DECAY_RATE_BOUNDS)
        self.context_sensitivity = _clamp(self.context_sensitivity, SENSITIVITY_BOUNDS)
        self.blend_weight = _clamp(self.blend_weight, BLEND_WEIGHT_BOUNDS)
        self.min_intensity = int(_clamp(self.min_intensity, (0, 1000)))
        if self.tick_seconds <= 0:
            raise ValueError(f"tick_seconds must be positive, got {self.tick_seconds}")
        if self.history_size < 1:
            raise ValueError(f"history_size must be >= 1, got {self.history_size}")

    def with_personality(
        self,
        decay_rate: float = DEFAULT_DECAY_RATE,
        sensitivity: float = DEFAULT_SENSITIVITY,
        blend_weight: float = DEFAULT_BLEND_WEIGHT,
    ) -> "ProcessorConfig":
        """Copy with the three personality knobs replaced (and re-clamped)."""
        return replace(
            self,
            decay_rate=decay_rate,
            context_sensitivity=sensitivity,
            blend_weight=blend_weight,
        )


class VoiceStyle(str, Enum):
    WARM = "warm"
    ENERGETIC = "energetic"
    CALM = "calm"
    PROFESSIONAL = "professional"
    PLAYFUL = "playful"


class CommunicationStyle(str, Enum):
    CASUAL = "casual"
    FORMAL = "formal"
    EMPATHETIC = "empathetic"
    TECHNICAL = "technical"
    HUMOROUS = "humorous"


class PersonalityConfiguration(BaseModel):
    """Serializable personality profile for the companion."""
    name: str = "default"
    emotion_decay_rate: float = DEFAULT_DECAY_RATE
    emotion_sensitivity: float = DEFAULT_SENSITIVITY
    emotion_blend_weight: float = DEFAULT_BLEND_WEIGHT
    voice_style: VoiceStyle = VoiceStyle.WARM
    communication_style: CommunicationStyle = CommunicationStyle.CASUAL
    proactiveness_level: float = 0.5
    empathy_level: float = 0.7
    curiosity_level: float = 0.6
    humor_level: float = 0.3

    @field_validator("emotion_decay_rate")
    @classmethod
    def _clamp_decay(cls, v: float) -> float:
        return _clamp(v, DECAY_RATE_BOUNDS)

    @field_validator("emotion_sensitivity")
    @classmethod
    def _clamp_sensitivity(cls, v: float) -> float:
        return _clamp(v, SENSITIVITY_BOUNDS)

    @field_validator("emotion_blend_weight")
    @classmethod
    def _clamp_blend(cls, v: float) -> float:
        return _clamp(v, BLEND_WEIGHT_BOUNDS)

    @field_validator("proactiveness_level", "empathy_level", "curiosity_level", "humor_level")
    @classmethod
    def _clamp_level(cls, v: float) -> float:
        return _clamp(v, (0.0, 1.0))

    def to_processor_config(self, base: ProcessorConfig | None = None) -> ProcessorConfig:
        """Apply this profile's emotion knobs on top of ``base``."""
        return (base or ProcessorConfig()).with_personality(
            decay_rate=self.emotion_decay_rate,
            sensitivity=self.emotion_sensitivity,
            blend_weight=self.emotion_blend_weight,
        )

    @classmethod
    def default(cls) -> "PersonalityConfiguration":
        return cls()

    @classmethod
    def empathetic(cls) -> "PersonalityConfiguration":
        """Slow decay, heightened sensitivity."""
        return cls(
            name="empathetic",
            emotion_decay_rate=0.97,
            emotion_sensitivity=1.4,
            emotion_blend_weight=0.4,
            voice_style=VoiceStyle.WARM,
            communication_style=CommunicationStyle.EMPATHETIC,
            empathy_level=0.95,
        )

    @classmethod
    def energetic(cls) -> "PersonalityConfiguration":
        """Fast-moving, strongly blended states."""
        return cls(
            name="energetic",
            emotion_decay_rate=0.85,
            emotion_sensitivity=1.6,
            emotion_blend_weight=0.6,
            voice_style=VoiceStyle.ENERGETIC,
            communication_style=CommunicationStyle.CASUAL,
            proactiveness_level=0.8,
            humor_level=0.6,
        )

    @classmethod
    def calm(cls) -> "PersonalityConfiguration":
        """Damped, steady states."""
        return cls(
            name="calm",
            emotion_decay_rate=0.9,
            emotion_sensitivity=0.7,
            emotion_blend_weight=0.2,
            voice_style=VoiceStyle.CALM,
            communication_style=CommunicationStyle.FORMAL,
            proactiveness_level=0.3,
        )
