"""Affect core: emotion taxonomy, tokens, context and the processing engine."""
from emotion_core.affect.taxonomy import EmotionCategory, EmotionKind
from emotion_core.affect.context import (
    EmotionContext,
    EnvironmentType,
    SocialSetting,
    TimeOfDay,
)
from emotion_core.affect.token import EmotionSource, EmotionToken, SourceType
from emotion_core.affect.trend import EmotionalTrend
from emotion_core.affect.processor import EmotionProcessor, EmotionSnapshot

__all__ = [
    "EmotionCategory",
    "EmotionKind",
    "EmotionContext",
    "EnvironmentType",
    "SocialSetting",
    "TimeOfDay",
    "EmotionSource",
    "EmotionToken",
    "SourceType",
    "EmotionalTrend",
    "EmotionProcessor",
    "EmotionSnapshot",
]
