"""Emotion-dependent voice and text expression."""
from emotion_core.expression.profiles import (
    EXPRESSION_TABLE,
    ExpressionProfile,
    ResponseType,
    VoiceModulation,
    apply_prosody,
    classify_response,
    color_response,
    expression_for,
    voice_modulation,
)

__all__ = [
    "EXPRESSION_TABLE",
    "ExpressionProfile",
    "ResponseType",
    "VoiceModulation",
    "apply_prosody",
    "classify_response",
    "color_response",
    "expression_for",
    "voice_modulation",
]
