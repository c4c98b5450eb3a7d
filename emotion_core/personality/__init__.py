"""Processor tuning and personality profiles."""
from emotion_core.personality.config import (
    CommunicationStyle,
    PersonalityConfiguration,
    ProcessorConfig,
    VoiceStyle,
)

__all__ = ["CommunicationStyle", "PersonalityConfiguration", "ProcessorConfig", "VoiceStyle"]
