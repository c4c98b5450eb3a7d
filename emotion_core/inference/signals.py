"""Token factories for the processor's inbound paths.

Analysis collaborators (text, voice, context inference, explicit training)
hand the processor ready-made tokens. These helpers build the tokens for the
rule-based paths.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from emotion_core.affect.context import EmotionContext, SocialSetting, TimeOfDay
from emotion_core.affect.taxonomy import EmotionKind
from emotion_core.affect.token import (
    MAX_INTENSITY,
    EmotionSource,
    EmotionToken,
    SourceType,
)

logger = logging.getLogger(__name__)


CONTEXT_INFERENCE_INTENSITY = 400
CONTEXT_INFERENCE_CONFIDENCE = 0.6
CONTEXT_INFERENCE_SOURCE_SCORE = 0.7

TRAINING_CONFIDENCE = 0.9
TRAINING_TAGS = frozenset({"training", "learned_response"})

INITIALIZATION_INTENSITY = 600

# Situation keywords checked in order
SITUATION_RULES = (
    ("problem", EmotionKind.CONCERN),
    ("celebration", EmotionKind.JOY),
)


def to_intensity(value: Union[int, float]) -> int:
    """Accept a 0.0-1.0 fraction (float) or a 0-1000 integer."""
    if isinstance(value, float) and 0.0 <= value <= 1.0:
        return int(round(value * MAX_INTENSITY))
    return int(round(value))


def explicit_token(
    kind: EmotionKind,
    intensity: Union[int, float],
    context: Optional[EmotionContext] = None,
    confidence: float = 0.9,
    source: SourceType = SourceType.USER_EXPLICIT,
    source_score: float = 1.0,
    secondary: Optional[Mapping[EmotionKind, int]] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> EmotionToken:
    """Build a token from loose inputs."""
    return EmotionToken(
        primary=kind,
        intensity=to_intensity(intensity),
        context=context or EmotionContext(),
        confidence=confidence,
        source=EmotionSource(source, source_score),
        secondary=dict(secondary or {}),
        metadata=dict(metadata or {}),
    )


def infer_from_context(context: EmotionContext) -> Optional[EmotionToken]:
    """Infer a mild emotion from situational cues alone.

    Returns:
        A CONTEXT_INFERENCE token, or None when no rule matches
    """
    situation = context.situation.lower()
    inferred = None
    for keyword, kind in SITUATION_RULES:
        if keyword in situation:
            inferred = kind
            break

    if inferred is None:
        if context.time_of_day is TimeOfDay.LATE_NIGHT:
            inferred = EmotionKind.SERENITY
        elif context.social_setting is SocialSetting.PROFESSIONAL:
            inferred = EmotionKind.CONFIDENCE

    if inferred is None:
        return None

    logger.debug(f"Inferred {inferred.name} from context '{context.situation}'")
    return explicit_token(
        inferred,
        CONTEXT_INFERENCE_INTENSITY,
        context=context,
        confidence=CONTEXT_INFERENCE_CONFIDENCE,
        source=SourceType.CONTEXT_INFERENCE,
        source_score=CONTEXT_INFERENCE_SOURCE_SCORE,
    )


def training_token(trigger: str, target: EmotionKind, intensity: Union[int, float]) -> EmotionToken:
    """Token teaching the companion to respond to ``trigger`` with ``target``."""
    return explicit_token(
        target,
        intensity,
        context=EmotionContext(situation="training", tags=TRAINING_TAGS),
        confidence=TRAINING_CONFIDENCE,
        source=SourceType.USER_EXPLICIT,
        metadata={"trigger": trigger},
    )


def initialization_token() -> EmotionToken:
    """Curious greeting state emitted when the companion comes online."""
    return explicit_token(
        EmotionKind.CURIOSITY,
        INITIALIZATION_INTENSITY,
        context=EmotionContext(situation="initialization"),
        confidence=1.0,
        source=SourceType.AI_GENERATED,
    )
