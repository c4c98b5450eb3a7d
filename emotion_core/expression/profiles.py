"""Expression profiles: how each emotion kind colors speech and text.

Behavior per kind lives in a lookup table rather than in branching code, so
a new emotion kind only needs a table entry. Kinds without an entry use
their category's default.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from emotion_core.affect.taxonomy import EmotionCategory, EmotionKind
from emotion_core.affect.token import EmotionToken


# Synthesizer accepts pitch and rate multipliers in this range
MODULATION_BOUNDS = (0.5, 2.0)

# Normalized intensity above which "intense" variants apply
INTENSE_EXPRESSION_THRESHOLD = 0.7

# Normalized intensity above which responses are classified enthusiastic
ENTHUSIASTIC_THRESHOLD = 0.8


@dataclass(frozen=True)
class Prosody:
    """SSML prosody hints."""
    rate: Optional[str] = None
    pitch: Optional[str] = None

    def wrap(self, text: str) -> str:
        attrs = []
        if self.rate:
            attrs.append(f'rate="{self.rate}"')
        if self.pitch:
            attrs.append(f'pitch="{self.pitch}"')
        if not attrs:
            return text
        return f"<speak><prosody {' '.join(attrs)}>{text}</prosody></speak>"


@dataclass(frozen=True)
class ExpressionProfile:
    """Voice and text behavior for an emotion kind.

    Pitch and rate are ``base + normalized_intensity * slope``.
    """
    pitch_base: float = 1.0
    pitch_slope: float = 0.0
    rate_base: float = 1.0
    rate_slope: float = 0.0
    prosody: Prosody = Prosody()
    intense_prosody: Optional[Prosody] = None
    response_prefix: str = ""
    intense_prefix: str = ""


@dataclass(frozen=True)
class VoiceModulation:
    pitch: float
    rate: float


class ResponseType(str, Enum):
    ANSWER = "answer"
    SUPPORTIVE = "supportive"
    ENTHUSIASTIC = "enthusiastic"
    CONVERSATIONAL = "conversational"


NEUTRAL_PROFILE = ExpressionProfile()

CATEGORY_DEFAULTS = {
    EmotionCategory.POSITIVE: ExpressionProfile(
        prosody=Prosody(pitch="medium"),
        intense_prosody=Prosody(rate="fast", pitch="high"),
        intense_prefix="I'm genuinely excited to help with this! ",
    ),
    EmotionCategory.NEGATIVE: ExpressionProfile(prosody=Prosody(pitch="low")),
    EmotionCategory.NEUTRAL: NEUTRAL_PROFILE,
    EmotionCategory.SYSTEM: NEUTRAL_PROFILE,
}

_POSITIVE = CATEGORY_DEFAULTS[EmotionCategory.POSITIVE]
_NEGATIVE = CATEGORY_DEFAULTS[EmotionCategory.NEGATIVE]

EXPRESSION_TABLE: dict[EmotionKind, ExpressionProfile] = {
    EmotionKind.JOY: ExpressionProfile(
        pitch_base=1.1, pitch_slope=0.2,
        prosody=_POSITIVE.prosody, intense_prosody=_POSITIVE.intense_prosody,
        intense_prefix=_POSITIVE.intense_prefix,
    ),
    EmotionKind.EXCITEMENT: ExpressionProfile(
        pitch_base=1.1, pitch_slope=0.2, rate_base=1.1, rate_slope=0.1,
        prosody=_POSITIVE.prosody, intense_prosody=_POSITIVE.intense_prosody,
        intense_prefix=_POSITIVE.intense_prefix,
    ),
    EmotionKind.CONTENTMENT: ExpressionProfile(
        pitch_base=0.95, rate_base=0.95,
        prosody=_POSITIVE.prosody, intense_prosody=_POSITIVE.intense_prosody,
        intense_prefix=_POSITIVE.intense_prefix,
    ),
    EmotionKind.SERENITY: ExpressionProfile(
        pitch_base=0.95, rate_base=0.9, rate_slope=-0.1,
        prosody=_POSITIVE.prosody, intense_prosody=_POSITIVE.intense_prosody,
        intense_prefix=_POSITIVE.intense_prefix,
    ),
    EmotionKind.SADNESS: ExpressionProfile(
        pitch_base=0.9, pitch_slope=-0.1, rate_base=0.9, rate_slope=-0.1,
        prosody=Prosody(rate="slow", pitch="low"),
        response_prefix="I understand this might be difficult. ",
    ),
    EmotionKind.DISAPPOINTMENT: ExpressionProfile(
        pitch_base=0.9, pitch_slope=-0.1, prosody=_NEGATIVE.prosody,
    ),
    EmotionKind.ANGER: ExpressionProfile(
        pitch_base=1.0, pitch_slope=0.15, rate_base=1.05, rate_slope=0.1,
        prosody=_NEGATIVE.prosody,
    ),
    EmotionKind.FRUSTRATION: ExpressionProfile(
        pitch_base=1.0, pitch_slope=0.15, prosody=_NEGATIVE.prosody,
    ),
    EmotionKind.FEAR: ExpressionProfile(
        pitch_base=1.05, pitch_slope=0.25, prosody=_NEGATIVE.prosody,
    ),
    EmotionKind.ANXIETY: ExpressionProfile(
        pitch_base=1.05, pitch_slope=0.25, rate_base=1.1, rate_slope=0.1,
        prosody=_NEGATIVE.prosody,
    ),
    EmotionKind.UNCERTAINTY: ExpressionProfile(response_prefix="I'm not entirely certain, but "),
    EmotionKind.PROCESSING: ExpressionProfile(response_prefix="Let me think about this... "),
}


def expression_for(kind: EmotionKind) -> ExpressionProfile:
    """Profile for ``kind``, falling back to its category default."""
    profile = EXPRESSION_TABLE.get(kind)
    if profile is not None:
        return profile
    return CATEGORY_DEFAULTS.get(kind.category, NEUTRAL_PROFILE)


def _bounded(value: float) -> float:
    low, high = MODULATION_BOUNDS
    return max(low, min(high, value))


def voice_modulation(token: EmotionToken) -> VoiceModulation:
    """Pitch and rate multipliers for speaking in ``token``'s state."""
    profile = expression_for(token.primary)
    level = token.normalized_intensity
    return VoiceModulation(
        pitch=_bounded(profile.pitch_base + level * profile.pitch_slope),
        rate=_bounded(profile.rate_base + level * profile.rate_slope),
    )


def _is_intense(token: EmotionToken) -> bool:
    return token.normalized_intensity > INTENSE_EXPRESSION_THRESHOLD


def apply_prosody(text: str, token: EmotionToken) -> str:
    """Wrap ``text`` in SSML prosody markup for ``token``'s state."""
    profile = expression_for(token.primary)
    prosody = profile.intense_prosody if _is_intense(token) and profile.intense_prosody else profile.prosody
    return prosody.wrap(text)


def color_response(text: str, token: EmotionToken) -> str:
    """Prefix ``text`` with an emotional lead-in, if the profile has one."""
    profile = expression_for(token.primary)
    if _is_intense(token) and profile.intense_prefix:
        return profile.intense_prefix + text
    return profile.response_prefix + text


def classify_response(text: str, token: EmotionToken) -> ResponseType:
    """Pick the response type for replying to ``text`` in ``token``'s state."""
    if text.rstrip().endswith("?"):
        return ResponseType.ANSWER
    if token.primary.category is EmotionCategory.NEGATIVE:
        return ResponseType.SUPPORTIVE
    if token.normalized_intensity > ENTHUSIASTIC_THRESHOLD:
        return ResponseType.ENTHUSIASTIC
    return ResponseType.CONVERSATIONAL
