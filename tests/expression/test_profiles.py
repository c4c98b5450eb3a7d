"""Tests for emotion expression profiles."""

import pytest

from emotion_core.affect.taxonomy import EmotionCategory, EmotionKind
from emotion_core.affect.token import EmotionToken
from emotion_core.expression.profiles import (
    CATEGORY_DEFAULTS,
    EXPRESSION_TABLE,
    NEUTRAL_PROFILE,
    ResponseType,
    apply_prosody,
    classify_response,
    color_response,
    expression_for,
    voice_modulation,
)


def _token(kind, intensity):
    return EmotionToken(primary=kind, intensity=intensity)


class TestLookup:
    """Test table lookup and category fallback."""

    def test_table_entry_used(self):
        assert expression_for(EmotionKind.SADNESS) is EXPRESSION_TABLE[EmotionKind.SADNESS]

    def test_category_fallback(self):
        assert EmotionKind.LOVE not in EXPRESSION_TABLE
        assert expression_for(EmotionKind.LOVE) is CATEGORY_DEFAULTS[EmotionCategory.POSITIVE]

    def test_every_kind_resolves(self):
        for kind in EmotionKind:
            assert expression_for(kind) is not None

    def test_neutral_has_no_coloring(self):
        assert expression_for(EmotionKind.NEUTRAL) is NEUTRAL_PROFILE


class TestVoiceModulation:
    """Test pitch and rate multipliers."""

    def test_joy_pitch_rises_with_intensity(self):
        modulation = voice_modulation(_token(EmotionKind.JOY, 500))
        assert modulation.pitch == pytest.approx(1.2)
        assert modulation.rate == pytest.approx(1.0)

    def test_sadness_slows_and_lowers(self):
        modulation = voice_modulation(_token(EmotionKind.SADNESS, 1000))
        assert modulation.pitch == pytest.approx(0.8)
        assert modulation.rate == pytest.approx(0.8)

    def test_serenity_fixed_pitch(self):
        assert voice_modulation(_token(EmotionKind.SERENITY, 900)).pitch == pytest.approx(0.95)

    def test_modulation_bounded(self):
        for kind in EmotionKind:
            modulation = voice_modulation(_token(kind, 1000))
            assert 0.5 <= modulation.pitch <= 2.0
            assert 0.5 <= modulation.rate <= 2.0


class TestTextColoring:
    """Test prosody markup and response prefixes."""

    def test_intense_positive_prefix(self):
        text = color_response("Let's do it.", _token(EmotionKind.JOY, 900))
        assert text == "I'm genuinely excited to help with this! Let's do it."

    def test_mild_positive_unchanged(self):
        assert color_response("Sure.", _token(EmotionKind.JOY, 400)) == "Sure."

    def test_sadness_prefix(self):
        text = color_response("Here is what I found.", _token(EmotionKind.SADNESS, 300))
        assert text.startswith("I understand this might be difficult.")

    def test_system_prefixes(self):
        assert color_response("yes.", _token(EmotionKind.UNCERTAINTY, 500)).startswith(
            "I'm not entirely certain, but"
        )
        assert color_response("ok.", _token(EmotionKind.PROCESSING, 500)).startswith(
            "Let me think about this..."
        )

    def test_prosody_intense_positive(self):
        assert apply_prosody("hi", _token(EmotionKind.EXCITEMENT, 900)) == (
            '<speak><prosody rate="fast" pitch="high">hi</prosody></speak>'
        )

    def test_prosody_sadness(self):
        assert apply_prosody("hi", _token(EmotionKind.SADNESS, 500)) == (
            '<speak><prosody rate="slow" pitch="low">hi</prosody></speak>'
        )

    def test_prosody_neutral_plain(self):
        assert apply_prosody("hi", _token(EmotionKind.NEUTRAL, 500)) == "hi"


class TestClassifyResponse:
    """Test response type selection."""

    def test_question_is_answer(self):
        assert classify_response("What time is it?", _token(EmotionKind.SADNESS, 900)) is ResponseType.ANSWER

    def test_negative_is_supportive(self):
        assert classify_response("I lost my keys", _token(EmotionKind.FRUSTRATION, 500)) is ResponseType.SUPPORTIVE

    def test_high_intensity_is_enthusiastic(self):
        assert classify_response("We won", _token(EmotionKind.EXCITEMENT, 850)) is ResponseType.ENTHUSIASTIC

    def test_default_conversational(self):
        assert classify_response("Nice day", _token(EmotionKind.CONTENTMENT, 500)) is ResponseType.CONVERSATIONAL
