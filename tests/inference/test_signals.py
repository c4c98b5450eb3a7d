"""Tests for ingestion token factories."""

import pytest

from emotion_core.affect.context import EmotionContext, SocialSetting, TimeOfDay
from emotion_core.affect.taxonomy import EmotionKind
from emotion_core.affect.token import SourceType
from emotion_core.inference.signals import (
    explicit_token,
    infer_from_context,
    initialization_token,
    to_intensity,
    training_token,
)


class TestToIntensity:
    """Test loose intensity parsing."""

    def test_fraction(self):
        assert to_intensity(0.75) == 750

    def test_integer_scale(self):
        assert to_intensity(640) == 640
        assert to_intensity(1) == 1


class TestInferFromContext:
    """Test rule-based context inference."""

    def test_problem_is_concern(self):
        token = infer_from_context(EmotionContext(situation="Network PROBLEM at home", time_of_day=TimeOfDay.MORNING))
        assert token is not None
        assert token.primary is EmotionKind.CONCERN
        assert token.intensity == 400
        assert token.confidence == pytest.approx(0.6)
        assert token.source.source_type is SourceType.CONTEXT_INFERENCE
        assert token.source.confidence_score == pytest.approx(0.7)

    def test_celebration_is_joy(self):
        token = infer_from_context(EmotionContext(situation="birthday celebration", time_of_day=TimeOfDay.EVENING))
        assert token.primary is EmotionKind.JOY

    def test_late_night_is_serenity(self):
        token = infer_from_context(EmotionContext(time_of_day=TimeOfDay.LATE_NIGHT))
        assert token.primary is EmotionKind.SERENITY

    def test_professional_is_confidence(self):
        token = infer_from_context(
            EmotionContext(social_setting=SocialSetting.PROFESSIONAL, time_of_day=TimeOfDay.MORNING)
        )
        assert token.primary is EmotionKind.CONFIDENCE

    def test_no_cue_returns_none(self):
        assert infer_from_context(EmotionContext(time_of_day=TimeOfDay.AFTERNOON)) is None


class TestFactories:
    """Test training, initialization and explicit tokens."""

    def test_training_token(self):
        token = training_token("good morning", EmotionKind.JOY, 0.8)
        assert token.primary is EmotionKind.JOY
        assert token.intensity == 800
        assert token.source.source_type is SourceType.USER_EXPLICIT
        assert token.metadata == {"trigger": "good morning"}
        assert token.context.situation == "training"
        assert token.context.tags == frozenset({"training", "learned_response"})

    def test_initialization_token(self):
        token = initialization_token()
        assert token.primary is EmotionKind.CURIOSITY
        assert token.intensity == 600
        assert token.source.source_type is SourceType.AI_GENERATED

    def test_explicit_token_clamps(self):
        token = explicit_token(EmotionKind.ANGER, 4000, secondary={EmotionKind.FRUSTRATION: 300})
        assert token.intensity == 1000
        assert token.secondary == {EmotionKind.FRUSTRATION: 300}
