"""Tests for EmotionContext."""
import itertools

import pytest

from emotion_core.affect.context import (
    EmotionContext,
    EnvironmentType,
    SocialSetting,
    TimeOfDay,
)
from emotion_core.affect.taxonomy import EmotionKind


class TestTimeOfDay:
    """Test hour bucketing."""

    @pytest.mark.parametrize(
        "hour,expected",
        [
            (5, TimeOfDay.EARLY_MORNING),
            (9, TimeOfDay.MORNING),
            (12, TimeOfDay.MIDDAY),
            (15, TimeOfDay.AFTERNOON),
            (19, TimeOfDay.EVENING),
            (22, TimeOfDay.NIGHT),
            (2, TimeOfDay.LATE_NIGHT),
        ],
    )
    def test_from_hour(self, hour, expected):
        assert TimeOfDay.from_hour(hour) is expected


class TestContextualWeight:
    """Test the environment/social intensity multiplier."""

    def test_home_alone_outweighs_professional_work(self):
        home = EmotionContext(environment=EnvironmentType.HOME, social_setting=SocialSetting.ALONE)
        work = EmotionContext(environment=EnvironmentType.WORK, social_setting=SocialSetting.PROFESSIONAL)
        assert home.contextual_weight() > work.contextual_weight()

    def test_weight_always_bounded(self):
        for env, social in itertools.product(EnvironmentType, SocialSetting):
            weight = EmotionContext(environment=env, social_setting=social).contextual_weight()
            assert 0.5 <= weight <= 1.5

    def test_intimate_social_clamped_to_max(self):
        # 1.3 * 1.2 = 1.56
        context = EmotionContext(environment=EnvironmentType.SOCIAL, social_setting=SocialSetting.INTIMATE)
        assert context.contextual_weight() == 1.5

    def test_default_weight_is_one(self):
        assert EmotionContext().contextual_weight() == 1.0


class TestMerge:
    """Test merging a newer context into an older one."""

    def test_prefers_non_empty_fields_from_newer(self):
        older = EmotionContext(situation="dinner", environment=EnvironmentType.HOME, activity="cooking")
        newer = EmotionContext(situation="", environment=EnvironmentType.UNKNOWN, activity="eating")

        merged = older.merge(newer)

        assert merged.situation == "dinner"
        assert merged.environment is EnvironmentType.HOME
        assert merged.activity == "eating"

    def test_newer_environment_wins_when_known(self):
        merged = EmotionContext(environment=EnvironmentType.HOME).merge(
            EmotionContext(environment=EnvironmentType.WORK)
        )
        assert merged.environment is EnvironmentType.WORK

    def test_turn_counter_takes_max(self):
        merged = EmotionContext(conversation_turn=7).merge(EmotionContext(conversation_turn=3))
        assert merged.conversation_turn == 7

    def test_tags_union(self):
        merged = EmotionContext(tags={"a", "b"}).merge(EmotionContext(tags={"b", "c"}))
        assert merged.tags == frozenset({"a", "b", "c"})

    def test_mood_history_dedup_and_truncate(self):
        older = EmotionContext(mood_history=(EmotionKind.JOY, EmotionKind.SADNESS, EmotionKind.ANGER))
        newer = EmotionContext(
            mood_history=(EmotionKind.JOY, EmotionKind.FEAR, EmotionKind.HOPE, EmotionKind.LOVE)
        )

        merged = older.merge(newer)

        assert merged.mood_history == (
            EmotionKind.SADNESS,
            EmotionKind.ANGER,
            EmotionKind.FEAR,
            EmotionKind.HOPE,
            EmotionKind.LOVE,
        )

    def test_merge_does_not_mutate(self):
        older = EmotionContext(tags={"a"})
        older.merge(EmotionContext(tags={"b"}))
        assert older.tags == frozenset({"a"})


class TestSerialization:
    """Test dictionary conversion."""

    def test_to_dict_uses_plain_values(self):
        context = EmotionContext(
            situation="celebration",
            environment=EnvironmentType.SOCIAL,
            time_of_day=TimeOfDay.EVENING,
            mood_history=(EmotionKind.JOY,),
            tags={"party"},
        )
        data = context.to_dict()
        assert data["environment"] == "social"
        assert data["time_of_day"] == "evening"
        assert data["mood_history"] == ["JOY"]
        assert EmotionContext.from_dict(data) == context

    def test_from_empty_dict(self):
        context = EmotionContext.from_dict({})
        assert context.environment is EnvironmentType.UNKNOWN
        assert context.social_setting is SocialSetting.ALONE
