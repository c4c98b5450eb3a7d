"""Pytest configuration and fixtures."""

import random

import pytest

from emotion_core.affect.context import EmotionContext, TimeOfDay
from emotion_core.affect.processor import EmotionProcessor
from emotion_core.affect.token import EmotionSource, EmotionToken, SourceType
from emotion_core.personality.config import ProcessorConfig


class FakeClock:
    """Epoch-millisecond clock advanced by hand."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_token(clock):
    """Factory for tokens stamped with the fake clock."""

    def _make(kind, intensity, confidence=0.9, context=None, secondary=None, timestamp=None):
        return EmotionToken(
            primary=kind,
            intensity=intensity,
            context=context or EmotionContext(time_of_day=TimeOfDay.AFTERNOON),
            confidence=confidence,
            source=EmotionSource(SourceType.AI_GENERATED, 0.9),
            secondary=secondary or {},
            timestamp=clock() if timestamp is None else timestamp,
        )

    return _make


@pytest.fixture
def processor(clock):
    """Processor with a fake clock and seeded rng; the cycle is driven by tick()."""
    return EmotionProcessor(config=ProcessorConfig(), rng=random.Random(7), clock=clock)
