"""Trend detection over a window of emotion tokens."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

import numpy as np

from emotion_core.affect.token import EmotionToken


# Slope beyond which valence/arousal count as rising or falling (per token)
SLOPE_THRESHOLD = 0.1

# Mean-intensity bands on the 0-1000 scale
INTENSE_THRESHOLD = 700
SUBDUED_THRESHOLD = 300


class EmotionalTrend(str, Enum):
    """Direction of recent affective trajectory."""
    ESCALATING_POSITIVE = "escalating_positive"
    ESCALATING_NEGATIVE = "escalating_negative"
    CALMING_POSITIVE = "calming_positive"
    CALMING_NEGATIVE = "calming_negative"
    INTENSE = "intense"
    SUBDUED = "subdued"
    STABLE = "stable"


def calculate_slope(values: Sequence[float]) -> float:
    """Ordinary least-squares slope of ``values`` against their index.

    Returns 0.0 for fewer than two points.
    """
    if len(values) < 2:
        return 0.0
    y = np.asarray(values, dtype=float)
    x = np.arange(len(y), dtype=float)
    x_centered = x - x.mean()
    denominator = float(np.dot(x_centered, x_centered))
    if denominator == 0:
        return 0.0
    return float(np.dot(x_centered, y - y.mean()) / denominator)


def classify_trend(tokens: Sequence[EmotionToken]) -> EmotionalTrend:
    """Classify the trajectory of ``tokens`` (oldest first).

    Rising/falling valence combined with rising/falling arousal is checked
    first, then the mean intensity band.
    """
    if not tokens:
        return EmotionalTrend.STABLE

    valence_slope = calculate_slope([t.valence() for t in tokens])
    arousal_slope = calculate_slope([t.arousal() for t in tokens])
    mean_intensity = float(np.mean([t.intensity for t in tokens]))

    if valence_slope > SLOPE_THRESHOLD and arousal_slope > SLOPE_THRESHOLD:
        return EmotionalTrend.ESCALATING_POSITIVE
    if valence_slope > SLOPE_THRESHOLD and arousal_slope < -SLOPE_THRESHOLD:
        return EmotionalTrend.CALMING_POSITIVE
    if valence_slope < -SLOPE_THRESHOLD and arousal_slope > SLOPE_THRESHOLD:
        return EmotionalTrend.ESCALATING_NEGATIVE
    if valence_slope < -SLOPE_THRESHOLD and arousal_slope < -SLOPE_THRESHOLD:
        return EmotionalTrend.CALMING_NEGATIVE
    if mean_intensity > INTENSE_THRESHOLD:
        return EmotionalTrend.INTENSE
    if mean_intensity < SUBDUED_THRESHOLD:
        return EmotionalTrend.SUBDUED
    return EmotionalTrend.STABLE
