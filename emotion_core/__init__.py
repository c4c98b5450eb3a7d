"""Emotion state engine for an affective AI companion."""

__version__ = "0.1.0"
