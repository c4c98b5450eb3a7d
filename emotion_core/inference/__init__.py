from emotion_core.inference.signals import (
    explicit_token,
    infer_from_context,
    initialization_token,
    training_token,
)

__all__ = ["explicit_token", "infer_from_context", "initialization_token", "training_token"]
