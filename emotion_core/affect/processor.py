"""Emotion processor: the stateful engine of the affect core.

Each tick of the processing cycle:
    DRAIN -> BLEND -> PUBLISH -> (otherwise) DECAY

Producers enqueue tokens from any thread with :meth:`process_emotion`.
The cycle task drains the queue, reduces the batch to one token, and
publishes it if it clears the intensity floor. Ticks without a fresh
publish decay the current state instead. Subscribers see every published
state, in publish order.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import random
import threading
from collections import Counter, deque
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, List, Optional

from emotion_core.affect.context import EmotionContext
from emotion_core.affect.taxonomy import EmotionKind
from emotion_core.affect.token import (
    EmotionSource,
    EmotionToken,
    SourceType,
    clamp_intensity,
    neutral_token,
    now_millis,
)
from emotion_core.affect.trend import EmotionalTrend, classify_trend
from emotion_core.personality.config import (
    DEFAULT_BLEND_WEIGHT,
    DEFAULT_DECAY_RATE,
    DEFAULT_SENSITIVITY,
    PersonalityConfiguration,
    ProcessorConfig,
)

logger = logging.getLogger(__name__)


# Trend window used when none is given (milliseconds)
DEFAULT_TREND_WINDOW_MS = 60_000

# Bounds on the dynamic pairwise blend weight
MIN_DYNAMIC_WEIGHT = 0.1
MAX_DYNAMIC_WEIGHT = 0.6

# A batch that fails this many ticks in a row is dropped
MAX_BATCH_RETRIES = 3

# Per-stream buffer; the oldest state is dropped when a reader falls behind
STREAM_BUFFER_SIZE = 100

# Prediction parameters
PREDICTION_PATTERN_SIZE = 10
PREDICTION_INTENSITY_FACTOR = 0.8
PREDICTION_INTENSITY_BOUNDS = (100, 900)
PREDICTION_CONFIDENCE = 0.6
PREDICTION_SOURCE_SCORE = 0.8

StateCallback = Callable[[EmotionToken], Any]


@dataclass(frozen=True)
class EmotionSnapshot:
    """Point-in-time view of the processor for monitoring collaborators."""
    current: EmotionToken
    valence: float
    arousal: float
    dominant: EmotionKind
    trend: EmotionalTrend
    pending: int
    history_size: int
    tick_count: int


class EmotionProcessor:
    """Blends, decays and publishes the companion's emotional state.

    Attributes:
        config: Active processor configuration (replaced, never mutated)
        rng: Random source for prediction tie-breaks
        clock: Callable returning the current time in epoch milliseconds
    """

    def __init__(
        self,
        config: Optional[ProcessorConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], int]] = None,
        initial_state: Optional[EmotionToken] = None,
    ):
        """Initialize the processor at rest (not running).

        Args:
            config: Processor configuration; defaults to ``ProcessorConfig()``
            rng: Random source for prediction; seed it for determinism
            clock: Epoch-millisecond clock used for trend windows and decay
            initial_state: Starting state; defaults to NEUTRAL at 500
        """
        self.config = config or ProcessorConfig()
        self.rng = rng or random.Random()
        self.clock = clock or now_millis

        self._current = initial_state or neutral_token()
        self._pending: deque[EmotionToken] = deque()
        self._history: deque[EmotionToken] = deque(maxlen=self.config.history_size)
        self._queue_lock = threading.Lock()

        self._subscribers: List[StateCallback] = []
        self._streams: List[asyncio.Queue] = []

        self._batch_failures = 0
        self._tick_count = 0
        self._running = False
        self._cycle_task: Optional[asyncio.Task] = None
        self._tick_lock = asyncio.Lock()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the processing cycle on the running event loop."""
        if self._running:
            logger.warning("Emotion processor already running")
            return

        self._running = True
        self._cycle_task = asyncio.create_task(self._cycle_loop())
        logger.info(f"Emotion processor started (tick={self.config.tick_seconds}s)")

    async def stop(self) -> None:
        """Stop the processing cycle and wait for the task to finish.

        An in-flight tick runs to completion (including subscriber
        notification) before the cycle task is cancelled.
        """
        self._running = False

        task = self._cycle_task
        self._cycle_task = None
        if task and task is not asyncio.current_task():
            async with self._tick_lock:
                task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        logger.info("Emotion processor stopped")

    async def _cycle_loop(self) -> None:
        """Background task that runs periodic ticks."""
        while self._running:
            try:
                await self.tick()
                await asyncio.sleep(self.config.tick_seconds)
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Emotion cycle error: {e}", exc_info=True)
                await asyncio.sleep(self.config.tick_seconds)

    # =========================================================================
    # Ingestion
    # =========================================================================

    def process_emotion(self, token: EmotionToken) -> None:
        """Queue a token for the next tick and record it in history."""
        with self._queue_lock:
            self._pending.append(token)
            self._history.append(token)

    def process_emotions(self, tokens: List[EmotionToken]) -> None:
        """Queue several tokens so they blend within the same tick."""
        with self._queue_lock:
            self._pending.extend(tokens)
            self._history.extend(tokens)

    submit = process_emotion
    submit_batch = process_emotions

    def _drain(self) -> List[EmotionToken]:
        with self._queue_lock:
            batch = list(self._pending)
            self._pending.clear()
        return batch

    def _requeue(self, batch: List[EmotionToken]) -> None:
        """Put a failed batch back at the front of the queue."""
        with self._queue_lock:
            self._pending.extendleft(reversed(batch))

    # =========================================================================
    # Processing cycle
    # =========================================================================

    async def tick(self) -> Optional[EmotionToken]:
        """Run one processing cycle.

        Returns:
            The token published this tick, or None if state did not change
        """
        async with self._tick_lock:
            self._tick_count += 1
            published = None

            batch = self._drain()
            if batch:
                blended = self._blend_or_requeue(batch)
                if blended is not None:
                    published = await self._publish_if_above_floor(blended)

            if published is None:
                decayed = self._decayed_state()
                if decayed is not None:
                    published = await self._publish_if_above_floor(decayed)

            return published

    def _blend_or_requeue(self, batch: List[EmotionToken]) -> Optional[EmotionToken]:
        try:
            blended = self.blend_batch(batch)
        except Exception as e:
            self._batch_failures += 1
            if self._batch_failures >= MAX_BATCH_RETRIES:
                logger.error(
                    f"Dropping batch of {len(batch)} tokens after "
                    f"{self._batch_failures} failed attempts: {e}",
                    exc_info=True,
                )
                self._batch_failures = 0
            else:
                logger.error(
                    f"Blending batch of {len(batch)} tokens failed, requeued: {e}",
                    exc_info=True,
                )
                self._requeue(batch)
            return None

        self._batch_failures = 0
        return blended

    def blend_batch(self, batch: List[EmotionToken]) -> EmotionToken:
        """Reduce a batch of tokens to a single token.

        Starts from the most confident token and blends in the others with a
        dynamic weight. SYSTEM kinds never blend with affective kinds, so
        members on the other side of that line are skipped. A single token
        comes back unchanged.
        """
        if not batch:
            return self._current

        start = max(batch, key=lambda t: t.confidence)
        group = [t for t in batch if t.primary.is_system == start.primary.is_system]
        if len(group) < len(batch):
            logger.debug(
                f"Skipping {len(batch) - len(group)} tokens that cannot blend "
                f"with {start.primary.name}"
            )
        if len(group) == 1:
            return start

        config = self.config
        result = start
        for token in group:
            if token is start:
                continue
            result = result.blend(token, self.dynamic_weight(result, token, config.blend_weight))

        return result.evolve(intensity=clamp_intensity(result.intensity * config.context_sensitivity))

    @staticmethod
    def dynamic_weight(primary: EmotionToken, secondary: EmotionToken, blend_weight: float) -> float:
        """Pairwise blend weight from confidence, intensity and compatibility."""
        confidence_total = primary.confidence + secondary.confidence
        confidence_ratio = secondary.confidence / confidence_total if confidence_total else 0.5
        intensity_total = primary.intensity + secondary.intensity
        intensity_ratio = secondary.intensity / intensity_total if intensity_total else 0.5
        compatibility = 1.0 - primary.primary.distance_to(secondary.primary) / 2.0

        weight = blend_weight * confidence_ratio * intensity_ratio * compatibility
        return max(MIN_DYNAMIC_WEIGHT, min(MAX_DYNAMIC_WEIGHT, weight))

    def _decayed_state(self) -> Optional[EmotionToken]:
        current = self._current
        if current.intensity <= self.config.min_intensity:
            return None
        # Always drop at least one step so low floors cannot stall on rounding
        intensity = min(
            clamp_intensity(current.intensity * self.config.decay_rate),
            current.intensity - 1,
        )
        return current.evolve(
            intensity=intensity,
            timestamp=self.clock(),
        )

    async def _publish_if_above_floor(self, token: EmotionToken) -> Optional[EmotionToken]:
        if token.intensity < self.config.min_intensity:
            logger.debug(
                f"Skipping publish of {token.primary.name}: "
                f"{token.intensity} below floor {self.config.min_intensity}"
            )
            return None

        self._current = token
        logger.debug(f"Published {token.primary.name} at {token.intensity}")
        await self._notify(token)
        return token

    async def _notify(self, token: EmotionToken) -> None:
        for queue in list(self._streams):
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(token)

        for callback in list(self._subscribers):
            try:
                result = callback(token)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.warning(f"Emotion subscriber {callback!r} failed: {e}")

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, callback: StateCallback) -> Callable[[], None]:
        """Register a callback for published states.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def stream(self) -> AsyncIterator[EmotionToken]:
        """Async iterator over published states from now on.

        Each stream buffers at most ``STREAM_BUFFER_SIZE`` states; a reader
        that falls further behind loses the oldest ones.
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=STREAM_BUFFER_SIZE)
        self._streams.append(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            self._streams.remove(queue)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_current_state(self) -> EmotionToken:
        """Last published state."""
        return self._current

    current_state = get_current_state

    def get_state_in_context(self, context: EmotionContext) -> EmotionToken:
        """Current state scaled by ``context``'s weight, without mutating it."""
        return self._current.with_context(context)

    def history(self) -> List[EmotionToken]:
        """Copy of the history ring, oldest first."""
        with self._queue_lock:
            return list(self._history)

    @property
    def pending_count(self) -> int:
        with self._queue_lock:
            return len(self._pending)

    def get_emotional_trend(self, window_ms: int = DEFAULT_TREND_WINDOW_MS) -> EmotionalTrend:
        """Classify the trajectory of tokens ingested within ``window_ms``."""
        now = self.clock()
        recent = [t for t in self.history() if now - t.timestamp <= window_ms]
        return classify_trend(recent)

    def predict_next_emotional_state(self, context: EmotionContext) -> EmotionToken:
        """Heuristic guess at the next state.

        An escalating trend moves toward a compatible kind with higher (or
        lower) valence, defaulting to CONTENTMENT (or SADNESS) when none
        exists. Otherwise the most frequent recent kind is used, falling back
        to the current kind.
        """
        current = self._current
        kind = current.primary
        trend = self.get_emotional_trend()

        candidates: List[EmotionKind] = []
        if trend is EmotionalTrend.ESCALATING_POSITIVE:
            candidates = [k for k in kind.compatible_with() if k.valence > kind.valence]
        elif trend is EmotionalTrend.ESCALATING_NEGATIVE:
            candidates = [k for k in kind.compatible_with() if k.valence < kind.valence]

        if candidates:
            predicted = self.rng.choice(candidates)
        elif trend is EmotionalTrend.ESCALATING_POSITIVE:
            predicted = EmotionKind.CONTENTMENT
        elif trend is EmotionalTrend.ESCALATING_NEGATIVE:
            predicted = EmotionKind.SADNESS
        else:
            pattern = [t.primary for t in self.history()[-PREDICTION_PATTERN_SIZE:]]
            predicted = Counter(pattern).most_common(1)[0][0] if pattern else kind

        low, high = PREDICTION_INTENSITY_BOUNDS
        intensity = max(low, min(high, clamp_intensity(current.intensity * PREDICTION_INTENSITY_FACTOR)))

        return EmotionToken(
            primary=predicted,
            intensity=intensity,
            context=context,
            confidence=PREDICTION_CONFIDENCE,
            source=EmotionSource(SourceType.AI_GENERATED, PREDICTION_SOURCE_SCORE),
            metadata={"prediction_method": "pattern_based", "trend": trend.value},
            timestamp=self.clock(),
        )

    def snapshot(self) -> EmotionSnapshot:
        current = self._current
        return EmotionSnapshot(
            current=current,
            valence=current.valence(),
            arousal=current.arousal(),
            dominant=current.dominant_emotion(),
            trend=self.get_emotional_trend(),
            pending=self.pending_count,
            history_size=len(self.history()),
            tick_count=self._tick_count,
        )

    # =========================================================================
    # Configuration
    # =========================================================================

    def configure_personality(
        self,
        decay_rate: float = DEFAULT_DECAY_RATE,
        sensitivity: float = DEFAULT_SENSITIVITY,
        blend_weight: float = DEFAULT_BLEND_WEIGHT,
    ) -> None:
        """Replace the personality knobs; values are clamped, effective next tick."""
        self.config = self.config.with_personality(
            decay_rate=decay_rate,
            sensitivity=sensitivity,
            blend_weight=blend_weight,
        )
        logger.info(
            f"Personality configured: decay={self.config.decay_rate:.2f} "
            f"sensitivity={self.config.context_sensitivity:.2f} "
            f"blend={self.config.blend_weight:.2f}"
        )

    def apply_personality(self, profile: PersonalityConfiguration) -> None:
        """Apply the emotion knobs of a personality profile."""
        self.configure_personality(
            decay_rate=profile.emotion_decay_rate,
            sensitivity=profile.emotion_sensitivity,
            blend_weight=profile.emotion_blend_weight,
        )
