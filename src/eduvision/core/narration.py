"""
Narration Controller - Ties text-to-speech playback to the visible slide.

Playback is an idle/playing sub-machine driven by start and end events that
the speech backend delivers through the utterance callbacks. At most one
narration request is outstanding; events from any other request are dropped.
"""

import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from threading import RLock
from typing import Callable, Optional, Protocol

from .segmenter import Slide

logger = logging.getLogger(__name__)

NARRATION_RATE = 0.8
NARRATION_PITCH = 1.0


def _noop() -> None:
    pass


@dataclass
class Utterance:
    """A single speech request handed to the backend."""
    text: str
    rate: float = NARRATION_RATE
    pitch: float = NARRATION_PITCH
    volume: float = 1.0
    on_start: Callable[[], None] = field(default=_noop, repr=False)
    on_end: Callable[[], None] = field(default=_noop, repr=False)


class SpeechBackend(Protocol):
    """The text-to-speech capability narration is played through."""

    def speak(self, utterance: Utterance) -> None:
        ...

    def cancel(self) -> None:
        ...

    def set_volume(self, volume: float) -> None:
        ...


class NarrationState(Enum):
    """Playback state of the controller."""
    IDLE = "idle"
    PLAYING = "playing"


class NarrationEvent(Enum):
    """Lifecycle events reported by the speech backend."""
    STARTED = "started"
    ENDED = "ended"


@dataclass
class NarrationRequest:
    """The outstanding narration for one slide."""
    request_id: int
    slide: Slide
    utterance: Utterance


class NarrationController:
    """Coordinate slide narration with mute and navigation."""

    def __init__(self, backend: Optional[SpeechBackend] = None):
        """
        Initialize narration controller.

        Args:
            backend: Speech capability; None means narration is unavailable
                and every speak request is silently ignored
        """
        self.backend = backend
        self.state = NarrationState.IDLE
        self.is_muted = False
        self.active_request: Optional[NarrationRequest] = None

        self._request_ids = itertools.count(1)
        self._lock = RLock()

    @property
    def is_playing(self) -> bool:
        return self.state is NarrationState.PLAYING

    @property
    def available(self) -> bool:
        return self.backend is not None

    def _volume(self) -> float:
        return 0.0 if self.is_muted else 1.0

    def speak(self, slide: Slide) -> None:
        """
        Narrate a slide, or stop the narration that is already running.

        Calling speak while a request is outstanding cancels it instead of
        starting another one.
        """
        if self.backend is None:
            logger.debug("No speech backend available; skipping narration of '%s'", slide.title)
            return

        with self._lock:
            if self.active_request is not None:
                stopping = True
            else:
                stopping = False
                request_id = next(self._request_ids)
                utterance = Utterance(
                    text=slide.narration_text,
                    rate=NARRATION_RATE,
                    pitch=NARRATION_PITCH,
                    volume=self._volume(),
                    on_start=partial(self.handle_event, request_id, NarrationEvent.STARTED),
                    on_end=partial(self.handle_event, request_id, NarrationEvent.ENDED),
                )
                self.active_request = NarrationRequest(request_id, slide, utterance)

        if stopping:
            logger.info("Stopping narration")
            self._cancel_active()
            return

        logger.info("Narrating '%s' (request %d)", slide.title, request_id)
        try:
            self.backend.speak(utterance)
        except Exception:
            with self._lock:
                if self.active_request is not None and self.active_request.request_id == request_id:
                    self.active_request = None
                    self.state = NarrationState.IDLE
            raise

    def handle_event(self, request_id: int, event: NarrationEvent) -> None:
        """Apply a start/end event; events for a request that is no longer active are ignored."""
        with self._lock:
            if self.active_request is None or self.active_request.request_id != request_id:
                logger.debug("Ignoring %s event for stale narration request %d", event.value, request_id)
                return

            if event is NarrationEvent.STARTED:
                self.state = NarrationState.PLAYING
            elif event is NarrationEvent.ENDED:
                self.state = NarrationState.IDLE
                self.active_request = None

    def toggle_mute(self) -> None:
        """Flip mute; a running narration keeps playing at the new volume."""
        with self._lock:
            self.is_muted = not self.is_muted
            volume = self._volume()
            live = self.active_request is not None
            if live:
                self.active_request.utterance.volume = volume

        if live and self.backend is not None:
            self.backend.set_volume(volume)

    def cancel_on_navigate(self) -> None:
        """Stop any narration because the visible slide changed."""
        self._cancel_active()

    def reset(self) -> None:
        """Stop narration and restore the unmuted default."""
        self._cancel_active()
        with self._lock:
            self.is_muted = False

    def _cancel_active(self) -> None:
        with self._lock:
            self.active_request = None
            self.state = NarrationState.IDLE

        # Backend calls happen outside the lock; playback threads deliver events through it.
        if self.backend is not None:
            self.backend.cancel()
