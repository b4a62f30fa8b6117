"""
Text-to-Speech Engine - Synthesizes slide narration and plays it back.
Audio is generated with OpenAI TTS and played through the pygame mixer on a
background thread; start and end are reported through the utterance callbacks.
"""

import itertools
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from threading import Event, Thread
from typing import Optional

import openai
import pygame

from ..utils.config import Config
from ..utils.benchmark import get_benchmark_tracker
from ..utils.helpers import estimate_audio_duration, get_timestamp
from .narration import Utterance

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.1


@dataclass
class AudioSegment:
    """A synthesized narration clip."""
    audio_path: Path
    duration: float  # estimated, in seconds
    text: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "audio_path": str(self.audio_path),
            "duration": self.duration,
            "text": self.text
        }


class TTSEngine:
    """Speech backend built on OpenAI TTS and pygame playback."""

    def __init__(
        self,
        provider: Optional[str] = None,
        voice: Optional[str] = None,
        model: Optional[str] = None,
        audio_dir: Optional[Path] = None
    ):
        """
        Initialize TTS engine.

        Args:
            provider: TTS provider (openai)
            voice: Voice name (alloy, echo, fable, onyx, nova, shimmer)
            model: Speech model (tts-1, tts-1-hd)
            audio_dir: Where synthesized clips are written
        """
        self.provider = provider or Config.TTS_PROVIDER
        self.voice = voice or Config.TTS_VOICE
        self.model = model or Config.TTS_MODEL
        self.audio_dir = audio_dir or Config.AUDIO_DIR

        if self.provider != "openai":
            raise ValueError(f"Unsupported TTS provider: {self.provider}. Supported: openai")

        self.client = openai.OpenAI(api_key=Config.OPENAI_API_KEY)
        self.audio_dir.mkdir(parents=True, exist_ok=True)

        # Raises pygame.error when no audio device is available
        pygame.mixer.init()

        self._clip_ids = itertools.count(1)
        self._stop_event: Optional[Event] = None
        self._playback_thread: Optional[Thread] = None

    def synthesize(self, text: str, output_path: Path, speed: float = 1.0) -> AudioSegment:
        """
        Generate audio from text.

        Args:
            text: Text to convert to speech
            output_path: Where to save the audio file
            speed: Speech speed multiplier

        Returns:
            AudioSegment with metadata
        """
        with get_benchmark_tracker().track("TTSEngine", "synthesize") as metadata:
            with self.client.audio.speech.with_streaming_response.create(
                model=self.model,
                voice=self.voice,
                input=text,
                speed=speed
            ) as response:
                response.stream_to_file(output_path)

            # OpenAI doesn't report duration directly
            duration = estimate_audio_duration(text, rate=speed)
            metadata.update({
                "provider": self.provider,
                "voice": self.voice,
                "word_count": len(text.split()),
                "audio_duration": duration
            })

        return AudioSegment(audio_path=output_path, duration=duration, text=text)

    def speak(self, utterance: Utterance) -> None:
        """Synthesize and play an utterance without blocking the caller."""
        if utterance.pitch != 1.0:
            logger.debug("Pitch %.2f is not supported by %s TTS; using default", utterance.pitch, self.provider)

        self._stop_event = Event()
        self._playback_thread = Thread(
            target=self._playback_loop,
            args=(utterance, self._stop_event),
            daemon=True
        )
        self._playback_thread.start()

    def cancel(self) -> None:
        """Stop any synthesis or playback in progress."""
        if self._stop_event is not None:
            self._stop_event.set()
        pygame.mixer.music.stop()

        if self._playback_thread is not None:
            self._playback_thread.join(timeout=2.0)
            self._playback_thread = None

    def set_volume(self, volume: float) -> None:
        """Change the volume of the clip that is playing."""
        pygame.mixer.music.set_volume(volume)

    def _playback_loop(self, utterance: Utterance, stop_event: Event) -> None:
        """Synthesize, play and wait for the clip on the playback thread."""
        output_path = self.audio_dir / f"narration_{get_timestamp()}_{next(self._clip_ids)}.mp3"

        try:
            self.synthesize(utterance.text, output_path, speed=utterance.rate)
            if stop_event.is_set():
                return

            pygame.mixer.music.load(str(output_path))
            pygame.mixer.music.set_volume(utterance.volume)
            pygame.mixer.music.play()
        except (openai.OpenAIError, pygame.error, OSError) as e:
            logger.error("Narration playback failed: %s", e)
            utterance.on_end()
            return

        utterance.on_start()

        while pygame.mixer.music.get_busy():
            if stop_event.is_set():
                return
            time.sleep(POLL_INTERVAL)

        if not stop_event.is_set():
            utterance.on_end()


def create_speech_backend() -> Optional[TTSEngine]:
    """
    Build the configured speech backend.

    Returns:
        A ready TTSEngine, or None when narration is unavailable in this
        environment (test mode, no provider, no API key or no audio device)
    """
    if Config.TEST_MODE or Config.TTS_PROVIDER == "none":
        logger.info("Narration disabled (TEST_MODE=%s, TTS_PROVIDER=%s)", Config.TEST_MODE, Config.TTS_PROVIDER)
        return None

    if not Config.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set; narration is unavailable")
        return None

    try:
        return TTSEngine()
    except pygame.error as e:
        logger.warning("Audio output unavailable; narration disabled: %s", e)
        return None
