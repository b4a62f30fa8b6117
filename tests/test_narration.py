"""Tests for the narration controller lifecycle."""

import pytest

from eduvision.core.narration import (
    NARRATION_PITCH,
    NARRATION_RATE,
    NarrationController,
    NarrationState,
)
from eduvision.core.segmenter import Slide

from conftest import FakeSpeechBackend


@pytest.fixture
def slide():
    return Slide(
        title="Topic 1",
        content=("Cells are the unit of life", "Organelles divide the work"),
        image_prompt="Educational illustration for topic 1",
    )


@pytest.fixture
def other_slide():
    return Slide(title="Topic 2", content=("Membranes control transport",), image_prompt="p")


class TestSpeak:
    def test_requests_playback_with_fixed_voice_settings(self, narration, backend, slide):
        narration.speak(slide)

        utterance = backend.last
        assert utterance.text == "Topic 1. Cells are the unit of life. Organelles divide the work"
        assert utterance.rate == NARRATION_RATE == 0.8
        assert utterance.pitch == NARRATION_PITCH == 1.0
        assert utterance.volume == 1.0

    def test_playing_follows_start_and_end_events(self, narration, backend, slide):
        narration.speak(slide)
        assert not narration.is_playing

        backend.last.on_start()
        assert narration.is_playing
        assert narration.state is NarrationState.PLAYING

        backend.last.on_end()
        assert not narration.is_playing
        assert narration.active_request is None

    def test_second_speak_stops_instead_of_restarting(self, slide):
        backend = FakeSpeechBackend(auto_start=True)
        narration = NarrationController(backend)

        narration.speak(slide)
        assert narration.is_playing

        narration.speak(slide)
        assert not narration.is_playing
        assert len(backend.spoken) == 1
        assert backend.cancel_count == 1

    def test_second_speak_before_start_event_also_stops(self, narration, backend, slide):
        narration.speak(slide)
        narration.speak(slide)

        assert not narration.is_playing
        assert narration.active_request is None
        assert len(backend.spoken) == 1

    def test_speak_after_natural_end_starts_again(self, narration, backend, slide):
        narration.speak(slide)
        backend.last.on_start()
        backend.last.on_end()

        narration.speak(slide)
        assert len(backend.spoken) == 2

    def test_muted_narration_starts_silent(self, narration, backend, slide):
        narration.toggle_mute()
        narration.speak(slide)
        assert backend.last.volume == 0.0

    def test_backend_failure_leaves_controller_idle(self, slide):
        class BrokenBackend(FakeSpeechBackend):
            def speak(self, utterance):
                raise RuntimeError("device lost")

        narration = NarrationController(BrokenBackend())
        with pytest.raises(RuntimeError):
            narration.speak(slide)
        assert narration.active_request is None
        assert not narration.is_playing


class TestUnavailableBackend:
    def test_speak_is_a_silent_noop(self, slide):
        narration = NarrationController(None)
        narration.speak(slide)
        narration.speak(slide)

        assert not narration.available
        assert not narration.is_playing
        assert narration.active_request is None

    def test_mute_still_toggles(self):
        narration = NarrationController(None)
        narration.toggle_mute()
        assert narration.is_muted


class TestMute:
    def test_toggle_updates_live_volume_without_restart(self, narration, backend, slide):
        narration.speak(slide)
        backend.last.on_start()

        narration.toggle_mute()
        assert narration.is_muted
        assert backend.last.volume == 0.0
        assert backend.volumes == [0.0]
        assert narration.is_playing
        assert len(backend.spoken) == 1

        narration.toggle_mute()
        assert backend.volumes == [0.0, 1.0]

    def test_toggle_while_idle_does_not_touch_backend(self, narration, backend):
        narration.toggle_mute()
        assert backend.volumes == []


class TestCancellation:
    def test_navigation_cancels_unconditionally(self, narration, backend, slide):
        narration.cancel_on_navigate()
        assert backend.cancel_count == 1

        narration.speak(slide)
        backend.last.on_start()
        narration.cancel_on_navigate()

        assert not narration.is_playing
        assert backend.cancel_count == 2

    def test_late_events_from_cancelled_request_are_ignored(self, narration, backend, slide, other_slide):
        narration.speak(slide)
        stale = backend.last
        stale.on_start()
        narration.cancel_on_navigate()

        narration.speak(other_slide)
        stale.on_start()
        assert not narration.is_playing

        backend.last.on_start()
        stale.on_end()
        assert narration.is_playing
        assert narration.active_request.slide == other_slide

    def test_reset_cancels_and_unmutes(self, narration, backend, slide):
        narration.toggle_mute()
        narration.speak(slide)
        backend.last.on_start()

        narration.reset()

        assert not narration.is_playing
        assert not narration.is_muted
        assert backend.cancel_count == 1
