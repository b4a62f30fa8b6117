"""Shared fixtures for the EduVision test suite."""

import os
from typing import List

import pytest

os.environ.setdefault("TEST_MODE", "true")

from eduvision.core import InteractionHandler, NarrationController, Utterance  # noqa: E402
from eduvision.utils import reset_benchmark_tracker  # noqa: E402


class FakeSpeechBackend:
    """In-memory speech backend; tests fire start/end through the recorded utterances."""

    def __init__(self, auto_start: bool = False):
        self.auto_start = auto_start
        self.spoken: List[Utterance] = []
        self.volumes: List[float] = []
        self.cancel_count = 0

    def speak(self, utterance: Utterance) -> None:
        self.spoken.append(utterance)
        if self.auto_start:
            utterance.on_start()

    def cancel(self) -> None:
        self.cancel_count += 1

    def set_volume(self, volume: float) -> None:
        self.volumes.append(volume)

    @property
    def last(self) -> Utterance:
        return self.spoken[-1]


def make_material(count: int, prefix: str = "Study sentence") -> str:
    """Material with `count` qualifying sentences."""
    return " ".join(f"{prefix} number {i} explains one idea." for i in range(1, count + 1))


@pytest.fixture(autouse=True)
def fresh_benchmarks():
    reset_benchmark_tracker()
    yield
    reset_benchmark_tracker()


@pytest.fixture
def backend() -> FakeSpeechBackend:
    return FakeSpeechBackend()


@pytest.fixture
def narration(backend) -> NarrationController:
    return NarrationController(backend)


@pytest.fixture
def handler(narration) -> InteractionHandler:
    return InteractionHandler(narration=narration)


@pytest.fixture
def twelve_sentences() -> str:
    return make_material(12)
